from __future__ import annotations

import threading
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.core.enums import PayPeriod, Role
from src.hr_payroll.hr_payroll.core.exceptions import ConcurrentUpdateError
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.payroll.model import Payslip


class InMemoryPayslips:
    def __init__(self, *, delay: float = 0.0):
        self._by_id: dict[str, Payslip] = {}
        self._delay = delay
        self._guard = threading.Lock()
        self.creates = 0
        self.updates = 0

    def _pause(self) -> None:
        if self._delay:
            threading.Event().wait(self._delay)

    def get_by_key(self, *, employee_id, month, year, period) -> Optional[Payslip]:
        self._pause()
        with self._guard:
            for p in self._by_id.values():
                if (p.employee_id, p.month, p.year, p.period) == (employee_id, int(month), int(year), PayPeriod(period)):
                    return p
        return None

    def get_by_id(self, payslip_id: str) -> Optional[Payslip]:
        return self._by_id.get(payslip_id)

    def create(self, payslip: Payslip) -> Payslip:
        self._pause()
        with self._guard:
            if any(p.key == payslip.key for p in self._by_id.values()):
                raise ConcurrentUpdateError(f"duplicate {payslip.key!r}")
            self._by_id[payslip.payslip_id] = payslip
            self.creates += 1
        return payslip

    def update(self, payslip: Payslip) -> bool:
        with self._guard:
            if payslip.payslip_id not in self._by_id:
                return False
            self._by_id[payslip.payslip_id] = payslip
            self.updates += 1
        return True

    def list_payslips(self, *, employee_id=None, month=None, year=None, period=None, limit=200):
        items = [
            p
            for p in self._by_id.values()
            if (employee_id is None or p.employee_id == employee_id)
            and (month is None or p.month == month)
            and (year is None or p.year == year)
            and (period is None or p.period == period)
        ]
        items.sort(key=lambda p: p.generated_at, reverse=True)
        return items[:limit]

    def delete_by_id(self, payslip_id: str) -> bool:
        return self._by_id.pop(payslip_id, None) is not None

    def all(self) -> list[Payslip]:
        return list(self._by_id.values())


class InMemoryAttendance:
    def __init__(self, records: list[AttendanceRecord]):
        self._records = list(records)
        self.last_range = None

    def list_for_employee(self, employee_id, start, end):
        self.last_range = (start, end)
        items = [r for r in self._records if r.employee_id == employee_id and start <= r.clock_in <= end]
        items.sort(key=lambda r: r.clock_in)
        return items


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self._by_id.get(employee_id)

    def list_payroll_eligible(self):
        return [e for e in self._by_id.values() if e.is_active and e.role == Role.EMPLOYEE]


def make_record(
    employee_id: str,
    clock_in: datetime,
    clock_out: Optional[datetime],
    *,
    total_work_minutes: Optional[int] = None,
    break_minutes: int = 0,
    attendance_id: Optional[str] = None,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id or f"{employee_id}-{clock_in:%Y%m%d%H%M}",
        employee_id=employee_id,
        work_date=clock_in.date(),
        clock_in=clock_in,
        clock_out=clock_out,
        break_minutes=break_minutes,
        total_work_minutes=total_work_minutes,
    )


def workdays(employee_id: str, year: int, month: int, days: range, *, minutes: int = 480) -> list[AttendanceRecord]:
    out = []
    for day in days:
        start = datetime(year, month, day, 9, 0)
        out.append(make_record(employee_id, start, start + timedelta(minutes=minutes), total_work_minutes=minutes))
    return out


@pytest.fixture
def ticking_clock():
    """Clock returning 2025-01-31 18:00, then +1 minute per call."""
    state = {"now": datetime(2025, 1, 31, 18, 0, 0)}

    def clock() -> datetime:
        current = state["now"]
        state["now"] = current + timedelta(minutes=1)
        return current

    return clock


@pytest.fixture
def payslips_repo() -> InMemoryPayslips:
    return InMemoryPayslips()


@pytest.fixture
def hourly_employee() -> Employee:
    return Employee(employee_id="e1", full_name="Ana Cruz", hourly_rate=Decimal("60"))


@pytest.fixture
def slow_payslips_repo() -> InMemoryPayslips:
    return InMemoryPayslips(delay=0.05)


@pytest.fixture
def attendance_factory():
    return InMemoryAttendance


@pytest.fixture
def employees_factory():
    return InMemoryEmployees


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def workdays_factory():
    return workdays
