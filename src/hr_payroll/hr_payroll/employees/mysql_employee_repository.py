from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        full_name=r["full_name"],
        role=Role(r["role"]),
        hourly_rate=Decimal(str(r["hourly_rate"])) if r.get("hourly_rate") is not None else None,
        monthly_salary=Decimal(str(r["monthly_salary"])) if r.get("monthly_salary") is not None else None,
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, role, hourly_rate, monthly_salary, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_payroll_eligible(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, role, hourly_rate, monthly_salary, is_active
                FROM employees
                WHERE is_active=1 AND role=%s
                ORDER BY full_name ASC
                """,
                (Role.EMPLOYEE.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]
