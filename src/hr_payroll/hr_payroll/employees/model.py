from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import WORK_DAYS_PER_MONTH, WORK_HOURS_PER_DAY
from ..core.enums import Role
from ..core.exceptions import InvalidInputError

_RATE_PLACES = Decimal("0.0001")


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of an employee record payroll needs.

    Rates are major currency units. Either ``hourly_rate`` or
    ``monthly_salary`` must be set.
    """

    employee_id: str
    full_name: str
    role: Role = Role.EMPLOYEE
    hourly_rate: Optional[Decimal] = None
    monthly_salary: Optional[Decimal] = None
    is_active: bool = True

    def effective_hourly_rate(self) -> Decimal:
        if self.hourly_rate is not None:
            return Decimal(self.hourly_rate)
        if self.monthly_salary is not None:
            return hourly_rate_from_salary(Decimal(self.monthly_salary))
        raise InvalidInputError(f"Employee {self.employee_id} has neither an hourly rate nor a salary")


def hourly_rate_from_salary(monthly_salary: Decimal) -> Decimal:
    """Standard divisor: salary / 22 working days / 8 hours."""
    if monthly_salary < 0:
        raise InvalidInputError("monthly salary must not be negative")
    rate = monthly_salary / WORK_DAYS_PER_MONTH / WORK_HOURS_PER_DAY
    return rate.quantize(_RATE_PLACES, rounding=ROUND_HALF_UP)
