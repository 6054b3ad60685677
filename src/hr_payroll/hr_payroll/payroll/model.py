from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime
from decimal import Decimal
from typing import NamedTuple, Optional

from ..core.enums import PaymentStatus, PayPeriod, SaveAction


@dataclass(frozen=True)
class HourBreakdown:
    """Hours for one employee over one pay period. Derived, never persisted."""

    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    night_diff_hours: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayComponents:
    """Earnings line items in minor currency units."""

    basic_pay: int = 0
    overtime_pay: int = 0
    night_diff_pay: int = 0
    bonus: int = 0
    other_allowances: int = 0

    @property
    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))

    def with_adjustments(self, *, bonus: int = 0, other_allowances: int = 0) -> "PayComponents":
        return replace(self, bonus=int(bonus), other_allowances=int(other_allowances))

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


STATUTORY_FIELDS = ("social_insurance", "health_insurance", "housing_fund", "income_tax")


@dataclass(frozen=True)
class DeductionSet:
    """Withholdings in minor currency units. ``other`` carries manual deductions."""

    social_insurance: int = 0
    health_insurance: int = 0
    housing_fund: int = 0
    income_tax: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))

    def with_other(self, other: int) -> "DeductionSet":
        return replace(self, other=int(other))

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class PayslipKey(NamedTuple):
    employee_id: str
    month: int
    year: int
    period: PayPeriod


@dataclass(frozen=True)
class Payslip:
    """Thực thể miền (domain): Payslip, unique per (employee, month, year, period)."""

    payslip_id: str
    employee_id: str
    month: int
    year: int
    period: PayPeriod
    basic_salary: int
    components: PayComponents
    deductions: DeductionSet
    gross_pay: int
    net_pay: int
    generated_at: datetime
    payment_status: PaymentStatus = PaymentStatus.FINALIZED

    @property
    def key(self) -> PayslipKey:
        return PayslipKey(self.employee_id, self.month, self.year, self.period)

    @property
    def total_deductions(self) -> int:
        return self.deductions.total


@dataclass(frozen=True)
class AssembleResult:
    payslip: Payslip
    action: SaveAction

    @property
    def created(self) -> bool:
        return self.action == SaveAction.CREATED


@dataclass(frozen=True)
class ManualAdjustments:
    """Officer-entered values applied on top of the attendance-derived figures.

    Hour overrides replace the aggregated hours; money values are minor units.
    """

    bonus: int = 0
    other_allowances: int = 0
    other_deductions: int = 0
    regular_hours: Optional[Decimal] = None
    overtime_hours: Optional[Decimal] = None
    night_diff_hours: Optional[Decimal] = None
    basic_salary_override: Optional[int] = None


@dataclass(frozen=True)
class PayrollDraft:
    """Everything computed for one employee/period before the write."""

    employee_id: str
    month: int
    year: int
    period: PayPeriod
    hourly_rate: Decimal
    breakdown: HourBreakdown
    components: PayComponents
    deductions: DeductionSet
    computed_income_tax: int
    prior_half_gross: int = 0
    basic_salary_override: Optional[int] = None

    @property
    def gross_pay(self) -> int:
        return self.components.total

    @property
    def net_pay(self) -> int:
        return max(0, self.gross_pay - self.deductions.total)


@dataclass
class BatchFailure:
    employee_id: str
    error_type: str
    message: str


@dataclass
class BatchResult:
    succeeded: list[AssembleResult] = field(default_factory=list)
    failed: list[BatchFailure] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return sum(1 for r in self.succeeded if r.action == SaveAction.CREATED)

    @property
    def updated_count(self) -> int:
        return sum(1 for r in self.succeeded if r.action == SaveAction.UPDATED)
