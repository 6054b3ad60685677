from __future__ import annotations

from enum import Enum, IntEnum


class Role(str, Enum):
    """Roles handed over by the external auth layer."""

    ADMIN = "admin"
    PAYROLL_OFFICER = "payroll_officer"
    EMPLOYEE = "employee"


class PayPeriod(IntEnum):
    """Half-month payout cadence: 1st-15th and 16th-end of month."""

    FIRST_HALF = 1
    SECOND_HALF = 2


class PaymentStatus(str, Enum):
    DRAFT = "draft"
    FINALIZED = "finalized"
    PAID = "paid"


class SaveAction(str, Enum):
    """Whether the assembler inserted a new payslip or overwrote an existing one."""

    CREATED = "created"
    UPDATED = "updated"


class IncomeTaxPolicy(str, Enum):
    """How the computed income tax is treated in the payout deduction set.

    WITHHOLD keeps the computed amount. DEFER_AT_PAYOUT still computes the
    tax (it is reported on the draft) but zeroes it in the deductions that
    are persisted, which is how some organizations run semi-monthly payroll.
    """

    WITHHOLD = "withhold"
    DEFER_AT_PAYOUT = "defer_at_payout"
