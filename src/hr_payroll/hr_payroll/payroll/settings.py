from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from ..common.money import to_decimal, to_minor_units
from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.enums import IncomeTaxPolicy
from ..core.exceptions import InvalidInputError
from .deductions.tax_table import DEFAULT_TAX_TABLE, TaxTable


@dataclass(frozen=True)
class PayrollSettings:
    """Typed view over the ``PAYROLL`` dict of a settings module.

    Money values are minor units; rates are fractions.
    """

    housing_fund_rate: Decimal = Decimal("0.02")
    housing_fund_ceiling: int = 10_000
    health_insurance_rate: Decimal = Decimal("0.05")
    health_insurance_employee_share: Decimal = Decimal("0.5")
    social_insurance_rate: Decimal = Decimal("0.045")
    tax_table: TaxTable = field(default=DEFAULT_TAX_TABLE)
    income_tax_policy: IncomeTaxPolicy = IncomeTaxPolicy.WITHHOLD
    refresh_generated_at_on_update: bool = False
    lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "PayrollSettings":
        values = dict(values or {})
        kwargs: dict[str, Any] = {}

        if "HOUSING_FUND_CEILING" in values:
            kwargs["housing_fund_ceiling"] = to_minor_units(to_decimal(values["HOUSING_FUND_CEILING"], "HOUSING_FUND_CEILING"))
        if "TAX_BRACKETS" in values:
            kwargs["tax_table"] = TaxTable.from_rows(values["TAX_BRACKETS"])
        if "INCOME_TAX_POLICY" in values:
            try:
                kwargs["income_tax_policy"] = IncomeTaxPolicy(str(values["INCOME_TAX_POLICY"]).lower())
            except ValueError:
                raise InvalidInputError(f"Unknown INCOME_TAX_POLICY: {values['INCOME_TAX_POLICY']!r}")
        if "REFRESH_GENERATED_AT_ON_UPDATE" in values:
            kwargs["refresh_generated_at_on_update"] = bool(values["REFRESH_GENERATED_AT_ON_UPDATE"])
        if "LOCK_TIMEOUT_SECONDS" in values:
            kwargs["lock_timeout_seconds"] = float(values["LOCK_TIMEOUT_SECONDS"])

        return cls(**kwargs)
