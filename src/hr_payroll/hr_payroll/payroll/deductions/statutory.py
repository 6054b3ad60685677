from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.money import round_minor
from ...common.validators import require_non_negative_minor
from ...core.exceptions import InvalidInputError
from ..model import DeductionSet
from ..settings import PayrollSettings


class StatutoryDeductionCalculator:
    """Government-mandated withholdings as pure functions of a gross basis.

    The basis is the cumulative gross the caller wants assessed (a half-month
    gross for period 1, the combined month for period 2). Each field is an
    independent function of that basis, rounded once to a minor unit.
    """

    def __init__(self, settings: Optional[PayrollSettings] = None):
        self._settings = settings or PayrollSettings()

    def housing_fund(self, basis: int) -> int:
        s = self._settings
        return min(round_minor(Decimal(basis) * s.housing_fund_rate), s.housing_fund_ceiling)

    def health_insurance(self, basis: int) -> int:
        s = self._settings
        return round_minor(Decimal(basis) * s.health_insurance_rate * s.health_insurance_employee_share)

    def social_insurance(self, basis: int) -> int:
        return round_minor(Decimal(basis) * self._settings.social_insurance_rate)

    def income_tax(self, basis: int) -> int:
        return self._settings.tax_table.compute(basis)

    def compute(self, gross_pay_basis: int) -> DeductionSet:
        if gross_pay_basis is None:
            raise InvalidInputError("gross pay basis is required")
        basis = require_non_negative_minor(gross_pay_basis, "gross pay basis")
        return DeductionSet(
            social_insurance=self.social_insurance(basis),
            health_insurance=self.health_insurance(basis),
            housing_fund=self.housing_fund(basis),
            income_tax=self.income_tax(basis),
        )


def compute_deductions(gross_pay_basis: int, settings: Optional[PayrollSettings] = None) -> DeductionSet:
    return StatutoryDeductionCalculator(settings).compute(gross_pay_basis)
