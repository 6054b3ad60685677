from __future__ import annotations

from typing import Optional

from ....core.exceptions import InvalidInputError
from ...deductions.statutory import StatutoryDeductionCalculator
from ...model import DeductionSet
from .base import ReconciliationStrategy


class FirstHalfStrategy(ReconciliationStrategy):
    """Period 1: assess the half-month gross on its own."""

    def basis(self, *, current_half_gross: int, prior_half_gross: int) -> int:
        if prior_half_gross:
            raise InvalidInputError("period 1 has no prior half; prior gross must be 0")
        return current_half_gross

    def reconcile(
        self,
        *,
        current_half_gross: int,
        prior_half_gross: int,
        prior_half_deductions: Optional[DeductionSet],
        calculator: StatutoryDeductionCalculator,
    ) -> DeductionSet:
        if prior_half_deductions is not None:
            raise InvalidInputError("period 1 has no prior half; prior deductions must be None")
        basis = self.basis(current_half_gross=current_half_gross, prior_half_gross=prior_half_gross)
        return calculator.compute(basis)
