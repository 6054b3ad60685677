from __future__ import annotations

from typing import Optional

from ...deductions.statutory import StatutoryDeductionCalculator
from ...model import STATUTORY_FIELDS, DeductionSet
from .base import ReconciliationStrategy


class SecondHalfStrategy(ReconciliationStrategy):
    """Period 2: assess the whole month, then net out what period 1 withheld.

    Missing period-1 data counts as zero, so an employee who joined mid-month
    is assessed on the second half alone.
    """

    def basis(self, *, current_half_gross: int, prior_half_gross: int) -> int:
        return current_half_gross + (prior_half_gross or 0)

    def reconcile(
        self,
        *,
        current_half_gross: int,
        prior_half_gross: int,
        prior_half_deductions: Optional[DeductionSet],
        calculator: StatutoryDeductionCalculator,
    ) -> DeductionSet:
        basis = self.basis(current_half_gross=current_half_gross, prior_half_gross=prior_half_gross)
        full_month = calculator.compute(basis)
        withheld = prior_half_deductions or DeductionSet()

        due = {name: max(0, getattr(full_month, name) - getattr(withheld, name)) for name in STATUTORY_FIELDS}
        return DeductionSet(**due)
