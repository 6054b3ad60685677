from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...deductions.statutory import StatutoryDeductionCalculator
from ...model import DeductionSet


class ReconciliationStrategy(ABC):
    """Strategy Pattern: how a half-period's statutory deductions are derived."""

    @abstractmethod
    def basis(self, *, current_half_gross: int, prior_half_gross: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def reconcile(
        self,
        *,
        current_half_gross: int,
        prior_half_gross: int,
        prior_half_deductions: Optional[DeductionSet],
        calculator: StatutoryDeductionCalculator,
    ) -> DeductionSet:
        raise NotImplementedError
