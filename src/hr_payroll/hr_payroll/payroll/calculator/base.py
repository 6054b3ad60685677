from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import HourBreakdown, PayComponents


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for earnings)."""

    @abstractmethod
    def compute_pay(self, breakdown: HourBreakdown, hourly_rate: Decimal) -> PayComponents:
        raise NotImplementedError
