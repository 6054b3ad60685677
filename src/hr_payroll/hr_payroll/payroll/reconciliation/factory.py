from __future__ import annotations

from dataclasses import dataclass

from ...common.validators import require_period
from ...core.enums import PayPeriod
from .strategies.base import ReconciliationStrategy
from .strategies.first_half_strategy import FirstHalfStrategy
from .strategies.second_half_strategy import SecondHalfStrategy


@dataclass
class ReconciliationStrategyFactory:
    """Factory Pattern: choose the reconciliation strategy for a half-period."""

    def for_period(self, period: int) -> ReconciliationStrategy:
        if require_period(period) == PayPeriod.FIRST_HALF:
            return FirstHalfStrategy()
        return SecondHalfStrategy()
