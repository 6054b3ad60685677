from __future__ import annotations

from decimal import Decimal

from ...common.money import Number, to_minor_units
from ...common.validators import require_non_negative
from ...core.constants import NIGHT_DIFF_MULTIPLIER, OVERTIME_MULTIPLIER
from ..model import HourBreakdown, PayComponents
from .base import PayCalculator


class StandardPayCalculator(PayCalculator):
    """Standard rule: regular x rate, overtime x rate x 1.25, night hours x rate x 0.10.

    Each line item is rounded once, half-up, to a minor unit.
    """

    def __init__(
        self,
        *,
        overtime_multiplier: Decimal = OVERTIME_MULTIPLIER,
        night_diff_multiplier: Decimal = NIGHT_DIFF_MULTIPLIER,
    ):
        self._ot = Decimal(overtime_multiplier)
        self._nd = Decimal(night_diff_multiplier)

    def compute_pay(self, breakdown: HourBreakdown, hourly_rate: Number) -> PayComponents:
        rate = require_non_negative(hourly_rate, "hourly rate")
        regular = require_non_negative(breakdown.regular_hours, "regular hours")
        overtime = require_non_negative(breakdown.overtime_hours, "overtime hours")
        night = require_non_negative(breakdown.night_diff_hours, "night differential hours")

        return PayComponents(
            basic_pay=to_minor_units(regular * rate),
            overtime_pay=to_minor_units(overtime * rate * self._ot),
            night_diff_pay=to_minor_units(night * rate * self._nd),
        )


def compute_pay(breakdown: HourBreakdown, hourly_rate: Number) -> PayComponents:
    return StandardPayCalculator().compute_pay(breakdown, hourly_rate)
