from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.constants import FIRST_HALF_LAST_DAY
from ..core.enums import PayPeriod
from .validators import require_month, require_period, require_year


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def pay_period_range(year: int, month: int, period: int) -> tuple[datetime, datetime]:
    """Inclusive [start, end] instants of a half-month pay period.

    Period 1 covers the 1st through the 15th, period 2 the 16th through the
    last day of the month. ``end`` is 23:59:59 of the last day.
    """
    year = require_year(year)
    month = require_month(month)
    half = require_period(period)

    if half == PayPeriod.FIRST_HALF:
        first_day, last_day = 1, FIRST_HALF_LAST_DAY
    else:
        first_day, last_day = FIRST_HALF_LAST_DAY + 1, calendar.monthrange(year, month)[1]

    start = datetime.combine(date(year, month, first_day), time.min)
    end = datetime.combine(date(year, month, last_day), time(23, 59, 59))
    return start, end
