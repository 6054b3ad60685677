from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..common.logging_config import get_logger
from ..core.constants import NIGHT_DIFF_END_HOUR, NIGHT_DIFF_START_HOUR, REGULAR_MINUTES_PER_DAY
from ..core.exceptions import InvalidInputError
from .model import HourBreakdown

logger = get_logger("payroll.aggregator")

_HOUR = timedelta(hours=1)
_TWO_PLACES = Decimal("0.01")


class AttendanceAggregator:
    """Reduces one employee's attendance sessions to regular/overtime/night hours.

    The caller filters records to the employee and pay period; no date
    bucketing happens here, so a session crossing midnight counts wholly
    toward whatever period the caller put it in.
    """

    def __init__(
        self,
        *,
        regular_minutes_per_day: int = REGULAR_MINUTES_PER_DAY,
        night_start_hour: int = NIGHT_DIFF_START_HOUR,
        night_end_hour: int = NIGHT_DIFF_END_HOUR,
    ):
        self._regular_cap = int(regular_minutes_per_day)
        self._night_start = int(night_start_hour)
        self._night_end = int(night_end_hour)

    @staticmethod
    def worked_minutes(record: AttendanceRecord) -> int:
        """Stored total when present, else (out - in) - break, not below 0."""
        if record.clock_out is None:
            return 0
        if record.total_work_minutes is not None:
            return int(record.total_work_minutes)
        minutes = int((record.clock_out - record.clock_in).total_seconds() // 60)
        minutes -= int(record.break_minutes or 0)
        return max(minutes, 0)

    def is_night_hour(self, hour: int) -> bool:
        if self._night_start > self._night_end:
            return hour >= self._night_start or hour < self._night_end
        return self._night_start <= hour < self._night_end

    def night_diff_hours(self, clock_in: datetime, clock_out: datetime) -> int:
        """Count whole-hour steps inside the night window.

        Steps start at the first wall-clock hour boundary at or after
        ``clock_in``; each step starting before ``clock_out`` whose hour is
        in the window counts as one hour.
        """
        current = clock_in.replace(minute=0, second=0, microsecond=0)
        if current < clock_in:
            current += _HOUR

        hours = 0
        while current < clock_out:
            if self.is_night_hour(current.hour):
                hours += 1
            current += _HOUR
        return hours

    def _validate(self, employee_id: str, record: AttendanceRecord) -> None:
        if str(record.employee_id) != str(employee_id):
            raise InvalidInputError(
                f"Attendance {record.attendance_id} belongs to employee {record.employee_id}, not {employee_id}"
            )
        if record.break_minutes is not None and record.break_minutes < 0:
            raise InvalidInputError(f"Attendance {record.attendance_id} has negative break minutes")
        if record.clock_out is not None and record.clock_out <= record.clock_in:
            raise InvalidInputError(f"Attendance {record.attendance_id} clocks out before it clocks in")
        if record.total_work_minutes is not None and record.total_work_minutes < 0:
            raise InvalidInputError(f"Attendance {record.attendance_id} has negative worked minutes")

    def aggregate(self, employee_id: str, records: Iterable[AttendanceRecord]) -> HourBreakdown:
        regular_minutes = 0
        overtime_minutes = 0
        night_hours = 0
        closed = 0

        for record in records:
            self._validate(employee_id, record)
            if not record.is_closed:
                continue

            closed += 1
            worked = self.worked_minutes(record)
            if worked > self._regular_cap:
                regular_minutes += self._regular_cap
                overtime_minutes += worked - self._regular_cap
            else:
                regular_minutes += worked
            night_hours += self.night_diff_hours(record.clock_in, record.clock_out)

        breakdown = HourBreakdown(
            regular_hours=Decimal(regular_minutes // 60),
            overtime_hours=(Decimal(overtime_minutes) / 60).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP),
            night_diff_hours=Decimal(night_hours),
        )
        logger.debug(
            "attendance_aggregated",
            extra={
                "employee_id": employee_id,
                "closed_sessions": closed,
                "regular_minutes": regular_minutes,
                "overtime_minutes": overtime_minutes,
                "night_diff_hours": night_hours,
            },
        )
        return breakdown


def aggregate(employee_id: str, records: Iterable[AttendanceRecord]) -> HourBreakdown:
    return AttendanceAggregator().aggregate(employee_id, records)
