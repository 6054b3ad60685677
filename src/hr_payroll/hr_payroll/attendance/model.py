from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock-in/clock-out session, owned by the time-clock side.

    ``clock_out`` and ``total_work_minutes`` stay ``None`` while the session is open.
    """

    attendance_id: str
    employee_id: str
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    break_minutes: int = 0
    total_work_minutes: Optional[int] = None

    @property
    def is_closed(self) -> bool:
        return self.clock_out is not None
