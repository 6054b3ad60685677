from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Read-only attendance query used by payroll.

    Note (DIP): the payroll service depends on this interface, not on a concrete DB.
    """

    def list_for_employee(self, employee_id: str, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records whose clock-in falls in [start, end], oldest first."""

        raise NotImplementedError
