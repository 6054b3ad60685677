from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee (read-only from payroll's side)."""

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_payroll_eligible(self) -> Sequence[Employee]:
        """Active employees with role ``employee``."""

        raise NotImplementedError
