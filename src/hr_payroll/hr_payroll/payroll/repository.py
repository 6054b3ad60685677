from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayPeriod
from .model import Payslip


class PayslipRepository(Protocol):
    """Storage collaborator for payslips.

    Implementations must enforce uniqueness of (employee_id, month, year,
    period) and raise ``ConcurrentUpdateError`` from ``create`` when the key
    already exists.
    """

    def get_by_key(self, *, employee_id: str, month: int, year: int, period: PayPeriod) -> Optional[Payslip]:
        raise NotImplementedError

    def get_by_id(self, payslip_id: str) -> Optional[Payslip]:
        raise NotImplementedError

    def create(self, payslip: Payslip) -> Payslip:
        raise NotImplementedError

    def update(self, payslip: Payslip) -> bool:
        """Full replace of the row with ``payslip.payslip_id``."""

        raise NotImplementedError

    def list_payslips(
        self,
        *,
        employee_id: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        period: Optional[PayPeriod] = None,
        limit: int = 200,
    ) -> Sequence[Payslip]:
        """Newest first."""

        raise NotImplementedError

    def delete_by_id(self, payslip_id: str) -> bool:
        raise NotImplementedError
