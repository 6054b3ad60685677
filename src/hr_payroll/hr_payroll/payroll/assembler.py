from __future__ import annotations

from dataclasses import fields, replace
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from ..common.datetime_utils import now_local
from ..common.logging_config import get_logger
from ..common.validators import require_month, require_non_negative_minor, require_period, require_year
from ..core.enums import PaymentStatus, SaveAction
from ..core.exceptions import ConcurrentUpdateError, InvalidInputError, InvariantViolationError, NotFoundError
from .locking import KeyedLockRegistry
from .model import AssembleResult, DeductionSet, PayComponents, Payslip, PayslipKey
from .repository import PayslipRepository
from .settings import PayrollSettings

logger = get_logger("payroll.assembler")

STATUS_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.DRAFT: frozenset({PaymentStatus.FINALIZED}),
    PaymentStatus.FINALIZED: frozenset({PaymentStatus.DRAFT, PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),
}


def _new_payslip_id() -> str:
    return str(uuid4())


def _check_non_negative(obj: PayComponents | DeductionSet, what: str) -> None:
    for f in fields(obj):
        value = getattr(obj, f.name)
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvariantViolationError(f"{what}.{f.name} is not an integer amount: {value!r}")
        if value < 0:
            raise InvariantViolationError(f"{what}.{f.name} is negative ({value})")


class PayslipAssembler:
    """Turns earnings + deductions into the persisted payslip.

    Create when no payslip exists for (employee, month, year, period),
    otherwise a full replace of the existing one. This is the only stage
    with a side effect; the lookup and the write run under a per-key lock.
    """

    def __init__(
        self,
        payslips: PayslipRepository,
        *,
        settings: Optional[PayrollSettings] = None,
        locks: Optional[KeyedLockRegistry] = None,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = _new_payslip_id,
    ):
        self._payslips = payslips
        self._settings = settings or PayrollSettings()
        self._locks = locks or KeyedLockRegistry(timeout_seconds=self._settings.lock_timeout_seconds)
        self._clock = clock
        self._id_factory = id_factory

    def assemble(
        self,
        employee_id: str,
        month: int,
        year: int,
        period: int,
        basic_salary_override: Optional[int],
        components: PayComponents,
        deductions: DeductionSet,
        *,
        payment_status: PaymentStatus = PaymentStatus.FINALIZED,
    ) -> AssembleResult:
        if not employee_id or not str(employee_id).strip():
            raise InvalidInputError("employee id is required")
        key = PayslipKey(str(employee_id), require_month(month), require_year(year), require_period(period))

        _check_non_negative(components, "components")
        _check_non_negative(deductions, "deductions")
        if basic_salary_override is not None:
            require_non_negative_minor(basic_salary_override, "basic salary override")
        try:
            payment_status = PaymentStatus(payment_status)
        except ValueError:
            raise InvalidInputError(f"Unknown payment status: {payment_status!r}")
        if payment_status == PaymentStatus.PAID:
            raise InvalidInputError("a payslip is marked paid through a status change, not by assembling it")

        gross_pay = components.total
        if gross_pay < 0:
            raise InvariantViolationError(f"gross pay is negative ({gross_pay})")
        net_pay = max(0, gross_pay - deductions.total)
        basic_salary = components.basic_pay if basic_salary_override is None else int(basic_salary_override)

        with self._locks.hold(key):
            existing = self._payslips.get_by_key(
                employee_id=key.employee_id, month=key.month, year=key.year, period=key.period
            )
            if existing is None:
                payslip = Payslip(
                    payslip_id=self._id_factory(),
                    employee_id=key.employee_id,
                    month=key.month,
                    year=key.year,
                    period=key.period,
                    basic_salary=basic_salary,
                    components=components,
                    deductions=deductions,
                    gross_pay=gross_pay,
                    net_pay=net_pay,
                    generated_at=self._clock(),
                    payment_status=payment_status,
                )
                saved = self._payslips.create(payslip)
                action = SaveAction.CREATED
            else:
                if existing.payment_status == PaymentStatus.PAID:
                    raise InvariantViolationError(f"Payslip {existing.payslip_id} is already paid and cannot be recomputed")
                generated_at = self._clock() if self._settings.refresh_generated_at_on_update else existing.generated_at
                saved = Payslip(
                    payslip_id=existing.payslip_id,
                    employee_id=key.employee_id,
                    month=key.month,
                    year=key.year,
                    period=key.period,
                    basic_salary=basic_salary,
                    components=components,
                    deductions=deductions,
                    gross_pay=gross_pay,
                    net_pay=net_pay,
                    generated_at=generated_at,
                    payment_status=payment_status,
                )
                if not self._payslips.update(saved):
                    raise ConcurrentUpdateError(f"Payslip {existing.payslip_id} was removed while updating; retry")
                action = SaveAction.UPDATED

        logger.info(
            f"payslip_{action.value}",
            extra={
                "payslip_id": saved.payslip_id,
                "employee_id": key.employee_id,
                "month": key.month,
                "year": key.year,
                "period": int(key.period),
                "gross_pay": gross_pay,
                "net_pay": net_pay,
            },
        )
        return AssembleResult(payslip=saved, action=action)

    def change_status(self, payslip_id: str, status: PaymentStatus | str) -> Payslip:
        """Move a stored payslip along draft -> finalized -> paid.

        A finalized payslip may go back to draft; paid is terminal.
        """
        try:
            target = PaymentStatus(status)
        except ValueError:
            raise InvalidInputError(f"Unknown payment status: {status!r}")

        current = self._payslips.get_by_id(payslip_id)
        if current is None:
            raise NotFoundError(f"Payslip {payslip_id} does not exist")

        with self._locks.hold(current.key):
            current = self._payslips.get_by_id(payslip_id)
            if current is None:
                raise NotFoundError(f"Payslip {payslip_id} does not exist")
            if target == current.payment_status:
                return current
            if target not in STATUS_TRANSITIONS[current.payment_status]:
                raise InvariantViolationError(
                    f"Payslip {payslip_id} cannot move from {current.payment_status.value} to {target.value}"
                )
            saved = replace(current, payment_status=target)
            if not self._payslips.update(saved):
                raise ConcurrentUpdateError(f"Payslip {payslip_id} was removed while updating; retry")

        logger.info(
            "payslip_status_changed",
            extra={"payslip_id": payslip_id, "from_status": current.payment_status, "to_status": target},
        )
        return saved
