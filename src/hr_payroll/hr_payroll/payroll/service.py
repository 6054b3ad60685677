from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import pay_period_range
from ..common.logging_config import get_logger
from ..common.validators import (
    require_month,
    require_non_negative,
    require_non_negative_minor,
    require_period,
    require_year,
)
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PaymentStatus, PayPeriod
from ..core.exceptions import DomainError, InvalidInputError, NotFoundError
from ..employees.repository import EmployeeRepository
from .aggregator import AttendanceAggregator
from .assembler import PayslipAssembler
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .model import (
    AssembleResult,
    BatchFailure,
    BatchResult,
    DeductionSet,
    HourBreakdown,
    ManualAdjustments,
    Payslip,
    PayrollDraft,
)
from .reconciliation.engine import ReconciliationEngine
from .repository import PayslipRepository
from .settings import PayrollSettings

logger = get_logger("payroll.service")


def _validated_adjustments(adjustments: Optional[ManualAdjustments]) -> ManualAdjustments:
    adj = adjustments or ManualAdjustments()
    require_non_negative_minor(adj.bonus, "bonus")
    require_non_negative_minor(adj.other_allowances, "other allowances")
    require_non_negative_minor(adj.other_deductions, "other deductions")
    if adj.basic_salary_override is not None:
        require_non_negative_minor(adj.basic_salary_override, "basic salary override")
    return adj


def _apply_hour_overrides(breakdown: HourBreakdown, adj: ManualAdjustments) -> HourBreakdown:
    return HourBreakdown(
        regular_hours=(
            require_non_negative(adj.regular_hours, "regular hours")
            if adj.regular_hours is not None
            else breakdown.regular_hours
        ),
        overtime_hours=(
            require_non_negative(adj.overtime_hours, "overtime hours")
            if adj.overtime_hours is not None
            else breakdown.overtime_hours
        ),
        night_diff_hours=(
            require_non_negative(adj.night_diff_hours, "night differential hours")
            if adj.night_diff_hours is not None
            else breakdown.night_diff_hours
        ),
    )


class PayrollService:
    """Use case: compute and finalize half-month payslips.

    Every stage is called explicitly here, in pipeline order; nothing is
    recomputed behind the caller's back.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        payslips: PayslipRepository,
        *,
        settings: Optional[PayrollSettings] = None,
        aggregator: Optional[AttendanceAggregator] = None,
        calculator: Optional[PayCalculator] = None,
        reconciliation: Optional[ReconciliationEngine] = None,
        assembler: Optional[PayslipAssembler] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._payslips = payslips
        self._settings = settings or PayrollSettings()
        self._aggregator = aggregator or AttendanceAggregator()
        self._calculator = calculator or StandardPayCalculator()
        self._reconciliation = reconciliation or ReconciliationEngine(self._settings)
        self._assembler = assembler or PayslipAssembler(payslips, settings=self._settings)

    def _prior_half(self, employee_id: str, month: int, year: int, half: PayPeriod) -> tuple[int, Optional[DeductionSet]]:
        if half == PayPeriod.FIRST_HALF:
            return 0, None
        first = self._payslips.get_by_key(employee_id=employee_id, month=month, year=year, period=PayPeriod.FIRST_HALF)
        if first is None:
            return 0, None
        return first.gross_pay, first.deductions

    def preview(
        self,
        employee_id: str,
        *,
        year: int,
        month: int,
        period: int,
        adjustments: Optional[ManualAdjustments] = None,
    ) -> PayrollDraft:
        year = require_year(year)
        month = require_month(month)
        half = require_period(period)
        adj = _validated_adjustments(adjustments)

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        hourly_rate = employee.effective_hourly_rate()

        start, end = pay_period_range(year, month, half)
        records = self._attendance.list_for_employee(employee.employee_id, start, end)
        breakdown = _apply_hour_overrides(self._aggregator.aggregate(employee.employee_id, records), adj)

        components = self._calculator.compute_pay(breakdown, hourly_rate).with_adjustments(
            bonus=adj.bonus, other_allowances=adj.other_allowances
        )

        prior_gross, prior_deductions = self._prior_half(employee.employee_id, month, year, half)
        outcome = self._reconciliation.reconcile_detailed(
            components.total, half, prior_deductions, prior_half_gross=prior_gross
        )

        return PayrollDraft(
            employee_id=employee.employee_id,
            month=month,
            year=year,
            period=half,
            hourly_rate=Decimal(hourly_rate),
            breakdown=breakdown,
            components=components,
            deductions=outcome.due.with_other(adj.other_deductions),
            computed_income_tax=outcome.computed_income_tax,
            prior_half_gross=prior_gross,
            basic_salary_override=adj.basic_salary_override,
        )

    def finalize(
        self,
        employee_id: str,
        *,
        year: int,
        month: int,
        period: int,
        adjustments: Optional[ManualAdjustments] = None,
        payment_status: PaymentStatus = PaymentStatus.FINALIZED,
    ) -> AssembleResult:
        """Persist the computed payslip; ``payment_status`` may be draft or finalized."""
        draft = self.preview(employee_id, year=year, month=month, period=period, adjustments=adjustments)
        return self._assembler.assemble(
            draft.employee_id,
            draft.month,
            draft.year,
            draft.period,
            draft.basic_salary_override,
            draft.components,
            draft.deductions,
            payment_status=payment_status,
        )

    def run_batch(
        self,
        *,
        year: int,
        month: int,
        period: int,
        employee_ids: Optional[Iterable[str]] = None,
        adjustments: Optional[Mapping[str, ManualAdjustments]] = None,
    ) -> BatchResult:
        """Finalize many employees; one employee's failure never stops the rest."""
        if employee_ids is None:
            employee_ids = [e.employee_id for e in self._employees.list_payroll_eligible()]
        adjustments = adjustments or {}

        result = BatchResult()
        for employee_id in employee_ids:
            try:
                result.succeeded.append(
                    self.finalize(
                        employee_id,
                        year=year,
                        month=month,
                        period=period,
                        adjustments=adjustments.get(employee_id),
                    )
                )
            except DomainError as e:
                logger.warning(
                    "batch_employee_failed",
                    extra={"employee_id": employee_id, "error_type": type(e).__name__, "error": str(e)},
                )
                result.failed.append(BatchFailure(employee_id=employee_id, error_type=type(e).__name__, message=str(e)))

        logger.info(
            "payroll_batch_completed",
            extra={
                "year": year,
                "month": month,
                "period": period,
                "created": result.created_count,
                "updated": result.updated_count,
                "failed": len(result.failed),
            },
        )
        return result

    def get_payslip(self, payslip_id: str) -> Payslip:
        payslip = self._payslips.get_by_id(payslip_id)
        if not payslip:
            raise NotFoundError(f"Payslip {payslip_id} does not exist")
        return payslip

    def list_payslips(
        self,
        *,
        employee_id: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        period: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Payslip]:
        if limit <= 0:
            raise InvalidInputError("limit must be positive")
        return self._payslips.list_payslips(
            employee_id=employee_id,
            year=require_year(year) if year is not None else None,
            month=require_month(month) if month is not None else None,
            period=require_period(period) if period is not None else None,
            limit=limit,
        )

    def delete_payslip(self, payslip_id: str) -> None:
        """Administrative removal; the pipeline itself never deletes."""
        if not self._payslips.delete_by_id(payslip_id):
            raise NotFoundError(f"Payslip {payslip_id} does not exist")
        logger.info("payslip_deleted", extra={"payslip_id": payslip_id})

    def change_payment_status(self, payslip_id: str, status: PaymentStatus | str) -> Payslip:
        return self._assembler.change_status(payslip_id, status)
