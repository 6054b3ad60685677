from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import to_decimal
from ..core.exceptions import InvalidInputError
from .model import AssembleResult, BatchResult, HourBreakdown, ManualAdjustments, Payslip, PayrollDraft

# Amounts are minor units throughout; dividing by 100 for display is the UI's job.


def _breakdown_to_dict(b: HourBreakdown) -> dict[str, str]:
    return {
        "regular_hours": str(b.regular_hours),
        "overtime_hours": str(b.overtime_hours),
        "night_diff_hours": str(b.night_diff_hours),
    }


def payslip_to_dict(p: Payslip) -> dict[str, Any]:
    return {
        "id": p.payslip_id,
        "employee_id": p.employee_id,
        "month": p.month,
        "year": p.year,
        "period": int(p.period),
        "basic_salary": p.basic_salary,
        "components": p.components.to_dict(),
        "deductions": p.deductions.to_dict(),
        "gross_pay": p.gross_pay,
        "total_deductions": p.total_deductions,
        "net_pay": p.net_pay,
        "payment_status": p.payment_status.value,
        "generated_at": p.generated_at.isoformat(),
    }


def assemble_result_to_dict(r: AssembleResult) -> dict[str, Any]:
    return {"action": r.action.value, "payslip": payslip_to_dict(r.payslip)}


def draft_to_dict(d: PayrollDraft) -> dict[str, Any]:
    return {
        "employee_id": d.employee_id,
        "month": d.month,
        "year": d.year,
        "period": int(d.period),
        "hourly_rate": str(d.hourly_rate),
        "hours": _breakdown_to_dict(d.breakdown),
        "components": d.components.to_dict(),
        "deductions": d.deductions.to_dict(),
        "computed_income_tax": d.computed_income_tax,
        "prior_half_gross": d.prior_half_gross,
        "gross_pay": d.gross_pay,
        "total_deductions": d.deductions.total,
        "net_pay": d.net_pay,
    }


def batch_result_to_dict(r: BatchResult) -> dict[str, Any]:
    return {
        "created": r.created_count,
        "updated": r.updated_count,
        "succeeded": [assemble_result_to_dict(s) for s in r.succeeded],
        "failed": [
            {"employee_id": f.employee_id, "error_type": f.error_type, "message": f.message} for f in r.failed
        ],
    }


def _optional_hours(data: Mapping[str, Any], key: str) -> Optional[Decimal]:
    value = data.get(key)
    return None if value is None else to_decimal(value, key)


def _amount(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{key} must be an integer amount in minor units")
    return value


def adjustments_from_dict(data: Optional[Mapping[str, Any]]) -> ManualAdjustments:
    if not data:
        return ManualAdjustments()
    if not isinstance(data, Mapping):
        raise InvalidInputError("adjustments must be an object")
    override = data.get("basic_salary_override")
    return ManualAdjustments(
        bonus=_amount(data, "bonus"),
        other_allowances=_amount(data, "other_allowances"),
        other_deductions=_amount(data, "other_deductions"),
        regular_hours=_optional_hours(data, "regular_hours"),
        overtime_hours=_optional_hours(data, "overtime_hours"),
        night_diff_hours=_optional_hours(data, "night_diff_hours"),
        basic_salary_override=None if override is None else _amount(data, "basic_salary_override"),
    )
