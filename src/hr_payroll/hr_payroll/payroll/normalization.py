"""One-time normalization of legacy allowance/deduction payloads.

Older payslips stored earnings and deductions as free-form JSON maps with
drifting key names (``allowances`` vs ``otherAllowances``, ``sss`` for social
insurance, ...), or as lists of ``{"name", "amount"}`` items. Everything is
resolved here into the canonical ``PayComponents`` / ``DeductionSet`` before
it reaches the engine. Unknown keys are rejected rather than dropped.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from ..common.validators import require_non_negative_minor
from ..core.exceptions import InvalidInputError
from .model import DeductionSet, PayComponents

COMPONENT_ALIASES: dict[str, tuple[str, ...]] = {
    "basic_pay": ("basic_pay", "basicPay", "basic"),
    "overtime_pay": ("overtime_pay", "overtimePay", "overtime"),
    "night_diff_pay": ("night_diff_pay", "nightDiffPay", "nightDiff"),
    "bonus": ("bonus", "bonuses"),
    "other_allowances": ("other_allowances", "otherAllowances", "allowances"),
}

DEDUCTION_ALIASES: dict[str, tuple[str, ...]] = {
    "social_insurance": ("social_insurance", "socialInsurance", "sss", "sssContribution"),
    "health_insurance": ("health_insurance", "healthInsurance", "philHealth", "philHealthContribution"),
    "housing_fund": ("housing_fund", "housingFund", "pagIbig", "pagIbigContribution"),
    "income_tax": ("income_tax", "incomeTax", "tax", "withholdingTax"),
    "other": ("other", "others", "otherDeductions"),
}

Payload = Union[Mapping[str, Any], Iterable[Mapping[str, Any]], None]


def _as_amount(value: Any, field_name: str) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    return require_non_negative_minor(value, field_name)


def _resolve(raw: Mapping[str, Any], aliases: dict[str, tuple[str, ...]], what: str) -> dict[str, int]:
    lookup = {alias: canonical for canonical, names in aliases.items() for alias in names}
    unknown = sorted(k for k in raw if k not in lookup)
    if unknown:
        raise InvalidInputError(f"Unknown {what} keys: {', '.join(unknown)}")

    resolved: dict[str, int] = {}
    for key, value in raw.items():
        if value is None:
            continue
        canonical = lookup[key]
        amount = _as_amount(value, f"{what}.{key}")
        if canonical in resolved and resolved[canonical] != amount:
            raise InvalidInputError(f"Conflicting {what} values for {canonical}")
        resolved[canonical] = amount
    return resolved


def _sum_items(items: Iterable[Mapping[str, Any]], what: str) -> int:
    total = 0
    for item in items:
        if not isinstance(item, Mapping) or "amount" not in item:
            raise InvalidInputError(f"{what} items need an 'amount'")
        total += _as_amount(item["amount"], f"{what}.{item.get('name', '?')}")
    return total


def normalize_components(raw: Payload, *, basic_pay: Optional[int] = None) -> PayComponents:
    """``basic_pay`` comes from the payslip's basic salary column on legacy rows."""
    if raw is None:
        values: dict[str, int] = {}
    elif isinstance(raw, Mapping):
        values = _resolve(raw, COMPONENT_ALIASES, "allowances")
    else:
        values = {"other_allowances": _sum_items(raw, "allowances")}

    if basic_pay is not None:
        basic = _as_amount(basic_pay, "basic_pay")
        if values.get("basic_pay", basic) != basic:
            raise InvalidInputError("Conflicting allowances values for basic_pay")
        values["basic_pay"] = basic
    return PayComponents(**values)


def normalize_deductions(raw: Payload) -> DeductionSet:
    if raw is None:
        return DeductionSet()
    if isinstance(raw, Mapping):
        return DeductionSet(**_resolve(raw, DEDUCTION_ALIASES, "deductions"))
    return DeductionSet(other=_sum_items(raw, "deductions"))
