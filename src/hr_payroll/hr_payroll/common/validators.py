from __future__ import annotations

from decimal import Decimal

from ..core.enums import PayPeriod
from ..core.exceptions import InvalidInputError
from .money import Number, to_decimal


def require_non_negative(value: Number, field_name: str) -> Decimal:
    result = to_decimal(value, field_name)
    if result < 0:
        raise InvalidInputError(f"{field_name} must not be negative (got {result})")
    return result


def require_non_negative_minor(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{field_name} must be an integer amount in minor units")
    if value < 0:
        raise InvalidInputError(f"{field_name} must not be negative (got {value})")
    return value


def _whole_number(value: object, field_name: str) -> int:
    """Accept ints, integral floats and digit strings; never truncate."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{field_name} is not a number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise InvalidInputError(f"{field_name} must be a whole number (got {value!r})")


def require_period(value: object) -> PayPeriod:
    try:
        return PayPeriod(_whole_number(value, "period"))
    except ValueError:
        raise InvalidInputError(f"period must be 1 or 2 (got {value!r})")


def require_month(value: object) -> int:
    month = _whole_number(value, "month")
    if not 1 <= month <= 12:
        raise InvalidInputError(f"month must be between 1 and 12 (got {month})")
    return month


def require_year(value: object) -> int:
    year = _whole_number(value, "year")
    if not 1900 <= year <= 9999:
        raise InvalidInputError(f"year out of range (got {year})")
    return year
