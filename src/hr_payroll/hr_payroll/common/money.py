"""Decimal helpers for money.

Amounts that cross module boundaries are ``int`` minor units (cents).
Rates and hour figures are ``Decimal``; floats are converted through ``str``
so that ``58.75`` stays exactly ``58.75``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..core.constants import MINOR_UNITS_PER_MAJOR
from ..core.exceptions import InvalidInputError

Number = Union[int, float, str, Decimal]

_ONE = Decimal("1")
_CENT = Decimal("0.01")


def to_decimal(value: Number, field_name: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field_name} is required")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidInputError(f"{field_name} is not a number: {value!r}")
    if not result.is_finite():
        raise InvalidInputError(f"{field_name} must be finite")
    return result


def round_minor(amount_minor: Decimal) -> int:
    """Round a fractional minor-unit amount to a whole minor unit (half-up)."""
    return int(amount_minor.quantize(_ONE, rounding=ROUND_HALF_UP))


def to_minor_units(amount_major: Decimal) -> int:
    """Major units (e.g. 411.54375) -> minor units, rounded once, half-up."""
    return round_minor(amount_major * MINOR_UNITS_PER_MAJOR)


def to_major_units(amount_minor: int) -> Decimal:
    return (Decimal(int(amount_minor)) / MINOR_UNITS_PER_MAJOR).quantize(_CENT)
