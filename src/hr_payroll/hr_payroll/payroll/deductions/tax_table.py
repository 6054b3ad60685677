"""Progressive income-tax schedule.

The schedule is data: a list of brackets, each with the lower bound (minor
units) at which its marginal rate starts. The function walking the table
never changes when the brackets do.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from ...common.money import Number, round_minor, to_decimal, to_minor_units
from ...core.exceptions import InvalidInputError

MIN_BRACKETS = 4


@dataclass(frozen=True)
class TaxBracket:
    lower_bound: int
    rate: Decimal


class TaxTable:
    def __init__(self, brackets: Sequence[TaxBracket]):
        if len(brackets) < MIN_BRACKETS:
            raise InvalidInputError(f"tax table needs at least {MIN_BRACKETS} brackets")
        if brackets[0].lower_bound != 0:
            raise InvalidInputError("first tax bracket must start at 0")
        for prev, cur in zip(brackets, brackets[1:]):
            if cur.lower_bound <= prev.lower_bound:
                raise InvalidInputError("tax bracket bounds must be strictly ascending")
        for b in brackets:
            if not Decimal("0") <= b.rate <= Decimal("1"):
                raise InvalidInputError(f"tax rate out of range: {b.rate}")
        self._brackets = tuple(brackets)

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[Number, Number]]) -> "TaxTable":
        """Build from ``(lower_bound_in_major_units, rate)`` pairs, e.g. settings values."""
        return cls(
            [
                TaxBracket(
                    lower_bound=to_minor_units(to_decimal(lower, "tax bracket bound")),
                    rate=to_decimal(rate, "tax rate"),
                )
                for lower, rate in rows
            ]
        )

    @property
    def brackets(self) -> tuple[TaxBracket, ...]:
        return self._brackets

    def compute(self, basis: int) -> int:
        tax = Decimal("0")
        for i, bracket in enumerate(self._brackets):
            if basis <= bracket.lower_bound:
                break
            upper = self._brackets[i + 1].lower_bound if i + 1 < len(self._brackets) else None
            top = basis if upper is None else min(basis, upper)
            tax += Decimal(top - bracket.lower_bound) * bracket.rate
        return round_minor(tax)


# Monthly schedule (major units): 0% to 20,833; 15% to 33,332; 20% to 66,666;
# 25% to 166,666; 30% to 666,666; 35% above.
DEFAULT_TAX_BRACKET_ROWS: tuple[tuple[str, str], ...] = (
    ("0", "0"),
    ("20833", "0.15"),
    ("33332", "0.20"),
    ("66666", "0.25"),
    ("166666", "0.30"),
    ("666666", "0.35"),
)

DEFAULT_TAX_TABLE = TaxTable.from_rows(DEFAULT_TAX_BRACKET_ROWS)
