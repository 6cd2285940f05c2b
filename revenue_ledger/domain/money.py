"""Monetary and percentage value helpers

All amounts are fixed-point Decimals rounded half-up to 2 places at every
observable boundary. Percentages are wrapped in ``Percentage`` so that
non-numeric or non-finite input is rejected once, at construction.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Union

from .errors import InvalidPercentageError

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")
PERCENT_SUM_TOLERANCE = Decimal("0.01")

Number = Union[int, float, Decimal]


def to_decimal(value: Any) -> Decimal:
    """Convert int/float/Decimal/str to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_money(value: Any) -> Decimal:
    """Round a monetary value half-up to 2 decimal places"""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Percentage:
    """A finite percentage value

    Range (0..100) is not enforced here: an out-of-range percentage is still a
    number and takes part in the sum check of a revenue rule.
    """

    value: Decimal

    def __post_init__(self):
        raw = self.value
        if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
            raise InvalidPercentageError(f"Percentage must be a number, got {raw!r}")
        try:
            value = to_decimal(raw)
        except (InvalidOperation, ValueError) as e:
            raise InvalidPercentageError(f"Percentage must be a number, got {raw!r}") from e
        if not value.is_finite():
            raise InvalidPercentageError(f"Percentage must be finite, got {raw!r}")
        object.__setattr__(self, "value", value)

    @property
    def in_range(self) -> bool:
        return Decimal("0") <= self.value <= HUNDRED

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def share_of(self, amount: Decimal) -> Decimal:
        """Unrounded share of ``amount``"""
        return amount * self.value / HUNDRED

    def __str__(self) -> str:
        return f"{self.value}%"
