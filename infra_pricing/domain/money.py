"""
Decimal helpers for money amounts.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert ints, strings and floats to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def quantize_money(value: Number) -> Decimal:
    """Round to cents, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money(value: Number) -> float:
    """Round to cents for JSON serialization."""
    return float(quantize_money(value))


def percent_of(part: Decimal, total: Decimal) -> Decimal:
    """Percentage of total, 0 when the total is 0."""
    if total == 0:
        return ZERO
    return part / total * HUNDRED
