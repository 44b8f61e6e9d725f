"""Rounding helpers shared by the handicap algorithms.

Python's built-in ``round`` uses banker's rounding; the tour rules round
halves away from zero, so everything goes through these helpers.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import Union

Number = Union[int, float, Decimal, Fraction]

TENTH = Decimal("0.1")


def round_half_up(value: Number) -> int:
    """Nearest integer, halves rounded away from zero."""
    exact = Fraction(str(value)) if isinstance(value, float) else Fraction(value)
    half = Fraction(1, 2)
    if exact >= 0:
        return math.floor(exact + half)
    return math.ceil(exact - half)


def to_tenths(value: Number) -> Decimal:
    """Quantize to one decimal place, halves rounded away from zero."""
    if isinstance(value, Fraction):
        value = Decimal(value.numerator) / Decimal(value.denominator)
    elif isinstance(value, float):
        value = Decimal(str(value))
    else:
        value = Decimal(value)
    return value.quantize(TENTH, rounding=ROUND_HALF_UP)


def clamp(value, low, high):
    return max(low, min(high, value))
