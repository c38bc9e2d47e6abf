"""Conversions between exact currency values and floats.

Currency amounts are held as ``Decimal`` with two decimal places. Proportional
math (interest, charge rates) is done in floating point and rounded back to
the nearest minor unit, so every round trip may lose sub-penny precision.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Union

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
DEFAULT_SYMBOL = "£"

# leading sign, optional currency symbol(s), then the number itself
_MONEY_RE = re.compile(r"^\s*([+-]?)\s*[^\d\s.+-]*\s*(\d[\d,]*(?:\.\d+)?|\.\d+)\s*$")

MoneyLike = Union[Decimal, str, int, float]


def parse_money(text: str) -> Decimal:
    """Parse ``"£1,000.00"``, ``"-$5"`` or ``"12.5"`` into a two-place Decimal.

    Raises ``ValueError`` when the text does not contain a number.
    """
    match = _MONEY_RE.match(text)
    if not match:
        raise ValueError(f"not a currency value: {text!r}")
    sign, digits = match.groups()
    amount = Decimal(digits.replace(",", ""))
    if sign == "-":
        amount = -amount
    return amount.quantize(CENT)


def as_money(value: MoneyLike) -> Decimal:
    """Coerce user input into a two-place Decimal."""
    if isinstance(value, Decimal):
        return value.quantize(CENT)
    if isinstance(value, str):
        return parse_money(value)
    if isinstance(value, bool):
        raise TypeError("bool is not a currency value")
    if isinstance(value, int):
        return Decimal(value).quantize(CENT)
    if isinstance(value, float):
        return to_money(value)
    raise TypeError(f"unsupported currency value: {value!r}")


def to_float(value: Decimal) -> float:
    """Float view of a currency value for proportional calculations."""
    try:
        result = float(value)
    except (InvalidOperation, OverflowError, TypeError, ValueError):
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return result


def to_money(value: float) -> Decimal:
    """Round a float to the nearest minor unit.

    Never raises: NaN, infinities and anything else that cannot be formatted
    come back as zero.
    """
    try:
        if not math.isfinite(value):
            return ZERO
        return Decimal(f"{value:.2f}")
    except (InvalidOperation, OverflowError, TypeError, ValueError):
        return ZERO


def format_money(value: Decimal, symbol: str = DEFAULT_SYMBOL) -> str:
    amount = value.quantize(CENT)
    if amount < 0:
        return f"-{symbol}{-amount}"
    return f"{symbol}{amount}"
