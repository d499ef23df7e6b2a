# services/money.py
"""Conversion of user-typed decimal amounts into integer cents."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from ..errors import InvalidAmount

CENTS = Decimal(100)


def normalize_decimal(raw: str) -> str:
    """Rewrite ``raw`` so that ``.`` is the only (decimal) separator.

    Whichever of ``.`` and ``,`` appears last is the decimal separator; every
    occurrence of the other one is dropped as a thousands separator.

    >>> normalize_decimal("1.234,56")
    '1234.56'
    >>> normalize_decimal("1,234.56")
    '1234.56'
    """
    text = raw.strip()
    dot = text.rfind(".")
    comma = text.rfind(",")
    if dot == -1 and comma == -1:
        return text
    if comma > dot:
        return text.replace(".", "").replace(",", ".")
    return text.replace(",", "")


def to_cents(raw: str) -> int:
    """Convert a decimal string such as ``"1.234,56"`` into minor units.

    Rounds half away from zero. Raises ``InvalidAmount`` when the value is not
    a finite number.
    """
    normalized = normalize_decimal(raw)
    try:
        value = Decimal(normalized)
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Invalid monetary amount: {raw!r}")

    if not value.is_finite():
        raise InvalidAmount(f"Invalid monetary amount: {raw!r}")

    return int((value * CENTS).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def optional_cents(raw: str) -> Optional[int]:
    """Like ``to_cents`` but the empty string means "clear the amount"."""
    if raw == "":
        return None
    return to_cents(raw)
