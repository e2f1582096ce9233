"""Conversions between decimal amounts and integer stroops."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

from .validation import InvalidAmount, validate_amount


ONE = 10_000_000
DECIMALS = 7


def to_stroops(amount: Union[str, Decimal]) -> int:
    """Convert a decimal amount such as ``"12.5"`` to integer stroops.

    More than seven decimal places, negative values and anything that does not
    fit a signed 64-bit integer are rejected.
    """
    if not isinstance(amount, (str, Decimal)):
        raise InvalidAmount(amount)
    try:
        value = Decimal(amount)
    except InvalidOperation as exc:
        raise InvalidAmount(amount) from exc
    if not value.is_finite():
        raise InvalidAmount(amount)
    scaled = value * ONE
    if scaled != scaled.to_integral_value():
        raise InvalidAmount(amount)
    return validate_amount(int(scaled))


def from_stroops(stroops: int) -> str:
    """Render integer stroops as a decimal string without trailing zeros."""
    validate_amount(stroops)
    whole, fraction = divmod(stroops, ONE)
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction:0{DECIMALS}d}".rstrip("0")
