"""Conversion of integer token amounts into human readable decimal strings."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

DEFAULT_DECIMALS = 18

DECIMAL_AMOUNT_PATTERN = re.compile(r"^[0-9]+$")
HEX_AMOUNT_PATTERN = re.compile(r"^0[xX][0-9a-fA-F]+$")


def parse_raw_amount(value: str | int) -> int:
    """Parse an unsigned raw balance given as an int, a decimal string or a 0x hex string.

    Signs, underscores and embedded whitespace are rejected.
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsupported token amount: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Token amount must be unsigned, got {value}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported token amount type: {type(value)!r}")

    text = value.strip()
    if not text:
        raise ValueError("Token amount cannot be empty")
    if HEX_AMOUNT_PATTERN.fullmatch(text):
        return int(text, 16)
    if DECIMAL_AMOUNT_PATTERN.fullmatch(text):
        return int(text, 10)
    raise ValueError(f"Invalid token amount: {value!r}")


def format_units(value: str | int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Shift the decimal point of an integer amount left by ``decimals`` places.

    The result keeps full precision and always carries at least one fractional
    digit, e.g. ``format_units("1000000000000000000", 18) == "1.0"``. Trailing
    fractional zeros are dropped. With zero decimals the plain integer is
    returned.
    """
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")

    amount = parse_raw_amount(value)
    if decimals == 0:
        return str(amount)

    whole, fraction = divmod(amount, 10**decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{whole}.{fraction_text}"


def is_zero_amount(formatted: str) -> bool:
    """Return True when a formatted amount is exactly zero."""
    try:
        return Decimal(formatted) == 0
    except InvalidOperation as exc:
        raise ValueError(f"Invalid formatted amount: {formatted!r}") from exc


__all__ = ["DEFAULT_DECIMALS", "format_units", "is_zero_amount", "parse_raw_amount"]
