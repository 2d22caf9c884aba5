"""
Parsing of decimal-formatted strings.

A regex is used rather than ``Decimal(text)`` so that scientific notation,
``NaN`` and ``Infinity`` are rejected.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

DECIMAL_PATTERN = re.compile(r'^\s*[-+]?[0-9]*\.?[0-9]+\s*$')


def is_decimal_string(value: Any) -> bool:
    """Return True for strings such as ``"4"``, ``" -4.00 "`` or ``".47"``."""
    return isinstance(value, str) and DECIMAL_PATTERN.match(value) is not None


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert an integer, a finite Decimal or a decimal-formatted string to Decimal.

    Returns None for anything else.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if is_decimal_string(value):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return None
    return None


def decimal_places(text: str) -> int:
    """Number of digits after the decimal point of a decimal-formatted string."""
    _, _, fraction = text.strip().partition('.')
    return len(fraction)


def format_decimal(value: Decimal) -> str:
    """Render a Decimal in plain notation, never scientific."""
    return format(value, 'f')
