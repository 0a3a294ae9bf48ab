"""Strict numeric parsing for user-entered form strings."""

import math
import re
from typing import Any, Optional

# Plain decimal literal with optional exponent; rejects "inf", "nan", "1_000", hex.
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")


def is_blank(value: Any) -> bool:
    """True for None or strings that are empty after trimming."""
    return value is None or str(value).strip() == ""


def parse_finite_number(value: Any) -> Optional[float]:
    """
    Parse a form value as a finite float.

    Returns:
        The parsed float, or None if the value is blank, not a plain decimal
        literal, or overflows to infinity.
    """
    if is_blank(value):
        return None
    text = str(value).strip()
    if not _NUMBER_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def parse_non_negative_int(value: Any) -> Optional[int]:
    """Parse a decimal or 0x-prefixed hex form value as an integer >= 0, or None."""
    if is_blank(value):
        return None
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    if _HEX_RE.match(text):
        return int(text, 16)
    return None
