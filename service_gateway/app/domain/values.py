"""
Value conversion helpers for request parameters and contract results.
"""

import math
import re
from typing import Any, Union

_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_PREFIXED_INT = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"([+-]?)Infinity")


def to_number(value: str) -> Union[int, float]:
    """Convert a string to a number the way the public API always has.

    Surrounding whitespace is ignored and an empty string is 0. Decimal
    literals (with optional fraction and exponent), ``0x``/``0o``/``0b``
    integers and signed ``Infinity`` are accepted. Anything else yields NaN.
    Integral results are returned as ``int``.
    """
    text = value.strip()
    if not text:
        return 0

    if _DECIMAL_INT.fullmatch(text):
        return int(text)

    if _PREFIXED_INT.fullmatch(text):
        return int(text, 0)

    infinity = _INFINITY.fullmatch(text)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf

    if _DECIMAL.fullmatch(text):
        number = float(text)
        if math.isfinite(number) and number.is_integer():
            return int(number)
        return number

    return math.nan


def is_numeric(value: str) -> bool:
    """True when ``value`` converts to a number (floats and negatives included)."""
    return not math.isnan(to_number(value))


def normalize_value(value: Any) -> Any:
    """Cut a string at its first NUL when the NUL is not the first character.

    Contract byte arrays come back NUL padded. A value whose first character
    is NUL is returned unchanged, as are non-string values.
    """
    if isinstance(value, str):
        index = value.find("\x00")
        return value[:index] if index > 0 else value
    if isinstance(value, (bytes, bytearray)):
        index = value.find(b"\x00")
        return value[:index] if index > 0 else value
    return value
