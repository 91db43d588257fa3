"""Utility functions for SmartEntity."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Mapping


def number_form(value: float) -> str:
    """
    Render a number the way JavaScript's ``Number.prototype.toString`` does.

    Uses the shortest round-trip digits; plain notation for magnitudes in
    [1e-6, 1e21), exponent notation (``1e+21``, ``1.5e-7``) otherwise.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(float(value)))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)

    k = len(digits)
    # value == 0.<digits> * 10**n
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def js_length(text: str) -> int:
    """Length of a string in UTF-16 code units, as JavaScript counts it."""
    return len(text.encode("utf-16-le")) // 2


def string_form(value: Any) -> str:
    """
    Render a value the way JavaScript's ``String(value)`` would.

    The mask length of a field is the ``js_length`` of this string.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) < 10 ** 21:
            return str(value)
        return number_form(float(value))
    if isinstance(value, float):
        return number_form(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        # null/undefined elements render as empty strings
        return ",".join("" if item is None else string_form(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    if hasattr(value, "to_dict"):
        return "[object Object]"
    return str(value)


def mask_value(value: Any, mask_char: str = "*") -> str:
    """Replace a value with a run of mask characters of its string length."""
    return mask_char * js_length(string_form(value))


def is_sequence(value: Any) -> bool:
    """Check if a value serializes as a JSON array."""
    return isinstance(value, (list, tuple))


def build_path(parent_path: str, key: str | int) -> str:
    """Build a JSONPath from parent path and key."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    else:
        # Handle special characters in key names
        if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', str(key)):
            return f"{parent_path}.{key}"
        else:
            return f"{parent_path}['{key}']"
