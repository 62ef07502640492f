from __future__ import annotations

import math
import re
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
BYTE_UNIT = 1024
BINARY_PREFIXES = "KMGTPE"

_NUMERIC_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def human_bytes(size: int) -> str:
    if size < BYTE_UNIT:
        return f"{size} B"

    divisor = BYTE_UNIT
    exponent = 0
    quotient = size // BYTE_UNIT
    while quotient >= BYTE_UNIT and exponent < len(BINARY_PREFIXES) - 1:
        divisor *= BYTE_UNIT
        exponent += 1
        quotient //= BYTE_UNIT
    return f"{size / divisor:.1f} {BINARY_PREFIXES[exponent]}iB"


def coerce_int64(value: Any) -> int | None:
    """Map an int, float or numeric string onto a signed 64-bit integer.

    Floats truncate toward zero. Anything else, including booleans, non-finite
    floats and values outside the int64 range, yields ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        number = int(value)
    elif isinstance(value, str):
        number = _parse_numeric_string(value)
        if number is None:
            return None
    else:
        return None

    if number < INT64_MIN or number > INT64_MAX:
        return None
    return number


def _parse_numeric_string(text: str) -> int | None:
    stripped = text.strip()
    if not _NUMERIC_PATTERN.fullmatch(stripped):
        return None
    try:
        return int(stripped, 10)
    except ValueError:
        pass
    try:
        parsed = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return int(parsed)
