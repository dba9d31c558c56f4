# src/stockroom/utils/coercion.py

"""
Ingestion-Boundary Numeric Coercion
===================================

Every value typed by the shopkeeper or read from an import row
passes through these helpers before it reaches a Product.

Rules
-----
- Numbers and numeric strings are accepted (surrounding whitespace ignored)
- Booleans, None, blanks and unparsable text fall back to the default
- NaN / infinity fall back to the default
- Negative values fall back to the default
- Integer parsing truncates toward zero ("12.7" -> 12)
- The whole string must parse: "12 units" falls back, "3e2" reads as 300

Nothing here raises: a single-user tool prefers a zero over a crash.
"""

import math
from typing import Any


def parse_non_negative_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce ``value`` to a finite, non-negative float.

    Parameters
    ----------
    value : Any
        Raw input (str, int, float, None, ...).
    default : float
        Returned whenever ``value`` cannot be used.

    Returns
    -------
    float
    """

    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number) or number < 0:
        return default

    return number


def parse_non_negative_int(value: Any, default: int = 0) -> int:
    """
    Coerce ``value`` to a non-negative integer (truncating decimals).
    """

    number = parse_non_negative_number(value, default=float(default))

    return int(number)
