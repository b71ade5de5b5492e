"""
Conversion of extracted raw values into finite floats.

Recognition output is loosely typed: numbers, numeric strings, blanks, and the
occasional nested structure. ``coerce`` turns any of these into a usable
measurement and never raises.
"""

import math
import re
from decimal import Decimal
from numbers import Real

DEFAULT_VALUE = 0.0

# Optional sign, one decimal point at most, optional exponent.
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def try_coerce(raw: object) -> float | None:
    """Parse ``raw`` as a finite float, or return None when it is not one.

    Blank strings and None count as zero, matching how an empty numeric input
    reads back.
    """
    if raw is None:
        return DEFAULT_VALUE
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (Real, Decimal)):
        try:
            value = float(raw)
        except (OverflowError, TypeError, ValueError):
            return None
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return DEFAULT_VALUE
        if _NUMBER.fullmatch(text) is None:
            return None
        value = float(text)
    else:
        return None

    return value if math.isfinite(value) else None


def coerce(raw: object) -> float:
    """Convert ``raw`` to a finite float, falling back to 0.0."""
    value = try_coerce(raw)
    return DEFAULT_VALUE if value is None else value
