"""Lenient numeric parsing for the free-text columns of imported data."""

import math
import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def leading_int(text: str | None, default: int = 0) -> int:
    """Read the integer at the start of ``text`` ("20 (5,140 steps)" -> 20)."""
    if not text:
        return default
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else default


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return math.floor(value + 0.5)
