"""
Rounding helpers for the VayuWatch data layer.

Dashboard figures round halves upwards (2.5 -> 3, -2.5 -> -2), which differs
from Python's built-in round() (banker's rounding). Every derived AQI, count
and percentage goes through round_half_up so results stay stable across
callers.
"""

import math


def round_half_up(value: float) -> int:
    """
    Rounds a number to the nearest integer, with halves rounded up.

    Args:
        value: Number to round

    Returns:
        The nearest integer; exact halves go towards positive infinity
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    """Rounds to a fixed number of decimals using round_half_up."""
    factor = 10 ** digits
    return round_half_up(value * factor) / factor


def clamp(value, lower, upper):
    """Clamps value into the closed range [lower, upper]."""
    return max(lower, min(upper, value))
