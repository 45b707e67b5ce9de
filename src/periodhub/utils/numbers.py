"""Numeric helpers for score calculations."""

import math


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round halves away from zero for positive scores (2.5 -> 3), unlike round()."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
