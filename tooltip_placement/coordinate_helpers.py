"""Clamp and candidate-picking helpers for tooltip coordinates (pure)."""
from __future__ import annotations


def clamp(value: float, lower: float, upper: float) -> float:
    """Restrict value to [lower, upper]; an inverted range resolves to lower."""
    if lower > upper:
        return lower
    return max(lower, min(upper, value))


def _within(value: float, lower: float, upper: float) -> bool:
    return lower <= value <= upper


def pick_coordinate(preferred: float, alternate: float, lower: float, upper: float) -> float:
    """Return preferred when it fits, else alternate when it fits, else clamped preferred."""
    if _within(preferred, lower, upper):
        return preferred
    if _within(alternate, lower, upper):
        return alternate
    return clamp(preferred, lower, upper)
