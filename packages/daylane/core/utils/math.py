"""Math utilities for common operations."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def floor_div(numerator: int, denominator: int) -> int:
    """Integer floor division that treats a non-positive denominator as zero width."""
    if denominator <= 0:
        return 0
    return numerator // denominator
