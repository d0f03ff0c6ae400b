"""
Exact-integer math kit.

All pool arithmetic goes through these helpers so rounding is explicit:
- `floor_ratio` rounds down (the default for every amount the pool pays out),
- `ceil_ratio` rounds up (used only where the pool must be paid at least a value),
- `isqrt` is the exact integer square root (no float round-trip).
"""

from __future__ import annotations

import math


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def floor_ratio(numerator: int, multiplier: int, denominator: int) -> int:
    """Compute `floor(numerator * multiplier / denominator)` for non-negative operands."""
    require_int("numerator", numerator)
    require_int("multiplier", multiplier)
    require_int("denominator", denominator)
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0 or multiplier < 0:
        raise ValueError("operands must be non-negative")
    return (numerator * multiplier) // denominator


def ceil_ratio(numerator: int, multiplier: int, denominator: int) -> int:
    """Compute `ceil(numerator * multiplier / denominator)` for non-negative operands."""
    require_int("numerator", numerator)
    require_int("multiplier", multiplier)
    require_int("denominator", denominator)
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0 or multiplier < 0:
        raise ValueError("operands must be non-negative")
    return (numerator * multiplier + denominator - 1) // denominator


def isqrt(value: int) -> int:
    require_int("value", value)
    if value < 0:
        raise ValueError("isqrt of a negative value")
    return math.isqrt(value)


def min_int(a: int, b: int) -> int:
    require_int("a", a)
    require_int("b", b)
    return a if a <= b else b
