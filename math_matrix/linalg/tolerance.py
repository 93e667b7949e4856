"""
Fuzzy comparison of floats.

Used by Matrix.compare to check identities such as ``A * A^-1 == I`` where
exact equality is spoiled by floating-point noise.
"""

from __future__ import annotations

import math


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) < tol
    ABSOLUTE = "absolute"  # |a - b| < tol
    SIGFIGS = "sigfigs"  # Significant figures


def fuzzy_compare(a: float, b: float, tolerance: float, mode: str) -> bool:
    """
    Compare two floats with tolerance.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value
        mode: Comparison mode (relative, absolute, sigfigs)

    Returns:
        True if values are equal within tolerance
    """
    # Exact equality
    if a == b:
        return True

    # Use epsilon for floating point comparisons to avoid precision issues
    EPSILON = 1e-12

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance + EPSILON

    elif mode == ToleranceMode.RELATIVE:
        max_abs = max(abs(a), abs(b))
        if max_abs == 0:
            return abs(a - b) <= tolerance + EPSILON
        return abs(a - b) / max_abs <= tolerance + EPSILON

    elif mode == ToleranceMode.SIGFIGS:
        diff = abs(a - b)
        avg = (abs(a) + abs(b)) / 2
        if avg == 0:
            return diff < 10 ** (-tolerance)
        return math.floor(math.log10(diff / avg)) < -tolerance

    else:
        raise ValueError(f"Unknown tolerance mode: {mode}")


def round_half_away(value: float) -> float:
    """Round to the nearest integral float, halves away from zero."""
    if not math.isfinite(value):
        return value
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(whole, value)
