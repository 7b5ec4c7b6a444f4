"""
Tolerance-based comparisons.

Matrix2.equals is exact; these helpers are what evaluation code and
tests use to compare floating point results.
"""

from .point import Point

DEFAULT_EPSILON = 1e-6


def approx_equal(val1: float, val2: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    return abs(val1 - val2) <= epsilon


def approx_equal_points(p1: Point, p2: Point, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Per-axis comparison of two points."""
    return (approx_equal(p1.x, p2.x, epsilon)
            and approx_equal(p1.y, p2.y, epsilon)
            and approx_equal(p1.z, p2.z, epsilon))


def in_range(val: float, a: float, b: float) -> bool:
    """True if a <= val <= b."""
    return a <= val <= b
