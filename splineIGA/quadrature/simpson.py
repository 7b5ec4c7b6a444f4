"""
Composite Simpson rule for numerical integration.

The interval [a, b] is divided into n (even) sub-intervals of width
h = (b - a) / n, and pairs of sub-intervals are integrated with the
parabola through their three nodes:

    I ~= h/3 * (f(x_0) + 4 f(x_1) + 2 f(x_2) + ... + 4 f(x_{n-1}) + f(x_n))

The rule is exact for polynomials up to degree 3.

Usage:
    value = quad_simpson(lambda x: x**2, 0.0, 1.0, 10)
"""

from typing import Callable


def quad_simpson(f: Callable[[float], float], a: float, b: float, n: int) -> float:
    """
    Integrate f over [a, b] with the composite Simpson rule.

    Parameters:
        f: Integrand
        a: Lower bound
        b: Upper bound, b < a integrates backwards
        n: Number of sub-intervals, even and positive

    Returns:
        Approximation of the integral of f from a to b
    """
    if n < 2 or n % 2 != 0:
        raise ValueError(f"Simpson rule needs an even number of sub-intervals, got {n}")
    if a == b:
        return 0.0
    if a > b:
        return -quad_simpson(f, b, a, n)

    h = (b - a) / n

    sum_even = 0.0
    for j in range(1, n // 2):
        sum_even += f(a + 2 * j * h)

    sum_odd = 0.0
    for j in range(1, n // 2 + 1):
        sum_odd += f(a + (2 * j - 1) * h)

    return h / 3.0 * (f(a) + 2.0 * sum_even + 4.0 * sum_odd + f(b))
