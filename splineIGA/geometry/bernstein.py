"""
Bernstein polynomials.

The i-th Bernstein polynomial of degree n on [0, 1]:

    B_{i,n}(xi) = n! / (i! (n-i)!) * xi^i * (1 - xi)^(n-i)

They are the basis of Bézier curves and surfaces. Factorials come from a
FactorialCache owned by the evaluator; the cache only grows, computing
n! stores every k! for k <= n.
"""

import numpy as np
from typing import List, Optional


class FactorialCache:
    """
    Memoized factorials.

    Attributes:
        values: values[k] == k!, for every k computed so far
    """

    def __init__(self):
        self.values: List[int] = [1, 1]

    def __call__(self, n: int) -> int:
        return self.factorial(n)

    def __len__(self) -> int:
        return len(self.values)

    def factorial(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"Factorial of negative number {n}")
        while len(self.values) <= n:
            k = len(self.values)
            self.values.append(self.values[k - 1] * k)
        return self.values[n]

    def binomial(self, n: int, i: int) -> int:
        return self.factorial(n) // (self.factorial(i) * self.factorial(n - i))


def bernstein(i: int, n: int, xi: float, cache: FactorialCache) -> float:
    """
    Evaluate B_{i,n}(xi).

    Parameters:
        i: Index, 0 <= i <= n
        n: Degree
        xi: Parameter value, normally in [0, 1] (not enforced)
        cache: Factorial cache of the caller
    """
    return cache.binomial(n, i) * xi ** i * (1.0 - xi) ** (n - i)


class BernsteinBasis:
    """
    All Bernstein polynomials of one degree.

    Owns its factorial cache, so evaluating several bases never touches
    shared state.
    """

    def __init__(self, degree: int, cache: Optional[FactorialCache] = None):
        self.degree = degree
        self.cache = FactorialCache() if cache is None else cache

    def eval(self, xi: float) -> np.ndarray:
        """Array of shape (degree+1,) with B_{0,n}(xi) .. B_{n,n}(xi)."""
        n = self.degree
        return np.array([bernstein(i, n, xi, self.cache) for i in range(n + 1)])
