"""
Knot vector utilities.

Knots are non-decreasing parameter values; together with the degree they
fix the domain of a curve and where each basis function is non-zero.

Mathematical background:
- Open (clamped) knot vectors have p+1 repeated knots at each end
- With n+1 basis functions (control points) of degree p the vector
  holds m = n + p + 2 knots
- Knot spans are the half-open intervals [xi_i, xi_{i+1}); the span
  index of a parameter selects the p+1 basis functions N_{i-p}..N_i
  that do not vanish there
"""

import numpy as np
from typing import List, Sequence, Tuple
from dataclasses import dataclass

from ..core.errors import InvalidKnotVectorError, ParameterOutOfDomainError


def find_span(knots: Sequence[float], xi: float, p: int, n: int) -> int:
    """
    Find the knot span index containing parameter value xi.

    Binary search for i such that xi in [knots[i], knots[i+1]). The right
    end of the domain is closed: xi == knots[n+1] returns n.

    Parameters:
        knots: Knot vector (clamped, degree p)
        xi: Parameter value
        p: Polynomial degree
        n: Index of the last basis function (number of control points - 1)

    Returns:
        Span index i with p <= i <= n

    Raises:
        ParameterOutOfDomainError: if xi lies outside [knots[p], knots[n+1]]
    """
    if xi < knots[p] or xi > knots[n + 1]:
        raise ParameterOutOfDomainError(
            f"Parameter {xi} outside domain [{knots[p]}, {knots[n + 1]}]"
        )
    if xi == knots[n + 1]:
        return n

    low = p
    high = n + 1
    mid = (low + high) // 2

    while xi < knots[mid] or xi >= knots[mid + 1]:
        if xi < knots[mid]:
            high = mid
        else:
            low = mid
        mid = (low + high) // 2

    return mid


def splice_knots(knots: Sequence[float], xi: float, index: int, times: int) -> np.ndarray:
    """
    Insert xi `times` times right after position `index`.

    The knots up to index are kept, then xi is repeated, then the
    remaining knots follow.
    """
    knots = np.asarray(knots, dtype=np.float64)
    return np.concatenate([knots[:index + 1], np.full(times, float(xi)), knots[index + 1:]])


@dataclass
class KnotVector:
    """
    Knot values of one parametric direction together with the degree.

    Attributes:
        knots: Non-decreasing knot values, stored as float64
        degree: Polynomial degree p

    Derived:
        n_basis: len(knots) - p - 1
        n: Index of the last basis function (n_basis - 1)
        elements: List of (start, end) parametric coordinates of non-empty spans
    """
    knots: np.ndarray
    degree: int

    def __post_init__(self):
        self.knots = np.asarray(self.knots, dtype=np.float64)
        self._validate()

    def _validate(self):
        if self.degree < 0:
            raise InvalidKnotVectorError(f"Degree must be non-negative, got {self.degree}.")
        if len(self.knots) < 2 * (self.degree + 1):
            raise InvalidKnotVectorError(
                f"Degree {self.degree} needs at least {2 * (self.degree + 1)} knots, "
                f"got {len(self.knots)}."
            )
        if not np.all(np.diff(self.knots) >= 0):
            raise InvalidKnotVectorError("Knot vector must be non-decreasing.")

    def __len__(self) -> int:
        return len(self.knots)

    def __getitem__(self, i):
        return self.knots[i]

    @property
    def n_basis(self) -> int:
        return len(self.knots) - self.degree - 1

    @property
    def n(self) -> int:
        """Index of the last basis function."""
        return self.n_basis - 1

    @property
    def unique_knots(self) -> np.ndarray:
        """Distinct knot values."""
        return np.unique(self.knots)

    @property
    def elements(self) -> List[Tuple[float, float]]:
        """Non-empty knot spans as (xi_start, xi_end) tuples."""
        u = self.unique_knots
        return [(float(a), float(b)) for a, b in zip(u[:-1], u[1:])]

    @property
    def n_elements(self) -> int:
        return len(self.elements)

    @property
    def domain(self) -> Tuple[float, float]:
        """Parametric domain (knots[p], knots[n+1])."""
        return (float(self.knots[self.degree]), float(self.knots[self.n_basis]))

    def find_span(self, xi: float) -> int:
        """Span index of xi, see find_span()."""
        return find_span(self.knots, xi, self.degree, self.n)

    def multiplicity(self, xi: float, tol: float = 1e-14) -> int:
        return compute_multiplicity(self, xi, tol)

    def active_basis_indices(self, span: int) -> np.ndarray:
        """Indices span-p..span of the basis functions active on a span."""
        return np.arange(span - self.degree, span + 1)

    def greville_abscissae(self) -> np.ndarray:
        """
        Parameter values associated with each basis function.

        Entry i averages the p knots following knots[i]; a control
        polygon placed at these values reproduces the identity map.
        Degree 0 falls back to span midpoints.
        """
        p = self.degree
        n = self.n_basis
        if p == 0:
            return 0.5 * (self.knots[:n] + self.knots[1:n + 1])
        window = np.lib.stride_tricks.sliding_window_view(self.knots[1:n + p], p)
        return window.mean(axis=1)

    def scaled(self, factor: float) -> "KnotVector":
        """Copy with every knot multiplied by factor."""
        return KnotVector(self.knots * factor, self.degree)


def make_open_knot_vector(n_basis: int, degree: int,
                          domain: Tuple[float, float] = (0.0, 1.0)) -> KnotVector:
    """
    Clamped knot vector with equally spaced interior knots.

    Both end values are repeated degree+1 times, so the first and last
    basis functions equal 1 at the domain ends.

    Parameters:
        n_basis: Number of basis functions (control points per direction)
        degree: Polynomial degree p
        domain: (start, end) of the parameter interval

    Returns:
        KnotVector of n_basis + degree + 1 knots
    """
    p = degree
    n_interior = n_basis - p - 1
    if n_interior < 0:
        raise InvalidKnotVectorError(
            f"{n_basis} basis functions are not enough for degree {degree}"
        )

    a, b = domain
    interior = np.linspace(a, b, n_interior + 2)[1:-1]
    return KnotVector(np.concatenate([np.full(p + 1, a), interior, np.full(p + 1, b)]), degree)


def insert_knot(kv: KnotVector, xi: float, times: int = 1) -> KnotVector:
    """
    Knot vector with xi inserted `times` times at its span.

    Only the knots change here; control points are updated by
    discretization.refinement.
    """
    return KnotVector(splice_knots(kv.knots, xi, kv.find_span(xi), times), kv.degree)


def compute_multiplicity(kv: KnotVector, xi: float, tol: float = 1e-14) -> int:
    """Count the knots of kv within tol of xi."""
    return int(np.sum(np.abs(kv.knots - xi) < tol))
