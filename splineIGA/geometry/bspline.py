"""
B-spline basis function evaluation and B-spline curves/surfaces.

A knot vector and a degree p fix a family of piecewise polynomials,
given by the Cox-de Boor recursion:

    N_{i,0}(xi) = 1 if xi_i <= xi < xi_{i+1}, else 0

    N_{i,p}(xi) = (xi - xi_i)/(xi_{i+p} - xi_i) * N_{i,p-1}(xi)
                + (xi_{i+p+1} - xi)/(xi_{i+p+1} - xi_{i+1}) * N_{i+1,p-1}(xi)

N_{i,p} is non-negative and vanishes outside [xi_i, xi_{i+p+1}); at any
xi in the domain the functions sum to one.

Two evaluators are provided for curves and surfaces:
- evaluate: span search + the p+1 non-vanishing basis functions
  contracted with the matching window of control points
- evaluate_sum: summation over every control point with single basis
  values, kept as a cross-check of the first
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple, Union

from ..core.errors import DimensionMismatchError
from ..core.matrix import Matrix2, RowVector
from ..core.point import (Point, array_to_grid, array_to_points, as_point, grid_to_array,
                          points_to_array)
from ..discretization.knot_vector import KnotVector, find_span
from ..discretization.refinement import insert_knot_homogeneous, insert_knot_into_grid
from .base import ParametricCurve, ParametricSurface

PointLike = Union[Point, Sequence[float]]
KnotsLike = Union[KnotVector, Sequence[float], np.ndarray]


def eval_basis_1d(knots: Sequence[float], span: int, p: int, xi: float) -> np.ndarray:
    """
    Evaluate all non-zero B-spline basis functions at a parameter value.

    Uses the Cox-de Boor triangular table with the left/right auxiliary
    arrays, evaluating only the p+1 functions that do not vanish on the
    span.

    Parameters:
        knots: Knot vector
        span: Span index of xi (see find_span)
        p: Degree
        xi: Parameter value

    Returns:
        Array of shape (p+1,) containing N_{span-p,p}(xi) to N_{span,p}(xi)
    """
    N = np.zeros(p + 1)
    N[0] = 1.0

    left = np.zeros(p + 1)
    right = np.zeros(p + 1)

    for j in range(1, p + 1):
        left[j] = xi - knots[span + 1 - j]
        right[j] = knots[span + j] - xi

        saved = 0.0
        for r in range(j):
            temp = N[r] / (right[r + 1] + left[j - r])
            N[r] = saved + right[r + 1] * temp
            saved = left[j - r] * temp
        N[j] = saved

    return N


def compute_all_nonvanishing_basis(knots: Sequence[float], span: int, p: int,
                                   xi: float) -> RowVector:
    """eval_basis_1d returned as a 1 x (p+1) RowVector."""
    return RowVector(eval_basis_1d(knots, span, p, xi))


def compute_basis(knots: Sequence[float], i: int, p: int, xi: float) -> float:
    """
    Evaluate the single basis function N_{i,p}(xi).

    Builds the triangular table of the degree-0..p functions that
    contribute to N_{i,p}. The first basis function at the first knot
    and the last basis function at the last knot are 1.

    Parameters:
        knots: Knot vector
        i: Index of the basis function
        p: Degree
        xi: Parameter value

    Returns:
        N_{i,p}(xi), 0 outside [knots[i], knots[i+p+1])
    """
    m = len(knots) - 1

    if (i == 0 and xi == knots[0]) or (i == m - p - 1 and xi == knots[m]):
        return 1.0

    if xi < knots[i] or xi >= knots[i + p + 1]:
        return 0.0

    # Degree 0 functions
    N = np.zeros(p + 1)
    for j in range(p + 1):
        if knots[i + j] <= xi < knots[i + j + 1]:
            N[j] = 1.0

    for k in range(1, p + 1):
        if N[0] == 0.0:
            saved = 0.0
        else:
            saved = ((xi - knots[i]) * N[0]) / (knots[i + k] - knots[i])
        for j in range(p - k + 1):
            xi_left = knots[i + j + 1]
            xi_right = knots[i + j + k + 1]
            if N[j + 1] == 0.0:
                N[j] = saved
                saved = 0.0
            else:
                temp = N[j + 1] / (xi_right - xi_left)
                N[j] = saved + (xi_right - xi) * temp
                saved = (xi - xi_left) * temp

    return float(N[0])


class BSplineBasis:
    """
    Basis functions of one KnotVector.

    Attributes:
        knot_vector: The underlying KnotVector
    """

    def __init__(self, knot_vector: KnotVector):
        self.knot_vector = knot_vector

    @property
    def degree(self) -> int:
        return self.knot_vector.degree

    @property
    def n_basis(self) -> int:
        return self.knot_vector.n_basis

    def eval(self, xi: float, span: Optional[int] = None) -> np.ndarray:
        """Evaluate the p+1 non-zero basis functions at xi."""
        if span is None:
            span = self.knot_vector.find_span(xi)
        return eval_basis_1d(self.knot_vector.knots, span, self.degree, xi)

    def eval_all(self, xi: float) -> np.ndarray:
        """Evaluate every basis function at xi, shape (n_basis,)."""
        span = self.knot_vector.find_span(xi)
        values = np.zeros(self.n_basis)
        values[span - self.degree:span + 1] = self.eval(xi, span)
        return values


def _as_knots(knot_vector: KnotsLike) -> np.ndarray:
    if isinstance(knot_vector, KnotVector):
        return knot_vector.knots.copy()
    return np.asarray(knot_vector, dtype=np.float64).copy()


def _check_knot_count(knots: np.ndarray, n_points: int, p: int, direction: str = ""):
    expected = n_points + p + 1
    if len(knots) != expected:
        raise DimensionMismatchError(
            f"Knot vector{direction} has {len(knots)} knots, expected {expected} "
            f"for {n_points} control points of degree {p}"
        )


class BSplineCurve(ParametricCurve):
    """
    B-spline curve in 2D or 3D space.

    A B-spline curve C(xi) is defined by:
    - Control points P_0..P_n
    - A knot vector of n + p + 2 knots
    - The degree p
    """

    def __init__(self, control_points: Sequence[PointLike], knot_vector: KnotsLike, p: int):
        """
        Initialize a B-spline curve.

        Parameters:
            control_points: Points (or 2/3-sequences) P_0..P_n
            knot_vector: Knot values or a KnotVector
            p: Degree
        """
        self.p = p
        self._P = _points_array(control_points)
        self._knots = _as_knots(knot_vector)
        KnotVector(self._knots, p)
        _check_knot_count(self._knots, self._P.shape[0], p)

    @property
    def knots(self) -> np.ndarray:
        return self._knots.copy()

    @property
    def knot_vector(self) -> KnotVector:
        return KnotVector(self._knots, self.p)

    @property
    def degree(self) -> int:
        return self.p

    @property
    def n(self) -> int:
        """Index of the last control point."""
        return self._P.shape[0] - 1

    @property
    def control_points(self) -> List[Point]:
        return array_to_points(self._P)

    @property
    def control_points_array(self) -> np.ndarray:
        return self._P.copy()

    @property
    def domain(self) -> Tuple[float, float]:
        return self.knot_vector.domain

    def find_span(self, xi: float) -> int:
        return find_span(self._knots, xi, self.p, self.n)

    def evaluate(self, xi: float) -> Point:
        """
        Evaluate the curve in matrix form.

        The 1 x (p+1) basis row vector multiplies the (p+1) x 3 window
        of control points P_{span-p}..P_{span}.
        """
        span = self.find_span(xi)
        N = compute_all_nonvanishing_basis(self._knots, span, self.p, xi)
        window = Matrix2(self._P).rect((span - self.p, 0), (span, 2))
        return Point.from_vector(N.mult_mat(window))

    def evaluate_sum(self, xi: float) -> Point:
        """Evaluate the curve as sum_i N_i(xi) P_i over all control points."""
        x = y = z = 0.0
        for i in range(self.n + 1):
            N = compute_basis(self._knots, i, self.p, xi)
            x += N * self._P[i, 0]
            y += N * self._P[i, 1]
            z += N * self._P[i, 2]
        return Point(x, y, z)

    def insert_knot(self, value: float, index: int, s: int, r: int) -> "BSplineCurve":
        """
        Insert a knot without changing the curve.

        Parameters:
            value: Knot value to insert
            index: Span index of value
            s: Current multiplicity of value
            r: Number of times to insert it (s + r <= p)

        Returns:
            self, with knots and control points replaced
        """
        self._knots, self._P = insert_knot_homogeneous(
            self._knots, self.p, self._P, value, index, s, r
        )
        return self


class BSplineSurface(ParametricSurface):
    """
    Tensor-product B-spline surface.

    Control points form an (n+1) x (m+1) grid: the first index follows
    xi (knot vector Xi, degree p), the second follows eta (knot vector
    Eta, degree q).
    """

    def __init__(self, control_points: Sequence[Sequence[PointLike]],
                 knot_vector_xi: KnotsLike, knot_vector_eta: KnotsLike,
                 p: int, q: int):
        self.p = p
        self.q = q
        self._P = _grid_array(control_points)
        self._Xi = _as_knots(knot_vector_xi)
        self._Eta = _as_knots(knot_vector_eta)
        KnotVector(self._Xi, p)
        KnotVector(self._Eta, q)
        _check_knot_count(self._Xi, self._P.shape[0], p, " Xi")
        _check_knot_count(self._Eta, self._P.shape[1], q, " Eta")

    @property
    def Xi(self) -> np.ndarray:
        return self._Xi.copy()

    @property
    def Eta(self) -> np.ndarray:
        return self._Eta.copy()

    @property
    def knot_vector_xi(self) -> KnotVector:
        return KnotVector(self._Xi, self.p)

    @property
    def knot_vector_eta(self) -> KnotVector:
        return KnotVector(self._Eta, self.q)

    @property
    def knot_vectors(self) -> Tuple[KnotVector, KnotVector]:
        return (self.knot_vector_xi, self.knot_vector_eta)

    @property
    def degrees(self) -> Tuple[int, int]:
        return (self.p, self.q)

    @property
    def control_points(self) -> List[List[Point]]:
        return array_to_grid(self._P)

    @property
    def control_points_array(self) -> np.ndarray:
        return self._P.copy()

    @property
    def domain(self):
        return (self.knot_vector_xi.domain, self.knot_vector_eta.domain)

    def find_spans(self, xi: float, eta: float) -> Tuple[int, int]:
        n, m = self._P.shape[0] - 1, self._P.shape[1] - 1
        return find_span(self._Xi, xi, self.p, n), find_span(self._Eta, eta, self.q, m)

    def _contract(self, grid: np.ndarray, xi: float, eta: float) -> np.ndarray:
        """
        N_xi · P_window · N_eta^T for every coordinate of a grid.

        Parameters:
            grid: (n+1, m+1, d) array
        """
        xi_span, eta_span = self.find_spans(xi, eta)
        Nxi = compute_all_nonvanishing_basis(self._Xi, xi_span, self.p, xi)
        Neta = compute_all_nonvanishing_basis(self._Eta, eta_span, self.q, eta)
        top_left = (xi_span - self.p, eta_span - self.q)
        bottom_right = (xi_span, eta_span)

        result = np.zeros(grid.shape[2])
        for c in range(grid.shape[2]):
            window = Matrix2(grid[:, :, c]).rect(top_left, bottom_right)
            result[c] = Nxi.mult_mat(window).mult_mat(Neta.transposed()).value(0, 0)
        return result

    def evaluate(self, xi: float, eta: float) -> Point:
        """Evaluate the surface in matrix form."""
        return Point.from_vector(self._contract(self._P, xi, eta))

    def evaluate_sum(self, xi: float, eta: float) -> Point:
        """Evaluate the surface by summation over the whole control grid."""
        n, m = self._P.shape[0] - 1, self._P.shape[1] - 1
        point = np.zeros(3)
        for i in range(n + 1):
            Nxi = compute_basis(self._Xi, i, self.p, xi)
            if Nxi == 0.0:
                continue
            for j in range(m + 1):
                point += Nxi * compute_basis(self._Eta, j, self.q, eta) * self._P[i, j]
        return Point.from_vector(point)

    def insert_knots_xi(self, value: float, index: int, s: int, r: int) -> "BSplineSurface":
        """Insert a knot into Xi, refining every column of the grid."""
        self._Xi, self._P = insert_knot_into_grid(
            self._Xi, self.p, self._P, value, index, s, r, axis=0
        )
        return self

    def insert_knots_eta(self, value: float, index: int, s: int, r: int) -> "BSplineSurface":
        """Insert a knot into Eta, refining every row of the grid."""
        self._Eta, self._P = insert_knot_into_grid(
            self._Eta, self.q, self._P, value, index, s, r, axis=1
        )
        return self


def _points_array(control_points) -> np.ndarray:
    if isinstance(control_points, np.ndarray):
        array = np.array(control_points, dtype=np.float64)
        if array.ndim != 2 or array.shape[1] not in (2, 3):
            raise DimensionMismatchError(
                f"Control points array must have shape (n, 2) or (n, 3), got {array.shape}"
            )
        if array.shape[1] == 2:
            array = np.hstack([array, np.zeros((array.shape[0], 1))])
        return array
    return points_to_array([as_point(P) for P in control_points])


def _grid_array(control_points) -> np.ndarray:
    if isinstance(control_points, np.ndarray):
        array = np.array(control_points, dtype=np.float64)
        if array.ndim != 3 or array.shape[2] not in (2, 3):
            raise DimensionMismatchError(
                f"Control grid array must have shape (n, m, 2) or (n, m, 3), got {array.shape}"
            )
        if array.shape[2] == 2:
            array = np.concatenate([array, np.zeros(array.shape[:2] + (1,))], axis=2)
        return array
    return grid_to_array([[as_point(P) for P in row] for row in control_points])
