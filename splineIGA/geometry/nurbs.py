"""
NURBS (Non-Uniform Rational B-Spline) geometry representation.

NURBS extend B-splines by introducing weights for each control point,
enabling exact representation of conic sections (circles, ellipses, etc.).

A NURBS curve/surface point is computed as:

    C(xi) = sum_i (N_i(xi) * w_i * P_i) / sum_i (N_i(xi) * w_i)

where:
- N_i are B-spline basis functions
- w_i are weights (positive real numbers)
- P_i are control points

The rational basis functions R_i(xi) = N_i(xi) * w_i / sum_j N_j(xi) * w_j
form a partition of unity and are non-negative.

Evaluation and knot insertion lift the control points to homogeneous
coordinates Pw_i = (w_i x_i, w_i y_i, w_i z_i, w_i), where the rational
curve is an ordinary B-spline in 4D. The affine point is recovered by
dividing by the last coordinate.
"""

import numpy as np
from typing import Sequence

from ..core.errors import DegenerateWeightError, DimensionMismatchError
from ..core.matrix import Matrix2
from ..core.point import HomPoint, Point
from ..discretization.knot_vector import find_span
from ..discretization.refinement import insert_knot_homogeneous, insert_knot_into_grid
from .bspline import (BSplineCurve, BSplineSurface, KnotsLike, compute_all_nonvanishing_basis,
                      compute_basis, eval_basis_1d)


def compute_rational_basis(knots: Sequence[float], weights: Sequence[float],
                           i: int, p: int, xi: float) -> float:
    """
    Evaluate the rational basis function R_{i,p}(xi).

    Only the p+1 B-spline functions of the span of xi contribute to the
    denominator.

    Parameters:
        knots: Knot vector
        weights: One weight per basis function
        i: Index of the basis function
        p: Degree
        xi: Parameter value

    Returns:
        R_{i,p}(xi), 0 when N_{i,p} vanishes on the span of xi
    """
    weights = np.asarray(weights, dtype=np.float64)
    n = len(weights) - 1
    span = find_span(knots, xi, p, n)
    if i < span - p or i > span:
        return 0.0

    N = eval_basis_1d(knots, span, p, xi)
    denominator = np.dot(N, weights[span - p:span + 1])
    return float(N[p - (span - i)] * weights[i] / denominator)


def _check_weights(weights: np.ndarray, shape: tuple) -> np.ndarray:
    if weights.shape != shape:
        raise DimensionMismatchError(
            f"Weights shape {weights.shape} must match control points {shape}"
        )
    if np.any(weights <= 0):
        raise DegenerateWeightError("All weights must be positive")
    return weights


class NURBSCurve(BSplineCurve):
    """
    NURBS curve in 2D or 3D space.

    A NURBS curve C(xi) is defined by:
    - Control points P_0..P_n
    - Weights w_0..w_n > 0
    - A knot vector of n + p + 2 knots and the degree p
    """

    def __init__(self, control_points, knot_vector: KnotsLike,
                 weights: Sequence[float], p: int):
        """
        Initialize a NURBS curve.

        Parameters:
            control_points: Points (or 2/3-sequences) P_0..P_n
            knot_vector: Knot values or a KnotVector
            weights: Array of shape (n+1,)
            p: Degree
        """
        super().__init__(control_points, knot_vector, p)
        self._w = _check_weights(np.array(weights, dtype=np.float64).ravel(),
                                 (self._P.shape[0],))

    @property
    def weights(self) -> np.ndarray:
        return self._w.copy()

    @property
    def homogeneous_control_points(self) -> np.ndarray:
        """Control points as (w x, w y, w z, w), shape (n+1, 4)."""
        return np.hstack([self._P * self._w[:, None], self._w[:, None]])

    def evaluate(self, xi: float) -> Point:
        """
        Evaluate the curve in homogeneous coordinates.

        The basis row vector multiplies the (p+1) x 4 window of
        homogeneous control points, the result is projected back.
        """
        span = self.find_span(xi)
        N = compute_all_nonvanishing_basis(self._knots, span, self.p, xi)
        window = Matrix2(self.homogeneous_control_points).rect((span - self.p, 0), (span, 3))
        return HomPoint.from_vector(N.mult_mat(window)).to_point()

    def evaluate_sum(self, xi: float) -> Point:
        """Evaluate the curve as sum_i R_i(xi) P_i over all control points."""
        numerator = np.zeros(3)
        denominator = 0.0
        for i in range(self.n + 1):
            Nw = compute_basis(self._knots, i, self.p, xi) * self._w[i]
            numerator += Nw * self._P[i]
            denominator += Nw
        return Point.from_vector(numerator / denominator)

    def rational_basis(self, i: int, xi: float) -> float:
        return compute_rational_basis(self._knots, self._w, i, self.p, xi)

    def insert_knot(self, value: float, index: int, s: int, r: int) -> "NURBSCurve":
        """
        Insert a knot without changing the curve.

        The homogeneous control points are refined, then split back into
        affine points and weights.
        """
        self._knots, Pw = insert_knot_homogeneous(
            self._knots, self.p, self.homogeneous_control_points, value, index, s, r
        )
        self._w = Pw[:, 3].copy()
        self._P = Pw[:, :3] / self._w[:, None]
        return self


class NURBSSurface(BSplineSurface):
    """
    Tensor-product NURBS surface.

    Weights form an (n+1) x (m+1) grid matching the control points.
    """

    def __init__(self, control_points, knot_vector_xi: KnotsLike, knot_vector_eta: KnotsLike,
                 weights, p: int, q: int):
        super().__init__(control_points, knot_vector_xi, knot_vector_eta, p, q)
        w = weights.data() if isinstance(weights, Matrix2) else weights
        self._w = _check_weights(np.array(w, dtype=np.float64), self._P.shape[:2])

    @property
    def weights(self) -> np.ndarray:
        return self._w.copy()

    @property
    def homogeneous_control_points(self) -> np.ndarray:
        """Control grid as (w x, w y, w z, w), shape (n+1, m+1, 4)."""
        w = self._w[:, :, None]
        return np.concatenate([self._P * w, w], axis=2)

    def evaluate(self, xi: float, eta: float) -> Point:
        """Contract x, y, z and w separately, then divide by w."""
        return HomPoint.from_vector(self._contract(self.homogeneous_control_points,
                                                   xi, eta)).to_point()

    def evaluate_sum(self, xi: float, eta: float) -> Point:
        n, m = self._P.shape[0] - 1, self._P.shape[1] - 1
        Nxi = np.array([compute_basis(self._Xi, i, self.p, xi) for i in range(n + 1)])
        Neta = np.array([compute_basis(self._Eta, j, self.q, eta) for j in range(m + 1)])
        Nw = np.outer(Nxi, Neta) * self._w
        point = np.einsum("ij,ijc->c", Nw, self._P) / np.sum(Nw)
        return Point.from_vector(point)

    def _refine(self, knots, degree, value, index, s, r, axis):
        new_knots, Pw = insert_knot_into_grid(
            knots, degree, self.homogeneous_control_points, value, index, s, r, axis=axis
        )
        self._w = Pw[:, :, 3].copy()
        self._P = Pw[:, :, :3] / self._w[:, :, None]
        return new_knots

    def insert_knots_xi(self, value: float, index: int, s: int, r: int) -> "NURBSSurface":
        self._Xi = self._refine(self._Xi, self.p, value, index, s, r, axis=0)
        return self

    def insert_knots_eta(self, value: float, index: int, s: int, r: int) -> "NURBSSurface":
        self._Eta = self._refine(self._Eta, self.q, value, index, s, r, axis=1)
        return self
