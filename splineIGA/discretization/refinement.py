"""
Knot insertion (h-refinement) for B-spline and NURBS geometry.

Inserting a knot adds a basis function without changing the geometry.
The new control points are linear blends of the old ones:

    P_new = A @ P_old

where for a single insertion of xi_bar into span k:

    P_new_i = P_old_i                                   i <= k - p
    P_new_i = alpha_i P_old_i + (1 - alpha_i) P_old_{i-1}   k - p + 1 <= i <= k
    P_new_i = P_old_{i-1}                               i >= k + 1

    alpha_i = (xi_bar - xi_i) / (xi_{i+p} - xi_i)

Inserting with multiplicity r applies the single rule r times, the span
index growing by one after each insertion.

For NURBS the rule is applied to control points in homogeneous
coordinates (x*w, y*w, z*w, w), which makes the rational case linear.
All functions here act along axis 0 of the control-point array, so a
surface is refined one direction at a time by moving that direction to
axis 0.
"""

import logging
import numpy as np
from typing import Iterable, Sequence, Tuple

from ..core.errors import KnotInsertionError
from .knot_vector import KnotVector, compute_multiplicity, splice_knots

logger = logging.getLogger(__name__)


def knot_insertion_matrix(knots: Sequence[float], p: int, xi_bar: float,
                          k: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Knot insertion matrix for a single insertion of xi_bar into span k.

    Parameters:
        knots: Original knot vector
        p: Degree
        xi_bar: Knot value to insert
        k: Span index with knots[k] <= xi_bar < knots[k+1]

    Returns:
        Tuple of (new_knots, A) where A has shape (n_old + 1, n_old)
    """
    knots = np.asarray(knots, dtype=np.float64)
    n_old = len(knots) - p - 1
    n_new = n_old + 1

    A = np.zeros((n_new, n_old))
    for i in range(n_new):
        if i <= k - p:
            A[i, i] = 1.0
        elif i >= k + 1:
            A[i, i - 1] = 1.0
        else:
            denom = knots[i + p] - knots[i]
            alpha = (xi_bar - knots[i]) / denom if abs(denom) > 1e-14 else 0.0
            A[i, i - 1] = 1.0 - alpha
            A[i, i] = alpha

    return splice_knots(knots, xi_bar, k, 1), A


def validate_insertion(knots: Sequence[float], p: int, xi_bar: float,
                       k: int, s: int, r: int):
    """
    Check the preconditions of insert_knot_homogeneous.

    Raises:
        KnotInsertionError: on an inconsistent request
    """
    knots = np.asarray(knots, dtype=np.float64)
    n = len(knots) - p - 2
    if r < 1:
        raise KnotInsertionError(f"Insertion multiplicity must be >= 1, got r={r}")
    if s < 0:
        raise KnotInsertionError(f"Existing multiplicity must be >= 0, got s={s}")
    if s + r > p:
        raise KnotInsertionError(
            f"Final multiplicity s + r = {s + r} exceeds the degree p = {p}"
        )
    if not p <= k <= n:
        raise KnotInsertionError(f"Span index {k} outside [{p}, {n}]")
    if not knots[k] <= xi_bar < knots[k + 1]:
        raise KnotInsertionError(
            f"Knot {xi_bar} does not lie in span {k} = [{knots[k]}, {knots[k + 1]})"
        )
    actual = int(np.sum(np.abs(knots - xi_bar) < 1e-14))
    if actual != s:
        raise KnotInsertionError(
            f"Knot {xi_bar} has multiplicity {actual}, caller passed s={s}"
        )


def insert_knot_homogeneous(knots: Sequence[float], p: int, Pw: np.ndarray,
                            xi_bar: float, k: int, s: int,
                            r: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Insert xi_bar r times into a knot vector and refine the control points.

    Parameters:
        knots: Knot vector of length n + p + 2
        p: Degree
        Pw: Control points of shape (n + 1, ...), homogeneous for NURBS
        xi_bar: Knot value to insert
        k: Span index of xi_bar (knots[k] <= xi_bar < knots[k+1])
        s: Current multiplicity of xi_bar
        r: Number of insertions, s + r <= p

    Returns:
        Tuple of (new_knots, new_Pw) with new_Pw of shape (n + 1 + r, ...)
    """
    validate_insertion(knots, p, xi_bar, k, s, r)
    Pw = np.asarray(Pw, dtype=np.float64)
    if Pw.shape[0] != len(knots) - p - 1:
        raise KnotInsertionError(
            f"{Pw.shape[0]} control points do not match {len(knots)} knots of degree {p}"
        )

    logger.debug("Inserting knot %s (span %d, s=%d, r=%d)", xi_bar, k, s, r)

    new_knots = np.asarray(knots, dtype=np.float64)
    new_Pw = Pw
    for j in range(r):
        new_knots, A = knot_insertion_matrix(new_knots, p, xi_bar, k + j)
        new_Pw = np.tensordot(A, new_Pw, axes=(1, 0))

    return new_knots, new_Pw


def insert_knot_into_grid(knots: Sequence[float], p: int, Pw: np.ndarray,
                          xi_bar: float, k: int, s: int, r: int,
                          axis: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    insert_knot_homogeneous along one axis of a control-point grid.

    Every row (axis=1) or column (axis=0) of the grid is refined with
    the same knot vector, the other direction is left untouched.
    """
    moved = np.moveaxis(np.asarray(Pw, dtype=np.float64), axis, 0)
    new_knots, refined = insert_knot_homogeneous(knots, p, moved, xi_bar, k, s, r)
    return new_knots, np.moveaxis(refined, 0, axis)


def _plan_insertions(kv: KnotVector, values: Iterable[float]):
    """Yield (value, span, multiplicity) for each value that can still be inserted."""
    for value in sorted(values):
        s = compute_multiplicity(kv, value)
        if s >= kv.degree:
            logger.debug("Skipping knot %s already at multiplicity %d", value, s)
            continue
        yield value, kv.find_span(value), s


def refine_curve(curve, values: Iterable[float]):
    """
    Insert each value of `values` once into a B-spline or NURBS curve.

    Spans and multiplicities are computed automatically; values already
    present p times are skipped. The curve is modified in place and
    returned.
    """
    for value in sorted(values):
        for xi_bar, k, s in _plan_insertions(curve.knot_vector, [value]):
            curve.insert_knot(xi_bar, k, s, 1)
    return curve


def refine_surface(surface, xi_values: Iterable[float] = (),
                   eta_values: Iterable[float] = ()):
    """
    Insert knots into a B-spline or NURBS surface in both directions.

    The surface is modified in place and returned.
    """
    for value in sorted(xi_values):
        for xi_bar, k, s in _plan_insertions(surface.knot_vector_xi, [value]):
            surface.insert_knots_xi(xi_bar, k, s, 1)
    for value in sorted(eta_values):
        for eta_bar, k, s in _plan_insertions(surface.knot_vector_eta, [value]):
            surface.insert_knots_eta(eta_bar, k, s, 1)
    return surface
