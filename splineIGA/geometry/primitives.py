"""
Factory functions for common geometries.

This module provides factory functions for common B-spline and NURBS
geometries:
- Unit square and rectangles (B-spline surfaces)
- Circles (NURBS curves)
- Toroids (NURBS surfaces)
- A free-form sample curve, in B-spline and NURBS form

These are the building blocks used by the tests and the configuration
examples.
"""

import numpy as np
from typing import Tuple

from ..discretization.knot_vector import KnotVector, make_open_knot_vector
from .bspline import BSplineCurve, BSplineSurface
from .nurbs import NURBSCurve, NURBSSurface

# Full circle as 9 control points on the square circumscribing the unit circle
_CIRCLE_POINTS = np.array([
    [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [-1.0, 1.0], [-1.0, 0.0],
    [-1.0, -1.0], [0.0, -1.0], [1.0, -1.0], [1.0, 0.0],
])
_CIRCLE_KNOTS = np.array([0, 0, 0, 0.25, 0.25, 0.5, 0.5, 0.75, 0.75, 1, 1, 1], dtype=np.float64)
_CIRCLE_WEIGHTS = np.array([1.0 if i % 2 == 0 else 1.0 / np.sqrt(2.0) for i in range(9)])

_SAMPLE_POINTS = np.array([
    [0.0, 0.0], [1.0, 1.0], [2.0, 0.5], [3.0, 0.5], [0.5, 1.5], [1.5, 0.0],
])
_SAMPLE_KNOTS = np.array([0, 0, 0, 0.25, 0.5, 0.75, 1, 1, 1], dtype=np.float64)


def make_bspline_unit_square(p: int = 2, n_elem_xi: int = 4,
                             n_elem_eta: int = 4) -> BSplineSurface:
    """
    Create a B-spline surface representing the unit square [0,1]².

    Control points sit at the Greville abscissae, which makes the
    geometry map the identity: S(xi, eta) = (xi, eta, 0).

    Parameters:
        p: Polynomial degree in both directions
        n_elem_xi: Number of elements in xi direction
        n_elem_eta: Number of elements in eta direction

    Returns:
        BSplineSurface representing the unit square
    """
    kv_xi = make_open_knot_vector(n_elem_xi + p, p, domain=(0.0, 1.0))
    kv_eta = make_open_knot_vector(n_elem_eta + p, p, domain=(0.0, 1.0))

    greville_xi = kv_xi.greville_abscissae()
    greville_eta = kv_eta.greville_abscissae()

    control_points = np.zeros((len(greville_xi), len(greville_eta), 3))
    for i, gx in enumerate(greville_xi):
        for j, ge in enumerate(greville_eta):
            control_points[i, j, 0] = gx
            control_points[i, j, 1] = ge

    return BSplineSurface(control_points, kv_xi, kv_eta, p, p)


def make_bspline_rectangle(x_range: Tuple[float, float] = (0.0, 1.0),
                           y_range: Tuple[float, float] = (0.0, 1.0),
                           p: int = 2,
                           n_elem_xi: int = 4,
                           n_elem_eta: int = 4) -> BSplineSurface:
    """
    Create a B-spline surface representing a rectangle.

    Parameters:
        x_range: (x_min, x_max)
        y_range: (y_min, y_max)
        p: Polynomial degree
        n_elem_xi: Number of elements in xi direction
        n_elem_eta: Number of elements in eta direction

    Returns:
        BSplineSurface representing the rectangle
    """
    square = make_bspline_unit_square(p, n_elem_xi, n_elem_eta)
    control_points = square.control_points_array
    control_points[:, :, 0] = x_range[0] + (x_range[1] - x_range[0]) * control_points[:, :, 0]
    control_points[:, :, 1] = y_range[0] + (y_range[1] - y_range[0]) * control_points[:, :, 1]

    return BSplineSurface(control_points, square.knot_vector_xi, square.knot_vector_eta, p, p)


def make_nurbs_circle(radius: float = 1.0,
                      center: Tuple[float, float] = (0.0, 0.0)) -> NURBSCurve:
    """
    Full circle as a quadratic NURBS curve.

    Nine control points on the circumscribed square, corner weights
    sqrt(2)/2. C(0) = C(1) lies on the positive x-axis and the curve
    runs counterclockwise, one quadrant per quarter of [0, 1].

    Parameters:
        radius: Circle radius
        center: Center coordinates (x, y)

    Returns:
        NURBSCurve representing the circle
    """
    control_points = np.zeros((9, 3))
    control_points[:, :2] = np.asarray(center) + radius * _CIRCLE_POINTS

    return NURBSCurve(control_points, KnotVector(_CIRCLE_KNOTS, 2), _CIRCLE_WEIGHTS, 2)


def make_nurbs_toroid(major_radius: float = 5.0, minor_radius: float = 1.0,
                      knot_scale: float = 4.0) -> NURBSSurface:
    """
    Create a NURBS surface representing a torus around the z-axis.

    The surface is the tensor product of two circles: xi revolves around
    the z-axis, eta runs around the tube, starting from its bottom. Each
    weight is the product of the two circle weights.

    Parameters:
        major_radius: Distance from the z-axis to the tube center
        minor_radius: Tube radius
        knot_scale: Both knot vectors span [0, knot_scale]

    Returns:
        NURBSSurface of degree (2, 2) with a 9 x 9 control grid
    """
    # Tube cross-section in the (rho, z) plane, circle points rotated by -90 degrees
    rho = major_radius + minor_radius * _CIRCLE_POINTS[:, 1]
    z = -minor_radius * _CIRCLE_POINTS[:, 0]

    control_points = np.zeros((9, 9, 3))
    for i, (cx, cy) in enumerate(_CIRCLE_POINTS):
        control_points[i, :, 0] = rho * cx
        control_points[i, :, 1] = rho * cy
        control_points[i, :, 2] = z

    weights = np.outer(_CIRCLE_WEIGHTS, _CIRCLE_WEIGHTS)
    kv = KnotVector(_CIRCLE_KNOTS, 2).scaled(knot_scale)

    return NURBSSurface(control_points, kv, kv, weights, 2, 2)


def make_bspline_curve_sample() -> BSplineCurve:
    """Quadratic planar B-spline curve with 6 control points and 3 interior knots."""
    return BSplineCurve(_SAMPLE_POINTS, _SAMPLE_KNOTS, 2)


def make_nurbs_curve_sample() -> NURBSCurve:
    """make_bspline_curve_sample as a NURBS curve with unit weights."""
    return NURBSCurve(_SAMPLE_POINTS, _SAMPLE_KNOTS, np.ones(len(_SAMPLE_POINTS)), 2)
