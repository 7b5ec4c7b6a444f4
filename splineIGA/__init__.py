"""
splineIGA - Spline geometry library for Isogeometric Analysis

Evaluates Bézier, B-spline and NURBS curves and surfaces, refines them
by knot insertion without changing their shape, and provides the dense
linear algebra used alongside.

Key modules:
- core: Matrix/vector primitives, points, exceptions
- discretization: Knot vectors, span search, knot insertion
- geometry: Bernstein/B-spline/NURBS basis functions, curves, surfaces
- linalg: LU/LUP decomposition and triangular solvers
- quadrature: Composite Simpson rule
- postprocess: Sampling geometry into point arrays
- io: JSON configuration

Quick start:
    from splineIGA.geometry import make_nurbs_circle
    from splineIGA.discretization import refine_curve

    circle = make_nurbs_circle(radius=2.0)
    point = circle.evaluate(0.125)

    # Refine without changing the geometry
    refine_curve(circle, [0.125, 0.375])
    assert circle.evaluate(0.125).distance(point) < 1e-10
"""

import logging

__version__ = "0.1.0"
__author__ = "Wataru Fukuda"

# Core imports for convenience
from .core import Matrix2, RowVector, ColVector, Point, HomPoint, SplineError
from .discretization.knot_vector import KnotVector, find_span
from .geometry import (
    BezierCurve,
    BezierSurface,
    BSplineCurve,
    BSplineSurface,
    NURBSCurve,
    NURBSSurface,
)
from .linalg import linsolve

logging.getLogger(__name__).addHandler(logging.NullHandler())
