"""
Geometry module: basis functions, Bézier, B-spline and NURBS curves and surfaces.
"""

from .base import ParametricGeometry, ParametricCurve, ParametricSurface
from .bernstein import FactorialCache, BernsteinBasis, bernstein
from .bspline import (
    BSplineBasis,
    BSplineCurve,
    BSplineSurface,
    eval_basis_1d,
    compute_all_nonvanishing_basis,
    compute_basis,
)
from .bezier import BezierCurve, BezierSurface
from .nurbs import NURBSCurve, NURBSSurface, compute_rational_basis
from .primitives import (
    make_bspline_unit_square,
    make_bspline_rectangle,
    make_nurbs_circle,
    make_nurbs_toroid,
    make_bspline_curve_sample,
    make_nurbs_curve_sample,
)
