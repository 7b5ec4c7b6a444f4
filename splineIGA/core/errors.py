"""
Exception hierarchy for splineIGA.

All library errors derive from SplineError. Each concrete error also
derives from a built-in exception: ValueError for bad input,
ArithmeticError for numerical breakdown.
"""


class SplineError(Exception):
    """Base class for all splineIGA errors."""


class DimensionMismatchError(SplineError, ValueError):
    """Raised when matrix shapes or control-point counts are incompatible."""


class ParameterOutOfDomainError(SplineError, ValueError):
    """Raised when a parameter value lies outside the knot-vector domain."""


class SingularMatrixError(SplineError, ArithmeticError):
    """Raised on a zero pivot or a zero diagonal entry."""


class KnotInsertionError(SplineError, ValueError):
    """Raised when a knot insertion request is inconsistent with the knot vector."""


class InvalidKnotVectorError(SplineError, ValueError):
    """Raised for knot vectors that are too short or decreasing."""


class DegenerateWeightError(SplineError, ValueError):
    """Raised for non-positive NURBS weights or a zero homogeneous weight."""
