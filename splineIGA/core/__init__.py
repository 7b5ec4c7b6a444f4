"""
Core data types: dense matrices and vectors, points, errors.

Provides:
- Matrix2, RowVector, ColVector: dense NumPy-backed matrix primitives
- Size, Range: small parameter types
- Point, HomPoint: affine and homogeneous points
- Exception hierarchy rooted at SplineError
"""

from .errors import (
    SplineError,
    DimensionMismatchError,
    ParameterOutOfDomainError,
    SingularMatrixError,
    KnotInsertionError,
    InvalidKnotVectorError,
    DegenerateWeightError,
)
from .range import Size, Range
from .matrix import Matrix2, RowVector, ColVector
from .point import Point, HomPoint, mat_from_points
from .approx import approx_equal, approx_equal_points, in_range
