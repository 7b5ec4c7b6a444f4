"""
Bézier curves and surfaces.

    C(xi)      = sum_i B_{i,n}(xi) P_i
    S(xi, eta) = sum_i sum_j B_{i,n}(xi) B_{j,m}(eta) P_{ij}

Evaluation is a direct summation over all control points; Bernstein
values are recomputed on every call.
"""

import numpy as np
from typing import List, Sequence, Tuple, Union

from ..core.errors import DimensionMismatchError
from ..core.point import Point, as_point, grid_to_array, points_to_array
from .base import ParametricCurve, ParametricSurface
from .bernstein import FactorialCache, bernstein

PointLike = Union[Point, Sequence[float]]


class BezierCurve(ParametricCurve):
    """
    Bézier curve of degree len(control_points) - 1.

    Attributes:
        control_points: List of Point
    """

    def __init__(self, control_points: Sequence[PointLike]):
        if len(control_points) == 0:
            raise DimensionMismatchError("A Bézier curve needs at least one control point")
        self.control_points: List[Point] = [as_point(P) for P in control_points]
        self._cache = FactorialCache()

    @property
    def degree(self) -> int:
        return len(self.control_points) - 1

    @property
    def domain(self) -> Tuple[float, float]:
        return (0.0, 1.0)

    @property
    def control_points_array(self) -> np.ndarray:
        return points_to_array(self.control_points)

    def evaluate(self, xi: float) -> Point:
        n = self.degree
        x = y = z = 0.0
        for i, P in enumerate(self.control_points):
            B = bernstein(i, n, xi, self._cache)
            x += B * P.x
            y += B * P.y
            z += B * P.z
        return Point(x, y, z)


class BezierSurface(ParametricSurface):
    """
    Tensor-product Bézier surface.

    Attributes:
        control_points: Grid (list of rows) of Point; the row index
            follows xi, the column index follows eta
    """

    def __init__(self, control_points: Sequence[Sequence[PointLike]]):
        if len(control_points) == 0 or len(control_points[0]) == 0:
            raise DimensionMismatchError("A Bézier surface needs a non-empty control grid")
        self.control_points: List[List[Point]] = [[as_point(P) for P in row]
                                                  for row in control_points]
        if len({len(row) for row in self.control_points}) > 1:
            raise DimensionMismatchError("All rows of the control grid must have the same length")
        self._cache = FactorialCache()

    @property
    def degrees(self) -> Tuple[int, int]:
        return (len(self.control_points) - 1, len(self.control_points[0]) - 1)

    @property
    def domain(self):
        return ((0.0, 1.0), (0.0, 1.0))

    @property
    def control_points_array(self) -> np.ndarray:
        return grid_to_array(self.control_points)

    def evaluate(self, xi: float, eta: float) -> Point:
        n, m = self.degrees
        Bxi = [bernstein(i, n, xi, self._cache) for i in range(n + 1)]
        Beta = [bernstein(j, m, eta, self._cache) for j in range(m + 1)]

        x = y = z = 0.0
        for i, row in enumerate(self.control_points):
            for j, P in enumerate(row):
                B = Bxi[i] * Beta[j]
                x += B * P.x
                y += B * P.y
                z += B * P.z
        return Point(x, y, z)
