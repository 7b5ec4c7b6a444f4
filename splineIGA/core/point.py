"""
Points in affine and homogeneous coordinates.

Point is an immutable (x, y, z) triple, z = 0 for planar use. HomPoint
is the homogeneous lift (x*w, y*w, z*w, w) used by NURBS evaluation and
knot insertion so that rational geometry can be handled with the same
linear operations as B-splines.

Both are plain value types. Conversions to the matrix primitives are
explicit (to_row_vector / from_vector) rather than through inheritance.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Union

from .errors import DegenerateWeightError, DimensionMismatchError
from .matrix import Matrix2, RowVector


@dataclass(frozen=True)
class Point:
    """
    Point in 2D or 3D space.

    Attributes:
        x, y: Planar coordinates
        z: Out-of-plane coordinate, 0 for 2D points
    """
    x: float
    y: float
    z: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def to_row_vector(self) -> RowVector:
        return RowVector([self.x, self.y, self.z])

    def to_homogeneous(self, w: float) -> "HomPoint":
        return HomPoint(self.x * w, self.y * w, self.z * w, w)

    def norm(self) -> float:
        return float(np.linalg.norm(self.to_array()))

    def distance(self, other: "Point") -> float:
        return (self - other).norm()

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    @staticmethod
    def from_vector(v: Union[Matrix2, Sequence[float], np.ndarray]) -> "Point":
        """
        Build a point from a RowVector/ColVector or a sequence of 2 or 3 numbers.
        """
        values = _flatten(v)
        if len(values) not in (2, 3):
            raise DimensionMismatchError(
                f"A point needs 2 or 3 coordinates, got {len(values)}"
            )
        return Point(*values)

    @staticmethod
    def origin() -> "Point":
        return Point(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class HomPoint:
    """Point in homogeneous coordinates (x*w, y*w, z*w, w)."""
    x: float
    y: float
    z: float
    w: float

    def __post_init__(self):
        for name in ("x", "y", "z", "w"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @staticmethod
    def from_point(point: Point, w: float) -> "HomPoint":
        return point.to_homogeneous(w)

    @staticmethod
    def from_vector(v: Union[Matrix2, Sequence[float], np.ndarray]) -> "HomPoint":
        values = _flatten(v)
        if len(values) != 4:
            raise DimensionMismatchError(
                f"A homogeneous point needs 4 coordinates, got {len(values)}"
            )
        return HomPoint(*values)

    def to_point(self) -> Point:
        """Perspective division by w."""
        if self.w == 0.0:
            raise DegenerateWeightError("Cannot project a homogeneous point with w = 0")
        return Point(self.x / self.w, self.y / self.w, self.z / self.w)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w])

    def to_row_vector(self) -> RowVector:
        return RowVector(self.to_array())

    def __add__(self, other: "HomPoint") -> "HomPoint":
        return HomPoint(self.x + other.x, self.y + other.y,
                        self.z + other.z, self.w + other.w)

    def __mul__(self, scalar: float) -> "HomPoint":
        return HomPoint(self.x * scalar, self.y * scalar,
                        self.z * scalar, self.w * scalar)

    __rmul__ = __mul__


def _flatten(v) -> list:
    if isinstance(v, Matrix2):
        return v.data().ravel().tolist()
    return np.asarray(v, dtype=np.float64).ravel().tolist()


def points_to_array(points: Sequence[Point]) -> np.ndarray:
    """Stack points into an (n, 3) array."""
    return np.array([p.to_array() for p in points]).reshape(-1, 3)


def grid_to_array(grid: Sequence[Sequence[Point]]) -> np.ndarray:
    """Stack a grid of points into an (n, m, 3) array."""
    rows = [points_to_array(row) for row in grid]
    if len({r.shape[0] for r in rows}) > 1:
        raise DimensionMismatchError("All rows of a control-point grid must have the same length")
    return np.stack(rows)


def array_to_points(array: np.ndarray) -> list:
    """Inverse of points_to_array."""
    return [Point(*row) for row in np.asarray(array).reshape(-1, 3)]


def array_to_grid(array: np.ndarray) -> list:
    """Inverse of grid_to_array."""
    return [array_to_points(row) for row in np.asarray(array)]


def as_point(value: Union[Point, Sequence[float]]) -> Point:
    """Accept a Point or a 2/3-sequence of coordinates."""
    if isinstance(value, Point):
        return value
    return Point.from_vector(value)


def mat_from_points(grid: Sequence[Sequence[Union[Point, HomPoint]]], coord: str) -> Matrix2:
    """
    Build a matrix of one coordinate ('x', 'y', 'z' or 'w') from a grid of points.

    Entry (i, j) of the result is getattr(grid[i][j], coord).
    """
    if coord not in ("x", "y", "z", "w"):
        raise ValueError(f"Unknown coordinate: {coord}")
    return Matrix2([[getattr(p, coord) for p in row] for row in grid])
