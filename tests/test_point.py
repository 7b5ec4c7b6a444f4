"""
Unit tests for affine and homogeneous points.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_equal, assert_array_almost_equal

from splineIGA.core.approx import approx_equal, approx_equal_points, in_range
from splineIGA.core.errors import DegenerateWeightError, DimensionMismatchError
from splineIGA.core.matrix import ColVector, RowVector
from splineIGA.core.point import (
    HomPoint, Point, array_to_grid, grid_to_array, mat_from_points, points_to_array
)


class TestPoint:

    def test_defaults_to_planar(self):
        P = Point(1, 2)
        assert P.z == 0.0
        assert isinstance(P.x, float)

    def test_arithmetic(self):
        P = Point(1, 2, 3)
        Q = Point(0.5, -1, 2)

        assert P + Q == Point(1.5, 1, 5)
        assert P - Q == Point(0.5, 3, 1)
        assert P * 2 == Point(2, 4, 6)
        assert 2 * P == P * 2
        # Operands are immutable
        assert P == Point(1, 2, 3)

    def test_norm_and_distance(self):
        assert Point(3, 4).norm() == pytest.approx(5.0)
        assert Point(1, 1, 1).distance(Point(1, 1, 3)) == pytest.approx(2.0)

    def test_conversions(self):
        P = Point(1, 2, 3)
        assert_array_equal(P.to_array(), [1, 2, 3])
        assert P.to_row_vector() == RowVector([1, 2, 3])
        assert Point.from_vector(RowVector([1, 2, 3])) == P
        assert Point.from_vector(ColVector([1, 2])) == Point(1, 2)
        assert Point.from_vector(np.array([4.0, 5.0, 6.0])) == Point(4, 5, 6)
        assert tuple(P) == (1.0, 2.0, 3.0)

    def test_from_vector_wrong_length(self):
        with pytest.raises(DimensionMismatchError):
            Point.from_vector([1, 2, 3, 4])


class TestHomPoint:

    def test_round_trip(self):
        P = Point(1, 2, 3)
        Pw = HomPoint.from_point(P, 0.5)

        assert Pw == HomPoint(0.5, 1, 1.5, 0.5)
        assert_array_almost_equal(Pw.to_point().to_array(), P.to_array())

    def test_zero_weight(self):
        with pytest.raises(DegenerateWeightError):
            HomPoint(1, 1, 1, 0).to_point()

    def test_from_vector(self):
        assert HomPoint.from_vector(RowVector([2, 4, 6, 2])).to_point() == Point(1, 2, 3)
        with pytest.raises(DimensionMismatchError):
            HomPoint.from_vector([1, 2, 3])

    def test_linear_combination(self):
        """Blending homogeneous points is linear in (xw, yw, zw, w)."""
        A = Point(0, 0).to_homogeneous(1.0)
        B = Point(2, 0).to_homogeneous(3.0)
        mid = A * 0.5 + B * 0.5

        assert mid.w == pytest.approx(2.0)
        assert mid.to_point() == Point(1.5, 0)


class TestHelpers:

    def test_points_to_array(self):
        array = points_to_array([Point(1, 2), Point(3, 4, 5)])
        assert_array_equal(array, [[1, 2, 0], [3, 4, 5]])

    def test_grid_round_trip(self):
        grid = [[Point(0, 0), Point(0, 1)], [Point(1, 0), Point(1, 1)]]
        array = grid_to_array(grid)
        assert array.shape == (2, 2, 3)
        assert array_to_grid(array) == grid

    def test_ragged_grid(self):
        with pytest.raises(DimensionMismatchError):
            grid_to_array([[Point(0, 0)], [Point(1, 0), Point(1, 1)]])

    def test_mat_from_points(self):
        grid = [[Point(1, 2, 3), Point(4, 5, 6)]]
        assert mat_from_points(grid, "y").to_list() == [[2, 5]]
        with pytest.raises(ValueError):
            mat_from_points(grid, "q")

    def test_approx(self):
        assert approx_equal(1.0, 1.0 + 1e-7)
        assert not approx_equal(1.0, 1.1)
        assert approx_equal_points(Point(1, 2), Point(1, 2 + 1e-8))
        assert not approx_equal_points(Point(1, 2), Point(1, 2, 0.1))
        assert in_range(0.5, 0.0, 1.0)
        assert not in_range(1.5, 0.0, 1.0)
