"""
Unit tests for geometry sampling.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_almost_equal

from splineIGA.discretization.knot_vector import make_open_knot_vector
from splineIGA.discretization.refinement import refine_curve
from splineIGA.geometry.bezier import BezierCurve
from splineIGA.geometry.primitives import make_bspline_unit_square, make_nurbs_toroid
from splineIGA.postprocess.sampling import (
    max_deviation, sample_basis_functions, sample_curve, sample_surface, split_coords
)


class TestSampleCurve:

    def test_shapes_and_end_points(self, bspline_curve):
        params, points = sample_curve(bspline_curve, n_points=11)

        assert params.shape == (11,)
        assert points.shape == (11, 3)
        assert_array_almost_equal(points[0], [0.0, 0.0, 0.0])
        assert_array_almost_equal(points[-1], [1.5, 0.0, 0.0])

    def test_custom_domain(self, circle):
        params, points = sample_curve(circle, n_points=3, domain=(0.0, 0.5))

        assert_array_almost_equal(params, [0.0, 0.25, 0.5])
        assert_array_almost_equal(points[1], [0.0, 1.0, 0.0])

    def test_bezier(self):
        params, points = sample_curve(BezierCurve([(0, 0), (1, 2), (2, 0)]), n_points=5)
        assert_array_almost_equal(points[2], [1.0, 1.0, 0.0])


class TestSampleSurface:

    def test_unit_square_grid(self):
        XI, ETA, X, Y, Z = sample_surface(make_bspline_unit_square(), n_xi=6, n_eta=4)

        assert XI.shape == (6, 4)
        assert_array_almost_equal(X, XI)
        assert_array_almost_equal(Y, ETA)
        assert_array_almost_equal(Z, np.zeros((6, 4)))

    def test_toroid_domain(self):
        XI, ETA, X, Y, Z = sample_surface(make_nurbs_toroid(), n_xi=5, n_eta=5)

        assert XI[-1, 0] == 4.0
        assert ETA[0, -1] == 4.0
        rho = np.hypot(X, Y)
        assert_array_almost_equal((rho - 5.0) ** 2 + Z ** 2, np.ones((5, 5)))


class TestBasisSampling:

    def test_partition_of_unity(self):
        kv = make_open_knot_vector(n_basis=6, degree=3)
        params, values = sample_basis_functions(kv, n_points=50)

        assert values.shape == (50, 6)
        assert_array_almost_equal(values.sum(axis=1), np.ones(50))
        assert values[0, 0] == pytest.approx(1.0)
        assert values[-1, -1] == pytest.approx(1.0)


class TestHelpers:

    def test_split_coords(self):
        x, y, z = split_coords(np.array([[1, 2, 3], [4, 5, 6]]))
        assert list(x) == [1, 4] and list(y) == [2, 5] and list(z) == [3, 6]

        x, y, z = split_coords(np.array([[1, 2], [3, 4]]))
        assert list(z) == [0, 0]

    def test_max_deviation(self):
        a = np.zeros((3, 3))
        b = np.array([[0, 0, 0], [3, 4, 0], [0, 1, 0]], dtype=float)
        assert max_deviation(a, b) == pytest.approx(5.0)

        with pytest.raises(ValueError):
            max_deviation(a, np.zeros((2, 3)))

    def test_refined_curve_has_no_deviation(self, circle):
        _, before = sample_curve(circle, 64)
        refine_curve(circle, [0.1, 0.3, 0.9])
        _, after = sample_curve(circle, 64)
        assert max_deviation(before, after) < 1e-10
