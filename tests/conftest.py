"""
Pytest configuration and shared fixtures for splineIGA tests.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add the parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from splineIGA.geometry.primitives import (
    make_bspline_curve_sample,
    make_nurbs_circle,
    make_nurbs_curve_sample,
)


@pytest.fixture
def tolerance():
    """Tolerance for comparing the two evaluator forms and refined geometry."""
    return 1e-6


@pytest.fixture
def strict_tolerance():
    """Tolerance for exact-arithmetic results."""
    return 1e-12


@pytest.fixture
def params():
    """Parameter values 0, 0.05, ..., 0.95."""
    return np.arange(0.0, 1.0, 0.05)


@pytest.fixture
def bspline_curve():
    return make_bspline_curve_sample()


@pytest.fixture
def nurbs_curve():
    return make_nurbs_curve_sample()


@pytest.fixture
def circle():
    return make_nurbs_circle()


@pytest.fixture
def surface_data():
    """Control grid (4 x 3), knot vectors and degrees of a small B-spline surface."""
    P = np.array([
        [[0.0, 0.0, 0.0], [0.0, 1.0, 0.5], [0.0, 2.0, 0.0]],
        [[1.0, 0.0, 1.0], [1.0, 1.0, 2.0], [1.0, 2.0, 1.0]],
        [[2.0, 0.0, 0.5], [2.0, 1.0, 1.5], [2.0, 2.0, 0.0]],
        [[3.0, 0.0, 0.0], [3.0, 1.0, 0.0], [3.0, 2.0, 0.5]],
    ])
    Xi = [0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0]
    Eta = [0.0, 0.0, 1.0, 2.0, 2.0]
    return P, Xi, Eta, 2, 1
