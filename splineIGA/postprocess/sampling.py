"""
Geometry sampling for visualization and post-processing.

This module evaluates curves, surfaces and basis functions on uniform
parameter grids and returns plain NumPy arrays. Plotting code only
consumes these arrays; nothing here depends on a plotting library.

Key functions:
- sample_curve: Points along a curve
- sample_surface: Coordinate grids of a surface
- sample_basis_functions: Values of every basis function of a knot vector
- split_coords: (N, 3) array to x, y, z arrays
- max_deviation: Largest pointwise distance between two samplings
"""

import numpy as np
from typing import Optional, Tuple

from ..discretization.knot_vector import KnotVector
from ..geometry.base import ParametricCurve, ParametricSurface
from ..geometry.bspline import BSplineBasis


def sample_curve(curve: ParametricCurve,
                 n_points: int = 100,
                 domain: Optional[Tuple[float, float]] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample a curve at uniformly spaced parameter values.

    Parameters:
        curve: Bézier, B-spline or NURBS curve
        n_points: Number of samples, end points included
        domain: Parameter interval, defaults to the curve domain

    Returns:
        (params, points) where:
        - params: Parameter values, shape (n_points,)
        - points: Evaluated points, shape (n_points, 3)
    """
    a, b = curve.domain if domain is None else domain
    params = np.linspace(a, b, n_points)
    return params, curve.evaluate_many(params)


def sample_surface(surface: ParametricSurface,
                   n_xi: int = 50,
                   n_eta: int = 50) -> Tuple[np.ndarray, ...]:
    """
    Sample a surface on a uniform grid in parametric space.

    Parameters:
        surface: Bézier, B-spline or NURBS surface
        n_xi: Number of sample points in xi direction
        n_eta: Number of sample points in eta direction

    Returns:
        (XI, ETA, X, Y, Z), each of shape (n_xi, n_eta)
    """
    domain_xi, domain_eta = surface.domain

    xi_vals = np.linspace(domain_xi[0], domain_xi[1], n_xi)
    eta_vals = np.linspace(domain_eta[0], domain_eta[1], n_eta)
    XI, ETA = np.meshgrid(xi_vals, eta_vals, indexing="ij")

    X = np.zeros((n_xi, n_eta))
    Y = np.zeros((n_xi, n_eta))
    Z = np.zeros((n_xi, n_eta))

    for i, xi in enumerate(xi_vals):
        for j, eta in enumerate(eta_vals):
            X[i, j], Y[i, j], Z[i, j] = surface.evaluate(xi, eta)

    return XI, ETA, X, Y, Z


def sample_basis_functions(knot_vector: KnotVector,
                           n_points: int = 200) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate every B-spline basis function of a knot vector.

    Returns:
        (params, values) with values of shape (n_points, n_basis)
    """
    basis = BSplineBasis(knot_vector)
    a, b = knot_vector.domain
    params = np.linspace(a, b, n_points)
    values = np.array([basis.eval_all(xi) for xi in params])
    return params, values


def split_coords(points: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split an (N, 2) or (N, 3) array into x, y, z arrays (z = 0 for 2D)."""
    points = np.atleast_2d(points)
    z = points[:, 2] if points.shape[1] > 2 else np.zeros(points.shape[0])
    return points[:, 0], points[:, 1], z


def max_deviation(a: np.ndarray, b: np.ndarray) -> float:
    """
    Largest Euclidean distance between matching points of two samplings.

    Both arrays must have the same shape, with coordinates on the last
    axis.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Cannot compare samplings of shapes {a.shape} and {b.shape}")
    return float(np.max(np.linalg.norm(a - b, axis=-1)))
