"""
Common interface of the parametric geometries.

Sampling and configuration code only talk to curves and surfaces
through this interface.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Tuple


class ParametricGeometry(ABC):
    """
    Abstract base class for Bézier, B-spline and NURBS curves/surfaces.

    Key responsibilities:
    - Own the control points (and weights, knot vectors where relevant)
    - Evaluate a Point from parametric coordinates
    """

    @property
    @abstractmethod
    def n_dim_parametric(self) -> int:
        """Number of parametric dimensions (1=curve, 2=surface)."""
        pass

    @property
    @abstractmethod
    def domain(self):
        """(start, end) for curves, ((xi0, xi1), (eta0, eta1)) for surfaces."""
        pass

    @property
    @abstractmethod
    def control_points_array(self) -> np.ndarray:
        """Control points as an (n, 3) array for curves, (n, m, 3) for surfaces."""
        pass

    @abstractmethod
    def evaluate(self, *params: float):
        """Evaluate the geometry at a parameter value (or pair of values)."""
        pass


class ParametricCurve(ParametricGeometry):

    @property
    def n_dim_parametric(self) -> int:
        return 1

    @property
    def n_control_points(self) -> int:
        return self.control_points_array.shape[0]

    def evaluate_many(self, params) -> np.ndarray:
        """Evaluate at every value of params, returns an (N, 3) array."""
        return np.array([self.evaluate(xi).to_array() for xi in params]).reshape(-1, 3)


class ParametricSurface(ParametricGeometry):

    @property
    def n_dim_parametric(self) -> int:
        return 2

    @property
    def n_control_points_per_dir(self) -> Tuple[int, int]:
        return self.control_points_array.shape[:2]

    @property
    def n_control_points(self) -> int:
        n_xi, n_eta = self.n_control_points_per_dir
        return n_xi * n_eta
