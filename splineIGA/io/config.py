"""
Configuration and geometry setup.

Loads a geometry definition and sampling settings from a JSON file.

Example JSON format:
    {
      "geometry": {
        "type": "nurbs_curve",
        "control_points": [[1, 0], [1, 1], [0, 1]],
        "knot_vector": [0, 0, 0, 1, 1, 1],
        "weights": [1, 0.7071067811865476, 1],
        "degree": 2
      },
      "sampling": {
        "n_xi": 100,
        "tolerance": 1e-6
      }
    }

Surfaces use "knot_vector_xi", "knot_vector_eta" and "degrees": [p, q];
their control points (and weights) are nested lists of rows. Bézier
geometry needs only "control_points". The primitives "nurbs_circle",
"nurbs_toroid" and "bspline_unit_square" take the keyword arguments of
the matching factory function instead of control data.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from ..geometry.bezier import BezierCurve, BezierSurface
from ..geometry.bspline import BSplineCurve, BSplineSurface
from ..geometry.nurbs import NURBSCurve, NURBSSurface
from ..geometry.primitives import make_bspline_unit_square, make_nurbs_circle, make_nurbs_toroid

logger = logging.getLogger(__name__)


@dataclass
class SamplingSettings:
    """
    Sampling resolution and comparison tolerance.

    Attributes:
        n_xi: Number of samples along xi (curves use only this one)
        n_eta: Number of samples along eta
        tolerance: Tolerance used when comparing evaluated geometry
    """
    n_xi: int = 50
    n_eta: int = 50
    tolerance: float = 1e-6

    def __post_init__(self):
        if self.n_xi < 2 or self.n_eta < 2:
            raise ValueError(f"Need at least 2 samples per direction, got ({self.n_xi}, {self.n_eta})")
        if self.tolerance <= 0:
            raise ValueError(f"Tolerance must be positive, got {self.tolerance}")


def load_config(filename: str) -> Dict[str, Any]:
    """Load a configuration dictionary from a JSON file."""
    with open(filename, "r", encoding="utf-8") as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {filename} must be a JSON object")
    logger.debug("Loaded configuration from %s (sections: %s)", filename, sorted(config))
    return config


def _require(block: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in block:
        raise ValueError(f"Geometry of type '{kind}' requires the key '{key}'")
    return block[key]


def _degrees(block: Dict[str, Any], kind: str) -> Tuple[int, int]:
    degrees = _require(block, "degrees", kind)
    if len(degrees) != 2:
        raise ValueError(f"'degrees' must hold two values, got {degrees}")
    return int(degrees[0]), int(degrees[1])


def _bezier_curve(block, kind):
    return BezierCurve(_require(block, "control_points", kind))


def _bezier_surface(block, kind):
    return BezierSurface(_require(block, "control_points", kind))


def _bspline_curve(block, kind):
    return BSplineCurve(_require(block, "control_points", kind),
                        _require(block, "knot_vector", kind),
                        int(_require(block, "degree", kind)))


def _nurbs_curve(block, kind):
    return NURBSCurve(_require(block, "control_points", kind),
                      _require(block, "knot_vector", kind),
                      _require(block, "weights", kind),
                      int(_require(block, "degree", kind)))


def _bspline_surface(block, kind):
    p, q = _degrees(block, kind)
    return BSplineSurface(_require(block, "control_points", kind),
                          _require(block, "knot_vector_xi", kind),
                          _require(block, "knot_vector_eta", kind),
                          p, q)


def _nurbs_surface(block, kind):
    p, q = _degrees(block, kind)
    return NURBSSurface(_require(block, "control_points", kind),
                        _require(block, "knot_vector_xi", kind),
                        _require(block, "knot_vector_eta", kind),
                        _require(block, "weights", kind),
                        p, q)


def _primitive(factory: Callable, *keys: str) -> Callable:
    def build(block, kind):
        unknown = set(block) - set(keys) - {"type"}
        if unknown:
            raise ValueError(f"Unknown keys for '{kind}': {sorted(unknown)}")
        return factory(**{k: block[k] for k in keys if k in block})
    return build


_BUILDERS: Dict[str, Callable] = {
    "bezier_curve": _bezier_curve,
    "bspline_curve": _bspline_curve,
    "nurbs_curve": _nurbs_curve,
    "bezier_surface": _bezier_surface,
    "bspline_surface": _bspline_surface,
    "nurbs_surface": _nurbs_surface,
    "nurbs_circle": _primitive(make_nurbs_circle, "radius", "center"),
    "nurbs_toroid": _primitive(make_nurbs_toroid, "major_radius", "minor_radius", "knot_scale"),
    "bspline_unit_square": _primitive(make_bspline_unit_square, "p", "n_elem_xi", "n_elem_eta"),
}


def geometry_from_config(config: Dict[str, Any]):
    """
    Build a curve or surface from the "geometry" block of a configuration.

    Parameters:
        config: Configuration dictionary (see module docstring)

    Returns:
        The constructed geometry object
    """
    if "geometry" not in config:
        raise ValueError("Configuration has no 'geometry' block")
    block = config["geometry"]
    kind = block.get("type")
    if kind not in _BUILDERS:
        raise ValueError(
            f"Unknown geometry type '{kind}', expected one of {sorted(_BUILDERS)}"
        )

    geometry = _BUILDERS[kind](block, kind)
    logger.debug("Built %s with %d control points", type(geometry).__name__,
                 geometry.n_control_points)
    return geometry


def sampling_from_config(config: Dict[str, Any]) -> SamplingSettings:
    """Read the optional "sampling" block, falling back to the defaults."""
    block = config.get("sampling", {})
    unknown = set(block) - {"n_xi", "n_eta", "tolerance"}
    if unknown:
        raise ValueError(f"Unknown sampling keys: {sorted(unknown)}")
    return SamplingSettings(**block)


def setup_from_config(filename: str):
    """
    Load a configuration file and build its geometry and sampling settings.

    Returns:
        (geometry, SamplingSettings)
    """
    config = load_config(filename)
    return geometry_from_config(config), sampling_from_config(config)
