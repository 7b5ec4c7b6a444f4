"""
Input: JSON configuration and geometry setup.
"""

from .config import (
    SamplingSettings,
    load_config,
    geometry_from_config,
    sampling_from_config,
    setup_from_config,
)
