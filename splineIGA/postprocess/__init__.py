"""
Post-processing: sampling geometry into point arrays.
"""

from .sampling import (
    sample_curve,
    sample_surface,
    sample_basis_functions,
    split_coords,
    max_deviation,
)
