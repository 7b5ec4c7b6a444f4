"""
Discretization module.

Provides:
- KnotVector: Knot vector representation
- find_span: Knot span search
- Knot insertion (h-refinement) for curves and surfaces
"""

from .knot_vector import (
    KnotVector,
    find_span,
    splice_knots,
    make_open_knot_vector,
    insert_knot,
    compute_multiplicity,
)
from .refinement import (
    knot_insertion_matrix,
    insert_knot_homogeneous,
    insert_knot_into_grid,
    refine_curve,
    refine_surface,
)
