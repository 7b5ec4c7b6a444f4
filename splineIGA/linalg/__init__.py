"""
Dense linear algebra: LU/LUP decomposition and triangular solvers.
"""

from .lu import LUResult, LUPResult, forward_sub, backward_sub, lu_decomp, lup_decomp
from .linsystem import lusolve, lupsolve, linsolve
