"""
Dense linear system solvers built on the LU/LUP factors.
"""

from ..core.matrix import ColVector, Matrix2
from .lu import VectorLike, _as_column, backward_sub, forward_sub, lu_decomp, lup_decomp


def lusolve(L: Matrix2, U: Matrix2, b: VectorLike) -> ColVector:
    """Solve L U x = b by forward then backward substitution."""
    y = forward_sub(L, b)
    return backward_sub(U, y)


def lupsolve(L: Matrix2, U: Matrix2, P: Matrix2, b: VectorLike) -> ColVector:
    """Solve A x = b given P A = L U."""
    Pb = P.mult_mat(ColVector(_as_column(b)))
    return lusolve(L, U, Pb)


def linsolve(A: Matrix2, b: VectorLike, pivoting: bool = False) -> ColVector:
    """
    Solve A x = b.

    Parameters:
        A: Square system matrix
        b: Right-hand side
        pivoting: Use LUP instead of plain LU; needed when a leading
            principal minor of A vanishes

    Returns:
        Solution x as a ColVector
    """
    if pivoting:
        L, U, P = lup_decomp(A)
        return lupsolve(L, U, P, b)
    L, U = lu_decomp(A)
    return lusolve(L, U, b)
