"""
Dense LU and LUP decomposition with triangular substitution.

The factorization follows the block (Schur complement) scheme. Writing

    A = | a11  a12 |     L = |  1    0  |     U = | a11  a12 |
        | a21  A22 |         | l21  L22 |         |  0   U22 |

gives l21 = a21 / a11 and L22 U22 = A22 - l21 a12, the Schur complement
of a11. The same step is applied to the Schur complement until it is
1 x 1. The loop below peels one row/column per step.

LUP additionally swaps the row with the largest absolute entry of the
first column to the top before each step, so that P A = L U.
"""

import logging
import numpy as np
from typing import NamedTuple, Sequence, Union

from ..core.errors import DimensionMismatchError, SingularMatrixError
from ..core.matrix import ColVector, Matrix2

logger = logging.getLogger(__name__)

VectorLike = Union[Matrix2, Sequence[float], np.ndarray]


class LUResult(NamedTuple):
    """Factors of A = L U; lower has a unit diagonal."""
    lower: Matrix2
    upper: Matrix2


class LUPResult(NamedTuple):
    """Factors of P A = L U."""
    lower: Matrix2
    upper: Matrix2
    permutation: Matrix2


def _as_column(b: VectorLike) -> np.ndarray:
    if isinstance(b, Matrix2):
        return b.data().ravel()
    return np.asarray(b, dtype=np.float64).ravel()


def _check_system(M: Matrix2, b: np.ndarray):
    if not M.is_square():
        raise DimensionMismatchError(f"Triangular solve needs a square matrix, got {M.size()}")
    if len(b) != M.rows():
        raise DimensionMismatchError(
            f"Right-hand side of length {len(b)} does not match matrix of size {M.size()}"
        )


def forward_sub(L: Matrix2, b: VectorLike) -> ColVector:
    """
    Solve L x = b for a lower triangular L.

    Parameters:
        L: Lower triangular square matrix
        b: Right-hand side, ColVector or sequence

    Returns:
        Solution x as a ColVector

    Raises:
        SingularMatrixError: if a diagonal entry of L is zero
    """
    b = _as_column(b)
    _check_system(L, b)
    n = L.rows()

    x = ColVector.zero(n)
    for i in range(n):
        bi = b[i]
        for j in range(i):
            bi -= L.value(i, j) * x.value(j)
        diag = L.value(i, i)
        if diag == 0.0:
            raise SingularMatrixError(f"Zero diagonal entry at row {i} in forward substitution")
        x.set_value(i, bi / diag)
    return x


def backward_sub(U: Matrix2, b: VectorLike) -> ColVector:
    """
    Solve U x = b for an upper triangular U.

    Raises:
        SingularMatrixError: if a diagonal entry of U is zero
    """
    b = _as_column(b)
    _check_system(U, b)
    n = U.rows()

    x = ColVector.zero(n)
    for i in range(n - 1, -1, -1):
        bi = b[i]
        for j in range(i + 1, n):
            bi -= U.value(i, j) * x.value(j)
        diag = U.value(i, i)
        if diag == 0.0:
            raise SingularMatrixError(f"Zero diagonal entry at row {i} in backward substitution")
        x.set_value(i, bi / diag)
    return x


def _check_square(A: Matrix2):
    if not A.is_square():
        raise DimensionMismatchError(f"LU decomposition needs a square matrix, got {A.size()}")


def _schur_step(S: np.ndarray, k: int, lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """
    Eliminate the first row/column of the trailing block S.

    Writes row k of U and column k of L, returns the Schur complement.
    """
    a11 = S[0, 0]
    upper[k, k:] = S[0, :]
    if S.shape[0] == 1:
        return S[1:, 1:]
    if a11 == 0.0:
        raise SingularMatrixError(f"Zero pivot at step {k}")

    l21 = S[1:, 0] / a11
    lower[k + 1:, k] = l21
    return S[1:, 1:] - np.outer(l21, S[0, 1:])


def lu_decomp(A: Matrix2) -> LUResult:
    """
    LU decomposition without pivoting.

    Parameters:
        A: Square matrix whose leading principal minors are non-zero

    Returns:
        LUResult(lower, upper) with A = lower @ upper

    Raises:
        DimensionMismatchError: if A is not square
        SingularMatrixError: if a pivot vanishes before the last step
    """
    _check_square(A)
    n = A.rows()
    lower = np.eye(n)
    upper = np.zeros((n, n))

    S = A.data()
    for k in range(n):
        S = _schur_step(S, k, lower, upper)

    return LUResult(Matrix2(lower), Matrix2(upper))


def lup_decomp(A: Matrix2) -> LUPResult:
    """
    LU decomposition with partial pivoting.

    Before each elimination step the row of the trailing block with the
    largest absolute first-column entry is swapped to the top. The swap
    is carried over to the permutation and to the columns of L already
    computed.

    Returns:
        LUPResult(lower, upper, permutation) with
        permutation @ A = lower @ upper

    Raises:
        DimensionMismatchError: if A is not square
        SingularMatrixError: if a whole trailing column is zero
    """
    _check_square(A)
    n = A.rows()
    lower = np.eye(n)
    upper = np.zeros((n, n))
    perm = np.arange(n)

    S = A.data()
    for k in range(n):
        pivot = int(np.argmax(np.abs(S[:, 0])))
        if pivot != 0:
            logger.debug("LUP step %d: swapping rows %d and %d", k, k, k + pivot)
            S[[0, pivot]] = S[[pivot, 0]]
            perm[[k, k + pivot]] = perm[[k + pivot, k]]
            lower[[k, k + pivot], :k] = lower[[k + pivot, k], :k]
        S = _schur_step(S, k, lower, upper)

    return LUPResult(Matrix2(lower), Matrix2(upper), Matrix2(np.eye(n)[perm]))
