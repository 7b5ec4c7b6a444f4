"""
Dense matrix and vector primitives.

Matrix2 is a small dense, rectangular, mutable matrix of real numbers
backed by a NumPy array. RowVector (1 x n) and ColVector (n x 1) are
specializations used by the basis-function engine and the solvers.

Naming convention for mutation:
- Verbs mutate in place and return self: add, sub, mult, transpose,
  round, assign_row, assign_col, set_value
- Past participles and operators return new objects: transposed,
  rounded, mult_mat, +, -, *, @

RowVector and ColVector cannot change shape in place: their transpose()
raises TypeError, and transposed() returns the other vector type.

Index access through value()/set_value() is bounds-checked; negative
indices are rejected instead of wrapping around.
"""

import numpy as np
from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import DimensionMismatchError
from .range import Range, Size


class Matrix2:
    """
    Dense 2D matrix.

    Construct from a 2D sequence of numbers, or from an int n to get the
    n x n identity matrix.

    Invariant: every row has the same length.
    """

    def __init__(self, value: Union[int, Sequence[Sequence[float]], np.ndarray]):
        if isinstance(value, (int, np.integer)):
            self._data = np.eye(int(value), dtype=np.float64)
            return

        if isinstance(value, np.ndarray):
            data = np.array(value, dtype=np.float64)
        else:
            rows = [list(r) for r in value]
            lengths = {len(r) for r in rows}
            if len(lengths) > 1:
                raise DimensionMismatchError(
                    f"All rows must have the same length, got lengths {sorted(lengths)}"
                )
            data = np.array(rows, dtype=np.float64)

        if data.ndim != 2:
            raise DimensionMismatchError(
                f"Matrix data must be two-dimensional, got {data.ndim} dimension(s)"
            )
        self._data = data

    @classmethod
    def _wrap(cls, data: np.ndarray) -> "Matrix2":
        """Build an instance of cls around an existing array without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    # ------------------------------------------------------------------
    # Shape and access
    # ------------------------------------------------------------------

    def rows(self) -> int:
        return self._data.shape[0]

    def cols(self) -> int:
        return self._data.shape[1]

    def size(self) -> Size:
        return Size(self.rows(), self.cols())

    def data(self) -> np.ndarray:
        """Copy of the underlying (rows, cols) array."""
        return self._data.copy()

    def to_list(self) -> list:
        return self._data.tolist()

    def _check_index(self, row: int, col: int):
        if not (0 <= row < self.rows() and 0 <= col < self.cols()):
            raise IndexError(
                f"Index ({row}, {col}) out of range for matrix of size {self.size()}"
            )

    def value(self, row: int, col: int) -> float:
        self._check_index(row, col)
        return float(self._data[row, col])

    def set_value(self, row: int, col: int, val: float) -> "Matrix2":
        self._check_index(row, col)
        self._data[row, col] = val
        return self

    def row(self, i: int) -> "RowVector":
        """Copy of the i-th row as a RowVector."""
        self._check_index(i, 0)
        return RowVector._wrap(self._data[i:i + 1, :].copy())

    def col(self, j: int) -> "ColVector":
        """Copy of the j-th column as a ColVector."""
        self._check_index(0, j)
        return ColVector._wrap(self._data[:, j:j + 1].copy())

    def rect(self, top_left: Tuple[int, int], bottom_right: Tuple[int, int]) -> "Matrix2":
        """
        Extract the sub-block between two corners, bounds included.

        Parameters:
            top_left: (row, col) of the first element
            bottom_right: (row, col) of the last element

        Returns:
            New Matrix2 of size (r1 - r0 + 1) x (c1 - c0 + 1)
        """
        r0, c0 = top_left
        r1, c1 = bottom_right
        self._check_index(r0, c0)
        self._check_index(r1, c1)
        if r1 < r0 or c1 < c0:
            raise IndexError(f"Empty rectangle {top_left} -> {bottom_right}")
        return Matrix2._wrap(self._data[r0:r1 + 1, c0:c1 + 1].copy())

    def mid(self, row_range: Range, col_range: Range) -> "Matrix2":
        """Extract rows row_range.a..row_range.b and cols col_range.a..col_range.b."""
        return self.rect((row_range.a, col_range.a), (row_range.b, col_range.b))

    # ------------------------------------------------------------------
    # In-place operations
    # ------------------------------------------------------------------

    def _check_same_size(self, m: "Matrix2", op: str):
        if self.size() != m.size():
            raise DimensionMismatchError(
                f"Cannot {op} matrices of different sizes: {self.size()} and {m.size()}"
            )

    def add(self, m: "Matrix2") -> "Matrix2":
        """Add m to this matrix in place."""
        self._check_same_size(m, "add")
        self._data += m._data
        return self

    def sub(self, m: "Matrix2") -> "Matrix2":
        """Subtract m from this matrix in place."""
        self._check_same_size(m, "subtract")
        self._data -= m._data
        return self

    def mult(self, scalar: float) -> "Matrix2":
        """Multiply this matrix by a scalar in place."""
        self._data *= scalar
        return self

    def transpose(self) -> "Matrix2":
        """Transpose this matrix in place."""
        self._data = self._data.T.copy()
        return self

    def round(self, decimals: int) -> "Matrix2":
        """Round all entries in place."""
        self._data = np.round(self._data, decimals)
        return self

    def assign_row(self, i: int, v: "Matrix2") -> "Matrix2":
        self._check_index(i, 0)
        values = np.asarray(v._data).ravel()
        if values.size != self.cols():
            raise DimensionMismatchError(
                f"Row of length {values.size} does not fit {self.cols()} columns"
            )
        self._data[i, :] = values
        return self

    def assign_col(self, j: int, v: "Matrix2") -> "Matrix2":
        self._check_index(0, j)
        values = np.asarray(v._data).ravel()
        if values.size != self.rows():
            raise DimensionMismatchError(
                f"Column of length {values.size} does not fit {self.rows()} rows"
            )
        self._data[:, j] = values
        return self

    # ------------------------------------------------------------------
    # Functional operations
    # ------------------------------------------------------------------

    def mult_mat(self, m: "Matrix2") -> "Matrix2":
        """
        Matrix product self @ m.

        Requires self.cols() == m.rows(); the result has size
        self.rows() x m.cols().
        """
        if self.cols() != m.rows():
            raise DimensionMismatchError(
                f"Invalid mat sizes: {self.size()} · {m.size()}"
            )
        return Matrix2._wrap(self._data @ m._data)

    def transposed(self) -> "Matrix2":
        return Matrix2._wrap(self._data.T.copy())

    def rounded(self, decimals: int) -> "Matrix2":
        return self.clone().round(decimals)

    def clone(self) -> "Matrix2":
        """Deep copy, preserving the vector subclass."""
        return type(self)._wrap(self._data.copy())

    copy = clone

    def equals(self, m: "Matrix2") -> bool:
        """Exact element-wise equality (no tolerance)."""
        if self._data.shape != m._data.shape:
            return False
        return bool(np.array_equal(self._data, m._data))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix2):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __add__(self, other: "Matrix2") -> "Matrix2":
        return Matrix2._wrap(self._data.copy()).add(other)

    def __sub__(self, other: "Matrix2") -> "Matrix2":
        return Matrix2._wrap(self._data.copy()).sub(other)

    def __mul__(self, scalar: float) -> "Matrix2":
        return Matrix2._wrap(self._data * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Matrix2":
        return Matrix2._wrap(-self._data)

    def __matmul__(self, other: "Matrix2") -> "Matrix2":
        return self.mult_mat(other)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_square(self) -> bool:
        return self.rows() == self.cols()

    def is_row(self) -> bool:
        return self.rows() == 1

    def is_col(self) -> bool:
        return self.cols() == 1

    def is_lower_triangular(self) -> bool:
        return self.is_square() and not np.any(np.triu(self._data, k=1))

    def is_upper_triangular(self) -> bool:
        return self.is_square() and not np.any(np.tril(self._data, k=-1))

    def max_col(self, j: int) -> float:
        """Largest entry of column j."""
        self._check_index(0, j)
        return float(np.max(self._data[:, j]))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    @staticmethod
    def identity(size: int) -> "Matrix2":
        return Matrix2._wrap(np.eye(size, dtype=np.float64))

    @staticmethod
    def uniform(rows: int, cols: int, value: float) -> "Matrix2":
        return Matrix2._wrap(np.full((rows, cols), value, dtype=np.float64))

    @staticmethod
    def zero(rows: int, cols: int) -> "Matrix2":
        return Matrix2.uniform(rows, cols, 0.0)

    @staticmethod
    def zero_square(size: int) -> "Matrix2":
        return Matrix2.zero(size, size)

    @staticmethod
    def one(rows: int, cols: int) -> "Matrix2":
        return Matrix2.uniform(rows, cols, 1.0)

    @staticmethod
    def added(m1: "Matrix2", m2: "Matrix2") -> "Matrix2":
        """Sum of two matrices as a new matrix."""
        return m1 + m2

    @staticmethod
    def multiplied(m: "Matrix2", scalar: float) -> "Matrix2":
        return m * scalar

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data.tolist()})"

    def __str__(self) -> str:
        return np.array2string(self._data)


class RowVector(Matrix2):
    """
    Matrix with a single row.

    Single-index access value(j) / set_value(j, v) is supported next to
    the two-index form inherited from Matrix2. transpose() raises
    TypeError; transposed() returns a ColVector.
    """

    def __init__(self, values: Iterable[float]):
        data = np.asarray(list(values) if not isinstance(values, np.ndarray) else values,
                          dtype=np.float64)
        super().__init__(data.reshape(1, -1))

    def length(self) -> int:
        return self.cols()

    def __len__(self) -> int:
        return self.cols()

    def value(self, j: int, col: Optional[int] = None) -> float:
        if col is None:
            return super().value(0, j)
        return super().value(j, col)

    def set_value(self, *args) -> "RowVector":
        if len(args) == 2:
            return super().set_value(0, args[0], args[1])
        return super().set_value(*args)

    def to_array(self) -> np.ndarray:
        return self._data[0].copy()

    def norm(self) -> float:
        """Euclidean norm."""
        return float(np.linalg.norm(self._data[0]))

    def range(self, a: Union[int, Range], b: Optional[int] = None) -> "RowVector":
        """Entries a..b, both included. Accepts two ints or a Range."""
        if isinstance(a, Range):
            a, b = a.a, a.b
        self._check_index(0, a)
        self._check_index(0, b)
        return RowVector._wrap(self._data[:, a:b + 1].copy())

    def left(self, i: int) -> "RowVector":
        """Entries 0..i."""
        return self.range(0, i)

    def right(self, i: int) -> "RowVector":
        """Entries i..length-1."""
        return self.range(i, self.length() - 1)

    def transpose(self) -> "RowVector":
        raise TypeError("A RowVector cannot be transposed in place, use transposed()")

    def transposed(self) -> "ColVector":
        return ColVector._wrap(self._data.T.copy())

    @staticmethod
    def zero(length: int) -> "RowVector":
        return RowVector(np.zeros(length))

    @staticmethod
    def one(length: int) -> "RowVector":
        return RowVector(np.ones(length))

    @staticmethod
    def evenly_spaced(a: float, b: float, count: int) -> "RowVector":
        """count values from a to b, both included."""
        return RowVector(np.linspace(a, b, count))


class ColVector(Matrix2):
    """
    Matrix with a single column.

    transpose() raises TypeError; transposed() returns a RowVector.
    """

    def __init__(self, values: Iterable[float]):
        data = np.asarray(list(values) if not isinstance(values, np.ndarray) else values,
                          dtype=np.float64)
        super().__init__(data.reshape(-1, 1))

    def length(self) -> int:
        return self.rows()

    def __len__(self) -> int:
        return self.rows()

    def value(self, i: int, col: Optional[int] = None) -> float:
        return super().value(i, 0 if col is None else col)

    def set_value(self, *args) -> "ColVector":
        if len(args) == 2:
            return super().set_value(args[0], 0, args[1])
        return super().set_value(*args)

    def to_array(self) -> np.ndarray:
        return self._data[:, 0].copy()

    def index_max(self) -> int:
        """Index of the largest entry (first one on ties)."""
        return int(np.argmax(self._data[:, 0]))

    def transpose(self) -> "ColVector":
        raise TypeError("A ColVector cannot be transposed in place, use transposed()")

    def transposed(self) -> "RowVector":
        return RowVector._wrap(self._data.T.copy())

    @staticmethod
    def zero(length: int) -> "ColVector":
        return ColVector(np.zeros(length))
