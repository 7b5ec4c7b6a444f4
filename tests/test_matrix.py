"""
Unit tests for the dense matrix and vector primitives.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_equal

from splineIGA.core.errors import DimensionMismatchError
from splineIGA.core.matrix import ColVector, Matrix2, RowVector
from splineIGA.core.range import Range, Size


@pytest.fixture
def m1():
    return Matrix2([
        [5, 6, 7],
        [1, 2, 3],
        [9, 8, 7],
    ])


@pytest.fixture
def m2():
    return Matrix2([
        [1, 2, 3],
        [4, 5, 6],
        [7, 8, 9],
    ])


@pytest.fixture
def m4x3():
    return Matrix2([
        [5, 6, 7],
        [1, 2, 3],
        [9, 8, 7],
        [1, 1, 1],
    ])


class TestConstruction:

    def test_from_rows(self, m4x3):
        assert m4x3.rows() == 4
        assert m4x3.cols() == 3
        assert m4x3.size() == Size(4, 3)
        assert str(m4x3.size()) == "4x3"

    def test_from_int_is_identity(self):
        assert Matrix2(3) == Matrix2.identity(3)
        assert_array_equal(Matrix2(2).data(), np.eye(2))

    def test_ragged_rows(self):
        with pytest.raises(DimensionMismatchError):
            Matrix2([[1, 2], [3]])

    def test_builders(self):
        assert Matrix2.zero(2, 3) == Matrix2([[0, 0, 0], [0, 0, 0]])
        assert Matrix2.zero_square(2) == Matrix2.zero(2, 2)
        assert Matrix2.one(1, 2) == Matrix2([[1, 1]])
        assert Matrix2.uniform(2, 1, 7.5) == Matrix2([[7.5], [7.5]])

    def test_data_is_a_copy(self, m1):
        data = m1.data()
        data[0, 0] = 100
        assert m1.value(0, 0) == 5


class TestArithmetic:

    def test_sum(self, m2):
        a = Matrix2([[1, 2, 3]])
        b = Matrix2([[1, 1, 1]])
        c = Matrix2.added(a, b)

        assert not c.equals(b)
        assert c.equals(Matrix2([[2, 3, 4]]))
        assert a + b == Matrix2([[2, 3, 4]])
        # Operands are left untouched
        assert a == Matrix2([[1, 2, 3]])

    def test_chained_in_place_sum(self, m1, m2):
        m3 = Matrix2.identity(3)
        m4 = Matrix2.zero_square(3)
        total = Matrix2.zero_square(3).add(m1).add(m2).add(m3).add(m4)

        assert total == Matrix2([
            [7, 8, 10],
            [5, 8, 9],
            [16, 16, 17],
        ])
        assert m1 == Matrix2([[5, 6, 7], [1, 2, 3], [9, 8, 7]])
        assert m2 == Matrix2([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert m3 == Matrix2.identity(3)

    def test_sum_size_mismatch(self, m1, m4x3):
        with pytest.raises(DimensionMismatchError):
            m1.add(m4x3)
        with pytest.raises(DimensionMismatchError):
            m1 - m4x3

    def test_sub(self, m1, m2):
        assert m1 - m2 == Matrix2([[4, 4, 4], [-3, -3, -3], [2, 0, -2]])
        m1.sub(m1)
        assert m1 == Matrix2.zero_square(3)

    def test_mult_by_scalar(self, m1):
        assert m1 * 9 == Matrix2([
            [5 * 9, 6 * 9, 7 * 9],
            [1 * 9, 2 * 9, 3 * 9],
            [9 * 9, 8 * 9, 7 * 9],
        ])
        assert 2 * m1 == Matrix2.multiplied(m1, 2)
        assert m1.mult(0) == Matrix2.zero_square(3)
        # mult is in place
        assert m1 == Matrix2.zero_square(3)

    def test_mult_by_matrix(self, m1, m2):
        m3 = Matrix2.identity(3)
        m4 = Matrix2.zero_square(3)

        assert m1.mult_mat(m1) == Matrix2([
            [94, 98, 102],
            [34, 34, 34],
            [116, 126, 136],
        ])
        assert m1 @ m2 == Matrix2([
            [78, 96, 114],
            [30, 36, 42],
            [90, 114, 138],
        ])
        assert m1.mult_mat(m3) == m1
        assert m2.mult_mat(m3) == m2
        assert m1.mult_mat(m4) == m4

    def test_mult_by_matrix_rectangular(self, m4x3, m2):
        with pytest.raises(DimensionMismatchError):
            m4x3.mult_mat(m4x3)

        assert m4x3.mult_mat(m2) == Matrix2([
            [78, 96, 114],
            [30, 36, 42],
            [90, 114, 138],
            [12, 15, 18],
        ])
        assert m4x3.mult_mat(Matrix2.zero_square(3)) == Matrix2.zero(4, 3)

    def test_transpose(self):
        m = Matrix2([[1], [2], [3]])
        assert m.transposed().size() == Size(1, 3)
        assert m.size() == Size(3, 1)

        m.transpose()
        assert m == Matrix2([[1, 2, 3]])

    def test_round(self):
        m = Matrix2([[1.234, 5.678]])
        assert m.rounded(1) == Matrix2([[1.2, 5.7]])
        assert m == Matrix2([[1.234, 5.678]])
        m.round(0)
        assert m == Matrix2([[1.0, 6.0]])

    def test_equality_is_size_aware(self):
        assert Matrix2([[1, 2, 3]]) != Matrix2([[1], [2], [3]])
        assert Matrix2([[1, 2]]) != Matrix2([[1, 2.0000001]])


class TestAccess:

    def test_set_value(self, m4x3):
        m4x3.set_value(1, 2, 199)
        assert m4x3 == Matrix2([
            [5, 6, 7],
            [1, 2, 199],
            [9, 8, 7],
            [1, 1, 1],
        ])

    @pytest.mark.parametrize("row, col", [(4, 0), (0, 3), (-1, 0), (0, -1)])
    def test_checked_index(self, m4x3, row, col):
        with pytest.raises(IndexError):
            m4x3.value(row, col)
        with pytest.raises(IndexError):
            m4x3.set_value(row, col, 0.0)

    def test_rect(self, m4x3):
        assert m4x3.rect((1, 1), (2, 2)) == Matrix2([
            [2, 3],
            [8, 7],
        ])

    def test_mid(self, m2):
        assert m2.mid(Range(1, 2), Range(0, 1)) == Matrix2([
            [4, 5],
            [7, 8],
        ])

    def test_row_and_col(self, m2):
        assert m2.row(1) == RowVector([4, 5, 6])
        assert m2.col(2) == ColVector([3, 6, 9])
        assert isinstance(m2.row(0), RowVector)
        assert isinstance(m2.col(0), ColVector)

    def test_assign(self):
        m = Matrix2.zero(3, 2)
        m.assign_col(1, RowVector([1, 2, 3])).assign_row(0, RowVector([7, 8]))
        assert m == Matrix2([[7, 8], [0, 2], [0, 3]])

        with pytest.raises(DimensionMismatchError):
            m.assign_row(1, RowVector([1, 2, 3]))

    def test_clone(self, m1):
        c = m1.clone()
        c.set_value(0, 0, -1)
        assert m1.value(0, 0) == 5
        assert isinstance(RowVector([1, 2]).clone(), RowVector)

    def test_predicates(self, m1, m4x3):
        assert m1.is_square()
        assert not m4x3.is_square()
        assert RowVector([1, 2]).is_row()
        assert ColVector([1, 2]).is_col()
        assert Matrix2([[1, 0], [2, 3]]).is_lower_triangular()
        assert not Matrix2([[1, 0], [2, 3]]).is_upper_triangular()
        assert m4x3.max_col(0) == 9


class TestVectors:

    def test_range(self):
        v = RowVector([5, 6, 7, 1, 2, 3, 9, 8, 7, 1, 1, 1])
        assert v.range(Range(2, 4)) == RowVector([7, 1, 2])
        assert v.range(2, 4) == RowVector([7, 1, 2])

    def test_left_right(self):
        v = RowVector([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert v.left(4) == RowVector([1, 2, 3, 4, 5])
        assert v.right(4) == RowVector([5, 6, 7, 8, 9])

    def test_row_vector_access(self):
        v = RowVector.zero(3)
        v.set_value(1, 4.0)
        assert v.value(1) == 4.0
        assert v.length() == 3
        assert_array_equal(v.to_array(), [0.0, 4.0, 0.0])
        assert RowVector([3, 4]).norm() == pytest.approx(5.0)

    def test_evenly_spaced(self):
        assert_array_equal(RowVector.evenly_spaced(0.0, 1.0, 5).to_array(),
                           [0.0, 0.25, 0.5, 0.75, 1.0])
        assert RowVector.one(2) == RowVector([1, 1])

    def test_col_vector(self):
        v = ColVector([3, 9, 1, 9])
        assert v.length() == 4
        assert v.index_max() == 1
        v.set_value(2, 10)
        assert v.index_max() == 2
        assert ColVector.zero(2) == Matrix2([[0], [0]])

    def test_vector_transposed(self):
        v = RowVector([1, 2, 3])
        col = v.transposed()
        assert isinstance(col, ColVector)
        assert col == Matrix2([[1], [2], [3]])
        assert col.value(2) == 3.0

        row = col.transposed()
        assert isinstance(row, RowVector)
        assert row == v

    @pytest.mark.parametrize("v", [RowVector([1, 2]), ColVector([1, 2])])
    def test_vector_transpose_in_place_is_rejected(self, v):
        with pytest.raises(TypeError):
            v.transpose()
        assert v.size() == (Size(1, 2) if isinstance(v, RowVector) else Size(2, 1))
