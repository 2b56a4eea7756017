"""Tests for Matrix class and transform constructors."""

import pytest
import math

from phongforge.common import approx_equal
from phongforge.tuples import KindMismatchError, point, vector, color
from phongforge.matrix import (
    Matrix, Axis, SingularMatrixError, DimensionMismatchError,
    identity, translation, scaling, rotation, rotation_x, rotation_y, rotation_z, shearing
)


SQRT2_2 = math.sqrt(2) / 2


class TestMatrixCreation:
    """Test Matrix construction."""

    def test_4x4(self):
        m = Matrix([
            [1, 2, 3, 4],
            [5.5, 6.5, 7.5, 8.5],
            [9, 10, 11, 12],
            [13.5, 14.5, 15.5, 16.5],
        ])
        assert m.size == 4
        assert m[0, 0] == 1
        assert m[0, 3] == 4
        assert m[1, 0] == 5.5
        assert m[1, 2] == 7.5
        assert m[2, 2] == 11
        assert m[3, 0] == 13.5
        assert m[3, 2] == 15.5

    def test_2x2(self):
        m = Matrix([[-3, 5], [1, -2]])
        assert m[0, 0] == -3
        assert m[0, 1] == 5
        assert m[1, 0] == 1
        assert m[1, 1] == -2

    def test_3x3(self):
        m = Matrix([[-3, 5, 0], [1, -2, -7], [0, 1, 1]])
        assert m[0, 0] == -3
        assert m[1, 1] == -2
        assert m[2, 2] == 1

    def test_ragged_rows_fail(self):
        with pytest.raises(DimensionMismatchError):
            Matrix([[1, 2, 3], [4, 5], [6, 7, 8]])

    def test_non_square_fails(self):
        with pytest.raises(DimensionMismatchError):
            Matrix([[1, 2, 3], [4, 5, 6]])

    def test_unsupported_size_fails(self):
        with pytest.raises(DimensionMismatchError):
            Matrix([[1]])
        with pytest.raises(DimensionMismatchError):
            identity(5)

    def test_immutable(self):
        m = identity()
        arr = m.to_array()
        arr[0, 0] = 10
        assert m[0, 0] == 1


class TestMatrixEquality:
    """Test tolerance-based equality."""

    def test_identical(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        assert a == b

    def test_different(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[2, 3, 4, 5], [6, 7, 8, 9], [8, 7, 6, 5], [4, 3, 2, 1]])
        assert a != b

    def test_within_epsilon(self):
        assert Matrix([[1, 0], [0, 1.000001]]) == identity(2)

    def test_different_sizes(self):
        assert identity(3) != identity(4)


class TestMatrixMultiplication:
    """Test matrix-matrix and matrix-tuple products."""

    def test_multiply_matrices(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[-2, 1, 2, 3], [3, 2, 1, -1], [4, 3, 6, 5], [1, 2, 7, 8]])
        expected = Matrix([
            [20, 22, 50, 48],
            [44, 54, 114, 108],
            [40, 58, 110, 102],
            [16, 26, 46, 42],
        ])
        assert a * b == expected
        assert a @ b == expected

    def test_multiply_by_tuple(self):
        a = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        assert a * point(1, 2, 3) == point(18, 24, 33)

    def test_multiply_by_identity(self):
        a = Matrix([[0, 1, 2, 4], [1, 2, 4, 8], [2, 4, 8, 16], [4, 8, 16, 32]])
        assert a * identity() == a

    def test_identity_times_tuple(self):
        assert identity() * vector(1, 2, 3) == vector(1, 2, 3)

    def test_multiply_color_fails(self):
        with pytest.raises(KindMismatchError):
            identity() * color(1, 1, 1)

    def test_size_mismatch_fails(self):
        with pytest.raises(DimensionMismatchError):
            identity(3) * identity(4)

    def test_small_matrix_times_tuple_fails(self):
        with pytest.raises(DimensionMismatchError):
            identity(3) * point(1, 2, 3)


class TestMatrixTranspose:
    """Test transposition."""

    def test_transpose(self):
        a = Matrix([[0, 9, 3, 0], [9, 8, 0, 8], [1, 8, 5, 3], [0, 0, 5, 8]])
        expected = Matrix([[0, 9, 1, 0], [9, 8, 8, 0], [3, 0, 5, 5], [0, 8, 3, 8]])
        assert a.transpose() == expected

    def test_transpose_identity(self):
        assert identity().transpose() == identity()


class TestMatrixDeterminant:
    """Test determinant, submatrix, minor and cofactor."""

    def test_2x2_determinant(self):
        assert Matrix([[1, 5], [-3, 2]]).determinant() == 17

    @pytest.mark.parametrize("size", [2, 3, 4])
    def test_identity_determinant(self, size):
        assert identity(size).determinant() == 1

    def test_submatrix_of_3x3(self):
        a = Matrix([[1, 5, 0], [-3, 2, 7], [0, 6, -3]])
        assert a.submatrix(0, 2) == Matrix([[-3, 2], [0, 6]])

    def test_submatrix_of_4x4(self):
        a = Matrix([[-6, 1, 1, 6], [-8, 5, 8, 6], [-1, 0, 8, 2], [-7, 1, -1, 1]])
        assert a.submatrix(2, 1) == Matrix([[-6, 1, 6], [-8, 8, 6], [-7, -1, 1]])

    def test_submatrix_of_2x2_fails(self):
        with pytest.raises(DimensionMismatchError):
            identity(2).submatrix(0, 0)

    def test_minor(self):
        a = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert a.submatrix(1, 0).determinant() == 25
        assert a.minor(1, 0) == 25

    def test_cofactor(self):
        a = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert a.minor(0, 0) == -12
        assert a.cofactor(0, 0) == -12
        assert a.minor(1, 0) == 25
        assert a.cofactor(1, 0) == -25

    def test_3x3_determinant(self):
        a = Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]])
        assert a.cofactor(0, 0) == 56
        assert a.cofactor(0, 1) == 12
        assert a.cofactor(0, 2) == -46
        assert a.determinant() == -196

    def test_4x4_determinant(self):
        a = Matrix([[-2, -8, 3, 5], [-3, 1, 7, 3], [1, 2, -9, 6], [-6, 7, 7, -9]])
        assert a.cofactor(0, 0) == 690
        assert a.cofactor(0, 1) == 447
        assert a.cofactor(0, 2) == 210
        assert a.cofactor(0, 3) == 51
        assert a.determinant() == -4071


class TestMatrixInverse:
    """Test invertibility and inversion."""

    def test_invertible(self):
        a = Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]])
        assert a.determinant() == -2120
        assert a.invertible()

    def test_not_invertible(self):
        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        assert a.determinant() == 0
        assert not a.invertible()

    def test_inverse_of_singular_fails(self):
        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        with pytest.raises(SingularMatrixError):
            a.inverse()

    def test_inverse(self):
        a = Matrix([[-5, 2, 6, -8], [1, -5, 1, 8], [7, 7, -6, -7], [1, -3, 7, 4]])
        b = a.inverse()
        assert a.determinant() == 532
        assert a.cofactor(2, 3) == -160
        assert approx_equal(b[3, 2], -160 / 532)
        assert a.cofactor(3, 2) == 105
        assert approx_equal(b[2, 3], 105 / 532)
        assert b == Matrix([
            [0.21805, 0.45113, 0.24060, -0.04511],
            [-0.80827, -1.45677, -0.44361, 0.52068],
            [-0.07895, -0.22368, -0.05263, 0.19737],
            [-0.52256, -0.81391, -0.30075, 0.30639],
        ])

    def test_inverse_another(self):
        a = Matrix([[8, -5, 9, 2], [7, 5, 6, 1], [-6, 0, 9, 6], [-3, 0, -9, -4]])
        assert a.inverse() == Matrix([
            [-0.15385, -0.15385, -0.28205, -0.53846],
            [-0.07692, 0.12308, 0.02564, 0.03077],
            [0.35897, 0.35897, 0.43590, 0.92308],
            [-0.69231, -0.69231, -0.76923, -1.92308],
        ])

    def test_inverse_3x3(self):
        a = Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]])
        assert a * a.inverse() == identity(3)

    def test_matrix_times_inverse_is_identity(self):
        a = Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]])
        assert a * a.inverse() == identity()

    def test_product_times_inverse(self):
        a = Matrix([[3, -9, 7, 3], [3, -8, 2, -9], [-4, 4, 4, 1], [-6, 5, -1, 1]])
        b = Matrix([[8, 2, 2, 2], [3, -1, 7, 0], [7, 0, 5, 4], [6, -2, 0, 5]])
        c = a * b
        assert c * b.inverse() == a

    def test_inverse_of_identity(self):
        assert identity().inverse() == identity()


class TestTranslation:
    """Test translation matrices."""

    def test_moves_point(self):
        assert translation(5, -3, 2) * point(-3, 4, 5) == point(2, 1, 7)

    def test_inverse_moves_back(self):
        assert translation(5, -3, 2).inverse() * point(-3, 4, 5) == point(-8, 7, 3)

    def test_does_not_affect_vectors(self):
        v = vector(-3, 4, 5)
        assert translation(5, -3, 2) * v == v


class TestScaling:
    """Test scaling matrices."""

    def test_scales_point(self):
        assert scaling(2, 3, 4) * point(-4, 6, 8) == point(-8, 18, 32)

    def test_scales_vector(self):
        assert scaling(2, 3, 4) * vector(-4, 6, 8) == vector(-8, 18, 32)

    def test_inverse_shrinks(self):
        assert scaling(2, 3, 4).inverse() * vector(-4, 6, 8) == vector(-2, 2, 2)

    def test_reflection(self):
        assert scaling(-1, 1, 1) * point(2, 3, 4) == point(-2, 3, 4)


class TestRotation:
    """Test rotation matrices."""

    def test_rotate_around_x(self):
        p = point(0, 1, 0)
        assert rotation_x(math.pi / 4) * p == point(0, SQRT2_2, SQRT2_2)
        assert rotation_x(math.pi / 2) * p == point(0, 0, 1)

    def test_inverse_rotates_opposite(self):
        p = point(0, 1, 0)
        assert rotation_x(math.pi / 4).inverse() * p == point(0, SQRT2_2, -SQRT2_2)

    def test_rotate_around_y(self):
        p = point(0, 0, 1)
        assert rotation_y(math.pi / 4) * p == point(SQRT2_2, 0, SQRT2_2)
        assert rotation_y(math.pi / 2) * p == point(1, 0, 0)

    def test_rotate_around_z(self):
        p = point(0, 1, 0)
        assert rotation_z(math.pi / 4) * p == point(-SQRT2_2, SQRT2_2, 0)
        assert rotation_z(math.pi / 2) * p == point(-1, 0, 0)

    def test_rotation_by_axis(self):
        assert rotation(math.pi / 3, Axis.X) == rotation_x(math.pi / 3)
        assert rotation(math.pi / 3, Axis.Y) == rotation_y(math.pi / 3)
        assert rotation(math.pi / 3, 'z') == rotation_z(math.pi / 3)
        assert rotation(math.pi / 3, 'Z') == rotation_z(math.pi / 3)

    def test_unknown_axis(self):
        with pytest.raises(ValueError):
            rotation(1.0, 'w')


class TestShearing:
    """Test shearing matrices."""

    @pytest.mark.parametrize("args,expected", [
        ((1, 0, 0, 0, 0, 0), (5, 3, 4)),
        ((0, 1, 0, 0, 0, 0), (6, 3, 4)),
        ((0, 0, 1, 0, 0, 0), (2, 5, 4)),
        ((0, 0, 0, 1, 0, 0), (2, 7, 4)),
        ((0, 0, 0, 0, 1, 0), (2, 3, 6)),
        ((0, 0, 0, 0, 0, 1), (2, 3, 7)),
    ])
    def test_shear(self, args, expected):
        assert shearing(*args) * point(2, 3, 4) == point(*expected)


class TestTransformChaining:
    """Test composition of transforms."""

    def test_applied_in_sequence(self):
        p = point(1, 0, 1)
        a = rotation_x(math.pi / 2)
        b = scaling(5, 5, 5)
        c = translation(10, 5, 7)

        p2 = a * p
        assert p2 == point(1, -1, 0)
        p3 = b * p2
        assert p3 == point(5, -5, 0)
        p4 = c * p3
        assert p4 == point(15, 0, 7)

    def test_chained_in_reverse_order(self):
        p = point(1, 0, 1)
        t = translation(10, 5, 7) * scaling(5, 5, 5) * rotation_x(math.pi / 2)
        assert t * p == point(15, 0, 7)

    def test_fluent_chaining(self):
        t = identity().rotate_x(math.pi / 2).scale(5, 5, 5).translate(10, 5, 7)
        assert t == translation(10, 5, 7) * scaling(5, 5, 5) * rotation_x(math.pi / 2)
        assert t * point(1, 0, 1) == point(15, 0, 7)

    def test_fluent_shear_and_rotate(self):
        t = identity().shear(1, 0, 0, 0, 0, 0).rotate(math.pi, Axis.Y)
        assert t == rotation_y(math.pi) * shearing(1, 0, 0, 0, 0, 0)

    def test_order_matters(self):
        a = translation(1, 0, 0) * scaling(2, 2, 2)
        b = scaling(2, 2, 2) * translation(1, 0, 0)
        assert a != b
