"""Tests for Python operator overloading and conversions."""

import numpy as np
import pytest

from vmatrix import DimensionMismatchError, Matrix, NotSquareError, ToleranceMode


class TestMatrixArithmeticOperators:
    """Test arithmetic operators supported by Matrix."""

    def test_matrix_addition(self):
        assert Matrix([[1, 2], [3, 4]]) + Matrix([[5, 6], [7, 8]]) == Matrix([[6, 8], [10, 12]])

    def test_matrix_subtraction(self):
        assert Matrix([[5, 6], [7, 8]]) - Matrix([[1, 2], [3, 4]]) == Matrix([[4, 4], [4, 4]])

    def test_matrix_addition_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            _ = Matrix([[1, 2]]) + Matrix([[1, 2], [3, 4]])

    def test_scalar_addition_both_sides(self):
        matrix = Matrix([[1, 2]])
        assert matrix + 1 == Matrix([[2, 3]])
        assert 1 + matrix == Matrix([[2, 3]])

    def test_scalar_subtraction_both_sides(self):
        matrix = Matrix([[1, 2]])
        assert matrix - 1 == Matrix([[0, 1]])
        assert 10 - matrix == Matrix([[9, 8]])

    def test_scalar_multiplication_both_sides(self):
        matrix = Matrix([[1, 2], [3, 4]])
        assert matrix * 2 == Matrix([[2, 4], [6, 8]])
        assert 3 * matrix == Matrix([[3, 6], [9, 12]])

    def test_scalar_division(self):
        assert Matrix([[2, 4], [6, 8]]) / 2 == Matrix([[1.0, 2.0], [3.0, 4.0]])

    def test_scalar_division_by_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            _ = Matrix([[1, 2]]) / 0

    def test_matrix_multiplication_operators(self):
        m1 = Matrix([[1, 2], [3, 4]])
        m2 = Matrix([[2, 0], [1, 2]])
        assert m1 * m2 == Matrix([[4, 4], [10, 8]])
        assert m1 @ m2 == Matrix([[4, 4], [10, 8]])

    def test_matrix_division_operator(self):
        matrix = Matrix([[3, 1], [0, 2]])
        result = matrix / matrix
        assert result.compare(matrix.identity(), tolerance=1e-9, mode=ToleranceMode.ABSOLUTE)

    def test_numpy_scalar_on_the_right(self):
        assert Matrix([[1, 2]]) * np.float64(0.5) == Matrix([[0.5, 1.0]])

    def test_negation_negates_each_entry(self):
        assert -Matrix([[1, -2], [-3, 4]]) == Matrix([[-1, 2], [3, -4]])

    def test_unary_positive_returns_new_equal_matrix(self):
        matrix = Matrix([[1, -2], [3, -4]])
        positive = +matrix
        assert positive is not matrix
        assert positive == matrix

    @pytest.mark.parametrize(
        "expression",
        [
            lambda m: m + "1",
            lambda m: m * "not a matrix",
            lambda m: 1 / m,
            lambda m: m @ 2,
            lambda m: m + True,
        ],
    )
    def test_unsupported_operands_raise_type_error(self, expression):
        with pytest.raises(TypeError):
            expression(Matrix([[1, 2], [3, 4]]))


class TestMatrixPowerOperations:
    """Test exponentiation helpers for matrices."""

    def test_power_zero_returns_identity_matrix(self):
        assert Matrix([[2, 0], [0, 3]]) ** 0 == Matrix([[1, 0], [0, 1]])

    def test_power_positive_exponent(self):
        assert Matrix([[1, 1], [0, 1]]) ** 3 == Matrix([[1, 3], [0, 1]])

    def test_power_negative_exponent_returns_inverse(self):
        matrix = Matrix([[4, 0], [0, 5]])
        assert matrix ** -1 == matrix.inverse()

    def test_power_non_square_matrix_raises(self):
        with pytest.raises(NotSquareError):
            _ = Matrix([[1, 2, 3], [4, 5, 6]]) ** 2

    def test_power_with_non_integer_exponent_raises_type_error(self):
        with pytest.raises(TypeError):
            _ = Matrix([[1, 0], [0, 1]]) ** 1.5

    def test_right_power_not_supported(self):
        with pytest.raises(TypeError):
            _ = 2 ** Matrix([[1, 0], [0, 1]])


class TestMatrixConversions:
    """Test conversion helpers for Matrix."""

    def test_to_string(self):
        assert Matrix([[1, 2], [3, 4]]).to_string() == "[[1, 2], [3, 4]]"

    def test_str_and_repr(self):
        matrix = Matrix([[1.5, 2.0]])
        assert str(matrix) == "[[1.5, 2.0]]"
        assert repr(matrix) == "Matrix([[1.5, 2.0]])"

    def test_to_tex_uses_pmatrix_format(self):
        tex = Matrix([[1, 2], [3, 4]]).to_tex()
        assert tex == "\\begin{pmatrix} 1 & 2 \\\\ 3 & 4 \\end{pmatrix}"

    def test_to_numpy_returns_numpy_array(self):
        np_array = Matrix([[1, 2], [3, 4]]).to_numpy()
        assert isinstance(np_array, np.ndarray)
        assert np.array_equal(np_array, np.array([[1, 2], [3, 4]]))

    def test_numpy_round_trip(self):
        matrix = Matrix([[1.5, -2.0], [0.0, 4.25]])
        assert Matrix(matrix.to_numpy()) == matrix

    def test_trace_of_square_matrix(self):
        assert Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).trace() == 15

    def test_trace_non_square_raises(self):
        with pytest.raises(NotSquareError):
            Matrix([[1, 2, 3], [4, 5, 6]]).trace()
