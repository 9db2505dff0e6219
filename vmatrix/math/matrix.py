"""
Matrix value type.

An immutable rectangular array of numbers arranged in rows and columns,
with structural transforms, the Bareiss determinant, derived matrices
(minors, cofactors, adjugate, inverse) and matrix arithmetic.

Rows and columns are numbered from 1 in the public accessors, matching the
usual mathematical notation. Every operation returns a new instance.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, Union

import numpy as np
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictFloat,
    StrictInt,
    model_validator,
)

from ..core.config import settings
from ..core.errors import (
    ConstructionError,
    DimensionMismatchError,
    InvalidScalarError,
    MatrixIndexError,
    NotSquareError,
    SingularMatrixError,
)
from ..core.logging import get_logger
from .determinant import bareiss
from .validation import Rows, normalize_rows
from .value import ElementKind, Equatable, ToleranceMode, fuzzy_compare

logger = get_logger(__name__)

Number = Union[int, float]

# Guards the write-once determinant cache of every instance
_DETERMINANT_LOCK = threading.Lock()


def _validate_scalar(value: Any, message: str = "The input value is not a valid number.") -> Number:
    """Return value as a plain int/float or raise InvalidScalarError."""
    if isinstance(value, np.generic) and not isinstance(value, np.bool_):
        value = value.item()
    if ElementKind.of(value) is None:
        raise InvalidScalarError(message, details={"value": repr(value)})
    return value


def _validate_count(value: Any, axis: str) -> int:
    if isinstance(value, np.integer):
        value = int(value)
    if type(value) is not int or value < 1:
        raise InvalidScalarError(
            f"The given number of {axis} is invalid.",
            details={axis: repr(value)},
        )
    return value


class Matrix(BaseModel, Equatable):
    """
    Immutable matrix of int or float cells.

    All cells share a single kind (see ``ElementKind``). The determinant is
    computed on first request and cached for the lifetime of the instance.

    Examples:
        >>> m = Matrix([[4, -2], [-3, 0], [3, 5]])
        >>> m.get_cell_value(3, 2)
        5
        >>> Matrix([[1, 2], [3, 4]]).get_determinant()
        -2
    """

    model_config = ConfigDict(frozen=True)

    rows: tuple[tuple[Union[StrictInt, StrictFloat], ...], ...] = Field(
        description="Row-major cell values"
    )
    rows_count: int = Field(ge=1, description="Number of rows")
    columns_count: int = Field(ge=1, description="Number of columns")
    element_kind: ElementKind = Field(description="Kind shared by every cell")

    _determinant: Optional[Number] = PrivateAttr(default=None)

    def __init__(self, data: Any = None, **kwargs: Any) -> None:
        """
        Build a validated matrix.

        Args:
            data: Flat sequence of numbers (becomes a 1 x N matrix), sequence of
                equal-length rows, mapping keyed 0..n-1, NumPy array or Matrix

        Raises:
            ConstructionError: If the input is not a valid rectangular matrix
        """
        if data is None and kwargs:
            # Field-wise construction (model_validate / model_validate_json)
            super().__init__(**kwargs)
            return

        if isinstance(data, Matrix):
            rows, kind = data.rows, data.element_kind
        else:
            rows, kind = normalize_rows(data)

        super().__init__(
            rows=rows,
            rows_count=len(rows),
            columns_count=len(rows[0]),
            element_kind=kind,
            **kwargs,
        )

    @model_validator(mode="after")
    def _check_structure(self) -> Matrix:
        if len(self.rows) != self.rows_count:
            raise ValueError("rows_count does not match the number of rows")
        if any(len(row) != self.columns_count for row in self.rows):
            raise ValueError("every row must have columns_count cells")
        if any(ElementKind.of(cell) is not self.element_kind for row in self.rows for cell in row):
            raise ValueError(f"every cell must be of kind {self.element_kind.value}")
        return self

    @classmethod
    def _trusted(cls, rows: Rows) -> Matrix:
        """
        Wrap rows produced by another validated operation without re-validating.

        Callers guarantee the rows are non-empty, rectangular and homogeneous.
        """
        rows = tuple(tuple(row) for row in rows)
        return cls.model_construct(
            rows=rows,
            rows_count=len(rows),
            columns_count=len(rows[0]),
            element_kind=ElementKind.of(rows[0][0]),
        )

    # Factories

    @classmethod
    def create_filled_matrix(cls, value: Number, rows: int, columns: Optional[int] = None) -> Matrix:
        """
        Create a matrix filled with one value.

        Args:
            value: int or float used for every cell
            rows: Number of rows (>= 1)
            columns: Number of columns (>= 1); defaults to ``rows`` for a square matrix

        Raises:
            InvalidScalarError: If value is not numeric or a count is not positive
        """
        value = _validate_scalar(value, "The given value is not numeric.")
        rows = _validate_count(rows, "rows")
        columns = rows if columns is None else _validate_count(columns, "columns")

        return cls([[value] * columns for _ in range(rows)])

    @classmethod
    def identity_of(cls, size: int) -> Matrix:
        """Create the size x size identity matrix."""
        size = _validate_count(size, "rows")
        return cls._trusted(
            [[1 if i == j else 0 for j in range(size)] for i in range(size)]
        )

    # Equality

    def equals(self, other: Any) -> bool:
        """
        Strict equality: same dimensions and identical cells of identical type.

        ``Matrix([[1]])`` and ``Matrix([[1.0]])`` are not equal.
        """
        if (
            not isinstance(other, Matrix)
            or self.rows_count != other.rows_count
            or self.columns_count != other.columns_count
        ):
            return False

        for row1, row2 in zip(self.rows, other.rows):
            for a, b in zip(row1, row2):
                if type(a) is not type(b) or a != b:
                    return False
        return True

    def __eq__(self, other: Any) -> bool:
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        return not self.equals(other)

    def __hash__(self) -> int:
        return hash((self.rows_count, self.columns_count, self.rows))

    def compare(
        self,
        other: Any,
        tolerance: Optional[float] = None,
        mode: Optional[str] = None,
    ) -> bool:
        """
        Fuzzy element-wise comparison.

        Args:
            other: Matrix to compare against
            tolerance: Tolerance (default: settings.COMPARE_TOLERANCE)
            mode: ToleranceMode.RELATIVE or ToleranceMode.ABSOLUTE
                (default: settings.COMPARE_MODE)

        Returns:
            True if shapes match and every pair of cells is within tolerance
        """
        if not isinstance(other, Matrix) or self.shape != other.shape:
            return False

        tolerance = settings.COMPARE_TOLERANCE if tolerance is None else tolerance
        mode = mode or settings.COMPARE_MODE or ToleranceMode.RELATIVE

        for row1, row2 in zip(self.rows, other.rows):
            for a, b in zip(row1, row2):
                if not fuzzy_compare(a, b, tolerance, mode, settings.ZERO_LEVEL):
                    return False
        return True

    # Shape

    def to_array(self) -> list[list[Number]]:
        """Return the cells as a new nested list."""
        return [list(row) for row in self.rows]

    def get_rows_count(self) -> int:
        return self.rows_count

    def get_columns_count(self) -> int:
        return self.columns_count

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (rows, columns)."""
        return (self.rows_count, self.columns_count)

    def is_vector(self) -> bool:
        """Check if the matrix has only one row or only one column."""
        return self.rows_count == 1 or self.columns_count == 1

    def is_square(self) -> bool:
        return self.rows_count == self.columns_count

    # Accessors

    def _validate_row(self, row: int) -> int:
        if isinstance(row, np.integer):
            row = int(row)
        if type(row) is not int or row < 1 or row > self.rows_count:
            raise MatrixIndexError("row", row, self.rows_count)
        return row

    def _validate_column(self, column: int) -> int:
        if isinstance(column, np.integer):
            column = int(column)
        if type(column) is not int or column < 1 or column > self.columns_count:
            raise MatrixIndexError("column", column, self.columns_count)
        return column

    def get_cell_value(self, row: int, column: int) -> Number:
        """
        Value of one cell.

        Args:
            row: Row number starting from 1
            column: Column number starting from 1

        Raises:
            MatrixIndexError: If row or column is outside the matrix
        """
        row = self._validate_row(row)
        column = self._validate_column(column)
        return self.rows[row - 1][column - 1]

    def get_row_values(self, row: int) -> list[Number]:
        """Values of the given row (1-based) as a new list."""
        row = self._validate_row(row)
        return list(self.rows[row - 1])

    def get_column_values(self, column: int) -> list[Number]:
        """Values of the given column (1-based) as a new list."""
        column = self._validate_column(column)
        return [row[column - 1] for row in self.rows]

    def __getitem__(self, index: tuple[int, int] | int) -> Any:
        """Get element by 0-based (row, col), or a whole row as a tuple."""
        if isinstance(index, tuple):
            row, col = index
            return self.rows[row][col]
        return self.rows[index]

    # Structural transforms

    def cross_out(self, row: int, column: int) -> Matrix:
        """
        Return a new matrix without the given row and column.

        Args:
            row: Row number starting from 1
            column: Column number starting from 1

        Raises:
            MatrixIndexError: If row or column is outside the matrix
            ConstructionError: If removing them would leave no rows or no columns
        """
        row = self._validate_row(row)
        column = self._validate_column(column)

        if self.rows_count == 1 or self.columns_count == 1:
            raise ConstructionError(
                "Crossing out the only row or column would leave an empty matrix.",
                details={"shape": self.shape, "row": row, "column": column},
            )

        remaining = [
            r[: column - 1] + r[column:]
            for index, r in enumerate(self.rows)
            if index != row - 1
        ]
        return Matrix._trusted(remaining)

    def transpose(self) -> Matrix:
        """Return the transpose of the matrix."""
        if self.rows_count == 1:
            new = [(cell,) for cell in self.rows[0]]
        else:
            new = list(zip(*self.rows))
        return Matrix._trusted(new)

    def identity(self) -> Matrix:
        """
        Matrix of the same dimensions with 1 on the main diagonal and 0 elsewhere.

        Also defined for non-square matrices.
        """
        return Matrix._trusted(
            [
                [1 if i == j else 0 for j in range(self.columns_count)]
                for i in range(self.rows_count)
            ]
        )

    # Determinant

    def get_determinant(self) -> Number:
        """
        Determinant computed with the Bareiss algorithm.

        The value is cached after the first call.

        Raises:
            NotSquareError: If the matrix is not square
        """
        cached = self._determinant
        if cached is not None:
            return cached

        if not self.is_square():
            raise NotSquareError("Determinant", self.shape)

        result = bareiss(self.rows)

        with _DETERMINANT_LOCK:
            if self._determinant is None:
                self._determinant = result.value
            return self._determinant

    def is_singular(self) -> bool:
        """Check if the matrix is not invertible (determinant exactly 0)."""
        return self.get_determinant() == 0

    def trace(self) -> Number:
        """Sum of the main diagonal (square matrices only)."""
        if not self.is_square():
            raise NotSquareError("Trace", self.shape)
        total: Number = 0
        for i in range(self.rows_count):
            total += self.rows[i][i]
        return total

    # Derived structures

    def minors(self) -> Matrix:
        """
        Matrix of first minors.

        Entry (i, j) is the determinant of the matrix with row i and column j
        crossed out. A 1 x 1 matrix is its own minors matrix.

        Raises:
            NotSquareError: If the matrix is not square
        """
        if not self.is_square():
            raise NotSquareError("Minors", self.shape)

        if self.rows_count == 1:
            return Matrix._trusted(self.rows)

        size = self.rows_count
        return Matrix._trusted(
            [
                [self.cross_out(i + 1, j + 1).get_determinant() for j in range(size)]
                for i in range(size)
            ]
        )

    def cofactors(self) -> Matrix:
        """Minors with the checkerboard sign (-1)^(i+j) applied."""
        if not self.is_square():
            raise NotSquareError("Cofactors", self.shape)

        minors = self.minors().rows
        return Matrix._trusted(
            [
                [cell if (i + j) % 2 == 0 else -cell for j, cell in enumerate(row)]
                for i, row in enumerate(minors)
            ]
        )

    def adjoint(self) -> Matrix:
        """Adjugate: the transpose of the cofactor matrix."""
        if not self.is_square():
            raise NotSquareError("Adjoint", self.shape)

        return self.cofactors().transpose()

    def inverse(self) -> Matrix:
        """
        Inverse computed as adjoint / determinant.

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If the determinant is 0
        """
        if not self.is_square():
            raise NotSquareError("Inverse", self.shape)

        if self.is_singular():
            raise SingularMatrixError(self.shape)

        logger.debug("Computing inverse of %dx%d matrix", self.rows_count, self.columns_count)

        if self.rows_count == 1:
            return Matrix([[1 / self.get_cell_value(1, 1)]])

        return self.adjoint().multiply_scalar(1 / self.get_determinant())

    # Arithmetic

    def _validate_matching_dimensions(self, other: Matrix) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(self.shape, other.shape)

    def _validate_reflecting_dimensions(self, other: Matrix) -> None:
        if self.columns_count != other.rows_count:
            raise DimensionMismatchError(
                self.shape,
                other.shape,
                message="Matrices have mismatched dimensions: columns of the first "
                        "must equal rows of the second.",
            )

    @staticmethod
    def _require_matrix(other: Any, operation: str) -> Matrix:
        if not isinstance(other, Matrix):
            raise TypeError(f"Cannot {operation} Matrix and {type(other).__name__}")
        return other

    def multiply(self, other: Matrix) -> Matrix:
        """
        Matrix product self x other.

        Raises:
            DimensionMismatchError: If self.columns_count != other.rows_count
        """
        other = self._require_matrix(other, "multiply")
        self._validate_reflecting_dimensions(other)

        product = []
        for row_data in self.rows:
            product_row = []
            for col in range(other.columns_count):
                total: Number = 0
                for key, value in enumerate(row_data):
                    total += value * other.rows[key][col]
                product_row.append(total)
            product.append(product_row)

        return Matrix._trusted(product)

    def divide(self, other: Matrix) -> Matrix:
        """
        Matrix division self x other^-1.

        Raises:
            DimensionMismatchError: If self.columns_count != other.rows_count
            NotSquareError: If other is not square
            SingularMatrixError: If other is singular
        """
        other = self._require_matrix(other, "divide")
        self._validate_reflecting_dimensions(other)

        return self.multiply(other.inverse())

    def multiply_scalar(self, value: Number) -> Matrix:
        """Multiply every cell by a scalar."""
        value = _validate_scalar(value)
        return Matrix._trusted([[cell * value for cell in row] for row in self.rows])

    def divide_scalar(self, value: Number) -> Matrix:
        """
        Multiply every cell by 1 / value.

        Raises:
            InvalidScalarError: If value is not numeric
            ZeroDivisionError: If value is 0
        """
        value = _validate_scalar(value)
        if value == 0:
            raise ZeroDivisionError("Matrix division by zero")
        return self.multiply_scalar(1 / value)

    def sum_scalar(self, value: Number) -> Matrix:
        """Add a scalar to every cell."""
        value = _validate_scalar(value)
        return Matrix._trusted([[cell + value for cell in row] for row in self.rows])

    def subtract_scalar(self, value: Number) -> Matrix:
        """Subtract a scalar from every cell."""
        value = _validate_scalar(value)
        return Matrix._trusted([[cell - value for cell in row] for row in self.rows])

    def sum(self, other: Matrix, sign: int = 1) -> Matrix:
        """
        Element-wise self + sign * other.

        Args:
            other: Matrix with the same dimensions
            sign: 1 to add, -1 to subtract

        Raises:
            DimensionMismatchError: If the dimensions differ
        """
        other = self._require_matrix(other, "add")
        if type(sign) is not int or sign not in (1, -1):
            raise InvalidScalarError("The sign must be 1 or -1.", details={"sign": repr(sign)})
        self._validate_matching_dimensions(other)

        return Matrix._trusted(
            [
                [a + sign * b for a, b in zip(row1, row2)]
                for row1, row2 in zip(self.rows, other.rows)
            ]
        )

    def subtract(self, other: Matrix) -> Matrix:
        """Element-wise self - other."""
        return self.sum(other, -1)

    # Conversions

    def to_string(self) -> str:
        """Convert to string."""
        rows_str = ", ".join(
            "[" + ", ".join(str(cell) for cell in row) + "]" for row in self.rows
        )
        return f"[{rows_str}]"

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        rows_tex = " \\\\ ".join(
            " & ".join(str(cell) for cell in row) for row in self.rows
        )
        return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array."""
        return np.array(self.to_array())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self.to_string()})"

    # Arithmetic operators

    @staticmethod
    def _is_scalar(value: Any) -> bool:
        if isinstance(value, np.generic):
            value = value.item()
        return ElementKind.of(value) is not None

    def __add__(self, other: Any) -> Matrix:
        """Matrix or scalar addition."""
        if isinstance(other, Matrix):
            return self.sum(other)
        if self._is_scalar(other):
            return self.sum_scalar(other)
        return NotImplemented

    def __radd__(self, other: Any) -> Matrix:
        """Right addition (scalar only)."""
        if self._is_scalar(other):
            return self.sum_scalar(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        """Matrix or scalar subtraction."""
        if isinstance(other, Matrix):
            return self.subtract(other)
        if self._is_scalar(other):
            return self.subtract_scalar(other)
        return NotImplemented

    def __rsub__(self, other: Any) -> Matrix:
        """Right subtraction: scalar - matrix."""
        if self._is_scalar(other):
            return (-self).sum_scalar(other)
        return NotImplemented

    def __mul__(self, other: Any) -> Matrix:
        """Matrix multiplication or scalar multiplication."""
        if isinstance(other, Matrix):
            return self.multiply(other)
        if self._is_scalar(other):
            return self.multiply_scalar(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        """Right multiplication (scalar only)."""
        if self._is_scalar(other):
            return self.multiply_scalar(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        """Matrix product."""
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Matrix:
        """Matrix division or scalar division."""
        if isinstance(other, Matrix):
            return self.divide(other)
        if self._is_scalar(other):
            return self.divide_scalar(other)
        return NotImplemented

    def __pow__(self, other: Any) -> Matrix:
        """Matrix power (integer powers only)."""
        if type(other) is not int:
            return NotImplemented

        if not self.is_square():
            raise NotSquareError("Power", self.shape)

        if other == 0:
            return self.identity()
        if other < 0:
            return self.inverse() ** (-other)

        result = self
        for _ in range(other - 1):
            result = result.multiply(self)
        return result

    def __neg__(self) -> Matrix:
        """Negation."""
        return self.multiply_scalar(-1)

    def __pos__(self) -> Matrix:
        """Unary positive."""
        return Matrix._trusted(self.rows)
