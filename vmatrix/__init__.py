"""vmatrix - immutable matrix value objects for Python.

Main namespace package:
- vmatrix.math: the Matrix value type and its numerical kernels
- vmatrix.core: configuration, logging and exceptions
"""

from .core.errors import (
    ConstructionError,
    DimensionMismatchError,
    InvalidScalarError,
    MatrixError,
    MatrixIndexError,
    NotSquareError,
    SingularMatrixError,
)
from .math import ElementKind, Equatable, Matrix, ToleranceMode

__version__ = "0.1.0"

__all__ = [
    "Matrix",
    "ElementKind",
    "Equatable",
    "ToleranceMode",
    "MatrixError",
    "ConstructionError",
    "MatrixIndexError",
    "DimensionMismatchError",
    "NotSquareError",
    "SingularMatrixError",
    "InvalidScalarError",
]
