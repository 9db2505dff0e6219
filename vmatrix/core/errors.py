"""
Library exceptions.

Every failure of a matrix operation is raised synchronously as one of the
exceptions below. Each one also derives from the closest builtin exception so
callers that catch ``ValueError``/``IndexError``/``TypeError`` keep working.
"""

from typing import Any, Dict, Optional


class MatrixError(Exception):
    """Base exception for matrix errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConstructionError(MatrixError, ValueError):
    """Raised when the input does not describe a valid rectangular matrix"""


class MatrixIndexError(MatrixError, IndexError):
    """Raised when a 1-based row or column number is outside the matrix"""

    def __init__(self, axis: str, index: Any, count: int):
        if type(index) is not int or index < 1:
            message = f"The given {axis} number is invalid."
        else:
            message = f"The given {axis} number exceeds matrix size."
        super().__init__(
            message=message,
            details={"axis": axis, "index": index, "count": count}
        )


class DimensionMismatchError(MatrixError, ValueError):
    """Raised when two matrices have incompatible dimensions"""

    def __init__(self, left: tuple, right: tuple, message: str = "Matrices have mismatched dimensions."):
        super().__init__(
            message=message,
            details={"left": left, "right": right}
        )


class NotSquareError(MatrixError, ValueError):
    """Raised when an operation requires a square matrix"""

    def __init__(self, operation: str, shape: tuple):
        super().__init__(
            message=f"Matrix must be square to calculate the {operation}.",
            details={"operation": operation, "shape": shape}
        )


class SingularMatrixError(MatrixError, ValueError):
    """Raised when inverting a matrix whose determinant is zero"""

    def __init__(self, shape: tuple):
        super().__init__(
            message="Matrix must be non-singular to calculate the Inverse.",
            details={"shape": shape}
        )


class InvalidScalarError(MatrixError, TypeError, ValueError):
    """Raised for non-numeric scalars or non-positive dimensions"""
