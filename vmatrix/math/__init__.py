"""
vmatrix.math - immutable matrix value objects

- Construction with strict validation (rectangular, homogeneous int/float cells)
- Bareiss fraction-free determinant, cached per instance
- Minors, cofactors, adjugate and inverse
- Element-wise and matrix arithmetic with operator overloading
"""

from .determinant import BareissResult, bareiss, exact_divide
from .matrix import Matrix
from .validation import normalize_rows
from .value import ElementKind, Equatable, ToleranceMode, fuzzy_compare

__all__ = [
    "Matrix",
    "ElementKind",
    "Equatable",
    "ToleranceMode",
    "fuzzy_compare",
    "BareissResult",
    "bareiss",
    "exact_divide",
    "normalize_rows",
]
