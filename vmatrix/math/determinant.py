"""
Determinant engine: Bareiss fraction-free elimination.

For an n x n matrix the algorithm runs n - 1 pivot steps. At step k every
entry below and to the right of the pivot is replaced by

    (a[k][k] * a[i][j] - a[i][k] * a[k][j]) / a[k-1][k-1]

(no division at k = 0). With integer input every division is exact, so
integer matrices keep integer determinants. A zero pivot is replaced by the
first row below it with a non-zero entry in the pivot column, flipping the
sign; if there is none the determinant is a zero of the input kind (0 or 0.0).

Reference: https://en.wikipedia.org/wiki/Bareiss_algorithm
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from ..core.logging import get_context_logger

logger = get_context_logger(__name__, component="determinant")

Number = Union[int, float]


@dataclass(frozen=True)
class BareissResult:
    """Outcome of one determinant computation."""

    value: Number
    swaps: int
    early_exit: bool = False


def exact_divide(numerator: Number, denominator: Number) -> Number:
    """
    Divide keeping integers when the quotient is whole.

    Two ints that divide evenly give an int; anything else is true division.

    Examples:
        >>> exact_divide(12, 4)
        3
        >>> exact_divide(7, 2)
        3.5
        >>> exact_divide(6.0, 3)
        2.0
    """
    if type(numerator) is int and type(denominator) is int:
        quotient, remainder = divmod(numerator, denominator)
        if remainder == 0:
            return quotient
    return numerator / denominator


def bareiss(rows: Sequence[Sequence[Number]]) -> BareissResult:
    """
    Compute the determinant of a square matrix.

    Args:
        rows: Row-major square matrix (not modified)

    Returns:
        BareissResult with the determinant and the number of row swaps
    """
    n = len(rows)
    work = [list(row) for row in rows]
    sign = 1
    swaps = 0

    for k in range(n - 1):
        if work[k][k] == 0:
            for m in range(k + 1, n):
                if work[m][k] != 0:
                    work[k], work[m] = work[m], work[k]
                    sign = -sign
                    swaps += 1
                    break
            else:
                # No non-zero entry left in column k
                logger.debug(
                    "Zero column found during elimination",
                    extra_data={"size": n, "step": k, "swaps": swaps},
                )
                zero = 0.0 if any(type(cell) is float for row in rows for cell in row) else 0
                return BareissResult(value=zero, swaps=swaps, early_exit=True)

        pivot = work[k][k]
        previous = work[k - 1][k - 1] if k > 0 else None
        for i in range(k + 1, n):
            for j in range(k + 1, n):
                value = pivot * work[i][j] - work[i][k] * work[k][j]
                if previous is not None:
                    value = exact_divide(value, previous)
                work[i][j] = value

    determinant = sign * work[n - 1][n - 1]
    logger.debug(
        "Determinant computed",
        extra_data={"size": n, "swaps": swaps},
    )
    return BareissResult(value=determinant, swaps=swaps)
