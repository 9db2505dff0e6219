"""
Input normalization for Matrix construction.

Turns the accepted input shapes into the internal row-major store:

- a flat sequence of numbers becomes a single-row matrix
- a sequence of equal-length sequences becomes one row per sequence
- mappings are accepted as long as their keys, in insertion order, are the
  consecutive integers 0, 1, 2, ...
- NumPy arrays are converted with ``tolist()``

Every cell must be an ``int`` or a ``float`` and all cells must share the
kind of the first one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

import numpy as np

from ..core.errors import ConstructionError
from .value import ElementKind

Number = Union[int, float]
Rows = tuple[tuple[Number, ...], ...]


def _is_row_container(value: Any) -> bool:
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, Mapping, np.ndarray))


def _ordered_values(container: Any, location: str) -> list[Any]:
    """
    Return the values of a row container in index order.

    Args:
        container: Sequence, mapping or NumPy array
        location: Human readable position used in error messages (e.g. "row", "column [2]")

    Raises:
        ConstructionError: If a mapping key is not the expected consecutive integer
    """
    if isinstance(container, np.ndarray):
        return container.tolist()

    if not isinstance(container, Mapping):
        return list(container)

    values = []
    for expected, (key, value) in enumerate(container.items()):
        if type(key) is not int or key != expected:
            raise ConstructionError(
                f"The {location} index [{key}] is not a valid consecutive integer starting from 0.",
                details={"index": key, "expected": expected},
            )
        values.append(value)
    return values


def normalize_rows(data: Any) -> tuple[Rows, ElementKind]:
    """
    Validate raw input and build the row-major store.

    Args:
        data: Flat sequence, sequence of rows, mapping or NumPy array

    Returns:
        Tuple of (rows, element kind)

    Raises:
        ConstructionError: If the input does not describe a valid matrix
    """
    if not _is_row_container(data):
        raise ConstructionError(
            f"Matrix input must be a sequence, got {type(data).__name__}.",
            details={"type": type(data).__name__},
        )

    if len(data) == 0:
        raise ConstructionError(
            "The input matrix is using invalid indexes on the rows. "
            "These must be consecutive integers starting from 0."
        )

    raw_rows = _ordered_values(data, "row")

    if not _is_row_container(raw_rows[0]):
        # Flat input is promoted to a single row
        raw_rows = [raw_rows]

    normalized: list[tuple[Number, ...]] = []
    columns_count: int | None = None
    kind: ElementKind | None = None

    for row_index, raw_row in enumerate(raw_rows):
        if not _is_row_container(raw_row):
            raise ConstructionError(
                f"Row [{row_index}] is not a valid array.",
                details={"row": row_index},
            )

        cells = _ordered_values(raw_row, f"column [{row_index}]")

        if columns_count is None:
            columns_count = len(cells)
            if columns_count == 0:
                raise ConstructionError(
                    f"Row [{row_index}] has no columns.",
                    details={"row": row_index},
                )
        elif len(cells) != columns_count:
            raise ConstructionError(
                f"Row [{row_index}] has the wrong number of columns.",
                details={"row": row_index, "expected": columns_count, "actual": len(cells)},
            )

        for column_index, cell in enumerate(cells):
            cell_kind = ElementKind.of(cell)
            if cell_kind is None:
                raise ConstructionError(
                    f"The column [{row_index}][{column_index}] is not a number.",
                    details={"row": row_index, "column": column_index, "type": type(cell).__name__},
                )
            if kind is None:
                kind = cell_kind
            elif cell_kind is not kind:
                raise ConstructionError(
                    f"The column [{row_index}][{column_index}] has a different type of value.",
                    details={"row": row_index, "column": column_index, "expected": kind.value},
                )

        normalized.append(tuple(cells))

    return tuple(normalized), kind
