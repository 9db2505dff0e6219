"""
Shared building blocks for value objects.

This module provides:
- The ``Equatable`` capability implemented by every value object
- The element kinds a matrix can hold
- Fuzzy float comparison with tolerances
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class ElementKind(str, Enum):
    """Numeric kind shared by every cell of a matrix."""

    INTEGER = "integer"
    FLOAT = "floating-point"

    @classmethod
    def of(cls, value: Any) -> ElementKind | None:
        """
        Return the kind of a single cell, or None if it is not a supported number.

        ``bool`` is a subclass of ``int`` but is not accepted as a number.
        """
        if type(value) is int:
            return cls.INTEGER
        if type(value) is float:
            return cls.FLOAT
        return None


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) <= tol
    ABSOLUTE = "absolute"  # |a - b| <= tol


class Equatable(ABC):
    """
    Capability of value objects that can be compared for equality.

    Subclasses implement ``equals`` (strict, exact comparison) and route
    ``==`` and ``!=`` to it.

    Note: Concrete subclasses inherit from both BaseModel and Equatable,
    e.g. ``class Matrix(BaseModel, Equatable):``.
    """

    @abstractmethod
    def equals(self, other: Any) -> bool:
        """
        Strict equality.

        Args:
            other: Any object

        Returns:
            True only if ``other`` is the same kind of value with identical content
        """
        pass


def fuzzy_compare(
    a: float,
    b: float,
    tolerance: float,
    mode: str = ToleranceMode.RELATIVE,
    zero_level: float = 1e-14,
) -> bool:
    """
    Compare two numbers with tolerance.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value
        mode: Comparison mode (relative, absolute)
        zero_level: Magnitude below which relative comparison falls back to absolute

    Returns:
        True if values are equal within tolerance

    Raises:
        ValueError: If mode is unknown
    """
    if a == b:
        return True

    EPSILON = 1e-12

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance + EPSILON

    elif mode == ToleranceMode.RELATIVE:
        max_abs = max(abs(a), abs(b))
        # Values around zero have no meaningful relative error
        if max_abs <= zero_level:
            return True
        if min(abs(a), abs(b)) <= zero_level:
            return abs(a - b) <= tolerance + EPSILON
        return abs(a - b) / max_abs <= tolerance + EPSILON

    raise ValueError(f"Unknown tolerance mode: {mode}")
