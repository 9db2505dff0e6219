"""
Shared pytest fixtures and utilities for testing the vmatrix value objects.

This module provides:
- Sample matrices reused across test modules
- Utilities for testing Pydantic validation and serialization
- A fixture that restores the ``vmatrix`` logger after a test configures it
"""

import logging

import pytest
from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError

from vmatrix.math import Matrix


T = TypeVar('T', bound=BaseModel)


@pytest.fixture
def example_matrix() -> Matrix:
    """The 3x2 matrix [[4, -2], [-3, 0], [3, 5]]."""
    return Matrix([[4, -2], [-3, 0], [3, 5]])


@pytest.fixture
def square_3x3() -> Matrix:
    """Integer 3x3 matrix with determinant 1 and an integer inverse."""
    return Matrix([[1, 2, 3], [0, 1, 4], [5, 6, 0]])


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_type: str | None = None,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to pass to model
            expected_type: Expected error type (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(**data)

        error = exc_info.value
        if expected_type:
            assert any(
                expected_type in str(e['type']).lower() for e in error.errors()
            ), f"Expected error type containing '{expected_type}' not found"

        return error

    return _assert_validation


@pytest.fixture
def assert_serializable():
    """Helper to assert that a model survives a JSON round trip."""
    def _assert_serialization(model: BaseModel, model_class: Type[T]) -> T:
        """
        Assert that a model can be serialized to JSON and reconstructed.

        Args:
            model: The model instance to test
            model_class: The model class for reconstruction

        Returns:
            The reconstructed model
        """
        serialized = model.model_dump_json()
        reconstructed = model_class.model_validate_json(serialized)

        assert reconstructed.model_dump_json() == serialized

        return reconstructed

    return _assert_serialization


@pytest.fixture
def restore_package_logger():
    """Remove handlers and level set on the ``vmatrix`` logger during a test."""
    package_logger = logging.getLogger("vmatrix")
    level = package_logger.level
    handlers = list(package_logger.handlers)
    yield package_logger
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
