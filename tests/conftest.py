"""
Shared pytest fixtures and utilities for testing the mathinput value types.

This module provides:
- Utilities for testing Pydantic validation and serialization
- A log capture fixture bound to the package logger
"""

import logging

import pytest
from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError

from mathinput.core.config import settings


T = TypeVar('T', bound=BaseModel)


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to pass to model
            expected_field: Expected field name in error (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(**data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        return error

    return _assert_validation


@pytest.fixture
def assert_serializable():
    """Helper to assert that a model can be serialized and deserialized."""
    def _assert_serialization(model: BaseModel, model_class: Type[T]) -> T:
        """
        Assert that a model can be serialized to dict and reconstructed.

        Returns:
            The reconstructed model
        """
        serialized = model.model_dump()
        reconstructed = model_class(**serialized)
        assert reconstructed.model_dump() == serialized
        return reconstructed

    return _assert_serialization


@pytest.fixture
def kernel_debug_logs(caplog):
    """Capture DEBUG records emitted under the package logger."""
    caplog.set_level(logging.DEBUG, logger=settings.LOGGER_NAME)
    return caplog
