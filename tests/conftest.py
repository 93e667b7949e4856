"""
Shared pytest fixtures for math_matrix tests.

This module provides:
- Sample matrices used across the linalg tests
- A helper for overriding settings through environment variables
- Isolation of the package logger for tests that configure logging
"""

import logging

import pytest

from math_matrix.core.config import get_settings
from math_matrix.core.logging import PACKAGE_LOGGER
from math_matrix.linalg import Matrix


@pytest.fixture
def sequential_matrix() -> Matrix:
    """3x3 matrix 1..9 (singular)."""
    return Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9], (3, 3))


@pytest.fixture
def invertible_matrix() -> Matrix:
    """3x3 matrix with determinant 27."""
    return Matrix([1, 6, 4, 2, 5, 7, 4, 2, 9], (3, 3))


@pytest.fixture
def tall_matrix() -> Matrix:
    """5x3 matrix used by the accessor tests."""
    return Matrix([6, 4, 87, 3, 6, 89, 6, 8, 4, 2, 45, 2, 5, 7, 9], (5, 3))


@pytest.fixture
def settings_env(monkeypatch):
    """Factory that sets MATH_MATRIX_* variables and reloads cached settings."""
    def _apply(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"MATH_MATRIX_{key}", str(value))
        get_settings.cache_clear()
        return get_settings()

    get_settings.cache_clear()
    yield _apply
    get_settings.cache_clear()


@pytest.fixture
def package_logger():
    """Undo setup_logging() after a test reconfigures the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
