"""
Core infrastructure: configuration, logging and error types.
"""

from .config import Settings, get_settings, settings
from .errors import (
    IncorrectOrdersForOperationError,
    IndexOutOfRangeError,
    InappropriateNumberOfItemsError,
    MatrixError,
    SingularMatrixError,
    TraceExistsOnlyForSquareMatricesError,
    describe_error,
)
from .logging import get_context_logger, get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "MatrixError",
    "InappropriateNumberOfItemsError",
    "TraceExistsOnlyForSquareMatricesError",
    "IncorrectOrdersForOperationError",
    "IndexOutOfRangeError",
    "SingularMatrixError",
    "describe_error",
    "get_logger",
    "get_context_logger",
    "setup_logging",
]
