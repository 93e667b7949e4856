"""math-matrix - dense matrix arithmetic with exact cofactor expansion.

Subpackages:
- math_matrix.linalg: Matrix and Determinant
- math_matrix.core: configuration, logging and error types
"""

from .core.errors import (
    IncorrectOrdersForOperationError,
    IndexOutOfRangeError,
    InappropriateNumberOfItemsError,
    MatrixError,
    SingularMatrixError,
    TraceExistsOnlyForSquareMatricesError,
)
from .linalg import Determinant, Matrix

__version__ = "0.1.0"

__all__ = [
    "Determinant",
    "Matrix",
    "MatrixError",
    "InappropriateNumberOfItemsError",
    "TraceExistsOnlyForSquareMatricesError",
    "IncorrectOrdersForOperationError",
    "IndexOutOfRangeError",
    "SingularMatrixError",
]
