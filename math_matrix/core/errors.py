"""
Library exceptions and error reporting.

Defines the matrix error taxonomy and a helper that renders any exception
into a consistent, serializable error payload.
"""

from typing import Any, Dict, Optional, Tuple

from .logging import get_context_logger

logger = get_context_logger(__name__)


# Custom Exceptions

class MatrixError(Exception):
    """Base exception for matrix errors"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InappropriateNumberOfItemsError(MatrixError, ValueError):
    """Raised when the item count cannot fill the requested order"""

    def __init__(self, count: int, order: Optional[Tuple[int, int]] = None):
        if order is None:
            message = f"Inappropriate number of items: {count} items cannot be arranged in a square"
        else:
            message = f"Inappropriate number of items: {count} items for order {order[0]}x{order[1]}"
        super().__init__(
            message=message,
            details={"count": count, "order": order}
        )


class TraceExistsOnlyForSquareMatricesError(MatrixError, ValueError):
    """Raised when a trace is requested from a non-square matrix"""

    def __init__(self, order: Tuple[int, int]):
        super().__init__(
            message=f"Traces exist only for square matrices, got order {order[0]}x{order[1]}",
            details={"order": order}
        )


class IncorrectOrdersForOperationError(MatrixError, ValueError):
    """Raised when matrix orders do not fit an operation"""

    def __init__(
        self,
        operation: str,
        left: Tuple[int, int],
        right: Optional[Tuple[int, int]] = None
    ):
        if right is None:
            message = f"Incorrect order {left[0]}x{left[1]} for {operation}"
        else:
            message = (
                f"Incorrect orders of matrices for {operation}: "
                f"{left[0]}x{left[1]} and {right[0]}x{right[1]}"
            )
        super().__init__(
            message=message,
            details={"operation": operation, "left": left, "right": right}
        )


class IndexOutOfRangeError(MatrixError, IndexError):
    """Raised for 1-based coordinates outside the matrix bounds"""

    def __init__(self, index: Tuple[int, ...], bounds: Tuple[int, int]):
        super().__init__(
            message=f"Index {index} out of range for order {bounds[0]}x{bounds[1]}",
            details={"index": index, "bounds": bounds}
        )


class SingularMatrixError(MatrixError, ValueError):
    """Raised when inverting a matrix whose determinant is zero"""

    def __init__(self, determinant: float):
        super().__init__(
            message="Matrix is singular (not invertible)",
            details={"determinant": determinant}
        )


# Error payloads

def describe_error(error: Exception, include_details: bool = True) -> Dict[str, Any]:
    """Create a standardized error payload"""

    error_data: Dict[str, Any] = {
        "error": {
            "type": error.__class__.__name__,
            "message": str(error),
        }
    }

    # Add details for matrix errors
    if isinstance(error, MatrixError) and include_details:
        error_data["error"]["details"] = error.details

    logger.debug(
        f"Error occurred: {error}",
        extra_data={
            "error_type": error.__class__.__name__,
            **(error.details if isinstance(error, MatrixError) else {})
        }
    )

    return error_data
