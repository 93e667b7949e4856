"""
Determinant of a square grid by Laplace (cofactor) expansion.

A Determinant is an immutable snapshot of a square grid's row-major values.
Its value is computed by recursive minor expansion along the first column,
always in increasing row order, so the floating-point summation order is
the same on every call. Nothing is memoized: the cost is factorial in the
order of the grid, which keeps this practical for small matrices only.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..core.config import get_settings
from ..core.errors import InappropriateNumberOfItemsError, IndexOutOfRangeError
from ..core.logging import get_context_logger

logger = get_context_logger(__name__, component="determinant")


def _strike(items: Sequence[float], size: int, row: int, column: int) -> list[float]:
    """Drop one row and one column (0-based) from a flat size x size grid."""
    return [
        item
        for index, item in enumerate(items)
        if index // size != row and index % size != column
    ]


def _expand(items: Sequence[float]) -> float:
    """Recursive first-column expansion of a flat square grid."""
    if not items:
        return 0.0

    if len(items) == 1:
        return items[0]

    if len(items) == 4:
        return items[0] * items[3] - items[1] * items[2]

    size = math.isqrt(len(items))
    value = 0.0
    for i in range(size):
        item = items[i * size]
        minor = _expand(_strike(items, size, i, 0))
        if i % 2 == 0:
            value += minor * item
        else:
            value -= minor * item
    return value


class Determinant(BaseModel):
    """
    Square grid snapshot with determinant and cofactor computation.

    Example:
        >>> Determinant([9, 8, 4, 8, 3, 2, 4, 3, 2]).value()
        -16.0
        >>> Determinant([1, 2, 3, 4]).cofactor(1, 1)
        4.0
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[float, ...] = Field(default_factory=tuple, description="Row-major grid values")
    size: int = Field(default=0, ge=0, description="Number of rows (and columns)")

    def __init__(self, items: Iterable[float], **kwargs) -> None:
        """
        Snapshot the given values.

        Args:
            items: Row-major values; their count must be a perfect square

        Raises:
            InappropriateNumberOfItemsError: If the count is not a perfect square
        """
        values = tuple(items)
        size = math.isqrt(len(values))
        if size * size != len(values):
            raise InappropriateNumberOfItemsError(len(values))
        super().__init__(items=values, size=size, **kwargs)

    def _check_position(self, i: int, j: int) -> None:
        if i < 1 or i > self.size or j < 1 or j > self.size:
            raise IndexOutOfRangeError((i, j), (self.size, self.size))

    def warn_if_large(self, operation: str) -> None:
        """Log a warning when the order exceeds ``MAX_ORDER``."""
        max_order = get_settings().MAX_ORDER
        if self.size > max_order:
            logger.warning(
                f"Cofactor expansion of order {self.size} exceeds {max_order}; expect factorial cost",
                extra_data={"operation": operation, "size": self.size},
            )

    def value(self) -> float:
        """
        Calculate the value of the determinant.

        An empty grid evaluates to 0.
        """
        self.warn_if_large("value")
        logger.debug("Expanding determinant", extra_data={"size": self.size})
        return _expand(self.items)

    def minor(self, i: int, j: int) -> float:
        """
        Determinant of the grid left after deleting row i and column j.

        Args:
            i: Row index (1-based)
            j: Column index (1-based)

        Raises:
            IndexOutOfRangeError: If (i, j) is outside the grid
        """
        self._check_position(i, j)
        if self.size == 1:
            # the empty grid left over from a 1x1 determinant counts as 1
            return 1.0
        return _expand(_strike(self.items, self.size, i - 1, j - 1))

    def cofactor(self, i: int, j: int) -> float:
        """
        Signed minor at (i, j), with sign (-1)**i * (-1)**j.

        Args:
            i: Row index (1-based)
            j: Column index (1-based)

        Returns:
            The cofactor value

        Raises:
            IndexOutOfRangeError: If (i, j) is outside the grid
        """
        self._check_position(i, j)
        sign = (-1) ** i * (-1) ** j
        return sign * self.minor(i, j)
