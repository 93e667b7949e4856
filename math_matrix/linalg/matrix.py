"""
Dense matrix over a flat, row-major list of floats.

Indexing is 1-based throughout: element (i, j) lives at flat index
``(i - 1) * cols + (j - 1)``. Square matrices derive a Determinant on demand
and build their adjugate and inverse from its cofactors.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.config import get_settings
from ..core.errors import (
    IncorrectOrdersForOperationError,
    IndexOutOfRangeError,
    InappropriateNumberOfItemsError,
    SingularMatrixError,
    TraceExistsOnlyForSquareMatricesError,
)
from ..core.logging import get_context_logger
from .determinant import Determinant
from .tolerance import fuzzy_compare, round_half_away

logger = get_context_logger(__name__, component="matrix")


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_item(item: float) -> str:
    """Integral floats print without a fractional part."""
    if math.isfinite(item) and item.is_integer():
        return str(int(item))
    return repr(item)


class Matrix(BaseModel):
    """
    Rectangular matrix with 1-based element access.

    Supports elementwise addition and subtraction, matrix and scalar
    multiplication, scalar division, transpose, trace, determinant,
    adjugate and inverse.

    Example:
        >>> m = Matrix([1, 6, 4, 2, 5, 7, 4, 2, 9], (3, 3))
        >>> (m * m.inverse()).round() == Matrix.identity_matrix(3)
        True
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    items: list[float] = Field(default_factory=list, description="Row-major items")
    order: tuple[int, int] = Field(default=(0, 0), description="(rows, cols)")

    def __init__(self, items: Iterable[float], order: tuple[int, int], **kwargs: Any) -> None:
        """
        Initialize a Matrix from row-major items.

        Args:
            items: Items of the matrix in row by row order
            order: (rows, cols)

        Raises:
            InappropriateNumberOfItemsError: If len(items) != rows * cols
        """
        values = list(items)
        rows, cols = order
        if rows < 0 or cols < 0 or len(values) != rows * cols:
            raise InappropriateNumberOfItemsError(len(values), (rows, cols))
        super().__init__(items=values, order=(rows, cols), **kwargs)

    @model_validator(mode="after")
    def check_item_count(self) -> Matrix:
        """Keep len(items) == rows * cols when fields are reassigned."""
        rows, cols = self.order
        if rows < 0 or cols < 0 or len(self.items) != rows * cols:
            raise InappropriateNumberOfItemsError(len(self.items), self.order)
        return self

    # Constructors

    @classmethod
    def generate(cls, function: Callable[[int, int], float], order: tuple[int, int]) -> Matrix:
        """
        Build a matrix from a function of the 1-based (i, j) position.

        Example:
            >>> Matrix.generate(lambda i, j: i * i + 3 * j - 7, (5, 5))[3, 3]
            11.0
        """
        rows, cols = order
        items = [function(i, j) for i in range(1, rows + 1) for j in range(1, cols + 1)]
        return cls(items, (rows, cols))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]] | np.ndarray) -> Matrix:
        """
        Build a matrix from nested rows or a 2-D NumPy array.

        Raises:
            InappropriateNumberOfItemsError: If the rows are ragged
        """
        if isinstance(rows, np.ndarray):
            rows = rows.tolist()

        normalized = [list(row) for row in rows]
        if not normalized:
            return cls([], (0, 0))

        width = len(normalized[0])
        items = [item for row in normalized for item in row]
        if not all(len(row) == width for row in normalized):
            raise InappropriateNumberOfItemsError(len(items), (len(normalized), width))
        return cls(items, (len(normalized), width))

    @classmethod
    def row_matrix(cls, items: Iterable[float]) -> Matrix:
        """A matrix with a single row."""
        values = list(items)
        return cls(values, (1, len(values)))

    @classmethod
    def column_matrix(cls, items: Iterable[float]) -> Matrix:
        """A matrix with a single column."""
        values = list(items)
        return cls(values, (len(values), 1))

    @classmethod
    def null_matrix(cls, order: tuple[int, int]) -> Matrix:
        """A matrix of zeros."""
        return cls.generate(lambda i, j: 0.0, order)

    @classmethod
    def square_matrix(cls, items: Iterable[float]) -> Matrix:
        """
        Arrange items in a square.

        Raises:
            InappropriateNumberOfItemsError: If the count is not a perfect square
        """
        values = list(items)
        size = math.isqrt(len(values))
        if size * size != len(values):
            raise InappropriateNumberOfItemsError(len(values))
        return cls(values, (size, size))

    @classmethod
    def diagonal_matrix(cls, items: Iterable[float]) -> Matrix:
        """A square matrix with the given items along the diagonal."""
        values = list(items)
        return cls.generate(
            lambda i, j: values[i - 1] if i == j else 0.0,
            (len(values), len(values)),
        )

    @classmethod
    def scalar_matrix(cls, item: float, size: int) -> Matrix:
        """A diagonal matrix with a single repeated value."""
        return cls.generate(lambda i, j: item if i == j else 0.0, (size, size))

    @classmethod
    def identity_matrix(cls, size: int) -> Matrix:
        """The scalar matrix of ones."""
        return cls.scalar_matrix(1.0, size)

    # Shape

    @property
    def shape(self) -> tuple[int, int]:
        """Get matrix dimensions (rows, cols)."""
        return self.order

    @property
    def is_square(self) -> bool:
        return self.order[0] == self.order[1]

    @property
    def is_horizontal(self) -> bool:
        return self.order[1] > self.order[0]

    @property
    def is_vertical(self) -> bool:
        return self.order[0] > self.order[1]

    # Element access

    def _index(self, i: int, j: int) -> int:
        rows, cols = self.order
        if i < 1 or i > rows or j < 1 or j > cols:
            raise IndexOutOfRangeError((i, j), self.order)
        return (i - 1) * cols + (j - 1)

    def get(self, i: int, j: int) -> float:
        """
        Get the item at 1-based (i, j).

        Raises:
            IndexOutOfRangeError: If (i, j) is outside the matrix
        """
        return self.items[self._index(i, j)]

    def set(self, i: int, j: int, value: float) -> None:
        """
        Replace the item at 1-based (i, j).

        Raises:
            IndexOutOfRangeError: If (i, j) is outside the matrix
        """
        self.items[self._index(i, j)] = float(value)

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return self.get(i, j)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        i, j = index
        self.set(i, j, value)

    def get_row(self, i: int) -> list[float]:
        """
        Items of the i-th row (1-based).

        Raises:
            IndexOutOfRangeError: If i is outside the matrix
        """
        rows, cols = self.order
        if i < 1 or i > rows:
            raise IndexOutOfRangeError((i,), self.order)
        return self.items[(i - 1) * cols:i * cols]

    def get_column(self, j: int) -> list[float]:
        """
        Items of the j-th column (1-based).

        Raises:
            IndexOutOfRangeError: If j is outside the matrix
        """
        cols = self.order[1]
        if j < 1 or j > cols:
            raise IndexOutOfRangeError((j,), self.order)
        return self.items[j - 1::cols]

    def copy(self) -> Matrix:
        """
        Create a deep copy of the matrix.

        Returns:
            New Matrix with copied data
        """
        return Matrix(list(self.items), self.order)

    # Derivations

    def trace(self) -> list[float]:
        """
        Diagonal items of a square matrix.

        Raises:
            TraceExistsOnlyForSquareMatricesError: If the matrix is not square
        """
        if not self.is_square:
            raise TraceExistsOnlyForSquareMatricesError(self.order)
        size = self.order[0]
        return [self.items[k * (size + 1)] for k in range(size)]

    def trace_sum(self) -> float:
        """Sum of the diagonal items."""
        return float(sum(self.trace()))

    def transpose(self) -> Matrix:
        """Return a new matrix with rows and columns swapped."""
        return Matrix.generate(lambda i, j: self.get(j, i), (self.order[1], self.order[0]))

    def to_determinant(self) -> Determinant:
        """
        Snapshot the items of a square matrix into a Determinant.

        Raises:
            IncorrectOrdersForOperationError: If the matrix is not square
        """
        if not self.is_square:
            raise IncorrectOrdersForOperationError("determinant", self.order)
        return Determinant(list(self.items))

    def determinant(self) -> float:
        """Scalar determinant of a square matrix."""
        return self.to_determinant().value()

    def adjoint(self) -> Matrix:
        """
        Adjugate: the transpose of the matrix of cofactors.

        Raises:
            IncorrectOrdersForOperationError: If the matrix is not square
        """
        det = self.to_determinant()
        det.warn_if_large("adjoint")
        return self._adjugate(det)

    def _adjugate(self, det: Determinant) -> Matrix:
        logger.debug("Building adjugate", extra_data={"order": self.order})
        return Matrix.generate(det.cofactor, self.order).transpose()

    def inverse(self) -> Matrix:
        """
        Adjugate divided by the determinant.

        Raises:
            IncorrectOrdersForOperationError: If the matrix is not square
            SingularMatrixError: If the determinant is zero (within
                ``SINGULAR_TOLERANCE``) or not finite
        """
        det = self.to_determinant()
        value = det.value()
        if not math.isfinite(value) or abs(value) <= get_settings().SINGULAR_TOLERANCE:
            logger.debug(
                "Refusing to invert singular matrix",
                extra_data={"order": self.order, "determinant": value},
            )
            raise SingularMatrixError(value)
        return self._adjugate(det) / value

    def round(self) -> Matrix:
        """New matrix with every item rounded to the nearest integral float."""
        return Matrix([round_half_away(item) for item in self.items], self.order)

    def round_mut(self) -> None:
        """Round every item in place."""
        self.items = [round_half_away(item) for item in self.items]

    # Comparison

    def __eq__(self, other: Any) -> bool:
        """Exact, item-by-item equality."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.order == other.order and self.items == other.items

    def compare(
        self,
        other: Any,
        tolerance: float | None = None,
        mode: str | None = None,
    ) -> bool:
        """Compare matrices element-wise within a tolerance."""
        if not isinstance(other, Matrix):
            return False

        if self.order != other.order:
            return False

        config = get_settings()
        tolerance = config.COMPARE_TOLERANCE if tolerance is None else tolerance
        mode = config.COMPARE_MODE if mode is None else mode
        return all(
            fuzzy_compare(a, b, tolerance, mode) for a, b in zip(self.items, other.items)
        )

    # Arithmetic operators

    def _check_same_order(self, other: Matrix, operation: str) -> None:
        if self.order != other.order:
            raise IncorrectOrdersForOperationError(operation, self.order, other.order)

    def _multiply(self, other: Matrix) -> Matrix:
        if self.order[1] != other.order[0]:
            raise IncorrectOrdersForOperationError("multiplication", self.order, other.order)
        return Matrix.generate(
            lambda i, j: sum(a * b for a, b in zip(self.get_row(i), other.get_column(j))),
            (self.order[0], other.order[1]),
        )

    def __add__(self, other: Any) -> Matrix:
        """Matrix addition."""
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_order(other, "addition")
        return Matrix([a + b for a, b in zip(self.items, other.items)], self.order)

    def __sub__(self, other: Any) -> Matrix:
        """Matrix subtraction."""
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_order(other, "subtraction")
        return Matrix([a - b for a, b in zip(self.items, other.items)], self.order)

    def __mul__(self, other: Any) -> Matrix:
        """Matrix multiplication or scalar multiplication."""
        if isinstance(other, Matrix):
            return self._multiply(other)
        if _is_scalar(other):
            return Matrix([item * other for item in self.items], self.order)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        """Right scalar multiplication."""
        if _is_scalar(other):
            return Matrix([other * item for item in self.items], self.order)
        return NotImplemented

    def __truediv__(self, other: Any) -> Matrix:
        """Scalar division."""
        if _is_scalar(other):
            return Matrix([item / other for item in self.items], self.order)
        return NotImplemented

    def __pow__(self, exponent: Any) -> Matrix:
        """
        Integer power of a square matrix.

        A negative exponent raises the inverse to the absolute power.
        """
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            raise TypeError(f"Matrix exponent must be an integer, got {type(exponent).__name__}")
        if not self.is_square:
            raise IncorrectOrdersForOperationError("power", self.order)

        base = self.inverse() if exponent < 0 else self
        result = Matrix.identity_matrix(self.order[0])
        for _ in range(abs(exponent)):
            result = result * base
        return result

    def __neg__(self) -> Matrix:
        """Unary negation."""
        return Matrix([-item for item in self.items], self.order)

    def __pos__(self) -> Matrix:
        """Unary positive."""
        return self.copy()

    # In-place operators mutate the left operand

    def _assign(self, result: Matrix) -> Matrix:
        # both fields at once; result already satisfies check_item_count
        self.__dict__.update(items=result.items, order=result.order)
        return self

    def __iadd__(self, other: Any) -> Matrix:
        result = self.__add__(other)
        return result if result is NotImplemented else self._assign(result)

    def __isub__(self, other: Any) -> Matrix:
        result = self.__sub__(other)
        return result if result is NotImplemented else self._assign(result)

    def __imul__(self, other: Any) -> Matrix:
        result = self.__mul__(other)
        return result if result is NotImplemented else self._assign(result)

    def __itruediv__(self, other: Any) -> Matrix:
        result = self.__truediv__(other)
        return result if result is NotImplemented else self._assign(result)

    # Output formats

    def to_string(self) -> str:
        """Items padded to the widest item, one row per line."""
        labels = [_format_item(item) for item in self.items]
        width = max((len(label) for label in labels), default=0)
        cols = self.order[1]

        text = ""
        for index, label in enumerate(labels):
            text += f"{label:<{width}}  "
            if (index + 1) % cols == 0:
                text += "\n"
        return text

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        rows_tex = " \\\\ ".join(
            " & ".join(_format_item(item) for item in row) for row in self.to_python()
        )
        return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"

    def to_python(self) -> list[list[float]]:
        """Convert to Python nested list."""
        return [self.get_row(i) for i in range(1, self.order[0] + 1)]

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array."""
        return np.array(self.items, dtype=float).reshape(self.order)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self.items!r}, order={self.order!r})"
