"""Tests for the Determinant expansion engine."""

import logging
import math

import pytest
from pydantic import ValidationError

from math_matrix.core.errors import IndexOutOfRangeError, InappropriateNumberOfItemsError
from math_matrix.linalg import Determinant, Matrix


class TestDeterminantConstruction:
    """Test construction from flat item sequences."""

    @pytest.mark.parametrize("count", range(0, 30))
    def test_construction_requires_perfect_square_count(self, count):
        """Test construction succeeds exactly when the count is a perfect square."""
        items = list(range(count))
        if math.isqrt(count) ** 2 == count:
            det = Determinant(items)
            assert det.size == math.isqrt(count)
            assert len(det.items) == count
        else:
            with pytest.raises(InappropriateNumberOfItemsError):
                Determinant(items)

    def test_invalid_count_is_a_value_error(self):
        """Test the construction error can be caught as ValueError."""
        with pytest.raises(ValueError):
            Determinant([1, 2, 3])

    def test_items_are_stored_as_floats(self):
        """Test integer input is coerced to floats."""
        det = Determinant([1, 2, 3, 4])
        assert det.items == (1.0, 2.0, 3.0, 4.0)
        assert all(isinstance(item, float) for item in det.items)

    def test_determinant_is_frozen(self):
        """Test a Determinant cannot be modified after construction."""
        det = Determinant([1, 2, 3, 4])
        with pytest.raises(ValidationError):
            det.size = 3

    def test_determinant_is_a_snapshot(self):
        """Test later mutations of the source matrix are not observed."""
        matrix = Matrix([1, 2, 3, 4], (2, 2))
        det = matrix.to_determinant()
        matrix.set(1, 1, 100)
        assert det.value() == -2.0
        assert matrix.determinant() == 394.0


class TestDeterminantValue:
    """Test the scalar determinant."""

    @pytest.mark.parametrize(
        "items,expected",
        [
            ([5], 5),
            ([1], 1),
            ([1, 2, 3, 4], -2),
            ([1, 2, 3, 4, 5, 6, 7, 8, 9], 0),
            ([9, 8, 4, 8, 3, 2, 4, 3, 2], -16),
            ([1, 3, 5, 9, 1, 3, 1, 7, 4, 3, 9, 7, 5, 2, 0, 9], -376),
            (
                [
                    9, 8, 4, 4, 78, 8, 3, 2, 56, 45, 43, 13, 23, 42, 99, 1, 35, 4, 77, 108,
                    25, 1, 87, 199, 78,
                ],
                -283039494,
            ),
        ],
    )
    def test_known_values(self, items, expected):
        """Test determinants of integer grids are exact."""
        assert Determinant(items).value() == expected

    def test_empty_grid_is_zero(self):
        """Test the empty grid evaluates to 0."""
        det = Determinant([])
        assert det.size == 0
        assert det.value() == 0

    @pytest.mark.parametrize("size", [1, 2, 3, 4, 5])
    def test_identity_is_one(self, size):
        """Test the identity of any order has determinant 1."""
        det = Matrix.identity_matrix(size).to_determinant()
        assert det.value() == 1.0

    @pytest.mark.parametrize(
        "items",
        [
            [1, 2, 3, 1, 2, 3, 4, 5, 6],
            [2, 1, 0, 3, 5, 4, 7, 1, 2, 1, 0, 3, 9, 8, 6, 4],
        ],
    )
    def test_two_identical_rows_give_zero(self, items):
        """Test a grid with two identical rows is singular."""
        assert Determinant(items).value() == 0

    def test_fractional_values(self):
        """Test the 2x2 closed form on floats."""
        assert Determinant([0.1, 0.2, 0.3, 0.4]).value() == pytest.approx(-0.02)

    def test_repeated_calls_are_bit_identical(self):
        """Test the fixed expansion order gives reproducible floats."""
        det = Determinant([0.1, 0.7, 0.3, 0.9, 0.2, 0.6, 0.5, 0.8, 0.4])
        assert det.value() == det.value()

    def test_large_expansion_logs_warning(self, settings_env, caplog):
        """Test a warning is logged above the configured maximum order."""
        settings_env(MAX_ORDER=2)
        caplog.set_level(logging.WARNING, logger="math_matrix.linalg.determinant")

        Determinant([1, 2, 3, 4, 5, 6, 7, 8, 9]).value()

        assert any("exceeds" in record.getMessage() for record in caplog.records)

    def test_cofactor_does_not_warn(self, settings_env, caplog):
        """Test cofactors skip the order warning so adjugates do not repeat it."""
        settings_env(MAX_ORDER=2)
        caplog.set_level(logging.WARNING, logger="math_matrix.linalg.determinant")

        Determinant([1, 2, 3, 4, 5, 6, 7, 8, 9]).cofactor(2, 2)

        assert not any("exceeds" in record.getMessage() for record in caplog.records)


class TestDeterminantCofactor:
    """Test signed cofactors at 1-based positions."""

    def test_cofactors_of_2x2(self):
        """Test every cofactor of [[1, 2], [3, 4]]."""
        det = Determinant([1, 2, 3, 4])
        assert det.cofactor(1, 1) == 4
        assert det.cofactor(1, 2) == -3
        assert det.cofactor(2, 1) == -2
        assert det.cofactor(2, 2) == 1

    def test_cofactors_of_sequential_3x3(self):
        """Test cofactors of the 1..9 grid."""
        det = Determinant([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert det.cofactor(1, 2) == 6
        assert det.cofactor(1, 1) == -3
        assert det.cofactor(2, 2) == -12

    def test_minor_is_unsigned(self):
        """Test minor() drops the cofactor sign."""
        det = Determinant([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert det.minor(1, 2) == -6
        assert det.cofactor(1, 2) == -det.minor(1, 2)

    def test_cofactor_of_1x1_is_one(self):
        """Test the empty minor of a 1x1 grid counts as 1."""
        assert Determinant([7]).cofactor(1, 1) == 1

    def test_first_column_expansion_matches_value(self):
        """Test sum of a[i][1] * cofactor(i, 1) equals the determinant."""
        items = [1, 3, 5, 9, 1, 3, 1, 7, 4, 3, 9, 7, 5, 2, 0, 9]
        det = Determinant(items)
        expansion = sum(items[(i - 1) * 4] * det.cofactor(i, 1) for i in range(1, 5))
        assert expansion == det.value()

    @pytest.mark.parametrize("position", [(0, 1), (1, 0), (3, 1), (1, 3), (0, 0), (-1, 1)])
    def test_out_of_range_positions_raise(self, position):
        """Test cofactor bounds are 1..size on both axes."""
        det = Determinant([1, 2, 3, 4])
        with pytest.raises(IndexOutOfRangeError):
            det.cofactor(*position)

    def test_out_of_range_is_an_index_error(self):
        """Test the bounds error can be caught as IndexError."""
        with pytest.raises(IndexError):
            Determinant([]).cofactor(1, 1)
