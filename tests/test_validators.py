"""Tests for range guards and validation decorators."""

import numbers

import numpy as np
import pytest

from pixpro import ArgumentRangeError, must_be_in_range
from pixpro.validators import must_be_integer, validate_positive, validate_range, validate_type


class _Target:
    @validate_type(numbers.Integral, "level")
    @validate_range(-10, 10, "level")
    def set_level(self, level: int = 0) -> int:
        return level

    @validate_positive("workers")
    def set_workers(self, workers: int | None = None):
        return workers

    @validate_type(numbers.Integral, "threads", allow_none=True)
    def set_threads(self, threads: int | None = None):
        return threads


class TestMustBeInRange:
    """Test the construction-time range guard."""

    def test_in_range_is_noop(self):
        """Test values on and inside the bounds pass."""
        must_be_in_range(-100, -100, 100, "brightness")
        must_be_in_range(0, -100, 100, "brightness")
        must_be_in_range(100, -100, 100, "brightness")
        must_be_in_range(np.int64(5), 0, 10, "value")

    def test_out_of_range_raises(self):
        """Test error carries the parameter name and bounds."""
        with pytest.raises(ArgumentRangeError) as exc_info:
            must_be_in_range(150, -100, 100, "brightness")

        error = exc_info.value
        assert error.param_name == "brightness"
        assert error.value == 150
        assert error.min_val == -100
        assert error.max_val == 100
        assert "brightness=150" in str(error)
        assert "[-100, 100]" in str(error)

    def test_is_value_error(self):
        """Test ArgumentRangeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            must_be_in_range(-1, 0, 1, "value")

    def test_non_numeric_raises_type_error(self):
        """Test non-numbers are rejected."""
        with pytest.raises(TypeError, match="must be a number"):
            must_be_in_range("5", 0, 10, "value")

        with pytest.raises(TypeError):
            must_be_in_range(True, 0, 10, "value")


class TestDecorators:
    """Test validation decorators."""

    def test_validate_range_positional_and_keyword(self):
        """Test both call styles are validated."""
        target = _Target()

        assert target.set_level(5) == 5
        assert target.set_level(level=-10) == -10
        assert target.set_level() == 0

        with pytest.raises(ArgumentRangeError):
            target.set_level(11)

        with pytest.raises(ArgumentRangeError):
            target.set_level(level=-11)

    def test_validate_type_rejects_float_and_bool(self):
        """Test integral type check."""
        target = _Target()

        with pytest.raises(TypeError, match="level must be Integral"):
            target.set_level(1.5)

        with pytest.raises(TypeError):
            target.set_level(True)

    def test_validate_positive(self):
        """Test positive check passes None through."""
        target = _Target()

        assert target.set_workers(None) is None
        assert target.set_workers(4) == 4

        with pytest.raises(ValueError, match="must be positive"):
            target.set_workers(0)

        with pytest.raises(TypeError):
            target.set_workers("4")

    def test_validate_type_allow_none(self):
        """Test allow_none lets None through but still rejects floats."""
        target = _Target()

        assert target.set_threads(None) is None
        assert target.set_threads(np.int64(2)) == 2

        with pytest.raises(TypeError, match="threads"):
            target.set_threads(2.5)


class TestMustBeInteger:
    """Test the integer guard."""

    def test_accepts_integers(self):
        """Test Python and NumPy integers pass."""
        must_be_integer(3, "x")
        must_be_integer(np.int32(-3), "x")

    @pytest.mark.parametrize("value", [2.5, 2.0, True, "2", None])
    def test_rejects_non_integers(self, value):
        """Test floats, bools, strings and None raise TypeError."""
        with pytest.raises(TypeError, match="x must be an integer"):
            must_be_integer(value, "x")
