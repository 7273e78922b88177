"""Tests for Rectangle geometry and intersection."""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from pixpro import ArgumentRangeError, Rectangle, intersect
from pixpro.geometry import EMPTY


class TestRectangle:
    """Test Rectangle construction and derived edges."""

    def test_derived_edges(self):
        """Test right/bottom are exclusive edges."""
        r = Rectangle(1, 2, 3, 4)

        assert r.left == 1
        assert r.top == 2
        assert r.right == 4
        assert r.bottom == 6
        assert r.area == 12
        assert not r.is_empty

    def test_from_size(self):
        """Test origin-anchored constructor."""
        assert Rectangle.from_size(5, 7) == Rectangle(0, 0, 5, 7)

    def test_negative_size_rejected(self):
        """Test negative width/height raise ArgumentRangeError."""
        with pytest.raises(ArgumentRangeError, match="width"):
            Rectangle(0, 0, -1, 2)

        with pytest.raises(ArgumentRangeError, match="height"):
            Rectangle(0, 0, 2, -1)

    @pytest.mark.parametrize(
        "fields, name",
        [
            ((0, 0, 2.5, 2), "width"),
            ((0, 0, 2, 2.0), "height"),
            ((0.5, 0, 2, 2), "x"),
            ((0, True, 2, 2), "y"),
            ((0, 0, "2", 2), "width"),
        ],
    )
    def test_non_integer_fields_rejected(self, fields, name):
        """Test every field must be an integer."""
        with pytest.raises(TypeError, match=name):
            Rectangle(*fields)

    def test_numpy_integers_accepted(self):
        """Test NumPy integer scalars are valid fields."""
        assert Rectangle(np.int32(1), np.int16(2), np.int64(3), np.int64(4)).right == 4

    def test_zero_size_is_empty(self):
        """Test zero-area rectangles report empty."""
        assert Rectangle(3, 3, 0, 5).is_empty
        assert Rectangle(3, 3, 5, 0).is_empty
        assert EMPTY.is_empty

    def test_immutable(self):
        """Test rectangles cannot be mutated."""
        r = Rectangle(0, 0, 1, 1)
        with pytest.raises(FrozenInstanceError):
            r.x = 5

    def test_contains(self):
        """Test half-open containment."""
        r = Rectangle(1, 1, 2, 2)

        assert r.contains(1, 1)
        assert r.contains(2, 2)
        assert not r.contains(3, 1)
        assert not r.contains(1, 3)
        assert not r.contains(0, 1)

    def test_rows_and_columns(self):
        """Test row/column ranges."""
        r = Rectangle(2, 5, 3, 2)

        assert list(r.rows()) == [5, 6]
        assert list(r.columns()) == [2, 3, 4]


class TestIntersect:
    """Test rectangle intersection."""

    def test_overlap(self):
        """Test partially overlapping rectangles."""
        a = Rectangle(0, 0, 4, 4)
        b = Rectangle(2, 1, 4, 2)

        assert intersect(a, b) == Rectangle(2, 1, 2, 2)
        assert a.intersect(b) == b.intersect(a)

    def test_contained(self):
        """Test a rectangle fully inside another."""
        outer = Rectangle(0, 0, 10, 10)
        inner = Rectangle(3, 4, 2, 1)

        assert intersect(outer, inner) == inner

    def test_disjoint_returns_empty(self):
        """Test disjoint rectangles give the empty rectangle."""
        result = intersect(Rectangle(0, 0, 2, 2), Rectangle(5, 5, 1, 1))

        assert result == EMPTY
        assert result.area == 0

    def test_touching_edges_zero_area(self):
        """Test rectangles sharing only an edge give a zero-area overlap on that edge."""
        result = intersect(Rectangle(0, 0, 2, 2), Rectangle(2, 0, 2, 2))

        assert result == Rectangle(2, 0, 0, 2)
        assert result.is_empty
