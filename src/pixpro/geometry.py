"""
Integer rectangle geometry for region processing.

Rectangles describe both the area to transform and the clipping bounds of
pixel buffers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from pixpro.validators import must_be_in_range, must_be_integer


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned integer rectangle.

    Attributes:
        x: Left edge (inclusive)
        y: Top edge (inclusive)
        width: Horizontal extent (>= 0)
        height: Vertical extent (>= 0)

    Example:
        >>> r = Rectangle(1, 1, 2, 2)
        >>> r.right, r.bottom
        (3, 3)
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            must_be_integer(getattr(self, name), name)
        must_be_in_range(self.width, 0, sys.maxsize, "width")
        must_be_in_range(self.height, 0, sys.maxsize, "height")

    @classmethod
    def from_size(cls, width: int, height: int) -> Rectangle:
        """Rectangle anchored at the origin."""
        return cls(0, 0, width, height)

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        """Exclusive right edge (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge (y + height)."""
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def rows(self) -> range:
        return range(self.y, self.bottom)

    def columns(self) -> range:
        return range(self.x, self.right)

    def intersect(self, other: Rectangle) -> Rectangle:
        """Overlap with ``other`` (see :func:`intersect`)."""
        return intersect(self, other)


EMPTY = Rectangle()


def intersect(a: Rectangle, b: Rectangle) -> Rectangle:
    """
    Compute the overlapping area of two rectangles.

    Args:
        a: First rectangle
        b: Second rectangle

    Returns:
        The overlap, or ``EMPTY`` when the rectangles are disjoint. Rectangles
        that only share an edge produce a zero-area rectangle on that edge.

    Example:
        >>> intersect(Rectangle(0, 0, 4, 4), Rectangle(2, 2, 4, 4))
        Rectangle(x=2, y=2, width=2, height=2)
        >>> intersect(Rectangle(0, 0, 2, 2), Rectangle(5, 5, 1, 1))
        Rectangle(x=0, y=0, width=0, height=0)
    """
    x1 = max(a.x, b.x)
    x2 = min(a.right, b.right)
    y1 = max(a.y, b.y)
    y2 = min(a.bottom, b.bottom)

    if x2 >= x1 and y2 >= y1:
        return Rectangle(x1, y1, x2 - x1, y2 - y1)

    return EMPTY
