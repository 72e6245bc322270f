"""
Geometry - Integer rectangles shared by data space and pixel space.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with integer origin and size."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_point(cls, x: int, y: int) -> "Rect":
        """Zero-size rectangle anchored at a single point."""
        return cls(int(x), int(y), 0, 0)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def grow(self, dx: int, dy: int) -> "Rect":
        """Return a copy extended by dx on the left and right, dy on top and bottom."""
        return Rect(self.x - dx, self.y - dy, self.width + 2 * dx, self.height + 2 * dy)

    def add_border(self, border: int) -> "Rect":
        return self.grow(border, border)

    def include(self, x: int, y: int) -> "Rect":
        """
        Return the smallest rectangle covering this one and the given point.

        Args:
            x: Point x coordinate.
            y: Point y coordinate.

        Returns:
            New Rect; self is never modified.
        """
        left = min(self.x, x)
        top = min(self.y, y)
        right = max(self.right, x)
        bottom = max(self.bottom, y)
        return Rect(left, top, right - left, bottom - top)
