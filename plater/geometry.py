"""Basic points, rectangles and triangles in the plate plane."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Point3:
    """A point in space, in micrometres."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class FPoint2:
    """A point or vector in the plane."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Rectangle:
    """An axis-aligned rectangle with inclusive bounds."""

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0

    def overlaps(self, other: Rectangle) -> bool:
        return (self.x1 <= other.x2 and self.x2 >= other.x1
                and self.y1 <= other.y2 and self.y2 >= other.y1)

    def contains(self, x: float, y: float) -> bool:
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2


def _side(pt: FPoint2, normal: FPoint2, segment: FPoint2) -> bool:
    scalar_n = normal.x * pt.x + normal.y * pt.y
    if scalar_n == 0:
        return segment.x * pt.x + segment.y * pt.y > 0
    return scalar_n < 0


class Triangle:
    """A triangle in the plane; only counter-clockwise triangles contain points."""

    def __init__(self, a: FPoint2, b: FPoint2, c: FPoint2):
        self.set_points(a, b, c)

    def set_points(self, a: FPoint2, b: FPoint2, c: FPoint2) -> None:
        self.a, self.b, self.c = a, b, c
        self._ab = FPoint2(b.x - a.x, b.y - a.y)
        self._bc = FPoint2(c.x - b.x, c.y - b.y)
        self._ca = FPoint2(a.x - c.x, a.y - c.y)
        self._n_ab = FPoint2(self._ab.y, -self._ab.x)
        self._n_bc = FPoint2(self._bc.y, -self._bc.x)
        self._n_ca = FPoint2(self._ca.y, -self._ca.x)
        self.box = Rectangle(
            min(a.x, b.x, c.x), min(a.y, b.y, c.y),
            max(a.x, b.x, c.x), max(a.y, b.y, c.y),
        )

    def contains_point(self, x: float, y: float) -> bool:
        a, b, c = self.a, self.b, self.c
        return (_side(FPoint2(x - a.x, y - a.y), self._n_ab, self._ab)
                and _side(FPoint2(x - b.x, y - b.y), self._n_bc, self._bc)
                and _side(FPoint2(x - c.x, y - c.y), self._n_ca, self._ca))

    def contains_rect(self, rect: Rectangle) -> bool:
        return (self.contains_point(rect.x1, rect.y1)
                and self.contains_point(rect.x1, rect.y2)
                and self.contains_point(rect.x2, rect.y1)
                and self.contains_point(rect.x2, rect.y2))