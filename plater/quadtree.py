"""Quad tree of triangles for fast point-in-shape queries."""

from __future__ import annotations

from collections.abc import Iterator

from .geometry import Rectangle, Triangle


class QuadTree:
    """Spatial index over a rectangle, subdivided ``depth`` times."""

    def __init__(self, x1: float, y1: float, x2: float, y2: float, depth: int):
        self.depth = depth
        self.rect = Rectangle(x1, y1, x2, y2)
        self.black = False
        self.triangles: list[Triangle] = []
        self._children: tuple[QuadTree, ...] | None = None
        if depth > 0:
            xm = (x1 + x2) / 2.0
            ym = (y1 + y2) / 2.0
            self._children = (
                QuadTree(x1, y1, xm, ym, depth - 1),
                QuadTree(xm, y1, x2, ym, depth - 1),
                QuadTree(x1, ym, xm, y2, depth - 1),
                QuadTree(xm, ym, x2, y2, depth - 1),
            )

    def add(self, triangle: Triangle) -> None:
        """Insert a triangle; nodes it covers entirely become solid."""
        if self.depth > 0:
            if self.black:
                return
            if triangle.contains_rect(self.rect):
                self.black = True
                self._children = None
                return
            if triangle.box.overlaps(self.rect):
                for child in self._children:
                    child.add(triangle)
        else:
            self.triangles.append(triangle)

    def test(self, x: float, y: float) -> bool:
        """Return True if the point lies inside any inserted triangle."""
        if not self.rect.contains(x, y):
            return False
        if self.black:
            return True
        if self.depth > 0:
            return any(child.test(x, y) for child in self._children)
        return any(t.contains_point(x, y) for t in self.triangles)

    def get(self, x: float, y: float) -> list[Triangle]:
        """Return the triangles stored in the leaves containing the point."""
        return list(self._collect(x, y))

    def _collect(self, x: float, y: float) -> Iterator[Triangle]:
        if not self.rect.contains(x, y) or self.black:
            return
        if self._children is not None:
            for child in self._children:
                yield from child._collect(x, y)
        else:
            yield from self.triangles