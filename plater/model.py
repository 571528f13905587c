"""Triangle meshes: faces, volumes and models."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from .bitmap import Bitmap
from .geometry import FPoint2, Point3, Triangle
from .quadtree import QuadTree

_TREE_DEPTH = 6


@dataclass
class Face:
    """A triangular face given by three vertices."""

    v0: Point3
    v1: Point3
    v2: Point3

    def __iter__(self) -> Iterator[Point3]:
        yield self.v0
        yield self.v1
        yield self.v2

    @property
    def vertices(self) -> tuple[Point3, Point3, Point3]:
        return (self.v0, self.v1, self.v2)

    def mapped(self, fn: Callable[[Point3], Point3]) -> Face:
        """Return a new face with ``fn`` applied to every vertex."""
        return Face(fn(self.v0), fn(self.v1), fn(self.v2))


@dataclass
class Volume:
    """A list of faces."""

    faces: list[Face] = field(default_factory=list)

    def add_face(self, face: Face) -> None:
        self.faces.append(face)

    def _points(self) -> Iterator[Point3]:
        for face in self.faces:
            yield from face

    def min(self) -> Point3:
        """Lowest coordinates, truncated to whole micrometres."""
        if not self.faces:
            return Point3(0.0, 0.0, 0.0)
        first = self.faces[0].v0
        xmin, ymin, zmin = int(first.x), int(first.y), int(first.z)
        for p in self._points():
            if p.x < xmin:
                xmin = int(p.x)
            if p.y < ymin:
                ymin = int(p.y)
            if p.z < zmin:
                zmin = int(p.z)
        return Point3(float(xmin), float(ymin), float(zmin))

    def max(self) -> Point3:
        """Highest coordinates, truncated to whole micrometres."""
        if not self.faces:
            return Point3(0.0, 0.0, 0.0)
        first = self.faces[0].v0
        xmax, ymax, zmax = int(first.x), int(first.y), int(first.z)
        for p in self._points():
            if p.x > xmax:
                xmax = int(p.x)
            if p.y > ymax:
                ymax = int(p.y)
            if p.z > zmax:
                zmax = int(p.z)
        return Point3(float(xmax), float(ymax), float(zmax))

    def mapped(self, fn: Callable[[Point3], Point3]) -> Volume:
        return Volume([face.mapped(fn) for face in self.faces])


class Model:
    """A mesh made of one or more volumes, in micrometres."""

    def __init__(self, volumes: list[Volume] | None = None):
        self.volumes: list[Volume] = list(volumes) if volumes else []
        self._tree: QuadTree | None = None
        self.triangles: list[Triangle] = []

    def __repr__(self) -> str:
        return f"Model(volumes={self.volumes!r})"

    def min(self) -> Point3:
        if not self.volumes:
            return Point3(0.0, 0.0, 0.0)
        first = self.volumes[0].min()
        xmin, ymin, zmin = int(first.x), int(first.y), int(first.z)
        for volume in self.volumes:
            p = volume.min()
            xmin = min(xmin, int(p.x))
            ymin = min(ymin, int(p.y))
            zmin = min(zmin, int(p.z))
        return Point3(float(xmin), float(ymin), float(zmin))

    def max(self) -> Point3:
        if not self.volumes:
            return Point3(0.0, 0.0, 0.0)
        first = self.volumes[0].max()
        xmax, ymax, zmax = int(first.x), int(first.y), int(first.z)
        for volume in self.volumes:
            p = volume.max()
            xmax = max(xmax, int(p.x))
            ymax = max(ymax, int(p.y))
            zmax = max(zmax, int(p.z))
        return Point3(float(xmax), float(ymax), float(zmax))

    def _build_tree(self) -> QuadTree:
        min_p, max_p = self.min(), self.max()
        tree = QuadTree(min_p.x, min_p.y, max_p.x, max_p.y, _TREE_DEPTH)
        for volume in self.volumes:
            for face in volume.faces:
                triangle = Triangle(*(FPoint2(v.x, v.y) for v in face))
                self.triangles.append(triangle)
                tree.add(triangle)
        return tree

    def contains(self, x: float, y: float) -> bool:
        """Test whether the top view of the model covers the point."""
        if self._tree is None:
            self._tree = self._build_tree()
        return self._tree.test(x, y)

    def pixelize(self, precision: float, dilatation: float) -> Bitmap:
        """Render the top view into a bitmap, grown by ``dilatation``."""
        min_p, max_p = self.min(), self.max()
        width = int((max_p.x + dilatation - (min_p.x - dilatation)) / precision)
        height = int((max_p.y + dilatation - (min_p.y - dilatation)) / precision)
        bitmap = Bitmap(width, height)

        for x in range(width):
            px = (x + 1) * precision - dilatation + min_p.x
            if not min_p.x < px < max_p.x:
                continue
            for y in range(height):
                py = (y + 1) * precision - dilatation + min_p.y
                if min_p.y < py < max_p.y and self.contains(px, py):
                    bitmap.set_point(x, y, 2)

        bitmap.dilatation(int(dilatation / precision))
        return bitmap

    def _mapped(self, fn: Callable[[Point3], Point3]) -> Model:
        return Model([volume.mapped(fn) for volume in self.volumes])

    def translate(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Model:
        """Return a copy moved by the given offsets."""
        return self._mapped(lambda p: Point3(p.x + x, p.y + y, p.z + z))

    def merge(self, other: Model) -> None:
        """Append the volumes of ``other`` to this model."""
        self.volumes.extend(other.volumes)
        self._tree = None
        self.triangles = []

    def rotate_z(self, r: float) -> Model:
        c, s = math.cos(r), math.sin(r)
        return self._mapped(lambda p: Point3(c * p.x - s * p.y, s * p.x + c * p.y, p.z))

    def rotate_y(self, r: float) -> Model:
        c, s = math.cos(r), math.sin(r)
        return self._mapped(lambda p: Point3(c * p.x - s * p.z, p.y, s * p.x + c * p.z))

    def rotate_x(self, r: float) -> Model:
        c, s = math.cos(r), math.sin(r)
        return self._mapped(lambda p: Point3(p.x, c * p.y - s * p.z, s * p.y + c * p.z))

    def center(self) -> Model:
        """Return a copy centred on the XY origin and resting on Z=0."""
        min_p, max_p = self.min(), self.max()
        cx = (min_p.x + max_p.x) / 2.0
        cy = (min_p.y + max_p.y) / 2.0
        return self.translate(-cx, -cy, -min_p.z)

    def put_face_on_plate(self, orientation: str) -> Model:
        """Return a copy turned so that the named side lies on the plate."""
        rotations = {
            "front": (self.rotate_x, 90),
            "top": (self.rotate_x, 180),
            "back": (self.rotate_x, 270),
            "left": (self.rotate_y, 90),
            "right": (self.rotate_y, -90),
        }
        if orientation in rotations:
            rotate, degrees = rotations[orientation]
            return rotate(math.radians(degrees))
        return self.translate()