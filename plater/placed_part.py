"""A part placed on a plate at a given offset and rotation."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .bitmap import Bitmap
from .model import Model
from .part import Part


def _mean(total: float, count: int) -> float:
    if count == 0:
        return math.nan
    return total / count


@dataclass(eq=False)
class PlacedPart:
    """An instance of a part with a position and a rotation step."""

    part: Part
    x: float = 0.0
    y: float = 0.0
    rotation: int = 0

    def name(self) -> str:
        return self.part.filename

    def bitmap(self) -> Bitmap | None:
        """The part's bitmap for the current rotation."""
        return self.part.bitmap(self.rotation)

    def center_x(self) -> float:
        return self.x + self.part.precision * self.bitmap().center_x

    def center_y(self) -> float:
        return self.y + self.part.precision * self.bitmap().center_y

    def surface(self) -> float:
        return self.part.surface

    def g_dist(self) -> float:
        """Smallest squared distance of a rotation's centroid to the bitmap origin."""
        best: float | None = None
        for bmp in self.part.bitmaps:
            if bmp is None:
                continue
            gx = _mean(bmp.s_x, bmp.pixels)
            gy = _mean(bmp.s_y, bmp.pixels)
            s = gx * gx + gy * gy
            if best is None or s < best:
                best = s
        return 0.0 if best is None else best

    def gx(self) -> float:
        """Centroid X of the current bitmap, in micrometres."""
        bmp = self.bitmap()
        return _mean(bmp.s_x, bmp.pixels) * self.part.precision

    def gy(self) -> float:
        """Centroid Y of the current bitmap, in micrometres."""
        bmp = self.bitmap()
        return _mean(bmp.s_y, bmp.pixels) * self.part.precision

    def create_model(self) -> Model:
        """Return the part's mesh moved to its place on the plate."""
        model = self.part.model.center().rotate_z(self.part.delta_r * self.rotation)
        return model.translate(self.center_x(), self.center_y())