"""A build plate and the parts placed on it."""

from __future__ import annotations

import math
from enum import IntEnum

from .bitmap import Bitmap
from .model import Model
from .placed_part import PlacedPart

_OUTSIDE = 2


class PlateMode(IntEnum):
    RECTANGLE = 0
    CIRCLE = 1


class Plate:
    """A plate with an occupancy bitmap; circular plates mark the outside as taken."""

    def __init__(self, width: float, height: float, diameter: float,
                 mode: int, precision: float):
        self.mode = PlateMode(mode)
        self.diameter = diameter
        self.precision = precision
        if self.mode == PlateMode.CIRCLE:
            width = height = diameter
        self.width = width
        self.height = height
        self.parts: list[PlacedPart] = []
        self.bitmap = Bitmap(int(width / precision), int(height / precision))

        if self.mode == PlateMode.CIRCLE:
            bmp = self.bitmap
            for x in range(bmp.width):
                dx = (x - bmp.center_x) * precision
                for y in range(bmp.height):
                    dy = (y - bmp.center_y) * precision
                    if math.sqrt(dx * dx + dy * dy) > diameter / 2:
                        bmp.set_point(x, y, _OUTSIDE)

    def can_place(self, placed_part: PlacedPart) -> bool:
        """Test whether the part fits at its offset without overlapping anything."""
        part_bmp = placed_part.bitmap()
        x, y = placed_part.x, placed_part.y
        if (x + part_bmp.width * self.precision > self.width
                or y + part_bmp.height * self.precision > self.height):
            return False
        return not part_bmp.overlaps(self.bitmap, x / self.precision, y / self.precision)

    def place(self, placed_part: PlacedPart) -> None:
        """Add the part and mark its pixels as taken."""
        self.parts.append(placed_part)
        self.bitmap.write(placed_part.bitmap(),
                          placed_part.x / self.precision,
                          placed_part.y / self.precision)

    def count_parts(self) -> int:
        return len(self.parts)

    def create_model(self) -> Model:
        """Merge the placed parts into one mesh, centred on the origin."""
        model = Model()
        for part in self.parts:
            model.merge(part.create_model())
        return model.center()