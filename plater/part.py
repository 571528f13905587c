"""A part to place: its mesh and its top-view bitmaps for every rotation."""

from __future__ import annotations

import math

from .bitmap import Bitmap
from .model import Model
from .stl import load_model


class Part:
    """A loaded part with one bitmap per rotation step.

    A rotation whose bitmap does not fit on the plate is stored as None.
    """

    def __init__(self) -> None:
        self.filename = ""
        self.model = Model()
        self.precision = 0.0
        self.delta_r = 0.0
        self.width = 0.0
        self.height = 0.0
        self.surface = 0.0
        self.bitmaps: list[Bitmap | None] = []

    def load(self, filename: str, precision: float, delta_r: float, spacing: float,
             orientation: str, plate_width: float, plate_height: float) -> int:
        """Load the mesh and rasterize every rotation.

        Returns the number of rotations that fit on the plate.
        """
        self.filename = filename
        self.precision = precision
        self.delta_r = delta_r
        count = math.ceil(2 * math.pi / delta_r)

        self.model = load_model(filename).put_face_on_plate(orientation)
        base = self.model.pixelize(precision, spacing)

        min_p, max_p = self.model.min(), self.model.max()
        self.width = max_p.x - min_p.x + 2 * spacing
        self.height = max_p.y - min_p.y + 2 * spacing

        candidates = [base] + [base.rotate(k * delta_r).trim() for k in range(1, count)]

        def fits(bmp: Bitmap) -> bool:
            return bmp.width * precision < plate_width and bmp.height * precision < plate_height

        self.bitmaps = [bmp if fits(bmp) else None for bmp in candidates]
        kept = [bmp for bmp in self.bitmaps if bmp is not None]
        total = sum(bmp.width * bmp.height for bmp in kept)
        self.surface = total / len(kept) if kept else float(total)
        return len(kept)

    def bitmap(self, index: int) -> Bitmap | None:
        """Return the bitmap for a rotation step, or None if it does not fit."""
        return self.bitmaps[index]

    def density(self, index: int) -> float:
        """Occupied pixels per pixel of the bitmap, in whole units."""
        bmp = self.bitmaps[index]
        return float(bmp.pixels // (bmp.width * bmp.height))