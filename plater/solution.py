"""A set of plates holding every part of a request."""

from __future__ import annotations

from .plate import Plate


class Solution:
    """Plates built with common dimensions; fewer and fuller plates score lower."""

    def __init__(self, plate_width: float, plate_height: float, plate_diameter: float,
                 plate_mode: int, precision: float):
        self.plate_width = plate_width
        self.plate_height = plate_height
        self.plate_diameter = plate_diameter
        self.plate_mode = plate_mode
        self.precision = precision
        self.plates: list[Plate] = []

    def score(self) -> float:
        """Number of plates plus a fraction that grows with the last plate's parts."""
        return self.count_plates() + (1 - 1 / (1 + self.last_plate().count_parts()))

    def count_plates(self) -> int:
        return len(self.plates)

    def get_plate(self, index: int) -> Plate | None:
        """Return the plate at ``index``, or None when out of range."""
        if 0 <= index < len(self.plates):
            return self.plates[index]
        return None

    def last_plate(self) -> Plate:
        return self.plates[-1]

    def add_plate(self) -> None:
        self.plates.append(Plate(self.plate_width, self.plate_height,
                                 self.plate_diameter, self.plate_mode, self.precision))