"""Greedy placement of parts onto plates."""

from __future__ import annotations

import math
import random
import threading
from collections.abc import Iterator
from enum import IntEnum

from .log import log_info
from .placed_part import PlacedPart
from .plate import Plate
from .solution import Solution


class SortMode(IntEnum):
    SURFACE_DEC = 0
    SURFACE_INC = 1
    SHUFFLE = 2


class GravityMode(IntEnum):
    YX = 0
    XY = 1
    EQ = 2


_GRAVITY_COEFS = {
    GravityMode.YX: (1.0, 10.0),
    GravityMode.XY: (10.0, 1.0),
    GravityMode.EQ: (1.0, 1.0),
}


def _steps(limit: float, step: float) -> Iterator[float]:
    value = 0.0
    while value < limit:
        yield value
        value += step


class Placer:
    """Places the parts of a request one by one, opening plates as needed.

    The request supplies ``parts``, ``quantities``, ``delta``, ``delta_r``,
    ``plate_width``, ``plate_height``, ``plate_diameter``, ``plate_mode``
    and ``precision``.
    """

    def __init__(self, request, rotate_direction: int = 0, rotate_offset: int = 0):
        self.request = request
        self.solution: Solution | None = None
        self.rotate_direction = rotate_direction
        self.rotate_offset = rotate_offset
        self.parts: list[PlacedPart] = [
            PlacedPart(request.parts[name])
            for name, quantity in sorted(request.quantities.items())
            for _ in range(quantity)
        ]
        self._full: set[tuple[Plate, str]] = set()
        self._thread: threading.Thread | None = None
        self.x_coef, self.y_coef = _GRAVITY_COEFS[GravityMode.YX]

    def sort_parts(self, sort_type: int) -> None:
        """Order the parts; any unknown sort type shuffles them."""
        if sort_type == SortMode.SURFACE_INC:
            self.parts.sort(key=PlacedPart.surface, reverse=True)
        elif sort_type == SortMode.SURFACE_DEC:
            self.parts.sort(key=PlacedPart.surface)
        else:
            random.shuffle(self.parts)

    def set_gravity_mode(self, gravity_mode: int) -> None:
        """Choose how X and Y weigh in a position's score; unknown modes are ignored."""
        coefs = _GRAVITY_COEFS.get(gravity_mode)
        if coefs is not None:
            self.x_coef, self.y_coef = coefs

    def next_part(self) -> PlacedPart:
        """Remove and return the next part to place."""
        return self.parts.pop()

    def _rotations(self, count: int) -> range:
        if self.rotate_direction:
            return range(count - 1, -1, -1)
        return range(count)

    def _place_part(self, plate: Plate, part: PlacedPart) -> bool:
        key = (plate, part.name())
        if key in self._full:
            return False

        count = math.ceil(2 * math.pi / self.request.delta_r)
        delta = self.request.delta
        best: tuple[float, float, float, int] | None = None

        for r in self._rotations(count):
            rotation = (r + self.rotate_offset) % count
            part.rotation = rotation
            if part.bitmap() is None:
                continue
            gx0, gy0 = part.gx(), part.gy()
            for x in _steps(plate.width, delta):
                for y in _steps(plate.height, delta):
                    score = (gy0 + y) * self.y_coef + (gx0 + x) * self.x_coef
                    if best is None or score < best[0]:
                        part.x, part.y = x, y
                        if plate.can_place(part):
                            best = (score, x, y, rotation)

        if best is None:
            self._full.add(key)
            return False
        _, part.x, part.y, part.rotation = best
        plate.place(part)
        return True

    def place(self) -> Solution:
        """Place every remaining part and return the resulting solution."""
        req = self.request
        solution = Solution(req.plate_width, req.plate_height, req.plate_diameter,
                            req.plate_mode, req.precision)
        solution.add_plate()

        log_info("* Placer\n")
        while self.parts:
            part = self.next_part()
            # Plates appended inside the loop are visited by the same iteration.
            for plate in solution.plates:
                if self._place_part(plate, part):
                    break
                if plate is solution.last_plate():
                    solution.add_plate()

        log_info("- Solution with %d plates\n", solution.count_plates())
        self.solution = solution
        return solution

    def place_threaded(self) -> None:
        """Run ``place`` in a background thread."""
        self._thread = threading.Thread(target=self.place, daemon=True)
        self._thread.start()

    def join(self) -> None:
        """Wait for a background placement to finish."""
        if self._thread is not None:
            self._thread.join()