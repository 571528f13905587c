"""Raster images of parts and plates."""

from __future__ import annotations

import math


def _cround(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


_PPM_COLORS = {0: 6, 1: 4, 2: 0}


class Bitmap:
    """A byte-valued raster; 0 is empty, non-zero is occupied."""

    def __init__(self, width: int, height: int):
        width, height = int(width), int(height)
        if width < 0 or height < 0:
            raise ValueError(f"invalid bitmap size {width}x{height}")
        self.width = width
        self.height = height
        self._data = bytearray(width * height)
        self.center_x = float(width // 2)
        self.center_y = float(height // 2)
        self.s_x = 0
        self.s_y = 0
        self.pixels = 0

    def copy(self) -> Bitmap:
        """Return an independent copy."""
        other = Bitmap(self.width, self.height)
        other._data[:] = self._data
        other.center_x, other.center_y = self.center_x, self.center_y
        other.s_x, other.s_y, other.pixels = self.s_x, self.s_y, self.pixels
        return other

    def get_point(self, x: int, y: int) -> int:
        """Return the pixel value, or 0 outside the image."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return 0
        return self._data[self.width * y + x]

    def set_point(self, x: int, y: int, value: int) -> None:
        """Set a pixel; points outside the image are ignored."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return
        self._data[self.width * y + x] = value
        if value:
            self.s_x += x
            self.s_y += y
            self.pixels += 1

    def _occupied(self):
        width = self.width
        for idx, value in enumerate(self._data):
            if value:
                y, x = divmod(idx, width)
                yield x, y, value

    def to_ppm(self) -> str:
        """Render as a plain-text grey map."""
        lines = ["P2", "# Generated by Plater", f"{self.width} {self.height}", "6"]
        for y in range(self.height):
            row = self._data[y * self.width:(y + 1) * self.width]
            lines.append(" ".join(str(_PPM_COLORS.get(v, 0)) for v in row))
        return "\n".join(lines) + "\n"

    def dilatation(self, iterations: int) -> None:
        """Grow occupied areas by one pixel per iteration."""
        for _ in range(int(iterations)):
            old = self.copy()
            for y in range(self.height):
                for x in range(self.width):
                    if old.get_point(x, y):
                        continue
                    if any(old.get_point(x + dx, y + dy)
                           for dx in (-1, 0, 1) for dy in (-1, 0, 1)):
                        self.set_point(x, y, 1)

    def overlaps(self, other: Bitmap, offx: float, offy: float) -> bool:
        """Test whether this bitmap hits ``other`` when shifted by the offset."""
        offx, offy = int(offx), int(offy)
        return any(other.get_point(x + offx, y + offy)
                   for x, y, _ in self._occupied())

    def write(self, other: Bitmap, offx: float, offy: float) -> None:
        """Copy the occupied pixels of ``other`` into this bitmap at an offset."""
        offx, offy = int(offx), int(offy)
        for x, y, value in list(other._occupied()):
            self.set_point(x + offx, y + offy, value)

    def rotate(self, r: float) -> Bitmap:
        """Return a new bitmap rotated around the center by ``r`` radians."""
        r = -r
        cos_r, sin_r = math.cos(r), math.sin(r)
        w, h = float(self.width), float(self.height)

        a_x = math.ceil(w * cos_r - h * sin_r)
        a_y = math.ceil(w * sin_r + h * cos_r)
        b_x = math.ceil(-h * sin_r)
        b_y = math.ceil(h * cos_r)
        c_x = math.ceil(w * cos_r)
        c_y = math.ceil(w * sin_r)

        width = max(0, a_x, b_x, c_x) - min(0, a_x, b_x, c_x)
        height = max(0, a_y, b_y, c_y) - min(0, a_y, b_y, c_y)

        old_cx, old_cy = self.center_x, self.center_y
        rotated = Bitmap(width, height)
        center_x, center_y = rotated.center_x, rotated.center_y
        for y in range(height):
            cy = _cround(y - center_y)
            for x in range(width):
                cx = _cround(x - center_x)
                src_x = _cround(cos_r * cx - sin_r * cy + old_cx)
                src_y = _cround(sin_r * cx + cos_r * cy + old_cy)
                value = self.get_point(src_x, src_y)
                if value:
                    rotated.set_point(x, y, value)
        return rotated

    def trim(self) -> Bitmap:
        """Return a new bitmap cropped to the occupied area."""
        points = list(self._occupied())
        min_x = min((p[0] for p in points), default=0)
        max_x = max((p[0] for p in points), default=0)
        min_y = min((p[1] for p in points), default=0)
        max_y = max((p[1] for p in points), default=0)

        trimmed = Bitmap(max_x - min_x, max_y - min_y)
        trimmed.center_x = self.center_x - min_x
        trimmed.center_y = self.center_y - min_y
        for y in range(trimmed.height):
            for x in range(trimmed.width):
                value = self.get_point(x + min_x, y + min_y)
                if value:
                    trimmed.set_point(x, y, value)
        return trimmed