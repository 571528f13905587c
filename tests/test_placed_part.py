import math

import pytest

from plater.bitmap import Bitmap
from plater.geometry import Point3
from plater.model import Face, Model, Volume
from plater.part import Part
from plater.placed_part import PlacedPart
from plater.stl import save_model_binary


def _bitmap_with(points, size=4):
    bmp = Bitmap(size, size)
    for x, y in points:
        bmp.set_point(x, y, 2)
    return bmp


def _manual_part(bitmaps, name="part.stl", surface=0.0):
    part = Part()
    part.filename = name
    part.precision = 1.0
    part.delta_r = math.pi / 2
    part.bitmaps = bitmaps
    part.surface = surface
    return part


@pytest.fixture
def square_part(tmp_path):
    s = 10000.0
    model = Model([Volume([
        Face(Point3(0, 0, 0), Point3(s, 0, 0), Point3(s, s, 0)),
        Face(Point3(0, 0, 0), Point3(s, s, 0), Point3(0, s, 0)),
    ])])
    path = tmp_path / "square.stl"
    save_model_binary(str(path), model)
    part = Part()
    part.load(str(path), 500, math.pi / 2, 1500, "bottom", 150000, 150000)
    return part


def test_name_and_surface():
    placed = PlacedPart(_manual_part([_bitmap_with([(0, 0)])], name="gear.stl", surface=42.0))
    assert placed.name() == "gear.stl"
    assert placed.surface() == 42.0


def test_bitmap_follows_rotation():
    first, second = _bitmap_with([(0, 0)]), _bitmap_with([(1, 1)])
    placed = PlacedPart(_manual_part([first, second]))
    placed.rotation = 1
    assert placed.bitmap() is second


def test_centroid():
    placed = PlacedPart(_manual_part([_bitmap_with([(2, 3)])]))
    assert placed.gx() == 2.0
    assert placed.gy() == 3.0


def test_center_uses_offset():
    placed = PlacedPart(_manual_part([_bitmap_with([(0, 0)])]), x=5.0, y=6.0)
    bmp = placed.bitmap()
    assert placed.center_x() == 5.0 + bmp.center_x
    assert placed.center_y() == 6.0 + bmp.center_y


def test_g_dist_takes_smallest_and_skips_missing():
    placed = PlacedPart(_manual_part([_bitmap_with([(3, 0)]), None, _bitmap_with([(0, 1)])]))
    assert placed.g_dist() == 1.0


def test_g_dist_of_empty_bitmap_is_nan():
    placed = PlacedPart(_manual_part([Bitmap(4, 4)]))
    result = placed.g_dist()
    assert str(result) == "nan"


def test_create_model_is_centered_on_part_center(square_part):
    placed = PlacedPart(square_part, x=20000.0, y=30000.0)
    model = placed.create_model()
    min_p, max_p = model.min(), model.max()
    assert (min_p.x + max_p.x) / 2 == pytest.approx(placed.center_x(), abs=1)
    assert (min_p.y + max_p.y) / 2 == pytest.approx(placed.center_y(), abs=1)
    assert min_p.z == 0


def test_create_model_rotated_keeps_extent(square_part):
    placed = PlacedPart(square_part, rotation=1)
    model = placed.create_model()
    min_p, max_p = model.min(), model.max()
    assert max_p.x - min_p.x == pytest.approx(10000, abs=2)
    assert max_p.y - min_p.y == pytest.approx(10000, abs=2)