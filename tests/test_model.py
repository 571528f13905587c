import math

import pytest

from plater.geometry import Point3
from plater.model import Face, Model, Volume


def square_model(size=10000.0, z=0.0):
    a = Point3(0.0, 0.0, z)
    b = Point3(size, 0.0, z)
    c = Point3(size, size, z)
    d = Point3(0.0, size, z)
    return Model([Volume([Face(a, b, c), Face(a, c, d)])])


def all_points(model):
    return [p for volume in model.volumes for face in volume.faces for p in face]


def test_empty_volume_bounds():
    assert Volume().min() == Point3(0.0, 0.0, 0.0)
    assert Volume().max() == Point3(0.0, 0.0, 0.0)


def test_empty_model_bounds():
    assert Model().min() == Point3(0.0, 0.0, 0.0)
    assert Model().max() == Point3(0.0, 0.0, 0.0)


def test_volume_bounds_are_truncated():
    v = Volume()
    v.add_face(Face(Point3(1.7, 2.0, 3.0), Point3(5.9, -4.0, 6.0), Point3(2.0, 8.0, -1.0)))
    assert v.min() == Point3(1.0, -4.0, -1.0)
    assert v.max() == Point3(5.0, 8.0, 6.0)


def test_model_bounds_cover_all_volumes():
    m = square_model()
    m.merge(square_model().translate(20000, 5000, 3000))
    assert m.min() == Point3(0.0, 0.0, 0.0)
    assert m.max() == Point3(30000.0, 15000.0, 3000.0)


def test_translate_moves_bounds_and_leaves_original():
    m = square_model()
    moved = m.translate(1000, 2000, 3000)
    assert moved.min() == Point3(1000.0, 2000.0, 3000.0)
    assert moved.max() == Point3(11000.0, 12000.0, 3000.0)
    assert m.min() == Point3(0.0, 0.0, 0.0)


def test_merge_appends_volumes():
    m = square_model()
    m.merge(square_model())
    assert len(m.volumes) == 2


def test_center_invariants():
    m = square_model(z=500.0).translate(3000, 4000, 0)
    c = m.center()
    assert c.min().z == 0.0
    assert c.min().x == -c.max().x
    assert c.min().y == -c.max().y


def test_rotate_z_quarter_turn():
    m = Model([Volume([Face(Point3(1000, 0, 0), Point3(0, 1000, 0), Point3(0, 0, 1000))])])
    p = all_points(m.rotate_z(math.pi / 2))
    assert (p[0].x, p[0].y, p[0].z) == pytest.approx((0, 1000, 0), abs=1e-9)
    assert (p[1].x, p[1].y) == pytest.approx((-1000, 0), abs=1e-9)


def test_rotate_x_twice_half_turn_is_identity():
    m = square_model(z=700.0)
    back = m.rotate_x(math.pi).rotate_x(math.pi)
    for p, q in zip(all_points(m), all_points(back)):
        assert (q.x, q.y, q.z) == pytest.approx((p.x, p.y, p.z), abs=1e-6)


def test_rotate_y_inverse():
    m = square_model(z=700.0)
    back = m.rotate_y(0.3).rotate_y(-0.3)
    for p, q in zip(all_points(m), all_points(back)):
        assert (q.x, q.y, q.z) == pytest.approx((p.x, p.y, p.z), abs=1e-6)


def test_put_face_on_plate_bottom_is_copy():
    m = square_model()
    same = m.put_face_on_plate("bottom")
    assert all_points(same) == all_points(m)
    assert same is not m


def test_put_face_on_plate_top_matches_rotate_x():
    m = square_model(z=700.0)
    top = m.put_face_on_plate("top")
    expected = m.rotate_x(math.pi)
    for p, q in zip(all_points(top), all_points(expected)):
        assert (p.x, p.y, p.z) == pytest.approx((q.x, q.y, q.z), abs=1e-6)


def test_contains():
    m = square_model()
    assert m.contains(3000, 7000)
    assert m.contains(8000, 2000)
    assert not m.contains(20000, 5000)
    assert not m.contains(-1, 5000)


def test_pixelize_square():
    m = square_model()
    bmp = m.pixelize(1000, 0)
    assert bmp.width == 10
    assert bmp.height == 10
    assert bmp.get_point(4, 4) == 2
    assert bmp.get_point(9, 5) == 0
    assert bmp.pixels == 81


def test_pixelize_dilatation_grows_area():
    m = square_model()
    plain = m.pixelize(1000, 0)
    grown = m.pixelize(1000, 2000)
    assert grown.width == plain.width + 4
    assert grown.pixels > plain.pixels