import struct

import pytest

from plater.geometry import Point3
from plater.model import Face, Model, Volume
from plater.stl import (
    StlError,
    load_model,
    load_model_ascii,
    load_model_binary,
    load_model_stl,
    save_model_ascii,
    save_model_binary,
)


def sample_model():
    return Model([Volume([
        Face(Point3(0.0, 0.0, 0.0), Point3(1000.0, 0.0, 0.0), Point3(1000.0, 2500.0, 500.0)),
        Face(Point3(0.0, 0.0, 0.0), Point3(1000.0, 2500.0, 500.0), Point3(0.0, 2500.0, 250.0)),
    ])])


def faces_of(model):
    return [f for v in model.volumes for f in v.faces]


def test_binary_round_trip(tmp_path):
    path = str(tmp_path / "a.stl")
    save_model_binary(path, sample_model())
    loaded = load_model_binary(path)
    assert faces_of(loaded) == faces_of(sample_model())


def test_binary_layout(tmp_path):
    path = tmp_path / "a.stl"
    save_model_binary(str(path), sample_model())
    data = path.read_bytes()
    assert len(data) == 84 + 50 * 2
    assert data[:80] == bytes(80)
    assert struct.unpack_from("<I", data, 80)[0] == 2
    assert struct.unpack_from("<3f", data, 84) == (1.0, 0.0, 0.0)
    assert struct.unpack_from("<H", data, 84 + 48)[0] == 0


def test_ascii_round_trip(tmp_path):
    path = str(tmp_path / "a.stl")
    save_model_ascii(path, sample_model())
    loaded = load_model_ascii(path)
    assert faces_of(loaded) == faces_of(sample_model())


def test_ascii_text_frame(tmp_path):
    path = tmp_path / "a.stl"
    save_model_ascii(str(path), sample_model())
    lines = path.read_text().splitlines()
    assert lines[0] == "solid plate"
    assert lines[-1] == "endsolid plate"
    assert lines.count("  facet normal 1 0 0") == 2


def test_load_model_stl_detects_ascii(tmp_path):
    path = str(tmp_path / "a.stl")
    save_model_ascii(path, sample_model())
    assert faces_of(load_model_stl(path)) == faces_of(sample_model())


def test_load_model_stl_detects_binary(tmp_path):
    path = str(tmp_path / "b.stl")
    save_model_binary(path, sample_model())
    assert faces_of(load_model_stl(path)) == faces_of(sample_model())


def test_load_model_uses_extension_case_insensitively(tmp_path):
    path = str(tmp_path / "PART.STL")
    save_model_binary(path, sample_model())
    assert faces_of(load_model(path)) == faces_of(sample_model())


def test_load_model_unknown_extension_is_empty(tmp_path):
    path = tmp_path / "part.obj"
    path.write_text("whatever")
    assert load_model(str(path)).volumes == []


def test_missing_file_raises(tmp_path):
    with pytest.raises(StlError):
        load_model_stl(str(tmp_path / "missing.stl"))
    with pytest.raises(StlError):
        load_model_binary(str(tmp_path / "missing.stl"))


def test_write_to_directory_raises(tmp_path):
    with pytest.raises(StlError):
        save_model_binary(str(tmp_path), sample_model())
    with pytest.raises(StlError):
        save_model_ascii(str(tmp_path), sample_model())


def test_truncated_binary_header_gives_empty_model(tmp_path):
    path = tmp_path / "t.stl"
    path.write_bytes(bytes(80))
    assert load_model_binary(str(path)).volumes == []


def test_truncated_binary_keeps_complete_faces(tmp_path):
    path = tmp_path / "t.stl"
    save_model_binary(str(path), sample_model())
    data = path.read_bytes()
    path.write_bytes(data[:84 + 50 + 10])
    loaded = load_model_binary(str(path))
    assert faces_of(loaded) == faces_of(sample_model())[:1]


def test_empty_file_gives_empty_model(tmp_path):
    path = tmp_path / "e.stl"
    path.write_bytes(b"")
    assert load_model_stl(str(path)).volumes == []


def test_ascii_ignores_incomplete_face(tmp_path):
    path = tmp_path / "p.stl"
    path.write_text("solid x\n vertex 1 2 3\n vertex 4 5 6\nendsolid x\n")
    loaded = load_model_ascii(str(path))
    assert len(loaded.volumes) == 1
    assert loaded.volumes[0].faces == []