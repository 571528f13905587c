"""Reading and writing STL mesh files."""

from __future__ import annotations

import re
import struct

from .geometry import Point3
from .model import Face, Model, Volume

_HEADER_SIZE = 80
_FACE = struct.Struct("<12fH")
_COUNT = struct.Struct("<I")
_NUMBER = r"([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
_VERTEX = re.compile(r"\s*vertex\s*" + r"\s*".join([_NUMBER] * 3))


class StlError(Exception):
    """An STL file could not be read or written."""


def _read_bytes(filename: str) -> bytes:
    try:
        with open(filename, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise StlError(f"Can't open file {filename} for reading") from exc


def _faces(model: Model):
    for volume in model.volumes:
        yield from volume.faces


def save_model_ascii(filename: str, model: Model) -> None:
    """Write the model as an ASCII STL file, in millimetres."""
    try:
        with open(filename, "w", encoding="ascii", newline="\n") as out:
            out.write("solid plate\n")
            for face in _faces(model):
                out.write("  facet normal 1 0 0\n")
                out.write("    outer loop\n")
                for v in face:
                    out.write(f"      vertex {v.x / 1000.0:g} {v.y / 1000.0:g} {v.z / 1000.0:g}\n")
                out.write("    endloop\n")
                out.write("  endfacet\n")
            out.write("endsolid plate\n")
    except OSError as exc:
        raise StlError(f"Can't open file {filename} for writing") from exc


def load_model_ascii(filename: str) -> Model:
    """Read an ASCII STL file into a single-volume model."""
    text = _read_bytes(filename).decode("latin-1")
    volume = Volume()
    pending: list[Point3] = []
    for line in re.split(r"[\r\n]", text):
        match = _VERTEX.match(line)
        if not match:
            continue
        x, y, z = (float(g) * 1000 for g in match.groups())
        pending.append(Point3(x, y, z))
        if len(pending) == 3:
            volume.add_face(Face(*pending))
            pending = []
    return Model([volume])


def save_model_binary(filename: str, model: Model) -> None:
    """Write the model as a binary STL file, in millimetres."""
    faces = list(_faces(model))
    try:
        with open(filename, "wb") as out:
            out.write(bytes(_HEADER_SIZE))
            out.write(_COUNT.pack(len(faces)))
            for face in faces:
                coords = [c / 1000.0 for v in face for c in (v.x, v.y, v.z)]
                out.write(_FACE.pack(1.0, 0.0, 0.0, *coords, 0))
    except OSError as exc:
        raise StlError(f"Can't open file {filename} for writing") from exc


def load_model_binary(filename: str) -> Model:
    """Read a binary STL file; a truncated file yields the faces read so far."""
    data = _read_bytes(filename)
    if len(data) < _HEADER_SIZE + _COUNT.size:
        return Model()
    (count,) = _COUNT.unpack_from(data, _HEADER_SIZE)
    volume = Volume()
    offset = _HEADER_SIZE + _COUNT.size
    for _ in range(count):
        if offset + _FACE.size - 2 > len(data):
            break
        if offset + _FACE.size > len(data):
            values = struct.unpack_from("<12f", data, offset)
        else:
            values = _FACE.unpack_from(data, offset)
        v = [c * 1000 for c in values[3:12]]
        volume.add_face(Face(Point3(*v[0:3]), Point3(*v[3:6]), Point3(*v[6:9])))
        offset += _FACE.size
        if offset > len(data):
            break
    return Model([volume])


def load_model_stl(filename: str) -> Model:
    """Read an STL file, detecting whether it is ASCII or binary."""
    head = _read_bytes(filename)[:4096]
    if not head:
        return Model()
    if head[:5].lower() != b"solid":
        return load_model_binary(filename)
    printable = sum(1 for b in head if b < 127)
    if printable / len(head) < 0.95:
        return load_model_binary(filename)
    return load_model_ascii(filename)


def load_model(filename: str) -> Model:
    """Load a model from a file; only STL files are understood."""
    dot = filename.rfind(".")
    if dot >= 0 and filename[dot:].lower() == ".stl":
        return load_model_stl(filename)
    return Model()