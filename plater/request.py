"""Plating requests: reading part lists, running placers and writing plates."""

from __future__ import annotations

import math
import re
import sys
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from enum import IntEnum
from io import StringIO
from typing import TextIO

from .log import log_error, log_info
from .part import Part
from .placer import GravityMode, Placer, SortMode
from .plate import Plate, PlateMode
from .solution import Solution
from .stl import StlError, save_model_binary
from .util import chdir_file, get_basename, is_numeric, split, trim

_LEADING_FLOAT = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


class OutputMode(IntEnum):
    STL = 0
    PPM = 1


class SortStrategy(IntEnum):
    SINGLE = 0
    MULTIPLE = 1


class RequestError(Exception):
    """A request could not be read, processed or written."""


def _atof(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group()) if match else 0.0


def _plate_filename(pattern: str, number: int) -> str:
    try:
        return pattern % number
    except (TypeError, ValueError):
        return pattern


def split_chunks(line: str) -> list[str]:
    """Split a configuration line into filename, quantity and orientation.

    The filename may contain spaces: it is everything before the last
    numeric word. A line without a numeric word yields an empty filename.
    """
    words = split(line, " ")
    if not words:
        return []
    quantity_at = next(
        (i for i in range(len(words) - 1, 0, -1) if is_numeric(words[i])), 0)
    filename = " ".join(words[:quantity_at]).lstrip(" ")
    return [filename, *words[quantity_at:]]


class Request:
    """Everything needed to spread a list of parts over plates.

    Lengths are in micrometres, angles in radians.
    """

    def __init__(self) -> None:
        self.plate_mode = PlateMode.RECTANGLE
        self.plate_width = 150000.0
        self.plate_height = 150000.0
        self.plate_diameter = 0.0
        self.random_iterations = 3
        self.mode = OutputMode.STL
        self.sort_mode = SortStrategy.SINGLE
        self.precision = 500.0
        self.delta = 1000.0
        self.delta_r = math.pi / 2
        self.spacing = 1500.0
        self.pattern = "plate_%03d"
        self.out_dir = "."
        self.quantities: dict[str, int] = {}
        self.parts: dict[str, Part] = {}
        self.cancel = False
        self.plates = 0
        self.generated_files: list[str] = []
        self.placers_count = 0
        self.placer_current = 0
        self.solution: Solution | None = None
        self.plates_info = False
        self.nb_threads = 1

    def set_plate_size(self, w: float, h: float) -> None:
        """Set the plate dimensions, given in millimetres."""
        self.plate_width = w * 1000
        self.plate_height = h * 1000

    def add_part(self, filename: str, quantity: int, orientation: str = "bottom") -> None:
        """Load a part and record how many copies to place."""
        if self.cancel or not filename or quantity == 0:
            return
        log_info("- Loading %s (quantity %d, orientation %s)...\n",
                 filename, quantity, orientation)
        part = Part()
        self.parts[filename] = part
        try:
            loaded = part.load(filename, self.precision, self.delta_r, self.spacing,
                               orientation, self.plate_width, self.plate_height)
        except StlError as exc:
            raise RequestError(str(exc)) from exc
        self.quantities[filename] = quantity
        if loaded == 0:
            raise RequestError(f"Part {filename} is too big for the plate "
                               " (bed too small? try more angles?)")

    def read_parts(self, stream: TextIO) -> None:
        """Read part lines (``file.stl quantity [orientation]``) from a stream."""
        self.parts.clear()
        self.quantities.clear()
        for raw in stream:
            line = raw.rstrip("\n")
            if line.startswith("#"):
                continue
            chunks = split_chunks(trim(line))
            if not chunks:
                continue
            filename = chunks[0]
            quantity = int(_atof(chunks[1])) if len(chunks) >= 2 else 1
            orientation = chunks[2] if len(chunks) >= 3 else "bottom"
            self.add_part(filename, quantity, orientation)

    def read_parts_from_string(self, text: str) -> None:
        self.read_parts(StringIO(text))

    def read_from_file(self, filename: str) -> None:
        """Read a configuration file; the working directory moves to its folder."""
        if not chdir_file(filename):
            print(f"! Can't go to the directory of {filename}", file=sys.stderr)
        try:
            stream = open(get_basename(filename), encoding="utf-8", errors="replace")
        except OSError as exc:
            raise RequestError(f"Can't open configuration file {filename}") from exc
        print(f"* Reading from {filename}", file=sys.stderr)
        with stream:
            self.read_parts(stream)

    def read_from_stdin(self) -> None:
        log_info("* Reading request from stdin\n")
        self.read_parts(sys.stdin)

    def write_stl(self, plate: Plate, filename: str) -> None:
        model = plate.create_model()
        try:
            save_model_binary(filename, model)
        except StlError as exc:
            raise RequestError(str(exc)) from exc

    def write_ppm(self, plate: Plate, filename: str) -> None:
        try:
            with open(filename, "w", encoding="ascii", newline="\n") as out:
                out.write(plate.bitmap.to_ppm())
        except OSError as exc:
            log_error("Error: can't write to %s\n", filename)
            raise RequestError(f"Can't write to {filename}") from exc

    def write_plates_info(self, solution: Solution) -> None:
        """Write plates.csv listing every placed part's position and rotation."""
        path = f"{self.out_dir}/plates.csv"
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as out:
                out.write("plate,part,posX,posY,rotation\n")
                for number, plate in enumerate(solution.plates, start=1):
                    for placed in plate.parts:
                        angle = placed.rotation * placed.part.delta_r * 180.0 / math.pi
                        out.write(f"{number},{placed.name()},"
                                  f"{placed.center_x() / 1000.0:g},"
                                  f"{placed.center_y() / 1000.0:g},"
                                  f"{angle:g}\n")
        except OSError as exc:
            raise RequestError(f"Can't write to {path}") from exc

    def write_files(self, solution: Solution) -> None:
        """Write one file per plate, named after the pattern."""
        self.generated_files = []
        log_info("* Exporting\n")
        extension = ".ppm" if self.mode == OutputMode.PPM else ".stl"
        pattern = self.pattern + extension

        if self.plates_info:
            log_info("- Exporting plates.csv...\n")
            self.write_plates_info(solution)

        for number, plate in enumerate(solution.plates, start=1):
            filename = _plate_filename(pattern, number)
            log_info("- Exporting %s...\n", filename)
            self.generated_files.append(filename)
            if self.mode == OutputMode.PPM:
                self.write_ppm(plate, filename)
            else:
                self.write_stl(plate, filename)

    def _create_placers(self) -> list[Placer]:
        if self.sort_mode == SortStrategy.SINGLE:
            last_sort = int(SortMode.SURFACE_DEC)
        else:
            last_sort = int(SortMode.SHUFFLE) + self.random_iterations
        placers = []
        for sort_type in range(last_sort + 1):
            for rotate_offset in range(2):
                for rotate_direction in range(2):
                    for gravity in range(GravityMode.EQ):
                        placer = Placer(self, rotate_direction, rotate_offset)
                        placer.sort_parts(sort_type)
                        placer.set_gravity_mode(gravity)
                        placers.append(placer)
        return placers

    def _run_placers(self, pending: list[Placer]) -> None:
        workers = max(1, int(self.nb_threads))
        stop = False
        running: set[Future] = set()
        with ThreadPoolExecutor(max_workers=workers) as pool:
            while pending or running:
                while pending and len(running) < workers:
                    placer = pending.pop()
                    if not stop and not self.cancel:
                        running.add(pool.submit(placer.place))
                if not running:
                    continue
                done, running = wait(running, return_when=FIRST_COMPLETED)
                for future in done:
                    candidate = future.result()
                    if self.solution is None or candidate.score() < self.solution.score():
                        self.solution = candidate
                    if self.solution.count_plates() == 1:
                        stop = True
                    self.placer_current += 1

    def process(self) -> None:
        """Try every placement strategy, keep the best solution and write it out."""
        self.solution = None
        if self.cancel:
            return
        if self.plate_mode == PlateMode.RECTANGLE:
            log_info("- Plate size: %g x %g microm\n", self.plate_width, self.plate_height)
        else:
            log_info("- Plate size: %g microm (circle)\n", self.plate_diameter)

        placers = self._create_placers()
        self.placers_count = len(placers)
        self.placer_current = 0
        self._run_placers(placers)

        if self.cancel or self.solution is None:
            return
        log_info("* Solution\n")
        log_info("- Plates: %d\n", self.solution.count_plates())
        log_info("- Score: %g\n", self.solution.score())
        self.write_files(self.solution)
        self.plates = self.solution.count_plates()