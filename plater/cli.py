"""Command line entry point: spread the parts of a plater.conf over plates."""

from __future__ import annotations

import getopt
import math
import re
import sys

from .log import increase_verbose_level
from .plate import PlateMode
from .request import OutputMode, Request, RequestError, SortStrategy

_OPTIONS = "hvs:d:r:pj:o:W:H:R:D:t:Sc"
_LEADING_FLOAT = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_LEADING_INT = re.compile(r"\s*[-+]?\d+")

_HELP = """\
Plater v1.0
Usage: plater [options] plater.conf
(Use - to read from stdin)

-h: Display this help
-v: Verbose mode
The size of the bed plate (topview, 2D):
  -W width: Setting the plate width (default: 150mm)
  -H height: Setting the plate height (default: 150mm)
-D diameter: Set the plate diameter, in mm. If set, this will put the plate in circular mode
-j precision: Sets the precision (in mm, default: 0.5)
-s spacing: Change the spacing between parts (in mm, default: 1.5)
-d delta: Sets the interval of place grid (in mm, default: 1.5)
-r rotation: Sets the interval of rotation (in °, default: 90)
-S: Trying multiple sort possibilities
-R random: Sets the number of random (shuffled parts) iterations (only with -S)
-o pattern: output file pattern (default: plate_%03d)
-p: will output ppm of the plates
-t threads: sets the number of threads (default 1)
-c: enables the output of plates.csv containing plates infos
"""


def _atof(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group()) if match else 0.0


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def print_help() -> None:
    """Write the usage text to standard error."""
    sys.stderr.write(_HELP)


def _apply_option(request: Request, option: str, value: str) -> None:
    match option:
        case "-v":
            increase_verbose_level()
        case "-s":
            request.spacing = _atof(value) * 1000
        case "-d":
            request.delta = _atof(value) * 1000
        case "-r":
            request.delta_r = math.radians(_atof(value))
        case "-p":
            request.mode = OutputMode.PPM
        case "-j":
            request.precision = _atof(value) * 1000
        case "-o":
            request.pattern = value
        case "-W":
            request.plate_width = _atof(value) * 1000
        case "-H":
            request.plate_height = _atof(value) * 1000
        case "-S":
            request.sort_mode = SortStrategy.MULTIPLE
        case "-R":
            request.random_iterations = _atoi(value)
        case "-D":
            request.plate_mode = PlateMode.CIRCLE
            request.plate_diameter = _atof(value) * 1000
        case "-t":
            request.nb_threads = _atoi(value)
        case "-c":
            request.plates_info = True


def main(argv=None) -> int:
    """Run the plater command; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options, operands = getopt.gnu_getopt(args, _OPTIONS)
    except getopt.GetoptError as exc:
        print(f"plater: {exc}", file=sys.stderr)
        print_help()
        return 1

    request = Request()
    for option, value in options:
        if option == "-h":
            print_help()
            return 1
        _apply_option(request, option, value)

    if not operands:
        print_help()
        return 1

    try:
        filename = operands[0]
        if filename == "-":
            request.read_from_stdin()
        else:
            request.read_from_file(filename)
        request.process()
    except RequestError as exc:
        print(f"! {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())