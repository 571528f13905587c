# plater

`plater` takes a list of STL parts, each with a quantity and an orientation,
and packs them onto as few printer build plates as it can. Each plate is
written out as a binary STL file, or as a plain-text PGM-style grey map
(`.ppm`) of its occupancy grid.

Placement works on a top-view raster of every part, tried at each rotation
step; the part is put where its centroid scores lowest, and a new plate is
opened when it fits on none of the existing ones.

## Installation

```
pip install .
```

## Describing the parts

Parts are listed in a plain text configuration file, usually called
`plater.conf`, with one part per line:

```
# filename quantity [orientation]
bracket.stl 4
gear.stl 2 top
my part with spaces.stl 1 left
```

- Lines starting with `#` are ignored.
- The quantity is required: the file name is everything before the last
  all-digit word. A line without such a word, or with a quantity of 0, is
  skipped.
- The orientation is the face put on the plate: `top`, `front`, `back`,
  `left` or `right`; anything else (including `bottom`, the default) leaves
  the part as it is.
- Only files ending in `.stl` (ASCII or binary) are loaded; other files give
  an empty part.

When the configuration is read from a file, the working directory changes to
that file's directory, so part names and output files are relative to it.

## Command line

```
plater [options] plater.conf
```

Use `-` as the file name to read the configuration from standard input.

| Option | Meaning |
| --- | --- |
| `-h` | Show help |
| `-v` | Verbose output on standard error |
| `-W width` | Plate width in mm (default 150) |
| `-H height` | Plate height in mm (default 150) |
| `-D diameter` | Circular plate of this diameter in mm |
| `-j precision` | Raster precision in mm (default 0.5) |
| `-s spacing` | Spacing between parts in mm (default 1.5) |
| `-d delta` | Placement search step in mm (default 1) |
| `-r rotation` | Rotation step in degrees (default 90) |
| `-S` | Try several part orderings (by surface, plus shuffled ones) |
| `-R random` | Number of extra shuffled orderings to try with `-S` (default 3) |
| `-o pattern` | Output file pattern, `%d`-style (default `plate_%03d`) |
| `-p` | Write `.ppm` grids instead of `.stl` files |
| `-t threads` | Number of placement strategies run at once (default 1) |
| `-c` | Also write `plates.csv` with every part's plate, centre (mm) and rotation (degrees) |

Example:

```
plater -v -W 200 -H 200 -s 2 -S -o out/plate_%03d plater.conf
```

This writes `out/plate_001.stl`, `out/plate_002.stl`, and so on; the `out`
directory must already exist. `plates.csv` is written to the working
directory.

The command exits with status 0 on success. It exits with status 1 after
printing the help (for `-h`, a bad option or a missing file name) or after
printing an error such as a part too big for the plate or an unwritable
output file.

## Library use

```python
from plater.request import Request, RequestError

request = Request()
request.set_plate_size(200, 200)          # millimetres
try:
    request.read_parts_from_string("bracket.stl 4\ngear.stl 2 top\n")
    request.process()
except RequestError as exc:
    print("failed:", exc)
else:
    print(request.plates, request.generated_files)
```

Inside a `Request`, lengths are in micrometres and angles in radians.

Lower-level building blocks:

- `plater.stl`: `load_model`, `load_model_stl`, `load_model_ascii`,
  `load_model_binary`, `save_model_ascii`, `save_model_binary`; errors raise
  `StlError`.
- `plater.model`: `Model`, `Volume` and `Face`, with translation, rotation,
  centring, `put_face_on_plate` and `pixelize`.
- `plater.bitmap.Bitmap`: rotation, trimming, dilatation, overlap tests and
  `to_ppm`.
- `plater.part.Part`, `plater.placed_part.PlacedPart`, `plater.plate.Plate`,
  `plater.solution.Solution` and `plater.placer.Placer`, which runs one
  placement pass.

## What it does not do

There is no graphical interface and no 3D preview: the package reads a part
list and writes plate files, and nothing else.