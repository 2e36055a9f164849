# hpm

Edge Drawing (ED) edge and segment detection on greyscale images, a few
geometry types for camera-based pose estimation, and a small command-line
argument parser.

## Installation

```
pip install .
```

The only runtime dependency is `numpy`. Install the `test` extra to run the
tests with `pytest`.

## Edge and segment detection

`hpm.ed.ED` runs the full Edge Drawing pipeline on a 2-D greyscale array:
Gaussian smoothing, gradient computation, anchor extraction and linking of
anchors into segments. Segments are lists of `(x, y)` points.

```python
import numpy as np
from hpm.ed import ED
from hpm.ed_types import EdConfig, GradientOperator

image = np.zeros((64, 64), dtype=np.uint8)
image[16:48, 16:48] = 200

ed = ED(image, EdConfig(op=GradientOperator.SOBEL, grad_thresh=36, anchor_thresh=8))

ed.segments                      # list of segments, each a list of (x, y)
ed.segment_count                 # number of segments
ed.anchor_points                 # anchors found before linking
edges = ed.edge_image()          # uint8 edge map
anchors = ed.anchor_image()      # 255 at every anchor point
smooth = ed.smooth_image()       # the smoothed input
gradient = ed.grad_image()       # absolute gradient, saturated to uint8
longest_first = ed.sorted_segments()
only_first = ed.draw_particular_segments([0])
```

`EdConfig` holds the operator (`PREWITT` by default, or `SOBEL`, `SCHARR`,
`LSD`), `grad_thresh` (20), `anchor_thresh` (4), `scan_interval` (1),
`blur_size` (1.0) and `sum_flag` (`True`: magnitude is `|gx| + |gy|`;
`False`: the Euclidean norm). `EdConfig.normalized()` clamps the gradient
threshold to at least 1, the anchor threshold to at least 0 and the blur to
at least 1.0, and raises `ValueError` for a scan interval below 1.

`ED.from_gradient(grad_image, dir_data, grad_thresh, anchor_thresh,
scan_interval=1, select_stable_anchors=True)` builds a detector from a ready
gradient map and edge direction map. With stable anchor selection, anchors
are first found with a zero threshold and only those standing out from both
neighbours across the edge by `anchor_thresh` are kept. Its
`smooth_image()` is empty.

`draw_particular_segments` raises `IndexError` for an index outside the
segment list.

The building blocks can also be used on their own:

- `hpm.ed_gradient`: `gaussian_kernel`, `gaussian_blur`, `compute_gradient`,
  `compute_anchor_points`, `select_stable_anchors`, `sort_anchors_by_gradient`
- `hpm.ed_linking`: `join_anchor_points` (updates the edge map in place),
  `longest_chain`, `retrieve_chain_nos`, `Chain`
- `hpm.ed_types`: `EdgeDir`, `Direction`, `GradientOperator`, `EdConfig`, and
  the constants `ANCHOR_PIXEL`, `EDGE_PIXEL`, `MIN_SEGMENT_LEN`

## Geometry types

`hpm.geometry` provides:

- `CameraFramedPosition` (alias `CameraFramedVector`), a named `(x, y, z)`
- `WorldPosition`, with `WorldPosition.from_camera_frame(position, rotation,
  translation)` computing `rotation @ position + translation`
- `SixDof`, a pose with `rotation`, `translation` and `reprojection_error`;
  properties `x`, `y`, `z`, `rot_x`, `rot_y`, `rot_z`; poses compare with `<`
  by reprojection error
- `MarkerType` (`SPHERE`, `DISK`) and `NUMBER_OF_MARKERS`

## Command-line parsing

`hpm.command_line.CommandLine` binds flags (with aliases) to typed values of
kind `bool`, `int`, `float` or `str`:

```python
from hpm.command_line import CommandLine

cmd = CommandLine("Detects edges in an image.")
cmd.add_argument(["--help", "-h"], "help", bool, "Print this help message", False)
cmd.add_argument(["--threshold", "-t"], "threshold", int, "Gradient threshold", 36)
values = cmd.parse(["--threshold=40", "-h"])
if values["help"]:
    cmd.print_help()
```

`parse` returns a dict from destination to value; options not given keep
their defaults and the last occurrence of an option wins. Values follow a
flag after a space or after `=`. A boolean flag alone becomes `True` and
accepts an optional `true` or `false`. A non-boolean flag without a value
raises `CommandLineError` (a `ValueError`). Unknown flags produce a warning
on standard error and are skipped. `format_help()` returns the description
and aligned, wrapped help lines; `print_help(stream)` writes them.

## What this package does not do

It works on numpy arrays only: it does not read, write or display image
files, does not accept colour images, and detects edge segments only, not
lines, circles or ellipses. It installs no command of its own.