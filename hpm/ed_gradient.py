"""Smoothing, gradient and anchor computation for Edge Drawing.

Images are 2-D numpy arrays indexed ``[row, column]``.  Edge maps are
``uint8`` arrays in which anchors carry ``ANCHOR_PIXEL``.  Direction maps
hold :class:`EdgeDir` values as ``int8``.  Points are ``(x, y)`` tuples,
``x`` being the column and ``y`` the row.
"""

from __future__ import annotations

import numpy as np

from hpm.ed_types import ANCHOR_PIXEL, EdgeDir, GradientOperator

_EDGE_MARK = 255


def _require_2d(array: np.ndarray, name: str) -> None:
    if array.ndim != 2:
        raise ValueError(f"{name} must be a 2-D array, got {array.ndim} dimensions")


def gaussian_kernel(ksize: int, sigma: float) -> np.ndarray:
    """Return a normalised 1-D Gaussian kernel.

    A non-positive ``ksize`` is derived from ``sigma``; a non-positive
    ``sigma`` is derived from ``ksize``.
    """
    if ksize <= 0 and sigma <= 0:
        raise ValueError("either ksize or sigma must be positive")
    if ksize <= 0:
        ksize = int(np.rint(sigma * 3 * 2 + 1)) | 1
    if ksize % 2 == 0:
        raise ValueError(f"ksize must be odd, got {ksize}")
    if sigma <= 0:
        sigma = 0.3 * ((ksize - 1) * 0.5 - 1) + 0.8
    offsets = np.arange(ksize, dtype=np.float64) - (ksize - 1) / 2.0
    kernel = np.exp(-(offsets**2) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def gaussian_blur(image, sigma: float) -> np.ndarray:
    """Smooth a greyscale image with a separable Gaussian filter.

    A sigma of exactly 1.0 uses a 5-tap kernel; any other sigma derives the
    kernel size from sigma.  Borders are mirrored without repeating the edge.
    """
    img = np.asarray(image)
    _require_2d(img, "image")
    kernel = gaussian_kernel(5 if sigma == 1.0 else 0, sigma)
    half = len(kernel) // 2
    height, width = img.shape
    padded = np.pad(img.astype(np.float64), half, mode="reflect")

    across = sum(
        weight * padded[:, tap : tap + width] for tap, weight in enumerate(kernel)
    )
    result = sum(
        weight * across[tap : tap + height, :] for tap, weight in enumerate(kernel)
    )
    return np.clip(np.rint(result), 0, 255).astype(np.uint8)


def compute_gradient(
    smooth, op: GradientOperator, grad_thresh: int, sum_flag: bool
) -> tuple[np.ndarray, np.ndarray]:
    """Compute the gradient magnitude map and the edge direction map.

    Border pixels get ``grad_thresh - 1``.  Interior pixels whose magnitude
    reaches ``grad_thresh`` are marked vertical when ``gx >= gy`` and
    horizontal otherwise; all others stay ``EdgeDir.NONE``.
    """
    s = np.asarray(smooth).astype(np.int32)
    _require_2d(s, "smooth")
    height, width = s.shape
    grad = np.zeros((height, width), dtype=np.int16)
    dirs = np.full((height, width), EdgeDir.NONE, dtype=np.int8)

    border = grad_thresh - 1
    grad[0, :] = border
    grad[-1, :] = border
    grad[:, 0] = border
    grad[:, -1] = border

    if height < 3 or width < 3:
        return grad, dirs

    a, b, c = s[:-2, :-2], s[:-2, 1:-1], s[:-2, 2:]
    d, x, e = s[1:-1, :-2], s[1:-1, 1:-1], s[1:-1, 2:]
    f, g, h = s[2:, :-2], s[2:, 1:-1], s[2:, 2:]

    if op is GradientOperator.LSD:
        com1 = h - x
        com2 = e - g
        gx = np.abs(com1 + com2)
        gy = np.abs(com1 - com2)
    else:
        com1 = h - a
        com2 = c - f
        if op is GradientOperator.PREWITT:
            gx = np.abs(com1 + com2 + (e - d))
            gy = np.abs(com1 - com2 + (g - b))
        elif op is GradientOperator.SOBEL:
            gx = np.abs(com1 + com2 + 2 * (e - d))
            gy = np.abs(com1 - com2 + 2 * (g - b))
        elif op is GradientOperator.SCHARR:
            gx = np.abs(3 * (com1 + com2) + 10 * (e - d))
            gy = np.abs(3 * (com1 - com2) + 10 * (g - b))
        else:
            raise ValueError(f"unknown gradient operator: {op!r}")

    if sum_flag:
        magnitude = gx + gy
    else:
        magnitude = np.floor(
            np.sqrt(gx.astype(np.float64) ** 2 + gy.astype(np.float64) ** 2)
        ).astype(np.int32)

    grad[1:-1, 1:-1] = magnitude
    strong = magnitude >= grad_thresh
    inner = dirs[1:-1, 1:-1]
    inner[strong & (gx >= gy)] = EdgeDir.VERTICAL
    inner[strong & (gx < gy)] = EdgeDir.HORIZONTAL
    return grad, dirs


def compute_anchor_points(
    grad, dirs, grad_thresh: int, anchor_thresh: int, scan_interval: int
) -> tuple[np.ndarray, list[tuple[int, int]]]:
    """Find anchors: local gradient maxima across the edge direction.

    Rows that are multiples of ``scan_interval`` are scanned fully; other
    rows only at columns that are multiples of it.  Returns a fresh edge map
    with anchors marked and the anchors in row-major order.
    """
    if scan_interval < 1:
        raise ValueError(f"scan_interval must be at least 1, got {scan_interval}")
    g = np.asarray(grad).astype(np.int32)
    dir_map = np.asarray(dirs)
    _require_2d(g, "grad")
    if dir_map.shape != g.shape:
        raise ValueError("grad and dirs must have the same shape")
    height, width = g.shape
    edge = np.zeros((height, width), dtype=np.uint8)
    if height < 5 or width < 5:
        return edge, []

    core = g[2:-2, 2:-2]
    vertical = dir_map[2:-2, 2:-2] == EdgeDir.VERTICAL
    diff1 = np.where(vertical, core - g[2:-2, 1:-3], core - g[1:-3, 2:-2])
    diff2 = np.where(vertical, core - g[2:-2, 3:-1], core - g[3:-1, 2:-2])
    is_anchor = (core >= grad_thresh) & (diff1 >= anchor_thresh) & (diff2 >= anchor_thresh)

    rows = np.arange(2, height - 2)
    cols = np.arange(2, width - 2)
    scanned = (rows[:, None] % scan_interval == 0) | (cols[None, :] % scan_interval == 0)

    ys, xs = np.nonzero(is_anchor & scanned)
    ys = ys + 2
    xs = xs + 2
    edge[ys, xs] = ANCHOR_PIXEL
    return edge, [(int(px), int(py)) for px, py in zip(xs, ys)]


def select_stable_anchors(
    grad, edge, anchor_thresh: int
) -> tuple[np.ndarray, list[tuple[int, int]]]:
    """Keep only anchors that stand out from their neighbours across the edge.

    The edge orientation at an anchor is taken from which pair of opposite
    neighbours is set in ``edge`` (horizontal, vertical, then the two
    diagonals).  Returns a new edge map holding only the kept anchors and
    the kept anchors in row-major order.
    """
    g = np.asarray(grad).astype(np.int32)
    out = np.array(edge, dtype=np.uint8, copy=True)
    _require_2d(g, "grad")
    if out.shape != g.shape:
        raise ValueError("grad and edge must have the same shape")
    height, width = g.shape

    if height >= 3 and width >= 3:
        nz = out != 0
        anchor = out[1:-1, 1:-1] == ANCHOR_PIXEL
        left, right = nz[1:-1, :-2], nz[1:-1, 2:]
        up, down = nz[:-2, 1:-1], nz[2:, 1:-1]
        up_left, down_right = nz[:-2, :-2], nz[2:, 2:]
        up_right, down_left = nz[:-2, 2:], nz[2:, :-2]

        gc = g[1:-1, 1:-1]

        def stands_out(first: np.ndarray, second: np.ndarray) -> np.ndarray:
            return (gc - first >= anchor_thresh) & (gc - second >= anchor_thresh)

        along_row = left & right
        along_col = ~along_row & up & down
        main_diag = ~along_row & ~along_col & up_left & down_right
        anti_diag = ~along_row & ~along_col & ~main_diag & up_right & down_left

        stable = anchor & (
            (along_row & stands_out(g[:-2, 1:-1], g[2:, 1:-1]))
            | (along_col & stands_out(g[1:-1, :-2], g[1:-1, 2:]))
            | (main_diag & stands_out(g[:-2, 2:], g[2:, :-2]))
            | (anti_diag & stands_out(g[:-2, :-2], g[2:, 2:]))
        )
        out[1:-1, 1:-1][stable] = _EDGE_MARK

    was_anchor = out == ANCHOR_PIXEL
    was_marked = out == _EDGE_MARK
    out[was_anchor] = 0
    out[was_marked] = ANCHOR_PIXEL
    ys, xs = np.nonzero(was_marked)
    return out, [(int(px), int(py)) for px, py in zip(xs, ys)]


def sort_anchors_by_gradient(grad, edge) -> list[tuple[int, int]]:
    """Return interior anchors as ``(x, y)``, strongest gradient first.

    Anchors with equal gradient keep row-major order.
    """
    g = np.asarray(grad)
    marks = np.asarray(edge)
    _require_2d(g, "grad")
    if marks.shape != g.shape:
        raise ValueError("grad and edge must have the same shape")
    height, width = g.shape
    if height < 3 or width < 3:
        return []
    ys, xs = np.nonzero(marks[1:-1, 1:-1] == ANCHOR_PIXEL)
    ys = ys + 1
    xs = xs + 1
    values = g[ys, xs].astype(np.int64)
    order = np.argsort(-values, kind="stable")
    return [(int(xs[k]), int(ys[k])) for k in order]