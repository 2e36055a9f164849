"""Edge Drawing: edge and segment detection on greyscale images."""

from __future__ import annotations

import numpy as np

from hpm.ed_gradient import (
    compute_anchor_points,
    compute_gradient,
    gaussian_blur,
    select_stable_anchors,
)
from hpm.ed_linking import join_anchor_points
from hpm.ed_types import EdConfig

Point = tuple[int, int]
_DRAW_VALUE = 255


class ED:
    """Detect edge pixels and link them into segments of ``(x, y)`` points.

    After construction, ``segments`` holds the linked edge segments and
    ``anchor_points`` the anchors the linking started from.
    """

    def __init__(self, image, config: EdConfig | None = None) -> None:
        cfg = (config if config is not None else EdConfig()).normalized()
        src = np.asarray(image)
        if src.ndim != 2:
            raise ValueError(
                f"image must be a 2-D greyscale array, got {src.ndim} dimensions"
            )
        src = np.ascontiguousarray(src, dtype=np.uint8)

        smooth = gaussian_blur(src, cfg.blur_size)
        grad, dirs = compute_gradient(smooth, cfg.op, cfg.grad_thresh, cfg.sum_flag)
        edge, anchors = compute_anchor_points(
            grad, dirs, cfg.grad_thresh, cfg.anchor_thresh, cfg.scan_interval
        )
        segments = join_anchor_points(edge, grad, dirs, cfg.grad_thresh)

        self.config = cfg
        self._store(src, smooth, grad, edge, anchors, segments)

    @classmethod
    def from_gradient(
        cls,
        grad_image,
        dir_data,
        grad_thresh: int,
        anchor_thresh: int,
        scan_interval: int = 1,
        select_stable_anchors: bool = True,
    ) -> ED:
        """Detect edges from a ready gradient map and edge direction map.

        With ``select_stable_anchors`` anchors are first found with a zero
        threshold and then only those standing out from their neighbours by
        ``anchor_thresh`` across the edge are kept.
        """
        grad = np.asarray(grad_image)
        if grad.ndim != 2:
            raise ValueError(
                f"grad_image must be a 2-D array, got {grad.ndim} dimensions"
            )
        grad = np.array(grad, dtype=np.int16, copy=True)
        dirs = np.asarray(dir_data)
        if dirs.size != grad.size:
            raise ValueError("dir_data must hold one direction per gradient pixel")
        dirs = np.array(dirs, dtype=np.int8).reshape(grad.shape)

        if select_stable_anchors:
            edge, _ = compute_anchor_points(grad, dirs, grad_thresh, 0, scan_interval)
            edge, anchors = select_stable_anchors_fn(grad, edge, anchor_thresh)
        else:
            edge, anchors = compute_anchor_points(
                grad, dirs, grad_thresh, anchor_thresh, scan_interval
            )
        segments = join_anchor_points(edge, grad, dirs, grad_thresh)

        detector = cls.__new__(cls)
        detector.config = EdConfig(
            grad_thresh=grad_thresh,
            anchor_thresh=anchor_thresh,
            scan_interval=scan_interval,
        )
        empty = np.zeros((0, 0), dtype=np.uint8)
        detector._store(empty, empty, grad, edge, anchors, segments)
        return detector

    def _store(self, src, smooth, grad, edge, anchors, segments) -> None:
        self.height, self.width = edge.shape
        self._src = src
        self._smooth = smooth
        self._grad = grad
        self._edge = edge
        self.anchor_points: list[Point] = list(anchors)
        self.segments: list[list[Point]] = segments

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def anchor_count(self) -> int:
        return len(self.anchor_points)

    def edge_image(self) -> np.ndarray:
        """Return the edge map (0, anchor or edge marks)."""
        return self._edge.copy()

    def anchor_image(self) -> np.ndarray:
        """Return an image with 255 at every anchor point."""
        image = np.zeros_like(self._edge)
        for x, y in self.anchor_points:
            image[y, x] = _DRAW_VALUE
        return image

    def smooth_image(self) -> np.ndarray:
        """Return the smoothed source image (empty when built from a gradient)."""
        return self._smooth.copy()

    def grad_image(self) -> np.ndarray:
        """Return the absolute gradient, saturated to 8 bits."""
        magnitude = np.abs(self._grad.astype(np.int32))
        return np.clip(magnitude, 0, 255).astype(np.uint8)

    def sorted_segments(self) -> list[list[Point]]:
        """Return the segments ordered from longest to shortest."""
        return sorted(self.segments, key=len, reverse=True)

    def draw_particular_segments(self, indices) -> np.ndarray:
        """Return an image with 255 on the pixels of the chosen segments."""
        image = np.zeros_like(self._edge)
        for index in indices:
            if index < 0 or index >= len(self.segments):
                raise IndexError(f"segment index out of range: {index}")
            for x, y in self.segments[index]:
                image[y, x] = _DRAW_VALUE
        return image


select_stable_anchors_fn = select_stable_anchors