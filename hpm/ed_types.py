"""Shared types and constants for Edge Drawing edge and segment detection."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

MAX_GRAD_VALUE = 128 * 256
EPSILON = 1.0
MIN_SEGMENT_LEN = 10
ANCHOR_PIXEL = 254
EDGE_PIXEL = 255


class EdgeDir(enum.IntEnum):
    """Orientation of the edge passing through a pixel."""

    VERTICAL = 0
    HORIZONTAL = 1
    NONE = 2


class Direction(enum.Enum):
    """Direction in which an edge chain is traced."""

    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    NONE = enum.auto()


class GradientOperator(enum.Enum):
    PREWITT = enum.auto()
    SOBEL = enum.auto()
    SCHARR = enum.auto()
    LSD = enum.auto()


@dataclass(frozen=True)
class EdConfig:
    """Parameters of the edge detector."""

    op: GradientOperator = GradientOperator.PREWITT
    grad_thresh: int = 20
    anchor_thresh: int = 4
    scan_interval: int = 1
    blur_size: float = 1.0
    sum_flag: bool = True

    def normalized(self) -> EdConfig:
        """Return a copy with thresholds and blur clamped to usable minimums."""
        if self.scan_interval < 1:
            raise ValueError(
                f"scan_interval must be at least 1, got {self.scan_interval}"
            )
        return replace(
            self,
            grad_thresh=max(self.grad_thresh, 1),
            anchor_thresh=max(self.anchor_thresh, 0),
            blur_size=max(float(self.blur_size), 1.0),
        )