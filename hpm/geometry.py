"""Basic geometric value types used for pose estimation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

NUMBER_OF_MARKERS = 6


class CameraFramedPosition(NamedTuple):
    """A point expressed in the camera's coordinate frame."""

    x: float
    y: float
    z: float


CameraFramedVector = CameraFramedPosition


class WorldPosition(NamedTuple):
    """A point expressed in the world coordinate frame."""

    x: float
    y: float
    z: float

    @classmethod
    def from_camera_frame(cls, position, rotation, translation) -> WorldPosition:
        """Transform a camera-frame point by ``rotation @ position + translation``."""
        rot = np.asarray(rotation, dtype=float).reshape(3, 3)
        point = np.asarray(position, dtype=float).reshape(3)
        shift = np.asarray(translation, dtype=float).reshape(3)
        result = rot @ point + shift
        return cls(*(float(value) for value in result))


class MarkerType(enum.Enum):
    SPHERE = enum.auto()
    DISK = enum.auto()


def _vector3(values) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {array.shape}")
    return array


def _format_vector(vector: np.ndarray) -> str:
    return "[" + ", ".join(f"{value:g}" for value in vector) + "]"


@dataclass(eq=False)
class SixDof:
    """A pose: rotation vector, translation and the reprojection error."""

    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    reprojection_error: float = 0.0

    def __post_init__(self) -> None:
        self.rotation = _vector3(self.rotation)
        self.translation = _vector3(self.translation)
        self.reprojection_error = float(self.reprojection_error)

    @property
    def x(self) -> float:
        return float(self.translation[0])

    @property
    def y(self) -> float:
        return float(self.translation[1])

    @property
    def z(self) -> float:
        return float(self.translation[2])

    @property
    def rot_x(self) -> float:
        return float(self.rotation[0])

    @property
    def rot_y(self) -> float:
        return float(self.rotation[1])

    @property
    def rot_z(self) -> float:
        return float(self.rotation[2])

    def __lt__(self, other: SixDof) -> bool:
        if not isinstance(other, SixDof):
            return NotImplemented
        return self.reprojection_error < other.reprojection_error

    def __str__(self) -> str:
        return (
            f"{_format_vector(self.rotation)}\n"
            f"{_format_vector(self.translation)}\n"
            f"{self.reprojection_error:g}"
        )