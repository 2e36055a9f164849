import numpy as np
import pytest

from hpm.geometry import (
    CameraFramedPosition,
    SixDof,
    WorldPosition,
)


def test_identity_transform_keeps_point():
    point = CameraFramedPosition(1.0, 2.0, 3.0)
    world = WorldPosition.from_camera_frame(point, np.eye(3), (0.0, 0.0, 0.0))
    assert world == WorldPosition(1.0, 2.0, 3.0)


def test_translation_is_added():
    point = CameraFramedPosition(1.0, 2.0, 3.0)
    world = WorldPosition.from_camera_frame(point, np.eye(3), (10.0, 20.0, 30.0))
    assert world == WorldPosition(11.0, 22.0, 33.0)


def test_rotation_about_z():
    rotation = [[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]
    world = WorldPosition.from_camera_frame(
        CameraFramedPosition(1.0, 0.0, 0.0), rotation, (0.0, 0.0, 0.0)
    )
    assert world == pytest.approx((0.0, 1.0, 0.0))


def test_rotation_preserves_length():
    angle = 0.7
    rotation = [
        [1.0, 0.0, 0.0],
        [0.0, np.cos(angle), -np.sin(angle)],
        [0.0, np.sin(angle), np.cos(angle)],
    ]
    point = CameraFramedPosition(1.0, 2.0, 3.0)
    world = WorldPosition.from_camera_frame(point, rotation, (0.0, 0.0, 0.0))
    assert np.linalg.norm(world) == pytest.approx(np.linalg.norm(point))


def test_bad_rotation_shape_raises():
    with pytest.raises(ValueError):
        WorldPosition.from_camera_frame((1, 2, 3), np.eye(2), (0, 0, 0))


def test_sixdof_components():
    pose = SixDof(rotation=[0.1, 0.2, 0.3], translation=[4.0, 5.0, 6.0])
    assert (pose.x, pose.y, pose.z) == (4.0, 5.0, 6.0)
    assert (pose.rot_x, pose.rot_y, pose.rot_z) == (0.1, 0.2, 0.3)


def test_sixdof_default_string():
    assert str(SixDof()) == "[0, 0, 0]\n[0, 0, 0]\n0"


def test_sixdof_sorts_by_reprojection_error():
    poses = [SixDof(reprojection_error=e) for e in (3.0, 1.0, 2.0)]
    ordered = sorted(poses)
    assert [p.reprojection_error for p in ordered] == [1.0, 2.0, 3.0]
    assert SixDof(reprojection_error=1.0) < SixDof(reprojection_error=2.0)


def test_sixdof_rejects_wrong_shape():
    with pytest.raises(ValueError):
        SixDof(rotation=[1.0, 2.0])