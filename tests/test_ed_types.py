import dataclasses

import pytest

from hpm.ed_types import EdConfig, EdgeDir, GradientOperator


def test_config_defaults():
    config = EdConfig()
    assert config.op is GradientOperator.PREWITT
    assert config.grad_thresh == 20
    assert config.anchor_thresh == 4
    assert config.scan_interval == 1
    assert config.blur_size == 1.0
    assert config.sum_flag is True


def test_normalized_clamps_low_values():
    config = EdConfig(grad_thresh=0, anchor_thresh=-3, blur_size=0.5).normalized()
    assert config.grad_thresh == 1
    assert config.anchor_thresh == 0
    assert config.blur_size == 1.0


def test_normalized_keeps_valid_values():
    config = EdConfig(
        op=GradientOperator.SOBEL, grad_thresh=36, anchor_thresh=8, blur_size=1.5
    )
    assert config.normalized() == config


def test_normalized_rejects_zero_scan_interval():
    with pytest.raises(ValueError):
        EdConfig(scan_interval=0).normalized()


def test_config_is_frozen():
    config = EdConfig(grad_thresh=7)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.grad_thresh = 5  # type: ignore[misc]
    assert config.grad_thresh == 7


def test_edge_dirs_are_distinct_integers():
    values = [int(d) for d in EdgeDir]
    assert len(set(values)) == len(values) == 3
    assert EdgeDir(int(EdgeDir.HORIZONTAL)) is EdgeDir.HORIZONTAL


@pytest.mark.parametrize("op", list(GradientOperator))
def test_normalized_keeps_operator(op):
    assert EdConfig(op=op).normalized().op is op