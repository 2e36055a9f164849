import numpy as np
import pytest

from hpm.ed_gradient import compute_anchor_points, compute_gradient
from hpm.ed_linking import Chain, join_anchor_points, longest_chain, retrieve_chain_nos
from hpm.ed_types import ANCHOR_PIXEL, EDGE_PIXEL, MIN_SEGMENT_LEN, GradientOperator


def _tree():
    # 0 is the root placeholder; 1 has children 2 and 3; 3 has child 4.
    return [
        Chain(length=0, children=[1, -1]),
        Chain(length=3, parent=0, children=[2, 3]),
        Chain(length=4, parent=1),
        Chain(length=2, parent=1, children=[4, -1]),
        Chain(length=5, parent=3),
    ]


def _line_image(height=30, width=20, column=10, rows=None):
    image = np.zeros((height, width), dtype=np.uint8)
    if rows is None:
        image[:, column] = 200
    else:
        image[rows, column] = 200
    return image


def _link(image, grad_thresh, anchor_thresh=4):
    grad, dirs = compute_gradient(image, GradientOperator.SOBEL, grad_thresh, True)
    edge, _ = compute_anchor_points(grad, dirs, grad_thresh, anchor_thresh, 1)
    segments = join_anchor_points(edge, grad, dirs, grad_thresh)
    return edge, segments


def test_longest_chain_of_missing_root_is_zero():
    assert longest_chain(_tree(), -1) == 0


def test_longest_chain_of_empty_root_is_zero():
    chains = _tree()
    chains[2].length = 0
    assert longest_chain(chains, 2) == 0


def test_longest_chain_matches_retrieved_path():
    chains = _tree()
    total = longest_chain(chains, 1)
    path = retrieve_chain_nos(chains, 1)
    assert total == sum(chains[n].length for n in path)
    assert path == [1, 3, 4]


def test_longest_chain_prunes_shorter_child():
    chains = _tree()
    longest_chain(chains, 1)
    assert chains[1].children == [-1, 3]


def test_longest_chain_tie_prefers_first_child():
    chains = [
        Chain(),
        Chain(length=1, children=[2, 3]),
        Chain(length=4),
        Chain(length=4),
    ]
    total = longest_chain(chains, 1)
    assert chains[1].children == [2, -1]
    assert total == chains[1].length + chains[2].length


def test_retrieve_chain_nos_follows_second_child_when_first_missing():
    chains = [Chain(), Chain(length=1, children=[-1, 2]), Chain(length=1)]
    assert retrieve_chain_nos(chains, 1) == [1, 2]


def test_retrieve_chain_nos_from_missing_root_is_empty():
    assert retrieve_chain_nos(_tree(), -1) == []


def test_join_without_anchors_gives_no_segments():
    height, width = 12, 12
    edge = np.zeros((height, width), dtype=np.uint8)
    grad = np.zeros((height, width), dtype=np.int16)
    dirs = np.full((height, width), 2, dtype=np.int8)
    assert join_anchor_points(edge, grad, dirs, 20) == []
    assert not edge.any()


def test_join_straight_line_gives_two_vertical_segments():
    height = 30
    edge, segments = _link(_line_image(height=height), grad_thresh=36)
    assert len(segments) == 2
    columns = sorted({x for x, _ in segments[0]} | {x for x, _ in segments[1]})
    assert columns == [9, 11]
    for segment in segments:
        assert len({x for x, _ in segment}) == 1
        assert sorted(y for _, y in segment) == list(range(1, height - 1))
        assert len(segment) >= MIN_SEGMENT_LEN


def test_join_marks_traced_pixels_and_consumes_anchors():
    height = 30
    edge, _ = _link(_line_image(height=height), grad_thresh=36)
    assert [int(v) for v in edge[1:-1, 9]] == [EDGE_PIXEL] * (height - 2)
    assert [int(v) for v in edge[1:-1, 11]] == [EDGE_PIXEL] * (height - 2)
    assert int(np.count_nonzero(edge == ANCHOR_PIXEL)) == 0


def test_segments_are_eight_connected_for_straight_line():
    _, segments = _link(_line_image(), grad_thresh=36)
    for segment in segments:
        for (x0, y0), (x1, y1) in zip(segment, segment[1:]):
            assert abs(x0 - x1) <= 1 and abs(y0 - y1) <= 1


def test_short_edge_is_discarded_and_cleared():
    image = _line_image(rows=slice(10, 14))
    edge, segments = _link(image, grad_thresh=700)
    assert segments == []
    assert not edge.any()


def test_join_requires_numpy_edge():
    grad = np.zeros((5, 5), dtype=np.int16)
    dirs = np.zeros((5, 5), dtype=np.int8)
    with pytest.raises(TypeError):
        join_anchor_points([[0] * 5] * 5, grad, dirs, 20)


def test_join_rejects_mismatched_shapes():
    edge = np.zeros((5, 5), dtype=np.uint8)
    grad = np.zeros((6, 5), dtype=np.int16)
    dirs = np.zeros((5, 5), dtype=np.int8)
    with pytest.raises(ValueError):
        join_anchor_points(edge, grad, dirs, 20)