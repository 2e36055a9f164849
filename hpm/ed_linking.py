"""Edge linking for Edge Drawing: tracing edge chains outward from anchors.

Starting at the strongest anchor, edges are walked along the gradient ridge
in both directions.  Each walk produces a tree of chains.  The longest path
through that tree becomes a segment, and long side branches become segments
of their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from hpm.ed_gradient import sort_anchors_by_gradient
from hpm.ed_types import (
    ANCHOR_PIXEL,
    EDGE_PIXEL,
    MIN_SEGMENT_LEN,
    Direction,
    EdgeDir,
)

Point = tuple[int, int]

_MIN_BRANCH_LEN = 10


@dataclass
class Chain:
    """A run of pixels traced in one direction during edge linking.

    ``start`` is the offset of the chain's first pixel in the pixel buffer
    of the walk that produced it; ``length`` pixels follow from there.
    """

    direction: Direction = Direction.NONE
    length: int = 0
    parent: int = -1
    children: list[int] = field(default_factory=lambda: [-1, -1])
    start: int = 0


@dataclass(frozen=True)
class _Walk:
    edge_dir: EdgeDir
    forward: tuple[int, int]
    across: tuple[int, int]
    first_side: int
    child: int
    turns: tuple[Direction, Direction]


_WALKS = {
    Direction.LEFT: _Walk(
        EdgeDir.HORIZONTAL, (0, -1), (1, 0), -1, 0, (Direction.DOWN, Direction.UP)
    ),
    Direction.RIGHT: _Walk(
        EdgeDir.HORIZONTAL, (0, 1), (1, 0), 1, 1, (Direction.DOWN, Direction.UP)
    ),
    Direction.UP: _Walk(
        EdgeDir.VERTICAL, (-1, 0), (0, 1), -1, 0, (Direction.RIGHT, Direction.LEFT)
    ),
    Direction.DOWN: _Walk(
        EdgeDir.VERTICAL, (1, 0), (0, 1), 1, 1, (Direction.RIGHT, Direction.LEFT)
    ),
}


def longest_chain(chains: list[Chain], root: int) -> int:
    """Return the pixel count of the longest path from ``root`` downwards.

    Along the way every chain keeps only the child on its longest path; the
    other child is cut off (set to -1).  Ties favour the first child.
    """
    if root == -1 or chains[root].length == 0:
        return 0
    results: dict[int, int] = {}
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        chain = chains[node]
        if not expanded:
            stack.append((node, True))
            for child in chain.children:
                if child != -1 and chains[child].length != 0:
                    stack.append((child, False))
            continue
        first, second = chain.children
        len0 = results.pop(first, 0) if first != -1 else 0
        len1 = results.pop(second, 0) if second != -1 else 0
        if len0 >= len1:
            best = len0
            chain.children[1] = -1
        else:
            best = len1
            chain.children[0] = -1
        results[node] = chain.length + best
    return results[root]


def retrieve_chain_nos(chains: list[Chain], root: int) -> list[int]:
    """Return the chain numbers met when following children from ``root``."""
    numbers = []
    while root != -1:
        numbers.append(root)
        first, second = chains[root].children
        root = first if first != -1 else second
    return numbers


def _adjacent(a: Point, b: Point) -> bool:
    return abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


def _drop_adjacent_tail(segment: list[Point], point: Point) -> None:
    """Pop trailing pixels that, seen from before the last one, touch ``point``."""
    index = len(segment) - 2
    while index >= 0 and _adjacent(point, segment[index]):
        segment.pop()
        index -= 1


def _copy_reversed(
    chains: list[Chain], numbers: list[int], pixels: list[Point], segment: list[Point]
) -> None:
    for number in reversed(numbers):
        chain = chains[number]
        _drop_adjacent_tail(segment, pixels[chain.start + chain.length - 1])
        if chain.length > 1 and segment:
            if _adjacent(pixels[chain.start + chain.length - 2], segment[-1]):
                chain.length -= 1
        segment.extend(
            reversed(pixels[chain.start : chain.start + chain.length])
        )
        chain.length = 0


def _copy_forward(
    chains: list[Chain], numbers: list[int], pixels: list[Point], segment: list[Point]
) -> None:
    for number in numbers:
        chain = chains[number]
        _drop_adjacent_tail(segment, pixels[chain.start])
        skip = 0
        if chain.length > 1 and segment:
            if _adjacent(pixels[chain.start + 1], segment[-1]):
                skip = 1
        segment.extend(pixels[chain.start + skip : chain.start + chain.length])
        chain.length = 0


def _trace(
    row: int,
    col: int,
    edges: list[list[int]],
    grads: list[list[int]],
    dirs: list[list[int]],
    grad_thresh: int,
) -> tuple[list[Chain], list[Point], int]:
    """Walk the edge through one anchor; return chains, pixel buffer, duplicates."""
    chains = [Chain()]
    pixels: list[Point] = []
    duplicates = 0
    if dirs[row][col] == EdgeDir.VERTICAL:
        first, second = Direction.DOWN, Direction.UP
    else:
        first, second = Direction.RIGHT, Direction.LEFT
    stack = [(row, col, first, 0), (row, col, second, 0)]

    while stack:
        r, c, direction, parent = stack.pop()
        if edges[r][c] != EDGE_PIXEL:
            duplicates += 1

        number = len(chains)
        chain = Chain(direction=direction, parent=parent, start=len(pixels))
        chains.append(chain)
        pixels.append((c, r))
        chain_len = 1

        walk = _WALKS[direction]
        fr, fc = walk.forward
        ar, ac = walk.across
        side = walk.first_side
        while dirs[r][c] == walk.edge_dir:
            edges[r][c] = EDGE_PIXEL
            for sign in (-1, 1):
                if edges[r + sign * ar][c + sign * ac] == ANCHOR_PIXEL:
                    edges[r + sign * ar][c + sign * ac] = 0

            nr, nc = r + fr, c + fc
            if edges[nr][nc] >= ANCHOR_PIXEL:
                r, c = nr, nc
            elif edges[nr + side * ar][nc + side * ac] >= ANCHOR_PIXEL:
                r, c = nr + side * ar, nc + side * ac
            elif edges[nr - side * ar][nc - side * ac] >= ANCHOR_PIXEL:
                r, c = nr - side * ar, nc - side * ac
            else:
                low = grads[nr - ar][nc - ac]
                mid = grads[nr][nc]
                high = grads[nr + ar][nc + ac]
                shift = 0
                if low > mid:
                    shift = -1 if low > high else 1
                elif high > mid:
                    shift = 1
                r, c = nr + shift * ar, nc + shift * ac

            if edges[r][c] == EDGE_PIXEL or grads[r][c] < grad_thresh:
                chain.length = chain_len
                chains[parent].children[walk.child] = number
                break

            pixels.append((c, r))
            chain_len += 1
        else:
            turn_a, turn_b = walk.turns
            stack.append((r, c, turn_a, number))
            stack.append((r, c, turn_b, number))
            pixels.pop()
            chain.length = chain_len - 1
            chains[parent].children[walk.child] = number

    return chains, pixels, duplicates


def _build_segments(chains: list[Chain], pixels: list[Point]) -> list[list[Point]]:
    segments: list[list[Point]] = []
    main: list[Point] = []
    root = chains[0]

    if longest_chain(chains, root.children[1]) > 0:
        numbers = retrieve_chain_nos(chains, root.children[1])
        _copy_reversed(chains, numbers, pixels, main)

    if longest_chain(chains, root.children[0]) > 1:
        numbers = retrieve_chain_nos(chains, root.children[0])
        head = chains[numbers[0]]
        head.start += 1
        head.length -= 1
        _copy_forward(chains, numbers, pixels, main)

    if len(main) >= 2 and _adjacent(main[1], main[-1]):
        main.pop(0)
    segments.append(main)

    for number in range(2, len(chains)):
        if chains[number].length < 2:
            continue
        if longest_chain(chains, number) >= _MIN_BRANCH_LEN:
            branch: list[Point] = []
            _copy_forward(
                chains, retrieve_chain_nos(chains, number), pixels, branch
            )
            segments.append(branch)
    return segments


def join_anchor_points(edge, grad, dirs, grad_thresh: int) -> list[list[Point]]:
    """Link anchors into edge segments, strongest anchor first.

    ``edge`` is updated in place: traced pixels become ``EDGE_PIXEL``,
    discarded anchors and short traces are cleared.  Returns the segments
    as lists of ``(x, y)`` points.
    """
    if not isinstance(edge, np.ndarray):
        raise TypeError("edge must be a numpy array; it is updated in place")
    grad_map = np.asarray(grad)
    dir_map = np.asarray(dirs)
    if edge.ndim != 2:
        raise ValueError(f"edge must be a 2-D array, got {edge.ndim} dimensions")
    if grad_map.shape != edge.shape or dir_map.shape != edge.shape:
        raise ValueError("edge, grad and dirs must have the same shape")

    anchors = sort_anchors_by_gradient(grad_map, edge)
    edges = edge.astype(np.int32).tolist()
    grads = grad_map.astype(np.int32).tolist()
    dir_rows = dir_map.astype(np.int32).tolist()

    segments: list[list[Point]] = []
    for col, row in anchors:
        if edges[row][col] != ANCHOR_PIXEL:
            continue
        chains, pixels, duplicates = _trace(
            row, col, edges, grads, dir_rows, grad_thresh
        )
        if len(pixels) - duplicates < MIN_SEGMENT_LEN:
            for x, y in pixels:
                edges[y][x] = 0
            continue
        segments.extend(_build_segments(chains, pixels))

    edge[...] = np.asarray(edges, dtype=np.uint8)
    return segments