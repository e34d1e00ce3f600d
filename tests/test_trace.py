"""Tests for border following."""

import numpy as np
import pytest

from vectorscan import Image, InvalidImage, InvalidParameter, Point, binarize, simplify, trace

from conftest import binary_from_rows


def pts(*coords):
    return [Point(float(x), float(y)) for x, y in coords]


def test_filled_square_gives_corners():
    bw = binary_from_rows([
        ".....",
        ".###.",
        ".###.",
        ".###.",
        ".....",
    ])
    assert trace(bw) == [pts((1, 1), (1, 3), (3, 3), (3, 1))]


def test_no_approximation_keeps_every_border_pixel():
    bw = binary_from_rows([
        ".....",
        ".###.",
        ".###.",
        ".###.",
        ".....",
    ])
    [curve] = trace(bw, approximation="none")
    assert curve == pts((1, 1), (1, 2), (1, 3), (2, 3), (3, 3), (3, 2), (3, 1), (2, 1))


def test_hole_reported_as_separate_curve():
    bw = binary_from_rows([
        ".......",
        ".#####.",
        ".#####.",
        ".##.##.",
        ".#####.",
        ".#####.",
        ".......",
    ])
    outer, hole = trace(bw)
    assert outer == pts((1, 1), (1, 5), (5, 5), (5, 1))
    assert sorted(hole) == sorted(pts((2, 3), (3, 2), (4, 3), (3, 4)))


def test_nested_borders_ordered_top_left_first():
    bw = binary_from_rows([
        "...........",
        ".#########.",
        ".#########.",
        ".##.....##.",
        ".##.....##.",
        ".##..#..##.",
        ".##.....##.",
        ".##.....##.",
        ".#########.",
        ".#########.",
        "...........",
    ])
    frame, hole, island = trace(bw)
    assert frame[0] == Point(1.0, 1.0)
    assert min(p.y for p in hole) == 2.0
    assert island == pts((5, 5))


def test_single_pixel_and_line_are_degenerate():
    bw = binary_from_rows([
        ".......",
        ".#.....",
        ".......",
        ".#####.",
        ".......",
    ])
    dot, line = trace(bw)
    assert dot == pts((1, 1))
    assert line == pts((1, 3), (5, 3))


def test_empty_image_has_no_curves():
    assert trace(binary_from_rows(["....", "...."])) == []


def test_region_touching_edges_is_closed():
    bw = binary_from_rows(["####", "####", "####"])
    assert trace(bw) == [pts((0, 0), (0, 2), (3, 2), (3, 0))]


def test_discovery_order_is_row_major():
    bw = binary_from_rows([
        "........",
        ".....##.",
        ".....##.",
        "........",
        ".##.....",
        ".##.....",
        "........",
    ])
    first, second = trace(bw)
    assert first[0] == Point(5.0, 1.0)
    assert second[0] == Point(1.0, 4.0)


def test_walk_steps_between_neighbours(blob_image):
    curves = trace(binarize(blob_image, 128), approximation="none")
    assert len(curves) == 1
    curve = curves[0]
    for a, b in zip(curve, curve[1:] + curve[:1]):
        assert max(abs(a.x - b.x), abs(a.y - b.y)) == 1


def test_trace_is_deterministic(ring_image):
    bw = binarize(ring_image, 128)
    assert trace(bw) == trace(bw)
    assert len(trace(bw)) == 2


def test_rejects_bad_input():
    with pytest.raises(InvalidImage):
        trace(Image.from_array(np.zeros((4, 4), np.uint8)))
    with pytest.raises(InvalidParameter):
        trace(binary_from_rows(["#"]), approximation="tc89")


def test_noisy_image_points_lie_on_foreground():
    rng = np.random.default_rng(7)
    noise = np.where(rng.random((400, 400)) > 0.5, 255, 0).astype(np.uint8)
    bw = binarize(Image.from_array(noise), 128)
    curves = trace(bw)
    assert len(curves) > 10
    fg = bw.foreground
    for curve in curves:
        assert all(fg[int(p.y), int(p.x)] for p in curve)


def test_pinch_vertex_visited_twice():
    bw = binary_from_rows([
        "........",
        ".###....",
        ".###....",
        ".###....",
        "....###.",
        "....###.",
        "....###.",
        "........",
    ])
    [curve] = trace(bw)
    poly = simplify(curve, 0)
    assert len(poly) == 10
    assert len(set(poly.points)) == 8
    assert poly.points.count(Point(3.0, 3.0)) == 2
