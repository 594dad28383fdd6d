from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import numpy as np
import pytest

from quadbreak.geom import eval_cubic, eval_line, eval_quad, lerp, midpoint, sample_bezier
from quadbreak.types import BezPath, ClosePath, LineTo, MoveTo, Point, Rect


def test_point_arithmetic():
    a, b = Point(1, 2), Point(3, 6)
    assert a + b == Point(4, 8)
    assert b - a == Point(2, 4)
    assert a * 2 == 2 * a == Point(2, 4)
    assert lerp(a, b, 0.5) == midpoint(a, b) == Point(2, 4)
    x, y = b
    assert (x, y) == (3, 6)


def test_rect_from_points_and_contains():
    r = Rect.from_points(Point(5, -1), Point(1, 3))
    assert (r.min_x, r.min_y, r.max_x, r.max_y) == (1, -1, 5, 3)
    assert r.contains(Point(1, 3))
    assert r.contains(Point(3, 0))
    assert not r.contains(Point(0, 0))


def test_curve_evaluation_endpoints():
    p0, p1, p2, p3 = Point(0, 0), Point(1, 3), Point(4, 3), Point(5, 0)
    assert eval_line(p0, p3, 0.2) == Point(1, 0)
    assert eval_quad(p0, p1, p3, 0.0) == p0
    assert eval_quad(p0, p1, p3, 1.0) == p3
    assert eval_cubic(p0, p1, p2, p3, 1.0) == p3


def test_sample_bezier_matches_scalar_eval():
    pts = (Point(0, 0), Point(1, 3), Point(4, 3), Point(5, 0))
    ts = [0.0, 0.3, 0.5, 1.0]
    samples = sample_bezier(pts, ts)
    expected = np.array([eval_cubic(*pts, t).to_tuple() for t in ts])
    assert samples.shape == (4, 2)
    np.testing.assert_allclose(samples, expected)


def test_sample_bezier_rejects_bad_degree():
    with pytest.raises(ValueError):
        sample_bezier([Point(0, 0)], [0.5])


def test_builder_and_segments():
    path = BezPath()
    path.move_to((0, 0))
    path.line_to((4, 0))
    path.quad_to((6, 2), (4, 4))
    path.close_path()
    path.move_to(Point(10, 10))
    path.curve_to((11, 11), (12, 11), (13, 10))

    assert len(path) == 6
    assert path[0] == MoveTo(Point(0.0, 0.0))
    kinds = [kind for kind, _ in path.segments()]
    assert kinds == ["line", "quad", "line", "cubic"]
    closing = list(path.segments())[2]
    assert closing == ("line", (Point(4, 4), Point(0, 0)))


def test_bounding_box_includes_control_points():
    path = BezPath()
    path.move_to((0, 0))
    path.quad_to((5, 10), (10, 0))
    path.close_path()
    assert path.bounding_box() == Rect(0, 0, 10, 10)
    assert BezPath().bounding_box() is None


def test_push_validates_and_equality():
    path = BezPath([MoveTo(Point(0, 0)), LineTo(Point(1, 1)), ClosePath()])
    assert path == BezPath(path.elements())
    assert not path.is_empty()
    with pytest.raises(TypeError):
        path.push(("Z",))
