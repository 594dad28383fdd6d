from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import numpy as np
import pytest

from quadbreak.flatten import flatten
from quadbreak.geom import eval_quad, sample_bezier
from quadbreak.types import BezPath, ClosePath, LineTo, MoveTo, Point


def _collect(path, tol):
    out = []
    flatten(path, tol, out.append)
    return out


def test_lines_and_moves_pass_through():
    path = BezPath()
    path.move_to((0, 0))
    path.line_to((3, 4))
    path.close_path()

    assert _collect(path, 0.1) == [MoveTo(Point(0, 0)), LineTo(Point(3, 4)), ClosePath()]


def test_cubic_subpath_gives_one_move_then_lines():
    path = BezPath()
    path.move_to((0, 0))
    path.curve_to((0, 10), (10, 10), (10, 0))

    out = _collect(path, 0.1)

    assert out[0] == MoveTo(Point(0, 0))
    assert all(isinstance(el, LineTo) for el in out[1:])
    assert out[-1] == LineTo(Point(10, 0))


def test_vertices_lie_on_the_quad():
    p0, p1, p2 = Point(0, 0), Point(5, 10), Point(10, 0)
    path = BezPath()
    path.move_to(p0)
    path.quad_to(p1, p2)

    out = _collect(path, 0.01)
    verts = np.array([el.p.to_tuple() for el in out[1:]])
    curve = sample_bezier((p0, p1, p2), np.linspace(0.0, 1.0, 4097))
    nearest = np.min(np.linalg.norm(verts[:, None, :] - curve[None], axis=2), axis=1)

    assert len(verts) > 4
    assert nearest.max() < 1e-2
    assert eval_quad(p0, p1, p2, 0.5) == Point(5, 5)


def test_tighter_tolerance_gives_more_vertices():
    path = BezPath()
    path.move_to((0, 0))
    path.curve_to((0, 100), (100, 100), (100, 0))

    coarse = _collect(path, 1.0)
    fine = _collect(path, 0.01)

    assert len(fine) > len(coarse)


def test_degenerate_cubic_terminates():
    path = BezPath()
    path.move_to((1, 1))
    path.curve_to((1, 1), (1, 1), (1, 1))

    assert _collect(path, 0.1) == [MoveTo(Point(1, 1)), LineTo(Point(1, 1))]


@pytest.mark.parametrize("tol", [0.0, -0.5])
def test_non_positive_tolerance_rejected(tol):
    with pytest.raises(ValueError):
        flatten(BezPath(), tol, lambda el: None)


def test_depth_limit_is_reported_once(caplog):
    path = BezPath()
    path.move_to((0, 0))
    path.curve_to((0, 1000), (1000, 1000), (1000, 0))
    path.quad_to((2000, 500), (1000, 1000))

    out = []
    flatten(path, 0.001, out.append, max_depth=3)

    warnings = [rec for rec in caplog.records if rec.name == "quadbreak.flatten"]
    assert len(warnings) == 1
    assert warnings[0].levelname == "WARNING"
    assert "depth limit 3" in warnings[0].getMessage()
    # 2**3 pieces per curve, each ending on the exact curve endpoint
    assert len(out) == 1 + 8 + 8
    assert out[8] == LineTo(Point(1000, 0))
    assert out[-1] == LineTo(Point(1000, 1000))


def test_no_warning_when_tolerance_is_met(caplog):
    path = BezPath()
    path.move_to((0, 0))
    path.curve_to((0, 100), (100, 100), (100, 0))
    _collect(path, 0.1)
    assert not [rec for rec in caplog.records if rec.name == "quadbreak.flatten"]
