from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import Point


def lerp(a: Point, b: Point, t: float) -> Point:
    return a.lerp(b, t)


def midpoint(a: Point, b: Point) -> Point:
    return a.midpoint(b)


def eval_line(p0: Point, p1: Point, t: float) -> Point:
    return p0.lerp(p1, t)


def eval_quad(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    mt = 1.0 - t
    x = mt * mt * p0.x + 2.0 * mt * t * p1.x + t * t * p2.x
    y = mt * mt * p0.y + 2.0 * mt * t * p1.y + t * t * p2.y
    return Point(x, y)


def eval_cubic(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def sample_bezier(points: Sequence[Point], ts) -> np.ndarray:
    """Evaluate a line, quad or cubic at every parameter in *ts*.

    Returns an array of shape (N, 2).
    """
    ctrl = np.asarray([p.to_tuple() for p in points], dtype=float)
    if ctrl.ndim != 2 or ctrl.shape[1] != 2 or not 2 <= ctrl.shape[0] <= 4:
        raise ValueError(f"expected 2 to 4 control points, got shape {ctrl.shape}")
    t = np.asarray(ts, dtype=float).reshape(-1, 1)
    mt = 1.0 - t
    n = ctrl.shape[0] - 1
    if n == 1:
        basis = [mt, t]
    elif n == 2:
        basis = [mt**2, 2.0 * mt * t, t**2]
    else:
        basis = [mt**3, 3.0 * mt**2 * t, 3.0 * mt * t**2, t**3]
    return sum(b * ctrl[i] for i, b in enumerate(basis))


def distance_to_line(p: np.ndarray, a: np.ndarray, b: np.ndarray) -> float:
    """Perpendicular distance of *p* from the line through *a* and *b*."""
    line = b - a
    norm = float(np.hypot(line[0], line[1]))
    vec = p - a
    if norm == 0:
        return float(np.hypot(vec[0], vec[1]))
    return abs(float(line[0] * vec[1] - line[1] * vec[0])) / norm
