"""Tolerance-bounded cubic to quadratic decomposition backed by fontTools.cu2qu."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from fontTools.cu2qu import curve_to_quadratic
from fontTools.cu2qu.errors import ApproxNotFoundError

from .types import Point

log = logging.getLogger(__name__)

QuadSegment = Tuple[Point, Point, Point]

# halvings tried when cu2qu cannot fit a cubic within its piece limit
MAX_SPLIT_DEPTH = 8


def _spline_to_quads(spline: Sequence[Tuple[float, float]], p0: Point, p3: Point) -> List[QuadSegment]:
    # spline is on-curve start, n off-curve points, on-curve end; the on-curve
    # points between consecutive off-curve points are their midpoints
    offs = [Point(float(x), float(y)) for x, y in spline[1:-1]]
    quads: List[QuadSegment] = []
    start = p0
    for i, ctrl in enumerate(offs):
        end = p3 if i == len(offs) - 1 else ctrl.midpoint(offs[i + 1])
        quads.append((start, ctrl, end))
        start = end
    return quads


def _split_cubic_half(p0: Point, p1: Point, p2: Point, p3: Point):
    p01, p12, p23 = p0.midpoint(p1), p1.midpoint(p2), p2.midpoint(p3)
    p012, p123 = p01.midpoint(p12), p12.midpoint(p23)
    mid = p012.midpoint(p123)
    return (p0, p01, p012, mid), (mid, p123, p23, p3)


def _decompose(p0: Point, p1: Point, p2: Point, p3: Point, tolerance: float, depth: int) -> List[QuadSegment]:
    curve = [p.to_tuple() for p in (p0, p1, p2, p3)]
    try:
        spline = curve_to_quadratic(curve, tolerance, all_quadratic=True)
    except ApproxNotFoundError:
        if depth >= MAX_SPLIT_DEPTH:
            log.warning("cu2qu: no fit within %g after %d halvings; using a single quad", tolerance, depth)
            ctrl = ((p1 + p2) * 3.0 - p0 - p3) * 0.25
            return [(p0, ctrl, p3)]
        left, right = _split_cubic_half(p0, p1, p2, p3)
        return _decompose(*left, tolerance, depth + 1) + _decompose(*right, tolerance, depth + 1)
    return _spline_to_quads(spline, p0, p3)


def cubic_to_quadratics(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    tolerance: float,
    visit: Optional[Callable[[QuadSegment], None]] = None,
) -> List[QuadSegment]:
    """Split a cubic into quads that stay within *tolerance* of it.

    Each ``(from, ctrl, to)`` triple is passed to *visit* in curve order and
    the full list is returned. The first ``from`` is *p0* and the last ``to``
    is *p3*, exactly. Cubics that cu2qu cannot fit within its piece limit
    are halved at t=0.5 and each half is fitted on its own.
    """
    if not tolerance > 0:
        raise ValueError(f"tolerance must be positive, got {tolerance!r}")

    quads = _decompose(p0, p1, p2, p3, tolerance, 0)
    log.debug("cu2qu: cubic → %d quads (tol=%g)", len(quads), tolerance)
    if visit is not None:
        for quad in quads:
            visit(quad)
    return quads


__all__ = ["cubic_to_quadratics", "QuadSegment"]
