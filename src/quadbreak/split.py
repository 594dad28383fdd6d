"""Subdivision of quadratic Béziers at their axis extrema.

A quadratic whose control point lies outside the span of its endpoints on an
axis turns around on that axis somewhere inside the curve. Splitting at that
parameter yields pieces that are monotonic in x and y; the pieces reproduce
the original curve exactly.
"""
from __future__ import annotations

from typing import Optional, Tuple

from .metrics import get_tracker
from .types import BezPath, Point


def split_quad_at(t: float, p0: Point, p1: Point, p2: Point) -> Tuple[Point, Point, Point]:
    """De Casteljau split of (p0, p1, p2) at *t*.

    Returns ``(pa, pb, pc)``: the halves are ``(p0, pa, pb)`` and
    ``(pb, pc, p2)``, ``pb`` being the curve point at *t*.
    """
    pa = p0.lerp(p1, t)
    pc = p1.lerp(p2, t)
    pb = pa.lerp(pc, t)
    return pa, pb, pc


def _extremum(a0: float, a1: float, a2: float) -> Optional[float]:
    lo, hi = min(a0, a2), max(a0, a2)
    if lo <= a1 <= hi:
        return None
    # derivative root; the denominator is nonzero whenever a1 is outside [lo, hi]
    return (a0 - a1) / (a0 - 2.0 * a1 + a2)


def quad_extrema(p0: Point, p1: Point, p2: Point) -> Tuple[Optional[float], Optional[float]]:
    """Parameters of the interior x and y extrema, ``None`` where monotonic."""
    return _extremum(p0.x, p1.x, p2.x), _extremum(p0.y, p1.y, p2.y)



def is_monotonic_quad(p0: Point, p1: Point, p2: Point) -> bool:
    return quad_extrema(p0, p1, p2) == (None, None)


def _snap(axis: str, pa: Point, pb: Point, pc: Point) -> Tuple[Point, Point]:
    # at an extremum both controls share the split point's coordinate
    if axis == "x":
        return Point(pb.x, pa.y), Point(pb.x, pc.y)
    return Point(pa.x, pb.y), Point(pc.x, pb.y)


def _clamp(c: Point, a: Point, b: Point) -> Point:
    """Pin control *c* into the box spanned by endpoints *a* and *b*."""
    return Point(
        min(max(c.x, min(a.x, b.x)), max(a.x, b.x)),
        min(max(c.y, min(a.y, b.y)), max(a.y, b.y)),
    )


def _split_snapped(t: float, axis: str, p0: Point, p1: Point, p2: Point) -> Tuple[Point, Point, Point]:
    pa, pb, pc = split_quad_at(t, p0, p1, p2)
    pa, pc = _snap(axis, pa, pb, pc)
    return pa, pb, pc


def split_quad(path: BezPath, p0: Point, p1: Point, p2: Point) -> int:
    """Append (p0, p1, p2) to *path* as 1 to 3 monotonic quads.

    *p0* is the current point of *path* and is not emitted. Returns the
    number of quads appended. Every emitted control lies inside the closed
    span of its endpoints, so the output passes through unchanged when split
    again.
    """
    tx, ty = quad_extrema(p0, p1, p2)
    tracker = get_tracker()

    if tx is not None and ty is not None:
        if tx <= ty:
            (t0, a0), (t1, a1) = (tx, "x"), (ty, "y")
        else:
            (t0, a0), (t1, a1) = (ty, "y"), (tx, "x")
        pa0, pb0, pc0 = _split_snapped(t0, a0, p0, p1, p2)
        # the remainder curve is reparameterized over [t0, 1]
        pa1, pb1, pc1 = _split_snapped((t1 - t0) / (1.0 - t0), a1, pb0, pc0, p2)
        path.quad_to(_clamp(pa0, p0, pb0), pb0)
        path.quad_to(_clamp(pa1, pb0, pb1), pb1)
        path.quad_to(_clamp(pc1, pb1, p2), p2)
        if tracker is not None:
            tracker.increment("quads.split_xy")
        return 3

    if tx is not None or ty is not None:
        t, axis = (tx, "x") if tx is not None else (ty, "y")
        pa, pb, pc = _split_snapped(t, axis, p0, p1, p2)
        path.quad_to(_clamp(pa, p0, pb), pb)
        path.quad_to(_clamp(pc, pb, p2), p2)
        if tracker is not None:
            tracker.increment(f"quads.split_{axis}")
        return 2

    path.quad_to(p1, p2)
    if tracker is not None:
        tracker.increment("quads.kept")
    return 1


__all__ = ["split_quad", "split_quad_at", "quad_extrema", "is_monotonic_quad"]
