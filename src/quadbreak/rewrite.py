"""Path-level entry points.

Both passes share :func:`walk_path`, which tracks the current point and the
subpath start and hands quadratic and cubic segments to per-pass handlers.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from .approx import CubicApprox, Midpoint, approximate_cubic
from .metrics import MetricsTracker, Timer, get_tracker, use_tracker
from .split import split_quad
from .types import ORIGIN, BezPath, ClosePath, CurveTo, LineTo, MoveTo, PathEl, Point, QuadTo

log = logging.getLogger(__name__)

QuadHandler = Callable[[BezPath, Point, Point, Point], None]
CurveHandler = Callable[[BezPath, Point, Point, Point, Point], None]


def walk_path(path: Iterable[PathEl], on_quad: QuadHandler, on_curve: CurveHandler) -> BezPath:
    """Re-emit *path* into a new path, delegating curves to the handlers.

    Handlers receive the output path and the segment's points starting with
    the current point; they are responsible for appending the replacement.
    """
    out = BezPath()
    start = ORIGIN
    current = ORIGIN
    for el in path:
        if isinstance(el, MoveTo):
            out.push(el)
            start = current = el.p
        elif isinstance(el, LineTo):
            out.push(el)
            current = el.p
        elif isinstance(el, QuadTo):
            on_quad(out, current, el.p1, el.p2)
            current = el.p2
        elif isinstance(el, CurveTo):
            on_curve(out, current, el.p1, el.p2, el.p3)
            current = el.p3
        elif isinstance(el, ClosePath):
            out.push(el)
            current = start
        else:
            raise TypeError(f"not a path element: {el!r}")
    return out


def _copy_curve(out: BezPath, p0: Point, p1: Point, p2: Point, p3: Point) -> None:
    out.curve_to(p1, p2, p3)


def _rewrite(key: str, label: str, path: Iterable[PathEl], on_quad: QuadHandler, on_curve: CurveHandler) -> BezPath:
    # a private tracker stands in when none is active so the summary can count splits
    elements = list(path)
    tracker = get_tracker() or MetricsTracker()
    splits_before = tracker.quads_split()
    with use_tracker(tracker), Timer(key) as timer:
        result = walk_path(elements, on_quad, on_curve)
    log.debug(
        "%s: %d → %d elements, %d quads split in %.2f ms",
        label,
        len(elements),
        len(result),
        tracker.quads_split() - splits_before,
        timer.ms,
    )
    return result


def approximate_cubics(path: Iterable[PathEl], strategy: CubicApprox = Midpoint()) -> BezPath:
    """Replace every cubic in *path* per *strategy* and split every quad at its extrema.

    The result holds only move, line, quad and close elements.
    """

    def on_curve(out: BezPath, p0: Point, p1: Point, p2: Point, p3: Point) -> None:
        approximate_cubic(out, p0, p1, p2, p3, strategy)

    return _rewrite("approximate_cubics", f"approximate_cubics({strategy})", path, split_quad, on_curve)


break_path = approximate_cubics


def monotonize_quads(path: Iterable[PathEl]) -> BezPath:
    """Split every quad in *path* so each piece is monotonic in x and y.

    Cubics are copied through unchanged.
    """
    return _rewrite("monotonize_quads", "monotonize_quads", path, split_quad, _copy_curve)


__all__ = ["walk_path", "approximate_cubics", "break_path", "monotonize_quads"]
