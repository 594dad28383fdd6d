"""Recursive polyline flattening of quadratic and cubic Béziers."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List

import numpy as np

from .geom import distance_to_line
from .types import ORIGIN, ClosePath, CurveTo, LineTo, MoveTo, PathEl, Point, QuadTo

log = logging.getLogger(__name__)

MAX_DEPTH = 16


def _flatten_cubic(
    p0: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray,
    p3: np.ndarray,
    tol: float,
    max_depth: int,
    capped: List[int],
    depth: int = 0,
) -> List[np.ndarray]:
    """Vertices after p0 of a polyline within *tol* of the cubic.

    Pieces still too far from their chord at *max_depth* are emitted as a
    single line and counted in *capped*.
    """
    if max(distance_to_line(p1, p0, p3), distance_to_line(p2, p0, p3)) <= tol:
        return [p3]
    if depth >= max_depth:
        capped.append(depth)
        return [p3]

    p01 = (p0 + p1) / 2.0
    p12 = (p1 + p2) / 2.0
    p23 = (p2 + p3) / 2.0
    p012 = (p01 + p12) / 2.0
    p123 = (p12 + p23) / 2.0
    p0123 = (p012 + p123) / 2.0

    left = _flatten_cubic(p0, p01, p012, p0123, tol, max_depth, capped, depth + 1)
    right = _flatten_cubic(p0123, p123, p23, p3, tol, max_depth, capped, depth + 1)
    return left + right


def _flatten_quadratic(
    p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, tol: float, max_depth: int, capped: List[int], depth: int = 0
) -> List[np.ndarray]:
    # the curve never strays further than half the control point's offset
    if distance_to_line(p1, p0, p2) * 0.5 <= tol:
        return [p2]
    if depth >= max_depth:
        capped.append(depth)
        return [p2]

    p01 = (p0 + p1) / 2.0
    p12 = (p1 + p2) / 2.0
    p012 = (p01 + p12) / 2.0
    left = _flatten_quadratic(p0, p01, p012, tol, max_depth, capped, depth + 1)
    right = _flatten_quadratic(p012, p12, p2, tol, max_depth, capped, depth + 1)
    return left + right


def _arr(p: Point) -> np.ndarray:
    return np.array([p.x, p.y], dtype=float)


def _emit_vertices(vertices: List[np.ndarray], end: Point, visit: Callable[[PathEl], None]) -> None:
    # the final vertex is the exact endpoint, not a float64 round trip
    for v in vertices[:-1]:
        visit(LineTo(Point(float(v[0]), float(v[1]))))
    visit(LineTo(end))


def flatten(
    path: Iterable[PathEl],
    tolerance: float,
    visit: Callable[[PathEl], None],
    max_depth: int = MAX_DEPTH,
) -> None:
    """Approximate *path* with line segments no further than *tolerance* away.

    *visit* receives ``MoveTo`` at each subpath start, ``LineTo`` for every
    polyline vertex and ``ClosePath`` where the input closes. Curves are
    halved at most *max_depth* times; pieces that still miss the tolerance
    are reported in a single warning.
    """
    if not tolerance > 0:
        raise ValueError(f"flatten tolerance must be positive, got {tolerance}")

    capped: List[int] = []
    start = ORIGIN
    current = ORIGIN
    for el in path:
        if isinstance(el, MoveTo):
            visit(el)
            start = current = el.p
        elif isinstance(el, LineTo):
            visit(el)
            current = el.p
        elif isinstance(el, QuadTo):
            verts = _flatten_quadratic(_arr(current), _arr(el.p1), _arr(el.p2), tolerance, max_depth, capped)
            _emit_vertices(verts, el.p2, visit)
            current = el.p2
        elif isinstance(el, CurveTo):
            verts = _flatten_cubic(
                _arr(current), _arr(el.p1), _arr(el.p2), _arr(el.p3), tolerance, max_depth, capped
            )
            _emit_vertices(verts, el.p3, visit)
            current = el.p3
        elif isinstance(el, ClosePath):
            visit(el)
            current = start
        else:
            raise TypeError(f"not a path element: {el!r}")

    if capped:
        log.warning(
            "flatten: depth limit %d reached on %d pieces; tolerance %g not met", max_depth, len(capped), tolerance
        )


__all__ = ["flatten", "MAX_DEPTH"]
