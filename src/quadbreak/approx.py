"""Cubic Bézier replacement strategies.

Every strategy except :class:`Linear` routes its quadratic output through
:func:`quadbreak.split.split_quad`, so what they emit is monotonic per axis.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .decompose import cubic_to_quadratics
from .flatten import flatten
from .metrics import get_tracker
from .split import split_quad
from .types import BezPath, ClosePath, CurveTo, LineTo, MoveTo, PathEl, Point


def _check_tolerance(tolerance: float) -> None:
    if not (isinstance(tolerance, (int, float)) and math.isfinite(tolerance) and tolerance > 0):
        raise ValueError(f"tolerance must be a positive finite number, got {tolerance!r}")


@dataclass(frozen=True)
class Linear:
    """Replace the cubic by the straight line to its end point."""

    name = "linear"


@dataclass(frozen=True)
class Flatten:
    """Polyline whose deviation from the cubic is at most ``tolerance``."""

    tolerance: float
    name = "flatten"

    def __post_init__(self) -> None:
        _check_tolerance(self.tolerance)


@dataclass(frozen=True)
class Midpoint:
    """Two quads meeting at the midpoint of the 3/4 control points."""

    name = "midpoint"


@dataclass(frozen=True)
class ExternalQuadratic:
    """Quads from fontTools.cu2qu within ``tolerance`` of the cubic."""

    tolerance: float
    name = "external_quadratic"

    def __post_init__(self) -> None:
        _check_tolerance(self.tolerance)


CubicApprox = Union[Linear, Flatten, Midpoint, ExternalQuadratic]


def _flatten_into(path: BezPath, p0: Point, p1: Point, p2: Point, p3: Point, tolerance: float) -> Point:
    current = p0

    def visit(el: PathEl) -> None:
        nonlocal current
        if isinstance(el, LineTo):
            path.push(el)
            current = el.p
        elif not isinstance(el, (MoveTo, ClosePath)):
            raise TypeError(f"flattener produced {el!r}")

    flatten((MoveTo(p0), CurveTo(p1, p2, p3)), tolerance, visit)
    return current


def _midpoint_into(path: BezPath, p0: Point, p1: Point, p2: Point, p3: Point) -> None:
    if p0 == p1:
        split_quad(path, p0, p2, p3)
    elif p2 == p3:
        split_quad(path, p0, p1, p3)
    else:
        p_ca = p0.lerp(p1, 0.75)
        p_cb = p3.lerp(p2, 0.75)
        p_m = p_ca.midpoint(p_cb)
        split_quad(path, p0, p_ca, p_m)
        split_quad(path, p_m, p_cb, p3)


def approximate_cubic(
    path: BezPath, p0: Point, p1: Point, p2: Point, p3: Point, strategy: CubicApprox
) -> Point:
    """Append the replacement of cubic (p0, p1, p2, p3) to *path*.

    *p0* is the current point of *path*. Returns the new current point.
    """
    if isinstance(strategy, Linear):
        path.line_to(p3)
        end = p3
    elif isinstance(strategy, Flatten):
        end = _flatten_into(path, p0, p1, p2, p3, strategy.tolerance)
    elif isinstance(strategy, Midpoint):
        _midpoint_into(path, p0, p1, p2, p3)
        end = p3
    elif isinstance(strategy, ExternalQuadratic):
        for q0, q1, q2 in cubic_to_quadratics(p0, p1, p2, p3, strategy.tolerance):
            split_quad(path, q0, q1, q2)
        end = p3
    else:
        raise TypeError(f"unknown cubic approximation strategy: {strategy!r}")

    tracker = get_tracker()
    if tracker is not None:
        tracker.increment(f"cubics.{strategy.name}")
    return end


__all__ = [
    "CubicApprox",
    "ExternalQuadratic",
    "Flatten",
    "Linear",
    "Midpoint",
    "approximate_cubic",
]
