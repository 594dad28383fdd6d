from __future__ import annotations

import math
import re
from typing import Iterator, List

from .types import BezPath, ClosePath, CurveTo, LineTo, MoveTo, Point, QuadTo

_TOKEN_RE = re.compile(r"[MmZzLlHhVvCcSsQqTtAa]|[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")
_ARGS = {"m": 2, "l": 2, "h": 1, "v": 1, "c": 6, "s": 4, "q": 4, "t": 2, "a": 7, "z": 0}


def _tokenise_path(d: str) -> Iterator[str]:
    for tok in _TOKEN_RE.finditer(d.replace(",", " ")):
        yield tok.group(0)


def _arc_to_cubics(
    p0: Point, rx: float, ry: float, phi_deg: float, large_arc: bool, sweep: bool, p1: Point
) -> List[tuple]:
    """Cubic control points approximating an SVG endpoint arc, at most 90° each."""
    if p0 == p1:
        return []

    phi = math.radians(phi_deg % 360.0)
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    dx = (p0.x - p1.x) / 2.0
    dy = (p0.y - p1.y) / 2.0
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    rx = abs(rx)
    ry = abs(ry)
    lam = (x1p**2) / (rx**2) + (y1p**2) / (ry**2)
    if lam > 1:
        scale = math.sqrt(lam)
        rx *= scale
        ry *= scale

    sign = -1 if large_arc == sweep else 1
    numerator = rx**2 * ry**2 - rx**2 * y1p**2 - ry**2 * x1p**2
    denom = rx**2 * y1p**2 + ry**2 * x1p**2
    coef = sign * math.sqrt(max(0.0, numerator / denom))
    cxp = coef * (rx * y1p) / ry
    cyp = coef * -(ry * x1p) / rx

    cx = cos_phi * cxp - sin_phi * cyp + (p0.x + p1.x) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (p0.y + p1.y) / 2.0

    def angle(ux: float, uy: float, vx: float, vy: float) -> float:
        return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)

    v1 = ((x1p - cxp) / rx, (y1p - cyp) / ry)
    v2 = ((-x1p - cxp) / rx, (-y1p - cyp) / ry)
    theta1 = angle(1.0, 0.0, *v1)
    delta_theta = angle(*v1, *v2)
    if not sweep and delta_theta > 0:
        delta_theta -= 2 * math.pi
    elif sweep and delta_theta < 0:
        delta_theta += 2 * math.pi

    count = max(1, int(math.ceil(abs(delta_theta) / (math.pi / 2 + 1e-9))))
    delta = delta_theta / count
    e = 4 * math.tan(delta / 4) / 3

    def on_arc(theta: float) -> Point:
        return Point(
            cx + rx * cos_phi * math.cos(theta) - ry * sin_phi * math.sin(theta),
            cy + rx * sin_phi * math.cos(theta) + ry * cos_phi * math.sin(theta),
        )

    def tangent(theta: float) -> Point:
        return Point(
            -rx * cos_phi * math.sin(theta) - ry * sin_phi * math.cos(theta),
            -rx * sin_phi * math.sin(theta) + ry * cos_phi * math.cos(theta),
        )

    result = []
    start = p0
    for i in range(count):
        t1 = theta1 + i * delta
        t2 = t1 + delta
        end = p1 if i == count - 1 else on_arc(t2)
        result.append((start + tangent(t1) * e, end - tangent(t2) * e, end))
        start = end
    return result


def parse_path_data(d: str) -> BezPath:
    """Parse an SVG path ``d`` attribute into absolute path elements.

    ``H``/``V`` become lines, ``S``/``T`` get their reflected control point
    and arcs are converted to cubics.
    """
    tokens = list(_tokenise_path(d))
    path = BezPath()
    current = Point(0.0, 0.0)
    start = current
    last_ctrl = current
    last_cmd = ""
    command = None
    index = 0

    def read_numbers(count: int) -> List[float]:
        nonlocal index
        if index + count > len(tokens):
            raise ValueError("Unexpected end of path data")
        nums = []
        for tok in tokens[index : index + count]:
            if tok.isalpha():
                raise ValueError(f"Expected number, got command {tok!r}")
            nums.append(float(tok))
        index += count
        return nums

    def read_flag() -> bool:
        # arc flags are single characters and may run into the next number ("a1 1 0 00 1 1")
        nonlocal index
        if index >= len(tokens):
            raise ValueError("Unexpected end of path data")
        tok = tokens[index]
        if tok[0] not in "01":
            raise ValueError(f"Invalid arc flag: {tok!r}")
        if len(tok) > 1:
            tokens[index] = tok[1:]
        else:
            index += 1
        return tok[0] == "1"

    while index < len(tokens):
        token = tokens[index]
        if token.isalpha():
            command = token
            index += 1
        elif command is None or command in "zZ":
            raise ValueError("Path data malformed")

        absolute = command.isupper()
        cmd = command.lower()
        if cmd not in _ARGS:
            raise ValueError(f"Unsupported path command: {command}")
        if cmd not in ("m", "z") and path.is_empty():
            raise ValueError("Path data must start with a moveto")

        origin = Point(0.0, 0.0) if absolute else current

        if cmd == "z":
            path.close_path()
            current = start
            last_cmd = "z"
            continue

        values = read_numbers(_ARGS[cmd]) if cmd != "a" else []
        if cmd == "m":
            current = origin + Point(*values)
            start = current
            path.move_to(current)
            # subsequent pairs are implicit linetos
            command = "L" if absolute else "l"
        elif cmd == "l":
            current = origin + Point(*values)
            path.line_to(current)
        elif cmd == "h":
            current = Point(values[0] + (0.0 if absolute else current.x), current.y)
            path.line_to(current)
        elif cmd == "v":
            current = Point(current.x, values[0] + (0.0 if absolute else current.y))
            path.line_to(current)
        elif cmd in ("c", "s"):
            if cmd == "c":
                c1 = origin + Point(values[0], values[1])
                rest = values[2:]
            else:
                c1 = current * 2 - last_ctrl if last_cmd in ("c", "s") else current
                rest = values
            c2 = origin + Point(rest[0], rest[1])
            end = origin + Point(rest[2], rest[3])
            path.curve_to(c1, c2, end)
            last_ctrl = c2
            current = end
        elif cmd in ("q", "t"):
            if cmd == "q":
                ctrl = origin + Point(values[0], values[1])
                end = origin + Point(values[2], values[3])
            else:
                ctrl = current * 2 - last_ctrl if last_cmd in ("q", "t") else current
                end = origin + Point(values[0], values[1])
            path.quad_to(ctrl, end)
            last_ctrl = ctrl
            current = end
        else:
            rx, ry, phi = read_numbers(3)
            large_arc = read_flag()
            sweep = read_flag()
            x, y = read_numbers(2)
            end = origin + Point(x, y)
            if rx == 0 or ry == 0:
                path.line_to(end)
            else:
                for c1, c2, p in _arc_to_cubics(current, rx, ry, phi, large_arc, sweep, end):
                    path.curve_to(c1, c2, p)
            current = end
        last_cmd = cmd

    return path


def _fmt(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _fmt_point(p: Point, precision: int) -> str:
    return f"{_fmt(p.x, precision)},{_fmt(p.y, precision)}"


def format_path_data(path: BezPath, precision: int = 6) -> str:
    """Serialize *path* using absolute ``M L Q C Z`` commands."""
    parts: List[str] = []
    for el in path:
        if isinstance(el, MoveTo):
            parts.append("M" + _fmt_point(el.p, precision))
        elif isinstance(el, LineTo):
            parts.append("L" + _fmt_point(el.p, precision))
        elif isinstance(el, QuadTo):
            parts.append(f"Q{_fmt_point(el.p1, precision)} {_fmt_point(el.p2, precision)}")
        elif isinstance(el, CurveTo):
            parts.append(
                f"C{_fmt_point(el.p1, precision)} {_fmt_point(el.p2, precision)} "
                f"{_fmt_point(el.p3, precision)}"
            )
        elif isinstance(el, ClosePath):
            parts.append("Z")
        else:
            raise TypeError(f"not a path element: {el!r}")
    return " ".join(parts)


__all__ = ["parse_path_data", "format_path_data"]
