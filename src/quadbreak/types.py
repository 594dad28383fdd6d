from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Literal, Tuple, Union


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def lerp(self, other: "Point", t: float) -> "Point":
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def midpoint(self, other: "Point") -> "Point":
        return Point(0.5 * (self.x + other.x), 0.5 * (self.y + other.y))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_points(cls, a: Point, b: Point) -> "Rect":
        return cls(min(a.x, b.x), min(a.y, b.y), max(a.x, b.x), max(a.y, b.y))

    @property
    def min_x(self) -> float:
        return self.x0

    @property
    def max_x(self) -> float:
        return self.x1

    @property
    def min_y(self) -> float:
        return self.y0

    @property
    def max_y(self) -> float:
        return self.y1

    def contains(self, p: Point) -> bool:
        return self.x0 <= p.x <= self.x1 and self.y0 <= p.y <= self.y1

    def union_point(self, p: Point) -> "Rect":
        return Rect(min(self.x0, p.x), min(self.y0, p.y), max(self.x1, p.x), max(self.y1, p.y))


@dataclass(frozen=True)
class MoveTo:
    p: Point


@dataclass(frozen=True)
class LineTo:
    p: Point


@dataclass(frozen=True)
class QuadTo:
    p1: Point
    p2: Point


@dataclass(frozen=True)
class CurveTo:
    p1: Point
    p2: Point
    p3: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathEl = Union[MoveTo, LineTo, QuadTo, CurveTo, ClosePath]
SegmentKind = Literal["line", "quad", "cubic"]


def _as_point(value: Union[Point, Tuple[float, float]]) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


class BezPath:
    """Ordered sequence of path elements, built incrementally."""

    def __init__(self, elements: Iterable[PathEl] = ()) -> None:
        self._elements: List[PathEl] = list(elements)

    def move_to(self, p) -> None:
        self._elements.append(MoveTo(_as_point(p)))

    def line_to(self, p) -> None:
        self._elements.append(LineTo(_as_point(p)))

    def quad_to(self, p1, p2) -> None:
        self._elements.append(QuadTo(_as_point(p1), _as_point(p2)))

    def curve_to(self, p1, p2, p3) -> None:
        self._elements.append(CurveTo(_as_point(p1), _as_point(p2), _as_point(p3)))

    def close_path(self) -> None:
        self._elements.append(ClosePath())

    def push(self, el: PathEl) -> None:
        if not isinstance(el, (MoveTo, LineTo, QuadTo, CurveTo, ClosePath)):
            raise TypeError(f"not a path element: {el!r}")
        self._elements.append(el)

    def elements(self) -> Tuple[PathEl, ...]:
        return tuple(self._elements)

    def is_empty(self) -> bool:
        return not self._elements

    def segments(self) -> Iterator[Tuple[SegmentKind, Tuple[Point, ...]]]:
        """Yield drawn segments with their implied start point.

        Closing a subpath whose current point differs from its start yields
        the closing line.
        """
        start = ORIGIN
        current = ORIGIN
        for el in self._elements:
            if isinstance(el, MoveTo):
                start = current = el.p
            elif isinstance(el, LineTo):
                yield "line", (current, el.p)
                current = el.p
            elif isinstance(el, QuadTo):
                yield "quad", (current, el.p1, el.p2)
                current = el.p2
            elif isinstance(el, CurveTo):
                yield "cubic", (current, el.p1, el.p2, el.p3)
                current = el.p3
            else:
                if current != start:
                    yield "line", (current, start)
                current = start

    def bounding_box(self) -> Rect | None:
        """Box around every point of the path, control points included."""
        box = None
        for el in self._elements:
            if isinstance(el, ClosePath):
                continue
            for p in _element_points(el):
                box = Rect(p.x, p.y, p.x, p.y) if box is None else box.union_point(p)
        return box

    def __iter__(self) -> Iterator[PathEl]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> PathEl:
        return self._elements[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BezPath):
            return NotImplemented
        return self._elements == other._elements

    def __repr__(self) -> str:
        return f"BezPath({self._elements!r})"


def _element_points(el: PathEl) -> Tuple[Point, ...]:
    if isinstance(el, (MoveTo, LineTo)):
        return (el.p,)
    if isinstance(el, QuadTo):
        return (el.p1, el.p2)
    if isinstance(el, CurveTo):
        return (el.p1, el.p2, el.p3)
    return ()
