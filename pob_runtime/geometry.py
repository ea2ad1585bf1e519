"""Two-dimensional points, vectors, sizes, rectangles and quads."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass(frozen=True)
class Vector:
    """A displacement in two dimensions."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)


@dataclass(frozen=True)
class Point:
    """A position in two dimensions."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, by: Vector) -> Point:
        return Point(self.x + by.x, self.y + by.y)

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        return Point(self.x - other.x, self.y - other.y)

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def round(self) -> Point:
        """Round both coordinates to the nearest whole number, halves away from zero."""
        return Point(_round_half_away(self.x), _round_half_away(self.y))


@dataclass(frozen=True)
class Size:
    """A width and a height."""

    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned box given by its minimum and maximum corners."""

    min: Point
    max: Point

    @staticmethod
    def zero() -> Rect:
        return Rect(Point(0.0, 0.0), Point(0.0, 0.0))

    @staticmethod
    def from_origin_and_size(origin: Point, size: Size) -> Rect:
        return Rect(origin, Point(origin.x + size.width, origin.y + size.height))

    def translate(self, by: Vector) -> Rect:
        return Rect(self.min + by, self.max + by)

    def is_empty(self) -> bool:
        """True when the box has no positive area (NaN coordinates count as empty)."""
        return not (self.max.x > self.min.x and self.max.y > self.min.y)

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def intersection(self, other: Rect) -> Rect | None:
        """The overlapping box, or None when the two do not overlap."""
        result = Rect(
            Point(max(self.min.x, other.min.x), max(self.min.y, other.min.y)),
            Point(min(self.max.x, other.max.x), min(self.max.y, other.max.y)),
        )
        return None if result.is_empty() else result

    def top_left(self) -> Point:
        return self.min

    def top_right(self) -> Point:
        return Point(self.max.x, self.min.y)

    def bottom_left(self) -> Point:
        return Point(self.min.x, self.max.y)

    def bottom_right(self) -> Point:
        return self.max


@dataclass(frozen=True)
class Quad:
    """Four arbitrary corner points, in drawing order."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point

    @staticmethod
    def zero() -> Quad:
        origin = Point(0.0, 0.0)
        return Quad(origin, origin, origin, origin)

    @staticmethod
    def from_size(size: Size) -> Quad:
        """A quad of the given size with its first corner at the origin."""
        return Quad(
            Point(0.0, 0.0),
            Point(size.width, 0.0),
            Point(size.width, size.height),
            Point(0.0, size.height),
        )

    def translate(self, by: Vector) -> Quad:
        return Quad(self.p0 + by, self.p1 + by, self.p2 + by, self.p3 + by)