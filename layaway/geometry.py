"""Rectangles, intervals and related types for laying out screens.

All 2D types assume a coordinate system where x+ is right and y+ is down.
All values are immutable; operations return new values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar

Pixel = int


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division that rounds towards zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


class Side(Enum):
    """One limit of a 1D interval."""

    LEAST = "least"
    MOST = "most"


class Hori(Enum):
    """Horizontal direction."""

    LEFT = "left"
    RIGHT = "right"

    def side(self) -> Side:
        """The interval limit this direction corresponds to."""
        return Side.LEAST if self is Hori.LEFT else Side.MOST


class Vert(Enum):
    """Vertical direction."""

    TOP = "top"
    BOTTOM = "bottom"

    def side(self) -> Side:
        """The interval limit this direction corresponds to."""
        return Side.LEAST if self is Vert.TOP else Side.MOST


class Center(Enum):
    """Marker for centered placement instead of an extreme."""

    CENTER = "center"


HoriSpec = Hori | Center
VertSpec = Vert | Center


def spec_side(spec: Hori | Vert | Center) -> Side | Center:
    """Map a direction or center marker to an interval placement."""
    if spec is Center.CENTER:
        return Center.CENTER
    return spec.side()


class Rotation(IntEnum):
    """Clockwise rotation in degrees."""

    NONE = 0
    QUARTER = 90
    HALF = 180
    THREE_QUARTER = 270


@dataclass(frozen=True)
class Transform:
    """How an output is flipped and rotated."""

    flipped: bool = False
    rotation: Rotation = Rotation.NONE


@dataclass(frozen=True)
class Corner:
    """One corner of a rectangle."""

    hori: Hori
    vert: Vert

    UPPER_LEFT: ClassVar[Corner]


Corner.UPPER_LEFT = Corner(Hori.LEFT, Vert.TOP)


@dataclass(frozen=True, order=True)
class Point:
    x: Pixel
    y: Pixel

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)


@dataclass(frozen=True, order=True)
class Size:
    width: Pixel
    height: Pixel

    def rotate(self, amount: Rotation) -> Size:
        """Swap width and height for quarter and three-quarter rotations."""
        if amount in (Rotation.NONE, Rotation.HALF):
            return self
        return Size(self.height, self.width)

    def __mul__(self, factor: float) -> Size:
        return Size(int(self.width * factor), int(self.height * factor))

    def __truediv__(self, divisor: float) -> Size:
        return Size(int(self.width / divisor), int(self.height / divisor))


@dataclass(frozen=True, order=True)
class Interval:
    """Closed range of pixels; the bounds are sorted on creation."""

    start: Pixel = 0
    end: Pixel = 0

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    def mid(self) -> Pixel:
        return _trunc_div(self.start + self.end, 2)

    def length(self) -> Pixel:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def __contains__(self, subject: Pixel) -> bool:
        return self.start <= subject <= self.end

    def with_len(self, keep: Side, to: Pixel) -> Interval:
        """Set the length, keeping the limit on `keep` in place."""
        if keep is Side.LEAST:
            return Interval(self.start, self.start + to)
        return Interval(self.end - to, self.end)

    def stretched_to(self, target: Pixel) -> Interval:
        """Move the nearer bound to `target` if it lies outside."""
        if target in self:
            return self
        if target < self.start:
            return Interval(target, self.end)
        return Interval(self.start, target)

    def divided_at(self, side: Side, divisor: float) -> Interval:
        """Divide the length by `divisor`, keeping the limit on `side` in place."""
        return self.with_len(side, int(self.length() / divisor))

    def place_outside(self, length: Pixel, side: Side) -> Interval:
        """A new interval of `length` touching this one on `side`."""
        if side is Side.LEAST:
            return Interval(self.start - length, self.start)
        return Interval(self.end, self.end + length)

    def place_inside(self, length: Pixel, pos: Side | Center) -> Interval:
        """A new interval of `length` inside this one, aligned at `pos`."""
        if pos is Side.LEAST:
            return Interval(self.start, self.start + length)
        if pos is Side.MOST:
            return Interval(self.end - length, self.end)
        mid = self.mid()
        half = _trunc_div(length, 2)
        return Interval(mid - half, mid + half)

    def __add__(self, offset: Pixel) -> Interval:
        if not isinstance(offset, int):
            return NotImplemented
        return Interval(self.start + offset, self.end + offset)

    def __sub__(self, offset: Pixel) -> Interval:
        if not isinstance(offset, int):
            return NotImplemented
        return self + -offset


@dataclass(frozen=True, order=True)
class Rect:
    """Rectangle in pixels."""

    x: Interval = field(default_factory=Interval)
    y: Interval = field(default_factory=Interval)

    def vertices(self) -> tuple[Point, Point, Point, Point]:
        return (
            Point(self.x.start, self.y.start),
            Point(self.x.end, self.y.start),
            Point(self.x.start, self.y.end),
            Point(self.x.end, self.y.end),
        )

    def size(self) -> Size:
        return Size(self.x.length(), self.y.length())

    def __contains__(self, subject: Point) -> bool:
        return subject.x in self.x and subject.y in self.y

    def stretched_to_point(self, target: Point) -> Rect:
        """Grow the rect so it includes `target`."""
        return Rect(self.x.stretched_to(target.x), self.y.stretched_to(target.y))

    def stretched_to_rect(self, target: Rect) -> Rect:
        """Grow the rect so it includes all of `target`."""
        result = self
        for vertex in target.vertices():
            result = result.stretched_to_point(vertex)
        return result

    def divided_at(self, corner: Corner, divisor: float) -> Rect:
        """Divide the size by `divisor`, keeping `corner` in place."""
        return Rect(
            self.x.divided_at(corner.hori.side(), divisor),
            self.y.divided_at(corner.vert.side(), divisor),
        )

    def rotated_in_place(self, corner: Corner, amount: Rotation) -> Rect:
        """Transpose for quarter and three-quarter rotations, keeping `corner`."""
        if amount in (Rotation.NONE, Rotation.HALF):
            return self
        return self.transposed(corner)

    def transposed(self, corner: Corner) -> Rect:
        """Swap width and height, keeping `corner` in place."""
        return Rect(
            self.x.with_len(corner.hori.side(), self.y.length()),
            self.y.with_len(corner.vert.side(), self.x.length()),
        )

    def __add__(self, offset: Point) -> Rect:
        if not isinstance(offset, Point):
            return NotImplemented
        return Rect(self.x + offset.x, self.y + offset.y)

    def __sub__(self, offset: Point) -> Rect:
        if not isinstance(offset, Point):
            return NotImplemented
        return self + -offset