"""Parser for the relative layout description language.

A layout lists screens joined by ``+``. Each screen names its port and may
add a resolution (``@``), a scale (``:``), a transform (``#``) and a
position relative to the screens before it (``/``)::

    dp + edp@1080p:1.5#flip 90/bottom,center + vga/top,left

The whole description is parsed at once; the furthest point where parsing
failed is reported in a :class:`ParseError`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from layaway.geometry import Center, Hori, Rotation, Size, Transform, Vert
from layaway.info import Connector, Port, Resolution
from layaway.relative import Layout, Position, Screen

T = TypeVar("T")

_U32_MAX = 2**32 - 1
_DIGITS = "0123456789"
_NONZERO = "123456789"

_CONNECTOR_NAMES = [(name, connector) for connector in Connector for name in connector.names]
_RESOLUTION_NAMES = [(resolution.value, resolution) for resolution in Resolution]
_ROTATIONS = [
    ("0", Rotation.NONE),
    ("90", Rotation.QUARTER),
    ("180", Rotation.HALF),
    ("270", Rotation.THREE_QUARTER),
]
_HORI = [("left", Hori.LEFT), ("right", Hori.RIGHT)]
_VERT = [("top", Vert.TOP), ("bottom", Vert.BOTTOM)]
_HORI_SPEC = [*_HORI, ("center", Center.CENTER)]
_VERT_SPEC = [*_VERT, ("center", Center.CENTER)]


class ParseError(ValueError):
    """The layout description is not valid."""

    def __init__(self, position: int, expected: Sequence[str], found: str | None) -> None:
        self.position = position
        self.expected = tuple(expected)
        self.found = found
        found_text = "end of input" if found is None else repr(found)
        message = f"found {found_text} at position {position}"
        if self.expected:
            message += ", expected one of: " + ", ".join(self.expected)
        super().__init__(message)


class _Backtrack(Exception):
    """Internal signal that the current alternative did not match."""


class _Parser:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._err_pos = -1
        self._expected: list[str] = []

    # -- infrastructure ---------------------------------------------------

    def error(self) -> ParseError:
        pos = max(self._err_pos, 0)
        found = self.source[pos] if pos < len(self.source) else None
        return ParseError(pos, self._expected, found)

    def _fail(self, *expected: str) -> Any:
        if self.pos > self._err_pos:
            self._err_pos = self.pos
            self._expected = []
        if self.pos == self._err_pos:
            self._expected.extend(e for e in expected if e not in self._expected)
        raise _Backtrack

    def _optional(self, rule: Callable[[], T]) -> T | None:
        saved = self.pos
        try:
            return rule()
        except _Backtrack:
            self.pos = saved
            return None

    def _choose(self, table: Sequence[tuple[str, T]]) -> T:
        for text, value in table:
            if self.source.startswith(text, self.pos):
                self.pos += len(text)
                return value
        return self._fail(*(text for text, _ in table))

    def _literal(self, text: str) -> None:
        if not self.source.startswith(text, self.pos):
            self._fail(text)
        self.pos += len(text)

    def _skip_ws(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self.pos += 1

    def _symbol(self, char: str) -> None:
        self._skip_ws()
        self._literal(char)
        self._skip_ws()

    def _after(self, char: str, rule: Callable[[], T]) -> T:
        self._symbol(char)
        return rule()

    def _take_digits(self) -> str:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in _DIGITS:
            self.pos += 1
        return self.source[start : self.pos]

    # -- grammar ----------------------------------------------------------

    def layout(self) -> Layout:
        screens: list[Screen] = []
        first = self._optional(self._screen)
        if first is not None:
            screens.append(first)
            while (screen := self._optional(lambda: self._after("+", self._screen))) is not None:
                screens.append(screen)
        if self.pos != len(self.source):
            self._fail("end of input")
        return Layout(screens)

    def _screen(self) -> Screen:
        port = self._port()
        resolution = self._optional(lambda: self._after("@", self._resolution))
        scale = self._optional(lambda: self._after(":", self._float))
        transform = self._optional(lambda: self._after("#", self._transform))
        pos = self._optional(lambda: self._after("/", self._pos))
        return Screen(
            port=port,
            resolution=resolution,
            scale=scale,
            transform=transform if transform is not None else Transform(),
            pos=pos if pos is not None else Position(),
        )

    def _port(self) -> Port:
        kind = self._choose(_CONNECTOR_NAMES)
        idx = self._optional(self._integer)
        return Port(kind, 1 if idx is None else idx)

    def _resolution(self) -> Resolution | Size:
        named = self._optional(lambda: self._choose(_RESOLUTION_NAMES))
        if named is not None:
            return named
        return self._size()

    def _size(self) -> Size:
        width = self._integer()
        self._symbol("x")
        height = self._integer()
        return Size(width, height)

    def _transform(self) -> Transform:
        saved = self.pos
        try:
            flipped = self._optional(self._flip) is not None
            rotation = self._choose(_ROTATIONS)
            return Transform(flipped=flipped, rotation=rotation)
        except _Backtrack:
            self.pos = saved
        self._flip()
        rotation = self._optional(lambda: self._choose(_ROTATIONS))
        return Transform(flipped=True, rotation=Rotation.NONE if rotation is None else rotation)

    def _flip(self) -> bool:
        self._literal("flip")
        self._skip_ws()
        return True

    def _pos(self) -> Position:
        saved = self.pos
        try:
            hori = self._choose(_HORI)
            spec = self._optional(lambda: self._after(",", lambda: self._choose(_VERT_SPEC)))
            return Position(hori, spec)
        except _Backtrack:
            self.pos = saved
        vert = self._choose(_VERT)
        spec = self._optional(lambda: self._after(",", lambda: self._choose(_HORI_SPEC)))
        return Position(vert, spec)

    def _integer(self) -> int:
        start = self.pos
        if self.source.startswith("0", self.pos):
            self.pos += 1
            return 0
        if self.pos >= len(self.source) or self.source[self.pos] not in _NONZERO:
            self._fail("digit")
        text = self._take_digits()
        value = int(text)
        if value > _U32_MAX:
            raise ParseError(start, (f"integer up to {_U32_MAX}",), text)
        return value

    def _digits(self) -> str:
        text = self._take_digits()
        if not text:
            self._fail("digit")
        return text

    def _float(self) -> float:
        natural = self._digits()

        def fraction() -> str:
            self._literal(".")
            return self._digits()

        frac = self._optional(fraction)
        return float(natural if frac is None else f"{natural}.{frac}")


def parse_layout(source: str) -> Layout:
    """Parse a layout description into a relative layout."""
    parser = _Parser(source)
    try:
        return parser.layout()
    except _Backtrack:
        raise parser.error() from None