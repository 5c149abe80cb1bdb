"""Physical screen layouts: where each output sits, as the WM sees it."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

from layaway.geometry import Point, Rect, Size, Transform
from layaway.info import Port


@dataclass(frozen=True)
class OutputConfig:
    """Configuration of a single output in the WM."""

    bounds: Rect
    """Where this output is placed in the WM."""
    resolution: Size | None
    """Unscaled physical resolution, or None if the screen is not active."""
    scale: float
    """Size multiplier for applications rendered on this output."""
    transform: Transform = Transform()
    """How the output is flipped and rotated."""
    active: bool = True
    """Whether the output is currently on and displaying."""


@dataclass(frozen=True)
class Output:
    """Something the WM can display to, usually a screen."""

    port: Port
    cfg: OutputConfig


@dataclass
class Layout:
    """How each output should be configured, keyed by port."""

    configs: dict[Port, OutputConfig] = field(default_factory=dict)

    @classmethod
    def from_outputs(cls, outputs: Iterable[Output]) -> Layout:
        """Build a layout; later outputs on the same port replace earlier ones."""
        layout = cls()
        for output in outputs:
            layout.add(output)
        return layout

    def outputs(self) -> Iterator[Output]:
        """All outputs, ordered by port."""
        for port in sorted(self.configs):
            yield Output(port, self.configs[port])

    def add(self, output: Output) -> None:
        self.configs[output.port] = output.cfg

    def bounding_box(self) -> Rect:
        """The smallest rectangle including the origin and all output bounds."""
        bb = Rect()
        for cfg in self.configs.values():
            bb = bb.stretched_to_rect(cfg.bounds)
        return bb

    def reset_to_origin(self) -> None:
        """Move all outputs so the bounding box has its upper left corner at the origin.

        Relative positions between outputs are kept.
        """
        bb = self.bounding_box()
        least = Point(bb.x.start, bb.y.start)
        self.configs = {
            port: replace(cfg, bounds=cfg.bounds - least)
            for port, cfg in self.configs.items()
        }