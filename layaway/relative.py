"""Logical screen layouts described by relative positions."""

from __future__ import annotations

from dataclasses import dataclass, field

from layaway.absolute import Layout as AbsoluteLayout
from layaway.absolute import Output, OutputConfig
from layaway.comms import Comms
from layaway.geometry import Center, Hori, Rect, Size, Transform, Vert, spec_side
from layaway.info import Port, Resolution


@dataclass(frozen=True)
class Position:
    """Where a screen goes relative to the bounding box of those before it.

    `edge` is the shared edge as seen from the bounding box; `spec` is where
    along that edge the screen is aligned. A missing `spec` defaults to
    `Vert.TOP` for horizontal edges and `Center.CENTER` for vertical ones.
    """

    edge: Hori | Vert = Hori.RIGHT
    spec: Hori | Vert | Center | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.edge, (Hori, Vert)):
            raise ValueError(f"edge must be a Hori or Vert, not {self.edge!r}")
        if self.spec is None:
            default = Vert.TOP if isinstance(self.edge, Hori) else Center.CENTER
            object.__setattr__(self, "spec", default)
        elif not isinstance(self.spec, (Hori, Vert, Center)) or isinstance(
            self.spec, type(self.edge)
        ):
            raise ValueError(
                f"spec {self.spec!r} does not fit edge {self.edge!r}"
            )


@dataclass
class Screen:
    """One screen in a relative layout."""

    port: Port
    resolution: Resolution | Size | None = None
    scale: float | None = None
    transform: Transform = Transform()
    pos: Position = field(default_factory=Position)


@dataclass
class Layout:
    """Description of a screen layout based on relative positioning."""

    screens: list[Screen] = field(default_factory=list)

    def to_absolute(self, comms: Comms) -> AbsoluteLayout:
        """Resolve the layout against the outputs the WM currently knows."""
        placed = AbsoluteLayout()
        current = comms.layout()
        bb = Rect()

        for screen in self.screens:
            in_wm = current.configs.get(screen.port)

            if screen.scale is not None:
                scale = screen.scale
            elif in_wm is not None:
                scale = in_wm.scale
            else:
                scale = 1.0

            if isinstance(screen.resolution, Resolution):
                resolution = screen.resolution.size()
            elif screen.resolution is not None:
                resolution = screen.resolution
            elif in_wm is not None:
                resolution = in_wm.bounds.size() * scale
            else:
                # not connected and no resolution given: does not affect layout
                continue

            # positions are in scaled (logical) space, hence the division
            layout_size = resolution.rotate(screen.transform.rotation) / scale

            pos = screen.pos
            if isinstance(pos.edge, Hori):
                bounds = Rect(
                    bb.x.place_outside(layout_size.width, pos.edge.side()),
                    bb.y.place_inside(layout_size.height, spec_side(pos.spec)),
                )
            else:
                bounds = Rect(
                    bb.x.place_inside(layout_size.width, spec_side(pos.spec)),
                    bb.y.place_outside(layout_size.height, pos.edge.side()),
                )

            bb = bb.stretched_to_rect(bounds)
            placed.add(
                Output(
                    screen.port,
                    OutputConfig(
                        bounds=bounds,
                        resolution=resolution,
                        scale=scale,
                        transform=screen.transform,
                        active=True,
                    ),
                )
            )

        placed.reset_to_origin()
        return placed