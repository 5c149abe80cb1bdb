"""Communication with the window manager to read and apply output layouts."""

from __future__ import annotations

import json
import os
import re
import socket
import struct
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from layaway.absolute import Layout, Output, OutputConfig
from layaway.geometry import Interval, Rect, Rotation, Size, Transform
from layaway.info import Connector, Port

_IPC_MAGIC = b"i3-ipc"
_IPC_HEADER = struct.Struct("=6sII")
_RUN_COMMAND = 0
_GET_OUTPUTS = 3
_U32_MAX = 2**32 - 1


class CommsError(Exception):
    """Communication with the WM failed."""


class NoWmRunningError(CommsError):
    """No supported WM is running in this session."""

    def __init__(self) -> None:
        super().__init__("No known WM is running")


class SwayError(CommsError):
    """Communication with sway failed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"When communicating with sway: {message}")


class ParsePortError(CommsError, ValueError):
    """An output name could not be turned into a port."""


class ParseTransformError(CommsError, ValueError):
    """A sway transform string could not be understood."""


class Comms(ABC):
    """Talks to the WM about available outputs."""

    @abstractmethod
    def layout(self) -> Layout:
        """The layout the WM currently uses."""

    @abstractmethod
    def set_layout(self, layout: Layout) -> None:
        """Apply the given layout in the WM."""


def establish() -> Comms:
    """Connect to whichever supported WM is running."""
    socket_path = os.environ.get("SWAYSOCK")
    if socket_path is None:
        raise NoWmRunningError()
    return SwayComms(socket_path)


def parse_port(name: str) -> Port:
    """Parse a sway output name such as ``eDP-1`` or ``HDMI-A-2``."""
    kind, dash, idx = name.rpartition("-")
    if not dash:
        raise ParsePortError(
            "Output name must contain a dash to separate connector from index, "
            f"but is `{name}`"
        )
    try:
        connector = Connector.from_wm(kind)
    except ValueError:
        raise ParsePortError(
            f"New unknown connector name `{kind}`, perhaps libDRM got updated "
            "with new connectors? Need to add them in source here then. "
            "Feel free to report this!"
        ) from None
    if not re.fullmatch(r"\+?[0-9]+", idx) or int(idx) > _U32_MAX:
        raise ParsePortError(f"Port index `{idx}` is not an integer")
    return Port(connector, int(idx))


_ANGLES = {
    "0": Rotation.NONE,
    "90": Rotation.QUARTER,
    "180": Rotation.HALF,
    "270": Rotation.THREE_QUARTER,
}


def parse_transform(raw: str) -> Transform:
    """Parse a sway transform such as ``normal``, ``90`` or ``flipped-270``."""
    flipped = "flipped" in raw
    if raw.startswith("flipped-"):
        angle = raw.removeprefix("flipped-")
    elif raw in ("normal", "flipped"):
        angle = "0"
    else:
        angle = raw
    try:
        rotation = _ANGLES[angle]
    except KeyError:
        raise ParseTransformError(
            f"Angle `{raw}` could not be parsed, was none of normal "
            "(only if not flipped), 90, 180 or 270"
        ) from None
    return Transform(flipped=flipped, rotation=rotation)


def transform_to_sway(transform: Transform) -> str:
    """Render a transform the way sway expects it."""
    if not transform.flipped and transform.rotation is Rotation.NONE:
        return "normal"
    parts = []
    if transform.flipped:
        parts.append("flipped")
    if transform.rotation is not Rotation.NONE:
        parts.append(str(transform.rotation.value))
    return "-".join(parts)


def output_from_sway(raw: dict[str, Any]) -> Output:
    """Build an output from one entry of sway's ``get_outputs`` reply."""
    name = raw["name"]
    try:
        port = parse_port(name)
    except ParsePortError as err:
        raise SwayError(f"Could not parse output name `{name}` into port: {err}") from err

    rect = raw["rect"]
    x, y = rect["x"], rect["y"]
    bounds = Rect(Interval(x, x + rect["width"]), Interval(y, y + rect["height"]))

    mode = raw.get("current_mode")
    resolution = Size(mode["width"], mode["height"]) if mode else None

    scale = raw.get("scale")
    raw_transform = raw.get("transform")
    if raw_transform is None:
        transform = Transform()
    else:
        try:
            transform = parse_transform(raw_transform)
        except ParseTransformError as err:
            raise SwayError(
                f"Could not parse transform `{raw_transform}`: {err}"
            ) from err

    return Output(
        port,
        OutputConfig(
            bounds=bounds,
            resolution=resolution,
            scale=1.0 if scale is None else float(scale),
            transform=transform,
            active=bool(raw.get("active", False)),
        ),
    )


def _format_scale(scale: float) -> str:
    if float(scale).is_integer():
        return str(int(scale))
    return repr(float(scale))


def output_to_sway_command(output: Output) -> str:
    """The sway command that configures `output` as given."""
    cfg = output.cfg
    cmd = (
        f"output {output.port} "
        f"position {cfg.bounds.x.start} {cfg.bounds.y.start} "
        f"scale {_format_scale(cfg.scale)} "
        f"transform {transform_to_sway(cfg.transform)}"
    )
    if cfg.resolution is not None:
        cmd += f" resolution {cfg.resolution.width}x{cfg.resolution.height}"
    return cmd


def layout_to_sway_commands(layout: Layout) -> Iterator[str]:
    """One sway command per output, ordered by port."""
    for output in layout.outputs():
        yield output_to_sway_command(output)


class SwayComms(Comms):
    """Connection to sway over its IPC socket."""

    def __init__(self, socket_path: str | None = None) -> None:
        if socket_path is None:
            socket_path = os.environ.get("SWAYSOCK")
            if socket_path is None:
                raise SwayError("Over IPC: SWAYSOCK is not set")
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            self._sock.connect(socket_path)
        except OSError as err:
            self._sock.close()
            raise SwayError(f"Over IPC: {err}") from err

    def _recv_exact(self, count: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < count:
            chunk = self._sock.recv(count - len(chunks))
            if not chunk:
                raise SwayError("Over IPC: connection closed unexpectedly")
            chunks.extend(chunk)
        return bytes(chunks)

    def _request(self, kind: int, payload: bytes) -> Any:
        try:
            self._sock.sendall(_IPC_HEADER.pack(_IPC_MAGIC, len(payload), kind) + payload)
            magic, length, _reply_kind = _IPC_HEADER.unpack(
                self._recv_exact(_IPC_HEADER.size)
            )
            if magic != _IPC_MAGIC:
                raise SwayError("Over IPC: invalid magic in reply")
            body = self._recv_exact(length)
        except OSError as err:
            raise SwayError(f"Over IPC: {err}") from err
        try:
            return json.loads(body)
        except json.JSONDecodeError as err:
            raise SwayError(f"Over IPC: {err}") from err

    def layout(self) -> Layout:
        outputs = self._request(_GET_OUTPUTS, b"")
        return Layout.from_outputs(output_from_sway(raw) for raw in outputs)

    def set_layout(self, layout: Layout) -> None:
        for cmd in layout_to_sway_commands(layout):
            for outcome in self._request(_RUN_COMMAND, cmd.encode()):
                if not outcome.get("success", False):
                    message = outcome.get("error", "command failed")
                    raise SwayError(f"Over IPC: {message}")

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> SwayComms:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()