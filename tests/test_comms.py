import json
import os
import shutil
import socket
import struct
import tempfile
import threading

import pytest

from layaway.absolute import Layout, Output, OutputConfig
from layaway.comms import (
    NoWmRunningError,
    ParsePortError,
    ParseTransformError,
    SwayComms,
    SwayError,
    establish,
    layout_to_sway_commands,
    output_from_sway,
    output_to_sway_command,
    parse_port,
    parse_transform,
    transform_to_sway,
)
from layaway.geometry import Interval, Rect, Rotation, Size, Transform
from layaway.info import Connector, Port

HEADER = struct.Struct("=6sII")


def _raw_output(name="eDP-1", **extra):
    raw = {
        "name": name,
        "rect": {"x": 0, "y": 0, "width": 1280, "height": 720},
        "current_mode": {"width": 2560, "height": 1440, "refresh": 60000},
        "scale": 2.0,
        "transform": "90",
        "active": True,
    }
    raw.update(extra)
    return raw


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("eDP-1", Port(Connector.EDP, 1)),
        ("HDMI-A-2", Port(Connector.HDMI_A, 2)),
        ("DP-3", Port(Connector.DISPLAY_PORT, 3)),
        ("HEADLESS-1", Port(Connector.HEADLESS, 1)),
    ],
)
def test_parse_port(name, expected):
    assert parse_port(name) == expected


def test_parse_port_round_trips_through_str():
    port = Port(Connector.DVI_I, 4)
    assert parse_port(str(port)) == port


@pytest.mark.parametrize("name", ["eDP1", "FOO-1", "DP-x", "DP-", "DP--1"])
def test_parse_port_errors(name):
    with pytest.raises(ParsePortError):
        parse_port(name)


def test_parse_port_no_dash_message():
    with pytest.raises(ParsePortError, match="must contain a dash"):
        parse_port("eDP1")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("normal", Transform(False, Rotation.NONE)),
        ("90", Transform(False, Rotation.QUARTER)),
        ("180", Transform(False, Rotation.HALF)),
        ("270", Transform(False, Rotation.THREE_QUARTER)),
        ("flipped", Transform(True, Rotation.NONE)),
        ("flipped-90", Transform(True, Rotation.QUARTER)),
        ("flipped-270", Transform(True, Rotation.THREE_QUARTER)),
    ],
)
def test_parse_transform(raw, expected):
    assert parse_transform(raw) == expected


@pytest.mark.parametrize("raw", ["45", "upside-down", "flipped-45", ""])
def test_parse_transform_errors(raw):
    with pytest.raises(ParseTransformError):
        parse_transform(raw)


@pytest.mark.parametrize("flipped", [False, True])
@pytest.mark.parametrize("rotation", list(Rotation))
def test_transform_round_trip(flipped, rotation):
    transform = Transform(flipped, rotation)
    assert parse_transform(transform_to_sway(transform)) == transform


def test_transform_to_sway_values():
    assert transform_to_sway(Transform()) == "normal"
    assert transform_to_sway(Transform(True, Rotation.NONE)) == "flipped"
    assert transform_to_sway(Transform(True, Rotation.HALF)) == "flipped-180"


def test_output_from_sway():
    output = output_from_sway(_raw_output())
    assert output.port == Port(Connector.EDP, 1)
    assert output.cfg.bounds == Rect(Interval(0, 1280), Interval(0, 720))
    assert output.cfg.resolution == Size(2560, 1440)
    assert output.cfg.scale == 2.0
    assert output.cfg.transform == Transform(False, Rotation.QUARTER)
    assert output.cfg.active is True


def test_output_from_sway_defaults():
    raw = _raw_output(current_mode=None, scale=None, transform=None, active=False)
    output = output_from_sway(raw)
    assert output.cfg.resolution is None
    assert output.cfg.scale == 1.0
    assert output.cfg.transform == Transform()
    assert output.cfg.active is False


def test_output_from_sway_bad_name():
    with pytest.raises(SwayError, match="into port"):
        output_from_sway(_raw_output(name="bogus"))


def test_output_from_sway_bad_transform():
    with pytest.raises(SwayError, match="Could not parse transform"):
        output_from_sway(_raw_output(transform="45"))


def test_output_to_sway_command():
    output = Output(
        Port(Connector.EDP, 1),
        OutputConfig(
            bounds=Rect(Interval(0, 1920), Interval(0, 1080)),
            resolution=Size(1920, 1080),
            scale=1.0,
        ),
    )
    assert output_to_sway_command(output) == (
        "output eDP-1 position 0 0 scale 1 transform normal resolution 1920x1080"
    )


def test_output_to_sway_command_without_resolution():
    output = Output(
        Port(Connector.DISPLAY_PORT, 2),
        OutputConfig(
            bounds=Rect(Interval(1920, 2880), Interval(0, 540)),
            resolution=None,
            scale=1.5,
            transform=Transform(True, Rotation.QUARTER),
        ),
    )
    cmd = output_to_sway_command(output)
    assert cmd.startswith("output DP-2 position 1920 0 scale 1.5 ")
    assert cmd.endswith("transform flipped-90")
    assert "resolution" not in cmd


def test_layout_to_sway_commands_one_per_output():
    layout = Layout.from_outputs(
        [output_from_sway(_raw_output("DP-1")), output_from_sway(_raw_output("eDP-1"))]
    )
    commands = list(layout_to_sway_commands(layout))
    assert [c.split()[1] for c in commands] == ["DP-1", "eDP-1"]


def test_establish_without_wm(monkeypatch):
    monkeypatch.delenv("SWAYSOCK", raising=False)
    with pytest.raises(NoWmRunningError):
        establish()


def test_establish_with_dead_socket(monkeypatch, tmp_path):
    monkeypatch.setenv("SWAYSOCK", str(tmp_path / "missing.sock"))
    with pytest.raises(SwayError):
        establish()


def _recv_exact(conn, count):
    data = b""
    while len(data) < count:
        chunk = conn.recv(count - len(data))
        if not chunk:
            raise ConnectionError("closed")
        data += chunk
    return data


@pytest.fixture
def fake_sway():
    directory = tempfile.mkdtemp()
    path = os.path.join(directory, "s.sock")
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(path)
    listener.listen(1)
    received = []

    def start(replies):
        def serve():
            conn, _ = listener.accept()
            with conn:
                for reply in replies:
                    magic, length, kind = HEADER.unpack(_recv_exact(conn, HEADER.size))
                    received.append((magic, kind, _recv_exact(conn, length)))
                    body = json.dumps(reply).encode()
                    conn.sendall(HEADER.pack(b"i3-ipc", len(body), kind) + body)

        thread = threading.Thread(target=serve, daemon=True)
        thread.start()
        return thread

    yield path, start, received
    listener.close()
    shutil.rmtree(directory, ignore_errors=True)


def test_sway_comms_layout(fake_sway):
    path, start, received = fake_sway
    thread = start([[_raw_output("eDP-1"), _raw_output("DP-2", transform="normal")]])
    with SwayComms(path) as comms:
        layout = comms.layout()
    thread.join(timeout=5)
    assert received == [(b"i3-ipc", 3, b"")]
    assert [o.port for o in layout.outputs()] == [
        Port(Connector.DISPLAY_PORT, 2),
        Port(Connector.EDP, 1),
    ]


def test_sway_comms_set_layout_sends_commands(fake_sway):
    path, start, received = fake_sway
    layout = Layout.from_outputs([output_from_sway(_raw_output())])
    thread = start([[{"success": True}]])
    with SwayComms(path) as comms:
        comms.set_layout(layout)
    thread.join(timeout=5)
    assert [(kind, payload.decode()) for _, kind, payload in received] == [
        (0, cmd) for cmd in layout_to_sway_commands(layout)
    ]


def test_sway_comms_set_layout_failure(fake_sway):
    path, start, _received = fake_sway
    layout = Layout.from_outputs([output_from_sway(_raw_output())])
    thread = start([[{"success": False, "error": "nope"}]])
    with SwayComms(path) as comms:
        with pytest.raises(SwayError, match="nope"):
            comms.set_layout(layout)
    thread.join(timeout=5)