"""Known connectors, named resolutions and output ports."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum

from layaway.geometry import Size


@functools.total_ordering
class Connector(Enum):
    """Protocol and possibly physical form of the plug an output uses.

    The value is the name the WM uses; `names` holds the DSL spellings.
    Members are ordered by declaration.
    """

    def __new__(cls, wm_name: str, *names: str) -> Connector:
        member = object.__new__(cls)
        member._value_ = wm_name
        member.names = names
        return member

    UNKNOWN = ("Unknown", "unknown")
    VGA = ("VGA", "vga")
    DVI_I = ("DVI-I", "dvii")
    DVI_D = ("DVI-D", "dvid")
    DVI_A = ("DVI-A", "dvia")
    COMPOSITE = ("Composite", "composite")
    SVIDEO = ("SVIDEO", "svideo")
    LVDS = ("LVDS", "lvds")
    COMPONENT = ("Component", "component")
    NINE_PIN_DIN = ("DIN", "din")
    DISPLAY_PORT = ("DP", "dp")
    HDMI_B = ("HDMI-B", "hdmib")
    HDMI_A = ("HDMI-A", "hdmia", "hdmi")
    TV = ("TV", "tv")
    EDP = ("eDP", "edp")
    VIRTUAL = ("Virtual", "virtual")
    DSI = ("DSI", "dsi")
    DPI = ("DPI", "dpi")
    WRITEBACK = ("Writeback", "writeback")
    SPI = ("SPI", "spi")
    USB = ("USB", "usb")
    HEADLESS = ("HEADLESS", "headless")

    @classmethod
    def from_wm(cls, name: str) -> Connector:
        """Look up a connector by the name the WM uses for it."""
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unknown connector name {name!r}") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Connector):
            return NotImplemented
        members = list(Connector)
        return members.index(self) < members.index(other)


class Resolution(Enum):
    """Commonly named display resolutions; the value is the DSL name."""

    def __new__(cls, dsl_name: str, width: int, height: int) -> Resolution:
        member = object.__new__(cls)
        member._value_ = dsl_name
        member.width = width
        member.height = height
        return member

    QVGA = ("240p", 320, 240)
    WQVGA = ("w240p", 400, 240)
    VGA = ("480p", 640, 480)
    WVGA = ("w480p", 800, 480)
    FWVGA = ("uw480p", 854, 480)
    QHD = ("540p", 960, 540)
    SVGA = ("600p", 800, 600)
    WSVGA = ("w600p", 1024, 600)
    HD = ("720p", 1280, 720)
    XGA = ("768p", 1024, 768)
    XGA_PLUS = ("864p", 1152, 864)
    HD_PLUS = ("900p", 1600, 900)
    QUAD_VGA = ("960p", 1280, 960)
    SXGA = ("1024p", 1280, 1024)
    FHD = ("1080p", 1920, 1080)
    DCI_2K = ("dci2k", 2048, 1080)
    UWFHD = ("w1080p", 2560, 1080)
    QWXGA = ("1152p", 2048, 1152)
    UXGA = ("s1200p", 1600, 1200)
    FHD_PLUS = ("1200p", 1900, 1200)
    WQHD = ("1440p", 2560, 1440)
    UWQHD = ("w1440p", 3440, 1440)
    HD_2K = ("2k", 2256, 1504)
    QXGA = ("1600p", 2048, 1600)
    WQXGA = ("w1600p", 2560, 1600)
    UWQHD_PLUS = ("uw1600p", 3840, 1600)
    HD_3K = ("3k", 1620, 2880)
    WQXGA_PLUS = ("1800p", 2880, 1800)
    WQHD_PLUS = ("w1800p", 3200, 1800)
    SQHD = ("sq1920p", 1920, 1920)
    HD_3K_PLUS = ("1920p", 3072, 1920)
    QSXGA = ("2048p", 2560, 2048)
    QSXGA_PLUS = ("2100p", 2800, 2100)
    HD_3_HALF_K = ("3.5k", 3456, 2160)
    UHD_4K = ("4k", 3840, 2160)
    DCI_4K = ("dci4k", 4096, 2160)
    QUXGA = ("2400p", 3200, 2400)
    UHD_4K_PLUS = ("w2400p", 3840, 2400)
    UHD_5K = ("5k", 5120, 2880)
    UHD_6K = ("6k", 6144, 3456)
    UHD_8K = ("8k", 7680, 4320)

    def size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True, order=True)
class Port:
    """Where an output is plugged in."""

    kind: Connector
    idx: int

    def __str__(self) -> str:
        return f"{self.kind.value}-{self.idx}"