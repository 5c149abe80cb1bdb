"""Command line entry point: compute a screen layout and apply or print it."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from layaway.comms import CommsError, establish, layout_to_sway_commands
from layaway.config import Config, ConfigError
from layaway.dsl import ParseError, parse_layout


class _Failure(Exception):
    """A step of the command failed; the message carries its context."""


@contextmanager
def _context(message: str, *errors: type[BaseException]) -> Iterator[None]:
    try:
        yield
    except errors as err:
        raise _Failure(f"{message}: {err}") from err


def desc_from_config() -> str:
    """The layout description the config file holds for this machine."""
    config = Config.load()
    try:
        desc = config.machine_layout()
    except OSError as err:
        raise ConfigError(
            f"Could not determine hostname to decide which layout to load: {err}"
        ) from err
    if desc is None:
        raise ConfigError("Config file does not define layout for this machine")
    return desc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layaway",
        description="Calculates the physical screen layout given a short relative "
        "layout description.",
    )
    parser.add_argument(
        "desc",
        nargs="?",
        help="Layout description to use instead of the machine-specific one from "
        "the config file.",
    )
    parser.add_argument(
        "-n",
        "--no-apply",
        dest="apply",
        action="store_false",
        help="Print the corresponding WM configuration instead of applying it.",
    )
    return parser


def _run(args: argparse.Namespace) -> None:
    desc = args.desc
    if desc is None:
        with _context("Could not load layout description", ConfigError):
            desc = desc_from_config()

    with _context("Could not parse relative layout description", ParseError):
        relative = parse_layout(desc)

    with _context("Could not establish connection to WM", CommsError):
        comms = establish()

    try:
        with _context("Could not absolutize layout", CommsError):
            layout = relative.to_absolute(comms)

        if args.apply:
            with _context("Could not set layout in WM", CommsError):
                comms.set_layout(layout)
        else:
            for cmd in layout_to_sway_commands(layout):
                print(cmd)
    finally:
        close = getattr(comms, "close", None)
        if close is not None:
            close()


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        _run(args)
    except _Failure as failure:
        print(f"Error: {failure}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())