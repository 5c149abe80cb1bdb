"""User configuration: layout descriptions per machine."""

from __future__ import annotations

import socket
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_path


def default_path() -> Path:
    """Where the user's config file lives."""
    return user_config_path("layaway", appauthor=False) / "config.toml"


class ConfigError(Exception):
    """The configuration could not be used."""


class ConfigLoadError(ConfigError):
    """The config file could not be read."""

    def __init__(self, path: Path, err: OSError) -> None:
        self.path = path
        super().__init__(
            f"Could not load config file at `{path}` from disk, "
            f"maybe it doesn't exist yet?\n{err}"
        )


class ConfigParseError(ConfigError):
    """The config file's contents are not valid."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"Could not parse config file: {reason}")


@dataclass
class Config:
    """Layout descriptions for all machines, keyed by hostname."""

    machines: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Read the config from `path`, or from the user's config file."""
        path = default_path() if path is None else Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as err:
            raise ConfigLoadError(path, err) from err
        return cls.from_toml(source)

    @classmethod
    def from_toml(cls, source: str) -> Config:
        """Parse a config from TOML text."""
        try:
            data = tomllib.loads(source)
        except tomllib.TOMLDecodeError as err:
            raise ConfigParseError(err) from err
        if "machines" not in data:
            raise ConfigParseError("missing field `machines`")
        machines = data["machines"]
        if not isinstance(machines, dict):
            raise ConfigParseError("`machines` must be a table")
        for machine, desc in machines.items():
            if not isinstance(desc, str):
                raise ConfigParseError(f"layout for `{machine}` must be a string")
        return cls(dict(machines))

    def machine_layout(self, hostname: str | None = None) -> str | None:
        """The layout description for `hostname`, by default this machine's."""
        if hostname is None:
            hostname = socket.gethostname()
        return self.machines.get(hostname)