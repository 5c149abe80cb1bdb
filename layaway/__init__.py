"""Relative screen layout descriptions resolved into Sway output configuration."""

__version__ = "0.2.1"
__all__ = ["absolute", "cli", "comms", "config", "dsl", "geometry", "info", "relative"]