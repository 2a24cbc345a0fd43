"""Exception types raised by dockter."""

from __future__ import annotations


class DockterError(RuntimeError):
    """Base class for errors surfaced to dockter callers."""


class ConfigError(DockterError):
    """Raised when the configuration file cannot be parsed."""


class EnvironError(DockterError):
    """Raised when a software environment description is invalid."""


__all__ = ["ConfigError", "DockterError", "EnvironError"]
