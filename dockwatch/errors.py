"""Error types raised by the notifier and its collaborators."""
from __future__ import annotations


class DockwatchError(Exception):
    """Base class for all dockwatch errors."""


class ConfigError(DockwatchError):
    """Raised when notifier configuration is invalid.

    Attributes:
        field: Name of the offending setting
        pattern: The rejected value, if any
    """

    def __init__(self, field: str, message: str, pattern: str | None = None):
        self.field = field
        self.pattern = pattern
        super().__init__(f"invalid {field}: {message}")


class CollectorError(DockwatchError):
    """Raised when the container runtime cannot be listed or subscribed to."""


class ListenerError(CollectorError):
    """Recorded when the live event listener stops without being asked to."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"event listener failed: {reason}")
