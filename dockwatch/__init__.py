"""Container lifecycle event notifier."""

__version__ = "0.1.0"
