"""Error taxonomy for sprite generation.

Fatal errors (configuration, discovery) halt the pipeline before any sprite is
produced. Per-file errors (compile) and write errors are logged and recovered
from by the caller.
"""

from __future__ import annotations

from pathlib import Path


class SpriteError(Exception):
    """Base class for every error raised by svgsprite."""


class ConfigurationError(SpriteError):
    """Invalid options, raised once at setup."""


class DiscoveryError(SpriteError):
    """A configured icon root is missing or unreadable."""

    def __init__(self, root: str | Path, reason: str = "") -> None:
        self.root = Path(root)
        message = f"Icon directory not found or unreadable: {self.root}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CompileError(SpriteError):
    """One icon file could not be turned into a symbol."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Error reading or processing SVG file: {self.path}: {reason}")


class WriteError(SpriteError):
    """The sprite could not be persisted to disk."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Error writing sprite file: {self.path}: {reason}")
