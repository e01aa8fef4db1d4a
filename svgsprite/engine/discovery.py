"""Walk icon directories and find SVG files in a stable order."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from svgsprite.errors import DiscoveryError

logger = logging.getLogger(__name__)

ICON_SUFFIX = ".svg"


def is_icon_path(path: str | Path) -> bool:
    return str(path).endswith(ICON_SUFFIX)


def resolve_roots(include: Iterable[str | Path], cwd: str | Path | None = None) -> list[Path]:
    """Make every root absolute, resolving relative ones against ``cwd``."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    roots: list[Path] = []
    for entry in include:
        p = Path(entry)
        roots.append((p if p.is_absolute() else base / p).resolve())
    return roots


def check_roots(roots: Iterable[Path]) -> None:
    """Raise DiscoveryError for the first root that is missing or unreadable."""
    for root in roots:
        if not root.is_dir():
            raise DiscoveryError(root, "not a directory")
        if not os.access(root, os.R_OK | os.X_OK):
            raise DiscoveryError(root, "permission denied")


class IconScanner:
    """Scans one or more directory trees for .svg files.

    Directories and files are visited in lexical order so the result is
    reproducible for a fixed filesystem state.
    """

    def __init__(self, roots: Iterable[Path]) -> None:
        self._roots = list(roots)

    def scan(self) -> list[Path]:
        """Return all icon files under the configured roots."""
        check_roots(self._roots)
        results = list(self.scan_iter())
        logger.info("Discovered %d icon files in %d directories", len(results), len(self._roots))
        return results

    def scan_iter(self) -> Iterator[Path]:
        """Yield icon files one at a time, root by root."""
        for root in self._roots:
            yield from self._walk(root)

    def _walk(self, root: Path) -> Iterator[Path]:
        def _on_error(err: OSError) -> None:
            # Subdirectories that vanish or deny access are skipped, not fatal
            logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            dirnames.sort()
            for fname in sorted(filenames):
                p = Path(dirpath) / fname
                if is_icon_path(fname) and p.is_file():
                    yield p
