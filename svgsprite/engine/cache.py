"""Single-flight symbol cache keyed by icon path.

Each entry is an asyncio task: concurrent ``get`` calls for the same path share
one compilation and observe the same result. Only successful compilations stay
cached; a failed task is dropped so the next generation retries the file.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path

from svgsprite.models.sprite import Symbol

logger = logging.getLogger(__name__)

SymbolLoader = Callable[[Path], Awaitable[Symbol]]


class SymbolCache:
    """Maps icon path → compiled Symbol. Unbounded; cleared only explicitly."""

    def __init__(self, loader: SymbolLoader) -> None:
        self._loader = loader
        self._entries: dict[Path, asyncio.Task[Symbol]] = {}
        self.compile_count = 0

    async def get(self, path: Path) -> Symbol:
        task = self._entries.get(path)
        if task is None:
            logger.debug("Cache miss: %s", path)
            task = asyncio.ensure_future(self._load(path))
            self._entries[path] = task
            task.add_done_callback(lambda t, p=path: self._discard_failed(p, t))
        else:
            logger.debug("Cache hit: %s", path)
        # Shielded so one cancelled requester doesn't cancel the shared compile
        return await asyncio.shield(task)

    async def _load(self, path: Path) -> Symbol:
        self.compile_count += 1
        return await self._loader(path)

    def _discard_failed(self, path: Path, task: asyncio.Task[Symbol]) -> None:
        if task.cancelled() or task.exception() is not None:
            if self._entries.get(path) is task:
                del self._entries[path]

    def peek(self, path: Path) -> Symbol | None:
        """Return the cached symbol without compiling, or None."""
        task = self._entries.get(path)
        if task is None or not task.done() or task.cancelled() or task.exception() is not None:
            return None
        return task.result()

    def invalidate(self, path: Path) -> bool:
        """Drop one entry. Returns whether anything was removed."""
        removed = self._entries.pop(path, None) is not None
        if removed:
            logger.debug("Invalidated %s", path)
        return removed

    def invalidate_many(self, paths: Iterable[Path]) -> int:
        return sum(1 for p in paths if self.invalidate(p))

    def retain(self, paths: Iterable[Path]) -> None:
        """Drop every entry whose path is not in ``paths``."""
        keep = set(paths)
        for path in [p for p in self._entries if p not in keep]:
            del self._entries[path]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and self.peek(path) is not None

    def __len__(self) -> int:
        return sum(1 for p in self._entries if self.peek(p) is not None)
