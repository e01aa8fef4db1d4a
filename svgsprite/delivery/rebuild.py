"""Signals for downstream consumers: entry-file touch and live reload."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from svgsprite.models.sprite import SpriteDocument

logger = logging.getLogger(__name__)


class EntryToucher:
    """Bumps an entry file's mtime so an outer watch-mode build reruns."""

    def __init__(self, entry: str | Path) -> None:
        self.entry = Path(entry)

    def __call__(self, _sprite: SpriteDocument) -> None:
        self.touch()

    def touch(self) -> bool:
        if not self.entry.is_file():
            logger.warning("Entry file not found - skipping rebuild trigger")
            return False
        try:
            os.utime(self.entry, None)
        except OSError as e:
            logger.error("Failed to trigger rebuild: %s", e)
            return False
        return True


class ReloadBroadcaster:
    """Fans a reload message out to every connected subscriber."""

    def __init__(self) -> None:
        self._subscribers: set[asyncio.Queue[dict[str, str]]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue[dict[str, str]]:
        queue: asyncio.Queue[dict[str, str]] = asyncio.Queue()
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict[str, str]]) -> None:
        self._subscribers.discard(queue)

    def __call__(self, sprite: SpriteDocument) -> None:
        message = {"type": "full-reload", "hash": sprite.hash}
        for queue in list(self._subscribers):
            queue.put_nowait(message)
