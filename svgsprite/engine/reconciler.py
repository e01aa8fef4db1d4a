"""Debounced, single-flight rebuilds driven by file events.

States:
    IDLE        no pending rebuild
    DEBOUNCING  an event arrived; waiting for the quiescence timer
    REBUILDING  one rebuild pass is running

Events during DEBOUNCING restart the timer. Events during REBUILDING are
collected and re-enter DEBOUNCING once the pass completes; an in-flight pass
is never cancelled.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from pathlib import Path

from svgsprite.engine.discovery import is_icon_path
from svgsprite.engine.pipeline import SpritePipeline
from svgsprite.engine.scheduler import LoopScheduler, Scheduler, TimerHandle
from svgsprite.models.events import FileEvent

logger = logging.getLogger(__name__)


class ReconcilerState(enum.Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    REBUILDING = "rebuilding"


class ChangeReconciler:
    def __init__(
        self,
        pipeline: SpritePipeline,
        debounce: float = 0.1,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._debounce = debounce
        self._scheduler = scheduler or LoopScheduler()
        self._timer: TimerHandle | None = None
        self._pending: set[Path] = set()
        self._rebuild_task: asyncio.Task[None] | None = None
        self.state = ReconcilerState.IDLE
        self.rebuild_count = 0

    @property
    def pending(self) -> frozenset[Path]:
        return frozenset(self._pending)

    def notify(self, event: FileEvent) -> bool:
        """Feed one raw file event. Returns False when the event is ignored."""
        if not is_icon_path(event.path):
            return False

        path = self._pipeline.normalize_path(event.path)
        logger.info("SVG %s: %s", event.kind.value, path)
        self._pending.add(path)

        if self.state is ReconcilerState.REBUILDING:
            return True
        self._start_debounce()
        return True

    async def wait_rebuild(self) -> None:
        """Wait for the in-flight rebuild pass, if any."""
        task = self._rebuild_task
        if task is not None and not task.done():
            await task

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending.clear()
        if self.state is ReconcilerState.DEBOUNCING:
            self.state = ReconcilerState.IDLE

    def _start_debounce(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self.state = ReconcilerState.DEBOUNCING
        self._timer = self._scheduler.call_later(self._debounce, self._on_quiet)

    def _on_quiet(self) -> None:
        self._timer = None
        if self.state is not ReconcilerState.DEBOUNCING:
            return
        changed = self._pending
        self._pending = set()
        self.state = ReconcilerState.REBUILDING
        self._rebuild_task = asyncio.ensure_future(self._rebuild(changed))

    async def _rebuild(self, changed: set[Path]) -> None:
        try:
            await self._pipeline.build(sorted(changed))
            self.rebuild_count += 1
        except Exception:
            logger.exception("Error handling SVG change")
        finally:
            if self._pending:
                self._start_debounce()
            else:
                self.state = ReconcilerState.IDLE
