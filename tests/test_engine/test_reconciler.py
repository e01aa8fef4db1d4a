"""Tests for the debounced change reconciler, driven by a virtual clock."""

from __future__ import annotations

import asyncio
import shutil

from svgsprite.engine.pipeline import create_pipeline
from svgsprite.engine.reconciler import ChangeReconciler, ReconcilerState
from svgsprite.models.events import EventKind, FileEvent


def _event(path, kind=EventKind.CHANGE) -> FileEvent:
    return FileEvent(path=path, kind=kind)


def test_burst_of_events_coalesces_into_one_rebuild(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        path = icon_dir / "solid" / "check.svg"

        for _ in range(3):
            assert rec.notify(_event(path))
            clock.advance(0.05)
        states = [rec.state]
        assert clock.active == 1

        clock.advance(0.05)
        states.append(rec.state)
        await rec.wait_rebuild()
        states.append(rec.state)
        return rec, pipeline, states

    rec, pipeline, states = asyncio.run(scenario())
    assert states == [ReconcilerState.DEBOUNCING, ReconcilerState.REBUILDING, ReconcilerState.IDLE]
    assert rec.rebuild_count == 1
    assert pipeline.generation == 2


def test_non_icon_events_are_ignored(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        accepted = rec.notify(_event(icon_dir / "solid" / "README.md"))
        return rec, accepted

    rec, accepted = asyncio.run(scenario())
    assert accepted is False
    assert rec.state is ReconcilerState.IDLE
    assert clock.active == 0
    assert rec.pending == frozenset()


def test_only_changed_paths_are_recompiled(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        target = icon_dir / "solid" / "close.svg"
        target.write_text('<svg viewBox="0 0 24 24"><path d="M0 0L24 24"/></svg>', encoding="utf-8")
        rec.notify(_event(target))
        clock.advance(0.1)
        await rec.wait_rebuild()
        return pipeline

    pipeline = asyncio.run(scenario())
    assert pipeline.cache.compile_count == 3
    assert 'd="M0 0L24 24"' in pipeline.get_current_sprite().content


def test_remove_event_drops_symbol_and_changes_hash(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        before = await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        close = icon_dir / "solid" / "close.svg"
        close.unlink()
        rec.notify(_event(close, EventKind.REMOVE))
        clock.advance(0.1)
        await rec.wait_rebuild()
        return before, pipeline.get_current_sprite(), pipeline

    before, after, pipeline = asyncio.run(scenario())
    assert after.symbol_ids == ["solid-check"]
    assert after.hash != before.hash
    assert pipeline.cache.compile_count == 2


def test_events_during_rebuild_schedule_another_pass(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        check = icon_dir / "solid" / "check.svg"
        close = icon_dir / "solid" / "close.svg"

        rec.notify(_event(check))
        clock.advance(0.1)
        assert rec.state is ReconcilerState.REBUILDING

        # Arrives mid-rebuild: no timer yet, no concurrent pass
        rec.notify(_event(close))
        assert rec.state is ReconcilerState.REBUILDING
        assert clock.active == 0

        await rec.wait_rebuild()
        after_first = rec.state
        clock.advance(0.1)
        await rec.wait_rebuild()
        return rec, after_first

    rec, after_first = asyncio.run(scenario())
    assert after_first is ReconcilerState.DEBOUNCING
    assert rec.rebuild_count == 2
    assert rec.state is ReconcilerState.IDLE


def test_failed_rebuild_keeps_previous_sprite(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        before = await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        path = icon_dir / "solid" / "check.svg"
        shutil.rmtree(icon_dir)
        rec.notify(_event(path, EventKind.REMOVE))
        clock.advance(0.1)
        await rec.wait_rebuild()
        return before, pipeline.get_current_sprite(), rec

    before, current, rec = asyncio.run(scenario())
    assert current is before
    assert rec.state is ReconcilerState.IDLE
    assert rec.rebuild_count == 0


def test_close_cancels_pending_timer(options, icon_dir, clock):
    async def scenario():
        pipeline = create_pipeline(options)
        await pipeline.build()
        rec = ChangeReconciler(pipeline, debounce=0.1, scheduler=clock)
        rec.notify(_event(icon_dir / "solid" / "check.svg"))
        rec.close()
        clock.advance(1.0)
        return rec, pipeline

    rec, pipeline = asyncio.run(scenario())
    assert rec.state is ReconcilerState.IDLE
    assert pipeline.generation == 1
