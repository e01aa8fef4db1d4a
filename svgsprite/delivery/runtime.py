"""Wires the pipeline, reconciler and delivery adapters together."""

from __future__ import annotations

import logging
from pathlib import Path

from svgsprite.delivery.html import inject_sprite
from svgsprite.delivery.rebuild import EntryToucher, ReloadBroadcaster
from svgsprite.delivery.virtual_module import VirtualModule
from svgsprite.delivery.writer import SpriteFileWriter, resolve_file_name
from svgsprite.engine.pipeline import SpritePipeline, create_pipeline
from svgsprite.engine.reconciler import ChangeReconciler
from svgsprite.engine.scheduler import Scheduler
from svgsprite.models.events import FileEvent
from svgsprite.models.options import SpriteOptions
from svgsprite.models.sprite import SpriteDocument
from svgsprite.svg.optimizer import Optimizer

logger = logging.getLogger(__name__)


class SpriteRuntime:
    """One configured sprite: engine plus every consumer of its output."""

    def __init__(
        self,
        options: SpriteOptions,
        optimizer: Optimizer | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.options = options
        self.pipeline: SpritePipeline = create_pipeline(options, optimizer=optimizer)
        self.reconciler = ChangeReconciler(
            self.pipeline,
            debounce=options.debounce_ms / 1000,
            scheduler=scheduler,
        )
        self.virtual_module = VirtualModule(self.pipeline)
        self.broadcaster = ReloadBroadcaster()
        self.writer: SpriteFileWriter | None = None
        self.entry: EntryToucher | None = None
        self.started = False

    async def start(self) -> SpriteDocument:
        """Run the first build, then attach the on-update consumers.

        Configuration and discovery errors propagate from here.
        """
        sprite = await self.pipeline.build()

        if self.options.file_path:
            assets_dir = Path(self.options.assets_dir)
            if not assets_dir.is_absolute() and self.options.cwd:
                assets_dir = Path(self.options.cwd) / assets_dir
            self.writer = SpriteFileWriter(assets_dir, self.options.file_path)
            self.writer.write(sprite)
            self.pipeline.on_sprite_updated(self.writer)

        if self.options.entry:
            self.entry = EntryToucher(self.pipeline.normalize_path(self.options.entry))
            self.pipeline.on_sprite_updated(self.entry)

        self.pipeline.on_sprite_updated(self.broadcaster)
        self.started = True
        return sprite

    def notify(self, event: FileEvent) -> bool:
        return self.reconciler.notify(event)

    def transform_html(self, html: str, position: str | None = None) -> str:
        sprite = self.pipeline.get_current_sprite()
        where = position or self.options.inject
        return inject_sprite(html, sprite.content, where, dom_id=self.options.svg_dom_id)

    def output_file_name(self) -> str | None:
        if not self.options.file_path or self.pipeline.current is None:
            return None
        return resolve_file_name(self.options.file_path, self.pipeline.current.hash)

    async def close(self) -> None:
        self.reconciler.close()
        await self.reconciler.wait_rebuild()
