"""Pipeline orchestrator: discovery, cached compiles, assembly and publication."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from svgsprite.engine.assembler import SpriteAssembler
from svgsprite.engine.cache import SymbolCache
from svgsprite.engine.discovery import IconScanner, resolve_roots
from svgsprite.errors import CompileError, SpriteError
from svgsprite.models.options import SpriteOptions
from svgsprite.models.sprite import SpriteDocument, Symbol
from svgsprite.svg.compiler import compile_symbol
from svgsprite.svg.optimizer import Optimizer, cleanup_svg, resolve_optimizer_config
from svgsprite.svg.symbol_id import make_symbol_id

logger = logging.getLogger(__name__)

SpriteListener = Callable[[SpriteDocument], None]


class SpritePipeline:
    """Owns the symbol cache and the current sprite.

    The current sprite is a single immutable value swapped on publication, so
    readers always see a matching content/hash pair.
    """

    def __init__(self, options: SpriteOptions, optimizer: Optimizer | None = None) -> None:
        self.options = options
        self.roots = resolve_roots(options.include, options.cwd)
        self.scanner = IconScanner(self.roots)
        self.optimizer = optimizer or cleanup_svg
        self.optimizer_config = resolve_optimizer_config(options.optimizer_config)
        self.cache = SymbolCache(self._load_symbol)
        self.assembler = SpriteAssembler()
        self.generation = 0
        self._current: SpriteDocument | None = None
        self._listeners: list[SpriteListener] = []

    @property
    def current(self) -> SpriteDocument | None:
        return self._current

    def get_current_sprite(self) -> SpriteDocument:
        sprite = self._current
        if sprite is None:
            raise SpriteError("Sprite has not been built yet")
        return sprite

    def get_symbol_id(self, path: str | Path) -> str:
        return make_symbol_id(self.options.symbol_id, self.normalize_path(path))

    def on_sprite_updated(self, listener: SpriteListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def normalize_path(self, path: str | Path) -> Path:
        p = Path(path)
        if not p.is_absolute():
            base = Path(self.options.cwd) if self.options.cwd else Path.cwd()
            p = base / p
        return p.resolve()

    async def build(self, changed: Iterable[str | Path] = ()) -> SpriteDocument:
        """Invalidate ``changed`` paths, rediscover, reassemble and publish."""
        start = time.perf_counter()
        self.cache.invalidate_many(self.normalize_path(p) for p in changed)

        files = await asyncio.to_thread(self.scanner.scan)
        sprite = await self.assembler.assemble(files, self.cache, self.options.sprite_attributes)
        # Symbols for files no longer discovered are dropped
        self.cache.retain(files)

        self._publish(sprite)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("Sprite build %d complete in %.0fms", self.generation, elapsed)
        return sprite

    def reset(self) -> None:
        """Forget every compiled symbol; the next build recompiles all files."""
        self.cache.clear()

    async def _load_symbol(self, path: Path) -> Symbol:
        try:
            markup = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CompileError(path, str(e)) from e
        return compile_symbol(markup, path, self.options.symbol_id, self.optimizer, self.optimizer_config)

    def _publish(self, sprite: SpriteDocument) -> None:
        self._current = sprite
        self.generation += 1
        for listener in list(self._listeners):
            try:
                listener(sprite)
            except Exception:
                logger.exception("Sprite listener %r failed", listener)


def create_pipeline(options: SpriteOptions, optimizer: Optimizer | None = None) -> SpritePipeline:
    """Factory function for creating a pipeline instance."""
    return SpritePipeline(options, optimizer=optimizer)
