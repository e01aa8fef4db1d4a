"""Combine ordered symbols → one <svg> document plus content hash."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from svgsprite.engine.cache import SymbolCache
from svgsprite.errors import CompileError
from svgsprite.models.sprite import SVG_NAMESPACE, SpriteDocument, Symbol, format_attrs

logger = logging.getLogger(__name__)

HASH_LENGTH = 8


def content_hash(content: str) -> str:
    """Short, URL-safe, fixed-length digest of the serialized sprite."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:HASH_LENGTH]


def serialize_sprite(symbols: Sequence[Symbol], attributes: Mapping[str, str] | None = None) -> str:
    root_attrs = {"xmlns": SVG_NAMESPACE, **(attributes or {})}
    defs = "".join(s.defs for s in symbols)
    defs_content = f"<defs>{defs}</defs>" if defs else ""
    body = "".join(s.markup for s in symbols)
    return f"<svg{format_attrs(root_attrs)}>{defs_content}{body}</svg>"


class SpriteAssembler:
    """Builds a SpriteDocument from files in discovery order."""

    async def assemble(
        self,
        files: Sequence[Path],
        cache: SymbolCache,
        attributes: Mapping[str, str] | None = None,
    ) -> SpriteDocument:
        # All compiles run concurrently; gather keeps discovery order
        results = await asyncio.gather(*(cache.get(f) for f in files), return_exceptions=True)

        symbols: list[Symbol] = []
        for path, result in zip(files, results):
            if isinstance(result, CompileError):
                logger.warning("%s", result)
                continue
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Error reading or processing SVG file: %s: %s", path, result)
                continue
            symbols.append(result)

        if not symbols:
            logger.warning("No SVG symbols were generated.")

        content = serialize_sprite(symbols, attributes)
        sprite = SpriteDocument(content=content, hash=content_hash(content), symbols=tuple(symbols))
        logger.info("Assembled sprite: %d/%d symbols, hash %s", len(symbols), len(files), sprite.hash)
        return sprite
