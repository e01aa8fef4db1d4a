"""Persist the sprite to disk under a hash-templated file name."""

from __future__ import annotations

import logging
from pathlib import Path

from svgsprite.errors import WriteError
from svgsprite.models.sprite import SpriteDocument

logger = logging.getLogger(__name__)


def resolve_file_name(pattern: str, sprite_hash: str) -> str:
    return pattern.replace("[hash]", sprite_hash)


def write_sprite_file(assets_dir: str | Path, file_name: str, content: str) -> bool:
    """Write ``content`` unless the file already holds exactly the same bytes.

    Returns True when the file was written. Raises WriteError on failure.
    """
    full_path = Path(assets_dir) / file_name
    final_content = f"{content.strip()}\n"
    try:
        if full_path.is_file() and full_path.read_text(encoding="utf-8") == final_content:
            return False
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(final_content, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WriteError(full_path, str(e)) from e
    logger.info("SVG sprite saved in %s", full_path)
    return True


class SpriteFileWriter:
    """Sprite listener that keeps the on-disk artifact in sync.

    A failed write is logged and left pending; the next published sprite
    retries it. The in-memory sprite is never rolled back.
    """

    def __init__(self, assets_dir: str | Path, pattern: str) -> None:
        self.assets_dir = Path(assets_dir)
        self.pattern = pattern
        self.pending = False
        self.last_path: Path | None = None

    def __call__(self, sprite: SpriteDocument) -> None:
        self.write(sprite)

    def write(self, sprite: SpriteDocument) -> bool:
        file_name = resolve_file_name(self.pattern, sprite.hash)
        try:
            written = write_sprite_file(self.assets_dir, file_name, sprite.content)
        except WriteError as e:
            self.pending = True
            logger.error("%s", e)
            return False
        self.pending = False
        self.last_path = self.assets_dir / file_name
        return written
