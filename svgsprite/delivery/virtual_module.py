"""The sprite exposed as an importable JS module."""

from __future__ import annotations

import json

from svgsprite.engine.pipeline import SpritePipeline
from svgsprite.models.sprite import SpriteDocument

VIRTUAL_MODULE_ID = "virtual:svg-sprite"
RESOLVED_VIRTUAL_MODULE_ID = f"\0{VIRTUAL_MODULE_ID}"


def render_module(content: str) -> str:
    return f"const sprite = {json.dumps(content)}\nexport default sprite\n"


class VirtualModule:
    """Resolves the virtual id and serves module source, cached per sprite."""

    def __init__(self, pipeline: SpritePipeline) -> None:
        self._pipeline = pipeline
        self._source: str | None = None
        self.invalidations = 0
        pipeline.on_sprite_updated(self.invalidate)

    def resolve_id(self, module_id: str) -> str | None:
        if module_id == VIRTUAL_MODULE_ID:
            return RESOLVED_VIRTUAL_MODULE_ID
        return None

    def load(self, module_id: str) -> str | None:
        if module_id != RESOLVED_VIRTUAL_MODULE_ID:
            return None
        if self._source is None:
            self._source = render_module(self._pipeline.get_current_sprite().content)
        return self._source

    def invalidate(self, _sprite: SpriteDocument | None = None) -> None:
        self._source = None
        self.invalidations += 1
