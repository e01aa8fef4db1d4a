"""Sprite assembly and incremental-cache engine."""

from svgsprite.engine.assembler import SpriteAssembler, content_hash
from svgsprite.engine.cache import SymbolCache
from svgsprite.engine.discovery import IconScanner
from svgsprite.engine.pipeline import SpritePipeline, create_pipeline
from svgsprite.engine.reconciler import ChangeReconciler, ReconcilerState

__all__ = [
    "SpriteAssembler",
    "content_hash",
    "SymbolCache",
    "IconScanner",
    "SpritePipeline",
    "create_pipeline",
    "ChangeReconciler",
    "ReconcilerState",
]
