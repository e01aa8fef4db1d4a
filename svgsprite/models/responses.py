"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    sprite_ready: bool = False
    reconciler_state: str = "idle"


class SpriteMetaResponse(BaseModel):
    hash: str
    symbols: list[str] = Field(default_factory=list)
    file_name: str | None = None
    generation: int = 0


class SymbolIdResponse(BaseModel):
    path: str
    symbol_id: str


class EventAcceptedResponse(BaseModel):
    accepted: int = 0
    ignored: int = 0
    state: str = "idle"


class ErrorResponse(BaseModel):
    error: str
    detail: str = ""
