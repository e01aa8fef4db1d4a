"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from svgsprite.models.events import FileEvent


class EventsRequest(BaseModel):
    events: list[FileEvent] = Field(..., description="Raw watcher events (path, kind)")


class InjectRequest(BaseModel):
    html: str = Field(..., description="HTML document to inject the sprite into")
    position: Literal["body-first", "body-last"] | None = Field(
        default=None,
        description="body-first or body-last; defaults to the configured inject option",
    )
