"""Raw file-change events delivered by an external watcher."""

from __future__ import annotations

import enum
from pathlib import Path

from pydantic import BaseModel, Field


class EventKind(str, enum.Enum):
    ADD = "add"
    CHANGE = "change"
    REMOVE = "remove"


class FileEvent(BaseModel):
    path: Path = Field(..., description="Path of the file that changed")
    kind: EventKind = Field(default=EventKind.CHANGE, description="add, change or remove")
