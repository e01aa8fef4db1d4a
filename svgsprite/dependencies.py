"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from svgsprite.delivery.runtime import SpriteRuntime


def get_runtime(request: Request) -> SpriteRuntime:
    return request.app.state.runtime
