"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from svgsprite.delivery.runtime import SpriteRuntime
from svgsprite.dependencies import get_runtime
from svgsprite.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(runtime: SpriteRuntime = Depends(get_runtime)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        sprite_ready=runtime.pipeline.current is not None,
        reconciler_state=runtime.reconciler.state.value,
    )
