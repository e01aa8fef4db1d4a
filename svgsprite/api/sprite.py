"""/api/sprite/*: dev-time delivery of the current sprite."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse, StreamingResponse

from svgsprite.delivery.runtime import SpriteRuntime
from svgsprite.delivery.virtual_module import RESOLVED_VIRTUAL_MODULE_ID
from svgsprite.dependencies import get_runtime
from svgsprite.models.requests import EventsRequest, InjectRequest
from svgsprite.models.responses import EventAcceptedResponse, SpriteMetaResponse, SymbolIdResponse

router = APIRouter(prefix="/sprite")

# Seconds between keep-alive comments on the reload stream
_KEEPALIVE = 15.0


@router.get("")
async def get_sprite(request: Request, runtime: SpriteRuntime = Depends(get_runtime)) -> Response:
    sprite = runtime.pipeline.get_current_sprite()
    etag = f'"{sprite.hash}"'
    headers = {"ETag": etag, "Cache-Control": "no-cache"}
    if request.headers.get("if-none-match") == etag:
        return Response(status_code=304, headers=headers)
    return Response(content=sprite.content, media_type="image/svg+xml", headers=headers)


@router.get("/meta", response_model=SpriteMetaResponse)
async def get_sprite_meta(runtime: SpriteRuntime = Depends(get_runtime)) -> SpriteMetaResponse:
    sprite = runtime.pipeline.get_current_sprite()
    return SpriteMetaResponse(
        hash=sprite.hash,
        symbols=sprite.symbol_ids,
        file_name=runtime.output_file_name(),
        generation=runtime.pipeline.generation,
    )


@router.get("/module.js")
async def get_virtual_module(runtime: SpriteRuntime = Depends(get_runtime)) -> PlainTextResponse:
    source = runtime.virtual_module.load(RESOLVED_VIRTUAL_MODULE_ID)
    return PlainTextResponse(source or "", media_type="text/javascript")


@router.get("/symbol-id", response_model=SymbolIdResponse)
async def get_symbol_id(
    path: str = Query(..., description="Icon file path"),
    runtime: SpriteRuntime = Depends(get_runtime),
) -> SymbolIdResponse:
    return SymbolIdResponse(path=path, symbol_id=runtime.pipeline.get_symbol_id(path))


@router.post("/events", response_model=EventAcceptedResponse)
async def post_events(req: EventsRequest, runtime: SpriteRuntime = Depends(get_runtime)) -> EventAcceptedResponse:
    accepted = sum(1 for event in req.events if runtime.notify(event))
    return EventAcceptedResponse(
        accepted=accepted,
        ignored=len(req.events) - accepted,
        state=runtime.reconciler.state.value,
    )


@router.post("/inject", response_class=PlainTextResponse)
async def post_inject(req: InjectRequest, runtime: SpriteRuntime = Depends(get_runtime)) -> PlainTextResponse:
    return PlainTextResponse(runtime.transform_html(req.html, req.position), media_type="text/html")


async def _stream_reloads(request: Request, runtime: SpriteRuntime) -> AsyncGenerator[str, None]:
    """Yield one SSE ``reload`` event per published sprite until the client leaves."""
    queue = runtime.broadcaster.subscribe()
    try:
        sprite = runtime.pipeline.current
        hello = {"type": "connected", "hash": sprite.hash if sprite else ""}
        yield f"event: connected\ndata: {json.dumps(hello)}\n\n"
        while not await request.is_disconnected():
            try:
                message = await asyncio.wait_for(queue.get(), timeout=_KEEPALIVE)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield f"event: reload\ndata: {json.dumps(message)}\n\n"
    finally:
        runtime.broadcaster.unsubscribe(queue)


@router.get("/stream")
async def sprite_stream(request: Request, runtime: SpriteRuntime = Depends(get_runtime)) -> StreamingResponse:
    return StreamingResponse(
        _stream_reloads(request, runtime),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
