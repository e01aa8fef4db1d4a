"""FastAPI app factory for the sprite dev server."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from svgsprite.config import settings
from svgsprite.delivery.runtime import SpriteRuntime
from svgsprite.errors import SpriteError
from svgsprite.models.options import SpriteOptions
from svgsprite.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.svgsprite_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(options: SpriteOptions | None = None, runtime: SpriteRuntime | None = None) -> FastAPI:
    if runtime is None:
        runtime = SpriteRuntime(options or SpriteOptions.from_settings(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not runtime.started:
            await runtime.start()
        yield
        await runtime.close()

    app = FastAPI(
        title="svgsprite",
        description="SVG sprite assembly with incremental rebuilds",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.runtime = runtime

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SpriteError)
    async def _sprite_error(request: Request, exc: SpriteError) -> JSONResponse:
        status = 503 if runtime.pipeline.current is None else 500
        body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
        return JSONResponse(status_code=status, content=body.model_dump())

    from svgsprite.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
