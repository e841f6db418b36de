"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi import Request
from fastapi.responses import JSONResponse

import trivia.runtime as runtime
from trivia.api.http import api_error
from trivia.api.http import handle_http_exception
from trivia.api.routers.channels import router as channels_router
from trivia.game.orchestrator import GameIntegrityError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    runtime.startup()
    try:
        yield
    finally:
        runtime.shutdown()


app = FastAPI(lifespan=lifespan)
app.include_router(channels_router)


@app.exception_handler(HTTPException)
async def handle_http_exception_route(request: Request, exc: HTTPException) -> JSONResponse:
    """Adapter used by FastAPI exception handling."""
    return await handle_http_exception(request, exc)


@app.exception_handler(GameIntegrityError)
async def handle_integrity_fault(_: Request, exc: GameIntegrityError) -> JSONResponse:
    """Score and turn disagree; surface to operators instead of retrying."""
    logger.critical("integrity fault channel=%s winner=%s", exc.channel_id, exc.winner_id)
    return JSONResponse(
        status_code=500,
        content=api_error(
            code="GAME_INTEGRITY_FAULT",
            message="game state needs operator attention",
            detail={"channel_id": exc.channel_id},
        ),
    )


def run() -> None:
    """Serve the app with uvicorn using configured host/port."""
    import uvicorn

    from trivia.core.config import load_settings

    settings = load_settings()
    uvicorn.run(app, host=settings.trivia_app_host, port=settings.trivia_app_port)


__all__ = ["app", "lifespan", "run"]
