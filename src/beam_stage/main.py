# src/beam_stage/main.py
"""Main entry point for the Beam application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from beam_stage.api.v1 import comments_router, posts_router, users_router
from beam_stage.core.settings import settings
from beam_stage.services.errors import BeamError
from beam_stage.services.slack import get_slack_notifier

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Posts, comments, likes and moderation",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Compress responses above the default size threshold
app.add_middleware(GZipMiddleware)

# Every router authenticates its own routes
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(BeamError)
async def handle_beam_error(request: Request, exc: BeamError) -> JSONResponse:
    """Render domain errors with their stable code."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "detail": exc.message},
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_slack_notifier().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("beam_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
