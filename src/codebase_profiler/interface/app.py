"""HTTP surface of the profiler: ``create_app`` wires routes, handlers and the worker pool."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from codebase_profiler.interface.dependencies import shutdown, startup
from codebase_profiler.interface.error_handlers import register_error_handlers
from codebase_profiler.interface.routes import router

API_TITLE = "Codebase Profiler"
API_VERSION = "1.0.0"
API_DESCRIPTION = (
    "Takes a list of source files and returns the detected languages, "
    "frameworks, project archetype and tooling, together with code "
    "quality and security-risk metrics."
)


@asynccontextmanager
async def _worker_pool(app: FastAPI) -> AsyncIterator[None]:
    """Open the per-file thread pool on startup; close it even if serving fails."""
    await startup()
    try:
        yield
    finally:
        await shutdown()


def create_app() -> FastAPI:
    """A fresh profiler app serving ``POST /analyze`` and ``GET /health``."""
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description=API_DESCRIPTION,
        lifespan=_worker_pool,
    )
    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
