"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from gitcode_stats.interface.dependencies import shutdown, startup
from gitcode_stats.interface.error_handlers import register_error_handlers
from gitcode_stats.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitCode Stats",
        version="1.0.0",
        description=(
            "Ranks a GitCode user's most-used languages across all their "
            "repositories and exposes normalized metadata for a single "
            "repository, for consumption by card renderers."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
