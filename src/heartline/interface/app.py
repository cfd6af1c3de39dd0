"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from heartline.interface.dependencies import shutdown, startup
from heartline.interface.error_handlers import register_error_handlers
from heartline.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the Model Gateway application."""
    app = FastAPI(
        title="Heartline Model Gateway",
        version="1.0.0",
        description=(
            "Relays prompts from the Heartline client to a hosted chat-completion "
            "model without exposing the upstream credential."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
