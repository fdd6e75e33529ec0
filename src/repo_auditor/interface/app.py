"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_auditor.interface.dependencies import shutdown, startup
from repo_auditor.interface.error_handlers import register_error_handlers
from repo_auditor.interface.routes import health_router, router
from repo_auditor.services.provider_dispatcher import PROVIDER_CATALOGUE


def _description() -> str:
    providers = "\n".join(f"- `{p.id.value}`: {p.label}" for p in PROVIDER_CATALOGUE)
    return (
        "Collects the Anchor program sources (`.rs` under `programs/` or "
        "`src/`) of a public GitHub repository and returns a security audit "
        "report written by the selected provider.\n\n"
        f"Providers:\n{providers}"
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared outbound HTTP client for the app's lifetime."""
    await startup()
    try:
        yield
    finally:
        await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Solana Repo Auditor",
        version="1.0.0",
        description=_description(),
        lifespan=_lifespan,
    )
    register_error_handlers(app)
    for r in (router, health_router):
        app.include_router(r)
    return app
