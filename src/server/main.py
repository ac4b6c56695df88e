"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from project_context.persistence import FileSystemHelper
from server.routers import contexts, projects


def create_app(context_root: Path | str | None = None) -> FastAPI:
    """Create the API application storing projects under ``context_root``.

    Parameters
    ----------
    context_root : Path | str | None
        Storage root. Defaults to ``PROJECT_CONTEXT_ROOT``.

    Returns
    -------
    FastAPI
        The configured application.

    """
    app = FastAPI(
        title="project-context",
        description="Store per-project context documents and validate them against markdown templates.",
    )
    app.state.persistence_helper = FileSystemHelper(context_root)
    app.include_router(projects.router)
    app.include_router(contexts.router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
