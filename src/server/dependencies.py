"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from project_context.persistence import FileSystemHelper


def get_persistence_helper(request: Request) -> FileSystemHelper:
    """Return the storage helper created with the application."""
    return request.app.state.persistence_helper


PersistenceDep = Annotated[FileSystemHelper, Depends(get_persistence_helper)]
