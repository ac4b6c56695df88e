"""Context read, update, reset, and validation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from project_context.context_types import BaseContextType, create_context_type
from project_context.exceptions import ConfigurationError
from project_context.persistence import FileSystemHelper
from project_context.schemas import ValidationResult
from project_context.utils.logging_config import get_logger
from server.dependencies import PersistenceDep
from server.models import (
    ContextListResponse,
    ContextResponse,
    MessageResponse,
    UpdateContextRequest,
    ValidateRequest,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["contexts"])


async def _load_context_type(
    persistence: FileSystemHelper,
    project_name: str,
    context_type: str,
    *,
    context_name: str | None = None,
    content: str | None = None,
) -> BaseContextType:
    try:
        return await create_context_type(
            persistence,
            project_name,
            context_type,
            context_name=context_name,
            content=content,
        )
    except ConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("/projects/{project_name}/contexts", response_model=ContextListResponse)
async def list_contexts(project_name: str, persistence: PersistenceDep) -> ContextListResponse:
    """List the stored contexts of every context type in a project."""
    response = await persistence.list_all_context_for_project(project_name)
    if not response.success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=response.first_error())
    return ContextListResponse(project_name=project_name, contexts=response.data or [])


@router.get("/projects/{project_name}/contexts/{context_type}", response_model=ContextResponse)
async def get_context(
    project_name: str,
    context_type: str,
    persistence: PersistenceDep,
    context_name: str | None = None,
) -> ContextResponse:
    """Read a context; logs return all entries, newest first."""
    handler = await _load_context_type(persistence, project_name, context_type, context_name=context_name)
    response = await handler.read()
    if not response.success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="; ".join(response.errors or []))
    return ContextResponse(
        project_name=project_name,
        context_type=context_type,
        context_name=context_name,
        content=response.content or "",
    )


@router.put("/projects/{project_name}/contexts/{context_type}", response_model=MessageResponse)
async def update_context(
    project_name: str,
    context_type: str,
    request: UpdateContextRequest,
    persistence: PersistenceDep,
) -> MessageResponse | JSONResponse:
    """Validate content against the type's template and store it.

    Content that does not follow the template is rejected with **422** and
    the full ``ValidationResult`` (errors, guidance, and the template used).
    """
    handler = await _load_context_type(
        persistence,
        project_name,
        context_type,
        context_name=request.context_name,
        content=request.content,
    )

    validation = await handler.validate()
    if not validation.is_valid:
        logger.info(
            "Rejected invalid context update",
            extra={
                "project_name": project_name,
                "context_type": context_type,
                "error_count": len(validation.errors),
            },
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=validation.model_dump(mode="json"),
        )

    response = await handler.update()
    if not response.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="; ".join(response.errors or []))
    return MessageResponse(message="Context updated successfully")


@router.delete("/projects/{project_name}/contexts/{context_type}", response_model=MessageResponse)
async def reset_context(
    project_name: str,
    context_type: str,
    persistence: PersistenceDep,
    context_name: str | None = None,
) -> MessageResponse:
    """Archive the current content of a context."""
    handler = await _load_context_type(persistence, project_name, context_type, context_name=context_name)
    response = await handler.reset()
    if not response.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="; ".join(response.errors or []))
    return MessageResponse(message="Context archived")


@router.post("/validate", response_model=ValidationResult)
async def validate_content(request: ValidateRequest, persistence: PersistenceDep) -> ValidationResult:
    """Check content against a context type's template without storing it."""
    handler = await _load_context_type(
        persistence,
        request.project_name,
        request.context_type,
        content=request.content,
    )
    return await handler.validate()
