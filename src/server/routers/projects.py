"""Project endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from project_context.utils.logging_config import get_logger
from server.dependencies import PersistenceDep
from server.models import (
    ContextTypeListResponse,
    ContextTypeSummary,
    CreateProjectRequest,
    MessageResponse,
    ProjectListResponse,
    TemplatesResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
async def list_projects(persistence: PersistenceDep) -> ProjectListResponse:
    """List every stored project."""
    response = await persistence.list_projects()
    if not response.success:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=response.first_error())
    return ProjectListResponse(projects=response.data or [])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_project(request: CreateProjectRequest, persistence: PersistenceDep) -> MessageResponse:
    """Create a project directory; creating an existing project is a no-op."""
    response = await persistence.init_project(request.project_name)
    if not response.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=response.first_error())
    return MessageResponse(message=f"Project '{request.project_name}' created")


@router.get("/{project_name}/context-types", response_model=ContextTypeListResponse)
async def list_context_types(project_name: str, persistence: PersistenceDep) -> ContextTypeListResponse:
    """List the context types configured for a project."""
    response = await persistence.get_project_config(project_name)
    if not response.success or response.config is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=response.first_error())

    summaries = [
        ContextTypeSummary(
            name=type_config.name,
            base_type=type_config.base_type.value,
            description=type_config.description,
            template=type_config.template,
            file_naming=type_config.file_naming.value,
            validation=type_config.validation,
        )
        for type_config in response.config.context_types
    ]
    return ContextTypeListResponse(project_name=project_name, context_types=summaries)


@router.get("/{project_name}/templates", response_model=TemplatesResponse)
async def get_project_templates(project_name: str, persistence: PersistenceDep) -> TemplatesResponse:
    """Return the template of every templated context type of a project."""
    config_response = await persistence.get_project_config(project_name)
    if not config_response.success or config_response.config is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=config_response.first_error())

    templates: dict[str, str] = {}
    for type_config in config_response.config.context_types:
        if not type_config.template:
            continue
        response = await persistence.get_template(project_name, type_config.name)
        if not response.success or not response.data:
            logger.warning(
                "Template unavailable",
                extra={"project_name": project_name, "context_type": type_config.name},
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Failed to retrieve template for {type_config.name}: {response.first_error()}",
            )
        templates[type_config.name] = response.data[0]

    return TemplatesResponse(project_name=project_name, templates=templates)
