"""Pydantic models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def _require_text(value: str, field_name: str) -> str:
    if not value.strip():
        err = f"{field_name} cannot be empty"
        raise ValueError(err)
    return value.strip()


class CreateProjectRequest(BaseModel):
    """Request model for ``POST /api/projects``.

    Attributes
    ----------
    project_name : str
        Name of the project, e.g. ``my-project``.

    """

    project_name: str = Field(..., description="Project name")

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        """Validate that ``project_name`` is not empty."""
        return _require_text(v, "project_name")


class UpdateContextRequest(BaseModel):
    """Request model for ``PUT /api/projects/{project}/contexts/{context_type}``.

    Attributes
    ----------
    content : str
        Full markdown content of the context.
    context_name : str | None
        File name for named (freeform) context types.

    """

    content: str = Field(..., description="Markdown content")
    context_name: str | None = Field(default=None, description="Context name for named context types")

    @field_validator("context_name")
    @classmethod
    def normalize_context_name(cls, v: str | None) -> str | None:
        """Treat a blank ``context_name`` as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()


class ValidateRequest(BaseModel):
    """Request model for ``POST /api/validate``.

    Attributes
    ----------
    project_name : str
        Project whose template is used.
    context_type : str
        Context type whose template is used.
    content : str
        Markdown content to check.

    """

    project_name: str = Field(..., description="Project name")
    context_type: str = Field(..., description="Context type")
    content: str = Field(default="", description="Markdown content")

    @field_validator("project_name", "context_type")
    @classmethod
    def validate_names(cls, v: str) -> str:
        """Validate that names are not empty."""
        return _require_text(v, "name")


class ProjectListResponse(BaseModel):
    """Names of the stored projects."""

    projects: list[str] = Field(default_factory=list)


class ContextTypeSummary(BaseModel):
    """Public view of one configured context type."""

    name: str
    base_type: str
    description: str = ""
    template: str | None = None
    file_naming: str
    validation: bool


class ContextTypeListResponse(BaseModel):
    """Context types configured for a project."""

    project_name: str
    context_types: list[ContextTypeSummary] = Field(default_factory=list)


class TemplatesResponse(BaseModel):
    """Template text keyed by context type."""

    project_name: str
    templates: dict[str, str] = Field(default_factory=dict)


class ContextListResponse(BaseModel):
    """Names of the stored contexts of a project."""

    project_name: str
    contexts: list[str] = Field(default_factory=list)


class ContextResponse(BaseModel):
    """Content of one context type (all entries joined for logs)."""

    project_name: str
    context_type: str
    context_name: str | None = None
    content: str = ""


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
