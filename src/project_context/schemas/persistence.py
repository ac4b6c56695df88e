"""Persistence and context-type response models."""

from __future__ import annotations

from pydantic import BaseModel

from project_context.schemas.project import ProjectConfig


class PersistenceResponse(BaseModel):
    """Result of a persistence operation.

    Attributes:
        success: Whether the operation succeeded.
        data: Payload strings (file contents or names), if any.
        errors: Failure reasons when ``success`` is False.
        config: Project configuration, set by ``get_project_config`` only.
    """

    success: bool
    data: list[str] | None = None
    errors: list[str] | None = None
    config: ProjectConfig | None = None

    def first_error(self, default: str = "Unknown error") -> str:
        """Return the first error message, or ``default`` when there is none."""
        if self.errors:
            return self.errors[0]
        return default

    def error_message(self, default: str = "Unknown error") -> str:
        """Return every error message joined with ``", "``, or ``default``."""
        if self.errors:
            return ", ".join(self.errors)
        return default


class ContextTypeResponse(BaseModel):
    """Result of a read, update, or reset on a context type."""

    success: bool
    content: str | None = None
    errors: list[str] | None = None
