"""Shared schemas for project_context."""

from project_context.schemas.persistence import ContextTypeResponse, PersistenceResponse
from project_context.schemas.project import (
    BaseType,
    FileNaming,
    ProjectConfig,
    TypeConfig,
    default_project_config,
)
from project_context.schemas.validation import ErrorKind, StructuralError, ValidationResult

__all__ = [
    "BaseType",
    "ContextTypeResponse",
    "ErrorKind",
    "FileNaming",
    "PersistenceResponse",
    "ProjectConfig",
    "StructuralError",
    "TypeConfig",
    "ValidationResult",
    "default_project_config",
]
