"""project_context: store project context documents and validate their structure."""

from project_context.comparator import compare_outlines
from project_context.context_types import (
    BaseContextType,
    FreeformDocumentType,
    LogType,
    TemplatedDocumentType,
    TemplatedLogType,
    create_context_type,
)
from project_context.exceptions import (
    ConfigurationError,
    PersistenceError,
    ProjectContextError,
    ProjectNotFoundError,
    TemplateNotFoundError,
    UnknownBaseTypeError,
    UnknownContextTypeError,
)
from project_context.guidance import generate_correction_guidance
from project_context.outline import HeaderOutline, extract_outline, outline_from_markdown, parse_markdown
from project_context.patterns import HeaderPattern, compile_header_pattern
from project_context.persistence import FileSystemHelper, PersistenceHelper
from project_context.schemas import (
    ErrorKind,
    PersistenceResponse,
    ProjectConfig,
    StructuralError,
    TypeConfig,
    ValidationResult,
)
from project_context.validator import MarkdownTemplateValidator

__all__ = [
    "BaseContextType",
    "ConfigurationError",
    "ErrorKind",
    "FileSystemHelper",
    "FreeformDocumentType",
    "HeaderOutline",
    "HeaderPattern",
    "LogType",
    "MarkdownTemplateValidator",
    "PersistenceError",
    "PersistenceHelper",
    "PersistenceResponse",
    "ProjectConfig",
    "ProjectContextError",
    "ProjectNotFoundError",
    "StructuralError",
    "TemplateNotFoundError",
    "TemplatedDocumentType",
    "TemplatedLogType",
    "TypeConfig",
    "UnknownBaseTypeError",
    "UnknownContextTypeError",
    "ValidationResult",
    "compare_outlines",
    "compile_header_pattern",
    "create_context_type",
    "extract_outline",
    "generate_correction_guidance",
    "outline_from_markdown",
    "parse_markdown",
]
