"""Custom exceptions for project_context."""


class ProjectContextError(Exception):
    """Base exception for project_context operations."""


class PersistenceError(ProjectContextError):
    """Error while reading or writing stored context."""


class ProjectNotFoundError(PersistenceError):
    """Project directory does not exist."""


class TemplateNotFoundError(PersistenceError):
    """Neither the project nor the packaged defaults provide the template."""


class ConfigurationError(ProjectContextError):
    """Project configuration is missing an entry or is inconsistent."""


class UnknownContextTypeError(ConfigurationError):
    """Context type is not declared in the project configuration."""


class UnknownBaseTypeError(ConfigurationError):
    """Context type declares a base type with no implementation."""
