"""Context types: storage behaviour per document kind, validation shared."""

from __future__ import annotations

from project_context.exceptions import UnknownBaseTypeError, UnknownContextTypeError
from project_context.persistence import PersistenceHelper
from project_context.schemas import (
    BaseType,
    ContextTypeResponse,
    ErrorKind,
    PersistenceResponse,
    StructuralError,
    TypeConfig,
    ValidationResult,
)
from project_context.validator import MarkdownTemplateValidator

LOG_ENTRY_SEPARATOR = "\n\n---\n\n"


def _from_persistence(response: PersistenceResponse, content: str | None = None) -> ContextTypeResponse:
    if not response.success:
        return ContextTypeResponse(success=False, errors=response.errors)
    return ContextTypeResponse(success=True, content=content)


def _content_error(message: str, guidance: list[str]) -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        errors=[StructuralError(kind=ErrorKind.CONTENT_ERROR, message=message)],
        guidance=guidance,
    )


class BaseContextType:
    """One stored document kind of a project.

    Subclasses only decide which storage keys ``update``, ``read`` and
    ``reset`` use; template validation is shared.
    """

    def __init__(
        self,
        persistence_helper: PersistenceHelper,
        project_name: str,
        config: TypeConfig,
        *,
        context_name: str | None = None,
        content: str | None = None,
    ) -> None:
        self.persistence_helper = persistence_helper
        self.project_name = project_name
        self.config = config
        self.context_name = context_name
        self.content = content
        self.validator: MarkdownTemplateValidator | None = None
        if config.validation and config.template:
            self.validator = MarkdownTemplateValidator(persistence_helper, project_name)

    @property
    def name(self) -> str:
        return self.config.name

    async def update(self) -> ContextTypeResponse:
        raise NotImplementedError

    async def read(self) -> ContextTypeResponse:
        raise NotImplementedError

    async def reset(self) -> ContextTypeResponse:
        raise NotImplementedError

    async def validate(self) -> ValidationResult:
        """Check the pending content against this type's template."""
        if not self.config.validation:
            return ValidationResult(is_valid=True)

        if not self.config.template or self.validator is None:
            return _content_error(
                "Validation enabled but no template specified in configuration",
                [
                    "Set validation: false to disable validation",
                    'Or specify template: "template-name" to enable validation',
                ],
            )

        content = (self.content or "").strip()
        if not content:
            return _content_error(
                f"{self.name} cannot be empty",
                [
                    f"1. Add content for {self.name}",
                    "2. Ensure content is not just whitespace",
                ],
            )

        return await self.validator.validate_against_template(content, self.name)

    def _missing_content(self) -> ContextTypeResponse | None:
        if not self.content:
            return ContextTypeResponse(
                success=False, errors=[f"Content is required to update {self.name}"]
            )
        return None


class TemplatedDocumentType(BaseContextType):
    """A single document replaced on every update; the old one is archived."""

    async def update(self) -> ContextTypeResponse:
        missing = self._missing_content()
        if missing:
            return missing

        reset = await self.reset()
        if not reset.success:
            return reset

        response = await self.persistence_helper.write_context(
            self.project_name, self.name, self.name, self.content or ""
        )
        return _from_persistence(response)

    async def read(self) -> ContextTypeResponse:
        response = await self.persistence_helper.get_context(self.project_name, self.name, [self.name])
        return _from_persistence(response, "\n".join(response.data or []))

    async def reset(self) -> ContextTypeResponse:
        response = await self.persistence_helper.archive_context(self.project_name, self.name, [self.name])
        return _from_persistence(response)


class FreeformDocumentType(BaseContextType):
    """Any number of named documents with no required structure."""

    def _missing_name(self, action: str) -> ContextTypeResponse | None:
        if not self.context_name:
            return ContextTypeResponse(
                success=False,
                errors=[f"Context name is required to {action} {self.name} type"],
            )
        return None

    async def update(self) -> ContextTypeResponse:
        rejected = self._missing_content() or self._missing_name("update")
        if rejected:
            return rejected

        response = await self.persistence_helper.write_context(
            self.project_name, self.name, self.context_name or "", self.content or ""
        )
        return _from_persistence(response)

    async def read(self) -> ContextTypeResponse:
        rejected = self._missing_name("read")
        if rejected:
            return rejected

        response = await self.persistence_helper.get_context(
            self.project_name, self.name, [self.context_name or ""]
        )
        return _from_persistence(response, "\n".join(response.data or []))

    async def reset(self) -> ContextTypeResponse:
        rejected = self._missing_name("reset")
        if rejected:
            return rejected

        response = await self.persistence_helper.archive_context(
            self.project_name, self.name, [self.context_name or ""]
        )
        return _from_persistence(response)


class LogType(BaseContextType):
    """Append-only log; each update stores a new timestamped entry."""

    async def update(self) -> ContextTypeResponse:
        missing = self._missing_content()
        if missing:
            return missing

        response = await self.persistence_helper.write_context(
            self.project_name, self.name, self.name, self.content or ""
        )
        return _from_persistence(response)

    async def read(self) -> ContextTypeResponse:
        entries = await self._entry_names()
        if not entries.success:
            return _from_persistence(entries)

        response = await self.persistence_helper.get_context(
            self.project_name, self.name, entries.data or []
        )
        return _from_persistence(response, LOG_ENTRY_SEPARATOR.join(response.data or []))

    async def reset(self) -> ContextTypeResponse:
        entries = await self._entry_names()
        if not entries.success:
            return _from_persistence(entries)

        response = await self.persistence_helper.archive_context(
            self.project_name, self.name, entries.data or []
        )
        return _from_persistence(response)

    async def _entry_names(self) -> PersistenceResponse:
        """Entry names, newest first."""
        response = await self.persistence_helper.list_context_names(self.project_name, self.name)
        if not response.success:
            return response
        names = sorted(
            (name for name in response.data or [] if name.startswith(self.name)),
            reverse=True,
        )
        return PersistenceResponse(success=True, data=names)


class TemplatedLogType(LogType):
    """Append-only log whose entries must follow the type's template."""


BASE_TYPES: dict[BaseType, type[BaseContextType]] = {
    BaseType.TEMPLATED_DOCUMENT: TemplatedDocumentType,
    BaseType.FREEFORM_DOCUMENT: FreeformDocumentType,
    BaseType.TEMPLATED_LOG: TemplatedLogType,
    BaseType.LOG: LogType,
}


async def create_context_type(
    persistence_helper: PersistenceHelper,
    project_name: str,
    context_type: str,
    *,
    context_name: str | None = None,
    content: str | None = None,
) -> BaseContextType:
    """Build the context type named ``context_type`` from the project configuration.

    Raises:
        UnknownContextTypeError: If the project does not configure ``context_type``.
        UnknownBaseTypeError: If the configured base type has no implementation.
    """
    response = await persistence_helper.get_project_config(project_name)
    if not response.success or response.config is None:
        raise UnknownContextTypeError(
            f"Failed to load project configuration: {response.first_error()}"
        )

    type_config = response.config.find_type(context_type)
    if type_config is None:
        raise UnknownContextTypeError(f"Unknown context type: {context_type}")

    context_class = BASE_TYPES.get(type_config.base_type)
    if context_class is None:
        raise UnknownBaseTypeError(f"Unknown base type: {type_config.base_type}")

    return context_class(
        persistence_helper,
        project_name,
        type_config,
        context_name=context_name,
        content=content,
    )
