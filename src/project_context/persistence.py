"""Filesystem storage for project context documents and templates."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Awaitable, Callable, Protocol

from pydantic import ValidationError

from project_context.config import (
    ARCHIVE_DIR_NAME,
    CONFIG_FILE_NAME,
    CONTEXT_FILE_SUFFIX,
    PROJECT_CONTEXT_ROOT,
    PROJECT_CONTEXT_TEMPLATES_PATH,
    PROJECTS_DIR_NAME,
    TEMPLATES_DIR_NAME,
)
from project_context.exceptions import (
    PersistenceError,
    ProjectNotFoundError,
    TemplateNotFoundError,
    UnknownContextTypeError,
)
from project_context.file_utils import (
    create_dir_async,
    create_text_async,
    ensure_dir_async,
    list_files_async,
    move_async,
    read_text_async,
    utc_timestamp,
    write_text_async,
)
from project_context.schemas import (
    FileNaming,
    PersistenceResponse,
    ProjectConfig,
    TypeConfig,
    default_project_config,
)
from project_context.utils.logging_config import get_logger

logger = get_logger(__name__)

CONTEXT_NOT_FOUND = "Context not found. Have you created it using update_context yet?"
_MAX_NAME_ATTEMPTS = 1000


class PersistenceHelper(Protocol):
    """Storage operations used by context types and the validator."""

    async def get_template(self, project_name: str, context_type: str) -> PersistenceResponse: ...

    async def get_context(
        self, project_name: str, context_type: str, context_names: list[str]
    ) -> PersistenceResponse: ...

    async def write_context(
        self, project_name: str, context_type: str, context_name: str, content: str
    ) -> PersistenceResponse: ...

    async def archive_context(
        self, project_name: str, context_type: str, context_names: list[str]
    ) -> PersistenceResponse: ...

    async def list_context_names(self, project_name: str, context_type: str) -> PersistenceResponse: ...

    async def get_project_config(self, project_name: str) -> PersistenceResponse: ...


def _project_missing(project_name: str) -> str:
    return f"Project '{project_name}' does not exist. Create it first using create_project."


def _type_missing(context_type: str) -> str:
    return f"Context type '{context_type}' not found in project configuration"


class FileSystemHelper:
    """Store each project as a directory tree under ``context_root``.

    Layout::

        <root>/projects/<project>/context-config.json
        <root>/projects/<project>/<context_type>/<context_name>.md
        <root>/projects/<project>/templates/<template>.md
        <root>/projects/<project>/archive/<context_type>/<timestamp>/<file>.md

    Every operation reports failures through ``PersistenceResponse`` rather
    than raising.
    """

    def __init__(
        self,
        context_root: Path | str | None = None,
        *,
        templates_path: Path | str | None = None,
    ) -> None:
        self.context_root = Path(context_root) if context_root is not None else PROJECT_CONTEXT_ROOT
        self.templates_path = (
            Path(templates_path) if templates_path is not None else PROJECT_CONTEXT_TEMPLATES_PATH
        )
        self._config_cache: dict[str, ProjectConfig] = {}

    @property
    def projects_path(self) -> Path:
        return self.context_root / PROJECTS_DIR_NAME

    def project_path(self, project_name: str) -> Path:
        """Return the directory of ``project_name``, rejecting path traversal."""
        return _child_path(self.projects_path, project_name)

    async def init_project(self, project_name: str) -> PersistenceResponse:
        try:
            await ensure_dir_async(self.project_path(project_name))
        except (OSError, PersistenceError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])
        logger.info("Project initialized", extra={"project_name": project_name})
        return PersistenceResponse(success=True)

    async def list_projects(self) -> PersistenceResponse:
        try:
            await ensure_dir_async(self.projects_path)
            names = sorted(entry.name for entry in self.projects_path.iterdir() if entry.is_dir())
        except OSError as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])
        return PersistenceResponse(success=True, data=names)

    async def list_all_context_for_project(self, project_name: str) -> PersistenceResponse:
        """List the names of every stored context of every configured type."""
        try:
            project_path = self._existing_project_path(project_name)
            config = await self._load_config(project_name)
            names: list[str] = []
            for type_config in config.context_types:
                files = await list_files_async(project_path / type_config.name, CONTEXT_FILE_SUFFIX)
                names.extend(_context_name(path) for path in files)
        except (OSError, PersistenceError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])
        return PersistenceResponse(success=True, data=[name for name in names if name])

    async def list_context_names(self, project_name: str, context_type: str) -> PersistenceResponse:
        """List the names of the stored contexts of one type, sorted ascending."""
        try:
            project_path = self._existing_project_path(project_name)
            await self._type_config(project_name, context_type)
            files = await list_files_async(project_path / context_type, CONTEXT_FILE_SUFFIX)
        except (OSError, PersistenceError, UnknownContextTypeError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])
        return PersistenceResponse(success=True, data=sorted(_context_name(path) for path in files))

    async def get_context(
        self, project_name: str, context_type: str, context_names: list[str]
    ) -> PersistenceResponse:
        """Read the named contexts in order.

        A missing file reads as an empty string for templated types and is an
        error for freeform ones.
        """
        try:
            self._existing_project_path(project_name)
            type_config = await self._type_config(project_name, context_type)
        except (OSError, PersistenceError, UnknownContextTypeError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])

        contents: list[str] = []
        errors: list[str] = []
        for name in context_names:
            try:
                path = self._context_file_path(project_name, type_config, name)
                contents.append(await read_text_async(path))
            except FileNotFoundError:
                if type_config.is_templated:
                    contents.append("")
                else:
                    errors.append(f"{name}: {CONTEXT_NOT_FOUND}")
            except (OSError, PersistenceError) as exc:
                errors.append(f"{name}: {exc}")

        if errors:
            return PersistenceResponse(success=False, errors=errors)
        return PersistenceResponse(success=True, data=contents)

    async def write_context(
        self, project_name: str, context_type: str, context_name: str, content: str
    ) -> PersistenceResponse:
        """Write a context; timestamped types get a fresh file per write."""
        try:
            self._existing_project_path(project_name)
            type_config = await self._type_config(project_name, context_type)
            if type_config.file_naming == FileNaming.TIMESTAMPED:
                path = self._context_file_path(project_name, type_config, f"{context_name}-{utc_timestamp()}")
                await ensure_dir_async(path.parent)
                path = await _create_unique(path, lambda candidate: create_text_async(candidate, content))
            else:
                path = self._context_file_path(project_name, type_config, context_name)
                await ensure_dir_async(path.parent)
                await write_text_async(path, content)
        except (OSError, PersistenceError, UnknownContextTypeError) as exc:
            return PersistenceResponse(success=False, errors=[f"Failed to write context: {exc}"])

        logger.info(
            "Context written",
            extra={"project_name": project_name, "context_type": context_type, "file": path.name},
        )
        return PersistenceResponse(success=True, data=[_context_name(path)])

    async def get_template(self, project_name: str, context_type: str) -> PersistenceResponse:
        """Return the project's template for ``context_type``.

        The first request for a template copies the packaged default into the
        project so it can be customized there.
        """
        try:
            type_config = await self._type_config(project_name, context_type)
        except (OSError, PersistenceError, UnknownContextTypeError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])

        template_name = type_config.template or context_type
        try:
            project_template = _child_path(
                self.project_path(project_name) / TEMPLATES_DIR_NAME,
                template_name + CONTEXT_FILE_SUFFIX,
            )
            if project_template.is_file():
                return PersistenceResponse(success=True, data=[await read_text_async(project_template)])

            default_template = _child_path(self.templates_path, template_name + CONTEXT_FILE_SUFFIX)
            if not default_template.is_file():
                raise TemplateNotFoundError(f"Template '{template_name}' not found")
            template = await read_text_async(default_template)
            await ensure_dir_async(project_template.parent)
            await write_text_async(project_template, template)
        except (OSError, PersistenceError) as exc:
            return PersistenceResponse(
                success=False,
                errors=[f"Failed to load or initialize template for {context_type}: {exc}"],
            )

        logger.info(
            "Default template copied into project",
            extra={"project_name": project_name, "template": template_name},
        )
        return PersistenceResponse(success=True, data=[template])

    async def archive_context(
        self, project_name: str, context_type: str, context_names: list[str]
    ) -> PersistenceResponse:
        """Move the named contexts into a timestamped archive directory.

        Names with no stored file are skipped.
        """
        try:
            project_path = self._existing_project_path(project_name)
            type_config = await self._type_config(project_name, context_type)
        except (OSError, PersistenceError, UnknownContextTypeError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])

        archive_base = project_path / ARCHIVE_DIR_NAME / context_type / utc_timestamp()
        archive_dir: Path | None = None
        errors: list[str] = []
        archived: list[str] = []
        for name in context_names:
            try:
                source = self._context_file_path(project_name, type_config, name)
                if not source.is_file():
                    continue
                if archive_dir is None:
                    archive_dir = await _create_unique(archive_base, create_dir_async)
                await move_async(source, archive_dir / source.name)
                archived.append(name)
            except (OSError, PersistenceError) as exc:
                errors.append(f"{name}: {exc}")

        if errors:
            return PersistenceResponse(success=False, errors=errors)
        if archived:
            logger.info(
                "Contexts archived",
                extra={"project_name": project_name, "context_type": context_type, "count": len(archived)},
            )
        return PersistenceResponse(success=True, data=archived)

    async def get_project_config(self, project_name: str) -> PersistenceResponse:
        """Load ``context-config.json``, falling back to the default configuration."""
        try:
            config = await self._load_config(project_name)
        except PersistenceError as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])
        return PersistenceResponse(success=True, config=config)

    async def save_project_config(self, project_name: str, config: ProjectConfig) -> PersistenceResponse:
        """Write ``context-config.json`` for an existing project."""
        try:
            project_path = self._existing_project_path(project_name)
            payload = json.dumps(config.model_dump(mode="json", by_alias=True), indent=2)
            await write_text_async(project_path / CONFIG_FILE_NAME, payload)
        except (OSError, PersistenceError) as exc:
            return PersistenceResponse(success=False, errors=[str(exc)])
        self._config_cache[project_name] = config
        return PersistenceResponse(success=True)

    async def _load_config(self, project_name: str) -> ProjectConfig:
        cached = self._config_cache.get(project_name)
        if cached is not None:
            return cached

        config_path = self.project_path(project_name) / CONFIG_FILE_NAME
        try:
            raw = await read_text_async(config_path)
            config = ProjectConfig.model_validate(json.loads(raw))
        except FileNotFoundError:
            config = default_project_config()
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning(
                "Unreadable project configuration, using defaults",
                extra={"project_name": project_name, "error": str(exc)},
            )
            config = default_project_config()

        self._config_cache[project_name] = config
        return config

    async def _type_config(self, project_name: str, context_type: str) -> TypeConfig:
        config = await self._load_config(project_name)
        type_config = config.find_type(context_type)
        if type_config is None:
            raise UnknownContextTypeError(_type_missing(context_type))
        return type_config

    def _existing_project_path(self, project_name: str) -> Path:
        project_path = self.project_path(project_name)
        if not project_path.is_dir():
            raise ProjectNotFoundError(_project_missing(project_name))
        return project_path

    def _context_file_path(self, project_name: str, type_config: TypeConfig, context_name: str | None) -> Path:
        type_dir = self.project_path(project_name) / type_config.name
        if type_config.file_naming == FileNaming.SINGLE:
            return type_dir / f"{type_config.name}{CONTEXT_FILE_SUFFIX}"
        if not context_name:
            raise PersistenceError(f"Context name is required for {type_config.name} type")
        return _child_path(type_dir, context_name + CONTEXT_FILE_SUFFIX)


def _child_path(base: Path, name: str) -> Path:
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise PersistenceError(f"Invalid name: {name!r}")
    return base / name


async def _create_unique(path: Path, create: Callable[[Path], Awaitable[None]]) -> Path:
    """Create ``path``, or ``path`` with a ``-N`` suffix when that name is taken."""
    for attempt in range(_MAX_NAME_ATTEMPTS):
        candidate = path if attempt == 0 else path.with_name(f"{path.stem}-{attempt}{path.suffix}")
        try:
            await create(candidate)
        except FileExistsError:
            continue
        return candidate
    raise PersistenceError(f"No free name left for {path.name}")


def _context_name(path: Path) -> str:
    return path.name.removesuffix(CONTEXT_FILE_SUFFIX)
