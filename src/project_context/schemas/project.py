"""Project configuration models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BaseType(str, Enum):
    """Storage and validation behaviour a context type is built on."""

    TEMPLATED_DOCUMENT = "templated-document"
    FREEFORM_DOCUMENT = "freeform-document"
    TEMPLATED_LOG = "templated-log"
    LOG = "log"


class FileNaming(str, Enum):
    """How a context type maps context names onto files."""

    SINGLE = "single"
    NAMED = "named"
    TIMESTAMPED = "timestamped"


class TypeConfig(BaseModel):
    """Configuration of one context type in a project."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    base_type: BaseType = Field(..., alias="baseType")
    description: str = ""
    template: str | None = None
    file_naming: FileNaming = Field(..., alias="fileNaming")
    validation: bool = False

    @property
    def is_templated(self) -> bool:
        """Return True for base types whose missing files read as empty."""
        return self.base_type in (BaseType.TEMPLATED_DOCUMENT, BaseType.TEMPLATED_LOG)


class ProjectConfig(BaseModel):
    """Context types available in a project (``context-config.json``)."""

    model_config = ConfigDict(populate_by_name=True)

    context_types: list[TypeConfig] = Field(default_factory=list, alias="contextTypes")

    def find_type(self, name: str) -> TypeConfig | None:
        """Return the configuration for ``name`` or None."""
        for type_config in self.context_types:
            if type_config.name == name:
                return type_config
        return None


def default_project_config() -> ProjectConfig:
    """Configuration used when a project has no ``context-config.json``."""
    return ProjectConfig(
        context_types=[
            TypeConfig(
                base_type=BaseType.TEMPLATED_LOG,
                name="session_summary",
                description=(
                    "Append-only log of development sessions. Each entry is timestamped "
                    "and follows the session_summary template."
                ),
                template="session_summary",
                file_naming=FileNaming.TIMESTAMPED,
                validation=True,
            ),
            TypeConfig(
                base_type=BaseType.TEMPLATED_DOCUMENT,
                name="mental_model",
                description=(
                    "Single document tracking the current understanding of the technical "
                    "architecture. Replaced on update. Must follow the mental_model template."
                ),
                template="mental_model",
                file_naming=FileNaming.SINGLE,
                validation=True,
            ),
            TypeConfig(
                base_type=BaseType.TEMPLATED_DOCUMENT,
                name="features",
                description=(
                    "Single document tracking implementation status. Replaced on update. "
                    "Must follow the features template."
                ),
                template="features",
                file_naming=FileNaming.SINGLE,
                validation=True,
            ),
            TypeConfig(
                base_type=BaseType.FREEFORM_DOCUMENT,
                name="other",
                description="Arbitrary named reference documents. No template required.",
                file_naming=FileNaming.NAMED,
                validation=False,
            ),
        ]
    )
