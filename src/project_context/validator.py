"""Validate document content against a stored markdown template."""

from __future__ import annotations

from typing import Protocol

from project_context.comparator import compare_outlines
from project_context.guidance import generate_correction_guidance
from project_context.outline import outline_from_markdown
from project_context.schemas import (
    ErrorKind,
    PersistenceResponse,
    StructuralError,
    ValidationResult,
)
from project_context.utils.logging_config import get_logger

logger = get_logger(__name__)

UNABLE_TO_VALIDATE = "Unable to validate content due to internal error"


class TemplateSource(Protocol):
    """The persistence operation the validator depends on."""

    async def get_template(self, project_name: str, context_type: str) -> PersistenceResponse: ...


class MarkdownTemplateValidator:
    """Check that content reproduces the header skeleton of a template.

    Each call fetches the template afresh and builds its own outlines, so one
    validator can serve concurrent validations.
    """

    def __init__(self, persistence_helper: TemplateSource, project_name: str) -> None:
        self.persistence_helper = persistence_helper
        self.project_name = project_name

    async def validate_against_template(self, content: str, context_type: str) -> ValidationResult:
        """Validate ``content`` against the template of ``context_type``.

        Never raises: fetch failures and internal faults become a single
        ``content_error``. ``template_used`` is empty only when the template
        could not be fetched.
        """
        try:
            response = await self.persistence_helper.get_template(self.project_name, context_type)
        except Exception as exc:
            logger.exception(
                "Template fetch raised",
                extra={"project_name": self.project_name, "context_type": context_type},
            )
            return _content_error(str(exc) or type(exc).__name__, template_used="")

        if not response.success or not response.data:
            logger.warning(
                "Template not available",
                extra={"project_name": self.project_name, "context_type": context_type},
            )
            return _content_error(response.error_message(), template_used="")

        template = response.data[0]

        try:
            template_outline = outline_from_markdown(template)
            content_outline = outline_from_markdown(content)
            errors = compare_outlines(content_outline, template_outline)
        except Exception as exc:
            logger.exception(
                "Structural comparison failed",
                extra={"project_name": self.project_name, "context_type": context_type},
            )
            return _content_error(str(exc) or type(exc).__name__, template_used=template)

        if not errors:
            return ValidationResult(is_valid=True, template_used=template)

        logger.debug(
            "Content does not match template",
            extra={"context_type": context_type, "error_count": len(errors)},
        )
        return ValidationResult(
            is_valid=False,
            errors=errors,
            guidance=generate_correction_guidance(errors, template_outline),
            template_used=template,
        )


def _content_error(reason: str, *, template_used: str) -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        errors=[
            StructuralError(
                kind=ErrorKind.CONTENT_ERROR,
                message=f"Validation failed: {reason}",
            )
        ],
        guidance=[UNABLE_TO_VALIDATE],
        template_used=template_used,
    )
