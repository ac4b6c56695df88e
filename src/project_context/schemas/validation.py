"""Validation result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Kinds of structural and infrastructural validation errors."""

    MISSING_HEADER = "missing_header"
    INCORRECT_STRUCTURE = "incorrect_structure"
    INVALID_FORMAT = "invalid_format"
    CONTENT_ERROR = "content_error"


class StructuralError(BaseModel):
    """One deviation between a document and its template.

    Attributes:
        kind: Category of the deviation.
        section: Header text the error refers to, empty for content errors.
        message: Human-readable description.
    """

    kind: ErrorKind
    section: str = ""
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating a document against its template.

    Attributes:
        is_valid: True when the document reproduces the template's header skeleton.
        errors: Every deviation found, in detection order. Empty when valid.
        guidance: Ordered correction steps. Empty when valid.
        template_used: Raw template text, empty if the template could not be fetched.
    """

    is_valid: bool
    errors: list[StructuralError] = Field(default_factory=list)
    guidance: list[str] = Field(default_factory=list)
    template_used: str = ""
