"""Turn structural errors into correction steps."""

from __future__ import annotations

from typing import Iterable

from project_context.outline import HeaderOutline
from project_context.schemas import ErrorKind, StructuralError

DEFAULT_HEADER_DEPTH = 2
CLOSING_INSTRUCTION = "Ensure your content follows the template structure exactly."

_GROUP_TITLES: tuple[tuple[ErrorKind, str], ...] = (
    (ErrorKind.MISSING_HEADER, "Missing required headers:"),
    (ErrorKind.INCORRECT_STRUCTURE, "Incorrect header levels:"),
    (ErrorKind.INVALID_FORMAT, "Remove unexpected headers:"),
)


def generate_correction_guidance(
    errors: Iterable[StructuralError], template: HeaderOutline
) -> list[str]:
    """Group errors by kind and render one instruction per error.

    Groups appear in the order missing, misleveled, unexpected; groups with
    no errors are left out. A closing instruction is always appended.
    """
    errors = list(errors)
    guidance: list[str] = []

    for kind, title in _GROUP_TITLES:
        group = [error for error in errors if error.kind == kind]
        if not group:
            continue
        guidance.append(title)
        guidance.extend(f"  - {_instruction(error, template)}" for error in group)

    guidance.append(CLOSING_INSTRUCTION)
    return guidance


def _instruction(error: StructuralError, template: HeaderOutline) -> str:
    if error.kind == ErrorKind.MISSING_HEADER:
        depth = template.depth_of.get(error.section) or DEFAULT_HEADER_DEPTH
        return f"Add: {'#' * depth} {error.section}"
    if error.kind == ErrorKind.INVALID_FORMAT:
        return f'Remove: "{error.section}"'
    return error.message
