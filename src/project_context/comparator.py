"""Diff a document's header outline against its template's outline."""

from __future__ import annotations

from project_context.outline import HeaderOutline
from project_context.patterns import HeaderPattern, compile_header_pattern
from project_context.schemas import ErrorKind, StructuralError


def compare_outlines(content: HeaderOutline, template: HeaderOutline) -> list[StructuralError]:
    """Return every structural deviation of ``content`` from ``template``.

    Missing headers come first (template order), then level mismatches
    (template order), then headers absent from the template (content order).
    An empty list means the content matches the template.
    """
    patterns = {header: compile_header_pattern(header) for header in template.headers}

    errors: list[StructuralError] = []
    errors.extend(_find_missing_headers(content, template, patterns))
    errors.extend(_find_level_mismatches(content, template, patterns))
    errors.extend(_find_unexpected_headers(content, template, patterns))
    return errors


def _find_missing_headers(
    content: HeaderOutline,
    template: HeaderOutline,
    patterns: dict[str, HeaderPattern],
) -> list[StructuralError]:
    errors: list[StructuralError] = []
    for required in template.headers:
        pattern = patterns[required]
        if any(pattern.matches(found) for found in content.headers):
            continue
        errors.append(
            StructuralError(
                kind=ErrorKind.MISSING_HEADER,
                section=required,
                message=f'Missing required header: "{required}"',
            )
        )
    return errors


def _find_level_mismatches(
    content: HeaderOutline,
    template: HeaderOutline,
    patterns: dict[str, HeaderPattern],
) -> list[StructuralError]:
    errors: list[StructuralError] = []
    for template_header, expected_depth in template.depth_of.items():
        pattern = patterns[template_header]
        candidates = [
            (found, depth) for found, depth in content.depth_of.items() if pattern.matches(found)
        ]
        if not candidates:
            # Reported as missing already.
            continue
        # A wildcard header also matches headers at other levels; one in place is enough.
        if any(depth == expected_depth for _, depth in candidates):
            continue
        found, actual_depth = candidates[0]
        errors.append(
            StructuralError(
                kind=ErrorKind.INCORRECT_STRUCTURE,
                section=found,
                message=(
                    f'Header "{found}" should be level {expected_depth} '
                    f"but found level {actual_depth}"
                ),
            )
        )
    return errors


def _find_unexpected_headers(
    content: HeaderOutline,
    template: HeaderOutline,
    patterns: dict[str, HeaderPattern],
) -> list[StructuralError]:
    errors: list[StructuralError] = []
    for found in content.headers:
        if any(pattern.matches(found) for pattern in patterns.values()):
            continue
        errors.append(
            StructuralError(
                kind=ErrorKind.INVALID_FORMAT,
                section=found,
                message=f'Unexpected header found: "{found}". This header is not in the template.',
            )
        )
    return errors
