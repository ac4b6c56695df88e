"""Compile template headers into matchers for content headers."""

from __future__ import annotations

import re
from dataclasses import dataclass

_TEMPLATE_VARIABLE_RE = re.compile(r"{{\s*[^}]+\s*}}")
_PLACEHOLDER_LINE_RE = re.compile(r"^-\s*$")
_REGEX_SPECIAL_RE = re.compile(r"[.*+?^${}()|\[\]\\]")
_ESCAPED_VARIABLE_RE = re.compile(r"\\\{\\\{[^}]*\\\}\\\}")

_WILDCARD = ".*"
_BULLET_PATTERN = r"\-\s.*"


@dataclass(frozen=True)
class HeaderPattern:
    """Matcher derived from one template header.

    Attributes:
        header: The template header text.
        regex: Compiled pattern for flexible headers, None for literal ones.
    """

    header: str
    regex: re.Pattern[str] | None = None

    @property
    def is_flexible(self) -> bool:
        return self.regex is not None

    def matches(self, candidate: str) -> bool:
        """Return True if ``candidate`` satisfies this template header."""
        if self.regex is None:
            return candidate == self.header
        return self.regex.fullmatch(candidate) is not None


def is_flexible_header(header: str) -> bool:
    """Return True if the header holds a ``{{...}}`` variable or is a bare bullet."""
    return bool(_TEMPLATE_VARIABLE_RE.search(header) or _PLACEHOLDER_LINE_RE.match(header))


def header_to_regex(header: str) -> str:
    """Translate a flexible template header into a regular expression source.

    Characters other than template variables match literally; each variable
    becomes an unbounded wildcard and a bare bullet matches any bullet line.
    """
    if _PLACEHOLDER_LINE_RE.match(header):
        return _BULLET_PATTERN
    escaped = _REGEX_SPECIAL_RE.sub(lambda match: "\\" + match.group(0), header)
    return _ESCAPED_VARIABLE_RE.sub(_WILDCARD, escaped)


def compile_header_pattern(header: str) -> HeaderPattern:
    """Compile a template header into a literal or flexible ``HeaderPattern``."""
    if not is_flexible_header(header):
        return HeaderPattern(header=header)
    return HeaderPattern(header=header, regex=re.compile(header_to_regex(header)))
