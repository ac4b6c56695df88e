"""Extract the header outline of a markdown document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Protocol, Sequence

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.front_matter import front_matter_plugin

_HEADING_TYPE = "heading"
_INLINE_TYPE = "inline"
_TEXT_TYPE = "text"


class MarkdownNode(Protocol):
    """Any block or inline node of a parsed markdown tree."""

    type: str

    @property
    def children(self) -> Sequence["MarkdownNode"]: ...


@dataclass
class HeaderOutline:
    """Headers of one markdown document.

    Attributes:
        headers: Header texts in document order.
        depth_of: Header text -> heading level. A repeated header keeps its
            first-seen position but the level of its last occurrence.
        children_of: Header text -> texts of the headers nested directly below it.
    """

    headers: list[str] = field(default_factory=list)
    depth_of: dict[str, int] = field(default_factory=dict)
    children_of: dict[str, list[str]] = field(default_factory=dict)


def _create_parser() -> MarkdownIt:
    # Front matter would otherwise close as a setext heading on its "---" line.
    return MarkdownIt("commonmark").use(front_matter_plugin)


def parse_markdown(text: str) -> SyntaxTreeNode:
    """Parse markdown text into a block-level syntax tree."""
    tokens = _create_parser().parse(text)
    return SyntaxTreeNode(tokens)


def walk(node: MarkdownNode) -> Iterator[MarkdownNode]:
    """Yield ``node`` and all of its descendants, depth first, in document order."""
    yield node
    for child in node.children:
        yield from walk(child)


def heading_depth(node: SyntaxTreeNode) -> int:
    """Return the level (1-6) of a heading node."""
    return int(node.tag[1])


def heading_text(node: MarkdownNode) -> str | None:
    """Return the stripped plain text of a heading, or None if it has none.

    Only plain text children count; emphasis, code spans, links and other
    inline markup are ignored together with the text they wrap.
    """
    parts: list[str] = []
    for child in node.children:
        if child.type != _INLINE_TYPE:
            continue
        for inline in child.children:
            if inline.type == _TEXT_TYPE:
                parts.append(inline.content)
    text = "".join(parts).strip()
    return text or None


def extract_outline(tree: MarkdownNode) -> HeaderOutline:
    """Build the header outline of a parsed markdown tree."""
    outline = HeaderOutline()
    stack: list[tuple[str, int]] = []

    for node in walk(tree):
        if node.type != _HEADING_TYPE:
            continue
        text = heading_text(node)
        if not text:
            continue
        depth = heading_depth(node)

        outline.headers.append(text)
        outline.depth_of[text] = depth

        while stack and stack[-1][1] >= depth:
            stack.pop()

        if stack:
            outline.children_of.setdefault(stack[-1][0], []).append(text)
        outline.children_of.setdefault(text, [])

        stack.append((text, depth))

    return outline


def outline_from_markdown(text: str) -> HeaderOutline:
    """Parse markdown text and return its header outline."""
    return extract_outline(parse_markdown(text))
