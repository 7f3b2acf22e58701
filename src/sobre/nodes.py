"""Typed AST nodes for Sobre.

All AST nodes are frozen dataclasses with slots, so a parsed Document can be
shared across threads and matched with ``match`` statements.

Node Hierarchy:
Node (base)
├── Block
│   ├── Document
│   └── Paragraph
└── Inline
    ├── Text
    ├── Emphasis
    ├── Strong
    ├── Strikethrough
    ├── Link
    ├── CodeSpan
    ├── HtmlInline
    ├── LineBreak
    └── SoftBreak

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from sobre.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content."""

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    children: tuple[Inline, ...]
    delimiter: Literal["*", "_"] = "*"


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    children: tuple[Inline, ...]
    delimiter: Literal["*", "_"] = "*"


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Struck-out text (strikethrough plugin).

    Markdown: ~~text~~
    HTML: <del>text</del>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url "title"), <https://example.com>, or a bare address
    recognized by the autoemail plugin.
    HTML: <a href="url" title="title">text</a>

    ``is_autolink`` marks links synthesized from bare or angle-bracketed text
    rather than explicit link syntax.

    """

    url: str
    title: str | None
    children: tuple[Inline, ...]
    is_autolink: bool = False


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    code: str


@dataclass(frozen=True, slots=True)
class HtmlInline(Node):
    """Raw inline HTML (tag or comment), passed through unchanged."""

    html: str


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break (backslash or two trailing spaces before a newline)."""


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (a plain newline inside a paragraph)."""


type Inline = (
    Text | Emphasis | Strong | Strikethrough | Link | CodeSpan | HtmlInline | LineBreak | SoftBreak
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph of inline content."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node of a parsed Markdown source."""

    children: tuple[Block, ...]


type Block = Paragraph | Document


__all__ = [
    "Node",
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Link",
    "CodeSpan",
    "HtmlInline",
    "LineBreak",
    "SoftBreak",
    "Inline",
    "Paragraph",
    "Document",
    "Block",
]
