"""Normalize renderer: AST back to Markdown source.

Writes each node in a canonical Markdown form. Extensions can add node
writers; those are consulted, in order, before the built-in writers, so an
extension can take over a node kind (for example autolinks) while declining
everything else.

Thread Safety:
Per-render state lives in a NormalizeContext created by render(). Writers
are shared and must be stateless. Register writers before sharing the
renderer across threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Self

from sobre.errors import RenderError
from sobre.nodes import (
    CodeSpan,
    Document,
    Emphasis,
    HtmlInline,
    Inline,
    LineBreak,
    Link,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
)
from sobre.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NormalizeOptions:
    """Options for NormalizeRenderer.

    Attributes:
        expand_autolinks: Write autolinks as ``[text](url)``. When False,
            autolinks are written in their compact form.

    """

    expand_autolinks: bool = True


@dataclass(slots=True)
class NormalizeContext:
    """Per-render output buffer handed to node writers."""

    renderer: NormalizeRenderer
    parts: list[str] = field(default_factory=list)

    @property
    def options(self) -> NormalizeOptions:
        return self.renderer.options

    def write(self, s: str) -> Self:
        if s:
            self.parts.append(s)
        return self

    def write_inlines(self, inlines: tuple[Inline, ...]) -> Self:
        for inline in inlines:
            self.renderer.write_node(inline, self)
        return self

    def build(self) -> str:
        return "".join(self.parts)


class NodeWriter(Protocol):
    """Extension hook for NormalizeRenderer."""

    def accept(self, ctx: NormalizeContext, node: Node) -> bool:
        """Return True to take over writing ``node``."""
        ...

    def write(self, ctx: NormalizeContext, node: Node) -> None: ...


def _code_fence(code: str) -> str:
    longest = run = 0
    for char in code:
        run = run + 1 if char == "`" else 0
        longest = max(longest, run)
    return "`" * (longest + 1)


class NormalizeRenderer:
    """Render AST back to Markdown.

    Usage:
        >>> renderer = NormalizeRenderer(NormalizeOptions(expand_autolinks=False))
        >>> renderer.render(parse("See <https://example.com>"))
        'See <https://example.com>\\n'

    """

    __slots__ = ("options", "_writers")

    def __init__(self, options: NormalizeOptions | None = None) -> None:
        self.options = options or NormalizeOptions()
        self._writers: list[NodeWriter] = []

    def add_writer(self, writer: NodeWriter) -> Self:
        """Add ``writer`` after previously added extension writers."""
        self._writers.append(writer)
        return self

    def insert_writer(self, index: int, writer: NodeWriter) -> Self:
        self._writers.insert(index, writer)
        return self

    def contains_writer(self, writer_type: type) -> bool:
        return any(isinstance(w, writer_type) for w in self._writers)

    @property
    def writers(self) -> tuple[NodeWriter, ...]:
        return tuple(self._writers)

    def render(self, node: Document) -> str:
        """Render a document to Markdown text."""
        ctx = NormalizeContext(self)
        for index, block in enumerate(node.children):
            if index:
                ctx.write("\n")
            self.write_node(block, ctx)
        return ctx.build()

    def write_node(self, node: Node, ctx: NormalizeContext) -> None:
        """Write one node, giving extension writers the first chance."""
        for writer in self._writers:
            if writer.accept(ctx, node):
                writer.write(ctx, node)
                return
        self._write_builtin(node, ctx)

    def _write_builtin(self, node: Node, ctx: NormalizeContext) -> None:
        match node:
            case Paragraph():
                ctx.write_inlines(node.children).write("\n")
            case Document():
                for block in node.children:
                    self.write_node(block, ctx)
            case Text():
                ctx.write(node.content)
            case Emphasis():
                ctx.write(node.delimiter).write_inlines(node.children).write(node.delimiter)
            case Strong():
                marker = node.delimiter * 2
                ctx.write(marker).write_inlines(node.children).write(marker)
            case Strikethrough():
                ctx.write("~~").write_inlines(node.children).write("~~")
            case Link():
                self._write_link(node, ctx)
            case CodeSpan():
                fence = _code_fence(node.code)
                padding = " " if node.code.startswith("`") or node.code.endswith("`") else ""
                ctx.write(fence).write(padding).write(node.code).write(padding).write(fence)
            case HtmlInline():
                ctx.write(node.html)
            case LineBreak():
                ctx.write("\\\n")
            case SoftBreak():
                ctx.write("\n")
            case _:
                raise RenderError(f"No normalize writer for {type(node).__name__}")

    def _write_link(self, link: Link, ctx: NormalizeContext) -> None:
        if link.is_autolink and not self.options.expand_autolinks:
            ctx.write("<").write(link.url).write(">")
            return
        if link.is_autolink:
            logger.debug("Expanding autolink %r to inline link syntax", link.url)
        ctx.write("[").write_inlines(link.children).write("](").write(link.url)
        if link.title:
            escaped = link.title.replace('"', '\\"')
            ctx.write(f' "{escaped}"')
        ctx.write(")")


__all__ = [
    "NodeWriter",
    "NormalizeContext",
    "NormalizeOptions",
    "NormalizeRenderer",
]
