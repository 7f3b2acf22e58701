"""HTML renderer.

Renders the typed AST to CommonMark-style HTML. Output is accumulated in a
list and joined once.

Thread Safety:
HtmlRenderer keeps no per-render state on the instance. Multiple threads can
share one renderer and call render() concurrently.
"""

from __future__ import annotations

import html
from urllib.parse import quote as url_quote

from sobre.errors import RenderError
from sobre.nodes import (
    Block,
    CodeSpan,
    Document,
    Emphasis,
    HtmlInline,
    Inline,
    LineBreak,
    Link,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
)


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    CommonMark-compliant: escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def _encode_url(url: str) -> str:
    """Percent-encode a URL for an href, keeping already-encoded sequences.

    HTML entities are decoded first (``&auml;`` becomes ``ä`` then ``%C3%A4``).
    """
    decoded = html.unescape(url)
    return url_quote(decoded, safe="/:?#[]@!$&'()*+,;=-_.~%")


class HtmlRenderer:
    """Render AST to HTML.

    Usage:
        >>> doc = parse("Mail *someone@example.com*")
        >>> HtmlRenderer().render(doc)
        '<p>Mail <em><a href="mailto:someone@example.com">someone@example.com</a></em></p>\\n'

    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to an HTML string."""
        parts: list[str] = []
        for child in node.children:
            self._render_block(child, parts)
        return "".join(parts)

    def _render_block(self, block: Block, parts: list[str]) -> None:
        match block:
            case Paragraph():
                parts.append("<p>")
                self._render_inlines(block.children, parts)
                parts.append("</p>\n")
            case Document():
                for child in block.children:
                    self._render_block(child, parts)
            case _:
                raise RenderError(f"No HTML rendering for {type(block).__name__}")

    def _render_inlines(self, inlines: tuple[Inline, ...], parts: list[str]) -> None:
        for inline in inlines:
            self._render_inline(inline, parts)

    def _render_inline(self, inline: Inline, parts: list[str]) -> None:
        match inline:
            case Text():
                parts.append(html_escape(inline.content))
            case Emphasis():
                parts.append("<em>")
                self._render_inlines(inline.children, parts)
                parts.append("</em>")
            case Strong():
                parts.append("<strong>")
                self._render_inlines(inline.children, parts)
                parts.append("</strong>")
            case Strikethrough():
                parts.append("<del>")
                self._render_inlines(inline.children, parts)
                parts.append("</del>")
            case Link():
                href = html_escape(_encode_url(inline.url))
                title = f' title="{html_escape(inline.title)}"' if inline.title else ""
                parts.append(f'<a href="{href}"{title}>')
                self._render_inlines(inline.children, parts)
                parts.append("</a>")
            case CodeSpan():
                parts.append("<code>")
                parts.append(html_escape(inline.code))
                parts.append("</code>")
            case LineBreak():
                parts.append("<br />\n")
            case SoftBreak():
                parts.append("\n")
            case HtmlInline():
                parts.append(inline.html)
            case _:
                raise RenderError(f"No HTML rendering for {type(inline).__name__}")


__all__ = ["HtmlRenderer", "html_escape"]
