"""Tests for HtmlRenderer."""

from dataclasses import dataclass

import pytest

from sobre.errors import RenderError
from sobre.location import SourceLocation
from sobre.nodes import (
    CodeSpan,
    Document,
    Emphasis,
    HtmlInline,
    LineBreak,
    Link,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
)
from sobre.renderers.html import HtmlRenderer, html_escape

LOC = SourceLocation(1, 1)


def render_inlines(*inlines) -> str:
    doc = Document(location=LOC, children=(Paragraph(location=LOC, children=inlines),))
    return HtmlRenderer().render(doc)


class TestHtmlEscape:
    def test_escapes_specials(self) -> None:
        assert html_escape('<a & "b">') == "&lt;a &amp; &quot;b&quot;&gt;"

    def test_single_quote_untouched(self) -> None:
        assert html_escape("it's") == "it's"


class TestInlineRendering:
    def test_text(self) -> None:
        assert render_inlines(Text(location=LOC, content="a < b")) == "<p>a &lt; b</p>\n"

    def test_emphasis_strong_strikethrough(self) -> None:
        inner = (Text(location=LOC, content="x"),)
        assert render_inlines(
            Emphasis(location=LOC, children=inner),
            Strong(location=LOC, children=inner),
            Strikethrough(location=LOC, children=inner),
        ) == "<p><em>x</em><strong>x</strong><del>x</del></p>\n"

    def test_mailto_link_not_encoded(self) -> None:
        link = Link(
            location=LOC,
            url="mailto:some.one@example.com",
            title=None,
            children=(Text(location=LOC, content="some.one@example.com"),),
            is_autolink=True,
        )
        assert render_inlines(link) == (
            '<p><a href="mailto:some.one@example.com">some.one@example.com</a></p>\n'
        )

    def test_link_url_encoded(self) -> None:
        link = Link(location=LOC, url="/a b?x=1&y=ä", title=None, children=())
        assert render_inlines(link) == '<p><a href="/a%20b?x=1&amp;y=%C3%A4"></a></p>\n'

    def test_link_title_escaped(self) -> None:
        link = Link(location=LOC, url="/", title='say "hi"', children=())
        assert render_inlines(link) == '<p><a href="/" title="say &quot;hi&quot;"></a></p>\n'

    def test_code_html_and_breaks(self) -> None:
        assert render_inlines(
            CodeSpan(location=LOC, code="<b>"),
            HtmlInline(location=LOC, html="<b>"),
            LineBreak(location=LOC),
            SoftBreak(location=LOC),
        ) == "<p><code>&lt;b&gt;</code><b><br />\n\n</p>\n"

    def test_empty_document(self) -> None:
        assert HtmlRenderer().render(Document(location=LOC, children=())) == ""

    def test_unknown_inline_raises(self) -> None:
        @dataclass(frozen=True, slots=True)
        class Mystery(Node):
            pass

        with pytest.raises(RenderError, match="No HTML rendering for Mystery"):
            render_inlines(Text(location=LOC, content="a"), Mystery(location=LOC))

    def test_unknown_block_raises(self) -> None:
        @dataclass(frozen=True, slots=True)
        class Aside(Node):
            pass

        with pytest.raises(RenderError, match="Aside"):
            HtmlRenderer().render(Document(location=LOC, children=(Aside(location=LOC),)))


class TestRendererProtocol:
    def test_builtin_renderers_share_interface(self) -> None:
        from sobre.renderers import NormalizeRenderer
        from sobre.renderers.protocol import ASTRenderer

        def render_page(renderer: ASTRenderer, doc: Document) -> str:
            return renderer.render(doc)

        doc = Document(
            location=LOC,
            children=(Paragraph(location=LOC, children=(Text(location=LOC, content="hi"),)),),
        )
        assert render_page(HtmlRenderer(), doc) == "<p>hi</p>\n"
        assert render_page(NormalizeRenderer(), doc) == "hi\n"
