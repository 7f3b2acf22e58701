"""Tests for the core inline rules and delimiter resolution (no plugins)."""

import pytest

from sobre import Markdown
from sobre.nodes import CodeSpan, Emphasis, HtmlInline, LineBreak, Link, SoftBreak, Strong, Text


@pytest.fixture
def md() -> Markdown:
    return Markdown(plugins=[])


def inlines(md: Markdown, source: str) -> tuple:
    return md.parse(source).children[0].children


class TestEmphasis:
    """CommonMark emphasis and strong emphasis."""

    def test_emphasis(self, md: Markdown) -> None:
        assert md("*hi*") == "<p><em>hi</em></p>\n"

    def test_strong(self, md: Markdown) -> None:
        assert md("**hi**") == "<p><strong>hi</strong></p>\n"

    def test_strong_emphasis(self, md: Markdown) -> None:
        assert md("***hi***") == "<p><em><strong>hi</strong></em></p>\n"

    def test_nested(self, md: Markdown) -> None:
        assert md("*a **b** c*") == "<p><em>a <strong>b</strong> c</em></p>\n"

    def test_unmatched_opener_is_text(self, md: Markdown) -> None:
        assert md("*hi") == "<p>*hi</p>\n"

    def test_spaced_delimiter_is_text(self, md: Markdown) -> None:
        assert md("a * b * c") == "<p>a * b * c</p>\n"

    def test_intraword_underscore_is_text(self, md: Markdown) -> None:
        assert md("snake_case_name") == "<p>snake_case_name</p>\n"

    def test_intraword_asterisk(self, md: Markdown) -> None:
        assert md("un*frigging*believable") == "<p>un<em>frigging</em>believable</p>\n"

    def test_underscore_delimiter_recorded(self, md: Markdown) -> None:
        (node,) = inlines(md, "__hi__")
        assert isinstance(node, Strong)
        assert node.delimiter == "_"

    def test_emphasis_location_spans_delimiters(self, md: Markdown) -> None:
        (node,) = inlines(md, "*hi*")
        assert isinstance(node, Emphasis)
        assert (node.location.offset, node.location.end_offset) == (0, 4)


class TestLinks:
    def test_inline_link(self, md: Markdown) -> None:
        assert md("[docs](https://example.com)") == (
            '<p><a href="https://example.com">docs</a></p>\n'
        )

    def test_link_with_title(self, md: Markdown) -> None:
        assert md('[docs](/d "Read me")') == '<p><a href="/d" title="Read me">docs</a></p>\n'

    def test_link_text_with_emphasis(self, md: Markdown) -> None:
        assert md("[*docs*](/d)") == '<p><a href="/d"><em>docs</em></a></p>\n'

    def test_bracket_without_destination_is_text(self, md: Markdown) -> None:
        assert md("[not a link]") == "<p>[not a link]</p>\n"

    def test_stray_closing_bracket(self, md: Markdown) -> None:
        assert md("a ] b") == "<p>a ] b</p>\n"

    def test_links_do_not_nest(self, md: Markdown) -> None:
        assert md("[a [b](/in) c](/out)") == '<p>[a <a href="/in">b</a> c](/out)</p>\n'

    def test_link_node(self, md: Markdown) -> None:
        (node,) = inlines(md, "[x](/y)")
        assert isinstance(node, Link)
        assert node.is_autolink is False
        assert node.children == (Text(location=node.children[0].location, content="x"),)

    def test_uri_autolink(self, md: Markdown) -> None:
        (node,) = inlines(md, "<https://example.com/a>")
        assert isinstance(node, Link)
        assert node.is_autolink is True
        assert node.url == "https://example.com/a"
        assert (node.location.offset, node.location.end_offset) == (1, 22)


class TestOtherInlines:
    def test_code_span(self, md: Markdown) -> None:
        assert md("use `x < y`") == "<p>use <code>x &lt; y</code></p>\n"

    def test_code_span_strips_one_space(self, md: Markdown) -> None:
        (node,) = inlines(md, "`` `x` ``")
        assert node == CodeSpan(location=node.location, code="`x`")

    def test_unmatched_backticks(self, md: Markdown) -> None:
        assert md("``a`") == "<p>``a`</p>\n"

    def test_inline_html(self, md: Markdown) -> None:
        (open_tag, text, close_tag) = inlines(md, "<span>x</span>")
        assert open_tag == HtmlInline(location=open_tag.location, html="<span>")
        assert close_tag == HtmlInline(location=close_tag.location, html="</span>")
        assert text.content == "x"

    def test_html_comment(self, md: Markdown) -> None:
        assert md("a <!-- note --> b") == "<p>a <!-- note --> b</p>\n"

    def test_escaped_punctuation(self, md: Markdown) -> None:
        assert md(r"\*not em\*") == "<p>*not em*</p>\n"

    def test_backslash_before_letter_kept(self, md: Markdown) -> None:
        assert md(r"a\b") == "<p>a\\b</p>\n"

    def test_soft_break(self, md: Markdown) -> None:
        nodes = inlines(md, "a\nb")
        assert isinstance(nodes[1], SoftBreak)

    def test_hard_break_from_spaces(self, md: Markdown) -> None:
        nodes = inlines(md, "a  \nb")
        assert nodes[0].content == "a"
        assert isinstance(nodes[1], LineBreak)

    def test_hard_break_from_backslash(self, md: Markdown) -> None:
        assert md("a\\\nb") == "<p>a<br />\nb</p>\n"

    def test_leading_spaces_on_continuation_dropped(self, md: Markdown) -> None:
        assert md("a\n   b") == "<p>a\nb</p>\n"

    def test_text_escaped(self, md: Markdown) -> None:
        assert md('a & b < c "q"') == "<p>a &amp; b &lt; c &quot;q&quot;</p>\n"


class TestStrikethrough:
    def test_disabled_by_default(self, md: Markdown) -> None:
        assert md("~~x~~") == "<p>~~x~~</p>\n"

    def test_enabled(self) -> None:
        md = Markdown(plugins=["strikethrough"])
        assert md("~~x~~") == "<p><del>x</del></p>\n"

    def test_single_and_triple_tildes_are_text(self) -> None:
        md = Markdown(plugins=["strikethrough"])
        assert md("~x~ ~~~y~~~") == "<p>~x~ ~~~y~~~</p>\n"
