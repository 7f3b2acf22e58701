"""Tests for paragraph splitting and the Parser entry point."""

from sobre.config import ParseConfig, parse_config_context
from sobre.nodes import Link, Paragraph
from sobre.parser import Parser, iter_paragraph_spans


class TestParagraphSpans:
    def test_single_line(self) -> None:
        assert list(iter_paragraph_spans("hello")) == [(0, 5)]

    def test_blank_line_separates(self) -> None:
        source = "one\n\ntwo\nthree"
        spans = list(iter_paragraph_spans(source))
        assert [source[s:e] for s, e in spans] == ["one", "two\nthree"]

    def test_whitespace_only_line_is_blank(self) -> None:
        source = "one\n   \t\ntwo"
        assert [source[s:e] for s, e in iter_paragraph_spans(source)] == ["one", "two"]

    def test_indentation_and_trailing_space_trimmed(self) -> None:
        source = "  one  \n"
        assert list(iter_paragraph_spans(source)) == [(2, 5)]

    def test_empty_source(self) -> None:
        assert list(iter_paragraph_spans("")) == []
        assert list(iter_paragraph_spans("\n\n  \n")) == []


class TestParser:
    def test_default_config_has_no_autoemail(self) -> None:
        blocks = Parser("someone@example.com").parse()
        assert len(blocks) == 1
        assert not any(isinstance(node, Link) for node in blocks[0].children)

    def test_config_enables_autoemail(self) -> None:
        with parse_config_context(ParseConfig(autoemail_enabled=True)):
            blocks = Parser("someone@example.com").parse()
        (link,) = blocks[0].children
        assert isinstance(link, Link)
        assert link.url == "mailto:someone@example.com"

    def test_paragraph_locations(self) -> None:
        source = "first\n\n  second line"
        blocks = Parser(source, source_file="doc.md").parse()
        assert all(isinstance(block, Paragraph) for block in blocks)
        second = blocks[1].location
        assert (second.lineno, second.col_offset) == (3, 3)
        assert source[second.offset : second.end_offset] == "second line"
        assert second.source_file == "doc.md"
