"""Paragraph parser producing a typed AST.

Splits the source into paragraphs at blank lines and runs the inline
processor over each one. Offsets in every token and node refer to the full
source string, so locations stay valid across paragraphs.

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from collections.abc import Iterator

from sobre.config import get_parse_config
from sobre.nodes import Block, Paragraph
from sobre.parsing.inline import InlineProcessor, build_inlines
from sobre.parsing.inline.processor import compute_line_starts
from sobre.plugins import build_inline_rules


def iter_paragraph_spans(source: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` offsets of each paragraph in ``source``.

    A paragraph is a run of non-blank lines. ``start`` skips the first
    line's indentation and ``end`` excludes trailing whitespace.
    """
    start: int | None = None
    end = 0
    pos = 0
    length = len(source)
    while pos < length:
        newline = source.find("\n", pos)
        line_end = length if newline == -1 else newline
        line = source[pos:line_end]
        if line.strip():
            if start is None:
                start = pos + (len(line) - len(line.lstrip()))
            end = pos + len(line.rstrip())
        elif start is not None:
            yield start, end
            start = None
        pos = line_end + 1
    if start is not None:
        yield start, end


class Parser:
    """Markdown parser for paragraphs of inline content.

    Usage:
        >>> parser = Parser("Mail someone@example.com\\n\\nThanks")
        >>> blocks = parser.parse()
        >>> len(blocks)
        2

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = ("_source", "_source_file", "_line_starts")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for locations
        """
        self._source = source
        self._source_file = source_file
        self._line_starts = compute_line_starts(source)

    def parse(self) -> list[Block]:
        """Parse source into a list of paragraphs."""
        rules = build_inline_rules(get_parse_config())
        blocks: list[Block] = []
        for start, end in iter_paragraph_spans(self._source):
            processor = InlineProcessor(
                self._source,
                rules,
                source_file=self._source_file,
                line_starts=self._line_starts,
            )
            tree = processor.process(start, end)
            blocks.append(
                Paragraph(location=processor.location(start, end), children=build_inlines(tree))
            )
        return blocks


__all__ = ["Parser", "iter_paragraph_spans"]
