"""Core inline rules.

Each rule claims a prefix of the remaining block text or declines without
side effects. Rules are stateless and shared across parses.

Rules here:
- EmphasisRule: ``*`` and ``_`` delimiter runs (CommonMark flanking)
- StrikethroughRule: ``~~`` delimiter runs (strikethrough plugin)
- LinkBracketRule: ``[`` containers and ``]`` resolution of inline links
- AngleAutolinkRule: ``<scheme:...>`` and ``<user@host>`` autolinks
- HtmlTagRule: inline open tags, closing tags and comments
- CodeSpanRule: backtick code spans
- EscapeRule: backslash escapes and backslash hard breaks
- LineBreakRule: soft and hard line breaks

See: https://spec.commonmark.org/0.31.2/#inlines
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sobre.parsing.charsets import (
    ASCII_PUNCTUATION,
    is_unicode_punctuation,
    is_unicode_whitespace,
)
from sobre.parsing.inline.links import parse_inline_destination
from sobre.parsing.inline.processor import InlineResult
from sobre.parsing.inline.tokens import (
    CodeSpanToken,
    EmphasisDelimiterToken,
    HtmlTagToken,
    LineBreakToken,
    LinkBracketToken,
    LinkToken,
    LiteralToken,
)

if TYPE_CHECKING:
    from sobre.parsing.cursor import TextCursor
    from sobre.parsing.inline.processor import InlineProcessor


# =============================================================================
# Emphasis
# =============================================================================


def is_left_flanking(before: str, after: str) -> bool:
    """Left-flanking: not followed by whitespace, and either not followed by
    punctuation or preceded by whitespace or punctuation."""
    if is_unicode_whitespace(after):
        return False
    if not is_unicode_punctuation(after):
        return True
    return is_unicode_whitespace(before) or is_unicode_punctuation(before)


def is_right_flanking(before: str, after: str) -> bool:
    """Right-flanking: not preceded by whitespace, and either not preceded by
    punctuation or followed by whitespace or punctuation."""
    if is_unicode_whitespace(before):
        return False
    if not is_unicode_punctuation(before):
        return True
    return is_unicode_whitespace(after) or is_unicode_punctuation(after)


def _scan_run(cursor: TextCursor, char: str) -> int:
    pos = cursor.start
    while pos < cursor.end and cursor.text[pos] == char:
        pos += 1
    return pos


def _delimiter_result(
    processor: InlineProcessor, cursor: TextCursor, char: str, run_end: int
) -> InlineResult:
    before = cursor.previous_char
    after = cursor.text[run_end] if run_end < cursor.end else ""
    left = is_left_flanking(before, after)
    right = is_right_flanking(before, after)

    # Underscore may not open or close inside a word
    if char == "_":
        can_open = left and (not right or is_unicode_punctuation(before))
        can_close = right and (not left or is_unicode_punctuation(after))
    else:
        can_open = left
        can_close = right

    token = EmphasisDelimiterToken(
        char=char,
        run_length=run_end - cursor.start,
        can_open=can_open,
        can_close=can_close,
        location=processor.location(cursor.start, run_end),
    )
    return InlineResult(token, is_open=can_open)


class EmphasisRule:
    """``*`` and ``_`` runs become delimiter tokens resolved after scanning."""

    triggers = frozenset("*_")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        char = cursor.current_char
        run_end = _scan_run(cursor, char)
        processor.inline = _delimiter_result(processor, cursor, char, run_end)
        cursor.start = run_end
        return True


class StrikethroughRule:
    """``~~`` runs become strikethrough delimiters; other ``~`` runs are text."""

    triggers = frozenset("~")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        run_end = _scan_run(cursor, "~")
        if run_end - cursor.start != 2:
            token = LiteralToken(
                cursor.text[cursor.start : run_end], processor.location(cursor.start, run_end)
            )
            processor.inline = InlineResult(token)
        else:
            processor.inline = _delimiter_result(processor, cursor, "~", run_end)
        cursor.start = run_end
        return True


# =============================================================================
# Links
# =============================================================================


class LinkBracketRule:
    """``[`` opens a bracket container; ``]`` resolves it.

    On ``]`` the innermost open bracket is looked up. If it is still active
    and an inline destination ``(url "title")`` follows, the bracket becomes
    a link. Otherwise the bracket is closed as plain text and ``]`` is
    emitted as a literal.
    """

    triggers = frozenset("[]")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        start = cursor.start
        if cursor.current_char == "[":
            token = LinkBracketToken(
                is_open=True, is_active=True, location=processor.location(start, start + 1)
            )
            processor.inline = InlineResult(token, is_open=True)
            cursor.start += 1
            return True

        opener = processor.find_open_bracket()
        if opener is None:
            return False

        bracket = processor.tree[opener]
        if isinstance(bracket, LinkBracketToken) and bracket.is_active:
            parsed = parse_inline_destination(cursor.text, start + 1, cursor.end)
            if parsed is not None:
                url, title, end_pos = parsed
                location = bracket.location.span_to(processor.location(start, end_pos))
                processor.resolve_link(opener, LinkToken(url, title, False, location))
                cursor.start = end_pos
                return True

        processor.close_container(opener)
        processor.inline = InlineResult(LiteralToken("]", processor.location(start, start + 1)))
        cursor.start += 1
        return True


# =============================================================================
# Angle-bracket constructs
# =============================================================================

# CommonMark 6.5 URI autolink: scheme of 2-32 chars, then no spaces or angle brackets
_URI_AUTOLINK_RE = re.compile(r"<([A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*)>")

# CommonMark 6.5 email autolink (HTML5 valid-email grammar)
_EMAIL_AUTOLINK_RE = re.compile(
    r"<([a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*)>"
)

_TAG_NAME = r"[A-Za-z][A-Za-z0-9-]*"
_ATTRIBUTE = r"""(?:\s+[A-Za-z_:][A-Za-z0-9_.:-]*(?:\s*=\s*(?:[^\s"'=<>`]+|'[^']*'|"[^"]*"))?)"""
_OPEN_TAG_RE = re.compile(rf"<({_TAG_NAME}){_ATTRIBUTE}*\s*/?>")
_CLOSING_TAG_RE = re.compile(rf"</({_TAG_NAME})\s*>")
_COMMENT_RE = re.compile(r"<!-->|<!--->|<!--.*?-->", re.DOTALL)


class AngleAutolinkRule:
    """CommonMark autolinks: ``<https://example.com>`` and ``<me@example.com>``."""

    triggers = frozenset("<")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        start = cursor.start
        found = _URI_AUTOLINK_RE.match(cursor.text, start, cursor.end)
        url_prefix = ""
        if found is None:
            found = _EMAIL_AUTOLINK_RE.match(cursor.text, start, cursor.end)
            url_prefix = "mailto:"
        if found is None:
            return False

        target = found.group(1)
        location = processor.location(found.start(1), found.end(1))
        link = LinkToken(url_prefix + target, None, True, location)
        processor.inline = InlineResult(link, children=(LiteralToken(target, location),))
        cursor.start = found.end()
        return True


class HtmlTagRule:
    """Raw inline HTML: open tags, closing tags and comments."""

    triggers = frozenset("<")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        text, start, end = cursor.text, cursor.start, cursor.end
        is_closing = False
        found = _OPEN_TAG_RE.match(text, start, end)
        if found is None:
            found = _CLOSING_TAG_RE.match(text, start, end)
            is_closing = found is not None
        if found is None:
            found = _COMMENT_RE.match(text, start, end)
            if found is None:
                return False
            tag_name = ""
        else:
            tag_name = found.group(1)

        token = HtmlTagToken(
            raw=found.group(0),
            tag_name=tag_name,
            is_closing=is_closing,
            location=processor.location(start, found.end()),
        )
        processor.inline = InlineResult(token)
        cursor.start = found.end()
        return True


# =============================================================================
# Code spans, escapes and line breaks
# =============================================================================


def _find_code_span_close(text: str, start: int, end: int, backtick_count: int) -> int:
    """Find a closing backtick run of exactly ``backtick_count``."""
    pos = start
    while True:
        idx = text.find("`", pos, end)
        if idx == -1:
            return -1
        run_end = idx
        while run_end < end and text[run_end] == "`":
            run_end += 1
        if run_end - idx == backtick_count:
            return idx
        pos = run_end


class CodeSpanRule:
    """Backtick code spans; an unmatched backtick run is literal text."""

    triggers = frozenset("`")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        text, start, end = cursor.text, cursor.start, cursor.end
        open_end = _scan_run(cursor, "`")
        count = open_end - start

        close_pos = _find_code_span_close(text, open_end, end, count)
        if close_pos == -1:
            token = LiteralToken("`" * count, processor.location(start, open_end))
            processor.inline = InlineResult(token)
            cursor.start = open_end
            return True

        # CommonMark 6.1: line endings become spaces, one space stripped from
        # each side when both are present and the content is not all spaces
        code = text[open_end:close_pos].replace("\n", " ")
        if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip():
            code = code[1:-1]
        span_end = close_pos + count
        processor.inline = InlineResult(CodeSpanToken(code, processor.location(start, span_end)))
        cursor.start = span_end
        return True


def _skip_leading_spaces(cursor: TextCursor) -> None:
    while cursor.start < cursor.end and cursor.text[cursor.start] == " ":
        cursor.start += 1


class EscapeRule:
    """Backslash escapes of ASCII punctuation and backslash hard breaks."""

    triggers = frozenset("\\")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        start = cursor.start
        next_char = cursor.peek(1)
        if next_char == "\n":
            processor.inline = InlineResult(LineBreakToken(True, processor.location(start, start + 2)))
            cursor.start += 2
            _skip_leading_spaces(cursor)
            return True

        if next_char and next_char in ASCII_PUNCTUATION:
            content, length = next_char, 2
        else:
            content, length = "\\", 1
        processor.inline = InlineResult(LiteralToken(content, processor.location(start, start + length)))
        cursor.start += length
        return True


class LineBreakRule:
    """Newlines: hard break after two or more spaces, soft break otherwise."""

    triggers = frozenset("\n")

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        start = cursor.start
        spaces = 0
        pos = start - 1
        while pos >= cursor.origin and cursor.text[pos] == " ":
            spaces += 1
            pos -= 1

        if spaces:
            processor.trim_trailing_spaces()
        hard = spaces >= 2
        processor.inline = InlineResult(LineBreakToken(hard, processor.location(start, start + 1)))
        cursor.start += 1
        _skip_leading_spaces(cursor)
        return True


__all__ = [
    "AngleAutolinkRule",
    "CodeSpanRule",
    "EmphasisRule",
    "EscapeRule",
    "HtmlTagRule",
    "LineBreakRule",
    "LinkBracketRule",
    "StrikethroughRule",
    "is_left_flanking",
    "is_right_flanking",
]
