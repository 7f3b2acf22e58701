"""Inline link destination and title parsing.

CommonMark 0.31.2 (section 6.3):
- Link destinations can be angle-bracket delimited or raw
- Angle-bracket destinations: no newlines, no unescaped ``<``
- Raw destinations: no spaces, no control chars, balanced parens
- Backslash escapes work in destinations and titles

All functions take an exclusive ``end`` bound so parsing never reads past
the current block.
"""

from __future__ import annotations

import re

# Pattern to find backslash escapes of ASCII punctuation
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

_WHITESPACE = " \t\n\r"


def process_escapes(text: str) -> str:
    """Replace backslash-escaped ASCII punctuation with the literal char."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


def _skip_whitespace(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def parse_link_destination(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Parse a link destination starting at ``pos``.

    Returns:
        (url, end_pos) or None if invalid
    """
    if pos >= end:
        return None

    if text[pos] == "<":
        pos += 1
        start = pos
        while pos < end:
            char = text[pos]
            if char == ">":
                return process_escapes(text[start:pos]), pos + 1
            if char in "\n\r<":
                return None
            if char == "\\" and pos + 1 < end:
                pos += 2
                continue
            pos += 1
        return None

    start = pos
    paren_depth = 0
    while pos < end:
        char = text[pos]
        if char in _WHITESPACE or ord(char) < 0x20:
            break
        if char == "(":
            paren_depth += 1
        elif char == ")":
            if paren_depth == 0:
                break
            paren_depth -= 1
        elif char == "\\" and pos + 1 < end:
            pos += 2
            continue
        pos += 1

    if paren_depth:
        return None
    return process_escapes(text[start:pos]), pos


def parse_link_title(text: str, pos: int, end: int) -> tuple[str, int] | None:
    """Parse a link title (``"..."``, ``'...'`` or ``(...)``) at ``pos``."""
    if pos >= end:
        return None
    closer = {'"': '"', "'": "'", "(": ")"}.get(text[pos])
    if closer is None:
        return None
    pos += 1
    start = pos
    while pos < end:
        char = text[pos]
        if char == closer:
            return process_escapes(text[start:pos]), pos + 1
        if char == "\\" and pos + 1 < end:
            pos += 2
            continue
        pos += 1
    return None


def parse_inline_destination(text: str, pos: int, end: int) -> tuple[str, str | None, int] | None:
    """Parse ``(url "title")`` starting at the opening parenthesis.

    Returns:
        (url, title, end_pos) or None if the text is not an inline destination
    """
    if pos >= end or text[pos] != "(":
        return None
    pos = _skip_whitespace(text, pos + 1, end)
    if pos < end and text[pos] == ")":
        return "", None, pos + 1

    destination = parse_link_destination(text, pos, end)
    if destination is None:
        return None
    url, pos = destination

    title: str | None = None
    after_url = _skip_whitespace(text, pos, end)
    if after_url > pos:
        parsed_title = parse_link_title(text, after_url, end)
        if parsed_title is not None:
            title, after_url = parsed_title
            after_url = _skip_whitespace(text, after_url, end)
    pos = after_url

    if pos >= end or text[pos] != ")":
        return None
    return url, title, pos + 1


__all__ = [
    "parse_inline_destination",
    "parse_link_destination",
    "parse_link_title",
    "process_escapes",
]
