"""Delimiter resolution and AST construction for one block.

Runs after the inline processor has scanned the whole block. Each scope
(the block's top level, or the text of a resolved link) is flattened into a
sequence of AST nodes and delimiter runs, then the CommonMark emphasis
algorithm pairs runs into Emphasis, Strong and Strikethrough nodes.

See: https://spec.commonmark.org/0.31.2/#emphasis-and-strong-emphasis
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from sobre.location import SourceLocation
from sobre.nodes import (
    CodeSpan,
    Emphasis,
    HtmlInline,
    Inline,
    LineBreak,
    Link,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
)
from sobre.parsing.inline.tokens import (
    CodeSpanToken,
    EmphasisDelimiterToken,
    HtmlTagToken,
    InlineTree,
    LineBreakToken,
    LinkBracketToken,
    LinkToken,
    LiteralToken,
)


@dataclass(slots=True)
class _DelimiterRun:
    """Delimiter run on the resolution list; ``count`` shrinks as it matches."""

    char: str
    count: int
    original: int
    can_open: bool
    can_close: bool
    location: SourceLocation


type _Item = Inline | _DelimiterRun


def build_inlines(tree: InlineTree) -> tuple[Inline, ...]:
    """Build the block's inline AST from its token tree."""
    return _build_scope(tree, tree.roots())


def _build_scope(tree: InlineTree, handles: tuple[int, ...]) -> tuple[Inline, ...]:
    items: list[_Item] = []
    _flatten(tree, handles, items)
    return _resolve_emphasis(items)


def _flatten(tree: InlineTree, handles: tuple[int, ...], items: list[_Item]) -> None:
    for handle in handles:
        token = tree[handle]
        match token:
            case LiteralToken(content=content, location=location):
                if content:
                    items.append(Text(location=location, content=content))
            case EmphasisDelimiterToken():
                items.append(
                    _DelimiterRun(
                        char=token.char,
                        count=token.run_length,
                        original=token.run_length,
                        can_open=token.can_open,
                        can_close=token.can_close,
                        location=token.location,
                    )
                )
                _flatten(tree, tree.children(handle), items)
            case LinkBracketToken(is_open=is_open, location=location):
                # Unresolved bracket: plain text followed by whatever it enclosed
                items.append(Text(location=location, content="[" if is_open else "]"))
                _flatten(tree, tree.children(handle), items)
            case LinkToken(url=url, title=title, is_autolink=is_autolink, location=location):
                items.append(
                    Link(
                        location=location,
                        url=url,
                        title=title,
                        children=_build_scope(tree, tree.children(handle)),
                        is_autolink=is_autolink,
                    )
                )
            case HtmlTagToken(raw=raw, location=location):
                items.append(HtmlInline(location=location, html=raw))
            case CodeSpanToken(code=code, location=location):
                items.append(CodeSpan(location=location, code=code))
            case LineBreakToken(hard=hard, location=location):
                items.append(LineBreak(location=location) if hard else SoftBreak(location=location))
            case _:
                assert_never(token)


def _find_opener(items: list[_Item], closer_idx: int, closer: _DelimiterRun) -> int | None:
    for idx in range(closer_idx - 1, -1, -1):
        opener = items[idx]
        if not isinstance(opener, _DelimiterRun):
            continue
        if opener.char != closer.char or not opener.can_open or opener.count == 0:
            continue
        # CommonMark "rule of three" for runs that can both open and close
        if (
            (opener.can_close or closer.can_open)
            and (opener.original + closer.original) % 3 == 0
            and not (opener.original % 3 == 0 and closer.original % 3 == 0)
        ):
            continue
        return idx
    return None


def _wrap(
    opener: _DelimiterRun, closer: _DelimiterRun, used: int, children: tuple[Inline, ...]
) -> Inline:
    location = opener.location.span_to(closer.location)
    if opener.char == "~":
        return Strikethrough(location=location, children=children)
    delimiter = "_" if opener.char == "_" else "*"
    if used == 2:
        return Strong(location=location, children=children, delimiter=delimiter)
    return Emphasis(location=location, children=children, delimiter=delimiter)


def _resolve_emphasis(items: list[_Item]) -> tuple[Inline, ...]:
    """Pair delimiter runs in place, wrapping the nodes between them."""
    idx = 0
    while idx < len(items):
        closer = items[idx]
        if not isinstance(closer, _DelimiterRun) or not closer.can_close or closer.count == 0:
            idx += 1
            continue

        opener_idx = _find_opener(items, idx, closer)
        if opener_idx is None:
            idx += 1
            continue

        opener = items[opener_idx]
        assert isinstance(opener, _DelimiterRun)
        used = 2 if opener.count >= 2 and closer.count >= 2 else 1
        opener.count -= used
        closer.count -= used

        # Runs between opener and closer can no longer match: they become text
        node = _wrap(opener, closer, used, _finish(items[opener_idx + 1 : idx]))
        items[opener_idx + 1 : idx] = [node]
        idx = opener_idx + 2

        if opener.count == 0:
            del items[opener_idx]
            idx -= 1
        if closer.count == 0:
            del items[idx]

    return _finish(items)


def _finish(items: list[_Item]) -> tuple[Inline, ...]:
    """Turn leftover runs into text and merge adjacent text nodes."""
    result: list[Inline] = []
    for item in items:
        if isinstance(item, _DelimiterRun):
            if item.count == 0:
                continue
            item = Text(location=item.location, content=item.char * item.count)
        if isinstance(item, Text) and result and isinstance(result[-1], Text):
            previous = result[-1]
            result[-1] = Text(
                location=previous.location.span_to(item.location),
                content=previous.content + item.content,
            )
            continue
        result.append(item)
    return tuple(result)


__all__ = ["build_inlines"]
