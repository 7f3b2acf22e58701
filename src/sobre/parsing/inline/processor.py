"""Inline processor: drives the rule loop over one block of text.

For each position the processor tries the rules registered for the current
character, in priority order. The first rule that returns True has claimed
text; if it produced a token through ``processor.inline``, the processor
attaches it at the current insertion point. When no rule claims the
position, the processor consumes a literal run up to the next trigger
character.

The insertion point is the innermost open container (an unresolved ``[`` or
an opening emphasis run). Everything recognized after such a container is
nested inside it until a rule closes it, which is what lets context checks
find pending brackets and emphasis by walking parent links.

Thread Safety:
One InlineProcessor per block parse. Rules are shared and must keep their
per-parse state in the processor, not on themselves.

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sobre.location import SourceLocation
from sobre.parsing.cursor import TextCursor
from sobre.parsing.inline.tokens import (
    InlineToken,
    InlineTree,
    LinkBracketToken,
    LinkToken,
    LiteralToken,
)

if TYPE_CHECKING:
    from sobre.parsing.inline.registry import InlineRuleRegistry


def compute_line_starts(source: str) -> list[int]:
    """Offsets at which each line of ``source`` begins."""
    starts = [0]
    pos = source.find("\n")
    while pos != -1:
        starts.append(pos + 1)
        pos = source.find("\n", pos + 1)
    return starts


@dataclass(frozen=True, slots=True)
class InlineResult:
    """Token handed back by a rule that claimed text.

    Attributes:
        token: The new token.
        children: Tokens to append under ``token`` (e.g. link text).
        is_open: Whether ``token`` becomes the new insertion container.

    """

    token: InlineToken
    children: tuple[InlineToken, ...] = ()
    is_open: bool = False


class InlineProcessor:
    """Runs inline rules over a block and builds its InlineTree.

    Usage:
        >>> processor = InlineProcessor("Mail someone@example.com", registry)
        >>> tree = processor.process(0, 24)

    """

    __slots__ = (
        "tree",
        "inline",
        "_last",
        "_container",
        "_source",
        "_source_file",
        "_line_starts",
        "_rules",
        "_triggers",
        "_run",
        "_run_handle",
    )

    def __init__(
        self,
        source: str,
        rules: InlineRuleRegistry,
        *,
        source_file: str | None = None,
        line_starts: list[int] | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            source: Full source text (offsets refer to this string)
            rules: Rule registry to dispatch on
            source_file: Optional source file path for locations
            line_starts: Precomputed line offsets of ``source``
        """
        self.tree = InlineTree()
        self.inline: InlineResult | None = None
        self._last: int | None = None
        self._container: int | None = None
        self._source = source
        self._source_file = source_file
        self._line_starts = line_starts if line_starts is not None else compute_line_starts(source)
        self._rules = rules
        self._triggers = rules.trigger_chars()
        # Pieces of the literal at _run_handle, joined once in _flush_run
        self._run: list[str] = []
        self._run_handle: int | None = None

    # =========================================================================
    # State read by rules
    # =========================================================================

    @property
    def last(self) -> int | None:
        """Handle of the most recently produced token (None at block start)."""
        return self._last

    @property
    def container(self) -> int | None:
        """Handle of the current insertion container (None for top level)."""
        return self._container

    def source_position(self, offset: int) -> tuple[int, int]:
        """Map a source offset to a 1-indexed ``(lineno, col_offset)`` pair."""
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1

    def location(self, start: int, end: int) -> SourceLocation:
        """Source location covering ``[start, end)``."""
        lineno, col = self.source_position(start)
        return SourceLocation(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=end,
            source_file=self._source_file,
        )

    # =========================================================================
    # Rule loop
    # =========================================================================

    def process(self, start: int, end: int) -> InlineTree:
        """Recognize inline tokens in ``source[start:end]``.

        Returns:
            The populated InlineTree.
        """
        cursor = TextCursor(self._source, start, end)
        rules = self._rules
        while not cursor.is_empty:
            claimed = False
            for rule in rules.rules_for(cursor.current_char):
                self.inline = None
                if rule.match(self, cursor):
                    claimed = True
                    break
            if not claimed:
                self._consume_literal(cursor)
                continue
            if self.inline is not None:
                self._attach(self.inline)
                self.inline = None
        self._flush_run()
        return self.tree

    def _consume_literal(self, cursor: TextCursor) -> None:
        text = cursor.text
        start = cursor.start
        pos = start + 1
        triggers = self._triggers
        while pos < cursor.end and text[pos] not in triggers:
            pos += 1
        cursor.start = pos
        self._attach(InlineResult(LiteralToken(text[start:pos], self.location(start, pos))))

    def _attach(self, result: InlineResult) -> None:
        tree = self.tree
        token = result.token
        if isinstance(token, LiteralToken) and not result.children:
            previous = tree.last_child(self._container)
            if previous is not None and previous == self._last:
                prior = tree[previous]
                if (
                    isinstance(prior, LiteralToken)
                    and prior.location.end_offset == token.location.offset
                ):
                    if self._run_handle != previous:
                        self._flush_run()
                        self._run_handle = previous
                        self._run.append(prior.content)
                    self._run.append(token.content)
                    # Content stays stale until the run is flushed
                    tree.replace(
                        previous,
                        prior._replace(location=prior.location.span_to(token.location)),
                    )
                    return

        handle = tree.append(self._container, token, is_open=result.is_open)
        for child in result.children:
            tree.append(handle, child)
        self._last = handle
        if result.is_open:
            self._container = handle

    def _flush_run(self) -> None:
        handle = self._run_handle
        if handle is None:
            return
        token = self.tree[handle]
        self.tree.replace(handle, token._replace(content="".join(self._run)))
        self._run.clear()
        self._run_handle = None

    # =========================================================================
    # Tree edits used by the core rules
    # =========================================================================

    def find_open_bracket(self) -> int | None:
        """Innermost unresolved ``[`` enclosing the insertion point."""
        for handle in self.tree.ancestors(self._container):
            token = self.tree[handle]
            if isinstance(token, LinkBracketToken) and token.is_open:
                return handle
        return None

    def close_container(self, handle: int) -> None:
        """Close ``handle`` and every container nested inside it."""
        self.tree.close(handle)
        self._container = self.tree.parent(handle)
        self._last = handle

    def resolve_link(self, bracket: int, link: LinkToken) -> None:
        """Turn the open ``bracket`` into ``link``, keeping its children.

        Outer brackets are deactivated: links may not contain links.
        """
        self.tree.replace(bracket, link)
        self.close_container(bracket)
        self.deactivate_brackets(self._container)

    def deactivate_brackets(self, start: int | None) -> None:
        tree = self.tree
        for handle in tree.ancestors(start):
            token = tree[handle]
            if isinstance(token, LinkBracketToken) and token.is_open and token.is_active:
                tree.replace(handle, token._replace(is_active=False))

    def trim_trailing_spaces(self) -> None:
        """Strip trailing spaces from the last literal before a line break."""
        self._flush_run()
        handle = self._last
        if handle is None or handle != self.tree.last_child(self._container):
            return
        token = self.tree[handle]
        if not isinstance(token, LiteralToken):
            return
        content = token.content.rstrip(" ")
        if content != token.content:
            trimmed = len(token.content) - len(content)
            location = token.location
            self.tree.replace(
                handle,
                LiteralToken(
                    content,
                    SourceLocation(
                        lineno=location.lineno,
                        col_offset=location.col_offset,
                        offset=location.offset,
                        end_offset=location.end_offset - trimmed,
                        source_file=location.source_file,
                    ),
                ),
            )


__all__ = ["InlineProcessor", "InlineResult", "compute_line_starts"]
