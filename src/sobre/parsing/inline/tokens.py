"""Inline token tree built while a block's text is being recognized.

Tokens are NamedTuples (immutable, cheap, pattern-matchable). Structure lives
beside them in an InlineTree arena: each token is addressed by an integer
handle and the tree records its parent, previous sibling and children.
Rules read the tree through the narrow TokenChain protocol; only the inline
processor and the rules it drives append or replace entries.

Usage:
    >>> tree = InlineTree()
    >>> loc = SourceLocation(1, 1)
    >>> star = tree.append(None, EmphasisDelimiterToken("*", 1, True, False, loc), is_open=True)
    >>> text = tree.append(star, LiteralToken("hi", loc))
    >>> tree.parent(text) == star, tree.previous_sibling(text)
    (True, None)

    >>> match tree[star]:
    ...     case EmphasisDelimiterToken(char=char):
    ...         print(char)
    *

Thread Safety:
Tokens are immutable. An InlineTree belongs to one block parse.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, NamedTuple, Protocol

if TYPE_CHECKING:
    from sobre.location import SourceLocation


class HtmlTagToken(NamedTuple):
    """Raw inline HTML tag or comment.

    Attributes:
        raw: The tag exactly as written (``<a href="...">``, ``</a>``).
        tag_name: Tag name as written; empty for comments.
        is_closing: True for ``</name>`` tags.
        location: Source span of the tag.

    """

    raw: str
    tag_name: str
    is_closing: bool
    location: SourceLocation

    @property
    def type(self) -> Literal["html_tag"]:
        return "html_tag"

    @property
    def is_anchor(self) -> bool:
        """True for ``<a ...>`` and ``</a>`` tags (case-insensitive)."""
        return self.tag_name.lower() == "a"


class LinkBracketToken(NamedTuple):
    """Link bracket marker awaiting resolution.

    An open bracket stays in the tree as a container for the text that
    follows it until a ``]`` resolves it into a link or closes it as text.

    Attributes:
        is_open: True for ``[``, False for ``]``.
        is_active: False once the bracket can no longer start a link.
        location: Source span of the bracket.

    """

    is_open: bool
    is_active: bool
    location: SourceLocation

    @property
    def type(self) -> Literal["link_bracket"]:
        return "link_bracket"


class EmphasisDelimiterToken(NamedTuple):
    """Run of ``*``, ``_`` or ``~`` resolved after the block is scanned.

    Attributes:
        char: The delimiter character.
        run_length: Number of consecutive delimiter characters.
        can_open: Whether the run is left-flanking (may open emphasis).
        can_close: Whether the run is right-flanking (may close emphasis).
        location: Source span of the run.

    """

    char: str
    run_length: int
    can_open: bool
    can_close: bool
    location: SourceLocation

    @property
    def type(self) -> Literal["emphasis_delimiter"]:
        return "emphasis_delimiter"


class LiteralToken(NamedTuple):
    """Plain text."""

    content: str
    location: SourceLocation

    @property
    def type(self) -> Literal["literal"]:
        return "literal"


class LinkToken(NamedTuple):
    """Resolved link; its children hold the link text.

    Attributes:
        url: Link destination.
        title: Optional link title.
        is_autolink: True when synthesized from bare or ``<...>`` text.
        location: Source span of the visible link text for autolinks,
            of the whole construct otherwise.

    """

    url: str
    title: str | None
    is_autolink: bool
    location: SourceLocation

    @property
    def type(self) -> Literal["link"]:
        return "link"


class CodeSpanToken(NamedTuple):
    """Inline code span (content already normalized)."""

    code: str
    location: SourceLocation

    @property
    def type(self) -> Literal["code_span"]:
        return "code_span"


class LineBreakToken(NamedTuple):
    """Soft (``hard=False``) or hard line break."""

    hard: bool
    location: SourceLocation

    @property
    def type(self) -> Literal["line_break"]:
        return "line_break"


type InlineToken = (
    HtmlTagToken
    | LinkBracketToken
    | EmphasisDelimiterToken
    | LiteralToken
    | LinkToken
    | CodeSpanToken
    | LineBreakToken
)


class TokenChain(Protocol):
    """Read-only view over the token tree used by context checks."""

    def __getitem__(self, handle: int) -> InlineToken: ...

    def previous_sibling(self, handle: int) -> int | None: ...

    def parent(self, handle: int) -> int | None: ...


class InlineTree:
    """Arena of inline tokens with parent/sibling links.

    Handles are indexes into parallel lists, assigned in append order.
    ``None`` as a parent means the block's top level.

    An *open* entry is a container still accepting the text that follows it
    (an unresolved ``[`` or an emphasis run that can open).

    Complexity:
        - append(), replace(), parent(), previous_sibling(): O(1)
        - children(): O(1), returns the stored tuple view

    """

    __slots__ = ("_tokens", "_parents", "_previous", "_children", "_open", "_roots")

    def __init__(self) -> None:
        self._tokens: list[InlineToken] = []
        self._parents: list[int | None] = []
        self._previous: list[int | None] = []
        self._children: list[list[int]] = []
        self._open: list[bool] = []
        self._roots: list[int] = []

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, handle: int) -> InlineToken:
        return self._tokens[handle]

    def __repr__(self) -> str:
        return f"InlineTree(tokens={len(self._tokens)}, roots={len(self._roots)})"

    def parent(self, handle: int) -> int | None:
        return self._parents[handle]

    def previous_sibling(self, handle: int) -> int | None:
        return self._previous[handle]

    def children(self, handle: int | None) -> tuple[int, ...]:
        """Child handles of ``handle`` in order (top level for ``None``)."""
        siblings = self._roots if handle is None else self._children[handle]
        return tuple(siblings)

    def roots(self) -> tuple[int, ...]:
        return tuple(self._roots)

    def last_child(self, handle: int | None) -> int | None:
        siblings = self._roots if handle is None else self._children[handle]
        return siblings[-1] if siblings else None

    def is_open(self, handle: int) -> bool:
        return self._open[handle]

    def append(self, parent: int | None, token: InlineToken, *, is_open: bool = False) -> int:
        """Append ``token`` as the last child of ``parent``.

        Returns:
            Handle of the new entry.
        """
        siblings = self._roots if parent is None else self._children[parent]
        handle = len(self._tokens)
        self._tokens.append(token)
        self._parents.append(parent)
        self._previous.append(siblings[-1] if siblings else None)
        self._children.append([])
        self._open.append(is_open)
        siblings.append(handle)
        return handle

    def replace(self, handle: int, token: InlineToken) -> None:
        """Swap the token stored at ``handle``, keeping its position."""
        self._tokens[handle] = token

    def close(self, handle: int) -> None:
        """Stop ``handle`` from accepting further children."""
        self._open[handle] = False

    def ancestors(self, handle: int | None) -> list[int]:
        """``handle`` followed by each of its parents up to the top level."""
        chain: list[int] = []
        while handle is not None:
            chain.append(handle)
            handle = self._parents[handle]
        return chain

    def snapshot(self) -> tuple[tuple[object, ...], ...]:
        """Structural copy of the tree, for equality checks."""
        return (
            tuple(self._tokens),
            tuple(self._parents),
            tuple(self._previous),
            tuple(tuple(c) for c in self._children),
            tuple(self._open),
            tuple(self._roots),
        )


__all__ = [
    "HtmlTagToken",
    "LinkBracketToken",
    "EmphasisDelimiterToken",
    "LiteralToken",
    "LinkToken",
    "CodeSpanToken",
    "LineBreakToken",
    "InlineToken",
    "TokenChain",
    "InlineTree",
]
