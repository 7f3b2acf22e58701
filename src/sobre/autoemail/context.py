"""Context check: may an autolink start at the current position?

The inline pass runs before delimiters are resolved, so the check looks at
the partially built token tree instead of the final AST. Two walks start at
the most recently produced token:

Anchor walk (previous sibling first, otherwise parent):
    the first anchor tag met decides. ``</a>`` allows, ``<a ...>`` rejects,
    since a link must not be nested in an unterminated anchor. Reaching the
    top of the block allows.

Bracket walk (parents only, always to the top):
    active ``[`` counts +1, active ``]`` counts -1. A positive total means
    the position sits inside link text that may still become an explicit
    link. Emphasis delimiter characters seen on the way are recorded in
    ``pending_emphasis``.

"""

from __future__ import annotations

from typing import assert_never

from sobre.parsing.inline.tokens import (
    CodeSpanToken,
    EmphasisDelimiterToken,
    HtmlTagToken,
    LineBreakToken,
    LinkBracketToken,
    LinkToken,
    LiteralToken,
    TokenChain,
)


def is_inside_open_anchor(chain: TokenChain, current: int | None) -> bool:
    """Anchor walk: True if an unterminated ``<a ...>`` is in scope."""
    handle = current
    while handle is not None:
        token = chain[handle]
        if isinstance(token, HtmlTagToken) and token.is_anchor:
            return not token.is_closing
        previous = chain.previous_sibling(handle)
        handle = previous if previous is not None else chain.parent(handle)
    return False


def bracket_balance(chain: TokenChain, current: int | None, pending_emphasis: set[str]) -> int:
    """Bracket walk: net count of active open brackets among ``current``'s parents.

    ``current`` itself is included. Every emphasis delimiter character on the
    path is added to ``pending_emphasis``.
    """
    balance = 0
    handle = current
    while handle is not None:
        token = chain[handle]
        match token:
            case LinkBracketToken(is_active=True, is_open=is_open):
                balance += 1 if is_open else -1
            case EmphasisDelimiterToken(char=char):
                pending_emphasis.add(char)
            case (
                LinkBracketToken()
                | HtmlTagToken()
                | LiteralToken()
                | LinkToken()
                | CodeSpanToken()
                | LineBreakToken()
            ):
                pass
            case _:
                assert_never(token)
        handle = chain.parent(handle)
    return balance


def is_autolink_valid_here(
    chain: TokenChain, current: int | None, pending_emphasis: set[str]
) -> bool:
    """Check whether an autolink is syntactically allowed after ``current``.

    Args:
        chain: Token tree of the block being parsed
        current: Handle of the last produced token (None at block start)
        pending_emphasis: Scratch set receiving open emphasis characters

    Returns:
        True unless an open anchor tag or an unmatched ``[`` is in scope.
    """
    if is_inside_open_anchor(chain, current):
        return False
    # More closes than opens is not "inside a bracket": only a positive count rejects
    return bracket_balance(chain, current, pending_emphasis) <= 0


__all__ = ["bracket_balance", "is_autolink_valid_here", "is_inside_open_anchor"]
