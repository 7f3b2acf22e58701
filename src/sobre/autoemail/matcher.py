"""Email-shaped token matching at a fixed position.

The matcher is anchored: it only ever looks at text starting exactly at the
given offset and never searches forward.

Grammar (case-insensitive, ASCII only)::

    ["<"] ["mailto:"] local "@" label ("." label)* "." alpha-label [">"]

    local       = [A-Za-z0-9._-]+
    label       = [a-z0-9-]+
    alpha-label = [a-z]+

A leading ``<`` requires a ``>`` right after the address; without it the
whole match fails. Trailing sentence punctuation needs no special handling
because the final label must be alphabetic.

"""

from __future__ import annotations

import re
from dataclasses import dataclass

_EMAIL_RE = re.compile(
    r"<?(?:mailto:)?([A-Za-z0-9._-]+@[a-z0-9-]+(?:\.[a-z0-9-]+)*\.[a-z]+)",
    re.IGNORECASE | re.ASCII,
)


@dataclass(frozen=True, slots=True)
class EmailMatch:
    """Result of a successful match.

    Attributes:
        email_address: The bare address, without ``<``, ``mailto:`` or ``>``.
        consumed_length: Characters claimed from the start offset, including
            any decoration.
        was_bracketed: Whether the address was written as ``<...>``.
        address_offset: Distance from the start offset to the address.

    """

    email_address: str
    consumed_length: int
    was_bracketed: bool
    address_offset: int


def match_email(text: str, start: int, end: int | None = None) -> EmailMatch | None:
    """Match an email token at ``text[start]``.

    Args:
        text: Source text
        start: Offset to anchor the match at
        end: Exclusive bound (defaults to ``len(text)``)

    Returns:
        EmailMatch, or None when no email-shaped token starts at ``start``.

    Example:
        >>> match_email("<me@example.com> hi", 0)
        EmailMatch(email_address='me@example.com', consumed_length=16, was_bracketed=True, address_offset=1)
        >>> match_email("mail me@example.com", 0) is None
        True
    """
    if end is None:
        end = len(text)
    found = _EMAIL_RE.match(text, start, end)
    if found is None:
        return None

    length = found.end() - start
    was_bracketed = text[start] == "<"
    if was_bracketed:
        if found.end() >= end or text[found.end()] != ">":
            return None
        length += 1

    return EmailMatch(
        email_address=found.group(1),
        consumed_length=length,
        was_bracketed=was_bracketed,
        address_offset=found.start(1) - start,
    )


__all__ = ["EmailMatch", "match_email"]
