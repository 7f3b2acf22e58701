"""Auto-email inline rule.

Turns ``someone@example.com``, ``<someone@example.com>`` and
``mailto:someone@example.com`` into links, when they start a run of text:
at the beginning of the block, after whitespace, or after one of the
configured delimiter characters (``*_~(`` by default). Addresses inside an
unterminated ``<a>`` tag or inside pending ``[...]`` link text are left alone.

The rule is registered ahead of every other inline rule so it sees ``<``
before the angle-bracket autolink and raw HTML rules do.

Thread Safety:
The rule may be shared by parsers on several threads. Its scratch-set pool
is per thread.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from sobre.autoemail.cache import PendingEmphasisCache
from sobre.autoemail.context import is_autolink_valid_here
from sobre.autoemail.matcher import match_email
from sobre.parsing.charsets import EMAIL_OPENING_CHARS, WHITESPACE
from sobre.parsing.inline.processor import InlineResult
from sobre.parsing.inline.tokens import LinkToken, LiteralToken
from sobre.utils.logger import get_logger

if TYPE_CHECKING:
    from sobre.parsing.cursor import TextCursor
    from sobre.parsing.inline.processor import InlineProcessor

logger = get_logger(__name__)

DEFAULT_VALID_PREVIOUS_CHARACTERS = "*_~("


class AutoEmailRule:
    """Inline rule linking bare and bracketed email addresses.

    Attributes:
        valid_previous_characters: Characters that, besides whitespace and
            the start of the block, may directly precede an address.

    """

    triggers = EMAIL_OPENING_CHARS

    __slots__ = ("valid_previous_characters", "_local")

    def __init__(self, valid_previous_characters: str = DEFAULT_VALID_PREVIOUS_CHARACTERS) -> None:
        self.valid_previous_characters = valid_previous_characters
        self._local = threading.local()

    def __repr__(self) -> str:
        return f"AutoEmailRule(valid_previous_characters={self.valid_previous_characters!r})"

    @property
    def pending_emphasis_cache(self) -> PendingEmphasisCache:
        """This thread's scratch-set pool."""
        cache = getattr(self._local, "cache", None)
        if cache is None:
            cache = self._local.cache = PendingEmphasisCache()
        return cache

    def is_valid_previous_char(self, char: str) -> bool:
        """Whitespace, start of content, or a configured delimiter."""
        return not char or char in WHITESPACE or char in self.valid_previous_characters

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool:
        """Claim an email address at the cursor.

        Returns:
            True after advancing the cursor and handing a link to the
            processor; False with cursor and tree untouched otherwise.
        """
        if not self.is_valid_previous_char(cursor.previous_char):
            return False

        with self.pending_emphasis_cache.borrow() as pending_emphasis:
            if not is_autolink_valid_here(processor.tree, processor.last, pending_emphasis):
                return False

            found = match_email(cursor.text, cursor.start, cursor.end)
            if found is None:
                return False

            address = found.email_address
            address_start = cursor.start + found.address_offset
            location = processor.location(address_start, address_start + len(address))
            link = LinkToken(
                url="mailto:" + address,
                title=None,
                is_autolink=True,
                location=location,
            )
            cursor.start += found.consumed_length
            processor.inline = InlineResult(link, children=(LiteralToken(address, location),))

            logger.debug(
                "Linked email %r at %s (pending emphasis: %s)",
                address,
                location,
                "".join(sorted(pending_emphasis)) or "none",
            )
            return True


__all__ = ["AutoEmailRule", "DEFAULT_VALID_PREVIOUS_CHARACTERS"]
