"""Text cursor handed to inline rules.

A TextCursor is a view over the full source text plus a mutable start
offset. The inline processor owns it; rules borrow it for one match attempt
and advance ``start`` only when they claim text.

"""

from __future__ import annotations


class TextCursor:
    """Mutable window ``[start, end)`` over an immutable source string.

    ``origin`` marks where the current block begins. Looking behind the
    origin yields ``""`` so a rule at the first character of a block sees
    "start of content" rather than whatever precedes the block in the file.

    Invariant: ``origin <= start <= end <= len(text)``.

    Usage:
        >>> cursor = TextCursor("say hi@example.com", start=4)
        >>> cursor.current_char, cursor.previous_char
        ('h', ' ')
        >>> cursor.advance(2).current_char
        '@'

    Thread Safety:
        Not thread-safe. One cursor per block being parsed.

    """

    __slots__ = ("text", "start", "end", "origin")

    def __init__(
        self,
        text: str,
        start: int = 0,
        end: int | None = None,
        origin: int | None = None,
    ) -> None:
        if end is None:
            end = len(text)
        if origin is None:
            origin = start
        if not 0 <= origin <= start <= end <= len(text):
            raise ValueError(
                f"invalid cursor bounds origin={origin} start={start} end={end} "
                f"for text of length {len(text)}"
            )
        self.text = text
        self.start = start
        self.end = end
        self.origin = origin

    def __repr__(self) -> str:
        return f"TextCursor(start={self.start}, end={self.end}, origin={self.origin})"

    @property
    def is_empty(self) -> bool:
        """True when no unparsed text remains."""
        return self.start >= self.end

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def current_char(self) -> str:
        """Character at ``start``, or ``""`` when exhausted."""
        return self.text[self.start] if self.start < self.end else ""

    @property
    def previous_char(self) -> str:
        """Character just before ``start``, or ``""`` at the block origin."""
        return self.text[self.start - 1] if self.start > self.origin else ""

    def peek(self, offset: int = 1) -> str:
        """Character at ``start + offset`` within the block, or ``""``."""
        pos = self.start + offset
        if self.origin <= pos < self.end:
            return self.text[pos]
        return ""

    def startswith(self, prefix: str) -> bool:
        """Check whether the remaining text starts with ``prefix``."""
        return self.text.startswith(prefix, self.start, self.end)

    def advance(self, count: int = 1) -> TextCursor:
        """Move ``start`` forward by ``count``, clamped to ``end``."""
        self.start = min(self.start + count, self.end)
        return self

    def remaining(self) -> str:
        """Copy of the unparsed text (for diagnostics and tests)."""
        return self.text[self.start : self.end]
