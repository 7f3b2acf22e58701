"""Source spans for tokens and AST nodes.

Every token produced during inline recognition carries a SourceLocation so
renderers and diagnostics can map output back to the original Markdown.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in the source text.

    Line and column are 1-indexed. Offsets are 0-indexed positions in the
    full source string; ``end_offset`` is exclusive.

    Attributes:
        lineno: Line of the first character (1-indexed)
        col_offset: Column of the first character (1-indexed)
        offset: Absolute start offset in the source
        end_offset: Absolute end offset in the source (exclusive)
        source_file: Source file path, if known

    Examples:
        >>> loc = SourceLocation(lineno=1, col_offset=5, offset=4, end_offset=23)
        >>> loc.length
        19
        >>> str(SourceLocation(3, 1, source_file="notes.md"))
        'notes.md:3:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def length(self) -> int:
        """Number of source characters covered."""
        return self.end_offset - self.offset

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a location running from this start to ``end``'s end."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            source_file=self.source_file,
        )
