"""Parsing internals for Sobre: text cursor, character sets and inline rules."""

from sobre.parsing.cursor import TextCursor

__all__ = ["TextCursor"]
