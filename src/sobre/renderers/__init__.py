"""Renderers for the Sobre AST."""

from sobre.renderers.html import HtmlRenderer, html_escape
from sobre.renderers.normalize import (
    NodeWriter,
    NormalizeContext,
    NormalizeOptions,
    NormalizeRenderer,
)
from sobre.renderers.protocol import ASTRenderer

__all__ = [
    "ASTRenderer",
    "HtmlRenderer",
    "NodeWriter",
    "NormalizeContext",
    "NormalizeOptions",
    "NormalizeRenderer",
    "html_escape",
]
