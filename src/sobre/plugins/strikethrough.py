"""Strikethrough plugin for Sobre.

Adds support for ~~deleted~~ syntax.

Usage:
    >>> md = Markdown(plugins=["strikethrough"])
    >>> md("~~deleted text~~")
    '<p><del>deleted text</del></p>\\n'

Syntax:
~~text~~ → <del>text</del>

Runs of one or three or more tildes stay literal text.

Thread Safety:
This plugin is stateless and thread-safe.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sobre.parsing.inline.rules import StrikethroughRule
from sobre.plugins import register_plugin

if TYPE_CHECKING:
    from sobre.config import ParseConfig
    from sobre.parsing.inline.registry import InlineRuleRegistryBuilder
    from sobre.renderers.normalize import NormalizeRenderer


@register_plugin("strikethrough")
class StrikethroughPlugin:
    """Plugin adding ~~strikethrough~~ support."""

    @property
    def name(self) -> str:
        return "strikethrough"

    def extend_inline_rules(self, builder: InlineRuleRegistryBuilder, config: ParseConfig) -> None:
        if not builder.contains(StrikethroughRule):
            builder.register(StrikethroughRule())

    def extend_normalizer(self, renderer: NormalizeRenderer) -> None:
        """No writer needed - Strikethrough is a built-in node."""
        pass
