"""Auto-email plugin for Sobre.

Links email addresses written as plain text:

    someone@example.com          → <a href="mailto:someone@example.com">someone@example.com</a>
    <someone@example.com>        → same link
    mailto:someone@example.com   → same link

Usage:
    >>> md = Markdown(plugins=["autoemail"])
    >>> md("Ask *someone.else@example.com*")
    '<p>Ask <em><a href="mailto:someone.else@example.com">someone.else@example.com</a></em></p>\\n'

The rule is inserted at the front of the rule list so it runs before the
angle-bracket autolink and raw HTML rules. When normalizing with
``expand_autolinks=False`` the linked address is written back as its URL.

Thread Safety:
The plugin is stateless; AutoEmailRule keeps its scratch pool per thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sobre.autoemail.rule import AutoEmailRule
from sobre.errors import PluginError
from sobre.nodes import Link
from sobre.plugins import register_plugin

if TYPE_CHECKING:
    from sobre.config import ParseConfig
    from sobre.nodes import Node
    from sobre.parsing.inline.registry import InlineRuleRegistryBuilder
    from sobre.renderers.normalize import NormalizeContext, NormalizeRenderer


class NormalizeAutoEmailRenderer:
    """Writes autolinks as their bare URL unless autolinks are expanded.

    Email addresses are linked again when the output is parsed. URI
    autolinks such as ``<https://example.com>`` come back as plain text.
    """

    __slots__ = ()

    def accept(self, ctx: NormalizeContext, node: Node) -> bool:
        return isinstance(node, Link) and node.is_autolink and not ctx.options.expand_autolinks

    def write(self, ctx: NormalizeContext, node: Node) -> None:
        assert isinstance(node, Link)
        ctx.write(node.url)


@register_plugin("autoemail")
class AutoEmailPlugin:
    """Plugin linking bare and bracketed email addresses."""

    @property
    def name(self) -> str:
        return "autoemail"

    def extend_inline_rules(self, builder: InlineRuleRegistryBuilder, config: ParseConfig) -> None:
        chars = config.valid_previous_characters
        if not isinstance(chars, str):
            raise PluginError(
                self.name,
                f"valid_previous_characters must be a string, got {type(chars).__name__}",
            )
        if not builder.contains(AutoEmailRule):
            builder.insert(0, AutoEmailRule(chars))

    def extend_normalizer(self, renderer: NormalizeRenderer) -> None:
        if not renderer.contains_writer(NormalizeAutoEmailRenderer):
            renderer.insert_writer(0, NormalizeAutoEmailRenderer())
