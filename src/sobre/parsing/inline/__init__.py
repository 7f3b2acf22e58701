"""Inline recognition for Sobre.

The inline pass has two phases:

1. InlineProcessor runs the registered rules over a block and builds an
   InlineTree of tokens, nesting text under pending brackets and emphasis.
2. build_inlines() resolves emphasis delimiters and produces AST nodes.

"""

from __future__ import annotations

from sobre.parsing.inline.build import build_inlines
from sobre.parsing.inline.processor import InlineProcessor, InlineResult
from sobre.parsing.inline.registry import (
    InlineRule,
    InlineRuleRegistry,
    InlineRuleRegistryBuilder,
)
from sobre.parsing.inline.rules import (
    AngleAutolinkRule,
    CodeSpanRule,
    EmphasisRule,
    EscapeRule,
    HtmlTagRule,
    LineBreakRule,
    LinkBracketRule,
    StrikethroughRule,
)


def create_rule_builder_with_defaults() -> InlineRuleRegistryBuilder:
    """Builder pre-populated with the core CommonMark inline rules.

    Extensions register or insert their own rules before ``build()``.
    """
    builder = InlineRuleRegistryBuilder()
    builder.register(LineBreakRule())
    builder.register(EscapeRule())
    builder.register(CodeSpanRule())
    builder.register(AngleAutolinkRule())
    builder.register(HtmlTagRule())
    builder.register(LinkBracketRule())
    builder.register(EmphasisRule())
    return builder


def create_default_rules() -> InlineRuleRegistry:
    """Registry with only the core rules (no plugins)."""
    return create_rule_builder_with_defaults().build()


__all__ = [
    "AngleAutolinkRule",
    "CodeSpanRule",
    "EmphasisRule",
    "EscapeRule",
    "HtmlTagRule",
    "InlineProcessor",
    "InlineResult",
    "InlineRule",
    "InlineRuleRegistry",
    "InlineRuleRegistryBuilder",
    "LineBreakRule",
    "LinkBracketRule",
    "StrikethroughRule",
    "build_inlines",
    "create_default_rules",
    "create_rule_builder_with_defaults",
]
