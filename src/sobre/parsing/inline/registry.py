"""Inline rule registry.

Rules are keyed by the characters that can trigger them. The builder keeps
registration order, which is also the order rules are tried in; ``insert``
lets an extension claim an earlier slot (index 0 runs before everything).

Usage:
    >>> builder = InlineRuleRegistryBuilder()
    >>> builder.register(CodeSpanRule()).insert(0, AutoEmailRule())
    >>> registry = builder.build()
    >>> [type(r).__name__ for r in registry.rules_for("<")]
    ['AutoEmailRule', ...]

Thread Safety:
InlineRuleRegistry is immutable after build() and safe to share; rules must
not keep per-parse state on the instance.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

from sobre.errors import RuleRegistryError

if TYPE_CHECKING:
    from sobre.parsing.cursor import TextCursor
    from sobre.parsing.inline.processor import InlineProcessor


@runtime_checkable
class InlineRule(Protocol):
    """Protocol for inline recognition rules.

    ``match`` returns True after claiming text: it advanced the cursor and
    either set ``processor.inline`` or updated the tree through the
    processor. Returning False must leave cursor and tree untouched.

    """

    @property
    def triggers(self) -> frozenset[str]:
        """Characters at which this rule is attempted."""
        ...

    def match(self, processor: InlineProcessor, cursor: TextCursor) -> bool: ...


class InlineRuleRegistry:
    """Immutable, priority-ordered rule set with per-character dispatch."""

    __slots__ = ("_rules", "_dispatch")

    def __init__(self, rules: tuple[InlineRule, ...]) -> None:
        self._rules = rules
        dispatch: dict[str, list[InlineRule]] = {}
        for rule in rules:
            for char in rule.triggers:
                dispatch.setdefault(char, []).append(rule)
        self._dispatch: dict[str, tuple[InlineRule, ...]] = {
            char: tuple(found) for char, found in dispatch.items()
        }

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __contains__(self, rule_type: object) -> bool:
        return isinstance(rule_type, type) and any(isinstance(r, rule_type) for r in self._rules)

    @property
    def rules(self) -> tuple[InlineRule, ...]:
        return self._rules

    def rules_for(self, char: str) -> tuple[InlineRule, ...]:
        """Rules triggered by ``char``, highest priority first."""
        return self._dispatch.get(char, ())

    def is_trigger(self, char: str) -> bool:
        return char in self._dispatch

    def trigger_chars(self) -> frozenset[str]:
        return frozenset(self._dispatch)


class InlineRuleRegistryBuilder:
    """Mutable builder for InlineRuleRegistry."""

    __slots__ = ("_rules",)

    def __init__(self) -> None:
        self._rules: list[InlineRule] = []

    def __len__(self) -> int:
        return len(self._rules)

    def _check(self, rule: InlineRule) -> None:
        if not rule.triggers:
            raise RuleRegistryError(type(rule).__name__, "has no trigger characters")

    def register(self, rule: InlineRule) -> Self:
        """Append ``rule`` after all previously registered rules."""
        self._check(rule)
        self._rules.append(rule)
        return self

    def insert(self, index: int, rule: InlineRule) -> Self:
        """Insert ``rule`` at ``index`` in priority order (0 = first)."""
        self._check(rule)
        if not 0 <= index <= len(self._rules):
            raise RuleRegistryError(
                type(rule).__name__,
                f"insertion index {index} outside 0..{len(self._rules)}",
            )
        self._rules.insert(index, rule)
        return self

    def contains(self, rule_type: type) -> bool:
        """Check whether a rule of ``rule_type`` is already registered."""
        return any(isinstance(r, rule_type) for r in self._rules)

    def remove(self, rule_type: type) -> Self:
        """Drop every rule of ``rule_type``."""
        self._rules = [r for r in self._rules if not isinstance(r, rule_type)]
        return self

    def build(self) -> InlineRuleRegistry:
        return InlineRuleRegistry(tuple(self._rules))


__all__ = [
    "InlineRule",
    "InlineRuleRegistry",
    "InlineRuleRegistryBuilder",
]
