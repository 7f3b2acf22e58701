"""Plugin system for the Sobre Markdown parser.

Plugins extend Sobre with additional syntax support:
- autoemail: bare and bracketed email addresses become mailto links
- strikethrough: ~~deleted~~ syntax

Usage:
    >>> from sobre import Markdown
    >>>
    >>> # Enable specific plugins
    >>> md = Markdown(plugins=["autoemail", "strikethrough"])
    >>> html = md("Ask *someone@example.com*")
    >>>
    >>> # Enable all plugins
    >>> md = Markdown(plugins=["all"])

Plugin Architecture:
Plugins hook into two extension points:

1. Inline rules:
   - Registered with an InlineRuleRegistryBuilder before it is built
   - Tried when one of the rule's trigger characters is reached

2. Normalize writers:
   - Added to a NormalizeRenderer
   - Consulted before the renderer's built-in node writers

Thread Safety:
Plugins are stateless. Rules they register must tolerate being shared by
parsers on several threads.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sobre.parsing.inline import create_rule_builder_with_defaults
from sobre.utils.logger import get_logger

if TYPE_CHECKING:
    from sobre.config import ParseConfig
    from sobre.parsing.inline.registry import InlineRuleRegistry, InlineRuleRegistryBuilder
    from sobre.renderers.normalize import NormalizeRenderer

__all__ = [
    "SobrePlugin",
    "BUILTIN_PLUGINS",
    "register_plugin",
    "get_plugin",
    "resolve_plugin_names",
    "apply_plugins",
    "build_inline_rules",
]

logger = get_logger(__name__)


@runtime_checkable
class SobrePlugin(Protocol):
    """Protocol for Sobre plugins.

    Plugins can hook into two extension points:
    - extend_inline_rules: Register inline recognition rules
    - extend_normalizer: Add node writers to the Markdown normalizer

    Thread Safety:
        Plugins must be stateless.

    """

    @property
    def name(self) -> str:
        """Plugin identifier."""
        ...

    def extend_inline_rules(self, builder: InlineRuleRegistryBuilder, config: ParseConfig) -> None:
        """Register inline rules on ``builder``.

        Called once per registry build. Must be idempotent for a builder
        that already holds the plugin's rules.
        """
        ...

    def extend_normalizer(self, renderer: NormalizeRenderer) -> None:
        """Add node writers to ``renderer``."""
        ...


# Registry of built-in plugins
BUILTIN_PLUGINS: dict[str, type[SobrePlugin]] = {}


def register_plugin(
    name: str,
) -> Callable[[type[SobrePlugin]], type[SobrePlugin]]:
    """Decorator to register a plugin.

    Usage:
        @register_plugin("autoemail")
        class AutoEmailPlugin:
                ...

    """

    def decorator(cls: type[SobrePlugin]) -> type[SobrePlugin]:
        BUILTIN_PLUGINS[name] = cls
        return cls

    return decorator


def get_plugin(name: str) -> SobrePlugin:
    """Get a plugin instance by name.

    Raises:
        KeyError: If plugin name is not recognized

    """
    if name not in BUILTIN_PLUGINS:
        available = ", ".join(sorted(BUILTIN_PLUGINS.keys()))
        raise KeyError(f"Unknown plugin: {name!r}. Available: {available}")
    return BUILTIN_PLUGINS[name]()


def resolve_plugin_names(plugins: Iterable[str]) -> list[str]:
    """Expand ``"all"`` and drop duplicates, keeping first-seen order."""
    names: list[str] = []
    for plugin_name in plugins:
        expanded = list(BUILTIN_PLUGINS) if plugin_name == "all" else [plugin_name]
        for name in expanded:
            if name not in names:
                names.append(name)
    return names


def apply_plugins(
    plugins: Iterable[str],
    config: ParseConfig,
    builder: InlineRuleRegistryBuilder | None = None,
    normalizer: NormalizeRenderer | None = None,
) -> None:
    """Apply plugins to a rule builder and/or a normalize renderer.

    Args:
        plugins: Plugin names; ``"all"`` applies every built-in plugin
        config: Active parse configuration (plugin options)
        builder: Rule builder to extend
        normalizer: Normalize renderer to extend

    """
    for name in resolve_plugin_names(plugins):
        plugin = get_plugin(name)
        if builder is not None:
            plugin.extend_inline_rules(builder, config)
        if normalizer is not None:
            plugin.extend_normalizer(normalizer)
        logger.debug("Applied plugin %r", name)


def plugin_names_for(config: ParseConfig) -> list[str]:
    """Plugins implied by the feature flags of ``config``."""
    names = []
    if config.autoemail_enabled:
        names.append("autoemail")
    if config.strikethrough_enabled:
        names.append("strikethrough")
    return names


@lru_cache(maxsize=32)
def _cached_rules(config: ParseConfig) -> InlineRuleRegistry:
    builder = create_rule_builder_with_defaults()
    apply_plugins(plugin_names_for(config), config, builder=builder)
    return builder.build()


def build_inline_rules(config: ParseConfig) -> InlineRuleRegistry:
    """Rule registry for ``config``: its prebuilt rules, or one built from its flags.

    Registries built from flags are cached per configuration.
    """
    if config.inline_rules is not None:
        return config.inline_rules
    return _cached_rules(config)


# Import built-in plugins to register them
# These imports trigger the @register_plugin decorators
from sobre.plugins.autoemail import AutoEmailPlugin, NormalizeAutoEmailRenderer  # noqa: E402
from sobre.plugins.strikethrough import StrikethroughPlugin  # noqa: E402

__all__ += [
    "AutoEmailPlugin",
    "NormalizeAutoEmailRenderer",
    "StrikethroughPlugin",
    "plugin_names_for",
]
