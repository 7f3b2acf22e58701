"""
Sobre: Markdown inline parsing with email autolinking

Turns email addresses written as plain text into mailto links while leaving
existing links, raw anchors and pending link text alone. Ships a small
paragraph parser with a typed AST, an HTML renderer and a normalizer that
writes the AST back to Markdown.

Quick Start:
    >>> from sobre import parse, render
    >>> doc = parse("Please ask **someone@example.com**")
    >>> print(render(doc))
    <p>Please ask <strong><a href="mailto:someone@example.com">someone@example.com</a></strong></p>

    >>> # Or use the high-level Markdown class
    >>> from sobre import Markdown
    >>> md = Markdown(plugins=["autoemail", "strikethrough"])
    >>> html = md("~~old@example.com~~ new@example.com")

Normalizing:
    >>> from sobre import normalize
    >>> normalize(parse("<someone@example.com>"))
    'mailto:someone@example.com\\n'

Installation:
    pip install sobre               # zero runtime dependencies
"""

from collections.abc import Iterable

from sobre.autoemail import (
    DEFAULT_VALID_PREVIOUS_CHARACTERS,
    AutoEmailRule,
    EmailMatch,
    PendingEmphasisCache,
    is_autolink_valid_here,
    match_email,
)
from sobre.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from sobre.errors import PluginError, RenderError, RuleRegistryError, SobreError
from sobre.location import SourceLocation
from sobre.nodes import (
    Block,
    CodeSpan,
    Document,
    Emphasis,
    HtmlInline,
    Inline,
    LineBreak,
    Link,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
)
from sobre.parser import Parser
from sobre.parsing.inline import (
    InlineProcessor,
    InlineRuleRegistry,
    InlineRuleRegistryBuilder,
    create_default_rules,
    create_rule_builder_with_defaults,
)
from sobre.plugins import BUILTIN_PLUGINS, apply_plugins, get_plugin, resolve_plugin_names
from sobre.renderers.html import HtmlRenderer
from sobre.renderers.normalize import NormalizeOptions, NormalizeRenderer
from sobre.renderers.protocol import ASTRenderer

__version__ = "0.1.0"

DEFAULT_PLUGINS: tuple[str, ...] = ("autoemail",)


def _parse_document(source: str, source_file: str | None) -> Document:
    blocks = Parser(source, source_file=source_file).parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    return Document(location=loc, children=tuple(blocks))


class Markdown:
    """High-level Markdown processor combining parser and renderers.

    Usage:
        >>> md = Markdown()
        >>> md("Ask *someone.else@example.com*")
        '<p>Ask <em><a href="mailto:someone.else@example.com">someone.else@example.com</a></em></p>\\n'

        >>> # Access the AST
        >>> doc = md.parse("someone@example.com")
        >>> doc.children[0].children[0].url
        'mailto:someone@example.com'

        >>> # Only link addresses after whitespace
        >>> md = Markdown(valid_previous_characters="")

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use one
        Markdown instance from several threads.

    """

    __slots__ = ("_config", "_plugins")

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        valid_previous_characters: str = DEFAULT_VALID_PREVIOUS_CHARACTERS,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            plugins: Plugin names to enable (default ``["autoemail"]``).
                Use ["all"] to enable all built-in plugins.
            valid_previous_characters: Characters that, besides whitespace
                and the start of a paragraph, may directly precede an
                autolinked email address

        Raises:
            PluginError: If a plugin name is unknown or an option is invalid
        """
        raw_plugins = DEFAULT_PLUGINS if plugins is None else plugins
        self._plugins = resolve_plugin_names(raw_plugins)
        for name in self._plugins:
            if name not in BUILTIN_PLUGINS:
                available = ", ".join(sorted(BUILTIN_PLUGINS))
                raise PluginError(name, f"unknown plugin (available: {available})")

        # Build immutable config once (thread-safe, reused across calls)
        base = ParseConfig(
            strikethrough_enabled="strikethrough" in self._plugins,
            autoemail_enabled="autoemail" in self._plugins,
            valid_previous_characters=valid_previous_characters,
        )
        builder = create_rule_builder_with_defaults()
        apply_plugins(self._plugins, base, builder=builder)
        self._config = ParseConfig(
            strikethrough_enabled=base.strikethrough_enabled,
            autoemail_enabled=base.autoemail_enabled,
            valid_previous_characters=valid_previous_characters,
            inline_rules=builder.build(),
        )

    @property
    def plugins(self) -> tuple[str, ...]:
        return tuple(self._plugins)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render Markdown to HTML in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into AST.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return _parse_document(source, source_file)

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple Markdown sources, setting the config once.

        Example:
            >>> md = Markdown()
            >>> docs = md.parse_many(["a@example.com", "b@example.com"])
        """
        with parse_config_context(self._config):
            return [_parse_document(source, source_file) for source in sources]

    def render(self, doc: Document) -> str:
        """Render AST to HTML."""
        return HtmlRenderer().render(doc)

    def normalize(self, doc: Document, *, expand_autolinks: bool = False) -> str:
        """Render AST back to Markdown.

        Args:
            doc: Document AST to render
            expand_autolinks: Write autolinks as ``[text](url)`` instead of
                their compact form

        """
        renderer = NormalizeRenderer(NormalizeOptions(expand_autolinks=expand_autolinks))
        apply_plugins(self._plugins, self._config, normalizer=renderer)
        return renderer.render(doc)


_default_markdown: Markdown | None = None


def _get_default_markdown() -> Markdown:
    global _default_markdown
    if _default_markdown is None:
        _default_markdown = Markdown()
    return _default_markdown


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse Markdown source into a typed AST with the default plugins.

    Example:
        >>> doc = parse("someone@example.com is the person to get in touch with")
        >>> doc.children[0].children[0]
        Link(location=..., url='mailto:someone@example.com', ...)
    """
    return _get_default_markdown().parse(source, source_file=source_file)


def render(doc: Document) -> str:
    """Render an AST Document to HTML."""
    return HtmlRenderer().render(doc)


def normalize(doc: Document, *, expand_autolinks: bool = False) -> str:
    """Render an AST Document back to Markdown with the default plugins."""
    return _get_default_markdown().normalize(doc, expand_autolinks=expand_autolinks)


__all__ = [
    # Main API
    "parse",
    "render",
    "normalize",
    "Markdown",
    "Parser",
    "DEFAULT_PLUGINS",
    # Auto-email
    "AutoEmailRule",
    "DEFAULT_VALID_PREVIOUS_CHARACTERS",
    "EmailMatch",
    "PendingEmphasisCache",
    "is_autolink_valid_here",
    "match_email",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Inline rules
    "InlineProcessor",
    "InlineRuleRegistry",
    "InlineRuleRegistryBuilder",
    "create_default_rules",
    "create_rule_builder_with_defaults",
    # Plugins
    "BUILTIN_PLUGINS",
    "apply_plugins",
    "get_plugin",
    # Renderers
    "ASTRenderer",
    "HtmlRenderer",
    "NormalizeOptions",
    "NormalizeRenderer",
    # Errors
    "SobreError",
    "PluginError",
    "RuleRegistryError",
    "RenderError",
    # Location
    "SourceLocation",
    # Nodes
    "Node",
    "Block",
    "Inline",
    "Document",
    "Paragraph",
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Link",
    "CodeSpan",
    "HtmlInline",
    "LineBreak",
    "SoftBreak",
]
