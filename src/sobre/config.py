"""ContextVar-based parse configuration for Sobre.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Markdown instance, read by the parser in the context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # In Markdown class
    md = Markdown(plugins=["autoemail"])
    html = md("Write to someone@example.com")  # Sets config internally

    # Direct parser usage (advanced)
    with parse_config_context(ParseConfig(autoemail_enabled=True)):
        blocks = Parser(source).parse()

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sobre.autoemail.rule import DEFAULT_VALID_PREVIOUS_CHARACTERS

if TYPE_CHECKING:
    from sobre.parsing.inline.registry import InlineRuleRegistry


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        strikethrough_enabled: Enable ~~strikethrough~~ syntax
        autoemail_enabled: Link bare and bracketed email addresses
        valid_previous_characters: Characters that may directly precede an
            autolinked address (whitespace and block start always may)
        inline_rules: Prebuilt rule registry; when None the parser builds
            one from the flags above

    """

    strikethrough_enabled: bool = False
    autoemail_enabled: bool = False
    valid_previous_characters: str = DEFAULT_VALID_PREVIOUS_CHARACTERS
    inline_rules: InlineRuleRegistry | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> ParseConfig:
        """Create ParseConfig from a dictionary, ignoring unknown keys.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "autoemail_enabled": True,
            ...     "valid_previous_characters": "*_",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.valid_previous_characters
            '*_'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "sobre_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration singleton."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(autoemail_enabled=True)):
        ...     blocks = Parser("someone@example.com").parse()

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
