"""Exception classes for Sobre.

Recognition rules never raise: a rule that cannot claim text simply declines.
These exceptions cover configuration and rendering mistakes made by callers.
"""

from __future__ import annotations


class SobreError(Exception):
    """Base exception for all Sobre errors."""

    pass


class PluginError(SobreError):
    """Error in plugin lookup or configuration."""

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")


class RuleRegistryError(SobreError):
    """Error when an inline rule cannot be registered.

    Raised for rules without trigger characters or with an insertion index
    outside the current rule list.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        self.rule_name = rule_name
        super().__init__(f"Inline rule '{rule_name}': {message}")


class RenderError(SobreError):
    """Error during rendering.

    Raised when a renderer meets a node type it has no writer for.
    """

    pass
