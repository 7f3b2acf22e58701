"""Email autolinking: matcher, context check, scratch pool and inline rule.

Usage:
    >>> from sobre import Markdown
    >>> Markdown(plugins=["autoemail"])("Ask someone@example.com")
    '<p>Ask <a href="mailto:someone@example.com">someone@example.com</a></p>\\n'

"""

from sobre.autoemail.cache import PendingEmphasisCache
from sobre.autoemail.context import (
    bracket_balance,
    is_autolink_valid_here,
    is_inside_open_anchor,
)
from sobre.autoemail.matcher import EmailMatch, match_email
from sobre.autoemail.rule import DEFAULT_VALID_PREVIOUS_CHARACTERS, AutoEmailRule

__all__ = [
    "DEFAULT_VALID_PREVIOUS_CHARACTERS",
    "AutoEmailRule",
    "EmailMatch",
    "PendingEmphasisCache",
    "bracket_balance",
    "is_autolink_valid_here",
    "is_inside_open_anchor",
    "match_email",
]
