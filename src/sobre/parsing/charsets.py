"""Character sets for O(1) classification during inline recognition.

All sets are frozensets: immutable, shared at module level, O(1) membership.

Reference: CommonMark 0.31.2 specification
"""

import string
import unicodedata

# CommonMark: ASCII punctuation characters
# https://spec.commonmark.org/0.31.2/#ascii-punctuation-character
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# ASCII whitespace accepted before an autolinked address
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# Characters that can open an email autolink: ASCII letters, digits and "<"
EMAIL_OPENING_CHARS: frozenset[str] = frozenset(string.ascii_letters + string.digits + "<")


def is_unicode_punctuation(char: str) -> bool:
    """Check if character is Unicode punctuation or symbol (P* or S*).

    CommonMark uses Unicode punctuation categories for flanking rules.
    """
    if not char:
        return False
    if char in ASCII_PUNCTUATION:
        return True
    cat = unicodedata.category(char)
    return cat.startswith("P") or cat.startswith("S")


def is_unicode_whitespace(char: str) -> bool:
    """Check if character is Unicode whitespace.

    The empty string (start or end of a block) counts as whitespace.
    """
    if not char:
        return True
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"
