"""Text normalization helpers for title segments.

Whitespace follows the ECMAScript definition used by browser-side title
segmenters: it includes U+FEFF but excludes U+001C..U+001F and U+0085,
which ``str.split`` and ``str.strip`` treat as whitespace.
"""

import re

WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

WHITESPACE_RUN = re.compile(f"[{WHITESPACE}]+")


def trim(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip(WHITESPACE)


def to_sentence_case(text: str) -> str:
    """Convert text to sentence case.

    Args:
        text: The text to convert.

    Returns:
        The trimmed text lowercased with its first character uppercased,
        or an empty string for empty or whitespace-only input.
    """
    if not text or not isinstance(text, str):
        return ""

    trimmed = trim(text)
    if not trimmed:
        return ""

    lowered = trimmed.lower()
    return lowered[0].upper() + lowered[1:]


def clean_and_lower(text: str) -> str:
    """Trim and lowercase text, dropping a single trailing period.

    Args:
        text: The text to clean.

    Returns:
        The cleaned text, or an empty string for empty or whitespace-only input.
    """
    if not text or not isinstance(text, str):
        return ""

    cleaned = trim(text).lower()
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    return cleaned
