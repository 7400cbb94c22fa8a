"""Canonical text form used for matching and duplicate detection."""

import re

# Runs of anything that is not a Unicode letter or digit
_SEPARATORS = re.compile(r"[\W_]+")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one space, trim.

    >>> normalize("Hello, World!")
    'hello world'
    """
    return _SEPARATORS.sub(" ", text.lower()).strip()


def collapse_whitespace(text: str) -> str:
    """Whitespace-normalized form used to compare brain lines."""
    return _WHITESPACE.sub(" ", text).strip()


def has_alphanumeric(text: str) -> bool:
    """True when ``text`` contains at least one letter or digit."""
    return any(ch.isalnum() for ch in text)
