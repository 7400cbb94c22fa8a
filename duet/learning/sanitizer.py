"""Heuristics deciding whether freeform text is worth learning."""

from enum import Enum

from duet.knowledge.normalizer import has_alphanumeric

ELLIPSES: frozenset[str] = frozenset({"...", "…"})

# Brain and QA files treat lines starting with this as comments
COMMENT_MARKER = "#"


class Verdict(str, Enum):
    """Outcome of classify()."""

    GARBAGE = "garbage"
    ACCEPTABLE = "acceptable"


def collapse_run_on_duplicate(text: str) -> str:
    """Undo input that was accidentally doubled upstream.

    >>> collapse_run_on_duplicate("helhel")
    'hel'
    """
    text = text.strip()
    half, odd = divmod(len(text), 2)
    if text and not odd and text[:half] == text[half:]:
        return text[:half]
    return text


def garbage_reason(text: str, min_length: int = 4) -> str | None:
    """Why ``text`` is garbage, or None when it is acceptable."""
    text = text.strip()
    if not text:
        return "empty"
    if text in ELLIPSES:
        return "ellipsis"
    if text.startswith(COMMENT_MARKER):
        return "starts with comment marker"
    if len(text) < min_length:
        return f"shorter than {min_length} characters"
    if not has_alphanumeric(text):
        return "no letters or digits"
    return None


def classify(text: str, min_length: int = 4) -> Verdict:
    """Garbage when empty, an ellipsis, a comment, too short, or without letters/digits."""
    if garbage_reason(text, min_length) is None:
        return Verdict.ACCEPTABLE
    return Verdict.GARBAGE
