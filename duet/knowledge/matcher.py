"""Three-pass question lookup against the shared QA store."""

from collections.abc import Callable, Iterable

from duet.knowledge.models import QAPair
from duet.knowledge.normalizer import normalize

MatchPass = Callable[[str, str], bool]

# Strict priority: the first pass with any hit decides
MATCH_PASSES: tuple[tuple[str, MatchPass], ...] = (
    ("exact", lambda text, question: text == question),
    ("prefix", lambda text, question: text.startswith(question)),
    ("contains", lambda text, question: question in text),
)


def find_match(question: str, pairs: Iterable[QAPair]) -> tuple[QAPair, str] | None:
    """Find the answering pair and the name of the pass that matched.

    Within a pass the first pair in store order wins. Pairs whose question
    normalizes to nothing never match.
    """
    text = normalize(question)
    if not text:
        return None

    candidates = [(normalize(pair.question), pair) for pair in pairs]
    candidates = [(key, pair) for key, pair in candidates if key]

    for name, matches in MATCH_PASSES:
        for key, pair in candidates:
            if matches(text, key):
                return pair, name
    return None


def find_answer(question: str, pairs: Iterable[QAPair]) -> QAPair | None:
    """Return the pair answering ``question``, or None when unknown."""
    match = find_match(question, pairs)
    return match[0] if match else None
