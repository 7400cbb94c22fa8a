"""Template-based utterance generation for scheduled dialogue.

Everything here is a pure function of its arguments; randomness comes only
from the ``random.Random`` passed in, so a seeded generator reproduces a
conversation exactly.
"""

import random
from dataclasses import dataclass, field

PARTNER_QUESTIONS: tuple[str, ...] = (
    "{partner}, what do you think about {topic}?",
    "{partner}, does {topic} ever surprise you?",
    "How would you explain {topic}, {partner}?",
    "{partner}, what comes to mind when I say {topic}?",
)

FACT_QUESTIONS: tuple[str, ...] = (
    '{partner}, you once told me "{fact}". How does that fit with {topic}?',
    '{partner}, you said "{fact}". Does that change how you see {topic}?',
)

STATEMENTS: tuple[str, ...] = (
    "{fact}. It makes me think about {topic}.",
    "When I think about {topic}, I remember this: {fact}.",
    "{fact}. Somehow that connects to {topic} for me.",
)

OPENERS: tuple[str, ...] = (
    "You know what I keep coming back to?",
    "Let me think out loud for a moment.",
    "Here's something I've been wondering.",
    "I like talking with you.",
)

TOPIC_SUFFIXES: tuple[str, ...] = (
    " Especially about {topic}.",
    " It's about {topic}.",
    " Maybe {topic} is the key.",
)


@dataclass(frozen=True)
class Interlocutor:
    """What the template knows about one side of the conversation."""

    name: str
    facts: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TemplateBands:
    """Probability bands selecting the kind of utterance."""

    question: float = 0.35
    statement: float = 0.35


def as_clause(fact: str) -> str:
    """Strip trailing sentence punctuation so a fact embeds mid-sentence."""
    return fact.strip().rstrip(".!?…").rstrip()


def compose_utterance(
    speaker: Interlocutor,
    partner: Interlocutor,
    topic: str,
    rng: random.Random,
    bands: TemplateBands = TemplateBands(),
) -> str:
    """Build one line for ``speaker`` addressing ``partner`` about ``topic``.

    Draws r in [0, 1): below ``bands.question`` asks the partner a question,
    optionally quoting one of the partner's facts; below
    ``bands.question + bands.statement`` ties one of the speaker's facts to
    the topic; otherwise a generic opener, optionally followed by a topic
    reference. A statement with no facts to draw on falls back to an opener.
    """
    draw = rng.random()

    if draw < bands.question:
        if partner.facts and rng.random() < 0.5:
            return rng.choice(FACT_QUESTIONS).format(
                partner=partner.name,
                fact=as_clause(rng.choice(partner.facts)),
                topic=topic,
            )
        return rng.choice(PARTNER_QUESTIONS).format(partner=partner.name, topic=topic)

    if draw < bands.question + bands.statement and speaker.facts:
        fact = as_clause(rng.choice(speaker.facts))
        return rng.choice(STATEMENTS).format(fact=fact, topic=topic)

    opener = rng.choice(OPENERS)
    if rng.random() < 0.5:
        opener += rng.choice(TOPIC_SUFFIXES).format(topic=topic)
    return opener
