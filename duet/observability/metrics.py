"""Prometheus metrics for duet."""

from prometheus_client import Counter, Gauge

# Request surface
BRAIN_DRAWS = Counter(
    "duet_brain_draws_total",
    "Brain lines drawn by the sampler",
    labelnames=["agent", "source"],
)

QA_LOOKUPS = Counter(
    "duet_qa_lookups_total",
    "Question lookups against the QA store",
    labelnames=["agent", "result"],
)

LEARN_OUTCOMES = Counter(
    "duet_learn_outcomes_total",
    "Learning attempts by outcome",
    labelnames=["agent", "outcome"],
)

# Dialogue
DIALOGUE_TURNS = Counter(
    "duet_dialogue_turns_total",
    "Turns produced by the dialogue scheduler",
    labelnames=["agent"],
)

DIALOGUE_TICK_FAILURES = Counter(
    "duet_dialogue_tick_failures_total",
    "Scheduler ticks that raised",
)

DIALOGUE_RUNNING = Gauge(
    "duet_dialogue_running",
    "1 while the dialogue scheduler is running",
)

# Broadcast
SUBSCRIBERS = Gauge(
    "duet_dialogue_subscribers",
    "Currently subscribed dialogue listeners",
)

BROADCAST_DROPS = Counter(
    "duet_broadcast_drops_total",
    "Turns not delivered to a listener",
    labelnames=["reason"],
)
