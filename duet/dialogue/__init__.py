"""Dialogue: scheduled two-agent conversation and its broadcast."""

from duet.dialogue.broadcast import Broadcaster, Subscription, SubscriptionClosedError
from duet.dialogue.models import DialogueStatus, DialogueTurn, SchedulerState
from duet.dialogue.scheduler import DialogueScheduler
from duet.dialogue.templates import Interlocutor, TemplateBands, compose_utterance

__all__ = [
    "Broadcaster",
    "DialogueScheduler",
    "DialogueStatus",
    "DialogueTurn",
    "Interlocutor",
    "SchedulerState",
    "Subscription",
    "SubscriptionClosedError",
    "TemplateBands",
    "compose_utterance",
]
