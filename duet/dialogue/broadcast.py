"""Publish/subscribe fan-out of dialogue turns to live listeners."""

import asyncio
from types import TracebackType

from duet.dialogue.models import DialogueTurn
from duet.observability.logging import get_logger
from duet.observability.metrics import BROADCAST_DROPS, SUBSCRIBERS

logger = get_logger(__name__)


class SubscriptionClosedError(Exception):
    """Raised when delivering to a subscription that has been closed."""


class Subscription:
    """A listener's private channel of turns.

    Iterate it with ``async for``; iteration ends once the subscription is
    closed and its buffer drained.
    """

    def __init__(self, broadcaster: "Broadcaster", maxsize: int) -> None:
        self._broadcaster = broadcaster
        self._queue: asyncio.Queue[DialogueTurn | None] = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    def deliver(self, turn: DialogueTurn) -> None:
        """Queue a turn without waiting.

        Raises:
            SubscriptionClosedError: If the subscription is closed
            asyncio.QueueFull: If the listener is not keeping up
        """
        if self.closed:
            raise SubscriptionClosedError()
        self._queue.put_nowait(turn)

    def close(self) -> None:
        """Detach from the broadcaster and wake a waiting reader."""
        if self.closed:
            return
        self.closed = True
        self._broadcaster.unsubscribe(self)
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            pass

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> DialogueTurn:
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        turn = await self._queue.get()
        if turn is None:
            raise StopAsyncIteration
        return turn

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class Broadcaster:
    """Fans each published turn out to every current subscription.

    Delivery never blocks and never raises: a listener that is full,
    closed or otherwise broken is skipped and the rest still receive the
    turn.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self.queue_size = queue_size
        self._subscriptions: set[Subscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        """Register a new listener."""
        subscription = Subscription(self, self.queue_size)
        self._subscriptions.add(subscription)
        SUBSCRIBERS.set(len(self._subscriptions))
        logger.debug("listener_subscribed", subscribers=len(self._subscriptions))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a listener; unknown listeners are ignored."""
        self._subscriptions.discard(subscription)
        SUBSCRIBERS.set(len(self._subscriptions))
        logger.debug("listener_unsubscribed", subscribers=len(self._subscriptions))

    def publish(self, turn: DialogueTurn) -> int:
        """Deliver ``turn`` to every listener, returning how many got it."""
        delivered = 0
        for subscription in list(self._subscriptions):
            try:
                subscription.deliver(turn)
                delivered += 1
            except asyncio.QueueFull:
                BROADCAST_DROPS.labels(reason="full").inc()
                logger.warning("broadcast_listener_full", turn=turn.turn)
            except SubscriptionClosedError:
                BROADCAST_DROPS.labels(reason="closed").inc()
            except Exception as e:
                BROADCAST_DROPS.labels(reason="error").inc()
                logger.warning("broadcast_listener_failed", turn=turn.turn, error=str(e))
        return delivered

    def close_all(self) -> None:
        """Close every subscription, ending their iterators."""
        for subscription in list(self._subscriptions):
            subscription.close()
