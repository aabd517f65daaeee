"""In-process broadcast channel for dashboard sessions."""
import asyncio
import itertools
import logging
from typing import Any, Dict

from app.services.realtime.events import Connected, OrderEvent

logger = logging.getLogger(__name__)


class Subscription:
    """One connected dashboard session's inbox."""

    def __init__(self, subscription_id: int, maxsize: int):
        self.id = subscription_id
        self.queue: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    async def next_message(self) -> Dict[str, Any]:
        """Wait for the next message addressed to this session."""
        return await self.queue.get()

    def offer(self, message: Dict[str, Any]) -> bool:
        """Enqueue without waiting. Returns False if the session's buffer is full."""
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True


class RealtimeNotifier:
    """
    Fan out order events to every connected session.

    Sessions only see events published after they subscribe. Delivery is
    best-effort: a session whose buffer is full loses the event, and
    publishing never waits on any session.
    """

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscriptions: Dict[int, Subscription] = {}
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self) -> Subscription:
        """Register a new session and queue its `connected` acknowledgment."""
        subscription = Subscription(next(self._ids), self.queue_size)
        subscription.offer(Connected().to_message())
        self._subscriptions[subscription.id] = subscription
        logger.info(
            f"[REALTIME] Session {subscription.id} subscribed - "
            f"{self.subscriber_count} connected"
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Forget a session. Safe to call more than once."""
        if self._subscriptions.pop(subscription.id, None) is not None:
            logger.info(
                f"[REALTIME] Session {subscription.id} unsubscribed - "
                f"{self.subscriber_count} connected"
            )

    def publish(self, event: OrderEvent) -> None:
        """Deliver an event to every current session without blocking."""
        message = event.to_message()
        # Snapshot so sessions joining or leaving mid-publish don't break iteration
        for subscription in list(self._subscriptions.values()):
            if not subscription.offer(message):
                logger.warning(
                    f"[REALTIME] Session {subscription.id} buffer full, "
                    f"dropped '{event.name}' ({subscription.dropped} dropped so far)"
                )
        logger.debug(
            f"[REALTIME] Published '{event.name}' to {self.subscriber_count} sessions"
        )
