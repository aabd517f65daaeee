"""Unit tests for the real-time notifier."""
import pytest
from datetime import datetime

from app.services.ordering.models import OrderRecord, OrderStatus
from app.services.realtime.events import Connected, OrderCreated, OrderStatusChanged
from app.services.realtime.notifier import RealtimeNotifier

CONNECTED = {"event": "connected", "data": {"status": "connected"}}


@pytest.fixture
def order():
    return OrderRecord(
        id=1,
        order_type="dine-in",
        customer_name="Amit",
        table_number="4",
        items=[{"name": "Biryani", "price": 200, "qty": 2}],
        total=400,
        created_at=datetime(2024, 5, 15, 12, 30),
    )


class TestEvents:
    """Test wire rendering of events."""

    def test_connected_message(self):
        assert Connected().to_message() == CONNECTED

    def test_order_created_message(self, order):
        message = OrderCreated(order=order).to_message()

        assert message["event"] == "newOrder"
        assert message["data"]["id"] == 1
        assert message["data"]["orderType"] == "dine-in"
        assert message["data"]["customerName"] == "Amit"
        assert message["data"]["tableNumber"] == "4"
        assert message["data"]["status"] == "incoming"
        assert message["data"]["createdAt"] == "2024-05-15T12:30:00"

    def test_status_changed_message(self, order):
        updated = order.model_copy(update={"status": OrderStatus.READY})

        message = OrderStatusChanged(order=updated).to_message()

        assert message["event"] == "orderUpdated"
        assert message["data"]["status"] == "ready"


class TestRealtimeNotifier:
    """Test subscription and fan-out."""

    @pytest.mark.asyncio
    async def test_subscribe_sends_connected_first(self):
        notifier = RealtimeNotifier()

        subscription = notifier.subscribe()

        assert await subscription.next_message() == CONNECTED
        assert notifier.subscriber_count == 1

    @pytest.mark.asyncio
    async def test_publish_reaches_every_subscriber(self, order):
        notifier = RealtimeNotifier()
        first = notifier.subscribe()
        second = notifier.subscribe()

        notifier.publish(OrderCreated(order=order))

        for subscription in (first, second):
            assert await subscription.next_message() == CONNECTED
            message = await subscription.next_message()
            assert message == OrderCreated(order=order).to_message()

    @pytest.mark.asyncio
    async def test_late_subscriber_gets_no_replay(self, order):
        notifier = RealtimeNotifier()
        notifier.publish(OrderCreated(order=order))

        late = notifier.subscribe()

        assert late.queue.qsize() == 1
        assert await late.next_message() == CONNECTED

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self, order):
        notifier = RealtimeNotifier()

        notifier.publish(OrderCreated(order=order))

        assert notifier.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_unsubscribe(self, order):
        notifier = RealtimeNotifier()
        subscription = notifier.subscribe()

        notifier.unsubscribe(subscription)
        notifier.unsubscribe(subscription)
        notifier.publish(OrderCreated(order=order))

        assert notifier.subscriber_count == 0
        assert subscription.queue.qsize() == 1  # only the acknowledgment

    @pytest.mark.asyncio
    async def test_full_buffer_drops_for_that_session_only(self, order):
        """Test that a slow session loses events without affecting others."""
        notifier = RealtimeNotifier(queue_size=2)
        slow = notifier.subscribe()
        fast = notifier.subscribe()

        notifier.publish(OrderCreated(order=order))
        await fast.next_message()
        await fast.next_message()
        notifier.publish(OrderStatusChanged(order=order))

        assert slow.dropped == 1
        assert slow.queue.qsize() == 2
        assert fast.dropped == 0
        assert (await fast.next_message())["event"] == "orderUpdated"
