"""Real-time order channel for staff dashboards."""
import logging

import anyio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.services.realtime.notifier import RealtimeNotifier, Subscription

router = APIRouter()
logger = logging.getLogger(__name__)


async def _forward(websocket: WebSocket, subscription: Subscription, scope: anyio.CancelScope) -> None:
    try:
        while True:
            message = await subscription.next_message()
            await websocket.send_json(message)
    except WebSocketDisconnect:
        scope.cancel()


async def _drain(websocket: WebSocket, scope: anyio.CancelScope) -> None:
    # Dashboards don't send anything meaningful; reading detects the disconnect
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        scope.cancel()


@router.websocket("/ws")
async def order_events(websocket: WebSocket):
    """Stream order events to one dashboard session until it disconnects."""
    notifier: RealtimeNotifier = websocket.app.state.notifier
    await websocket.accept()
    subscription = notifier.subscribe()
    logger.info(
        f"[REALTIME] Manager connected - session: {subscription.id}, "
        f"Client: {websocket.client.host if websocket.client else 'unknown'}"
    )

    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(_forward, websocket, subscription, tg.cancel_scope)
            tg.start_soon(_drain, websocket, tg.cancel_scope)
    finally:
        notifier.unsubscribe(subscription)
        logger.info(f"[REALTIME] Manager disconnected - session: {subscription.id}")
