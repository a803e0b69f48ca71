"""WebSocket routes for real-time project and wallet updates"""

import json
import logging
from typing import Any, Dict, Optional, Set
from uuid import UUID

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.database import AsyncSessionLocal
from bluechain_mrv.models import Profile, Project, UserRole, Wallet
from bluechain_mrv.services.auth_service import AuthService
from bluechain_mrv.services.realtime_service import (
    ALL_PROJECTS_TOPIC,
    EventBroker,
    event_broker,
)
from bluechain_mrv.services.redis_service import RedisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ws", tags=["websocket"])


class ConnectionManager:
    """
    Bridges broker topics to WebSocket connections.

    Each connection gets one broker callback; subscribing the connection to a
    topic registers that callback on the topic.
    """

    def __init__(self, broker: EventBroker):
        self.broker = broker
        # Map of websocket to its broker callback
        self.callbacks: Dict[WebSocket, Any] = {}
        # Map of websocket to subscribed topics
        self.subscriptions: Dict[WebSocket, Set[str]] = {}

    async def connect(self, websocket: WebSocket):
        await websocket.accept()

        async def deliver(event: Dict[str, Any]):
            await websocket.send_json(event)

        self.callbacks[websocket] = deliver
        self.subscriptions[websocket] = set()

    def disconnect(self, websocket: WebSocket):
        """Remove WebSocket connection and clean up subscriptions"""
        callback = self.callbacks.pop(websocket, None)
        if callback is not None:
            self.broker.unsubscribe_all(callback)
        self.subscriptions.pop(websocket, None)

    def subscribe(self, websocket: WebSocket, topic: str):
        self.broker.subscribe(topic, self.callbacks[websocket])
        self.subscriptions[websocket].add(topic)

    def unsubscribe(self, websocket: WebSocket, topic: str):
        self.broker.unsubscribe(topic, self.callbacks[websocket])
        self.subscriptions[websocket].discard(topic)

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        await websocket.send_json(message)


# Global connection manager
manager = ConnectionManager(event_broker)


async def can_subscribe(db: AsyncSession, user_id: UUID, profile: Optional[Profile], topic: str) -> bool:
    """
    Decide whether a caller may receive events on a topic.

    - `projects` and any `project:{id}`: validators and consumers
    - `project:{id}`: generators, only for projects they own
    - `owner:{id}`: only the caller's own id
    - `wallet:{id}`: only the caller's own wallet
    """
    kind, _, ident = topic.partition(":")

    if topic == ALL_PROJECTS_TOPIC:
        return profile is not None and profile.role != UserRole.GENERATOR.value

    try:
        target_id = UUID(ident)
    except ValueError:
        return False

    if kind == "owner":
        return target_id == user_id

    if kind == "wallet":
        wallet = await db.scalar(select(Wallet).where(Wallet.user_id == user_id))
        return wallet is not None and wallet.id == target_id

    if kind == "project":
        if profile is None:
            return False
        if profile.role != UserRole.GENERATOR.value:
            return True
        project = await db.get(Project, target_id)
        return project is not None and project.user_id == user_id

    return False


@router.websocket("/events")
async def websocket_events(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
):
    """
    WebSocket endpoint for project lifecycle, sensor and wallet events.

    Authenticate with `?token=<access token>`, then send
    `{"type": "subscribe", "topic": "project:<id>"}` messages.

    Sessions are opened per lookup and closed before waiting on the socket,
    so idle subscribers hold no pooled connection.
    """
    payload = AuthService.validate_token(token, token_type="access") if token else None
    if payload and await RedisService().is_token_blacklisted(token):
        payload = None

    user_id = None
    if payload:
        try:
            user_id = UUID(payload.get("sub") or "")
        except ValueError:
            user_id = None

    if user_id is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    async with AsyncSessionLocal() as db:
        profile = await db.get(Profile, user_id)

    await manager.connect(websocket)

    try:
        await manager.send_personal_message(
            {"type": "connected", "message": "Send subscribe messages to receive events"},
            websocket,
        )

        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await manager.send_personal_message(
                    {"type": "error", "error": "Invalid JSON message"}, websocket
                )
                continue

            message_type = message.get("type")
            topic = message.get("topic")

            if message_type == "subscribe" and topic:
                async with AsyncSessionLocal() as db:
                    allowed = await can_subscribe(db, user_id, profile, topic)
                if allowed:
                    manager.subscribe(websocket, topic)
                    await manager.send_personal_message(
                        {"type": "subscribed", "topic": topic}, websocket
                    )
                else:
                    await manager.send_personal_message(
                        {"type": "error", "topic": topic, "error": "Not allowed to subscribe to this topic"},
                        websocket,
                    )

            elif message_type == "unsubscribe" and topic:
                manager.unsubscribe(websocket, topic)
                await manager.send_personal_message(
                    {"type": "unsubscribed", "topic": topic}, websocket
                )

            elif message_type == "ping":
                await manager.send_personal_message({"type": "pong"}, websocket)

            else:
                await manager.send_personal_message(
                    {"type": "error", "error": "Unknown message type"}, websocket
                )

    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
        manager.disconnect(websocket)
