"""In-process publish/subscribe broker for lifecycle and wallet events"""

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Set
from uuid import UUID

from bluechain_mrv.monitoring.metrics import events_published_total, subscriber_failures_total

logger = logging.getLogger(__name__)

Subscriber = Callable[[Dict[str, Any]], Awaitable[None]]

ALL_PROJECTS_TOPIC = "projects"


def project_topic(project_id: UUID) -> str:
    return f"project:{project_id}"


def owner_topic(user_id: UUID) -> str:
    return f"owner:{user_id}"


def wallet_topic(wallet_id: UUID) -> str:
    return f"wallet:{wallet_id}"


class EventBroker:
    """
    Topic-based fan-out of events to async subscribers.

    Delivery is best-effort: a subscriber that raises is logged and dropped,
    and publishing never raises into the caller.
    """

    def __init__(self):
        # Map of topic to active subscribers
        self.subscribers: Dict[str, Set[Subscriber]] = {}

    def subscribe(self, topic: str, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it"""
        self.subscribers.setdefault(topic, set()).add(callback)
        logger.debug(f"Subscribed {callback!r} to {topic}")

        def unsubscribe():
            self.unsubscribe(topic, callback)

        return unsubscribe

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        if topic in self.subscribers:
            self.subscribers[topic].discard(callback)
            # Clean up empty topics
            if not self.subscribers[topic]:
                del self.subscribers[topic]

    def unsubscribe_all(self, callback: Subscriber) -> None:
        for topic in list(self.subscribers):
            self.unsubscribe(topic, callback)

    def subscriber_count(self, topic: str) -> int:
        return len(self.subscribers.get(topic, ()))

    async def publish(self, topic: str, event: Dict[str, Any]) -> int:
        """
        Deliver an event to every subscriber of a topic.

        Returns:
            Number of subscribers that received the event
        """
        delivered = 0
        failed = []

        for callback in list(self.subscribers.get(topic, ())):
            try:
                await callback(event)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping subscriber on {topic} after delivery failure: {e}")
                failed.append(callback)

        for callback in failed:
            subscriber_failures_total.inc()
            self.unsubscribe(topic, callback)

        return delivered

    async def publish_event(
        self,
        event_type: str,
        data: Dict[str, Any],
        topics: Set[str],
    ) -> None:
        """Wrap `data` in an event envelope and publish it on each topic"""
        event = {
            "type": event_type,
            "data": data,
            "timestamp": datetime.utcnow().isoformat() + "Z",
        }
        events_published_total.labels(event_type=event_type).inc()

        for topic in topics:
            await self.publish(topic, event)

    async def publish_project_event(
        self,
        event_type: str,
        project_data: Dict[str, Any],
        project_id: UUID,
        owner_id: UUID,
    ) -> None:
        """Publish on the all-projects, per-project and per-owner topics"""
        topics = {ALL_PROJECTS_TOPIC, project_topic(project_id), owner_topic(owner_id)}
        await self.publish_event(event_type, project_data, topics)


# Global broker shared by the API and websocket routes
event_broker = EventBroker()


def get_event_broker() -> EventBroker:
    """FastAPI dependency returning the process-wide broker"""
    return event_broker
