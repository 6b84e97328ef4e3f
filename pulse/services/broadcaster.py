"""Live fan-out of new feedback to connected viewers."""

import asyncio
import logging
from typing import Set

from pulse.utils.logging import debug_log

logger = logging.getLogger("Pulse.broadcaster")

NEW_FEEDBACK = "new_feedback"


class FeedbackBroadcaster:
    """
    Tracks live viewer queues and pushes messages to all of them.
    
    One instance is created per application and shared through dependency
    injection. Delivery is at-most-once: nothing is stored for viewers that
    connect later, and a viewer whose queue is full misses the message.
    """
    
    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscribers: Set[asyncio.Queue] = set()
    
    def subscribe(self) -> asyncio.Queue:
        """Register a new viewer and return the queue it should drain."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        logger.info(f"Viewer subscribed ({self.subscriber_count} connected)")
        return queue
    
    def unsubscribe(self, queue: asyncio.Queue) -> None:
        """Forget a viewer queue. Unknown queues are ignored."""
        self._subscribers.discard(queue)
        logger.info(f"Viewer unsubscribed ({self.subscriber_count} connected)")
    
    def publish(self, message: dict) -> int:
        """Queue `message` for every current viewer without waiting; return how many were reached."""
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(message)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Viewer queue full, dropping {message.get('type')} message")
        debug_log("Published %s to %d viewer(s)", message.get("type"), delivered)
        return delivered
    
    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
