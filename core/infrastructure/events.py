"""
In-memory event bus implementation.

Registry events are dispatched in-process to the handlers subscribed
for their type. Handler failures are logged and never reach the
publisher, since the registry operation has already completed.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """In-memory event bus dispatching to subscribers concurrently."""

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if any(type(existing) is type(handler) for existing in handlers):
            logger.debug(
                "%s already subscribed to %s", handler.__class__.__name__, event_type.__name__
            )
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = list(self._handlers.get(type(event), ()))
        if not handlers:
            logger.debug("Nobody subscribed to %s", event.event_type)
            return

        logger.info(
            "Publishing %s for %s to %d handler(s)",
            event.event_type,
            event.aggregate_id,
            len(handlers),
        )
        results = await asyncio.gather(
            *(handler.handle(event) for handler in handlers), return_exceptions=True
        )
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    "%s failed on %s %s",
                    handler.__class__.__name__,
                    event.event_type,
                    event.event_id,
                    exc_info=result,
                )


# Global event bus instance
event_bus = InMemoryEventBus()
