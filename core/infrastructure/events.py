"""
In-process event bus.

Handlers run inside the request that published the event. A failing
handler is logged and skipped; it never fails the licensing operation.
"""

import asyncio
import logging
from collections import defaultdict
from typing import DefaultDict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Event bus that dispatches to handlers held in a dict keyed by event type."""

    def __init__(self):
        self._handlers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe a handler to one event type.

        At most one handler of each class is kept per event type, so
        repeated registration (autoreload, test setup) is harmless.
        """
        handlers = self._handlers[event_type]
        if any(type(existing) is type(handler) for existing in handlers):
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", type(handler).__name__, event_type.__name__)

    async def publish(self, event: DomainEvent) -> None:
        handlers = list(self._handlers.get(type(event), ()))
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        results = await asyncio.gather(
            *(handler.handle(event) for handler in handlers), return_exceptions=True
        )
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    "Error handling %s with %s",
                    event.event_type,
                    type(handler).__name__,
                    exc_info=result,
                )


# Global event bus instance
event_bus = InMemoryEventBus()
