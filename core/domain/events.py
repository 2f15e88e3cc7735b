"""
Domain event primitives.

Licensing operations announce what they did (key issued, license bound,
device banned, ...) as immutable events. Audit logging and metrics
subscribe to them instead of being called from the operations directly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4

_BASE_FIELDS = ("aggregate_id", "event_id", "occurred_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent(ABC):
    """
    Base class for domain events.

    Subclasses are frozen, keyword-only dataclasses that add payload
    fields. ``aggregate_id`` is the license key or the device display
    prefix the event is about.
    """

    aggregate_id: str
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def event_type(self) -> str:
        """Name of the concrete event class."""
        return self.__class__.__name__

    def payload(self) -> Dict[str, Any]:
        """Subclass fields as JSON-friendly values."""
        return {
            f.name: _plain(getattr(self, f.name))
            for f in fields(self)
            if f.name not in _BASE_FIELDS
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to a flat dictionary for logging."""
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            **self.payload(),
        }


class EventHandler(ABC):
    """Subscriber invoked for each published event of its types."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """Publish/subscribe port for domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to every handler subscribed to its type."""

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Register a handler for one event type."""
