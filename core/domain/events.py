"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They decouple the license, team and purchase modules from side effects
such as activity logging and metrics.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses set their own attributes after calling ``super().__init__``
    and list them in ``data()`` for serialization.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        """Automatically set event_type for subclasses."""
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    @classmethod
    def _base(cls, aggregate_id, occurred_at: Optional[datetime] = None) -> Dict[str, Any]:
        return {
            "event_id": uuid4(),
            "occurred_at": occurred_at or datetime.now(timezone.utc),
            "aggregate_id": str(aggregate_id),
            "event_type": cls.__name__,
        }

    @property
    def team_id(self) -> Optional[UUID]:
        """Team the event belongs to, when it happened inside a team scope."""
        scope = getattr(self, "scope", None)
        if scope is not None and scope.is_team:
            return scope.id
        return getattr(self, "_team_id", None)

    def data(self) -> Dict[str, Any]:
        """Event-specific payload."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "data": self.data(),
        }


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """
        pass


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        pass
