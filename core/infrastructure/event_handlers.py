"""
Event handlers for domain events.

These handlers process domain events in-process for side effects
like the team activity log and business metrics.
"""

import logging
import re

from asgiref.sync import sync_to_async

from core import metrics
from core.domain.events import DomainEvent, EventBus, EventHandler
from licenses.domain.events import (
    ActivationResent,
    LicenseCreated,
    LicenseEmailChanged,
    LicenseRemoved,
)
from purchases.domain.events import PurchaseApplied
from teams.domain.events import (
    InvitationCancelled,
    MemberInvited,
    MemberRemoved,
    MemberRoleChanged,
    TeamCreated,
    TeamRenamed,
)

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (LicenseCreated, LicenseRemoved, LicenseEmailChanged, ActivationResent)
TEAM_EVENTS = (
    TeamCreated,
    TeamRenamed,
    MemberInvited,
    InvitationCancelled,
    MemberRoleChanged,
    MemberRemoved,
)
ALL_EVENTS = LICENSE_EVENTS + TEAM_EVENTS + (PurchaseApplied,)


def activity_action(event: DomainEvent) -> str:
    """``LicenseCreated`` -> ``license_created``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", event.event_type).lower()


class ActivityLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Every event is written to the audit log; events that happened inside a
    team are also stored as a TeamActivity row.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )

        if event.team_id is None:
            return
        await self._record(event)

    @sync_to_async
    def _record(self, event: DomainEvent) -> None:
        from teams.infrastructure.models import TeamActivity

        actor_id = getattr(event, "actor_id", None)
        TeamActivity.objects.create(
            team_id=event.team_id,
            admin_id=actor_id,
            action=activity_action(event),
            details=event.data(),
        )


class MetricsEventHandler(EventHandler):
    """Event handler that feeds business counters."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseCreated):
            metrics.licenses_created_total.labels(scope_kind=event.scope.kind.value).inc()
        elif isinstance(event, LicenseRemoved):
            metrics.licenses_removed_total.labels(scope_kind=event.scope.kind.value).inc()
        elif isinstance(event, PurchaseApplied):
            scope_kind = event.scope.kind.value
            metrics.purchases_applied_total.labels(scope_kind=scope_kind, replayed="false").inc()
            metrics.licenses_purchased_total.labels(scope_kind=scope_kind).inc(
                event.licenses_added
            )
        elif isinstance(event, TEAM_EVENTS):
            metrics.team_events_total.labels(event_type=event.event_type).inc()


def register_event_handlers(bus: EventBus = None) -> None:
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    activity_handler = ActivityLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in ALL_EVENTS:
        bus.subscribe(event_type, activity_handler)
        bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
