"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and metrics.
"""

import logging

from activations.domain.events import ActivationRejected, LicenseActivated, LicenseReverified
from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    device_bans_total,
    license_activations_total,
    license_keys_issued_total,
    licenses_banned_total,
)
from devices.domain.events import DeviceBanned, DeviceUnbanned
from licenses.domain.events import LicenseBanned, LicenseKeyIssued, LicenseUnbanned

logger = logging.getLogger("audit")

AUDITED_EVENTS = (
    LicenseKeyIssued,
    LicenseActivated,
    LicenseReverified,
    ActivationRejected,
    LicenseBanned,
    LicenseUnbanned,
    DeviceBanned,
    DeviceUnbanned,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one structured record per domain event to the ``audit`` logger.
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
            extra=event.to_dict(),
        )


class MetricsEventHandler(EventHandler):
    """
    Event handler that updates Prometheus counters.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseActivated):
            license_activations_total.labels(outcome="allow_new").inc()
        elif isinstance(event, LicenseReverified):
            license_activations_total.labels(outcome="allow_reverify").inc()
        elif isinstance(event, ActivationRejected):
            license_activations_total.labels(outcome=event.outcome).inc()
        elif isinstance(event, LicenseKeyIssued):
            license_keys_issued_total.labels(tier=event.tier).inc()
        elif isinstance(event, LicenseBanned):
            licenses_banned_total.labels(source=event.source).inc()
        elif isinstance(event, DeviceBanned):
            if event.newly_added:
                device_bans_total.inc()
            if event.affected_license_keys:
                licenses_banned_total.labels(source="device_ban").inc(
                    len(event.affected_license_keys)
                )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
