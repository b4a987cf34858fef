"""
Event handlers for domain events.

These handlers process registry events for side effects such as
audit logging and metrics.
"""

import logging

from asgiref.sync import sync_to_async

from core import metrics
from core.domain.events import DomainEvent, EventHandler
from registry.domain.events import (
    LicenseGranted,
    LicenseMetadataUpdated,
    LicenseRevoked,
    LicensesBatchGranted,
    LicenseTransferred,
)

logger = logging.getLogger(__name__)

REGISTRY_EVENTS = (
    LicenseGranted,
    LicensesBatchGranted,
    LicenseTransferred,
    LicenseRevoked,
    LicenseMetadataUpdated,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Logs every registry event and appends it to the AuditLog table.
    """

    @staticmethod
    def _record(event: DomainEvent) -> None:
        from registry.infrastructure.models import AuditLog

        AuditLog.objects.get_or_create(
            event_id=event.event_id,
            defaults={
                "action": event.event_type,
                "aggregate_id": event.aggregate_id,
                "changes": event.to_dict()["payload"],
                "occurred_at": event.occurred_at,
            },
        )

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
        await sync_to_async(self._record)(event)


class RegistryMetricsEventHandler(EventHandler):
    """Event handler updating Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseGranted):
            metrics.licenses_granted_total.inc()
        elif isinstance(event, LicensesBatchGranted):
            metrics.license_batches_total.inc()
            skipped = event.requested - len(event.license_ids)
            if skipped > 0:
                metrics.license_batch_entries_skipped_total.inc(skipped)
        elif isinstance(event, LicenseTransferred):
            metrics.licenses_transferred_total.inc()
        elif isinstance(event, LicenseRevoked):
            metrics.licenses_revoked_total.inc()
        elif isinstance(event, LicenseMetadataUpdated):
            metrics.license_metadata_updates_total.inc()


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = RegistryMetricsEventHandler()

    for event_type in REGISTRY_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
