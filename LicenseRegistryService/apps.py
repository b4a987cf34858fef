"""
App configuration for License Registry Service.
"""
import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicenseRegistryServiceConfig(AppConfig):
    """App configuration for LicenseRegistryService."""

    name = "LicenseRegistryService"
    verbose_name = "License Registry Service"

    def ready(self):
        """Wire event handlers and, when enabled, tracing export."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if getattr(settings, "OTEL_ENABLED", False):
            from core.instrumentation import setup_opentelemetry

            setup_opentelemetry()
        else:
            logger.debug("OpenTelemetry export disabled")
