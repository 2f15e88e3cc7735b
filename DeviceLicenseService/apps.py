"""
App configuration for Device License Service.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that never serve requests or publish events
SKIP_STARTUP_COMMANDS = frozenset({"migrate", "makemigrations", "collectstatic", "check"})


class DeviceLicenseServiceConfig(AppConfig):
    """Wires tracing and domain event subscribers once the app registry is ready."""

    name = "DeviceLicenseService"
    verbose_name = "Device License Service"

    _initialized = False

    def ready(self):
        if len(sys.argv) > 1 and sys.argv[1] in SKIP_STARTUP_COMMANDS:
            return
        # Django's autoreloader runs ready() in the watcher process too
        if os.environ.get("RUN_MAIN") == "false":
            return
        if self._initialized:
            return

        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
        self._initialized = True
        logger.info("Tracing and event handlers initialised")
