"""
App configuration for License Console.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseConsoleConfig(AppConfig):
    """App configuration for LicenseConsole."""

    name = "LicenseConsole"
    verbose_name = "License Console"

    def ready(self):
        """Register domain event handlers once the app registry is loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
