"""
Dependency injection services.

Provides process-wide provider functions for infrastructure services.
"""

from infrastructure.services.providers import (
    get_event_dispatcher,
    get_localization_service,
    get_settings,
    reset_localization_service,
)

__all__ = [
    "get_event_dispatcher",
    "get_localization_service",
    "get_settings",
    "reset_localization_service",
]
