"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache
from threading import Lock
from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.events import EventDispatcher, default_dispatcher
from infrastructure.i18n import LocalizationService, create_localization_service


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_event_dispatcher() -> EventDispatcher:
    """
    Get the process-wide event dispatcher.

    Returns:
        EventDispatcher: The dispatcher change events are emitted on.
    """
    return default_dispatcher


_localization_service: Optional[LocalizationService] = None
_localization_lock = Lock()


def get_localization_service() -> LocalizationService:
    """
    Get application-scoped localization service singleton.

    Constructed once, under a lock, on first use and held for the process
    lifetime; the language preference it owns is process-wide state.

    Returns:
        LocalizationService: The shared localization service.

    Usage:
        i18n = get_localization_service()
        i18n.localize("Hello, {0}!", name)
    """
    global _localization_service
    service = _localization_service
    if service is not None:
        return service
    with _localization_lock:
        if _localization_service is None:
            settings = get_settings()
            _localization_service = create_localization_service(
                config=settings.i18n,
                dispatcher=get_event_dispatcher(),
            )
        return _localization_service


def reset_localization_service() -> None:
    """Drop the shared localization service.

    WARNING: This is intended for testing only.
    """
    global _localization_service
    with _localization_lock:
        _localization_service = None
