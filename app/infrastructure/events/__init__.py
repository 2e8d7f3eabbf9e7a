"""Infrastructure event system - in-process event dispatcher.

Usage:

    from infrastructure.events import Event, register_event_handler, dispatch_event

    @register_event_handler("i18n.language_preferences.changed")
    def reload_labels(event: Event) -> None:
        ...

    dispatch_event(Event(event_type="i18n.language_preferences.changed"))
"""

from infrastructure.events.dispatcher import (
    EventDispatcher,
    clear_handlers,
    default_dispatcher,
    dispatch_event,
    get_handlers_for_event,
    get_registered_events,
    register_event_handler,
)
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "EventDispatcher",
    "default_dispatcher",
    "dispatch_event",
    "register_event_handler",
    "get_registered_events",
    "get_handlers_for_event",
    "clear_handlers",
]
