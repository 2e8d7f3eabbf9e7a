"""Event dispatcher for infrastructure event system.

Provides an in-process handler registry. Handlers are registered per event
type and called synchronously, on the dispatching thread, in registration
order.
"""

from threading import Lock
from typing import Any, Callable, Dict, List

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EventHandler = Callable[[Event], Any]


class EventDispatcher:
    """Registry of event handlers keyed by event type.

    The registry is guarded by a lock so handlers can be added or removed
    while other threads dispatch. Dispatch works on a snapshot of the
    handler list and never holds the lock while calling handlers.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._lock = Lock()

    def register(self, event_type: str, handler: EventHandler) -> EventHandler:
        """Register a handler for an event type.

        Args:
            event_type: The type of event to handle.
            handler: Callable receiving the Event.

        Returns:
            The handler, unchanged.
        """
        with self._lock:
            handlers = self._handlers.setdefault(event_type, [])
            handlers.append(handler)
            total = len(handlers)
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", "unknown"),
            event_type=event_type,
            total_handlers=total,
        )
        return handler

    def unregister(self, event_type: str, handler: EventHandler) -> bool:
        """Remove a previously registered handler.

        Returns:
            True if the handler was registered and has been removed.
        """
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            if not handlers:
                del self._handlers[event_type]
        return True

    def dispatch(self, event: Event) -> List[Any]:
        """Dispatch event synchronously to all registered handlers.

        If a handler raises an exception, it is caught and logged, and
        processing continues with the remaining handlers.

        Args:
            event: The event to dispatch.

        Returns:
            List of return values from the handlers that succeeded.
        """
        with self._lock:
            handlers = list(self._handlers.get(event.event_type, []))

        logger.debug(
            "dispatching_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        results = []
        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )
        return results

    def get_registered_events(self) -> List[str]:
        """Get list of all registered event types."""
        with self._lock:
            return list(self._handlers.keys())

    def get_handlers_for_event(self, event_type: str) -> List[EventHandler]:
        """Get all handlers registered for a specific event type."""
        with self._lock:
            return list(self._handlers.get(event_type, []))

    def clear(self) -> None:
        """Clear all registered handlers."""
        with self._lock:
            self._handlers.clear()
        logger.debug("cleared_all_event_handlers")


# Process-wide default dispatcher
default_dispatcher = EventDispatcher()


def register_event_handler(event_type: str):
    """Decorator to register a handler on the default dispatcher.

    Args:
        event_type: The type of event to handle.

    Returns:
        Decorator function that registers the handler.
    """

    def decorator(handler_func: EventHandler) -> EventHandler:
        return default_dispatcher.register(event_type, handler_func)

    return decorator


def dispatch_event(event: Event) -> List[Any]:
    """Dispatch an event through the default dispatcher."""
    return default_dispatcher.dispatch(event)


def get_registered_events() -> List[str]:
    """Get event types registered on the default dispatcher."""
    return default_dispatcher.get_registered_events()


def get_handlers_for_event(event_type: str) -> List[EventHandler]:
    """Get handlers registered on the default dispatcher for an event type."""
    return default_dispatcher.get_handlers_for_event(event_type)


def clear_handlers() -> None:
    """Clear all handlers on the default dispatcher.

    WARNING: This is intended for testing only.
    """
    default_dispatcher.clear()
