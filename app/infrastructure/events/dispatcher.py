"""Event dispatcher for infrastructure event system.

Provides centralized event dispatcher with in-process handler registry.
Handlers are registered with decorators and called synchronously when
events are dispatched.
"""

from threading import Lock
from typing import Any, Callable, Dict, List

from infrastructure.logging import get_module_logger
from infrastructure.events.models import Event

logger = get_module_logger()

# Event handler registry: event_type -> list of handlers
EVENT_HANDLERS: Dict[str, List[Callable]] = {}

_handlers_lock = Lock()


def register_event_handler(event_type: str):
    """Decorator to register an event handler for a specific event type.

    Args:
        event_type: The type of event to handle (e.g., 'chatops.formatter').

    Returns:
        Decorator function that registers the handler.
    """

    def decorator(handler_func: Callable) -> Callable:
        with _handlers_lock:
            EVENT_HANDLERS.setdefault(event_type, []).append(handler_func)
            total = len(EVENT_HANDLERS[event_type])
        handler_name = getattr(handler_func, "__name__", "unknown")
        logger.debug(
            "registered_event_handler",
            handler=handler_name,
            event_type=event_type,
            total_handlers=total,
        )
        return handler_func

    return decorator


def unregister_event_handler(event_type: str, handler_func: Callable) -> bool:
    """Remove a handler registered for ``event_type``.

    Returns:
        True if the handler was registered and has been removed.
    """
    with _handlers_lock:
        handlers = EVENT_HANDLERS.get(event_type, [])
        if handler_func not in handlers:
            return False
        handlers.remove(handler_func)
        if not handlers:
            del EVENT_HANDLERS[event_type]
    logger.debug(
        "unregistered_event_handler",
        handler=getattr(handler_func, "__name__", "unknown"),
        event_type=event_type,
    )
    return True


def dispatch_event(event: Event) -> List[Any]:
    """Dispatch event synchronously to all registered handlers.

    All handlers for the event type are called in registration order. If a
    handler raises an exception, it is caught and logged, but processing
    continues with remaining handlers.

    Args:
        event: The event to dispatch.

    Returns:
        List of return values from the handlers that completed.
    """
    results = []
    with _handlers_lock:
        handlers = list(EVENT_HANDLERS.get(event.event_type, []))

    logger.debug(
        "dispatching_event",
        event_type=event.event_type,
        handler_count=len(handlers),
        correlation_id=str(event.correlation_id),
    )

    for handler in handlers:
        try:
            result = handler(event)
            results.append(result)
        except Exception as e:
            handler_name = getattr(handler, "__name__", "unknown")
            logger.error(
                "event_handler_failed",
                handler=handler_name,
                event_type=event.event_type,
                error=str(e),
                correlation_id=str(event.correlation_id),
            )

    return results


def get_registered_events() -> List[str]:
    """Get list of all registered event types."""
    return list(EVENT_HANDLERS.keys())


def get_handlers_for_event(event_type: str) -> List[Callable]:
    """Get all handlers registered for a specific event type.

    Args:
        event_type: The event type to query.

    Returns:
        List of handler functions.
    """
    return list(EVENT_HANDLERS.get(event_type, []))


def clear_handlers() -> None:
    """Clear all registered handlers.

    WARNING: This is intended for testing only.
    """
    with _handlers_lock:
        EVENT_HANDLERS.clear()
    logger.debug("cleared_all_event_handlers")
