"""Infrastructure event system - in-process event dispatcher.

The event bus carries inbound response descriptions to the formatter and
the formatter's outbound payloads (messenger messages, Slack attachments)
to whichever adapter transport is listening.

Usage:

    from infrastructure.events import Event, register_event_handler, dispatch_event

    @register_event_handler("slack.attachment")
    def post_attachments(event: Event) -> None:
        ...

    dispatch_event(
        Event(
            event_type="slack.attachment",
            payload={"message": message, "attachments": attachments},
        )
    )
"""

from infrastructure.events.dispatcher import (
    clear_handlers,
    dispatch_event,
    get_handlers_for_event,
    get_registered_events,
    register_event_handler,
    unregister_event_handler,
)
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "dispatch_event",
    "register_event_handler",
    "get_registered_events",
    "get_handlers_for_event",
    "clear_handlers",
    "unregister_event_handler",
]
