"""Bot runtime hooks for response formatting.

Two hooks connect the runtime to the pipelines: an event handler that
formats every response description published on the inbound event, and a
middleware that rewrites inbound text before command parsing.
"""

from typing import Callable, Optional

from infrastructure.configuration import settings
from infrastructure.events import (
    Event,
    register_event_handler,
    unregister_event_handler,
)
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from infrastructure.platforms import BotIdentity, FormatterService

logger = get_module_logger()


def register_listener(
    bot: BotIdentity,
    service: Optional[FormatterService] = None,
    event_type: Optional[str] = None,
) -> Callable[[Event], OperationResult]:
    """Subscribe the formatter to the inbound response event.

    Args:
        bot: The running bot
        service: Formatter service (a default one is created if omitted)
        event_type: Inbound event name (defaults to settings.formatting.INBOUND_EVENT)

    Returns:
        The registered handler.
    """
    service = service or FormatterService()
    event_type = event_type or settings.formatting.INBOUND_EVENT

    def handle_formatter_event(event: Event) -> OperationResult:
        logger.debug(
            "formatter_event_received",
            adapter_name=bot.adapter_name,
            correlation_id=str(event.correlation_id),
        )
        return service.format_response(bot, event.payload)

    register_event_handler(event_type)(handle_formatter_event)
    logger.info(
        "formatter_listener_registered",
        event_type=event_type,
        adapter_name=bot.adapter_name,
    )
    return handle_formatter_event


def unregister_listener(
    handler: Callable[[Event], OperationResult], event_type: Optional[str] = None
) -> bool:
    """Detach a handler returned by ``register_listener``.

    Returns:
        True if the handler was subscribed.
    """
    event_type = event_type or settings.formatting.INBOUND_EVENT
    removed = unregister_event_handler(event_type, handler)
    if removed:
        logger.info("formatter_listener_unregistered", event_type=event_type)
    return removed


def inbound_middleware(
    bot: BotIdentity, service: Optional[FormatterService] = None
) -> Callable[[str], str]:
    """Build the hook that rewrites inbound message text."""
    service = service or FormatterService()

    def rewrite_inbound_text(text: str) -> str:
        return service.preprocess_inbound(bot, text)

    return rewrite_inbound_text
