"""Response-scoped context binding for structured logging.

Every formatted response gets a correlation id and the adapter it targets,
so that the message, upload and attachment logs of a single response can be
grouped together.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(adapter_name="fb"):
        logger.info("messenger_payload_emitted")
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    adapter_name: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind response-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique response identifier. Auto-generated if not provided.
        adapter_name: Name of the chat adapter the response is formatted for.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id bound for the block.

    Example:
        with bind_request_context(adapter_name=bot.adapter_name) as correlation_id:
            formatter.deliver(request, context)
    """
    context: dict[str, Any] = {}

    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if adapter_name is not None:
        context["adapter_name"] = adapter_name

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_request_context() -> None:
    """Clear all response-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
