"""Formatter module - wires the formatting pipelines into the bot runtime.

Usage:
    from modules.formatter import inbound_middleware, register_listener

    register_listener(bot)
    rewrite = inbound_middleware(bot)
"""

from modules.formatter.listener import (
    inbound_middleware,
    register_listener,
    unregister_listener,
)

__all__ = ["register_listener", "unregister_listener", "inbound_middleware"]
