"""Response formatters, one pipeline per chat surface."""

from infrastructure.platforms.formatters.base import BaseResponseFormatter
from infrastructure.platforms.formatters.markdown import (
    NATIVE_MARKDOWN,
    PLAIN_MARKDOWN,
    SLACK_MARKDOWN,
    MarkdownRenderer,
    RendererOverrides,
)
from infrastructure.platforms.formatters.messenger import MessengerFormatter
from infrastructure.platforms.formatters.slack import SlackFormatter
from infrastructure.platforms.formatters.text import TextFormatter
from infrastructure.platforms.formatters.web import WebFormatter

__all__ = [
    "BaseResponseFormatter",
    "MarkdownRenderer",
    "RendererOverrides",
    "SLACK_MARKDOWN",
    "PLAIN_MARKDOWN",
    "NATIVE_MARKDOWN",
    "MessengerFormatter",
    "SlackFormatter",
    "TextFormatter",
    "WebFormatter",
]
