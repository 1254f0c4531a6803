"""Response formatting for chat surfaces (Slack, messenger, plain text, web).

Key Components:
    - Formatter Service: pipeline selection, delivery and error absorption
    - Formatter Registry: thread-safe pipeline lookup
    - Formatters: one pipeline per surface, with its markdown override table
    - Capabilities: what each surface can display or do
    - Clients: Slack SDK facade and background file uploader
    - Models: response descriptions, attachments and template cards
"""

from infrastructure.platforms.capabilities.models import (
    CapabilityDeclaration,
    PlatformCapability,
    create_capability_declaration,
)
from infrastructure.platforms.clients import SlackClientFacade, SlackFileUploader
from infrastructure.platforms.exceptions import (
    CapabilityNotSupportedError,
    FormatterAlreadyRegisteredError,
    FormatterNotFoundError,
    InvalidMessageFormatError,
    PlatformError,
)
from infrastructure.platforms.formatters import (
    BaseResponseFormatter,
    MessengerFormatter,
    SlackFormatter,
    TextFormatter,
    WebFormatter,
)
from infrastructure.platforms.models import (
    Attachment,
    BotIdentity,
    Field,
    FormatterContext,
    FormatterRequest,
    TemplateElement,
)
from infrastructure.platforms.registry import (
    FormatterRegistry,
    build_default_registry,
    get_formatter_registry,
)
from infrastructure.platforms.service import FormatterService, emit_event

__all__ = [
    # Service
    "FormatterService",
    "emit_event",
    # Registry
    "FormatterRegistry",
    "build_default_registry",
    "get_formatter_registry",
    # Capabilities
    "CapabilityDeclaration",
    "PlatformCapability",
    "create_capability_declaration",
    # Clients
    "SlackClientFacade",
    "SlackFileUploader",
    # Exceptions
    "PlatformError",
    "FormatterNotFoundError",
    "FormatterAlreadyRegisteredError",
    "CapabilityNotSupportedError",
    "InvalidMessageFormatError",
    # Formatters
    "BaseResponseFormatter",
    "MessengerFormatter",
    "SlackFormatter",
    "TextFormatter",
    "WebFormatter",
    # Models
    "Attachment",
    "BotIdentity",
    "Field",
    "FormatterContext",
    "FormatterRequest",
    "TemplateElement",
]
