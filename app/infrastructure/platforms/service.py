"""Formatter service coordinating pipeline selection and delivery.

This service:
- Selects the pipeline for the bot's adapter (falling back to text)
- Runs the pipeline for one response description
- Absorbs pipeline errors so a bad response never crashes the bot
- Rewrites inbound text for surfaces where the bot is addressed implicitly

Usage:
    from infrastructure.platforms import FormatterService

    service = FormatterService()
    service.format_response(bot, FormatterRequest.from_payload(payload))
"""

from typing import Any, Dict, Mapping, Optional, Union

from infrastructure.configuration import settings
from infrastructure.configuration.infrastructure.formatting import FormattingSettings
from infrastructure.events import Event, dispatch_event
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.operations import OperationResult
from infrastructure.platforms.capabilities.models import PlatformCapability
from infrastructure.platforms.exceptions import PlatformError
from infrastructure.platforms.formatters import BaseResponseFormatter
from infrastructure.platforms.models import (
    BotIdentity,
    Emitter,
    FormatterContext,
    FormatterRequest,
)
from infrastructure.platforms.registry import FormatterRegistry, get_formatter_registry

logger = get_module_logger()


def emit_event(event_type: str, payload: Dict[str, Any]) -> None:
    """Default emitter: publish the payload on the in-process event bus."""
    dispatch_event(Event(event_type=event_type, payload=payload))


class FormatterService:
    """Routes response descriptions to the pipeline of the running adapter.

    Routing is stateless: every call looks up the pipeline again and no
    state is kept between calls.

    Attributes:
        _registry: Registry holding the pipelines
        _emit: Outbound event emitter handed to pipelines
        _default_pipeline: Pipeline id used for unknown adapters
    """

    def __init__(
        self,
        registry: Optional[FormatterRegistry] = None,
        emit: Optional[Emitter] = None,
        formatting: Optional[FormattingSettings] = None,
    ) -> None:
        formatting = formatting or settings.formatting
        self._registry = registry or get_formatter_registry()
        self._emit = emit or emit_event
        self._default_pipeline = formatting.DEFAULT_PIPELINE
        self._logger = logger.bind(component="formatter_service")

    def get_formatter(self, adapter_name: Optional[str]) -> BaseResponseFormatter:
        """Pipeline for ``adapter_name`` (case-insensitive), else the default.

        Raises:
            FormatterNotFoundError: If the default pipeline is not registered.
        """
        formatter = self._registry.get_formatter(adapter_name)
        if formatter is None:
            self._logger.debug(
                "falling_back_to_default_formatter",
                adapter_name=adapter_name,
                default=self._default_pipeline,
            )
            formatter = self._registry.get_formatter_or_raise(self._default_pipeline)
        return formatter

    def format_response(
        self,
        bot: BotIdentity,
        request: Union[FormatterRequest, Mapping[str, Any]],
    ) -> OperationResult:
        """Format and deliver one response description.

        Args:
            bot: The running bot
            request: A FormatterRequest, or the raw inbound payload

        Returns:
            OperationResult; failures are logged and reported, never raised
        """
        with bind_request_context(adapter_name=bot.adapter_name):
            log = self._logger.bind(adapter_name=bot.adapter_name)
            try:
                if not isinstance(request, FormatterRequest):
                    request = FormatterRequest.from_payload(request)
                formatter = self.get_formatter(bot.adapter_name)
                log.debug("formatting_response", pipeline=formatter.platform_id)
                formatter.deliver(request, FormatterContext(bot=bot, emit=self._emit))
            except PlatformError as e:
                log.error("response_formatting_failed", error=str(e))
                return OperationResult.permanent_error(
                    message=f"Response formatting failed: {e}",
                    error_code=e.__class__.__name__.upper(),
                )
            except Exception as e:
                log.exception("unexpected_formatting_error", error=str(e))
                return OperationResult.permanent_error(
                    message=f"Unexpected error formatting response: {e}",
                    error_code="FORMATTER_ERROR",
                )

        return OperationResult.success(message="Response delivered")

    def preprocess_inbound(self, bot: BotIdentity, text: str) -> str:
        """Prefix the bot's name on surfaces where users never mention it."""
        formatter = self.get_formatter(bot.adapter_name)
        if formatter.supports(PlatformCapability.IMPLICIT_ADDRESSING):
            return f"{bot.name} {text}"
        return text

    def supports_capability(
        self, adapter_name: Optional[str], capability: PlatformCapability
    ) -> bool:
        """Check if the adapter's pipeline supports a specific capability."""
        return self.get_formatter(adapter_name).supports(capability)
