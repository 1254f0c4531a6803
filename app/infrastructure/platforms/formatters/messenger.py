"""Messenger (fb) pipeline.

Messenger accepts short text messages and generic-template carousels.
Formatting that messenger cannot display is stripped, long text is split
into several messages and attachments become template cards, at most ten
per message.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

from infrastructure.configuration import settings
from infrastructure.configuration.infrastructure.formatting import FormattingSettings
from infrastructure.platforms.capabilities.models import (
    PLATFORM_MESSENGER,
    CapabilityDeclaration,
    PlatformCapability,
    create_capability_declaration,
)
from infrastructure.platforms.formatters.base import BaseResponseFormatter
from infrastructure.platforms.formatters.batching import split_text
from infrastructure.platforms.formatters.extraction import (
    extract_body_text,
    extract_content_url,
    extract_field_summary,
    extract_image,
    extract_title,
)
from infrastructure.platforms.formatters.markdown import PLAIN_MARKDOWN
from infrastructure.platforms.models import (
    Attachment,
    FormatterContext,
    FormatterRequest,
    TemplateElement,
)

PLACEHOLDER_SUBTITLE = "..."


class MessengerFormatter(BaseResponseFormatter[TemplateElement]):
    """Formatter for the messenger platform."""

    def __init__(self, formatting: Optional[FormattingSettings] = None):
        formatting = formatting or settings.formatting
        super().__init__(
            replace(PLAIN_MARKDOWN, smart_quotes=formatting.SMART_QUOTES),
            batch_size=formatting.MESSENGER_ELEMENT_LIMIT,
        )
        self._event = formatting.MESSENGER_EVENT
        self._text_limit = formatting.MESSENGER_TEXT_LIMIT

    def get_capabilities(self) -> CapabilityDeclaration:
        return create_capability_declaration(
            PLATFORM_MESSENGER,
            PlatformCapability.MESSAGING,
            PlatformCapability.INTERACTIVE_CARDS,
            PlatformCapability.IMPLICIT_ADDRESSING,
        )

    def render(self, attachment: Attachment) -> TemplateElement:
        """Build one template card.

        Every card has a title and at least one of a subtitle or an image;
        a placeholder subtitle fills in when both are missing.
        """
        image = extract_image(attachment)
        text = extract_field_summary(attachment, extract_body_text(attachment))

        subtitle = text if text else None
        if image is None and not text:
            subtitle = PLACEHOLDER_SUBTITLE

        return TemplateElement(
            title=extract_title(attachment),
            subtitle=subtitle,
            image_url=image,
            item_url=extract_content_url(attachment),
        )

    def send_message(
        self, request: FormatterRequest, context: FormatterContext, text: str
    ) -> None:
        rendered = self.renderer.render(text)
        if len(rendered) >= self._text_limit:
            segments = split_text(rendered, self._text_limit)
        else:
            segments = [rendered]

        for segment in segments:
            self._emit(request, context, {"text": segment})

    def send_attachments(
        self,
        request: FormatterRequest,
        context: FormatterContext,
        payloads: List[TemplateElement],
    ) -> None:
        for batch in self.batch(payloads):
            self._emit(
                request,
                context,
                {
                    "attachment": {
                        "type": "template",
                        "payload": {
                            "template_type": "generic",
                            "elements": [element.to_dict() for element in batch],
                        },
                    }
                },
            )

    def _emit(
        self,
        request: FormatterRequest,
        context: FormatterContext,
        message: Dict[str, Any],
    ) -> None:
        self._logger.debug("sending_messenger_payload", message=str(message))
        envelope = getattr(request.response, "envelope", None)
        context.emit(self._event, {"envelope": envelope, "message": message})
