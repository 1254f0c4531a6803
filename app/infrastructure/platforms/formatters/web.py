"""Web pipeline.

The web view displays HTML, so messages and attachments are turned into
markdown and rendered once with the engine's native HTML output.
"""

from dataclasses import replace
from typing import List, Optional

from infrastructure.configuration import settings
from infrastructure.configuration.infrastructure.formatting import FormattingSettings
from infrastructure.platforms.capabilities.models import (
    PLATFORM_WEB,
    CapabilityDeclaration,
    PlatformCapability,
    create_capability_declaration,
)
from infrastructure.platforms.formatters.base import BaseResponseFormatter
from infrastructure.platforms.formatters.markdown import NATIVE_MARKDOWN
from infrastructure.platforms.models import (
    Attachment,
    Field,
    FormatterContext,
    FormatterRequest,
)


def field_table(*fields: Field) -> str:
    """A markdown table with one column per field."""
    header = "| " + " | ".join(f.title for f in fields) + " |\n"
    divider = "| " + " | ".join("---" for _ in fields) + " |\n"
    row = "| " + " | ".join(f.value for f in fields) + " |\n"
    return header + divider + row + "\n"


class WebFormatter(BaseResponseFormatter[str]):
    """Formatter for the markdown/HTML web view."""

    def __init__(self, formatting: Optional[FormattingSettings] = None):
        formatting = formatting or settings.formatting
        super().__init__(replace(NATIVE_MARKDOWN, smart_quotes=formatting.SMART_QUOTES))
        self._no_results = formatting.NO_RESULTS_MESSAGE

    def get_capabilities(self) -> CapabilityDeclaration:
        return create_capability_declaration(
            PLATFORM_WEB,
            PlatformCapability.MESSAGING,
            PlatformCapability.RICH_TEXT,
            PlatformCapability.HTML,
            PlatformCapability.IMPLICIT_ADDRESSING,
        )

    def render(self, attachment: Attachment) -> str:
        """Markdown block for one attachment.

        Fields are sorted by title and taken two at a time. Two short fields
        share a table; any other field gets a table of its own.
        """
        block = ""
        if attachment.pretext:
            block += f"{attachment.pretext}\n\n"
        if attachment.title:
            block += f"### {attachment.title}\n\n"
        if attachment.text:
            block += f"{attachment.text}\n\n"

        fields = sorted(attachment.fields, key=lambda f: f.title)
        for index in range(0, len(fields), 2):
            pair = fields[index : index + 2]
            if len(pair) == 2 and pair[0].short and pair[1].short:
                block += field_table(*pair)
            else:
                for field in pair:
                    block += field_table(field)

        if attachment.image_url:
            block += f"![Image]({attachment.image_url})\n"
        return block + "\n"

    def send_message(
        self, request: FormatterRequest, context: FormatterContext, text: str
    ) -> None:
        self._send(request, self.renderer.render(text))

    def send_attachments(
        self,
        request: FormatterRequest,
        context: FormatterContext,
        payloads: List[str],
    ) -> None:
        self._send(request, self.renderer.render("".join(payloads)))

    def send_empty(self, request: FormatterRequest, context: FormatterContext) -> None:
        self._send(request, self.renderer.render(self._no_results))

    def _send(self, request: FormatterRequest, html: str) -> None:
        self._logger.debug("sending_web_response", html=html)
        request.response.send(html)
