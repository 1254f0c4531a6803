"""Plain-text (console) pipeline.

Markup is stripped from messages, attachments are laid out as a fixed-width
ascii table and files are reported by their local path.
"""

import os
from dataclasses import replace
from typing import List, Optional

from infrastructure.configuration import settings
from infrastructure.configuration.infrastructure.formatting import FormattingSettings
from infrastructure.platforms.capabilities.models import (
    PLATFORM_TEXT,
    CapabilityDeclaration,
    PlatformCapability,
    create_capability_declaration,
)
from infrastructure.platforms.formatters.base import BaseResponseFormatter
from infrastructure.platforms.formatters.markdown import PLAIN_MARKDOWN
from infrastructure.platforms.models import (
    Attachment,
    FormatterContext,
    FormatterRequest,
)

COLUMN_GAP = 3


def pad(text: str, width: int, padding: str = " ") -> str:
    """Append ``padding`` to ``text`` until it is ``width`` characters wide."""
    while len(text) < width:
        text += padding
    return text


def ascii_table(data: str) -> str:
    """Lay out newline-separated rows of tab-separated cells as a table.

    Every column but the last is padded to its widest cell plus three
    spaces.

    Example:
        >>> ascii_table("CPU\\t80%\\nMemory\\t2GB")
        'CPU      80%\\nMemory   2GB'
    """
    rows = [row.split("\t") for row in data.split("\n")]

    widths: List[int] = []
    for cells in rows:
        for index, cell in enumerate(cells):
            if index >= len(widths):
                widths.append(len(cell))
            elif len(cell) > widths[index]:
                widths[index] = len(cell)

    lines = []
    for cells in rows:
        line = ""
        for index, cell in enumerate(cells):
            if index == len(cells) - 1:
                line += cell
            else:
                line += pad(cell, widths[index] + COLUMN_GAP)
        lines.append(line)
    return "\n".join(lines)


class TextFormatter(BaseResponseFormatter[str]):
    """Formatter for plain-text surfaces, and the fallback for unknown adapters."""

    def __init__(self, formatting: Optional[FormattingSettings] = None):
        formatting = formatting or settings.formatting
        super().__init__(replace(PLAIN_MARKDOWN, smart_quotes=formatting.SMART_QUOTES))
        self._no_results = formatting.NO_RESULTS_MESSAGE

    def get_capabilities(self) -> CapabilityDeclaration:
        return create_capability_declaration(
            PLATFORM_TEXT,
            PlatformCapability.MESSAGING,
            PlatformCapability.FILE_SHARING,
        )

    def deliver(self, request: FormatterRequest, context: FormatterContext) -> None:
        """Files come first here; the message becomes the file's caption."""
        if request.has_file:
            self.send_file(request, context)
            return
        super().deliver(request, context)

    def render(self, attachment: Attachment) -> str:
        """Tab/newline rows for one attachment, ended by a blank row."""
        rows = ""
        if attachment.pretext:
            rows += f"{attachment.pretext}\n"

        if attachment.title and attachment.text:
            rows += f"{attachment.title}: {attachment.text}\n"
        elif attachment.title:
            rows += f"{attachment.title}\n"
        elif attachment.text:
            rows += f"{attachment.text}\n"

        for field in sorted(attachment.fields, key=lambda f: f.title):
            rows += f"{field.title}\t{field.value}\n"

        return rows + "\n"

    def send_message(
        self, request: FormatterRequest, context: FormatterContext, text: str
    ) -> None:
        self._send(request, self.renderer.render(text))

    def send_file(self, request: FormatterRequest, context: FormatterContext) -> None:
        path = os.path.realpath(request.file_path)
        self._logger.debug("file_available_locally", file_path=path)

        text = f"{request.message}\n" if request.message else ""
        text += f"File downloaded and available {path}"
        if request.initial_comment:
            text += f"\n{request.initial_comment}\n"
        self._send(request, text)

    def send_attachments(
        self,
        request: FormatterRequest,
        context: FormatterContext,
        payloads: List[str],
    ) -> None:
        self._send(request, ascii_table("".join(payloads)))

    def send_empty(self, request: FormatterRequest, context: FormatterContext) -> None:
        self._send(request, self._no_results)

    def _send(self, request: FormatterRequest, text: str) -> None:
        self._logger.debug("sending_text_response", text=text)
        request.response.send(text)
