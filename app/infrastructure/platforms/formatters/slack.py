"""Slack pipeline.

Plain messages are reduced to Slack mrkdwn, files are uploaded to the
originating channel, and attachments are already in Slack's own shape so
they are passed through in batches.
"""

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from infrastructure.configuration import settings
from infrastructure.configuration.infrastructure.formatting import FormattingSettings
from infrastructure.platforms.capabilities.models import (
    PLATFORM_SLACK,
    CapabilityDeclaration,
    PlatformCapability,
    create_capability_declaration,
)
from infrastructure.platforms.clients.slack import SlackFileUploader
from infrastructure.platforms.files import remove_file
from infrastructure.platforms.formatters.base import BaseResponseFormatter
from infrastructure.platforms.formatters.markdown import SLACK_MARKDOWN
from infrastructure.platforms.models import FormatterContext, FormatterRequest


def resolve_channel(response: Any) -> Optional[str]:
    """Find the channel the answered message came from.

    The adapter exposes the raw Slack event as ``message.raw_message``; the
    room name is used when the raw event is unavailable.
    """
    message = getattr(response, "message", None)
    raw = getattr(message, "raw_message", None)
    if isinstance(raw, Mapping):
        channel = raw.get("channel")
    else:
        channel = getattr(raw, "channel", None)
    return channel or getattr(message, "room", None)


class SlackFormatter(BaseResponseFormatter[Mapping[str, Any]]):
    """Formatter for Slack.

    Example:
        formatter = SlackFormatter()
        formatter.deliver(
            FormatterRequest(response=res, message="**done**"),
            FormatterContext(bot=bot, emit=emit),
        )
        # res.reply("*done*")
    """

    def __init__(
        self,
        uploader: Optional[SlackFileUploader] = None,
        formatting: Optional[FormattingSettings] = None,
    ):
        formatting = formatting or settings.formatting
        super().__init__(
            replace(SLACK_MARKDOWN, smart_quotes=formatting.SMART_QUOTES),
            batch_size=formatting.SLACK_ATTACHMENT_LIMIT,
        )
        self._uploader = uploader or SlackFileUploader()
        self._attachment_event = formatting.SLACK_ATTACHMENT_EVENT

    def get_capabilities(self) -> CapabilityDeclaration:
        return create_capability_declaration(
            PLATFORM_SLACK,
            PlatformCapability.MESSAGING,
            PlatformCapability.RICH_TEXT,
            PlatformCapability.INTERACTIVE_CARDS,
            PlatformCapability.FILE_SHARING,
        )

    def render(self, attachment: Mapping[str, Any]) -> Mapping[str, Any]:
        """Slack attachments need no field-level transformation."""
        return attachment

    def load_attachments(self, request: FormatterRequest) -> List[Mapping[str, Any]]:
        return list(request.attachments or [])

    def send_message(
        self, request: FormatterRequest, context: FormatterContext, text: str
    ) -> None:
        rendered = self.renderer.render(text)
        self._logger.debug("sending_slack_message", text=rendered)
        request.response.reply(rendered)

    def send_file(self, request: FormatterRequest, context: FormatterContext) -> None:
        channel = resolve_channel(request.response)
        token = context.bot.adapter_token or settings.slack.SLACK_TOKEN
        if not channel or not token:
            self._logger.error(
                "slack_upload_skipped",
                file_name=request.file_name,
                has_channel=bool(channel),
                has_token=bool(token),
            )
            remove_file(request.file_path)
            return

        self._logger.debug(
            "uploading_file_to_slack", file_name=request.file_name, channel=channel
        )
        self._uploader.upload(
            request.file_path,
            request.file_name,
            channel,
            token,
            initial_comment=request.initial_comment,
        )

    def send_attachments(
        self,
        request: FormatterRequest,
        context: FormatterContext,
        payloads: List[Mapping[str, Any]],
    ) -> None:
        # Chunks are emitted in order, but the transport may deliver them in any order
        message = getattr(request.response, "message", None)
        for batch in self.batch(payloads):
            payload: Dict[str, Any] = {"message": message, "attachments": batch}
            self._logger.debug("sending_slack_attachments", attachment_count=len(batch))
            context.emit(self._attachment_event, payload)
