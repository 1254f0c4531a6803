"""Response formatting pipeline settings."""

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from infrastructure.configuration.base import InfrastructureSettings


class FormattingSettings(InfrastructureSettings):
    """Limits, event names and defaults for the formatting pipelines.

    Environment Variables:
        FORMATTER_INBOUND_EVENT: Event carrying response descriptions to format
        FORMATTER_DEFAULT_PIPELINE: Pipeline used for unknown adapters (default: text)
        FORMATTER_MESSENGER_EVENT: Outbound event for messenger payloads
        FORMATTER_SLACK_ATTACHMENT_EVENT: Outbound event for Slack attachments
        FORMATTER_MESSENGER_ELEMENT_LIMIT: Template cards per messenger message (default: 10)
        FORMATTER_MESSENGER_TEXT_LIMIT: Characters per messenger text message (default: 300)
        FORMATTER_SLACK_ATTACHMENT_LIMIT: Attachments per Slack call (default: 50)
        FORMATTER_SMART_QUOTES: Replace straight quotes with typographic ones
        FORMATTER_NO_RESULTS_MESSAGE: Reply used when there is nothing to render
        FORMATTER_UPLOAD_WORKERS: Worker threads for background file uploads

    Example:
        ```python
        from infrastructure.configuration import settings

        limit = settings.formatting.SLACK_ATTACHMENT_LIMIT
        ```
    """

    model_config = SettingsConfigDict(env_prefix="FORMATTER_")

    INBOUND_EVENT: str = Field(
        default="chatops.formatter",
        description="Event type carrying response descriptions",
    )

    DEFAULT_PIPELINE: str = Field(
        default="text",
        description="Pipeline used when the adapter is unknown or absent",
    )

    MESSENGER_EVENT: str = Field(
        default="messenger.message",
        description="Outbound event for messenger text and template payloads",
    )

    SLACK_ATTACHMENT_EVENT: str = Field(
        default="slack.attachment",
        description="Outbound event for Slack structured attachments",
    )

    MESSENGER_ELEMENT_LIMIT: int = Field(
        default=10,
        description="Maximum template elements per messenger message",
    )

    MESSENGER_TEXT_LIMIT: int = Field(
        default=300,
        description="Maximum characters per messenger text message",
    )

    SLACK_ATTACHMENT_LIMIT: int = Field(
        default=50,
        description="Maximum attachments per Slack message",
    )

    SMART_QUOTES: bool = Field(
        default=True,
        description="Replace straight quotes with typographic equivalents",
    )

    NO_RESULTS_MESSAGE: str = Field(
        default="No results found",
        description="Reply sent by text pipelines when there is nothing to render",
    )

    UPLOAD_WORKERS: int = Field(
        default=2,
        description="Worker threads used for background file uploads",
    )

    @field_validator(
        "MESSENGER_ELEMENT_LIMIT",
        "MESSENGER_TEXT_LIMIT",
        "SLACK_ATTACHMENT_LIMIT",
        "UPLOAD_WORKERS",
    )
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        """Reject limits that would make chunking impossible."""
        if v < 1:
            raise ValueError(f"limit must be a positive integer (got {v})")
        return v
