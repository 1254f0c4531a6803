"""Slack integration settings."""

from infrastructure.configuration.base import IntegrationSettings


class SlackSettings(IntegrationSettings):
    """Slack API configuration.

    Environment Variables:
        SLACK_TOKEN: Slack bot token (xoxb-*) used for file uploads when the
            running adapter does not expose its own token
        SLACK_API_URL: Base URL of the Slack Web API

    Example:
        ```python
        from infrastructure.configuration import settings

        slack_token = settings.slack.SLACK_TOKEN
        ```
    """

    SLACK_TOKEN: str = ""
    SLACK_API_URL: str = "https://slack.com/api/"
