"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the formatter
using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    FormattingSettings: Pipeline settings class (for testing)
    SlackSettings: Slack integration settings class (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    slack_token = settings.slack.SLACK_TOKEN
    default_pipeline = settings.formatting.DEFAULT_PIPELINE
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure.formatting import FormattingSettings
from infrastructure.configuration.integrations.slack import SlackSettings

__all__ = ["Settings", "settings", "FormattingSettings", "SlackSettings"]
