"""Platform clients package.

Provides client facades for platform SDKs.

Modules:
    slack: Slack SDK facade with OperationResult APIs and background uploader
"""

from infrastructure.platforms.clients.slack import SlackClientFacade, SlackFileUploader

__all__ = [
    "SlackClientFacade",
    "SlackFileUploader",
]
