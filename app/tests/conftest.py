"""Shared fixtures for formatter tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import FormattingSettings
from infrastructure.platforms.models import (
    BotIdentity,
    FormatterContext,
    FormatterRequest,
)


@pytest.fixture
def formatting_settings():
    """Default formatting settings, independent of the environment."""
    return FormattingSettings(
        INBOUND_EVENT="chatops.formatter",
        DEFAULT_PIPELINE="text",
        MESSENGER_EVENT="messenger.message",
        SLACK_ATTACHMENT_EVENT="slack.attachment",
        MESSENGER_ELEMENT_LIMIT=10,
        MESSENGER_TEXT_LIMIT=300,
        SLACK_ATTACHMENT_LIMIT=50,
        SMART_QUOTES=True,
        NO_RESULTS_MESSAGE="No results found",
    )


@pytest.fixture
def mock_response():
    """Response handle with a Slack-like inbound message."""
    response = MagicMock()
    response.message = SimpleNamespace(
        raw_message={"channel": "C123"}, room="general", text="hello"
    )
    response.envelope = {"room": "general", "user": {"id": "U1"}}
    return response


@pytest.fixture
def bot_factory():
    """Factory for BotIdentity instances."""

    def _factory(adapter_name="slack", name="hubot", adapter_token="xoxb-test"):
        return BotIdentity(name=name, adapter_name=adapter_name, adapter_token=adapter_token)

    return _factory


@pytest.fixture
def emitter():
    """Outbound event emitter recording every call."""
    return MagicMock()


@pytest.fixture
def context_factory(bot_factory, emitter):
    """Factory for FormatterContext instances sharing the ``emitter`` mock."""

    def _factory(adapter_name="slack", **kwargs):
        return FormatterContext(bot=bot_factory(adapter_name=adapter_name, **kwargs), emit=emitter)

    return _factory


@pytest.fixture
def request_factory(mock_response):
    """Factory for FormatterRequest instances bound to ``mock_response``."""

    def _factory(**kwargs):
        kwargs.setdefault("response", mock_response)
        return FormatterRequest(**kwargs)

    return _factory


@pytest.fixture
def temp_file(tmp_path):
    """A temporary file standing in for a downloaded upload."""
    path = tmp_path / "report.csv"
    path.write_text("cpu,80\n")
    return path
