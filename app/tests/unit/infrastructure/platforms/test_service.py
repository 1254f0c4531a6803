"""Unit tests for FormatterService."""

from unittest.mock import MagicMock, patch

import pytest

from infrastructure.events import clear_handlers, register_event_handler
from infrastructure.operations import OperationStatus
from infrastructure.platforms.capabilities.models import PlatformCapability
from infrastructure.platforms.exceptions import FormatterNotFoundError
from infrastructure.platforms.formatters import (
    MessengerFormatter,
    SlackFormatter,
    TextFormatter,
    WebFormatter,
)
from infrastructure.platforms.models import FormatterRequest
from infrastructure.platforms.registry import FormatterRegistry
from infrastructure.platforms.service import FormatterService

pytestmark = pytest.mark.unit


@pytest.fixture
def uploader():
    return MagicMock()


@pytest.fixture
def registry(formatting_settings, uploader):
    reg = FormatterRegistry()
    reg.register_formatter(SlackFormatter(uploader=uploader, formatting=formatting_settings))
    reg.register_formatter(MessengerFormatter(formatting=formatting_settings))
    reg.register_formatter(TextFormatter(formatting=formatting_settings))
    reg.register_formatter(WebFormatter(formatting=formatting_settings))
    return reg


@pytest.fixture
def service(registry, emitter, formatting_settings):
    return FormatterService(registry=registry, emit=emitter, formatting=formatting_settings)


class TestPipelineSelection:
    @pytest.mark.parametrize(
        "adapter_name,expected",
        [
            ("slack", "slack"),
            ("fb", "fb"),
            ("web", "web"),
            ("text", "text"),
            ("SLACK", "slack"),
            ("shell", "text"),
            ("irc", "text"),
            (None, "text"),
        ],
    )
    def test_get_formatter(self, service, adapter_name, expected):
        assert service.get_formatter(adapter_name).platform_id == expected

    def test_missing_default_pipeline(self, formatting_settings, emitter):
        service = FormatterService(
            registry=FormatterRegistry(), emit=emitter, formatting=formatting_settings
        )

        with pytest.raises(FormatterNotFoundError):
            service.get_formatter("slack")

    def test_supports_capability(self, service):
        assert service.supports_capability("slack", PlatformCapability.FILE_SHARING) is True
        assert service.supports_capability("fb", PlatformCapability.FILE_SHARING) is False


class TestFormatResponse:
    def test_slack_message(self, service, bot_factory, mock_response):
        result = service.format_response(
            bot_factory("slack"), {"response": mock_response, "message": "**done**"}
        )

        assert result.is_success
        mock_response.reply.assert_called_once_with("*done*")

    def test_accepts_request_object(self, service, bot_factory, mock_response):
        request = FormatterRequest(response=mock_response, message="done")

        result = service.format_response(bot_factory("irc"), request)

        assert result.is_success
        mock_response.send.assert_called_once_with("done")

    def test_messenger_emits_through_emitter(self, service, bot_factory, mock_response, emitter):
        service.format_response(
            bot_factory("fb"), {"response": mock_response, "message": "hello"}
        )

        emitter.assert_called_once_with(
            "messenger.message",
            {"envelope": mock_response.envelope, "message": {"text": "hello"}},
        )

    def test_invalid_payload_reported(self, service, bot_factory):
        result = service.format_response(bot_factory("slack"), {"attachments": "oops"})

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "INVALIDMESSAGEFORMATERROR"

    def test_unexpected_error_reported(self, service, bot_factory, mock_response):
        mock_response.reply.side_effect = RuntimeError("adapter down")

        result = service.format_response(
            bot_factory("slack"), {"response": mock_response, "message": "hi"}
        )

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "FORMATTER_ERROR"
        assert "adapter down" in result.message

    def test_missing_default_pipeline_reported(self, formatting_settings, emitter, bot_factory):
        service = FormatterService(
            registry=FormatterRegistry(), emit=emitter, formatting=formatting_settings
        )

        result = service.format_response(bot_factory("irc"), {"message": "hi"})

        assert result.error_code == "FORMATTERNOTFOUNDERROR"

    def test_repeated_calls_are_independent(self, service, bot_factory, mock_response):
        bot = bot_factory("fb")

        service.format_response(bot, {"response": mock_response, "message": "one"})
        result = service.format_response(bot, {"response": mock_response, "message": "two"})

        assert result.is_success

    def test_adapter_bound_to_log_context(self, service, bot_factory, mock_response):
        with patch("infrastructure.platforms.service.bind_request_context") as mock_bind:
            service.format_response(
                bot_factory("web"), {"response": mock_response, "message": "hi"}
            )

        mock_bind.assert_called_once_with(adapter_name="web")


class TestPreprocessInbound:
    @pytest.mark.parametrize(
        "adapter_name,expected",
        [
            ("fb", "hubot help"),
            ("web", "hubot help"),
            ("slack", "help"),
            ("shell", "help"),
        ],
    )
    def test_prefix(self, service, bot_factory, adapter_name, expected):
        assert service.preprocess_inbound(bot_factory(adapter_name), "help") == expected


class TestDefaultEmitter:
    @pytest.fixture(autouse=True)
    def _clean_handlers(self):
        clear_handlers()
        yield
        clear_handlers()

    def test_events_dispatched_on_bus(self, registry, formatting_settings, bot_factory, mock_response):
        received = []
        register_event_handler("messenger.message")(received.append)
        service = FormatterService(registry=registry, formatting=formatting_settings)

        service.format_response(bot_factory("fb"), {"response": mock_response, "message": "hi"})

        assert len(received) == 1
        assert received[0].payload["message"] == {"text": "hi"}
