"""Unit tests for the Slack pipeline."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from infrastructure.platforms.capabilities.models import PlatformCapability
from infrastructure.platforms.formatters.slack import SlackFormatter, resolve_channel

pytestmark = pytest.mark.unit


@pytest.fixture
def uploader():
    return MagicMock()


@pytest.fixture
def formatter(uploader, formatting_settings):
    return SlackFormatter(uploader=uploader, formatting=formatting_settings)


class TestResolveChannel:
    def test_raw_message_channel(self, mock_response):
        assert resolve_channel(mock_response) == "C123"

    def test_falls_back_to_room(self):
        response = SimpleNamespace(message=SimpleNamespace(raw_message=None, room="general"))

        assert resolve_channel(response) == "general"

    def test_raw_message_object(self):
        raw = SimpleNamespace(channel="C999")
        response = SimpleNamespace(message=SimpleNamespace(raw_message=raw, room="general"))

        assert resolve_channel(response) == "C999"

    def test_no_message(self):
        assert resolve_channel(SimpleNamespace()) is None


class TestSlackCapabilities:
    def test_platform_id(self, formatter):
        assert formatter.platform_id == "slack"

    def test_supports_file_sharing(self, formatter):
        assert formatter.supports(PlatformCapability.FILE_SHARING) is True

    def test_no_implicit_addressing(self, formatter):
        assert formatter.supports(PlatformCapability.IMPLICIT_ADDRESSING) is False


class TestSlackMessages:
    def test_markdown_is_converted_and_replied(
        self, formatter, request_factory, context_factory, mock_response, emitter
    ):
        request = request_factory(message="**strong**, *highlight*, \n>blockquote")

        formatter.deliver(request, context_factory())

        mock_response.reply.assert_called_once_with("*strong*, `highlight`, ```blockquote```")
        emitter.assert_not_called()

    def test_anchor_is_reduced(self, formatter, request_factory, context_factory, mock_response):
        request = request_factory(message='<a href="http://github.com/project">repo</a>')

        formatter.deliver(request, context_factory())

        mock_response.reply.assert_called_once_with("http://github.com/project")

    def test_message_with_file_replies_and_uploads(
        self, formatter, request_factory, context_factory, mock_response, uploader, emitter, temp_file
    ):
        request = request_factory(
            message="here is the file",
            file_path=str(temp_file),
            file_name="report.csv",
            attachments=[{"title": "a"}],
        )

        formatter.deliver(request, context_factory())

        mock_response.reply.assert_called_once_with("here is the file")
        uploader.upload.assert_called_once_with(
            str(temp_file), "report.csv", "C123", "xoxb-test", initial_comment=None
        )
        emitter.assert_not_called()

    def test_message_wins_over_attachments(
        self, formatter, request_factory, context_factory, mock_response, emitter
    ):
        request = request_factory(message="hi", attachments=[{"title": "a"}])

        formatter.deliver(request, context_factory())

        mock_response.reply.assert_called_once_with("hi")
        emitter.assert_not_called()


class TestSlackFiles:
    def test_upload_scheduled(
        self, formatter, request_factory, context_factory, uploader, temp_file
    ):
        request = request_factory(
            file_path=str(temp_file), file_name="report.csv", initial_comment="nice file"
        )

        formatter.deliver(request, context_factory())

        uploader.upload.assert_called_once_with(
            str(temp_file), "report.csv", "C123", "xoxb-test", initial_comment="nice file"
        )

    def test_token_falls_back_to_settings(
        self, formatter, request_factory, context_factory, uploader, temp_file
    ):
        request = request_factory(file_path=str(temp_file), file_name="report.csv")

        with patch("infrastructure.platforms.formatters.slack.settings") as mock_settings:
            mock_settings.slack.SLACK_TOKEN = "xoxb-env"
            formatter.deliver(request, context_factory(adapter_token=None))

        assert uploader.upload.call_args[0][3] == "xoxb-env"

    def test_missing_token_removes_file(
        self, formatter, request_factory, context_factory, uploader, temp_file
    ):
        request = request_factory(file_path=str(temp_file), file_name="report.csv")

        with patch("infrastructure.platforms.formatters.slack.settings") as mock_settings:
            mock_settings.slack.SLACK_TOKEN = ""
            formatter.deliver(request, context_factory(adapter_token=None))

        uploader.upload.assert_not_called()
        assert not temp_file.exists()

    def test_missing_channel_removes_file(
        self, formatter, request_factory, context_factory, uploader, temp_file
    ):
        response = MagicMock()
        response.message = SimpleNamespace(raw_message=None, room=None)
        request = request_factory(
            response=response, file_path=str(temp_file), file_name="report.csv"
        )

        formatter.deliver(request, context_factory())

        uploader.upload.assert_not_called()
        assert not temp_file.exists()


class TestSlackAttachments:
    def test_attachments_passed_through(
        self, formatter, request_factory, context_factory, emitter, mock_response
    ):
        attachments = [{"title": "App Crash", "color": "danger"}]
        request = request_factory(attachments=attachments)

        formatter.deliver(request, context_factory())

        emitter.assert_called_once_with(
            "slack.attachment",
            {"message": mock_response.message, "attachments": attachments},
        )

    def test_attachments_batched_by_fifty(
        self, formatter, request_factory, context_factory, emitter
    ):
        attachments = [{"title": str(i)} for i in range(51)]
        request = request_factory(attachments=attachments)

        formatter.deliver(request, context_factory())

        assert emitter.call_count == 2
        first, second = [c[0][1]["attachments"] for c in emitter.call_args_list]
        assert first == attachments[:50]
        assert second == attachments[50:]

    def test_empty_attachments_emit_once(
        self, formatter, request_factory, context_factory, emitter
    ):
        formatter.deliver(request_factory(attachments=[]), context_factory())

        emitter.assert_called_once()
        assert emitter.call_args[0][1]["attachments"] == []


class TestSlackInvalidRequest:
    def test_nothing_sent(self, formatter, request_factory, context_factory, mock_response, emitter):
        formatter.deliver(request_factory(), context_factory())

        mock_response.reply.assert_not_called()
        mock_response.send.assert_not_called()
        emitter.assert_not_called()
