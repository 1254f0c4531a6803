"""Tests for the event bus as the formatter uses it.

The formatter subscribes to inbound response descriptions and publishes
messenger payloads and Slack attachment batches; these tests follow those
event types through registration, dispatch and removal.
"""

import pytest

from infrastructure.events.dispatcher import (
    clear_handlers,
    dispatch_event,
    get_handlers_for_event,
    get_registered_events,
    register_event_handler,
    unregister_event_handler,
)

FORMATTER_EVENT = "chatops.formatter"
MESSENGER_EVENT = "messenger.message"
SLACK_ATTACHMENT_EVENT = "slack.attachment"

pytestmark = pytest.mark.unit


class TestSubscription:
    def test_decorator_returns_handler_unchanged(self, recorder):
        handler = recorder("format_response")

        assert register_event_handler(FORMATTER_EVENT)(handler) is handler

    def test_handlers_listed_in_registration_order(self, recorder):
        first, second = recorder("first"), recorder("second")
        register_event_handler(MESSENGER_EVENT)(first)
        register_event_handler(MESSENGER_EVENT)(second)

        assert get_handlers_for_event(MESSENGER_EVENT) == [first, second]

    def test_registered_event_types(self, recorder):
        register_event_handler(FORMATTER_EVENT)(recorder("formatter"))
        register_event_handler(SLACK_ATTACHMENT_EVENT)(recorder("slack"))

        assert sorted(get_registered_events()) == [FORMATTER_EVENT, SLACK_ATTACHMENT_EVENT]

    def test_unknown_event_has_no_handlers(self):
        assert get_handlers_for_event(MESSENGER_EVENT) == []
        assert get_registered_events() == []

    def test_handler_list_is_a_copy(self, recorder):
        handler = recorder("formatter")
        register_event_handler(FORMATTER_EVENT)(handler)

        get_handlers_for_event(FORMATTER_EVENT).append(recorder("intruder"))

        assert get_handlers_for_event(FORMATTER_EVENT) == [handler]


class TestDispatch:
    def test_outbound_messenger_payload_reaches_transport(self, recorder, event_factory):
        register_event_handler(MESSENGER_EVENT)(recorder("transport"))
        payload = {"envelope": {"room": "general"}, "message": {"text": "hi"}}

        dispatch_event(event_factory(MESSENGER_EVENT, payload))

        [(name, event)] = recorder.calls
        assert name == "transport"
        assert event.payload is payload

    def test_handlers_run_in_registration_order(self, recorder, event_factory):
        register_event_handler(SLACK_ATTACHMENT_EVENT)(recorder("first", result=1))
        register_event_handler(SLACK_ATTACHMENT_EVENT)(recorder("second", result=2))

        results = dispatch_event(event_factory(SLACK_ATTACHMENT_EVENT))

        assert [name for name, _ in recorder.calls] == ["first", "second"]
        assert results == [1, 2]

    def test_only_matching_event_type_is_called(self, recorder, event_factory):
        register_event_handler(FORMATTER_EVENT)(recorder("formatter"))
        register_event_handler(MESSENGER_EVENT)(recorder("messenger"))

        dispatch_event(event_factory(MESSENGER_EVENT))

        assert [name for name, _ in recorder.calls] == ["messenger"]

    def test_no_subscribers(self, event_factory):
        assert dispatch_event(event_factory(SLACK_ATTACHMENT_EVENT)) == []

    def test_failing_handler_is_absorbed(self, recorder, event_factory):
        register_event_handler(FORMATTER_EVENT)(
            recorder("broken", error=RuntimeError("adapter down"))
        )
        register_event_handler(FORMATTER_EVENT)(recorder("healthy", result="delivered"))

        results = dispatch_event(event_factory())

        assert [name for name, _ in recorder.calls] == ["broken", "healthy"]
        assert results == ["delivered"]

    def test_handler_may_publish_while_dispatching(self, recorder, event_factory):
        register_event_handler(MESSENGER_EVENT)(recorder("transport"))

        @register_event_handler(FORMATTER_EVENT)
        def formatter(event):
            dispatch_event(event_factory(MESSENGER_EVENT, {"message": event.payload}))

        dispatch_event(event_factory(payload={"text": "hello"}))

        [(_, outbound)] = recorder.calls
        assert outbound.payload == {"message": {"text": "hello"}}


class TestRemoval:
    def test_unregister_keeps_other_handlers(self, recorder):
        first, second = recorder("first"), recorder("second")
        register_event_handler(FORMATTER_EVENT)(first)
        register_event_handler(FORMATTER_EVENT)(second)

        assert unregister_event_handler(FORMATTER_EVENT, first) is True

        assert get_handlers_for_event(FORMATTER_EVENT) == [second]

    def test_last_handler_drops_event_type(self, recorder):
        handler = recorder("formatter")
        register_event_handler(FORMATTER_EVENT)(handler)

        unregister_event_handler(FORMATTER_EVENT, handler)

        assert get_registered_events() == []

    def test_unregistered_handler_no_longer_called(self, recorder, event_factory):
        handler = recorder("formatter")
        register_event_handler(FORMATTER_EVENT)(handler)
        unregister_event_handler(FORMATTER_EVENT, handler)

        dispatch_event(event_factory())

        assert recorder.calls == []

    def test_unknown_handler(self, recorder):
        assert unregister_event_handler(FORMATTER_EVENT, recorder("never")) is False

    def test_clear_handlers(self, recorder):
        register_event_handler(FORMATTER_EVENT)(recorder("formatter"))
        register_event_handler(MESSENGER_EVENT)(recorder("messenger"))

        clear_handlers()

        assert get_registered_events() == []
