"""Fixtures for the in-process event bus tests."""

import pytest

from infrastructure.events import Event, clear_handlers


@pytest.fixture(autouse=True)
def empty_event_bus():
    """Every test starts and ends with no subscribed handlers."""
    clear_handlers()
    yield
    clear_handlers()


@pytest.fixture
def event_factory():
    """Build bus events, defaulting to an inbound formatter request."""

    def _factory(event_type="chatops.formatter", payload=None, **kwargs):
        return Event(event_type=event_type, payload=payload or {}, **kwargs)

    return _factory


@pytest.fixture
def recorder():
    """Handler factory whose calls land in a shared, ordered log."""
    calls = []

    def _make(name, result=None, error=None):
        def handler(event):
            calls.append((name, event))
            if error is not None:
                raise error
            return result

        handler.__name__ = name
        return handler

    _make.calls = calls
    return _make
