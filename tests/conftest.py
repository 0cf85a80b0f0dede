"""
Pytest configuration and shared fixtures for the assistant tests.
"""
import pytest

from ie_assistant.core.controller import SessionController
from ie_assistant.core.domain import key_event, resize_event


@pytest.fixture
def controller():
    """Provide a controller that has not seen a terminal size yet."""
    return SessionController(environment="local")


@pytest.fixture
def ready_controller(controller):
    """Provide a controller sized to a 100x40 terminal."""
    controller.handle(resize_event(100, 40))
    return controller


def type_text(controller, text):
    for ch in text:
        controller.handle(key_event(ch, ch))


@pytest.fixture
def type_into(ready_controller):
    """Return a helper that types text into the ready controller."""
    return lambda text: type_text(ready_controller, text)
