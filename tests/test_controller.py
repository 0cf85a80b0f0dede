"""
Unit tests for the session controller state machine.
"""
from io import StringIO

import pytest
from rich.console import Console

from ie_assistant.core.controller import SessionController
from ie_assistant.core.domain import key_event, paste_event, resize_event, tick_event
from ie_assistant.models import CLEARED_TEXT, WELCOME_TEXT, SessionState, Speaker


def render_to_text(controller, width=100):
    console = Console(width=width, file=StringIO(), color_system=None)
    console.print(controller.render())
    return console.file.getvalue()


def test_new_session(controller):
    assert controller.state is SessionState.UNINITIALIZED
    assert controller.session.environment == "local"
    assert not controller.session.ready
    assert len(controller.transcript) == 1
    assert controller.transcript[0].text == WELCOME_TEXT
    assert controller.render().plain == "Loading..."


def test_first_resize_makes_ready(controller):
    assert controller.handle(resize_event(100, 40)) is True

    session = controller.session
    assert session.ready
    assert (session.width, session.height) == (100, 40)
    assert session.viewport.width == 96
    assert session.viewport.height == 30
    assert session.input_buffer.width == 96


def test_later_resize_resizes_in_place(ready_controller):
    ready_controller.handle(resize_event(60, 20))

    session = ready_controller.session
    assert session.state is SessionState.READY
    assert session.viewport.width == 56
    assert session.viewport.height == 10
    assert session.input_buffer.width == 56


def test_tiny_terminal_keeps_one_row(controller):
    controller.handle(resize_event(3, 4))

    assert controller.session.viewport.width == 1
    assert controller.session.viewport.height == 1


def test_typing_before_ready_is_ignored(controller):
    assert controller.handle(key_event("a", "a")) is False
    assert controller.session.input_buffer.value() == ""


def test_send_appends_user_and_assistant_turns(ready_controller, type_into):
    type_into("Create a deployment for my app")

    ready_controller.handle(key_event("ctrl+s"))

    transcript = ready_controller.transcript
    assert len(transcript) == 3
    assert transcript[1].speaker is Speaker.USER
    assert transcript[1].text == "Create a deployment for my app"
    assert transcript[2].speaker is Speaker.ASSISTANT
    assert "kubectl create deployment" in transcript[2].text
    assert "nginx:latest" in transcript[2].text
    assert ready_controller.session.input_buffer.value() == ""
    assert ready_controller.session.viewport.at_bottom


def test_send_with_empty_buffer_does_nothing(ready_controller):
    before = list(ready_controller.transcript)

    ready_controller.handle(key_event("ctrl+s"))

    assert ready_controller.transcript == before


def test_send_keeps_buffer_contents_verbatim(ready_controller, type_into):
    type_into("  deploy  ")

    ready_controller.handle(key_event("ctrl+s"))

    assert len(ready_controller.transcript) == 3
    assert ready_controller.transcript[1].text == "  deploy  "
    assert ready_controller.session.input_buffer.value() == ""


@pytest.mark.parametrize("n", [1, 2, 5])
def test_n_sends_grow_transcript(ready_controller, type_into, n):
    for i in range(n):
        type_into(f"question {i}")
        ready_controller.handle(key_event("ctrl+s"))

    assert len(ready_controller.transcript) == 1 + 2 * n


def test_clear_resets_transcript(ready_controller, type_into):
    type_into("deploy")
    ready_controller.handle(key_event("ctrl+s"))

    ready_controller.handle(key_event("ctrl+l"))

    assert len(ready_controller.transcript) == 1
    assert ready_controller.transcript[0].text == CLEARED_TEXT
    assert ready_controller.session.viewport.content == ready_controller.session.joined_transcript()
    assert ready_controller.session.state is SessionState.READY


def test_quick_action_with_empty_buffer(ready_controller):
    ready_controller.handle(key_event("f1"))

    transcript = ready_controller.transcript
    assert len(transcript) == 3
    assert transcript[1].text == "Create a deployment for my application"
    assert "kubectl create deployment" in transcript[2].text
    assert ready_controller.session.input_buffer.value() == ""


def test_quick_action_leaves_buffer_untouched(ready_controller, type_into):
    type_into("draft")

    ready_controller.handle(key_event("f2"))

    assert ready_controller.transcript[1].text == "Create a Kubernetes service"
    assert "kind: Service" in ready_controller.transcript[2].text
    assert ready_controller.session.input_buffer.value() == "draft"


def test_quit_closes_session(ready_controller):
    assert ready_controller.handle(key_event("ctrl+c")) is False
    assert ready_controller.state is SessionState.CLOSED

    assert ready_controller.handle(key_event("f1")) is False
    assert len(ready_controller.transcript) == 1


def test_escape_quits_before_ready(controller):
    controller.handle(key_event("escape"))

    assert controller.state is SessionState.CLOSED


@pytest.mark.parametrize("event", [
    {},
    {"type": "bogus"},
    {"type": "key"},
    {"type": "key", "key": 42},
    {"type": "resize", "width": -1, "height": 10},
    {"type": "resize", "width": "wide", "height": 10},
    {"type": "paste"},
    "not an event",
    None,
    {"type": "key", "key": "a", "character": 5},
    {"type": "key", "key": "a", "character": ["a"]},
])
def test_malformed_events_are_ignored(ready_controller, event):
    before = list(ready_controller.transcript)

    assert ready_controller.handle(event) is False

    assert ready_controller.state is SessionState.READY
    assert ready_controller.transcript == before
    assert ready_controller.session.width == 100


def test_editing_keys(ready_controller, type_into):
    type_into("ab")
    ready_controller.handle(key_event("enter"))
    type_into("c")
    ready_controller.handle(key_event("backspace"))
    ready_controller.handle(key_event("left"))
    type_into("X")

    assert ready_controller.session.input_buffer.value() == "abX\n"


def test_unhandled_key_does_not_redraw(ready_controller):
    assert ready_controller.handle(key_event("f12")) is False


def test_pageup_scrolls_transcript(ready_controller):
    for _ in range(3):
        ready_controller.handle(key_event("f3"))
    viewport = ready_controller.session.viewport
    assert viewport.at_bottom

    ready_controller.handle(key_event("pageup"))

    assert viewport.offset == viewport.max_offset - viewport.height


def test_paste_is_truncated_at_limit(ready_controller):
    ready_controller.handle(paste_event("x" * 600))

    assert len(ready_controller.session.input_buffer.value()) == 500


def test_tick_toggles_cursor(ready_controller):
    buf = ready_controller.session.input_buffer

    ready_controller.handle(tick_event())
    assert buf.cursor_visible is False

    ready_controller.handle(tick_event())
    assert buf.cursor_visible is True


def test_injected_generator():
    controller = SessionController(environment="staging", generator=lambda q: f"echo {q}")
    controller.handle(resize_event(80, 24))

    controller.handle(key_event("f1"))

    assert controller.transcript[-1].text == "echo Create a deployment for my application"


def test_render_frame(ready_controller):
    ready_controller.handle(key_event("f3"))

    out = render_to_text(ready_controller)

    assert "Innovation Engine Assistant" in out
    assert "ctrl+s send query" in out
    assert "env: local" in out
    assert "Ask me about Kubernetes deployment tasks..." in out


def test_render_full_help():
    controller = SessionController(environment="local", show_full_help=True)
    controller.handle(resize_event(120, 30))

    out = render_to_text(controller, width=120)

    assert "f1 deploy app" in out


@pytest.mark.parametrize("environment", ["[/]", "[bold]prod", "[red]"])
def test_environment_is_shown_verbatim(environment):
    controller = SessionController(environment=environment)
    controller.handle(resize_event(100, 40))

    out = render_to_text(controller)

    assert f"env: {environment}" in out


def test_full_help_fits_narrow_terminal():
    controller = SessionController(environment="local", show_full_help=True)
    controller.handle(resize_event(80, 24))

    out = render_to_text(controller, width=80)

    assert len(out.splitlines()) == 24
    assert out.splitlines()[-1].startswith("ctrl+s send query")
