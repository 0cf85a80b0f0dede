"""
Session controller: the state machine behind the assistant screen.

Events are fed one at a time through ``handle``. Each event is fully applied
before the next one is read, and the caller redraws with ``render`` whenever
``handle`` reports a change.
"""

import logging
from typing import Any, Mapping, Optional

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from ie_assistant.core.input_buffer import DEFAULT_CHAR_LIMIT, InputBuffer
from ie_assistant.core.keymap import Action, ActionKind, Keymap, default_keymap
from ie_assistant.core.responses import ResponseFn, default_generator
from ie_assistant.core.viewport import TranscriptViewport
from ie_assistant.models.session import CLEARED_TEXT, Session, SessionState
from ie_assistant.models.turn import Speaker, Turn

logger = logging.getLogger(__name__)

TITLE = "Innovation Engine Assistant"
TITLE_STYLE = "bold #ffffff on #5a56e0"
INPUT_BORDER_STYLE = "color(62)"

# title, spacer, help line and the two panel borders around the viewport and input
CHROME_ROWS = 7
BORDER_COLUMNS = 4


class SessionController:
    def __init__(
        self,
        environment: str,
        keymap: Optional[Keymap] = None,
        generator: Optional[ResponseFn] = None,
        char_limit: int = DEFAULT_CHAR_LIMIT,
        input_height: int = 3,
        show_full_help: bool = False,
    ) -> None:
        self.keymap = keymap or default_keymap()
        self.generate = generator or default_generator()
        self.input_height = max(1, input_height)
        self.show_full_help = show_full_help
        self.session = Session(
            environment=environment,
            input_buffer=InputBuffer(char_limit=char_limit, height=self.input_height),
            viewport=TranscriptViewport(),
        )
        self._refresh_viewport()

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def transcript(self) -> list[Turn]:
        return self.session.transcript

    # event handling

    def handle(self, ev: Mapping[str, Any]) -> bool:
        """
        Apply one terminal event.

        Returns True when the screen should be redrawn. Closed sessions and
        events that cannot be interpreted are ignored.
        """
        if self.session.closed:
            return False

        type = ev.get('type', '') if isinstance(ev, Mapping) else ''

        if type == 'resize':
            width, height = ev.get('width'), ev.get('height')
            if not (isinstance(width, int) and isinstance(height, int)) or width <= 0 or height <= 0:
                logger.debug("ignoring malformed resize event: %r", ev)
                return False
            self.resize(width, height)

        elif type == 'key':
            key = ev.get('key')
            if not isinstance(key, str) or not key:
                logger.debug("ignoring malformed key event: %r", ev)
                return False
            action = self.keymap.resolve(key)
            if action is not None:
                self.dispatch(action)
            elif self.session.ready:
                if not self._edit(key, ev.get('character')):
                    return False
            else:
                return False

        elif type == 'paste':
            text = ev.get('text')
            if not isinstance(text, str) or not self.session.ready:
                return False
            self.session.input_buffer.insert(text.replace("\r\n", "\n").replace("\r", "\n"))

        elif type == 'tick':
            self.session.input_buffer.blink()

        else:
            logger.debug("ignoring unknown event: %r", ev)
            return False

        return not self.session.closed

    def resize(self, width: int, height: int) -> None:
        session = self.session
        session.width, session.height = width, height
        inner_width = max(1, width - BORDER_COLUMNS)
        viewport_height = max(1, height - self.input_height - CHROME_ROWS)

        session.input_buffer.set_width(inner_width)
        session.input_buffer.set_height(self.input_height)
        if session.state is SessionState.UNINITIALIZED:
            session.viewport.resize(inner_width, viewport_height)
            session.viewport.scroll_to_bottom()
            session.state = SessionState.READY
            logger.info("session ready at %dx%d (environment=%s)", width, height, session.environment)
        else:
            session.viewport.resize(inner_width, viewport_height)

    def dispatch(self, action: Action) -> None:
        if action.kind is ActionKind.QUIT:
            self.session.state = SessionState.CLOSED
            logger.info("session closed")
        elif action.kind is ActionKind.CLEAR:
            self.clear()
        elif action.kind is ActionKind.SEND:
            text = self.session.input_buffer.value()
            if text:
                self.submit(text)
                self.session.input_buffer.clear()
        elif action.kind is ActionKind.QUICK_ACTION:
            self.submit(action.query or "")

    def submit(self, query: str) -> None:
        """Append the user's query and the generated document to the transcript."""
        logger.info("query: %s", query)
        response = self.generate(query)
        self.session.transcript.append(Turn(Speaker.USER, query))
        self.session.transcript.append(Turn(Speaker.ASSISTANT, response))
        self._refresh_viewport()
        self.session.viewport.scroll_to_bottom()

    def clear(self) -> None:
        self.session.transcript = [Turn(Speaker.ASSISTANT, CLEARED_TEXT)]
        self.session.viewport.offset = 0
        self._refresh_viewport()

    def _refresh_viewport(self) -> None:
        self.session.viewport.set_content(self.session.joined_transcript())

    def _edit(self, key: str, character: Optional[str]) -> bool:
        buf = self.session.input_buffer
        viewport = self.session.viewport

        if key == "enter":
            buf.newline()
        elif key in ("backspace", "ctrl+h"):
            buf.delete_left()
        elif key == "delete":
            buf.delete_right()
        elif key == "left":
            buf.move_left()
        elif key == "right":
            buf.move_right()
        elif key == "up":
            buf.move_up()
        elif key == "down":
            buf.move_down()
        elif key == "home":
            buf.home()
        elif key == "end":
            buf.end()
        elif key == "pageup":
            viewport.page_up()
        elif key == "pagedown":
            viewport.page_down()
        elif isinstance(character, str) and len(character) == 1 and character.isprintable():
            buf.insert(character)
        else:
            return False
        return True

    # rendering

    def render(self) -> RenderableType:
        session = self.session
        if not session.ready:
            return Text("Loading...")

        width = session.width
        title = Text(TITLE.center(width)[:width], style=TITLE_STYLE)

        viewport = Panel(
            Text("\n".join(session.viewport.view())),
            box=box.SQUARE,
            width=width,
            subtitle=Text(f"env: {session.environment}"),
            subtitle_align="right",
        )
        input_area = Panel(
            session.input_buffer.render(),
            box=box.SQUARE,
            border_style=INPUT_BORDER_STYLE,
            width=width,
            height=self.input_height + 2,
        )
        help_line = Text(self.keymap.help_line(full=self.show_full_help), style="dim", no_wrap=True)
        help_line.truncate(width, overflow="ellipsis")

        return Group(title, Text(""), viewport, input_area, help_line)
