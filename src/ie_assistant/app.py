"""
Innovation Engine Assistant
"""

import asyncio
import logging

from textual import events, work
from textual.app import App, ComposeResult

from ie_assistant.core.controller import SessionController
from ie_assistant.core.domain import DomainEvent, key_event, paste_event, resize_event, tick_event
from ie_assistant.widgets import FrameView

logger = logging.getLogger(__name__)


class AssistantApp(App, inherit_bindings=False):
    """
    Terminal front end for a SessionController.

    Textual callbacks only translate and enqueue events; the pump worker applies
    them one at a time and redraws the whole frame after each.
    """
    CSS = """
Screen {
    overflow: hidden;
}
#frame {
    width: 100%;
    height: 100%;
}
    """
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, controller: SessionController, blink_interval: float = 0.5):
        super().__init__()
        self.controller = controller
        self.blink_interval = blink_interval
        self.event_q: asyncio.Queue[DomainEvent] = asyncio.Queue()

    def compose(self) -> ComposeResult:
        yield FrameView(self.controller.render(), id="frame")

    async def on_mount(self) -> None:
        self.set_interval(self.blink_interval, self._blink)
        self._pump()

        def initial_size():
            frame = self.query_one('#frame', FrameView)
            self.event_q.put_nowait(resize_event(frame.size.width, frame.size.height))

        self.call_after_refresh(initial_size)

    def on_frame_view_resized(self, message: FrameView.Resized) -> None:
        self.event_q.put_nowait(resize_event(message.width, message.height))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.event_q.put_nowait(key_event(event.key, event.character))

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.event_q.put_nowait(paste_event(event.text))

    def _blink(self) -> None:
        self.event_q.put_nowait(tick_event())

    @work(exclusive=True, group='pump')
    async def _pump(self) -> None:
        """
        Event processing loop.

        Event types handled:
        - 'resize': terminal dimensions, the first one makes the session ready
        - 'key': keymap actions or text editing
        - 'paste': text inserted into the input buffer
        - 'tick': cursor blink
        """
        frame = self.query_one('#frame', FrameView)

        while True:
            ev = await self.event_q.get()
            try:
                redraw = self.controller.handle(ev)
                if self.controller.session.closed:
                    self.exit()
                    return
                if redraw:
                    frame.update(self.controller.render())
            finally:
                self.event_q.task_done()
