"""
Full-screen widget that shows the frame rendered by the session controller.
"""
from textual import events
from textual.message import Message
from textual.widgets import Static


class FrameView(Static):
    class Resized(Message, bubble=True):
        def __init__(self, width: int, height: int) -> None:
            super().__init__()
            self.width = width
            self.height = height

    def on_resize(self, event: events.Resize) -> None:
        self.post_message(self.Resized(event.size.width, event.size.height))
