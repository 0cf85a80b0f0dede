"""
Scrollable, read-only view over the joined transcript text.

The viewport only knows the flattened string; the transcript stays the source
of truth and the content is recomputed from it after every change.
"""

from rich.console import Console
from rich.text import Text


def wrap_lines(content: str, width: int) -> list[str]:
    console = Console(width=width, color_system=None, force_terminal=False)
    lines = Text(content).wrap(console, width, overflow="fold")
    return [line.plain.rstrip() for line in lines]


class TranscriptViewport:
    def __init__(self, width: int = 80, height: int = 20) -> None:
        self.width = max(1, width)
        self.height = max(1, height)
        self.offset = 0
        self._content = ""
        self._lines: list[str] = [""]

    @property
    def content(self) -> str:
        return self._content

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def max_offset(self) -> int:
        return max(0, len(self._lines) - self.height)

    @property
    def at_bottom(self) -> bool:
        return self.offset >= self.max_offset

    def set_content(self, content: str) -> None:
        self._content = content
        self._lines = wrap_lines(content, self.width)
        self.offset = min(self.offset, self.max_offset)

    def scroll_to_bottom(self) -> None:
        self.offset = self.max_offset

    def scroll_up(self, n: int = 1) -> None:
        self.offset = max(0, self.offset - n)

    def scroll_down(self, n: int = 1) -> None:
        self.offset = min(self.max_offset, self.offset + n)

    def page_up(self) -> None:
        self.scroll_up(self.height)

    def page_down(self) -> None:
        self.scroll_down(self.height)

    def resize(self, width: int, height: int) -> None:
        """
        Reflow to the new size.

        A viewport pinned to the bottom stays pinned; otherwise the relative
        scroll position is kept.
        """
        was_at_bottom = self.at_bottom
        ratio = self.offset / self.max_offset if self.max_offset else 0.0

        self.width = max(1, width)
        self.height = max(1, height)
        self._lines = wrap_lines(self._content, self.width)

        if was_at_bottom:
            self.scroll_to_bottom()
        else:
            self.offset = min(self.max_offset, round(ratio * self.max_offset))

    def view(self) -> list[str]:
        visible = self._lines[self.offset:self.offset + self.height]
        return visible + [""] * (self.height - len(visible))
