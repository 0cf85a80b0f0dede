"""
Multi-line editable input region with a soft character cap.
"""

from dataclasses import dataclass

from rich.cells import cell_len
from rich.text import Text

DEFAULT_CHAR_LIMIT = 500
DEFAULT_PLACEHOLDER = "Ask me about Kubernetes deployment tasks..."


@dataclass(frozen=True)
class _Row:
    start: int
    text: str
    line_end: bool


class InputBuffer:
    def __init__(
        self,
        char_limit: int = DEFAULT_CHAR_LIMIT,
        placeholder: str = DEFAULT_PLACEHOLDER,
        width: int = 40,
        height: int = 3,
    ) -> None:
        self.char_limit = char_limit
        self.placeholder = placeholder
        self.width = max(1, width)
        self.height = max(1, height)
        self.cursor_visible = True
        self._text = ""
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def value(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def insert(self, text: str) -> int:
        """
        Insert ``text`` at the cursor, dropping whatever would exceed the limit.

        Returns the number of characters actually inserted. Overflow is not an
        error.
        """
        room = self.char_limit - len(self._text)
        accepted = text[:max(0, room)]
        if accepted:
            self._text = self._text[:self._cursor] + accepted + self._text[self._cursor:]
            self._cursor += len(accepted)
        self.cursor_visible = True
        return len(accepted)

    def newline(self) -> int:
        return self.insert("\n")

    def set_value(self, text: str) -> None:
        self._text = text[:self.char_limit]
        self._cursor = len(self._text)
        self.cursor_visible = True

    def clear(self) -> None:
        self._text = ""
        self._cursor = 0
        self.cursor_visible = True

    def set_width(self, width: int) -> None:
        self.width = max(1, width)

    def set_height(self, height: int) -> None:
        self.height = max(1, height)

    def blink(self) -> None:
        self.cursor_visible = not self.cursor_visible

    # editing

    def delete_left(self) -> None:
        if self._cursor > 0:
            self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
            self._cursor -= 1
        self.cursor_visible = True

    def delete_right(self) -> None:
        if self._cursor < len(self._text):
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]
        self.cursor_visible = True

    def move_left(self) -> None:
        self._cursor = max(0, self._cursor - 1)
        self.cursor_visible = True

    def move_right(self) -> None:
        self._cursor = min(len(self._text), self._cursor + 1)
        self.cursor_visible = True

    def home(self) -> None:
        self._cursor = self._line_start(self._cursor)
        self.cursor_visible = True

    def end(self) -> None:
        self._cursor = self._line_end(self._cursor)
        self.cursor_visible = True

    def move_up(self) -> None:
        start = self._line_start(self._cursor)
        if start == 0:
            self._cursor = 0
        else:
            column = self._cursor - start
            prev_start = self._line_start(start - 1)
            self._cursor = min(prev_start + column, start - 1)
        self.cursor_visible = True

    def move_down(self) -> None:
        end = self._line_end(self._cursor)
        if end == len(self._text):
            self._cursor = end
        else:
            column = self._cursor - self._line_start(self._cursor)
            next_start = end + 1
            self._cursor = min(next_start + column, self._line_end(next_start))
        self.cursor_visible = True

    def _line_start(self, pos: int) -> int:
        return self._text.rfind("\n", 0, pos) + 1

    def _line_end(self, pos: int) -> int:
        end = self._text.find("\n", pos)
        return len(self._text) if end == -1 else end

    # rendering

    def _rows(self) -> list[_Row]:
        rows: list[_Row] = []
        offset = 0
        for line in self._text.split("\n"):
            chunks = self._chunk(line)
            # a full last row leaves no cell for the end-of-line cursor
            if cell_len(chunks[-1]) >= self.width:
                chunks.append("")
            start = offset
            for n, chunk in enumerate(chunks):
                rows.append(_Row(start, chunk, n == len(chunks) - 1))
                start += len(chunk)
            offset += len(line) + 1
        return rows

    def _chunk(self, line: str) -> list[str]:
        """Split ``line`` into pieces at most ``width`` terminal cells wide."""
        chunks: list[str] = []
        current = ""
        used = 0
        for ch in line:
            cells = cell_len(ch)
            if current and used + cells > self.width:
                chunks.append(current)
                current, used = "", 0
            current += ch
            used += cells
        chunks.append(current)
        return chunks

    def _cursor_row(self, rows: list[_Row]) -> int:
        for i, row in enumerate(rows):
            stop = row.start + len(row.text)
            if row.start <= self._cursor < stop or (self._cursor == stop and row.line_end):
                return i
        return len(rows) - 1

    def render(self, focused: bool = True) -> Text:
        """Return the visible rows, scrolled so the cursor stays in view."""
        show_cursor = focused and self.cursor_visible
        if not self._text:
            text = Text()
            if show_cursor:
                text.append(self.placeholder[:1] or " ", style="reverse dim")
                text.append(self.placeholder[1:self.width], style="dim")
            else:
                text.append(self.placeholder[:self.width], style="dim")
            return text

        rows = self._rows()
        cursor_row = self._cursor_row(rows)
        first = max(0, cursor_row - self.height + 1)
        out = Text()
        for i in range(first, min(len(rows), first + self.height)):
            row = rows[i]
            if i > first:
                out.append("\n")
            if show_cursor and i == cursor_row:
                col = self._cursor - row.start
                out.append(row.text[:col])
                out.append(row.text[col:col + 1] or " ", style="reverse")
                out.append(row.text[col + 1:])
            else:
                out.append(row.text)
        return out
