"""Multi-line text buffer with a cursor and a vertical viewport.

The cursor is (line, column) in characters, never bytes. The buffer always
holds at least one line.
"""

from __future__ import annotations

DEFAULT_VISIBLE_LINES = 10


class TextEditor:
    def __init__(self, lines: list[str] | None = None, editable: bool = True):
        self.lines: list[str] = list(lines) if lines else [""]
        self.cursor: tuple[int, int] = (0, 0)
        self.scroll_offset = 0
        self.max_visible_lines = DEFAULT_VISIBLE_LINES
        self.editable = editable

    @classmethod
    def from_text(cls, text: str, editable: bool = True) -> "TextEditor":
        """Build a buffer from text, cursor at the end of the last line."""
        editor = cls(text.split("\n") if text else None, editable=editable)
        last = len(editor.lines) - 1
        editor.cursor = (last, len(editor.lines[last]))
        editor._adjust_scroll()
        return editor

    def get_text(self) -> str:
        return "\n".join(self.lines)

    def clear(self) -> None:
        self.lines = [""]
        self.cursor = (0, 0)
        self.scroll_offset = 0

    def set_visible_lines(self, count: int) -> None:
        self.max_visible_lines = max(1, count)
        self._adjust_scroll()

    def visible_lines(self) -> list[tuple[int, str]]:
        """(line index, text) pairs inside the viewport."""
        end = self.scroll_offset + self.max_visible_lines
        return list(enumerate(self.lines))[self.scroll_offset:end]

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor[0]]

    # =========================================================================
    # Mutation
    # =========================================================================

    def insert_char(self, char: str) -> None:
        if not self.editable:
            return
        line, col = self.cursor
        text = self.lines[line]
        self.lines[line] = text[:col] + char + text[col:]
        self.cursor = (line, col + len(char))
        self._adjust_scroll()

    def insert_newline(self) -> None:
        if not self.editable:
            return
        line, col = self.cursor
        text = self.lines[line]
        self.lines[line] = text[:col]
        self.lines.insert(line + 1, text[col:])
        self.cursor = (line + 1, 0)
        self._adjust_scroll()

    def delete_char(self) -> None:
        """Forward delete; at end of line, join the next line."""
        if not self.editable:
            return
        line, col = self.cursor
        text = self.lines[line]
        if col < len(text):
            self.lines[line] = text[:col] + text[col + 1:]
        elif line + 1 < len(self.lines):
            self.lines[line] = text + self.lines.pop(line + 1)
        self._adjust_scroll()

    def backspace(self) -> None:
        if not self.editable:
            return
        line, col = self.cursor
        if col > 0:
            text = self.lines[line]
            self.lines[line] = text[:col - 1] + text[col:]
            self.cursor = (line, col - 1)
        elif line > 0:
            tail = self.lines.pop(line)
            prev_len = len(self.lines[line - 1])
            self.lines[line - 1] += tail
            self.cursor = (line - 1, prev_len)
        self._adjust_scroll()

    def clear_current_line(self) -> None:
        if not self.editable:
            return
        self.lines[self.cursor[0]] = ""
        self.cursor = (self.cursor[0], 0)

    def delete_to_line_end(self) -> None:
        if not self.editable:
            return
        line, col = self.cursor
        self.lines[line] = self.lines[line][:col]

    def delete_word_backward(self) -> None:
        if not self.editable:
            return
        line, col = self.cursor
        text = self.lines[line]
        start = col
        while start > 0 and text[start - 1].isspace():
            start -= 1
        while start > 0 and not text[start - 1].isspace():
            start -= 1
        self.lines[line] = text[:start] + text[col:]
        self.cursor = (line, start)

    # =========================================================================
    # Movement (allowed on read-only buffers)
    # =========================================================================

    def move_cursor_left(self) -> None:
        line, col = self.cursor
        if col > 0:
            self.cursor = (line, col - 1)
        elif line > 0:
            self.cursor = (line - 1, len(self.lines[line - 1]))
        self._adjust_scroll()

    def move_cursor_right(self) -> None:
        line, col = self.cursor
        if col < len(self.lines[line]):
            self.cursor = (line, col + 1)
        elif line + 1 < len(self.lines):
            self.cursor = (line + 1, 0)
        self._adjust_scroll()

    def move_cursor_up(self) -> None:
        line, col = self.cursor
        if line > 0:
            self.cursor = (line - 1, min(col, len(self.lines[line - 1])))
        self._adjust_scroll()

    def move_cursor_down(self) -> None:
        line, col = self.cursor
        if line + 1 < len(self.lines):
            self.cursor = (line + 1, min(col, len(self.lines[line + 1])))
        self._adjust_scroll()

    def move_to_line_start(self) -> None:
        self.cursor = (self.cursor[0], 0)

    def move_to_line_end(self) -> None:
        self.cursor = (self.cursor[0], len(self.current_line))

    def _adjust_scroll(self) -> None:
        line = self.cursor[0]
        if line < self.scroll_offset:
            self.scroll_offset = line
        elif line >= self.scroll_offset + self.max_visible_lines:
            self.scroll_offset = line - self.max_visible_lines + 1
