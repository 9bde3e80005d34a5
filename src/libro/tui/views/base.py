from abc import ABC, abstractmethod
from typing import Iterable, Optional

from textual.containers import Vertical
from textual.widget import Widget
from textual.widgets import Static

from libro.tui.editor import TextEditor
from libro.tui.state import AppState, Mode

BOOK_WINDOW = 20

MODE_HINTS = {
    Mode.EDIT: "Ctrl+S:save  Ctrl+X:cancel  Ctrl+Q:quit  Ctrl+A/E:line start/end  Ctrl+U:clear  Ctrl+W:del word",
    Mode.SEARCH: "Enter:search  Esc:cancel  Ctrl+U:clear",
    Mode.CONFIRM: "y:confirm  n/Esc:cancel",
    Mode.FORM_INPUT: "Tab/Shift+Tab:field  Enter:edit/select  Backspace:clear genre/year  Ctrl+S:save book  Esc:done",
    Mode.GENRE_SELECT: "j/k:move  Enter:choose  Esc:cancel",
    Mode.YEAR_SELECT: "j/k:move  Enter:choose  Esc:cancel",
}


class View(ABC):
    name: str
    hints: str = "q:quit  ?:help"

    @abstractmethod
    def body(self, state: AppState, editor: TextEditor) -> Iterable[Widget]: ...

    def title(self, state: AppState) -> str:
        return self.name

    def render(self, state: AppState, editor: TextEditor) -> list[Widget]:
        hints = MODE_HINTS.get(state.mode, self.hints)
        return [
            Vertical(
                Static(self.title(state), id="breadcrumb"),
                *self.body(state, editor),
                Static(hints, id="hint-bar"),
            )
        ]


def window(selected: int, length: int, size: int = BOOK_WINDOW) -> range:
    """Indices of a fixed-size window that keeps `selected` visible."""
    if length <= size:
        return range(length)
    start = min(max(selected - size // 2, 0), length - size)
    return range(start, start + size)


def stars(rating: Optional[float]) -> str:
    if rating is None:
        return "-"
    filled = round(rating)
    return "★" * filled + "☆" * (5 - filled)
