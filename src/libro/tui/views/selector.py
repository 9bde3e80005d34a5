from rich.text import Text
from textual.widgets import Static

from libro.tui.state import GENRES, AppState, Mode, selectable_years
from libro.tui.views.base import View, window
from libro.tui.views.form import form_table

SELECTOR_WINDOW = 10


def choice_list(items: list[str], selected: int) -> Text:
    text = Text()
    for n, index in enumerate(window(selected, len(items), SELECTOR_WINDOW)):
        if n:
            text.append("\n")
        if index == selected:
            text.append(f"> {items[index]}", style="reverse")
        else:
            text.append(f"  {items[index]}")
    return text


class SelectorView(View):
    """Book form with the genre or year chooser open beside it."""

    name = "Choose"

    def title(self, state: AppState) -> str:
        return "Choose genre" if state.mode is Mode.GENRE_SELECT else "Choose year"

    def body(self, state, editor):
        if state.mode is Mode.GENRE_SELECT:
            items, selected = GENRES, state.form.genre_selected_index
        else:
            items = [str(year) for year in selectable_years()]
            selected = state.form.year_selected_index
        return [
            Static(form_table(state, editor), id="form"),
            Static(choice_list(items, selected), id="selector"),
        ]
