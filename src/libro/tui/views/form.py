from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from libro.tui.state import FORM_FIELDS, FORM_LABELS, AppState, Mode, Screen
from libro.tui.views.base import View
from libro.tui.views.editor import editor_text

PLACEHOLDERS = {
    "authors": "comma separated",
    "translators": "optional, comma separated",
    "genre": "type or Enter to choose",
    "pages": "optional",
    "pub_year": "type or Enter to choose",
}


def form_table(state: AppState, editor) -> Table:
    form = state.form
    live = state.mode in (Mode.FORM_INPUT, Mode.EDIT)
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold")
    table.add_column(ratio=1)
    for index, (name, label) in enumerate(zip(FORM_FIELDS, FORM_LABELS)):
        current = index == form.field_index
        if current and live:
            value = editor_text(editor, show_cursor=True)
        else:
            raw = getattr(form, name)
            value = Text(raw) if raw else Text(PLACEHOLDERS.get(name, ""), style="dim")
        marker = "> " if current else "  "
        table.add_row(marker + label, value)
    return table


class BookFormView(View):
    name = "Add Book"
    hints = "Tab:field  Enter:edit  Ctrl+S:save  Esc:back to list"

    def title(self, state: AppState) -> str:
        if state.screen is Screen.EDIT_BOOK:
            return f"Edit Book (ID: {state.form.editing_book_id})"
        return "Add Book"

    def body(self, state, editor):
        return [Static(form_table(state, editor), id="form")]
