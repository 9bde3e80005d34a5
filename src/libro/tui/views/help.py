from rich.table import Table
from textual.widgets import Static

from libro.tui.keys import KEYMAPS, describe
from libro.tui.state import Mode
from libro.tui.views.base import View


def action_label(action) -> str:
    label = type(action).__name__
    view = getattr(action, "view", None)
    return f"{label} ({view.value})" if view is not None else label


def keymap_table(mode: Mode) -> Table:
    table = Table(title=mode.value, show_edge=False, expand=True)
    table.add_column("Key", style="bold")
    table.add_column("Action")
    for (chord, code), action in KEYMAPS[mode].items():
        table.add_row(describe(chord, code), action_label(action))
    return table


class HelpView(View):
    name = "Help"
    hints = "?/Esc:close  q:quit"

    def body(self, state, editor):
        shown = [Mode.NORMAL, Mode.EDIT, Mode.FORM_INPUT, Mode.SEARCH, Mode.CONFIRM, Mode.GENRE_SELECT]
        widgets = [Static(keymap_table(mode), classes="keymap") for mode in shown]
        widgets.append(
            Static("Other printable keys type text in Edit, Search and FormInput modes.", id="help-note")
        )
        return widgets
