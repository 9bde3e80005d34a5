from textual.widgets import Static

from libro.tui.state import AppState
from libro.tui.views.base import View


class ConfirmView(View):
    name = "Confirm"

    def title(self, state: AppState) -> str:
        return "Confirm deletion"

    def body(self, state, editor):
        pending = state.pending_delete
        if pending is None:
            return [Static("Nothing to delete", id="confirm")]
        return [Static(f"Delete {pending.label}? (y/n)", id="confirm")]
