from textual.widgets import Static

from libro.tui.state import AppState, Mode
from libro.tui.views.base import View
from libro.tui.views.book_list import book_table
from libro.tui.views.editor import editor_pane


class SearchView(View):
    name = "Search"
    hints = "j/k:move  Enter:open reviews  /:new search  Esc:back to list  q:quit"

    def title(self, state: AppState) -> str:
        if state.search_query:
            return f"Search: \"{state.search_query}\""
        return "Search"

    def body(self, state, editor):
        widgets = []
        if state.mode is Mode.SEARCH:
            widgets.append(editor_pane(editor, show_cursor=True, widget_id="search-input"))
        if not state.search_query:
            widgets.append(Static("Type a title, author, genre or review text", id="empty"))
            return widgets
        results = state.search_results()
        if not results:
            widgets.append(Static("No matching books", id="empty"))
        else:
            widgets.append(
                Static(book_table(state, results, state.search_selected_index), id="results")
            )
        return widgets
