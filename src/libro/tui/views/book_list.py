from rich.table import Table
from textual.widgets import Static

from libro.tui.state import AppState
from libro.tui.views.base import View, stars, window


def book_table(state: AppState, rows: list[tuple[int, object]], selected: int) -> Table:
    """Table of (absolute index, book) rows; `selected` is a position in rows."""
    table = Table(expand=True, show_edge=False)
    table.add_column("ID", justify="right", width=5)
    table.add_column("Title", ratio=3)
    table.add_column("Authors", ratio=2)
    table.add_column("Genre")
    table.add_column("Year", justify="right")
    table.add_column("Rating")
    for pos in window(selected, len(rows)):
        _, book = rows[pos]
        table.add_row(
            str(book.id),
            book.title,
            ", ".join(book.author_names),
            book.book.genre,
            str(book.book.pub_year or ""),
            stars(book.average_rating),
            style="reverse" if pos == selected else None,
        )
    return table


class BookListView(View):
    name = "Books"
    hints = "j/k:move  Enter:details  a:add  e:edit  d:delete  v:reviews  /:search  r:report  ?:help  q:quit"

    def title(self, state: AppState) -> str:
        return f"Books ({len(state.books)})"

    def body(self, state, editor):
        if not state.books:
            return [Static("No books yet. Press 'a' to add one.", id="empty")]
        rows = list(enumerate(state.books))
        return [Static(book_table(state, rows, state.selected_book_index), id="book-list")]
