from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from libro.reports import author_stats, recent_books, year_stats
from libro.tui.state import AppState, ReportView as Kind
from libro.tui.views.base import View, stars

TOP_AUTHORS = 10
RECENT_LIMIT = 10


def authors_table(state: AppState) -> Table:
    table = Table(expand=True, show_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Author")
    table.add_column("Books", justify="right")
    table.add_column("Reviews", justify="right")
    table.add_column("Rating")
    table.add_column("Titles", ratio=2)
    for rank, stats in enumerate(author_stats(state.books, TOP_AUTHORS), start=1):
        table.add_row(
            str(rank),
            stats.name,
            str(stats.book_count),
            str(stats.review_count),
            stars(stats.average_rating),
            ", ".join(stats.titles[:3]),
        )
    return table


def years_text(state: AppState) -> Text:
    stats = year_stats(state.books)
    text = Text()
    text.append(f"Books: {stats.total_books}   Pages: {stats.total_pages}   ")
    text.append(f"Reviews: {stats.total_reviews}   ")
    avg = f"{stats.average_rating:.1f}/5" if stats.average_rating is not None else "-"
    text.append(f"Average rating: {avg}\n\n")
    if not stats.reads_by_year:
        text.append("No reading dates recorded", style="dim")
    for year, count in stats.reads_by_year:
        text.append(f"{year}: ")
        text.append("█" * count, style="green")
        text.append(f" {count}\n")
    return text


def recent_table(state: AppState) -> Table:
    table = Table(expand=True, show_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Title", ratio=2)
    table.add_column("Authors")
    table.add_column("Rating")
    for book in recent_books(state.books, RECENT_LIMIT):
        table.add_row(str(book.id), book.title, ", ".join(book.author_names), stars(book.average_rating))
    return table


class ReportScreenView(View):
    name = "Report"
    hints = "1:authors  2:years  3:recent  h/l:cycle  Esc:back  q:quit"

    def title(self, state: AppState) -> str:
        tabs = "  ".join(
            f"[{n}] {kind.value}" if kind is not state.report_view else f"[{n}] {kind.value.upper()}"
            for n, kind in enumerate(Kind, start=1)
        )
        return f"Report  {tabs}"

    def body(self, state, editor):
        if not state.books:
            return [Static("No books found for generating reports", id="empty")]
        match state.report_view:
            case Kind.AUTHORS:
                content = authors_table(state)
            case Kind.YEARS:
                content = years_text(state)
            case _:
                content = recent_table(state)
        return [Static(content, id="report")]
