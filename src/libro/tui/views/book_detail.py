from rich.text import Text
from textual.widgets import Static

from libro.tui.state import AppState
from libro.tui.views.base import View, stars


def describe_book(book) -> Text:
    text = Text()
    text.append(f"{book.title}\n", style="bold")
    text.append(f"Authors:     {', '.join(book.author_names)}\n")
    if book.translators:
        text.append(f"Translators: {', '.join(book.translator_names)}\n")
    text.append(f"Genre:       {book.book.genre}\n")
    if book.book.pages is not None:
        text.append(f"Pages:       {book.book.pages}\n")
    if book.book.pub_year is not None:
        text.append(f"Published:   {book.book.pub_year}\n")
    text.append(f"Rating:      {stars(book.average_rating)}  ({len(book.reviews)} reviews)\n")
    for review in book.reviews:
        read = review.date_read.isoformat() if review.date_read else "-"
        text.append(f"\n{read}  {stars(review.rating)}\n", style="dim")
        text.append(review.review + "\n")
    return text


class BookDetailView(View):
    name = "Book"
    hints = "h/l:prev/next  v:reviews  e:edit  d:delete  space/Esc:list  q:quit"

    def title(self, state: AppState) -> str:
        book = state.selected_book
        if book is None:
            return "Book"
        return f"Book {state.selected_book_index + 1}/{len(state.books)}"

    def body(self, state, editor):
        book = state.selected_book
        if book is None:
            return [Static("No book selected", id="empty")]
        return [Static(describe_book(book), id="detail")]
