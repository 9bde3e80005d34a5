from rich.text import Text
from textual.widgets import Static

from libro.tui.state import AppState, Mode
from libro.tui.views.base import View, stars
from libro.tui.views.editor import editor_pane


class ReviewView(View):
    name = "Reviews"
    hints = "j/k:move  v/Enter:edit  n:new  d:delete  Esc:back  q:quit"

    def title(self, state: AppState) -> str:
        book = state.selected_book
        return f"Reviews: {book.title}" if book else "Reviews"

    def body(self, state, editor):
        book = state.selected_book
        if book is None:
            return [Static("No book selected", id="empty")]

        if state.mode is Mode.EDIT:
            if state.editing_review_index is None:
                label = "New review (rating 5, dated today)"
            else:
                label = f"Editing review {state.editing_review_index + 1}"
            return [Static(label, id="editor-label"), editor_pane(editor, show_cursor=True)]

        if not book.reviews:
            return [Static("No reviews yet. Press 'n' to write one.", id="empty")]

        text = Text()
        for index, review in enumerate(book.reviews):
            read = review.date_read.isoformat() if review.date_read else "-"
            style = "reverse" if index == state.selected_review_index else None
            text.append(f"{read}  {stars(review.rating)}\n", style=style)
            text.append(f"{review.review}\n\n")
        return [Static(text, id="reviews")]
