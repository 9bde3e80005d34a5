"""Controller: applies actions to AppState.

The controller is the only component that calls the store or touches the
shared TextEditor. Every store call goes through a @persistence_action step,
so a failure becomes a banner message and the success transition is skipped.
After each successful write the book cache is reloaded wholesale.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date

from libro.db.store import Database
from libro.models import NewReview
from libro.tui.actions import (
    Action,
    AddBook,
    AddReview,
    Back,
    Backspace,
    Cancel,
    CancelEdit,
    ClearLine,
    Confirm,
    CursorDown,
    CursorLeft,
    CursorRight,
    CursorUp,
    DeleteChar,
    DeleteSelected,
    DeleteToEnd,
    DeleteWord,
    EditBook,
    ForceQuit,
    Ignore,
    InsertChar,
    LineEnd,
    LineStart,
    MoveDown,
    MoveLeft,
    MoveRight,
    MoveUp,
    NewLine,
    NewReview as NewReviewAction,
    NextField,
    OpenReport,
    OpenSearch,
    PrevField,
    Quit,
    SaveEdit,
    Select,
    ShowReport,
    Toggle,
    ToggleHelp,
)
from libro.tui.decorators import persistence_action
from libro.tui.editor import TextEditor
from libro.tui.state import (
    FORM_SCREENS,
    GENRES,
    AppState,
    BookForm,
    Mode,
    PendingDelete,
    Screen,
    selectable_years,
)

logger = logging.getLogger(__name__)

NEW_REVIEW_RATING = 5

# Editor commands that act on the buffer in any text-entry mode.
_LINE_COMMANDS = {
    Backspace: TextEditor.backspace,
    DeleteChar: TextEditor.delete_char,
    ClearLine: TextEditor.clear_current_line,
    LineStart: TextEditor.move_to_line_start,
    LineEnd: TextEditor.move_to_line_end,
    DeleteToEnd: TextEditor.delete_to_line_end,
    DeleteWord: TextEditor.delete_word_backward,
    CursorLeft: TextEditor.move_cursor_left,
    CursorRight: TextEditor.move_cursor_right,
}

# On the genre/year fields these unset the value instead of editing text.
_CLEAR_COMMANDS = (Backspace, DeleteChar, ClearLine, DeleteWord)

# Only meaningful in the multi-line Edit mode.
_EDIT_ONLY_COMMANDS = {
    CursorUp: TextEditor.move_cursor_up,
    CursorDown: TextEditor.move_cursor_down,
}


class Controller:
    def __init__(self, store: Database):
        self.store = store
        self.editor = TextEditor()

    def load(self, state: AppState) -> bool:
        """Initial load of the book cache."""
        return self._reload(state)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def apply(self, action: Action, state: AppState) -> None:
        logger.debug("apply %s in %s/%s", action, state.mode.value, state.screen.value)

        match action:
            case Ignore():
                return
            case Quit():
                if state.mode is Mode.NORMAL:
                    state.should_quit = True
            case ForceQuit():
                if state.mode is Mode.EDIT:
                    self._discard_review_edit(state)
                    state.should_quit = True
            case ToggleHelp():
                if state.mode is Mode.NORMAL:
                    if state.screen is Screen.HELP:
                        state.go_back()
                    else:
                        state.set_screen(Screen.HELP)
            case Back():
                self._back(state)
            case AddBook():
                if state.mode is Mode.NORMAL:
                    self._open_form(state, Screen.ADD_BOOK, BookForm())
            case EditBook():
                self._edit_book(state)
            case OpenSearch():
                if state.mode is Mode.NORMAL:
                    state.set_screen(Screen.SEARCH)
                    state.mode = Mode.SEARCH
                    state.search_selected_index = 0
                    self.editor = TextEditor.from_text(state.search_query)
            case OpenReport():
                if state.mode is Mode.NORMAL and state.screen is not Screen.REPORT:
                    state.set_screen(Screen.REPORT)
            case ShowReport(view=view):
                if state.mode is Mode.NORMAL:
                    state.report_view = view
                    if state.screen is not Screen.REPORT:
                        state.set_screen(Screen.REPORT)
            case AddReview():
                if state.mode is Mode.NORMAL:
                    self._add_review(state)
            case NewReviewAction():
                if state.mode is Mode.NORMAL and state.screen is Screen.REVIEW:
                    self._start_review_edit(state, None)
            case DeleteSelected():
                if state.mode is Mode.NORMAL:
                    self._request_delete(state)
            case Confirm():
                if state.mode is Mode.CONFIRM:
                    self._confirm_delete(state)
            case Cancel():
                if state.mode is Mode.CONFIRM:
                    self._cancel_delete(state)
            case SaveEdit():
                self._save(state)
            case CancelEdit():
                if state.mode is Mode.EDIT:
                    self._cancel_edit(state)
            case NextField() | PrevField():
                self._step_field(state, 1 if isinstance(action, NextField) else -1)
            case InsertChar(char=char):
                self._insert_char(state, char)
            case NewLine():
                if state.mode is Mode.EDIT:
                    if state.screen in FORM_SCREENS:
                        self._commit_field_edit(state)
                    else:
                        self.editor.insert_newline()
            case MoveUp() | MoveDown():
                self._move_vertical(state, -1 if isinstance(action, MoveUp) else 1)
            case MoveLeft() | MoveRight():
                self._move_horizontal(state, -1 if isinstance(action, MoveLeft) else 1)
            case Toggle():
                self._toggle(state)
            case Select():
                self._select(state)
            case _ if type(action) in _LINE_COMMANDS:
                if self._editor_active(state):
                    _LINE_COMMANDS[type(action)](self.editor)
                elif isinstance(action, _CLEAR_COMMANDS) and self._on_choice_field(state):
                    self._clear_choice_field(state)
            case _ if type(action) in _EDIT_ONLY_COMMANDS:
                if state.mode is Mode.EDIT:
                    _EDIT_ONLY_COMMANDS[type(action)](self.editor)
            case _:
                logger.debug("unhandled action %s", action)

    # =========================================================================
    # Cache
    # =========================================================================

    @persistence_action("Failed to load books")
    def _reload(self, state: AppState) -> bool:
        state.books = self.store.get_books()
        state.clamp_selection()
        return True

    # =========================================================================
    # Back / cancel
    # =========================================================================

    def _back(self, state: AppState) -> None:
        match state.mode:
            case Mode.EDIT:
                self._cancel_edit(state)
            case Mode.SEARCH:
                state.mode = Mode.NORMAL
            case Mode.FORM_INPUT:
                self._commit_field(state)
                state.mode = Mode.NORMAL
            case Mode.GENRE_SELECT | Mode.YEAR_SELECT:
                state.mode = Mode.FORM_INPUT
                self._load_field(state)
            case Mode.CONFIRM:
                self._cancel_delete(state)
            case Mode.NORMAL:
                if state.screen is Screen.SEARCH:
                    state.search_query = ""
                    state.search_selected_index = 0
                    self._show_book_list(state)
                elif state.screen in FORM_SCREENS:
                    state.form = BookForm()
                    self._show_book_list(state)
                else:
                    state.go_back()

    def _cancel_edit(self, state: AppState) -> None:
        if state.screen in FORM_SCREENS:
            # Revert the field to its committed value.
            state.mode = Mode.FORM_INPUT
            self._load_field(state)
        else:
            self._discard_review_edit(state)

    def _discard_review_edit(self, state: AppState) -> None:
        state.editing_review_index = None
        state.mode = Mode.NORMAL
        self.editor = TextEditor()

    def _show_book_list(self, state: AppState) -> None:
        state.screen = Screen.BOOK_LIST
        state.previous_screen = None
        state.mode = Mode.NORMAL

    # =========================================================================
    # Book form
    # =========================================================================

    def _open_form(self, state: AppState, screen: Screen, form: BookForm) -> None:
        state.set_screen(screen)
        state.form = form
        state.mode = Mode.FORM_INPUT
        self._load_field(state)

    def _edit_book(self, state: AppState) -> None:
        if state.mode is not Mode.NORMAL:
            return
        if state.screen not in (Screen.BOOK_LIST, Screen.BOOK_DETAIL):
            return
        book = state.selected_book
        if book is None:
            state.set_message("No book selected")
            return
        self._open_form(state, Screen.EDIT_BOOK, BookForm.from_book(book))

    def _load_field(self, state: AppState) -> None:
        self.editor = TextEditor.from_text(state.form.get_current_value())

    def _commit_field(self, state: AppState) -> None:
        state.form.set_current_value(self.editor.get_text())

    def _commit_field_edit(self, state: AppState) -> None:
        """Leave in-place field editing, keeping the text."""
        self._commit_field(state)
        state.mode = Mode.FORM_INPUT

    def _step_field(self, state: AppState, step: int) -> None:
        if state.screen not in FORM_SCREENS:
            return
        if state.mode is Mode.FORM_INPUT:
            self._commit_field(state)
        elif state.mode is not Mode.NORMAL:
            return
        if step > 0:
            state.form.next_field()
        else:
            state.form.prev_field()
        state.mode = Mode.FORM_INPUT
        self._load_field(state)

    def _open_field(self, state: AppState, mode_for_text: Mode) -> None:
        """Enter on a form field: a selector for genre/year, else in-place editing."""
        form = state.form
        if form.is_genre_field():
            form.open_genre_selector()
            state.mode = Mode.GENRE_SELECT
        elif form.is_year_field():
            form.open_year_selector()
            state.mode = Mode.YEAR_SELECT
        else:
            state.mode = mode_for_text

    @persistence_action("Failed to save book")
    def _save_form(self, state: AppState) -> bool:
        form = state.form
        error = form.validate()
        if error is not None:
            state.set_message(error)
            return False

        new_book = form.to_new_book()
        if form.editing_book_id is None:
            book_id = self.store.add_book(new_book)
            success = f"Saved new book (ID: {book_id})"
        else:
            book_id = form.editing_book_id
            self.store.update_book(book_id, new_book)
            success = f"Updated book (ID: {book_id})"

        if self._reload(state):
            for index, book in enumerate(state.books):
                if book.id == book_id:
                    state.selected_book_index = index
                    break
            state.set_message(success)
        state.form = BookForm()
        self._show_book_list(state)
        return True

    # =========================================================================
    # Reviews
    # =========================================================================

    def _add_review(self, state: AppState) -> None:
        if state.screen is Screen.REVIEW:
            book = state.selected_book
            if book is not None and state.selected_review_index < len(book.reviews):
                self._start_review_edit(state, state.selected_review_index)
            else:
                self._start_review_edit(state, None)
            return
        if state.selected_book is None:
            state.set_message("No book selected")
            return
        state.set_screen(Screen.REVIEW)
        state.selected_review_index = 0

    def _start_review_edit(self, state: AppState, index: int | None) -> None:
        book = state.selected_book
        if book is None:
            state.set_message("No book selected")
            return
        text = book.reviews[index].review if index is not None else ""
        state.editing_review_index = index
        state.mode = Mode.EDIT
        self.editor = TextEditor.from_text(text)

    @persistence_action("Failed to save review")
    def _save_review(self, state: AppState) -> bool:
        book = state.selected_book
        if book is None:
            state.set_message("No book selected")
            return False
        text = self.editor.get_text().strip()

        if state.editing_review_index is not None:
            if state.editing_review_index >= len(book.reviews):
                state.set_message("The review being edited no longer exists")
                return False
            existing = book.reviews[state.editing_review_index]
            self.store.update_review(existing.id, dataclasses.replace(existing, review=text))
            success = "Review updated"
        else:
            review_id = self.store.add_review(
                NewReview(
                    book_id=book.id,
                    rating=NEW_REVIEW_RATING,
                    review=text,
                    date_read=date.today(),
                )
            )
            success = f"Saved new review (ID: {review_id})"

        if self._reload(state):
            state.set_message(success)
        self._discard_review_edit(state)
        return True

    # =========================================================================
    # Save dispatch
    # =========================================================================

    def _save(self, state: AppState) -> None:
        on_form = state.screen in FORM_SCREENS
        match state.mode:
            case Mode.EDIT if on_form:
                self._commit_field_edit(state)
            case Mode.EDIT if state.screen is Screen.REVIEW:
                self._save_review(state)
            case Mode.FORM_INPUT if on_form:
                self._commit_field(state)
                self._save_form(state)
            case Mode.NORMAL if on_form:
                if not self._save_form(state):
                    state.mode = Mode.FORM_INPUT
                    self._load_field(state)

    # =========================================================================
    # Deletion
    # =========================================================================

    def _request_delete(self, state: AppState) -> None:
        if state.screen is Screen.REVIEW:
            book = state.selected_book
            if book is None:
                state.set_message("No book selected")
                return
            review = state.selected_review
            if review is None:
                state.set_message("No review to delete")
                return
            pending = PendingDelete("review", review.id, f"review of \"{book.title}\"")
        elif state.screen in (Screen.BOOK_LIST, Screen.BOOK_DETAIL):
            book = state.selected_book
            if book is None:
                state.set_message("No book to delete")
                return
            pending = PendingDelete("book", book.id, f"\"{book.title}\"")
        else:
            return

        state.pending_delete = pending
        state.set_screen(Screen.CONFIRM_DELETE)
        state.mode = Mode.CONFIRM

    def _confirm_delete(self, state: AppState) -> None:
        pending = state.pending_delete
        if pending is not None:
            self._perform_delete(state, pending)
        self._close_confirm(state)

    def _cancel_delete(self, state: AppState) -> None:
        if state.pending_delete is not None:
            state.set_message("Deletion cancelled")
        self._close_confirm(state)

    def _close_confirm(self, state: AppState) -> None:
        state.pending_delete = None
        state.mode = Mode.NORMAL
        if state.screen is Screen.CONFIRM_DELETE:
            state.go_back()

    @persistence_action("Failed to delete")
    def _perform_delete(self, state: AppState, pending: PendingDelete) -> bool:
        if pending.kind == "review":
            self.store.delete_review(pending.id)
        else:
            self.store.delete_book(pending.id)
        if self._reload(state):
            state.set_message(f"Deleted {pending.label}")
        return True

    # =========================================================================
    # Text entry
    # =========================================================================

    def _editor_active(self, state: AppState) -> bool:
        if state.mode in (Mode.EDIT, Mode.SEARCH):
            return True
        if state.mode is Mode.FORM_INPUT:
            return not (state.form.is_genre_field() or state.form.is_year_field())
        return False

    def _on_choice_field(self, state: AppState) -> bool:
        return (
            state.mode is Mode.FORM_INPUT
            and state.screen in FORM_SCREENS
            and (state.form.is_genre_field() or state.form.is_year_field())
        )

    def _clear_choice_field(self, state: AppState) -> None:
        state.form.set_current_value("")
        self._load_field(state)

    def _insert_char(self, state: AppState, char: str) -> None:
        if state.mode in (Mode.EDIT, Mode.SEARCH):
            self.editor.insert_char(char)
        elif state.mode is Mode.FORM_INPUT and state.screen in FORM_SCREENS:
            # Typing on genre/year opens the selector instead of inserting.
            self._open_field(state, Mode.FORM_INPUT)
            if state.mode is Mode.FORM_INPUT:
                self.editor.insert_char(char)

    # =========================================================================
    # Navigation
    # =========================================================================

    def _move_vertical(self, state: AppState, step: int) -> None:
        match state.mode:
            case Mode.GENRE_SELECT:
                state.form.genre_selected_index = _step(
                    state.form.genre_selected_index, step, len(GENRES)
                )
            case Mode.YEAR_SELECT:
                state.form.year_selected_index = _step(
                    state.form.year_selected_index, step, len(selectable_years())
                )
            case Mode.NORMAL:
                if state.screen is Screen.BOOK_LIST:
                    index = _step(state.selected_book_index, step, len(state.books))
                    if index != state.selected_book_index:
                        state.selected_book_index = index
                        state.selected_review_index = 0
                elif state.screen is Screen.REVIEW:
                    book = state.selected_book
                    count = len(book.reviews) if book else 0
                    state.selected_review_index = _step(state.selected_review_index, step, count)
                elif state.screen is Screen.SEARCH:
                    state.search_selected_index = _step(
                        state.search_selected_index, step, len(state.search_results())
                    )

    def _move_horizontal(self, state: AppState, step: int) -> None:
        if state.mode is not Mode.NORMAL:
            return
        if state.screen is Screen.BOOK_DETAIL:
            state.selected_book_index = _step(state.selected_book_index, step, len(state.books))
            state.selected_review_index = 0
        elif state.screen is Screen.REPORT:
            state.report_view = state.report_view.cycle(step)

    def _toggle(self, state: AppState) -> None:
        if state.mode is not Mode.NORMAL:
            return
        if state.screen is Screen.BOOK_LIST and state.selected_book is not None:
            state.set_screen(Screen.BOOK_DETAIL)
        elif state.screen is Screen.BOOK_DETAIL:
            state.set_screen(Screen.BOOK_LIST)

    def _select(self, state: AppState) -> None:
        match state.mode:
            case Mode.SEARCH:
                query = self.editor.get_text().strip()
                state.search_query = query
                state.search_selected_index = 0
                state.mode = Mode.NORMAL
                if query:
                    state.set_message(f"Search complete for \"{query}\"")
            case Mode.FORM_INPUT if state.screen in FORM_SCREENS:
                self._commit_field(state)
                self._open_field(state, Mode.EDIT)
            case Mode.GENRE_SELECT:
                state.form.commit_genre()
                state.mode = Mode.FORM_INPUT
                self._load_field(state)
            case Mode.YEAR_SELECT:
                state.form.commit_year()
                state.mode = Mode.FORM_INPUT
                self._load_field(state)
            case Mode.NORMAL:
                self._select_normal(state)

    def _select_normal(self, state: AppState) -> None:
        match state.screen:
            case Screen.BOOK_LIST:
                if state.selected_book is not None:
                    state.set_screen(Screen.BOOK_DETAIL)
            case Screen.ADD_BOOK | Screen.EDIT_BOOK:
                self._load_field(state)
                self._open_field(state, Mode.EDIT)
            case Screen.SEARCH:
                results = state.search_results()
                if 0 <= state.search_selected_index < len(results):
                    state.selected_book_index = results[state.search_selected_index][0]
                    state.set_screen(Screen.REVIEW)
                    state.selected_review_index = 0
            case Screen.REVIEW:
                self._add_review(state)


def _step(index: int, step: int, length: int) -> int:
    """Move index by step, clamped to [0, length)."""
    if length == 0:
        return 0
    return min(max(index + step, 0), length - 1)
