"""Tests for view selection and the rich renderables views are built from."""

import pytest
from rich.console import Console

from libro.tui.editor import TextEditor
from libro.tui.state import AppState, BookForm, Mode, PendingDelete, ReportView, Screen
from libro.tui.views import select_view
from libro.tui.views.base import window, stars
from libro.tui.views.book_detail import BookDetailView, describe_book
from libro.tui.views.book_list import BookListView, book_table
from libro.tui.views.confirm import ConfirmView
from libro.tui.views.editor import editor_text
from libro.tui.views.form import BookFormView, form_table
from libro.tui.views.help import HelpView, keymap_table
from libro.tui.views.report import ReportScreenView, authors_table, years_text
from libro.tui.views.search import SearchView
from libro.tui.views.selector import SelectorView, choice_list


def plain(renderable) -> str:
    console = Console(record=True, width=120, color_system=None)
    console.print(renderable)
    return console.export_text()


@pytest.fixture
def library(add_book, add_review, reload):
    dune = add_book(title="Dune", pages=412, pub_year=1965)
    add_review(dune, text="Spice", rating=5)
    add_book(title="Emma", authors=("Jane Austen",), genre="에세이")
    return reload()


# ── Dispatch ─────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "screen, mode, view_type",
    [
        (Screen.BOOK_LIST, Mode.NORMAL, BookListView),
        (Screen.BOOK_DETAIL, Mode.NORMAL, BookDetailView),
        (Screen.ADD_BOOK, Mode.FORM_INPUT, BookFormView),
        (Screen.EDIT_BOOK, Mode.EDIT, BookFormView),
        (Screen.SEARCH, Mode.SEARCH, SearchView),
        (Screen.REPORT, Mode.NORMAL, ReportScreenView),
        (Screen.HELP, Mode.NORMAL, HelpView),
        (Screen.CONFIRM_DELETE, Mode.CONFIRM, ConfirmView),
        (Screen.BOOK_LIST, Mode.CONFIRM, ConfirmView),
        (Screen.ADD_BOOK, Mode.GENRE_SELECT, SelectorView),
        (Screen.EDIT_BOOK, Mode.YEAR_SELECT, SelectorView),
    ],
)
def test_select_view(screen, mode, view_type):
    assert isinstance(select_view(screen, mode), view_type)


@pytest.mark.parametrize("screen", list(Screen))
@pytest.mark.parametrize("mode", list(Mode))
def test_every_screen_and_mode_renders(library, screen, mode):
    library.screen = screen
    library.mode = mode
    library.search_query = "dune"
    library.pending_delete = PendingDelete("book", 1, '"Dune"')
    widgets = select_view(screen, mode).render(library, TextEditor.from_text("draft"))
    assert len(widgets) == 1


def test_views_render_with_empty_library():
    state = AppState()
    for screen in Screen:
        state.screen = screen
        assert select_view(screen, Mode.NORMAL).render(state, TextEditor())


# ── Renderables ──────────────────────────────────────────────────


def test_editor_text_marks_cursor():
    editor = TextEditor.from_text("ab\ncd")
    editor.move_cursor_up()
    text = editor_text(editor, show_cursor=True)
    assert text.plain == "ab \ncd"
    assert any(span.style == "black on white" for span in text.spans)

    assert editor_text(editor, show_cursor=False).plain == "ab\ncd"


def test_book_table_lists_books(library):
    output = plain(book_table(library, list(enumerate(library.books)), 0))
    assert "Dune" in output
    assert "Jane Austen" in output
    assert "★★★★★" in output


def test_describe_book(library):
    output = describe_book(library.books[0]).plain
    assert "Pages:       412" in output
    assert "Published:   1965" in output
    assert "Spice" in output


def test_form_table_shows_placeholders_and_values():
    state = AppState(screen=Screen.ADD_BOOK, mode=Mode.NORMAL, form=BookForm(title="Dune"))
    output = plain(form_table(state, TextEditor()))
    assert "> Title" in output
    assert "Dune" in output
    assert "comma separated" in output


def test_form_title_shows_edited_id():
    state = AppState(screen=Screen.EDIT_BOOK, form=BookForm(editing_book_id=7))
    assert BookFormView().title(state) == "Edit Book (ID: 7)"


def test_choice_list_highlights_selection():
    text = choice_list(["a", "b", "c"], 1)
    assert text.plain == "  a\n> b\n  c"


def test_report_renderables(library):
    assert "Frank Herbert" in plain(authors_table(library))
    assert "Books: 2" in years_text(library).plain
    library.report_view = ReportView.YEARS
    assert "[2] YEARS" in ReportScreenView().title(library)


def test_keymap_table_lists_actions():
    output = plain(keymap_table(Mode.NORMAL))
    assert "Quit" in output
    assert "ShowReport (recent)" in output
    assert "Ctrl+s" in output


def test_window_keeps_selection_visible():
    assert window(0, 5) == range(5)
    assert window(0, 50) == range(0, 20)
    assert window(49, 50) == range(30, 50)
    visible = window(25, 50)
    assert 25 in visible and len(visible) == 20


def test_stars():
    assert stars(None) == "-"
    assert stars(4) == "★★★★☆"
    assert stars(3.6) == "★★★★☆"
