"""Tests for AppState and the book form."""

from datetime import date

import pytest

from libro.models import Book, ExtendedBook, Review, Writer, WriterType
from libro.tui.state import (
    GENRES,
    AppState,
    BookForm,
    ReportView,
    Screen,
    selectable_years,
)


def extended(book_id, title, authors=("A",), genre="소설", reviews=()):
    return ExtendedBook(
        book=Book(id=book_id, title=title, genre=genre),
        authors=[Writer(id=n, name=name, writer_type=WriterType.AUTHOR) for n, name in enumerate(authors)],
        reviews=[
            Review(id=n, book_id=book_id, date_read=date(2024, 1, 1), rating=4, review=text)
            for n, text in enumerate(reviews)
        ],
    )


# ── Form ─────────────────────────────────────────────────────────


def test_form_fields_cycle():
    form = BookForm()
    for expected in [1, 2, 3, 4, 5, 0]:
        form.next_field()
        assert form.field_index == expected
    form.prev_field()
    assert form.field_index == 5


def test_form_current_value():
    form = BookForm()
    form.set_current_value("Dune")
    form.next_field()
    form.set_current_value("Frank Herbert")
    assert form.title == "Dune"
    assert form.authors == "Frank Herbert"
    assert form.get_current_value() == "Frank Herbert"


@pytest.mark.parametrize(
    "fields, message",
    [
        ({}, "Title is required"),
        ({"title": "  "}, "Title is required"),
        ({"title": "T"}, "At least one author is required"),
        ({"title": "T", "authors": " , "}, "At least one author is required"),
        ({"title": "T", "authors": "A"}, "Genre is required"),
        ({"title": "T", "authors": "A", "genre": "기타", "pages": "12p"}, "Pages must be a number"),
        ({"title": "T", "authors": "A", "genre": "기타", "pages": "-3"}, "Pages must be a number"),
        ({"title": "T", "authors": "A", "genre": "기타", "pub_year": "abc"}, "Year must be a number"),
        ({"title": "", "authors": "", "genre": "", "pages": "x"}, "Title is required"),
    ],
)
def test_form_validation_first_failing_rule(fields, message):
    assert BookForm(**fields).validate() == message


def test_form_year_out_of_range():
    assert "Year must be between" in BookForm(title="T", authors="A", genre="기타", pub_year="500").validate()


def test_form_optional_fields_may_be_empty():
    assert BookForm(title="T", authors="A", genre="기타", pages=" ", pub_year="").validate() is None


def test_form_to_new_book():
    form = BookForm(
        title=" Dune ",
        authors="Frank Herbert, , Brian Herbert ",
        translators="",
        genre="소설",
        pages="412",
        pub_year="",
    )
    book = form.to_new_book()
    assert book.title == "Dune"
    assert book.authors == ["Frank Herbert", "Brian Herbert"]
    assert book.translators == []
    assert book.pages == 412
    assert book.pub_year is None


def test_form_from_book_roundtrip():
    book = extended(3, "Dune", authors=("Frank Herbert", "Someone"))
    form = BookForm.from_book(book)
    assert form.editing_book_id == 3
    assert form.authors == "Frank Herbert, Someone"
    assert form.to_new_book().authors == ["Frank Herbert", "Someone"]


def test_genre_selector_starts_at_current_value():
    form = BookForm(genre="자기계발")
    form.open_genre_selector()
    assert GENRES[form.genre_selected_index] == "자기계발"

    form = BookForm(genre="unknown")
    form.open_genre_selector()
    assert form.genre_selected_index == 0


def test_year_selector():
    years = selectable_years()
    assert years[0] == date.today().year
    assert years[-1] == 1900

    form = BookForm(pub_year="1999")
    form.open_year_selector()
    assert years[form.year_selected_index] == 1999
    form.year_selected_index += 1
    form.commit_year()
    assert form.pub_year == "1998"

    form = BookForm(pub_year="1850")
    form.open_year_selector()
    assert form.year_selected_index == 0


# ── Screens and messages ─────────────────────────────────────────


def test_set_screen_keeps_single_previous():
    state = AppState()
    state.set_screen(Screen.BOOK_DETAIL)
    state.set_screen(Screen.REVIEW)
    assert state.previous_screen is Screen.BOOK_DETAIL

    state.go_back()
    assert state.screen is Screen.BOOK_DETAIL
    state.go_back()
    assert state.screen is Screen.BOOK_LIST


def test_message_expires_after_ttl():
    state = AppState()
    state.set_message("Saved", now=100.0)
    assert not state.clear_expired_message(now=102.9, ttl=3.0)
    assert state.message_text == "Saved"
    assert state.clear_expired_message(now=103.0, ttl=3.0)
    assert state.message is None


def test_report_view_cycles():
    assert ReportView.AUTHORS.cycle(1) is ReportView.YEARS
    assert ReportView.AUTHORS.cycle(-1) is ReportView.RECENT


# ── Derived data ─────────────────────────────────────────────────


def test_search_results_match_any_field_case_insensitively():
    state = AppState(
        books=[
            extended(1, "Dune"),
            extended(2, "Emma", authors=("Jane Austen",)),
            extended(3, "Essays", genre="에세이"),
            extended(4, "Other", reviews=("a DUNE-like story",)),
        ]
    )
    state.search_query = "dune"
    assert [i for i, _ in state.search_results()] == [0, 3]

    state.search_query = "austen"
    assert [b.title for _, b in state.search_results()] == ["Emma"]

    state.search_query = "에세이"
    assert [b.title for _, b in state.search_results()] == ["Essays"]

    state.search_query = ""
    assert state.search_results() == []


def test_clamp_selection():
    state = AppState(books=[extended(1, "A", reviews=("x",)), extended(2, "B")])
    state.selected_book_index = 5
    state.selected_review_index = 3
    state.clamp_selection()
    assert state.selected_book_index == 1
    assert state.selected_review_index == 0

    state.books = []
    state.clamp_selection()
    assert state.selected_book_index == 0
    assert state.selected_book is None
