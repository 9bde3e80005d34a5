"""Shared fixtures: a real SQLite library per test, no mocks for storage."""

from datetime import date

import pytest

from libro.db.store import open_db
from libro.models import NewBook, NewReview


@pytest.fixture
def db(tmp_path):
    with open_db(tmp_path / "libro.db") as database:
        yield database


@pytest.fixture
def add_book(db):
    """Factory: add a book and return its id."""

    def _add(title="Dune", authors=("Frank Herbert",), genre="소설", **kwargs) -> int:
        return db.add_book(NewBook(title=title, authors=list(authors), genre=genre, **kwargs))

    return _add


@pytest.fixture
def add_review(db):
    """Factory: add a review and return its id."""

    def _add(book_id: int, text="Good", rating=4, date_read=date(2024, 1, 1)) -> int:
        return db.add_review(
            NewReview(book_id=book_id, rating=rating, review=text, date_read=date_read)
        )

    return _add
