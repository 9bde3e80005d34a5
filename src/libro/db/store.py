"""Library persistence.

All database reads and writes live here. The CLI and the TUI controller
are thin orchestrators over Database: validate -> call store -> render.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from functools import wraps
from pathlib import Path
from typing import Any, Callable, ContextManager, Iterator, Optional, TypeVar

from libro.config import Config
from libro.db.schema import connect
from libro.errors import BookNotFound, ReviewNotFound, StoreError, ValidationError
from libro.models import (
    Book,
    BookFilter,
    ExtendedBook,
    NewBook,
    NewReview,
    Review,
    Writer,
    WriterType,
)
from libro.validation import (
    validate_non_empty,
    validate_pages,
    validate_rating,
    validate_year,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BOOK_COLUMNS = "SELECT id, title, pages, pub_year, genre FROM books"


def _wrap_sqlite(func: Callable[..., T]) -> Callable[..., T]:
    """Re-raise sqlite3 failures as StoreError."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except sqlite3.Error as e:
            logger.warning("%s failed: %s", func.__name__, e)
            raise StoreError(str(e)) from e

    return wrapper


def _format_date(value: Optional[date]) -> str:
    return (value or date.today()).isoformat()


def _parse_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def _validate_new_book(book: NewBook) -> None:
    validate_non_empty(book.title, "Title")
    if not [a for a in book.authors if a.strip()]:
        raise ValidationError("At least one author is required")
    validate_non_empty(book.genre, "Genre")
    if book.pages is not None:
        validate_pages(book.pages)
    if book.pub_year is not None:
        validate_year(book.pub_year)


class Database:
    """A library database: books, reviews, writers and their links."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @classmethod
    def open(cls, path: Path | str) -> "Database":
        try:
            return cls(connect(path))
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {path}: {e}") from e

    def close(self) -> None:
        self.conn.close()

    # =========================================================================
    # Writers
    # =========================================================================

    @_wrap_sqlite
    def get_or_add_writer(self, name: str, writer_type: WriterType) -> int:
        """Return the writer id for (name, type), creating the writer if needed."""
        validate_non_empty(name, "Writer name")
        with self.conn:
            return self._get_or_add_writer(name.strip(), writer_type)

    def _get_or_add_writer(self, name: str, writer_type: WriterType) -> int:
        row = self.conn.execute(
            "SELECT id FROM writers WHERE name = ? AND type = ?",
            (name, writer_type.value),
        ).fetchone()
        if row:
            return row[0]
        cur = self.conn.execute(
            "INSERT INTO writers (name, type) VALUES (?, ?)",
            (name, writer_type.value),
        )
        return cur.lastrowid

    def _link_writers(self, book_id: int, names: list[str], writer_type: WriterType) -> None:
        for name in names:
            if not name.strip():
                continue
            writer_id = self._get_or_add_writer(name.strip(), writer_type)
            self.conn.execute(
                "INSERT OR IGNORE INTO book_writers (book_id, writer_id, type) VALUES (?, ?, ?)",
                (book_id, writer_id, writer_type.value),
            )

    @_wrap_sqlite
    def get_book_writers(self, book_id: int) -> list[Writer]:
        """All writers of a book, in the order they were linked."""
        rows = self.conn.execute(
            """
            SELECT w.id, w.name, w.type
            FROM writers w
            JOIN book_writers bw ON w.id = bw.writer_id AND w.type = bw.type
            WHERE bw.book_id = ?
            ORDER BY bw.rowid
            """,
            (book_id,),
        ).fetchall()
        return [Writer(id=wid, name=name, writer_type=WriterType(kind)) for wid, name, kind in rows]

    # =========================================================================
    # Creation
    # =========================================================================

    @_wrap_sqlite
    def add_book(self, book: NewBook) -> int:
        """Insert a book with its authors and translators. Returns the book id."""
        _validate_new_book(book)
        with self.conn:
            book_id = self._insert_book(book)
        logger.debug("added book %s (%r)", book_id, book.title)
        return book_id

    def _insert_book(self, book: NewBook) -> int:
        cur = self.conn.execute(
            "INSERT INTO books (title, pages, pub_year, genre) VALUES (?, ?, ?, ?)",
            (book.title.strip(), book.pages, book.pub_year, book.genre.strip()),
        )
        book_id = cur.lastrowid
        self._link_writers(book_id, book.authors, WriterType.AUTHOR)
        self._link_writers(book_id, book.translators, WriterType.TRANSLATOR)
        return book_id

    @_wrap_sqlite
    def add_book_with_review(
        self, book: NewBook, rating: int, text: str, date_read: Optional[date] = None
    ) -> tuple[int, int]:
        """Insert a book and its first review in one transaction.

        Returns (book_id, review_id).
        """
        _validate_new_book(book)
        validate_rating(rating)
        validate_non_empty(text, "Review text")
        with self.conn:
            book_id = self._insert_book(book)
            cur = self.conn.execute(
                "INSERT INTO reviews (book_id, date_read, rating, review) VALUES (?, ?, ?, ?)",
                (book_id, _format_date(date_read), rating, text.strip()),
            )
        logger.debug("added book %s with review %s", book_id, cur.lastrowid)
        return book_id, cur.lastrowid

    @_wrap_sqlite
    def add_review(self, review: NewReview) -> int:
        """Insert a review. Returns the review id."""
        validate_rating(review.rating)
        validate_non_empty(review.review, "Review text")
        if self.conn.execute("SELECT 1 FROM books WHERE id = ?", (review.book_id,)).fetchone() is None:
            raise BookNotFound(review.book_id)
        with self.conn:
            cur = self.conn.execute(
                "INSERT INTO reviews (book_id, date_read, rating, review) VALUES (?, ?, ?, ?)",
                (review.book_id, _format_date(review.date_read), review.rating, review.review.strip()),
            )
        logger.debug("added review %s for book %s", cur.lastrowid, review.book_id)
        return cur.lastrowid

    # =========================================================================
    # Reads
    # =========================================================================

    @_wrap_sqlite
    def get_books(self, book_filter: BookFilter | None = None) -> list[ExtendedBook]:
        """Books (ordered by id) joined with writers and reviews."""
        book_filter = book_filter or BookFilter()
        if book_filter.id is not None:
            rows = self.conn.execute(f"{_BOOK_COLUMNS} WHERE id = ? ORDER BY id", (book_filter.id,))
        elif book_filter.year is not None:
            rows = self.conn.execute(
                f"{_BOOK_COLUMNS} WHERE pub_year = ? ORDER BY id", (book_filter.year,)
            )
        else:
            rows = self.conn.execute(f"{_BOOK_COLUMNS} ORDER BY id")

        books = []
        for book_id, title, pages, pub_year, genre in rows.fetchall():
            writers = self.get_book_writers(book_id)
            books.append(
                ExtendedBook(
                    book=Book(id=book_id, title=title, pages=pages, pub_year=pub_year, genre=genre),
                    authors=[w for w in writers if w.writer_type is WriterType.AUTHOR],
                    translators=[w for w in writers if w.writer_type is WriterType.TRANSLATOR],
                    reviews=self.get_reviews(book_id),
                )
            )
        return books

    def get_book(self, book_id: int) -> ExtendedBook:
        books = self.get_books(BookFilter(id=book_id))
        if not books:
            raise BookNotFound(book_id)
        return books[0]

    @_wrap_sqlite
    def get_reviews(self, book_id: int) -> list[Review]:
        """Reviews of a book, most recently read first."""
        rows = self.conn.execute(
            """
            SELECT id, book_id, date_read, rating, review
            FROM reviews
            WHERE book_id = ?
            ORDER BY date_read DESC, id DESC
            """,
            (book_id,),
        ).fetchall()
        return [
            Review(id=rid, book_id=bid, date_read=_parse_date(read), rating=rating, review=text or "")
            for rid, bid, read, rating, text in rows
        ]

    @_wrap_sqlite
    def get_review(self, review_id: int) -> Review:
        row = self.conn.execute(
            "SELECT id, book_id, date_read, rating, review FROM reviews WHERE id = ?",
            (review_id,),
        ).fetchone()
        if row is None:
            raise ReviewNotFound(review_id)
        rid, bid, read, rating, text = row
        return Review(id=rid, book_id=bid, date_read=_parse_date(read), rating=rating, review=text or "")

    # =========================================================================
    # Updates
    # =========================================================================

    @_wrap_sqlite
    def update_book(self, book_id: int, book: NewBook) -> None:
        """Replace a book's columns and its author/translator links."""
        _validate_new_book(book)
        with self.conn:
            cur = self.conn.execute(
                "UPDATE books SET title = ?, pages = ?, pub_year = ?, genre = ? WHERE id = ?",
                (book.title.strip(), book.pages, book.pub_year, book.genre.strip(), book_id),
            )
            if cur.rowcount == 0:
                raise BookNotFound(book_id)
            self.conn.execute("DELETE FROM book_writers WHERE book_id = ?", (book_id,))
            self._link_writers(book_id, book.authors, WriterType.AUTHOR)
            self._link_writers(book_id, book.translators, WriterType.TRANSLATOR)
        logger.debug("updated book %s", book_id)

    @_wrap_sqlite
    def update_review(self, review_id: int, review: Review) -> None:
        """Overwrite date, rating and text of an existing review."""
        validate_rating(review.rating)
        validate_non_empty(review.review, "Review text")
        read = review.date_read.isoformat() if review.date_read else None
        with self.conn:
            cur = self.conn.execute(
                "UPDATE reviews SET date_read = ?, rating = ?, review = ? WHERE id = ?",
                (read, review.rating, review.review.strip(), review_id),
            )
        if cur.rowcount == 0:
            raise ReviewNotFound(review_id)
        logger.debug("updated review %s", review_id)

    # =========================================================================
    # Deletion
    # =========================================================================

    @_wrap_sqlite
    def delete_book(self, book_id: int) -> None:
        """Delete a book. Fails while reviews still reference it."""
        with self.conn:
            cur = self.conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
        if cur.rowcount == 0:
            raise BookNotFound(book_id)
        logger.debug("deleted book %s", book_id)

    @_wrap_sqlite
    def delete_review(self, review_id: int) -> None:
        with self.conn:
            cur = self.conn.execute("DELETE FROM reviews WHERE id = ?", (review_id,))
        if cur.rowcount == 0:
            raise ReviewNotFound(review_id)
        logger.debug("deleted review %s", review_id)


@contextmanager
def open_db(path: Path | str) -> Iterator[Database]:
    db = Database.open(path)
    try:
        yield db
    finally:
        db.close()


def open_library() -> ContextManager[Database]:
    """Open the configured library (config.yml / LIBRO_DB_PATH)."""
    return open_db(Config.load().db_path)
