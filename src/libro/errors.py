"""Error types shared by the store, the CLI and the TUI."""

from __future__ import annotations


class LibroError(Exception):
    """Base class for every error Libro reports to the user."""


class ValidationError(LibroError):
    def __init__(self, message: str):
        super().__init__(f"Validation error: {message}")
        self.message = message


class BookNotFound(LibroError):
    def __init__(self, book_id: int):
        super().__init__(f"Book not found with ID: {book_id}")
        self.book_id = book_id


class ReviewNotFound(LibroError):
    def __init__(self, review_id: int):
        super().__init__(f"Review not found with ID: {review_id}")
        self.review_id = review_id


class StoreError(LibroError):
    """A failure reported by the underlying database."""

    def __init__(self, detail: str):
        super().__init__(f"Database error: {detail}")
        self.detail = detail
