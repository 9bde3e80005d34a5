"""Plain data records exchanged with the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class WriterType(Enum):
    AUTHOR = "author"
    TRANSLATOR = "translator"


@dataclass(frozen=True)
class Book:
    id: Optional[int]
    title: str
    genre: str
    pages: Optional[int] = None
    pub_year: Optional[int] = None


@dataclass(frozen=True)
class Review:
    id: Optional[int]
    book_id: int
    date_read: Optional[date]
    rating: int
    review: str


@dataclass(frozen=True)
class Writer:
    id: Optional[int]
    name: str
    writer_type: WriterType


@dataclass(frozen=True)
class ExtendedBook:
    """A book joined with its authors, translators and reviews."""

    book: Book
    authors: list[Writer] = field(default_factory=list)
    translators: list[Writer] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)

    @property
    def id(self) -> Optional[int]:
        return self.book.id

    @property
    def title(self) -> str:
        return self.book.title

    @property
    def author_names(self) -> list[str]:
        return [a.name for a in self.authors]

    @property
    def translator_names(self) -> list[str]:
        return [t.name for t in self.translators]

    @property
    def average_rating(self) -> Optional[float]:
        if not self.reviews:
            return None
        return sum(r.rating for r in self.reviews) / len(self.reviews)


@dataclass(frozen=True)
class NewBook:
    title: str
    authors: list[str]
    genre: str
    translators: list[str] = field(default_factory=list)
    pages: Optional[int] = None
    pub_year: Optional[int] = None


@dataclass(frozen=True)
class NewReview:
    book_id: int
    rating: int
    review: str
    date_read: Optional[date] = None


@dataclass(frozen=True)
class BookFilter:
    id: Optional[int] = None
    year: Optional[int] = None


def split_names(raw: str) -> list[str]:
    """Split a comma-separated name list, trimming and dropping empties."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def book_matches(book: ExtendedBook, query: str) -> bool:
    """Case-insensitive substring match on title, authors, genre or review text."""
    needle = query.lower()
    if needle in book.book.title.lower():
        return True
    if any(needle in author.name.lower() for author in book.authors):
        return True
    if needle in (book.book.genre or "").lower():
        return True
    return any(needle in review.review.lower() for review in book.reviews)
