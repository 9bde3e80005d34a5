"""Reading statistics shared by `libro report` and the TUI Report screen.

All functions are pure over an already-loaded list of ExtendedBook.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from libro.models import ExtendedBook


@dataclass
class AuthorStats:
    name: str
    book_count: int = 0
    review_count: int = 0
    rating_sum: float = 0.0
    rated_books: int = 0
    titles: list[str] = field(default_factory=list)
    latest_book_id: int = 0

    @property
    def average_rating(self) -> Optional[float]:
        """Mean of per-book average ratings, over books with reviews."""
        if not self.rated_books:
            return None
        return self.rating_sum / self.rated_books


@dataclass(frozen=True)
class YearStats:
    total_books: int
    total_pages: int
    total_reviews: int
    average_rating: Optional[float]
    reads_by_year: list[tuple[int, int]]


def author_stats(books: list[ExtendedBook], limit: Optional[int] = None) -> list[AuthorStats]:
    """Per-author totals, most prolific first.

    Authors are grouped by writer identity, so two books crediting the same
    deduplicated writer count under a single entry.
    """
    stats: dict[object, AuthorStats] = {}
    for book in books:
        avg = book.average_rating
        for author in book.authors:
            key = author.id if author.id is not None else author.name
            entry = stats.setdefault(key, AuthorStats(name=author.name))
            entry.book_count += 1
            entry.titles.append(book.title)
            entry.review_count += len(book.reviews)
            entry.latest_book_id = max(entry.latest_book_id, book.id or 0)
            if avg is not None:
                entry.rating_sum += avg
                entry.rated_books += 1

    ordered = sorted(stats.values(), key=lambda s: (-s.book_count, -s.latest_book_id))
    if limit is not None:
        ordered = ordered[:limit]
    return ordered


def year_stats(books: list[ExtendedBook]) -> YearStats:
    reviews = [r for b in books for r in b.reviews]
    ratings = [r.rating for r in reviews]
    per_year = Counter(r.date_read.year for r in reviews if r.date_read is not None)
    return YearStats(
        total_books=len(books),
        total_pages=sum(b.book.pages or 0 for b in books),
        total_reviews=len(reviews),
        average_rating=sum(ratings) / len(ratings) if ratings else None,
        reads_by_year=sorted(per_year.items()),
    )


def recent_books(books: list[ExtendedBook], limit: int = 10) -> list[ExtendedBook]:
    """Most recently added books (highest id first)."""
    return sorted(books, key=lambda b: b.id or 0, reverse=True)[:limit]
