"""CLI display formatting for Libro."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from libro.models import ExtendedBook, Review
from libro.reports import AuthorStats, YearStats


console = Console()


def stars(rating: float | None) -> str:
    if rating is None:
        return "-"
    filled = round(rating)
    return "★" * filled + "☆" * (5 - filled)


def review_to_dict(review: Review) -> dict[str, Any]:
    return {
        "id": review.id,
        "book_id": review.book_id,
        "date_read": review.date_read.isoformat() if review.date_read else None,
        "rating": review.rating,
        "review": review.review,
    }


def book_to_dict(book: ExtendedBook) -> dict[str, Any]:
    return {
        "id": book.id,
        "title": book.title,
        "authors": book.author_names,
        "translators": book.translator_names,
        "genre": book.book.genre,
        "pages": book.book.pages,
        "pub_year": book.book.pub_year,
        "reviews": [review_to_dict(r) for r in book.reviews],
    }


def print_json(data: Any) -> None:
    # Plain print so the output stays machine-readable (no rich markup).
    print(json.dumps(data, ensure_ascii=False, indent=2))


def print_books(books: list[ExtendedBook]) -> None:
    table = Table(title=f"Books ({len(books)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Authors")
    table.add_column("Genre")
    table.add_column("Year", justify="right")
    table.add_column("Rating")
    for book in books:
        table.add_row(
            str(book.id),
            book.title,
            ", ".join(book.author_names),
            book.book.genre,
            str(book.book.pub_year or ""),
            stars(book.average_rating),
        )
    console.print(table)


def print_book(book: ExtendedBook) -> None:
    text = Text()
    text.append(f"[{book.id}] ", style="dim")
    text.append(book.title, style="bold")
    text.append(f"\n  Authors:     {', '.join(book.author_names)}")
    if book.translators:
        text.append(f"\n  Translators: {', '.join(book.translator_names)}")
    text.append(f"\n  Genre:       {book.book.genre}")
    if book.book.pages is not None:
        text.append(f"\n  Pages:       {book.book.pages}")
    if book.book.pub_year is not None:
        text.append(f"\n  Published:   {book.book.pub_year}")
    console.print(text)
    if book.reviews:
        print_reviews([(book, r) for r in book.reviews])
    else:
        console.print("  No reviews yet.", style="dim")


def print_reviews(rows: list[tuple[ExtendedBook, Review]]) -> None:
    table = Table(title=f"Reviews ({len(rows)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Book")
    table.add_column("Read")
    table.add_column("Rating")
    table.add_column("Review")
    for book, review in rows:
        preview = review.review.replace("\n", " ")
        table.add_row(
            str(review.id),
            book.title,
            review.date_read.isoformat() if review.date_read else "-",
            stars(review.rating),
            preview if len(preview) <= 60 else preview[:57] + "...",
        )
    console.print(table)


def print_author_stats(stats: list[AuthorStats]) -> None:
    table = Table(title=f"Top {len(stats)} Authors")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Author", style="bold")
    table.add_column("Books", justify="right")
    table.add_column("Reviews", justify="right")
    table.add_column("Avg")
    table.add_column("Titles")
    for rank, entry in enumerate(stats, start=1):
        avg = f"{entry.average_rating:.1f}" if entry.average_rating is not None else "-"
        titles = ", ".join(entry.titles[:3])
        if len(entry.titles) > 3:
            titles += f" and {len(entry.titles) - 3} more"
        table.add_row(
            str(rank), entry.name, str(entry.book_count), str(entry.review_count), avg, titles
        )
    console.print(table)


def print_year_stats(stats: YearStats, chart: bool) -> None:
    avg = f"{stats.average_rating:.1f}/5" if stats.average_rating is not None else "-"
    console.print(Text("Reading statistics", style="bold green"))
    console.print(f"  Books:   {stats.total_books}")
    console.print(f"  Pages:   {stats.total_pages}")
    console.print(f"  Reviews: {stats.total_reviews}")
    console.print(f"  Average rating: {avg}")
    if not chart:
        return
    console.print()
    console.print(Text("Books read per year (by read date)", style="bold"))
    if not stats.reads_by_year:
        console.print("  No reading dates available.", style="dim")
    for year, count in stats.reads_by_year:
        line = Text(f"  {year}: ")
        line.append("█" * count, style="green")
        line.append(f" {count} book{'s' if count != 1 else ''}")
        console.print(line)
