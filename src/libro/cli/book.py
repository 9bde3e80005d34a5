"""Book commands: libro book add|list|show|delete"""

from __future__ import annotations

import sys
from datetime import date
from typing import List, Optional

import typer
from rich.markup import escape

from libro.cli.output import book_to_dict, console, print_book, print_books, print_json
from libro.db.store import open_library
from libro.errors import LibroError
from libro.models import BookFilter, NewBook, book_matches


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a --date option (YYYY-MM-DD); exits on bad input."""
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        print(f"Invalid date: {raw} (expected YYYY-MM-DD)")
        sys.exit(1)


def register(app: typer.Typer) -> None:
    @app.command()
    def add(
        title: str,
        author: List[str] = typer.Option(..., "--author", "-a", help="Repeat for several authors"),
        genre: str = typer.Option(..., "--genre", "-g"),
        translator: List[str] = typer.Option([], "--translator", "-t"),
        pages: Optional[int] = typer.Option(None, "--pages"),
        year: Optional[int] = typer.Option(None, "--year", "-y", help="Publication year"),
        review: Optional[str] = typer.Option(None, "--review", help="Add a first review"),
        rating: int = typer.Option(5, "--rating", "-r"),
        read: Optional[str] = typer.Option(None, "--date", help="Date read (YYYY-MM-DD)"),
    ) -> None:
        """Add a book, optionally with its first review."""
        new_book = NewBook(
            title=title,
            authors=list(author),
            genre=genre,
            translators=list(translator),
            pages=pages,
            pub_year=year,
        )
        date_read = parse_date(read)

        try:
            with open_library() as db:
                if review is not None:
                    book_id, review_id = db.add_book_with_review(new_book, rating, review, date_read)
                else:
                    book_id, review_id = db.add_book(new_book), None
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        console.print(f"✓ Book added: [bold]{escape(title)}[/bold] (ID: {book_id})")
        if review_id is not None:
            console.print(f"✓ Review added (ID: {review_id})")

    @app.command("list")
    def list_books(
        query: Optional[str] = typer.Argument(None, help="Match title, author, genre or review"),
        year: Optional[int] = typer.Option(None, "--year", "-y", help="Publication year"),
        as_json: bool = typer.Option(False, "--json"),
    ) -> None:
        """List books."""
        try:
            with open_library() as db:
                books = db.get_books(BookFilter(year=year))
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        if query:
            books = [b for b in books if book_matches(b, query)]

        if as_json:
            print_json([book_to_dict(b) for b in books])
            return
        if not books:
            print("No books found.")
            return
        print_books(books)

    @app.command()
    def show(
        book_id: int,
        as_json: bool = typer.Option(False, "--json"),
    ) -> None:
        """Show one book with its reviews."""
        try:
            with open_library() as db:
                book = db.get_book(book_id)
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        if as_json:
            print_json(book_to_dict(book))
        else:
            print_book(book)

    @app.command()
    def delete(book_id: int) -> None:
        """Delete a book (its reviews must be deleted first)."""
        try:
            with open_library() as db:
                book = db.get_book(book_id)
                db.delete_book(book_id)
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        print(f"✓ Book deleted: \"{book.title}\"")
