"""Report command: libro report [--authors | --years | --recent]"""

from __future__ import annotations

import sys
from typing import Optional

import typer

from libro.cli.output import print_author_stats, print_books, print_year_stats
from libro.db.store import open_library
from libro.errors import LibroError
from libro.models import BookFilter
from libro.reports import author_stats, recent_books, year_stats
from libro.validation import validate_year


def register(app: typer.Typer) -> None:
    @app.command()
    def report(
        authors: bool = typer.Option(False, "--authors", help="Top authors"),
        years: bool = typer.Option(False, "--years", help="Books read per year"),
        recent: bool = typer.Option(False, "--recent", help="Recently added books"),
        year: Optional[int] = typer.Option(None, "--year", "-y", help="Only books published this year"),
        limit: int = typer.Option(10, "--limit", "-n"),
    ) -> None:
        """Reading statistics."""
        if sum([authors, years, recent]) > 1:
            print("Choose at most one of --authors, --years, --recent")
            sys.exit(1)

        try:
            if year is not None:
                validate_year(year)
            with open_library() as db:
                books = db.get_books(BookFilter(year=year))
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        if not books:
            print("No books found for generating reports")
            return

        if authors:
            print_author_stats(author_stats(books, limit))
        elif recent:
            print_books(recent_books(books, limit))
        else:
            print_year_stats(year_stats(books), chart=years)
