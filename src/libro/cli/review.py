"""Review commands: libro review add|list|edit|delete"""

from __future__ import annotations

import dataclasses
import sys
from typing import Optional

import typer

from libro.cli.book import parse_date
from libro.cli.output import console, print_reviews
from libro.db.store import open_library
from libro.errors import LibroError
from libro.models import NewReview


def register(app: typer.Typer) -> None:
    @app.command()
    def add(
        book_id: int,
        text: str,
        rating: int = typer.Option(5, "--rating", "-r"),
        read: Optional[str] = typer.Option(None, "--date", help="Date read (YYYY-MM-DD), default today"),
    ) -> None:
        """Add a review to a book."""
        new_review = NewReview(book_id=book_id, rating=rating, review=text, date_read=parse_date(read))
        try:
            with open_library() as db:
                review_id = db.add_review(new_review)
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        console.print(f"✓ Review added (ID: {review_id})")

    @app.command("list")
    def list_reviews(
        limit: Optional[int] = typer.Option(None, "--limit", "-n"),
    ) -> None:
        """List reviews, most recently read first."""
        try:
            with open_library() as db:
                books = db.get_books()
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        rows = [(book, review) for book in books for review in book.reviews]
        rows.sort(key=lambda row: (row[1].date_read.isoformat() if row[1].date_read else "", row[1].id), reverse=True)
        if limit is not None:
            rows = rows[:limit]

        if not rows:
            print("No reviews yet.")
            return
        print_reviews(rows)

    @app.command()
    def edit(
        review_id: int,
        text: Optional[str] = typer.Option(None, "--text"),
        rating: Optional[int] = typer.Option(None, "--rating", "-r"),
        read: Optional[str] = typer.Option(None, "--date"),
    ) -> None:
        """Change a review's text, rating or read date."""
        if text is None and rating is None and read is None:
            print("Nothing to change (use --text, --rating or --date)")
            sys.exit(1)

        try:
            with open_library() as db:
                review = db.get_review(review_id)
                changes = {}
                if text is not None:
                    changes["review"] = text
                if rating is not None:
                    changes["rating"] = rating
                if read is not None:
                    changes["date_read"] = parse_date(read)
                db.update_review(review_id, dataclasses.replace(review, **changes))
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        console.print(f"✓ Review updated (ID: {review_id})")

    @app.command()
    def delete(review_id: int) -> None:
        """Delete a review."""
        try:
            with open_library() as db:
                db.delete_review(review_id)
        except LibroError as e:
            print(str(e))
            sys.exit(1)

        print(f"✓ Review deleted (ID: {review_id})")
