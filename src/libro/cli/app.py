"""Main CLI application wiring for Libro.

kubectl-style subcommands:
  libro book add "Dune" --author "Frank Herbert" --genre 소설
  libro books list
  libro review delete 3

Both singular and plural forms work identically. With no command, the
TUI is launched.
"""

import typer

app = typer.Typer(add_completion=False, help="Libro: a personal reading log")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Libro CLI."""
    if ctx.invoked_subcommand is None:
        tui()


# =============================================================================
# Subcommand groups
# =============================================================================

# Books
book_app = typer.Typer(help="Manage books")
app.add_typer(book_app, name="book")
app.add_typer(book_app, name="books")

# Reviews
review_app = typer.Typer(help="Manage reviews")
app.add_typer(review_app, name="review")
app.add_typer(review_app, name="reviews")


# =============================================================================
# Register commands to subgroups
# =============================================================================

from libro.cli import book as book_cmd
from libro.cli import review as review_cmd

book_cmd.register(book_app)
review_cmd.register(review_app)


# =============================================================================
# Top-level commands
# =============================================================================

from libro.cli import report as report_cmd

report_cmd.register(app)


@app.command()
def tui():
    """Launch the Libro TUI."""
    import sys

    from libro.config import Config
    from libro.errors import LibroError
    from libro.tui.app import LibroApp

    try:
        config = Config.load()
    except LibroError as e:
        print(str(e))
        sys.exit(1)
    LibroApp(config).run()
