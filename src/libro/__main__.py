"""
Libro CLI entrypoint.

Executed via:
  python -m libro
"""

from libro.cli.app import app

if __name__ == "__main__":
    app()
