"""Libro: a personal library tracker with a CLI and a terminal UI."""

__version__ = "0.1.0"
