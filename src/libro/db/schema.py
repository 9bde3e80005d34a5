"""SQLite schema for a Libro library.

Forward-only and idempotent: every statement is CREATE ... IF NOT EXISTS,
so opening an existing library is a no-op.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

SCHEMA = """
CREATE TABLE IF NOT EXISTS books (
    id        INTEGER PRIMARY KEY AUTOINCREMENT,
    title     TEXT    NOT NULL,
    pages     INTEGER,
    pub_year  INTEGER,
    genre     TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS reviews (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id    INTEGER NOT NULL,
    date_read  TEXT,
    rating     INTEGER,
    review     TEXT,
    FOREIGN KEY(book_id) REFERENCES books(id)
);

CREATE TABLE IF NOT EXISTS writers (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('author', 'translator')),
    UNIQUE (name, type)
);

CREATE TABLE IF NOT EXISTS book_writers (
    book_id   INTEGER NOT NULL,
    writer_id INTEGER NOT NULL,
    type      TEXT    NOT NULL CHECK (type IN ('author', 'translator')),
    PRIMARY KEY (book_id, writer_id, type),
    FOREIGN KEY(book_id) REFERENCES books(id) ON DELETE CASCADE,
    FOREIGN KEY(writer_id) REFERENCES writers(id) ON DELETE CASCADE
);
"""


def connect(path: Path | str) -> sqlite3.Connection:
    """Open (creating if needed) a library database and apply the schema."""
    conn = sqlite3.connect(str(path))
    conn.execute("PRAGMA foreign_keys = ON")
    conn.executescript(SCHEMA)
    conn.commit()
    return conn
