"""
TUI state for Libro.

Architecture:
- AppState is a plain mutable model owned by the event loop
- Controller.apply(action, state) is the only writer (see controller.py)
- Views read AppState and never touch the store
- Derived data (search results, selected book) is computed on demand
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from libro.models import ExtendedBook, NewBook, book_matches, split_names
from libro.validation import parse_optional_int, validate_year
from libro.errors import ValidationError


GENRES = ["소설", "에세이", "자기계발", "기술/IT", "기타"]
EARLIEST_SELECTABLE_YEAR = 1900
DEFAULT_MESSAGE_TTL = 3.0


def selectable_years() -> list[int]:
    """Years offered by the year selector, newest first."""
    return list(range(date.today().year, EARLIEST_SELECTABLE_YEAR - 1, -1))


# =============================================================================
# Modes and screens
# =============================================================================

class Mode(Enum):
    NORMAL = "Normal"
    EDIT = "Edit"
    SEARCH = "Search"
    CONFIRM = "Confirm"
    FORM_INPUT = "FormInput"
    GENRE_SELECT = "GenreSelect"
    YEAR_SELECT = "YearSelect"


class Screen(Enum):
    BOOK_LIST = "BookList"
    BOOK_DETAIL = "BookDetail"
    ADD_BOOK = "AddBook"
    EDIT_BOOK = "EditBook"
    REVIEW = "Review"
    SEARCH = "Search"
    REPORT = "Report"
    HELP = "Help"
    CONFIRM_DELETE = "ConfirmDelete"


FORM_SCREENS = (Screen.ADD_BOOK, Screen.EDIT_BOOK)
TEXT_MODES = (Mode.EDIT, Mode.SEARCH, Mode.FORM_INPUT)


class ReportView(Enum):
    AUTHORS = "authors"
    YEARS = "years"
    RECENT = "recent"

    def cycle(self, step: int) -> "ReportView":
        members = list(ReportView)
        return members[(members.index(self) + step) % len(members)]


# =============================================================================
# Book form
# =============================================================================

FORM_FIELDS = ("title", "authors", "translators", "genre", "pages", "pub_year")
FORM_LABELS = ("Title", "Authors", "Translators", "Genre", "Pages", "Year")
GENRE_FIELD = 3
YEAR_FIELD = 5


@dataclass
class BookForm:
    """The six AddBook/EditBook fields, kept as raw strings until save."""
    title: str = ""
    authors: str = ""
    translators: str = ""
    genre: str = ""
    pages: str = ""
    pub_year: str = ""
    field_index: int = 0
    genre_selected_index: int = 0
    year_selected_index: int = 0
    editing_book_id: Optional[int] = None

    @classmethod
    def from_book(cls, book: ExtendedBook) -> "BookForm":
        return cls(
            title=book.title,
            authors=", ".join(book.author_names),
            translators=", ".join(book.translator_names),
            genre=book.book.genre,
            pages="" if book.book.pages is None else str(book.book.pages),
            pub_year="" if book.book.pub_year is None else str(book.book.pub_year),
            editing_book_id=book.id,
        )

    def next_field(self) -> None:
        self.field_index = (self.field_index + 1) % len(FORM_FIELDS)

    def prev_field(self) -> None:
        self.field_index = (self.field_index - 1) % len(FORM_FIELDS)

    @property
    def current_label(self) -> str:
        return FORM_LABELS[self.field_index]

    def get_current_value(self) -> str:
        return getattr(self, FORM_FIELDS[self.field_index])

    def set_current_value(self, value: str) -> None:
        setattr(self, FORM_FIELDS[self.field_index], value)

    def is_genre_field(self) -> bool:
        return self.field_index == GENRE_FIELD

    def is_year_field(self) -> bool:
        return self.field_index == YEAR_FIELD

    def open_genre_selector(self) -> None:
        self.genre_selected_index = GENRES.index(self.genre) if self.genre in GENRES else 0

    def open_year_selector(self) -> None:
        years = selectable_years()
        try:
            self.year_selected_index = years.index(int(self.pub_year.strip()))
        except ValueError:
            self.year_selected_index = 0

    def commit_genre(self) -> None:
        self.genre = GENRES[self.genre_selected_index]

    def commit_year(self) -> None:
        self.pub_year = str(selectable_years()[self.year_selected_index])

    def validate(self) -> Optional[str]:
        """First failing rule's message, or None when the form can be saved."""
        if not self.title.strip():
            return "Title is required"
        if not split_names(self.authors):
            return "At least one author is required"
        if not self.genre.strip():
            return "Genre is required"
        try:
            parse_optional_int(self.pages)
        except ValueError:
            return "Pages must be a number"
        try:
            year = parse_optional_int(self.pub_year)
        except ValueError:
            return "Year must be a number"
        if year is not None:
            try:
                validate_year(year)
            except ValidationError as e:
                return e.message
        return None

    def to_new_book(self) -> NewBook:
        """Build the store record. Call only after validate() returned None."""
        return NewBook(
            title=self.title.strip(),
            authors=split_names(self.authors),
            translators=split_names(self.translators),
            genre=self.genre.strip(),
            pages=parse_optional_int(self.pages),
            pub_year=parse_optional_int(self.pub_year),
        )


# =============================================================================
# Pending confirmation
# =============================================================================

@dataclass(frozen=True)
class PendingDelete:
    kind: str  # "book" or "review"
    id: int
    label: str


# =============================================================================
# App State
# =============================================================================

@dataclass
class AppState:
    mode: Mode = Mode.NORMAL
    screen: Screen = Screen.BOOK_LIST
    previous_screen: Optional[Screen] = None

    books: list[ExtendedBook] = field(default_factory=list)
    selected_book_index: int = 0
    selected_review_index: int = 0
    search_selected_index: int = 0

    search_query: str = ""
    editing_review_index: Optional[int] = None
    form: BookForm = field(default_factory=BookForm)
    report_view: ReportView = ReportView.AUTHORS
    pending_delete: Optional[PendingDelete] = None

    message: Optional[tuple[str, float]] = None
    should_quit: bool = False

    # =========================================================================
    # Screens
    # =========================================================================

    def set_screen(self, screen: Screen) -> None:
        self.previous_screen = self.screen
        self.screen = screen

    def go_back(self) -> None:
        """Return to the previous screen (single level), or the book list."""
        target = self.previous_screen or Screen.BOOK_LIST
        self.previous_screen = None
        self.screen = target

    # =========================================================================
    # Message banner
    # =========================================================================

    def set_message(self, text: str, now: Optional[float] = None) -> None:
        self.message = (text, time.monotonic() if now is None else now)

    def clear_expired_message(
        self, now: Optional[float] = None, ttl: float = DEFAULT_MESSAGE_TTL
    ) -> bool:
        """Drop the banner once it is older than ttl. Returns True if cleared."""
        if self.message is None:
            return False
        now = time.monotonic() if now is None else now
        if now - self.message[1] >= ttl:
            self.message = None
            return True
        return False

    @property
    def message_text(self) -> Optional[str]:
        return self.message[0] if self.message else None

    # =========================================================================
    # Derived data
    # =========================================================================

    @property
    def selected_book(self) -> Optional[ExtendedBook]:
        if 0 <= self.selected_book_index < len(self.books):
            return self.books[self.selected_book_index]
        return None

    @property
    def selected_review(self):
        book = self.selected_book
        if book is None or not 0 <= self.selected_review_index < len(book.reviews):
            return None
        return book.reviews[self.selected_review_index]

    def search_results(self) -> list[tuple[int, ExtendedBook]]:
        """(absolute index in books, book) pairs matching the committed query."""
        if not self.search_query:
            return []
        return [(i, b) for i, b in enumerate(self.books) if book_matches(b, self.search_query)]

    def clamp_selection(self) -> None:
        self.selected_book_index = _clamp(self.selected_book_index, len(self.books))
        book = self.selected_book
        self.selected_review_index = _clamp(
            self.selected_review_index, len(book.reviews) if book else 0
        )
        self.search_selected_index = _clamp(
            self.search_selected_index, len(self.search_results())
        )


def _clamp(index: int, length: int) -> int:
    if length == 0:
        return 0
    return min(max(index, 0), length - 1)
