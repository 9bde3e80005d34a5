"""Semantic actions produced by the key resolver.

Actions are frozen dataclasses; the controller pattern-matches on them.
"""

from dataclasses import dataclass
from typing import Union

from libro.tui.state import ReportView


# =============================================================================
# Navigation
# =============================================================================

@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class MoveLeft:
    pass


@dataclass(frozen=True)
class MoveRight:
    pass


@dataclass(frozen=True)
class Select:
    """Enter: open, commit or descend, depending on mode and screen."""
    pass


@dataclass(frozen=True)
class Back:
    """Esc. Never leaves the application."""
    pass


@dataclass(frozen=True)
class Toggle:
    pass


@dataclass(frozen=True)
class NextField:
    pass


@dataclass(frozen=True)
class PrevField:
    pass


@dataclass(frozen=True)
class ToggleHelp:
    pass


@dataclass(frozen=True)
class OpenSearch:
    pass


@dataclass(frozen=True)
class OpenReport:
    pass


@dataclass(frozen=True)
class ShowReport:
    view: ReportView


# =============================================================================
# Library mutations (Normal mode only)
# =============================================================================

@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class AddBook:
    pass


@dataclass(frozen=True)
class EditBook:
    pass


@dataclass(frozen=True)
class DeleteSelected:
    """Delete the selected review on the Review screen, else the selected book."""
    pass


@dataclass(frozen=True)
class AddReview:
    """Open the Review screen, or edit the selected review when already there."""
    pass


@dataclass(frozen=True)
class NewReview:
    pass


# =============================================================================
# Edit control
# =============================================================================

@dataclass(frozen=True)
class SaveEdit:
    pass


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class ForceQuit:
    """Discard the edit and quit."""
    pass


# =============================================================================
# Text editing
# =============================================================================

@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class DeleteChar:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class NewLine:
    pass


@dataclass(frozen=True)
class CursorLeft:
    pass


@dataclass(frozen=True)
class CursorRight:
    pass


@dataclass(frozen=True)
class CursorUp:
    pass


@dataclass(frozen=True)
class CursorDown:
    pass


@dataclass(frozen=True)
class LineStart:
    pass


@dataclass(frozen=True)
class LineEnd:
    pass


@dataclass(frozen=True)
class ClearLine:
    pass


@dataclass(frozen=True)
class DeleteToEnd:
    pass


@dataclass(frozen=True)
class DeleteWord:
    pass


# =============================================================================
# Confirmation
# =============================================================================

@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Ignore:
    pass


Action = Union[
    MoveUp, MoveDown, MoveLeft, MoveRight, Select, Back, Toggle,
    NextField, PrevField, ToggleHelp, OpenSearch, OpenReport, ShowReport,
    Quit, AddBook, EditBook, DeleteSelected, AddReview, NewReview,
    SaveEdit, CancelEdit, ForceQuit,
    InsertChar, DeleteChar, Backspace, NewLine,
    CursorLeft, CursorRight, CursorUp, CursorDown,
    LineStart, LineEnd, ClearLine, DeleteToEnd, DeleteWord,
    Confirm, Cancel, Ignore,
]

# Actions that can quit, delete, or start a library mutation.
DESTRUCTIVE = (Quit, ForceQuit, DeleteSelected, AddBook, EditBook, AddReview, NewReview)
