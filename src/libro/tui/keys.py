"""Key resolution: (key event, mode) -> Action.

Each mode owns its own table. Quitting, deleting and starting a library
mutation are bound only in Normal mode (plus ctrl+q in Edit), so typing
"q" or "d" anywhere text is being entered inserts the letter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from libro.tui import actions as a
from libro.tui.state import Mode, ReportView, TEXT_MODES

CTRL = "ctrl"
SHIFT = "shift"
ALT = "alt"


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a code ("a", "enter", "tab", "up", ...) and a modifier set."""
    code: str
    modifiers: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    @property
    def chord(self) -> str:
        """Modifier part of the table key.

        Shift is folded into printable characters ("Y" is already shifted).
        """
        mods = set(self.modifiers)
        if self.is_char:
            mods.discard(SHIFT)
        return "+".join(sorted(mods))


def key(code: str, *modifiers: str) -> KeyEvent:
    return KeyEvent(code, frozenset(modifiers))


def _plain(code: str) -> tuple[str, str]:
    return ("", code)


def _ctrl(code: str) -> tuple[str, str]:
    return (CTRL, code)


def _shift(code: str) -> tuple[str, str]:
    return (SHIFT, code)


KeyTable = dict[tuple[str, str], a.Action]

NORMAL_KEYS: KeyTable = {
    _plain("q"): a.Quit(),
    _plain("escape"): a.Back(),
    _plain("?"): a.ToggleHelp(),
    _plain("j"): a.MoveDown(),
    _plain("k"): a.MoveUp(),
    _plain("h"): a.MoveLeft(),
    _plain("l"): a.MoveRight(),
    _plain("down"): a.MoveDown(),
    _plain("up"): a.MoveUp(),
    _plain("left"): a.MoveLeft(),
    _plain("right"): a.MoveRight(),
    _plain("enter"): a.Select(),
    _plain("a"): a.AddBook(),
    _plain("e"): a.EditBook(),
    _plain("d"): a.DeleteSelected(),
    _plain("v"): a.AddReview(),
    _plain("n"): a.NewReview(),
    _plain("/"): a.OpenSearch(),
    _plain("r"): a.OpenReport(),
    _plain("tab"): a.NextField(),
    _shift("tab"): a.PrevField(),
    _plain(" "): a.Toggle(),
    _plain("1"): a.ShowReport(ReportView.AUTHORS),
    _plain("2"): a.ShowReport(ReportView.YEARS),
    _plain("3"): a.ShowReport(ReportView.RECENT),
    _ctrl("s"): a.SaveEdit(),
}

EDIT_KEYS: KeyTable = {
    _ctrl("s"): a.SaveEdit(),
    _ctrl("x"): a.CancelEdit(),
    _ctrl("q"): a.ForceQuit(),
    _ctrl("a"): a.LineStart(),
    _ctrl("e"): a.LineEnd(),
    _ctrl("u"): a.ClearLine(),
    _ctrl("k"): a.DeleteToEnd(),
    _ctrl("w"): a.DeleteWord(),
    _ctrl("h"): a.CursorLeft(),
    _ctrl("l"): a.CursorRight(),
    _ctrl("j"): a.CursorDown(),
    _plain("enter"): a.NewLine(),
    _plain("backspace"): a.Backspace(),
    _plain("delete"): a.DeleteChar(),
    _plain("left"): a.CursorLeft(),
    _plain("right"): a.CursorRight(),
    _plain("up"): a.CursorUp(),
    _plain("down"): a.CursorDown(),
}

SEARCH_KEYS: KeyTable = {
    _plain("enter"): a.Select(),
    _plain("escape"): a.Back(),
    _ctrl("u"): a.ClearLine(),
    _plain("backspace"): a.Backspace(),
}

CONFIRM_KEYS: KeyTable = {
    _plain("y"): a.Confirm(),
    _plain("Y"): a.Confirm(),
    _plain("n"): a.Cancel(),
    _plain("N"): a.Cancel(),
    _plain("escape"): a.Back(),
}

FORM_INPUT_KEYS: KeyTable = {
    _plain("escape"): a.Back(),
    _plain("tab"): a.NextField(),
    _shift("tab"): a.PrevField(),
    _plain("enter"): a.Select(),
    _ctrl("s"): a.SaveEdit(),
    _plain("backspace"): a.Backspace(),
    _plain("delete"): a.DeleteChar(),
    _ctrl("u"): a.ClearLine(),
    _ctrl("a"): a.LineStart(),
    _ctrl("e"): a.LineEnd(),
    _ctrl("k"): a.DeleteToEnd(),
    _ctrl("w"): a.DeleteWord(),
    _plain("left"): a.CursorLeft(),
    _plain("right"): a.CursorRight(),
}

SELECT_KEYS: KeyTable = {
    _plain("escape"): a.Back(),
    _plain("enter"): a.Select(),
    _plain("j"): a.MoveDown(),
    _plain("down"): a.MoveDown(),
    _plain("k"): a.MoveUp(),
    _plain("up"): a.MoveUp(),
}

KEYMAPS: dict[Mode, KeyTable] = {
    Mode.NORMAL: NORMAL_KEYS,
    Mode.EDIT: EDIT_KEYS,
    Mode.SEARCH: SEARCH_KEYS,
    Mode.CONFIRM: CONFIRM_KEYS,
    Mode.FORM_INPUT: FORM_INPUT_KEYS,
    Mode.GENRE_SELECT: SELECT_KEYS,
    Mode.YEAR_SELECT: SELECT_KEYS,
}


def resolve(event: KeyEvent, mode: Mode) -> a.Action:
    """Map a key press to an action for the given mode.

    Unbound printable characters insert themselves in text-entry modes and
    are ignored everywhere else.
    """
    action = KEYMAPS[mode].get((event.chord, event.code))
    if action is not None:
        return action
    if mode in TEXT_MODES and event.is_char and event.chord == "":
        return a.InsertChar(event.code)
    return a.Ignore()


def describe(chord: str, code: str) -> str:
    """Human-readable key name for help and hint text."""
    names = {" ": "space", "escape": "Esc", "enter": "Enter", "tab": "Tab"}
    label = names.get(code, code)
    if chord:
        return "+".join(part.capitalize() for part in chord.split("+")) + "+" + label
    return label


# =============================================================================
# Textual adapter
# =============================================================================

_TEXTUAL_ALIASES = {
    "space": " ",
    "backtab": "tab",
    "question_mark": "?",
    "slash": "/",
}


def from_textual(event) -> KeyEvent:
    """Translate a textual.events.Key into a KeyEvent."""
    parts = event.key.split("+")
    modifiers = set(parts[:-1])
    code = parts[-1]
    if code == "backtab":
        modifiers.add(SHIFT)
    code = _TEXTUAL_ALIASES.get(code, code)
    if event.is_printable and event.character and not modifiers & {CTRL, ALT}:
        code = event.character
        modifiers.discard(SHIFT)
    return KeyEvent(code, frozenset(modifiers))
