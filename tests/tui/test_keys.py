"""Tests for per-mode key resolution."""

import string

import pytest
from textual import events

from libro.tui import actions as a
from libro.tui.keys import KEYMAPS, KeyEvent, from_textual, resolve
from libro.tui.state import Mode, ReportView

NON_NORMAL_MODES = [m for m in Mode if m is not Mode.NORMAL]
SPECIAL_KEYS = ["enter", "escape", "tab", "backspace", "delete", "up", "down", "left", "right", "f1"]
MODIFIER_SETS = [frozenset(), frozenset({"ctrl"}), frozenset({"shift"}), frozenset({"alt"})]


def all_events():
    for code in list(string.printable.strip()) + [" "] + SPECIAL_KEYS:
        for mods in MODIFIER_SETS:
            yield KeyEvent(code, mods)


@pytest.mark.parametrize("mode", NON_NORMAL_MODES)
def test_destructive_actions_only_in_normal_mode(mode):
    """Outside Normal mode no key quits, deletes or starts a mutation (ctrl+q in Edit aside)."""
    allowed = (a.ForceQuit,) if mode is Mode.EDIT else ()
    for event in all_events():
        action = resolve(event, mode)
        if isinstance(action, a.DESTRUCTIVE):
            assert isinstance(action, allowed), (event, mode, action)


def test_force_quit_is_edit_only_chord():
    assert resolve(KeyEvent("q", frozenset({"ctrl"})), Mode.EDIT) == a.ForceQuit()
    for mode in NON_NORMAL_MODES:
        if mode is not Mode.EDIT:
            assert not isinstance(resolve(KeyEvent("q", frozenset({"ctrl"})), mode), a.ForceQuit)


def test_normal_mode_bindings():
    assert resolve(KeyEvent("q"), Mode.NORMAL) == a.Quit()
    assert resolve(KeyEvent("a"), Mode.NORMAL) == a.AddBook()
    assert resolve(KeyEvent("d"), Mode.NORMAL) == a.DeleteSelected()
    assert resolve(KeyEvent("j"), Mode.NORMAL) == a.MoveDown()
    assert resolve(KeyEvent("up"), Mode.NORMAL) == a.MoveUp()
    assert resolve(KeyEvent("2"), Mode.NORMAL) == a.ShowReport(ReportView.YEARS)
    assert resolve(KeyEvent("tab", frozenset({"shift"})), Mode.NORMAL) == a.PrevField()
    assert resolve(KeyEvent(" "), Mode.NORMAL) == a.Toggle()
    assert resolve(KeyEvent("x"), Mode.NORMAL) == a.Ignore()


def test_same_key_differs_by_mode():
    q = KeyEvent("q")
    assert resolve(q, Mode.NORMAL) == a.Quit()
    assert resolve(q, Mode.EDIT) == a.InsertChar("q")
    assert resolve(q, Mode.SEARCH) == a.InsertChar("q")
    assert resolve(q, Mode.FORM_INPUT) == a.InsertChar("q")
    assert resolve(q, Mode.CONFIRM) == a.Ignore()
    assert resolve(q, Mode.GENRE_SELECT) == a.Ignore()


def test_edit_mode_navigation_letters_insert():
    for code in "hjkl":
        assert resolve(KeyEvent(code), Mode.EDIT) == a.InsertChar(code)
    assert resolve(KeyEvent("enter"), Mode.EDIT) == a.NewLine()
    assert resolve(KeyEvent("h", frozenset({"ctrl"})), Mode.EDIT) == a.CursorLeft()
    assert resolve(KeyEvent("s", frozenset({"ctrl"})), Mode.EDIT) == a.SaveEdit()
    assert resolve(KeyEvent("escape"), Mode.EDIT) == a.Ignore()
    assert resolve(KeyEvent("f1"), Mode.EDIT) == a.Ignore()


def test_unbound_control_chord_does_not_insert():
    assert resolve(KeyEvent("z", frozenset({"ctrl"})), Mode.EDIT) == a.Ignore()


def test_confirm_mode():
    assert resolve(KeyEvent("y"), Mode.CONFIRM) == a.Confirm()
    assert resolve(KeyEvent("Y", frozenset({"shift"})), Mode.CONFIRM) == a.Confirm()
    assert resolve(KeyEvent("N"), Mode.CONFIRM) == a.Cancel()
    assert resolve(KeyEvent("escape"), Mode.CONFIRM) == a.Back()
    assert resolve(KeyEvent("enter"), Mode.CONFIRM) == a.Ignore()


def test_selector_modes():
    for mode in (Mode.GENRE_SELECT, Mode.YEAR_SELECT):
        assert resolve(KeyEvent("j"), mode) == a.MoveDown()
        assert resolve(KeyEvent("up"), mode) == a.MoveUp()
        assert resolve(KeyEvent("enter"), mode) == a.Select()
        assert resolve(KeyEvent("escape"), mode) == a.Back()


def test_search_and_form_input_modes():
    assert resolve(KeyEvent("enter"), Mode.SEARCH) == a.Select()
    assert resolve(KeyEvent("u", frozenset({"ctrl"})), Mode.SEARCH) == a.ClearLine()
    assert resolve(KeyEvent("tab"), Mode.FORM_INPUT) == a.NextField()
    assert resolve(KeyEvent("s", frozenset({"ctrl"})), Mode.FORM_INPUT) == a.SaveEdit()
    assert resolve(KeyEvent("한"), Mode.FORM_INPUT) == a.InsertChar("한")


def test_every_mode_has_a_table():
    assert set(KEYMAPS) == set(Mode)


@pytest.mark.parametrize(
    "key, character, expected",
    [
        ("a", "a", KeyEvent("a")),
        ("Y", "Y", KeyEvent("Y")),
        ("question_mark", "?", KeyEvent("?")),
        ("space", " ", KeyEvent(" ")),
        ("enter", "\r", KeyEvent("enter")),
        ("escape", "\x1b", KeyEvent("escape")),
        ("ctrl+s", "\x13", KeyEvent("s", frozenset({"ctrl"}))),
        ("shift+tab", None, KeyEvent("tab", frozenset({"shift"}))),
        ("backtab", None, KeyEvent("tab", frozenset({"shift"}))),
    ],
)
def test_from_textual(key, character, expected):
    assert from_textual(events.Key(key, character)) == expected
