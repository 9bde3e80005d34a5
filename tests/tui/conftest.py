"""Shared fixtures for TUI tests: a real SQLite library behind the controller."""

import pytest

from libro.tui.controller import Controller
from libro.tui.keys import KeyEvent
from libro.tui.loop import EventLoop
from libro.tui.state import AppState


def parse_key(name: str) -> KeyEvent:
    """'a' -> a, 'enter' -> enter, 'ctrl+s' -> s with ctrl, 'shift+tab' -> tab with shift."""
    if len(name) == 1:
        return KeyEvent(name)
    *mods, code = name.split("+")
    return KeyEvent(code, frozenset(mods))


@pytest.fixture
def controller(db):
    return Controller(db)


@pytest.fixture
def state(controller):
    state = AppState()
    assert controller.load(state)
    return state


@pytest.fixture
def loop(state, controller):
    return EventLoop(state, controller)


@pytest.fixture
def press(loop):
    """press('a', 'ctrl+s', ...) feeds key events through resolve + apply."""

    def _press(*keys: str) -> None:
        for name in keys:
            loop.handle(parse_key(name))

    return _press


@pytest.fixture
def type_text(press):
    def _type(text: str) -> None:
        press(*text)

    return _type


@pytest.fixture
def reload(controller, state):
    """Refresh the cache after adding rows directly through the db fixture."""

    def _reload() -> AppState:
        assert controller.load(state)
        return state

    return _reload
