"""Event loop: one render, one event, one dispatch per pass.

Textual drives the loop in the real application (key events plus an
interval timer for ticks). EventLoop.run() is the plain polling form of the
same cycle, used by tests and by any backend that exposes a blocking poll.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from libro.tui.controller import Controller
from libro.tui.keys import KeyEvent, resolve
from libro.tui.state import DEFAULT_MESSAGE_TTL, AppState

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.1


@dataclass(frozen=True)
class Tick:
    """Synthesized when no input arrives within the tick interval."""
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


Event = Union[KeyEvent, Tick, Resize]


class EventLoop:
    def __init__(
        self,
        state: AppState,
        controller: Controller,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        message_ttl: float = DEFAULT_MESSAGE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.state = state
        self.controller = controller
        self.tick_interval = tick_interval
        self.message_ttl = message_ttl
        self.clock = clock
        self.size: Optional[tuple[int, int]] = None

    def handle(self, event: Event) -> bool:
        """Dispatch one event. Returns True if the screen needs a redraw."""
        match event:
            case KeyEvent():
                action = resolve(event, self.state.mode)
                self.controller.apply(action, self.state)
                return True
            case Tick():
                return self.state.clear_expired_message(self.clock(), self.message_ttl)
            case Resize(width=width, height=height):
                self.size = (width, height)
                return True
        return False

    def run(
        self,
        poll: Callable[[float], Optional[Event]],
        render: Callable[[AppState, "Controller"], None],
    ) -> None:
        """Run until the state asks to quit.

        poll(timeout) blocks for at most timeout seconds and returns an event,
        or None when the timeout elapsed.
        """
        while True:
            render(self.state, self.controller)
            event = poll(self.tick_interval)
            self.handle(event if event is not None else Tick())
            if self.state.should_quit:
                logger.info("quit requested")
                break
