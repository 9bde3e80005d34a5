"""Libro TUI application.

- Textual hosts the loop: key events and an interval tick feed EventLoop
- Keys are resolved per mode (keys.py) and applied by the Controller
- Views are pure functions of AppState plus the shared TextEditor
- All DB reads and writes go through the Controller's store
"""

from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, Static

from libro.config import Config
from libro.db.store import Database
from libro.errors import LibroError
from libro.tui.controller import Controller
from libro.tui.decorators import safe_action
from libro.tui.keys import CTRL, KeyEvent, from_textual
from libro.tui.loop import EventLoop, Resize, Tick
from libro.tui.state import AppState
from libro.tui.views import select_view

# Rows taken by header, breadcrumb, labels, hint bar, banner and footer.
EDITOR_CHROME_ROWS = 9


class LibroApp(App):
    CSS_PATH = "tui.css"
    TITLE = "Libro"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        # Route ctrl+q through the key tables instead of Textual's quit.
        Binding("ctrl+q", "ctrl_q", "Quit", show=False, priority=True),
    ]

    def __init__(self, config: Config | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.config = config or Config.load()
        self.db: Database | None = None
        self.event_loop: EventLoop | None = None
        self._editor_lines: int | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(id="main")
        yield Static("", id="message")
        yield Footer()

    def on_mount(self) -> None:
        log_path = self.config.log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=log_path,
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        try:
            self.db = Database.open(self.config.db_path)
        except LibroError as e:
            logging.exception("Could not open library")
            self.exit(message=str(e))
            return

        state = AppState()
        controller = Controller(self.db)
        controller.load(state)
        self.event_loop = EventLoop(
            state,
            controller,
            tick_interval=self.config.tick_interval,
            message_ttl=self.config.message_ttl,
        )
        self.set_interval(self.config.tick_interval, self._on_tick)
        self._render_view()

    def on_unmount(self) -> None:
        if self.db is not None:
            self.db.close()

    # =====================
    # Input
    # =====================

    async def on_key(self, event: events.Key) -> None:
        # Every key goes through the mode tables; suppress Textual's defaults.
        event.stop()
        event.prevent_default()
        self._dispatch_key(from_textual(event))

    def action_ctrl_q(self) -> None:
        self._dispatch_key(KeyEvent("q", frozenset({CTRL})))

    @safe_action
    def on_resize(self, event: events.Resize) -> None:
        self._editor_lines = max(1, event.size.height - EDITOR_CHROME_ROWS)
        if self.event_loop.handle(Resize(event.size.width, event.size.height)):
            self._render_view()

    @safe_action
    def _on_tick(self) -> None:
        if self.event_loop.handle(Tick()):
            self._render_view()

    @safe_action
    def _dispatch_key(self, key: KeyEvent) -> None:
        try:
            redraw = self.event_loop.handle(key)
        except Exception as e:
            # Keep the UI alive on bugs; the traceback goes to tui.log.
            logging.exception("Unhandled error for key %s", key)
            self.event_loop.state.set_message(f"Internal error: {e}")
            redraw = True

        if self.event_loop.state.should_quit:
            self.exit()
            return
        if redraw:
            self._render_view()

    # =====================
    # Rendering
    # =====================

    def _render_view(self) -> None:
        """Schedule a view re-render.

        Textual's `remove_children()` / `mount()` are async. Running them in an
        exclusive worker avoids duplicate ids during fast key repeat.
        """
        if self.event_loop is None:
            return

        self.run_worker(
            self._render_view_async(),
            group="render",
            exclusive=True,
            exit_on_error=False,
        )

    async def _render_view_async(self) -> None:
        if self.event_loop is None:
            return
        state = self.event_loop.state
        editor = self.event_loop.controller.editor
        if self._editor_lines is not None:
            editor.set_visible_lines(self._editor_lines)

        self.sub_title = f"{state.mode.value} | {state.screen.value}"

        try:
            container = self.screen.query_one("#main")
            banner = self.screen.query_one("#message", Static)
        except NoMatches:
            return

        banner.update(state.message_text or "")
        banner.set_class(state.message is not None, "visible")

        await container.remove_children()
        view = select_view(state.screen, state.mode)
        await container.mount_all(view.render(state, editor))
