"""Render dispatch: (screen, mode) -> view.

Views are stateless; the same instance is reused across renders.
"""

from libro.tui.state import Mode, Screen
from libro.tui.views.base import View
from libro.tui.views.book_detail import BookDetailView
from libro.tui.views.book_list import BookListView
from libro.tui.views.confirm import ConfirmView
from libro.tui.views.form import BookFormView
from libro.tui.views.help import HelpView
from libro.tui.views.report import ReportScreenView
from libro.tui.views.review import ReviewView
from libro.tui.views.search import SearchView
from libro.tui.views.selector import SelectorView

SCREEN_VIEWS: dict[Screen, View] = {
    Screen.BOOK_LIST: BookListView(),
    Screen.BOOK_DETAIL: BookDetailView(),
    Screen.ADD_BOOK: BookFormView(),
    Screen.EDIT_BOOK: BookFormView(),
    Screen.REVIEW: ReviewView(),
    Screen.SEARCH: SearchView(),
    Screen.REPORT: ReportScreenView(),
    Screen.HELP: HelpView(),
    Screen.CONFIRM_DELETE: ConfirmView(),
}

MODE_VIEWS: dict[Mode, View] = {
    Mode.CONFIRM: SCREEN_VIEWS[Screen.CONFIRM_DELETE],
    Mode.GENRE_SELECT: SelectorView(),
    Mode.YEAR_SELECT: SelectorView(),
}


def select_view(screen: Screen, mode: Mode) -> View:
    """Selector and confirmation modes override the screen's own view."""
    return MODE_VIEWS.get(mode) or SCREEN_VIEWS[screen]
