from rich.text import Text
from textual.widgets import Static

from libro.tui.editor import TextEditor

CURSOR_STYLE = "black on white"


def editor_text(editor: TextEditor, show_cursor: bool) -> Text:
    """The editor's visible lines, with the cursor cell highlighted."""
    text = Text()
    cursor_line, cursor_col = editor.cursor
    for n, (index, line) in enumerate(editor.visible_lines()):
        if n:
            text.append("\n")
        if not show_cursor or index != cursor_line:
            text.append(line)
            continue
        text.append(line[:cursor_col])
        text.append(line[cursor_col:cursor_col + 1] or " ", style=CURSOR_STYLE)
        text.append(line[cursor_col + 1:])
    return text


def editor_pane(editor: TextEditor, show_cursor: bool, widget_id: str = "editor") -> Static:
    return Static(editor_text(editor, show_cursor), id=widget_id)
