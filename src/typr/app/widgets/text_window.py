"""Text window showing the target text coloured by typing progress."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from typr.engine.projector import CharClass, Layout

CHAR_STYLES = {
    CharClass.CORRECT: "green",
    CharClass.INCORRECT: "red underline",
    CharClass.CURSOR: "bold underline dodger_blue1",
    CharClass.PENDING: "grey62",
}


def render_rows(layout: Layout) -> Text:
    text = Text()
    for i, row in enumerate(layout.rows):
        if i:
            text.append("\n")
        for cell in row:
            text.append(cell.char, style=CHAR_STYLES[cell.cls])
    return text


class TextWindow(Static):
    def __init__(self, **kwargs) -> None:
        super().__init__("", id="text-window", **kwargs)

    def show_layout(self, layout: Layout) -> None:
        self.update(render_rows(layout))
