"""One-line header with mode, timer and live WPM."""

from __future__ import annotations

from textual.widgets import Static


class StatusLine(Static):
    def __init__(self, **kwargs) -> None:
        super().__init__("", id="status-line", **kwargs)

    def set_status(self, status: str) -> None:
        self.update(status)
