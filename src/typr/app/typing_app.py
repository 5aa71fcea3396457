"""Textual application running a single typing test."""

from __future__ import annotations

from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from typr.app.widgets.status_line import StatusLine
from typr.app.widgets.text_window import TextWindow
from typr.engine.projector import FOOTER, project
from typr.engine.session import BACKSPACE, CANCEL, KeyEvent, TypingSession
from typr.state.userdata import TestResult

# ~60 frames per second; the only point where the loop waits.
FRAME_INTERVAL = 0.016


def to_key_event(event: events.Key) -> Optional[KeyEvent]:
    if event.key == "escape":
        return CANCEL
    if event.key == "backspace":
        return BACKSPACE
    if event.is_printable and event.character:
        return KeyEvent.typed(event.character)
    return None


class TypingTestApp(App):
    """Renders a TypingSession every frame and feeds it key presses.

    Exits with the session's TestResult, or ``None`` when cancelled.
    """

    TITLE = "Typr"

    CSS = """
    Screen {
        align: center middle;
    }
    #status-line {
        height: 1;
        width: 100%;
        text-align: center;
        text-style: bold;
        background: rgb(58, 7, 20);
    }
    #text-window {
        height: 12;
        width: 100%;
        padding: 1 2;
        background: rgb(20, 20, 20);
    }
    #footer-line {
        height: 1;
        width: 100%;
        text-align: center;
        color: gray;
    }
    """

    def __init__(
        self,
        session: TypingSession,
        frame_interval: float = FRAME_INTERVAL,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.frame_interval = frame_interval
        self._result_sent = False

    def compose(self) -> ComposeResult:
        yield StatusLine()
        yield TextWindow()
        yield Static(FOOTER, id="footer-line")

    def on_mount(self) -> None:
        self.set_interval(self.frame_interval, self._on_frame)

    def _on_frame(self) -> None:
        self.session.tick()
        self._sync()

    def on_key(self, event: events.Key) -> None:
        key_event = to_key_event(event)
        if key_event is None:
            return
        event.stop()
        event.prevent_default()
        self.session.handle(key_event)
        self._sync()

    def _sync(self) -> None:
        if self._result_sent:
            return
        if self.session.is_finished:
            self._result_sent = True
            self.exit(self.session.result())
            return
        self._render_session()

    def _render_session(self) -> None:
        window = self.query_one(TextWindow)
        size = window.content_size
        if size.width <= 0 or size.height <= 0:
            return
        layout = project(self.session, size.width, size.height)
        self.query_one(StatusLine).set_status(layout.status)
        window.show_layout(layout)


def run_test(session: TypingSession) -> Optional[TestResult]:
    return TypingTestApp(session).run()
