"""Derive a drawable layout from a typing session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from typr.engine.session import ModeKind, TypingSession

FOOTER = "ESC: Quit"


class CharClass(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURSOR = "cursor"
    PENDING = "pending"


@dataclass(frozen=True)
class Cell:
    char: str
    cls: CharClass


@dataclass(frozen=True)
class Layout:
    status: str
    rows: tuple[tuple[Cell, ...], ...]
    cursor: Optional[tuple[int, int]]  # (row, col) inside the visible window
    scroll_offset: int
    footer: str = FOOTER

    def row_text(self, index: int) -> str:
        return "".join(cell.char for cell in self.rows[index])


def status_line(session: TypingSession) -> str:
    mode_str = session.mode.describe()
    if not session.started:
        return f"{mode_str} | Press any key to start typing..."

    if session.mode.kind == ModeKind.TIME:
        status = f"{mode_str} | Time Left: {session.time_left():.0f}s"
    else:
        status = f"{mode_str} | Time: {session.elapsed():.0f}s"
    if session.settings.show_wpm_live:
        status += f" | WPM: {session.live_wpm():.0f}"
    return status


def classify(session: TypingSession, index: int) -> CharClass:
    typed = len(session.buffer)
    if index < typed:
        if session.buffer[index] == session.target[index]:
            return CharClass.CORRECT
        return CharClass.INCORRECT
    if index == typed:
        return CharClass.CURSOR
    return CharClass.PENDING


def project(session: TypingSession, width: int, height: int) -> Layout:
    """Build the layout for a ``width`` x ``height`` text window.

    Scrolls so the cursor row never sits below the middle of the window
    and never above its top. This is the only place
    ``session.scroll_offset`` is written.
    """
    width = max(width, 1)
    height = max(height, 1)

    cursor_row = len(session.buffer) // width
    if cursor_row > session.scroll_offset + height // 2:
        session.scroll_offset = cursor_row - height // 2
    elif cursor_row < session.scroll_offset:
        session.scroll_offset = cursor_row

    start = session.scroll_offset * width
    end = min(start + height * width, len(session.target))

    rows: list[tuple[Cell, ...]] = []
    current: list[Cell] = []
    cursor = None
    for index in range(start, end):
        cls = classify(session, index)
        if cls == CharClass.CURSOR:
            cursor = (len(rows), len(current))
        current.append(Cell(session.target[index], cls))
        if len(current) >= width:
            rows.append(tuple(current))
            current = []
    if current:
        rows.append(tuple(current))

    return Layout(
        status=status_line(session),
        rows=tuple(rows),
        cursor=cursor,
        scroll_offset=session.scroll_offset,
    )
