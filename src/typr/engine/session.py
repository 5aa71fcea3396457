"""Typing session state machine: not started → running → completed/cancelled."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from typr.config.settings import Settings
from typr.engine.selector import WordSelector
from typr.engine.stats import StatsTracker
from typr.state.userdata import TestResult

# Continuous modes keep at least this many untyped characters ahead of the cursor.
LOOKAHEAD_CHARS = 50
EXTEND_WORDS = 20
CONTINUOUS_INITIAL_WORDS = 50
CHARS_PER_WORD = 5.0


class ModeKind(str, Enum):
    WORDS = "words"
    TIME = "time"
    FOREVER = "forever"


@dataclass(frozen=True)
class TestMode:
    kind: ModeKind
    limit: int = 0

    @classmethod
    def words(cls, count: int) -> "TestMode":
        return cls(ModeKind.WORDS, count)

    @classmethod
    def time(cls, seconds: int) -> "TestMode":
        return cls(ModeKind.TIME, seconds)

    @classmethod
    def forever(cls) -> "TestMode":
        return cls(ModeKind.FOREVER)

    @property
    def is_continuous(self) -> bool:
        return self.kind in (ModeKind.TIME, ModeKind.FOREVER)

    def describe(self) -> str:
        if self.kind == ModeKind.TIME:
            return f"Time Mode: {self.limit}s"
        if self.kind == ModeKind.WORDS:
            return f"Words Mode: {self.limit}"
        return "Forever Mode"


class KeyKind(str, Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    CANCEL = "cancel"


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def typed(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char)


BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
CANCEL = KeyEvent(KeyKind.CANCEL)


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def words_per_minute(chars: int, seconds: float) -> float:
    if seconds <= 0:
        return 0.0
    return (chars / CHARS_PER_WORD) / (seconds / 60.0)


class TypingSession:
    """Owns one test attempt.

    The front end calls ``tick()`` once per frame and ``handle()`` for every
    key event; both are cheap and never block. ``scroll_offset`` is written
    only by the render projector.
    """

    def __init__(
        self,
        mode: TestMode,
        selector: WordSelector,
        tracker: StatsTracker,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.mode = mode
        self.selector = selector
        self.tracker = tracker
        self.settings = settings
        self.clock = clock

        initial = mode.limit if mode.kind == ModeKind.WORDS else CONTINUOUS_INITIAL_WORDS
        self.target = selector.select_text(initial)
        self.buffer = ""
        self.state = SessionState.NOT_STARTED
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.last_keystroke = clock()
        self.scroll_offset = 0

    # --- State queries ---

    @property
    def started(self) -> bool:
        return self.start_time is not None

    @property
    def is_finished(self) -> bool:
        return self.state in (SessionState.COMPLETED, SessionState.CANCELLED)

    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else self.clock()
        return end - self.start_time

    def live_wpm(self) -> float:
        return words_per_minute(len(self.buffer), self.elapsed())

    def time_left(self) -> Optional[float]:
        if self.mode.kind != ModeKind.TIME:
            return None
        return max(self.mode.limit - self.elapsed(), 0.0)

    # --- Transitions ---

    def tick(self) -> None:
        """Per-frame housekeeping: grow the text, then check the time limit."""
        if self.is_finished:
            return
        self._extend_text()
        if (
            self.mode.kind == ModeKind.TIME
            and self.started
            and self.elapsed() >= self.mode.limit
        ):
            self._complete()

    def handle(self, event: KeyEvent) -> None:
        if self.is_finished:
            return
        if event.kind == KeyKind.CANCEL:
            self.state = SessionState.CANCELLED
        elif event.kind == KeyKind.BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif event.kind == KeyKind.CHAR and event.char:
            self._type(event.char)

    def _type(self, ch: str) -> None:
        if not self.started:
            now = self.clock()
            self.start_time = now
            self.last_keystroke = now
            self.state = SessionState.RUNNING

        if len(self.buffer) < len(self.target):
            now = self.clock()
            delta = now - self.last_keystroke
            self.last_keystroke = now

            expected = self.target[len(self.buffer)]
            is_correct = ch == expected
            self.tracker.record(expected, is_correct, delta)

            if is_correct or not self.settings.forgive_errors:
                self.buffer += ch

        self._extend_text()
        if self.mode.kind == ModeKind.WORDS and self._word_limit_reached():
            self._complete()

    def _word_limit_reached(self) -> bool:
        typed = len(self.buffer.split())
        if typed >= self.mode.limit and self.buffer.endswith(" "):
            return True
        return len(self.buffer) == len(self.target)

    def _extend_text(self) -> None:
        if not self.mode.is_continuous:
            return
        if len(self.buffer) + LOOKAHEAD_CHARS > len(self.target):
            self.target += " " + self.selector.select_text(EXTEND_WORDS)

    def _complete(self) -> None:
        self.end_time = self.clock()
        self.state = SessionState.COMPLETED

    # --- Results ---

    def correct_chars(self) -> int:
        return sum(1 for typed, want in zip(self.buffer, self.target) if typed == want)

    def result(self) -> Optional[TestResult]:
        """Synthesize the final result; ``None`` unless the session completed."""
        if self.state != SessionState.COMPLETED:
            return None
        elapsed = self.elapsed()
        chars = len(self.buffer)
        raw_wpm = words_per_minute(chars, elapsed)
        accuracy = self.correct_chars() / chars if chars else 0.0
        return TestResult(
            raw_wpm=raw_wpm,
            wpm=raw_wpm * accuracy,
            accuracy=accuracy * 100.0,
            time_taken=elapsed,
            text_length=chars,
            words_typed=len(self.buffer.split()),
        )
