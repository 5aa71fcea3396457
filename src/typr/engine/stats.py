"""Per-letter keystroke statistics."""

from __future__ import annotations

from typr.state.userdata import LetterStats, UserData

# 5 characters per word, 60 seconds per minute.
WPM_SCALE = 12.0


class StatsTracker:
    """Folds keystroke events into the per-letter aggregates of a UserData."""

    def __init__(self, user_data: UserData):
        self.user_data = user_data

    def record(self, ch: str, is_correct: bool, elapsed: float) -> None:
        stats = self.user_data.letters.setdefault(ch, LetterStats())
        stats.shown += 1
        if is_correct:
            stats.correct += 1
            stats.time_total += elapsed
            stats.time_count += 1

        stats.accuracy = stats.correct / stats.shown

        if stats.time_count > 0 and stats.time_total > 0:
            avg = stats.time_total / stats.time_count
            stats.wpm = WPM_SCALE / avg
