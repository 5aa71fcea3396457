"""Per-letter aggregates and result history, persisted as JSON."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class LetterStats(BaseModel):
    shown: int = 0
    correct: int = 0
    accuracy: Optional[float] = None
    time_total: float = 0.0
    time_count: int = 0
    wpm: Optional[float] = None


class TestResult(BaseModel):
    """Snapshot of one completed typing test."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=datetime.now)
    raw_wpm: float
    wpm: float
    accuracy: float  # percentage, 0-100
    time_taken: float
    text_length: int
    words_typed: int

    def summary(self) -> str:
        return (
            f"WPM: {self.wpm:.2f}\n"
            f"Raw WPM: {self.raw_wpm:.2f}\n"
            f"Accuracy: {self.accuracy:.2f}%\n"
            f"Time: {self.time_taken:.2f}s\n"
            f"Words: {self.words_typed}"
        )


class UserData(BaseModel):
    letters: dict[str, LetterStats] = Field(default_factory=dict)
    history: list[TestResult] = Field(default_factory=list)

    def reset(self) -> None:
        self.letters.clear()
        self.history.clear()

    def weakest_letters(self, n: int = 5) -> list[tuple[str, LetterStats]]:
        """Return the ``n`` seen letters with the lowest accuracy, slowest first on ties."""
        seen = [(ch, s) for ch, s in self.letters.items() if s.accuracy is not None]
        seen.sort(key=lambda item: (item[1].accuracy, item[1].wpm or 0.0, item[0]))
        return seen[:n]


class UserDataStore:
    def __init__(self, data_dir: Path):
        self.path = data_dir / "userdata.json"

    def load(self) -> UserData:
        if not self.path.exists():
            return UserData()
        try:
            return UserData.model_validate_json(self.path.read_text())
        except (OSError, ValueError, ValidationError) as e:
            logger.debug("ignoring unreadable user data at %s: %s", self.path, e)
            return UserData()

    def save(self, data: UserData) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(data.model_dump_json(indent=2))
        except OSError as e:
            logger.debug("could not write user data to %s: %s", self.path, e)
