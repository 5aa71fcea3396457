"""Word list loading and the per-letter performance it is weighted by."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from typr.state.userdata import LetterStats, UserData

logger = logging.getLogger(__name__)

DEFAULT_WORDS = (
    "the be to of and a in that have I it for not on with he as you do at "
    "this but his by from they we say her she or an will my one all would "
    "there their what so up out if about who get which go me when make can "
    "like time no just him know take people into year your good some could "
    "them see other than then now look only come its over think also back "
    "after use two how our work first well way even new want because any "
    "these give day most us"
).split()


def load_words(path: Optional[Path] = None) -> list[str]:
    """Read one word per line, falling back to the built-in list."""
    if path is None or not path.exists():
        return list(DEFAULT_WORDS)
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("could not read word list %s: %s", path, e)
        return list(DEFAULT_WORDS)
    words = [line.strip() for line in text.splitlines() if line.strip()]
    return words or list(DEFAULT_WORDS)


@dataclass
class Lexicon:
    words: list[str]
    user_data: UserData = field(default_factory=UserData)

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError("Lexicon needs at least one word")

    @classmethod
    def load(cls, path: Optional[Path], user_data: UserData) -> "Lexicon":
        return cls(words=load_words(path), user_data=user_data)

    def stats_for(self, ch: str) -> Optional[LetterStats]:
        return self.user_data.letters.get(ch)

    def accuracy(self, ch: str) -> float:
        stats = self.stats_for(ch)
        if stats is None or stats.accuracy is None:
            return 0.0
        return stats.accuracy

    def speed(self, ch: str) -> float:
        stats = self.stats_for(ch)
        if stats is None or stats.wpm is None:
            return 0.0
        return stats.wpm
