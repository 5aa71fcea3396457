"""Adaptive word selection.

Words are drawn with probability proportional to the average weight of
their letters. A letter weighs more when it is typed inaccurately or
slowly, scaled by how common it is in English, so practice text drifts
toward the letters that need work.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from typr.engine.lexicon import Lexicon

# Standard English letter frequency, percent.
LETTER_FREQUENCY = {
    "e": 12.02, "t": 9.10, "a": 8.12, "o": 7.68, "i": 7.31, "n": 6.95,
    "s": 6.28, "r": 6.02, "h": 5.92, "d": 4.32, "l": 3.98, "u": 2.88,
    "c": 2.71, "m": 2.61, "f": 2.30, "y": 2.11, "w": 2.09, "g": 2.03,
    "p": 1.82, "b": 1.49, "v": 1.11, "k": 0.69, "x": 0.17, "q": 0.11,
    "j": 0.10, "z": 0.07,
}

PRINTABLE = [chr(c) for c in range(ord(" "), ord("~") + 1)]

UNKNOWN_ACCURACY_WEIGHT = 20.0
MIN_ACCURACY = 0.01
SPEED_OFFSET = 0.1


class WordSelector:
    def __init__(self, lexicon: Lexicon, rng: Optional[random.Random] = None):
        self.lexicon = lexicon
        self.rng = rng or random.Random()

    def letter_weights(self) -> dict[str, float]:
        weights = {}
        for ch in PRINTABLE:
            acc = self.lexicon.accuracy(ch)
            inv_acc = 1.0 / acc if acc > MIN_ACCURACY else UNKNOWN_ACCURACY_WEIGHT
            speed_weight = 1.0 / (self.lexicon.speed(ch) + SPEED_OFFSET)
            weights[ch] = inv_acc * LETTER_FREQUENCY.get(ch, 0.0) * speed_weight
        return weights

    @staticmethod
    def word_weight(word: str, weights: dict[str, float]) -> float:
        if not word:
            return 0.0
        return sum(weights.get(ch, 0.0) for ch in word) / len(word)

    def word_weights(self) -> list[float]:
        weights = self.letter_weights()
        return [self.word_weight(w, weights) for w in self.lexicon.words]

    def select(self, count: int) -> list[str]:
        """Draw ``count`` words with replacement, biased toward weak letters."""
        if count <= 0:
            return []
        words = self.lexicon.words
        weights = self.word_weights()
        total = sum(weights)
        if total <= 0 or not math.isfinite(total):
            return self.rng.choices(words, k=count)
        return self.rng.choices(words, weights=weights, k=count)

    def select_text(self, count: int) -> str:
        return " ".join(self.select(count))
