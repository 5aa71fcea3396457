"""Menu collaborator contract and the closed set of menu actions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence, TypeVar

A = TypeVar("A", bound=Enum)

BACK_LABEL = "Back"


class MenuUnavailableError(RuntimeError):
    """The external menu tool is missing or could not be started."""


class MainAction(str, Enum):
    WORDS_TEST = "words_test"
    TIME_TEST = "time_test"
    FOREVER = "forever"
    SETTINGS = "settings"
    EXIT = "exit"


class SettingsAction(str, Enum):
    TOGGLE_FORGIVE = "toggle_forgive"
    SET_TIME_LIMIT = "set_time_limit"
    SET_WORDS_LIMIT = "set_words_limit"
    TOGGLE_LIVE_WPM = "toggle_live_wpm"
    TOGGLE_AUTO_SAVE = "toggle_auto_save"
    SET_MIN_ACCURACY = "set_min_accuracy"
    RESET_HISTORY = "reset_history"
    BACK = "back"


class Menu(ABC):
    """choose / input / confirm / style provider used by the trainer."""

    @abstractmethod
    def choose(self, header: str, options: Sequence[str]) -> str:
        ...

    @abstractmethod
    def input(self, header: str, placeholder: str, value: str) -> str:
        ...

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        ...

    @abstractmethod
    def style(self, text: str) -> None:
        ...

    def pause(self) -> None:
        """Block until the user acknowledges the last message."""
        input("Press Enter...")

    def select(self, header: str, choices: Sequence[tuple[str, A]], back: A) -> A:
        """Show labelled choices and return the matching action.

        An empty selection, a "Back" label, or anything unrecognised maps
        to ``back``.
        """
        labels = [label for label, _ in choices]
        picked = self.choose(header, labels)
        if not picked or picked == BACK_LABEL:
            return back
        for label, action in choices:
            if label == picked:
                return action
        return back
