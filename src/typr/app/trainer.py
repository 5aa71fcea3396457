"""Top-level menu loop: pick a test, run it, keep the results."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

import click

from typr.config.settings import Settings
from typr.engine.lexicon import Lexicon
from typr.engine.selector import WordSelector
from typr.engine.session import TestMode, TypingSession
from typr.engine.stats import StatsTracker
from typr.menu.base import MainAction, Menu, SettingsAction
from typr.state.userdata import TestResult, UserDataStore

logger = logging.getLogger(__name__)

TITLE = "TYPR"

MAIN_CHOICES = [
    ("Start Words Test", MainAction.WORDS_TEST),
    ("Start Time Test", MainAction.TIME_TEST),
    ("Forever Mode", MainAction.FOREVER),
    ("Settings", MainAction.SETTINGS),
    ("Exit", MainAction.EXIT),
]


def _on_off(flag: bool) -> str:
    return "On" if flag else "Off"


class Trainer:
    """Drives the menus and owns the loaded settings and user data."""

    def __init__(
        self,
        menu: Menu,
        settings: Settings,
        store: UserDataStore,
        lexicon: Lexicon,
        runner: Optional[Callable[[TypingSession], Optional[TestResult]]] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if runner is None:
            from typr.app.typing_app import run_test

            runner = run_test
        self.menu = menu
        self.settings = settings
        self.store = store
        self.lexicon = lexicon
        self.user_data = lexicon.user_data
        self.runner = runner
        self.selector = WordSelector(lexicon, rng=rng)
        self.tracker = StatsTracker(self.user_data)
        self.clock = clock

    # --- Main menu ---

    def run(self) -> None:
        while True:
            click.clear()
            action = self.menu.select(TITLE, MAIN_CHOICES, back=MainAction.EXIT)
            if action == MainAction.EXIT:
                break
            if action == MainAction.SETTINGS:
                self.settings_menu()
                continue
            self.play(self.mode_for(action))

    def mode_for(self, action: MainAction) -> TestMode:
        if action == MainAction.WORDS_TEST:
            return TestMode.words(self.settings.default_words_limit)
        if action == MainAction.TIME_TEST:
            return TestMode.time(self.settings.default_time_limit)
        if action == MainAction.FOREVER:
            return TestMode.forever()
        raise ValueError(f"No test mode for action: {action}")

    def new_session(self, mode: TestMode) -> TypingSession:
        return TypingSession(
            mode=mode,
            selector=self.selector,
            tracker=self.tracker,
            settings=self.settings,
            clock=self.clock,
        )

    def play(self, mode: TestMode) -> Optional[TestResult]:
        """Run one test and handle its result. Returns ``None`` when cancelled."""
        result = self.runner(self.new_session(mode))
        if result is None:
            self.store.save(self.user_data)
            return None
        self.record_result(result)
        self.store.save(self.user_data)
        self.show_result(result)
        return result

    def record_result(self, result: TestResult) -> bool:
        """Append to history when auto-save is on and accuracy clears the threshold."""
        if not self.settings.auto_save_results:
            return False
        if result.accuracy < self.settings.min_accuracy_to_save * 100.0:
            logger.debug("result below accuracy threshold: %.2f%%", result.accuracy)
            return False
        self.user_data.history.append(result)
        return True

    def show_result(self, result: TestResult) -> None:
        self.menu.style(result.summary())
        self.menu.pause()

    # --- Settings ---

    def settings_choices(self) -> list[tuple[str, SettingsAction]]:
        s = self.settings
        return [
            (f"Forgive Errors: {_on_off(s.forgive_errors)}", SettingsAction.TOGGLE_FORGIVE),
            (f"Default Time: {s.default_time_limit}s", SettingsAction.SET_TIME_LIMIT),
            (f"Default Words: {s.default_words_limit}", SettingsAction.SET_WORDS_LIMIT),
            (f"Live WPM: {_on_off(s.show_wpm_live)}", SettingsAction.TOGGLE_LIVE_WPM),
            (f"Auto Save: {_on_off(s.auto_save_results)}", SettingsAction.TOGGLE_AUTO_SAVE),
            (f"Min Accuracy: {s.min_accuracy_to_save * 100:.0f}%", SettingsAction.SET_MIN_ACCURACY),
            ("Reset History", SettingsAction.RESET_HISTORY),
            ("Back", SettingsAction.BACK),
        ]

    def settings_menu(self) -> None:
        while True:
            action = self.menu.select(
                "Settings", self.settings_choices(), back=SettingsAction.BACK,
            )
            if action == SettingsAction.BACK:
                break
            self.apply_setting(action)
        self.settings.save()
        self.store.save(self.user_data)

    def apply_setting(self, action: SettingsAction) -> None:
        s = self.settings
        if action == SettingsAction.TOGGLE_FORGIVE:
            s.forgive_errors = not s.forgive_errors
        elif action == SettingsAction.TOGGLE_LIVE_WPM:
            s.show_wpm_live = not s.show_wpm_live
        elif action == SettingsAction.TOGGLE_AUTO_SAVE:
            s.auto_save_results = not s.auto_save_results
        elif action == SettingsAction.SET_TIME_LIMIT:
            value = self.menu.input(
                "Set Time Limit (seconds)", "60", str(s.default_time_limit),
            )
            self._assign(s, "default_time_limit", value, int)
        elif action == SettingsAction.SET_WORDS_LIMIT:
            value = self.menu.input("Set Word Limit", "25", str(s.default_words_limit))
            self._assign(s, "default_words_limit", value, int)
        elif action == SettingsAction.SET_MIN_ACCURACY:
            value = self.menu.input(
                "Minimum accuracy to save (%)", "50",
                f"{s.min_accuracy_to_save * 100:.0f}",
            )
            self._assign(s, "min_accuracy_to_save", value, lambda v: float(v) / 100.0)
        elif action == SettingsAction.RESET_HISTORY:
            if self.menu.confirm("Are you sure?"):
                self.user_data.reset()

    @staticmethod
    def _assign(settings: Settings, name: str, raw: str, parse: Callable[[str], object]) -> None:
        """Parse and assign; bad input leaves the old value in place."""
        try:
            setattr(settings, name, parse(raw.strip()))
        except ValueError:
            logger.debug("ignoring invalid value for %s: %r", name, raw)
