"""Shared fixtures for Typr tests."""

from __future__ import annotations

import random
from typing import Sequence

import pytest

from typr.config.settings import Settings
from typr.engine.lexicon import Lexicon
from typr.engine.selector import WordSelector
from typr.engine.session import KeyEvent, TestMode, TypingSession
from typr.engine.stats import StatsTracker
from typr.menu.base import Menu
from typr.state.userdata import UserData


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedSelector(WordSelector):
    """Selector that deals words from a fixed script, cycling when exhausted."""

    def __init__(self, lexicon: Lexicon, script: Sequence[str]):
        super().__init__(lexicon, rng=random.Random(0))
        self.script = list(script)
        self._pos = 0

    def select(self, count: int) -> list[str]:
        out = []
        for _ in range(max(count, 0)):
            out.append(self.script[self._pos % len(self.script)])
            self._pos += 1
        return out


class FakeMenu(Menu):
    """Scripted menu: answers come from queues, everything shown is recorded."""

    def __init__(self, choices=(), inputs=(), confirms=()):
        self.choices = list(choices)
        self.inputs = list(inputs)
        self.confirms = list(confirms)
        self.headers: list[str] = []
        self.options: list[list[str]] = []
        self.styled: list[str] = []
        self.pauses = 0

    def choose(self, header, options):
        self.headers.append(header)
        self.options.append(list(options))
        return self.choices.pop(0) if self.choices else ""

    def input(self, header, placeholder, value):
        return self.inputs.pop(0) if self.inputs else value

    def confirm(self, prompt):
        return self.confirms.pop(0) if self.confirms else False

    def style(self, text):
        self.styled.append(text)

    def pause(self):
        self.pauses += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def user_data():
    return UserData()


@pytest.fixture
def lexicon(user_data):
    return Lexicon(words=["the", "be", "to", "of", "and"], user_data=user_data)


@pytest.fixture
def tracker(user_data):
    return StatsTracker(user_data)


@pytest.fixture
def make_session(lexicon, tracker, settings, clock):
    """Build a session whose text is dealt from ``script``."""

    def _make(mode: TestMode, script: Sequence[str] = ("the", "be", "to")) -> TypingSession:
        return TypingSession(
            mode=mode,
            selector=FixedSelector(lexicon, script),
            tracker=tracker,
            settings=settings,
            clock=clock,
        )

    return _make


def type_text(session: TypingSession, text: str, clock: FakeClock, step: float = 0.0) -> None:
    for ch in text:
        session.handle(KeyEvent.typed(ch))
        clock.advance(step)
