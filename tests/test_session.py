"""Tests for the typing session state machine."""

import pytest

from conftest import type_text
from typr.engine.session import (
    BACKSPACE,
    CANCEL,
    LOOKAHEAD_CHARS,
    KeyEvent,
    SessionState,
    TestMode as Mode,
    words_per_minute,
)


class TestModes:
    def test_describe(self):
        assert Mode.words(25).describe() == "Words Mode: 25"
        assert Mode.time(60).describe() == "Time Mode: 60s"
        assert Mode.forever().describe() == "Forever Mode"

    def test_words_mode_text_has_limit_words(self, make_session):
        session = make_session(Mode.words(3))
        assert session.target == "the be to"

    def test_continuous_modes_start_with_fifty_words(self, make_session):
        session = make_session(Mode.forever())
        assert len(session.target.split()) == 50


class TestStartAndCancel:
    def test_starts_on_first_character(self, make_session, clock):
        session = make_session(Mode.words(3))
        assert session.state == SessionState.NOT_STARTED
        session.handle(KeyEvent.typed("t"))
        assert session.state == SessionState.RUNNING
        assert session.start_time == clock.now

    def test_start_time_is_fixed(self, make_session, clock):
        session = make_session(Mode.words(3))
        session.handle(KeyEvent.typed("t"))
        start = session.start_time
        clock.advance(2)
        session.handle(KeyEvent.typed("h"))
        assert session.start_time == start

    def test_backspace_does_not_start(self, make_session):
        session = make_session(Mode.words(3))
        session.handle(BACKSPACE)
        assert session.state == SessionState.NOT_STARTED
        assert session.buffer == ""

    def test_time_mode_waits_forever_without_keystrokes(self, make_session, clock):
        session = make_session(Mode.time(60))
        for _ in range(10):
            clock.advance(1000)
            session.tick()
        assert session.state == SessionState.NOT_STARTED
        assert session.elapsed() == 0.0
        session.handle(CANCEL)
        assert session.state == SessionState.CANCELLED
        assert session.result() is None

    def test_cancel_while_running_gives_no_result(self, make_session, clock):
        session = make_session(Mode.words(3))
        type_text(session, "the", clock, step=1.0)
        session.handle(CANCEL)
        assert session.state == SessionState.CANCELLED
        assert session.result() is None


class TestKeystrokes:
    def test_first_keystroke_latency_is_zero(self, make_session, user_data, clock):
        session = make_session(Mode.words(3))
        clock.advance(30)  # idle before starting
        session.handle(KeyEvent.typed("t"))
        assert user_data.letters["t"].time_total == 0.0

    def test_latency_measured_between_keystrokes(self, make_session, user_data, clock):
        session = make_session(Mode.words(3))
        session.handle(KeyEvent.typed("t"))
        clock.advance(0.25)
        session.handle(KeyEvent.typed("h"))
        assert user_data.letters["h"].time_total == pytest.approx(0.25)

    def test_mistake_is_kept_without_forgiveness(self, make_session, user_data, clock):
        session = make_session(Mode.words(3))
        type_text(session, "tx", clock)
        assert session.buffer == "tx"
        assert user_data.letters["h"].shown == 1
        assert user_data.letters["h"].correct == 0

    def test_forgiveness_rejects_mistake(self, make_session, settings, user_data, clock):
        settings.forgive_errors = True
        session = make_session(Mode.words(1), script=("cat",))
        type_text(session, "cxat", clock, step=0.1)
        assert session.buffer == "cat"
        assert user_data.letters["a"].shown == 2
        assert user_data.letters["a"].correct == 1
        assert session.state == SessionState.COMPLETED

    def test_backspace_removes_last_character(self, make_session, user_data, clock):
        session = make_session(Mode.words(3))
        type_text(session, "thx", clock)
        session.handle(BACKSPACE)
        assert session.buffer == "th"
        assert user_data.letters["e"].shown == 1

    def test_buffer_never_exceeds_target(self, make_session, settings, clock):
        session = make_session(Mode.words(1), script=("cat",))
        type_text(session, "cat", clock)
        assert session.state == SessionState.COMPLETED
        session.handle(KeyEvent.typed("s"))
        assert session.buffer == "cat"

    def test_events_after_completion_are_ignored(self, make_session, clock):
        session = make_session(Mode.words(1), script=("go",))
        type_text(session, "go", clock)
        session.handle(BACKSPACE)
        session.handle(CANCEL)
        assert session.buffer == "go"
        assert session.state == SessionState.COMPLETED


class TestWordCompletion:
    def test_completes_when_text_is_exhausted(self, make_session, clock):
        session = make_session(Mode.words(3))
        type_text(session, "the be t", clock)
        assert session.state == SessionState.RUNNING
        type_text(session, "o", clock)
        assert session.state == SessionState.COMPLETED

    def test_completes_on_separator_after_limit(self, make_session, clock):
        session = make_session(Mode.words(2))
        type_text(session, "the b", clock)
        assert session.state == SessionState.RUNNING
        type_text(session, " ", clock)  # mistyped 'e' as space
        assert session.buffer == "the b "
        assert session.state == SessionState.COMPLETED

    def test_separator_before_limit_does_not_complete(self, make_session, clock):
        session = make_session(Mode.words(3))
        type_text(session, "the be ", clock)
        assert session.state == SessionState.RUNNING


class TestTimeMode:
    def test_completes_when_limit_elapses(self, make_session, clock):
        session = make_session(Mode.time(60))
        type_text(session, "the", clock)
        clock.advance(59.5)
        session.tick()
        assert session.state == SessionState.RUNNING
        clock.advance(0.5)
        session.tick()
        assert session.state == SessionState.COMPLETED
        result = session.result()
        assert result.time_taken == pytest.approx(60.0)

    def test_time_left(self, make_session, clock):
        session = make_session(Mode.time(30))
        assert session.time_left() == 30
        type_text(session, "t", clock)
        clock.advance(12)
        assert session.time_left() == pytest.approx(18)


class TestContinuousText:
    @pytest.mark.parametrize("mode", [Mode.forever(), Mode.time(600)])
    def test_text_stays_ahead_of_cursor(self, make_session, clock, mode):
        session = make_session(mode)
        for _ in range(400):
            session.handle(KeyEvent.typed(session.target[len(session.buffer)]))
            clock.advance(0.1)
            session.tick()
            assert len(session.target) - len(session.buffer) >= LOOKAHEAD_CHARS
        assert session.state == SessionState.RUNNING

    def test_words_mode_never_grows(self, make_session, clock):
        session = make_session(Mode.words(3))
        type_text(session, "the be", clock)
        session.tick()
        assert session.target == "the be to"


class TestResultSynthesis:
    def test_perfect_run_in_nine_seconds(self, make_session, clock):
        session = make_session(Mode.words(3))
        type_text(session, "the be to", clock, step=9 / 8)
        result = session.result()
        assert result.text_length == 9
        assert result.words_typed == 3
        assert result.time_taken == pytest.approx(9.0)
        assert result.raw_wpm == pytest.approx(12.0)
        assert result.accuracy == pytest.approx(100.0)
        assert result.wpm == pytest.approx(12.0)

    def test_net_wpm_scales_with_accuracy(self, make_session, clock):
        session = make_session(Mode.words(1), script=("cat",))
        type_text(session, "cxt", clock, step=1.0)
        result = session.result()
        assert result.accuracy == pytest.approx(200 / 3)
        assert result.wpm == pytest.approx(result.raw_wpm * 2 / 3)

    def test_result_is_stable_after_completion(self, make_session, clock):
        session = make_session(Mode.words(1), script=("go",))
        type_text(session, "go", clock, step=1.0)
        first = session.result()
        clock.advance(100)
        assert session.result().time_taken == first.time_taken

    def test_instant_completion_has_zero_wpm(self, make_session, clock):
        session = make_session(Mode.words(1), script=("a",))
        type_text(session, "a", clock)
        result = session.result()
        assert result.raw_wpm == 0.0
        assert result.wpm == 0.0

    def test_live_wpm(self, make_session, clock):
        session = make_session(Mode.forever())
        assert session.live_wpm() == 0.0
        type_text(session, "the be", clock, step=1.0)
        # 6 chars over 6 seconds
        assert session.live_wpm() == pytest.approx(words_per_minute(6, 6.0))
        assert session.live_wpm() == pytest.approx(12.0)
