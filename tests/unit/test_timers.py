"""Unit tests for the timer coordinator."""

import pytest
from unittest.mock import MagicMock
from timed_quiz.clock import ManualTicker
from timed_quiz.timers import TimerCoordinator

class TestTimerCoordinator:
    """Test suite for TimerCoordinator class."""

    @pytest.fixture
    def listeners(self):
        return MagicMock(), MagicMock()

    def make(self, listeners, per_question=3, overall=10):
        question_expired, overall_expired = listeners
        ticker = ManualTicker()
        timers = TimerCoordinator(per_question, overall, ticker,
                                  on_question_expired=question_expired,
                                  on_overall_expired=overall_expired)
        return timers, ticker

    def test_start_arms_both_clocks(self, listeners):
        timers, ticker = self.make(listeners)
        timers.start()
        assert timers.armed is True
        assert ticker.running is True
        assert timers.question_time_remaining == 3
        assert timers.overall_time_remaining == 10

    def test_tick_decrements_both(self, listeners):
        timers, ticker = self.make(listeners)
        timers.start()
        ticker.advance(2)
        assert timers.question_time_remaining == 1
        assert timers.overall_time_remaining == 8

    def test_question_expiry(self, listeners):
        question_expired, overall_expired = listeners
        timers, ticker = self.make(listeners)
        timers.start()
        ticker.advance(3)
        question_expired.assert_called_once()
        overall_expired.assert_not_called()
        assert timers.armed is True

    def test_reset_question_clock_leaves_overall_alone(self, listeners):
        timers, ticker = self.make(listeners)
        timers.start()
        ticker.advance(2)
        timers.reset_question_clock()
        assert timers.question_time_remaining == 3
        assert timers.overall_time_remaining == 8

    def test_overall_expiry_stops_everything(self, listeners):
        question_expired, overall_expired = listeners
        timers, ticker = self.make(listeners, per_question=100, overall=4)
        timers.start()
        ticker.advance(4)
        overall_expired.assert_called_once()
        assert timers.armed is False
        assert ticker.running is False

    def test_overall_wins_when_both_expire_on_same_tick(self, listeners):
        question_expired, overall_expired = listeners
        timers, ticker = self.make(listeners, per_question=5, overall=5)
        timers.start()
        ticker.advance(5)
        overall_expired.assert_called_once()
        question_expired.assert_not_called()

    def test_stale_tick_after_stop_is_ignored(self, listeners):
        question_expired, overall_expired = listeners
        timers, ticker = self.make(listeners, per_question=1, overall=1)
        timers.start()
        timers.stop_all()
        # A tick that was already scheduled arrives late
        timers.tick()
        question_expired.assert_not_called()
        overall_expired.assert_not_called()
        assert timers.overall_time_remaining == 1

    def test_calls_while_stopped_are_noops(self, listeners):
        timers, ticker = self.make(listeners)
        timers.start()
        ticker.advance(1)
        timers.stop_all()
        timers.reset_question_clock()
        timers.stop_all()
        assert timers.question_time_remaining == 2
        assert timers.overall_time_remaining == 9

    def test_restart_rearms_from_configured_values(self, listeners):
        timers, ticker = self.make(listeners)
        timers.start()
        ticker.advance(2)
        timers.stop_all()
        timers.start()
        assert timers.question_time_remaining == 3
        assert timers.overall_time_remaining == 10
