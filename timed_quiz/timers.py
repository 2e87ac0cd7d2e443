"""Per-question and overall countdowns for a quiz attempt.

The coordinator registers itself with a ticker and turns each tick into at
most one expiry event. When both countdowns run out on the same tick the
overall expiry wins and the per-question expiry is dropped, so no automatic
advance can follow the end of the attempt.
"""

import logging
from typing import Callable, Optional

from .clock import Clock, Ticker

logger = logging.getLogger(__name__)

ExpiryListener = Callable[[], None]


class TimerCoordinator:
    def __init__(self, per_question_seconds: int, overall_seconds: int, ticker: Ticker,
                 on_question_expired: Optional[ExpiryListener] = None,
                 on_overall_expired: Optional[ExpiryListener] = None):
        self.question_clock = Clock(per_question_seconds)
        self.overall_clock = Clock(overall_seconds)
        self.ticker = ticker
        self.on_question_expired = on_question_expired
        self.on_overall_expired = on_overall_expired
        self.armed = False
        ticker.on_tick(self.tick)

    @property
    def question_time_remaining(self) -> int:
        return self.question_clock.remaining

    @property
    def overall_time_remaining(self) -> int:
        return self.overall_clock.remaining

    def start(self) -> None:
        """Arm both clocks from their starting values and start ticking."""
        self.question_clock.start()
        self.overall_clock.start()
        self.armed = True
        self.ticker.start()
        logger.debug(
            "⏱️ Timers armed: question=%ss overall=%ss",
            self.question_clock.seconds, self.overall_clock.seconds,
        )

    def stop_all(self) -> None:
        if not self.armed:
            return
        self.armed = False
        self.question_clock.stop()
        self.overall_clock.stop()
        self.ticker.stop()
        logger.debug(
            "⏱️ Timers stopped: question=%ss overall=%ss",
            self.question_clock.remaining, self.overall_clock.remaining,
        )

    def reset_question_clock(self) -> None:
        if not self.armed:
            return
        self.question_clock.reset()

    def tick(self) -> None:
        if not self.armed:
            # A tick scheduled before stop_all() that arrives afterwards.
            return

        question_done = self.question_clock.tick()
        overall_done = self.overall_clock.tick()

        if overall_done:
            self.stop_all()
            if self.on_overall_expired:
                self.on_overall_expired()
        elif question_done:
            if self.on_question_expired:
                self.on_question_expired()
