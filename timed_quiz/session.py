"""State machine for one learner working through a timed quiz.

A session moves NOT_STARTED -> IN_PROGRESS -> COMPLETE. Learner actions and
timer expiries are the only inputs; both are expected on the same thread (the
event loop that drives the ticker), so no locking is done here.

Actions that arrive in a phase that does not accept them are dropped and
recorded in ``ignored_events``. This is what makes a double submit, or a tick
that was already scheduled when the attempt ended, harmless.
"""

import logging
import uuid
from enum import Enum
from typing import Callable, Dict, List, Optional

from .clock import ManualTicker, Ticker
from .exceptions import InvalidAnswer
from .models import (UNANSWERED, Question, QuizConfig, Result, SessionPhase,
                     SessionState, StaleEventIgnored)
from .notifier import NotificationKind, Notifier, NullNotifier
from .scoring import score
from .timers import TimerCoordinator

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Result], None]
ExitCallback = Callable[[], None]


class ExitTarget(Enum):
    TOPIC = "topic"
    SUBJECT = "subject"
    DASHBOARD = "dashboard"


class QuizSession:
    def __init__(self, config: QuizConfig, ticker: Optional[Ticker] = None,
                 notifier: Optional[Notifier] = None,
                 on_complete: Optional[CompletionCallback] = None,
                 on_exit_to_topic: Optional[ExitCallback] = None,
                 on_exit_to_subject: Optional[ExitCallback] = None,
                 on_exit_to_dashboard: Optional[ExitCallback] = None,
                 session_id: Optional[str] = None):
        self.config = config
        self.session_id = session_id or str(uuid.uuid4())
        self.notifier = notifier or NullNotifier()
        self.on_complete = on_complete
        self.exits: Dict[ExitTarget, ExitCallback] = {
            target: callback for target, callback in (
                (ExitTarget.TOPIC, on_exit_to_topic),
                (ExitTarget.SUBJECT, on_exit_to_subject),
                (ExitTarget.DASHBOARD, on_exit_to_dashboard),
            ) if callback is not None
        }
        self.timers = TimerCoordinator(
            config.per_question_seconds,
            config.overall_seconds,
            ticker or ManualTicker(),
            on_question_expired=self._on_question_expired,
            on_overall_expired=self._on_overall_expired,
        )

        self.phase = SessionPhase.NOT_STARTED
        self.current_index = 0
        self.answers: List[Optional[str]] = [UNANSWERED] * config.total
        self.selected: Optional[str] = UNANSWERED
        self.result: Optional[Result] = None
        self.attempt = 0
        self.ignored_events: List[StaleEventIgnored] = []

    # --- Read side ---

    @property
    def questions(self):
        return self.config.questions

    @property
    def total(self) -> int:
        return self.config.total

    @property
    def current_question(self) -> Question:
        return self.config.questions[self.current_index]

    @property
    def state(self) -> SessionState:
        return SessionState(
            phase=self.phase,
            current_index=self.current_index,
            answers=tuple(self.answers),
            selected=self.selected,
            question_time_remaining=self.timers.question_time_remaining,
            overall_time_remaining=self.timers.overall_time_remaining,
            attempt=self.attempt,
        )

    def is_last_question(self) -> bool:
        return self.current_index == self.total - 1

    def can_retry(self) -> bool:
        return self.phase is SessionPhase.COMPLETE and not self.result.passed

    def available_exits(self) -> List[ExitTarget]:
        """Exits the results screen should offer.

        A failed attempt offers every registered exit; a passed attempt only
        leads back to the dashboard.
        """
        if self.phase is not SessionPhase.COMPLETE:
            return []
        if self.result.passed:
            return [t for t in self.exits if t is ExitTarget.DASHBOARD]
        return list(self.exits)

    # --- Learner actions ---

    def confirm_start(self) -> bool:
        if not self._accepts("confirm_start", SessionPhase.NOT_STARTED):
            return False
        self._begin_attempt()
        return True

    def select_answer(self, option: str) -> bool:
        if not self._accepts("select_answer", SessionPhase.IN_PROGRESS):
            return False
        question = self.current_question
        if option not in question.options:
            raise InvalidAnswer(f"{option!r} is not an option for question {question.id}")
        self.answers[self.current_index] = option
        self.selected = option
        return True

    def advance(self) -> bool:
        if not self._accepts("advance", SessionPhase.IN_PROGRESS):
            return False
        self._advance()
        return True

    def submit(self) -> bool:
        if not self._accepts("submit", SessionPhase.IN_PROGRESS):
            return False
        self._complete("submitted")
        return True

    def retry(self) -> bool:
        """Start a fresh attempt after a failed result."""
        if not self._accepts("retry", SessionPhase.COMPLETE):
            return False
        if self.result.passed:
            self._ignore("retry")
            return False
        logger.info("🔁 Session %s: retrying after %s%%", self.session_id, self.result.score_percent)
        self._begin_attempt()
        return True

    def exit_to(self, target: ExitTarget) -> bool:
        if not self._accepts("exit_to", SessionPhase.COMPLETE):
            return False
        if target not in self.available_exits():
            self._ignore(f"exit_to:{target.value}")
            return False
        self.exits[target]()
        return True

    # --- Timer events ---

    def _on_question_expired(self) -> None:
        if not self._accepts("question_expired", SessionPhase.IN_PROGRESS):
            return
        if self.is_last_question():
            self._notify(NotificationKind.QUESTION_TIMEOUT, "question time expired, submitting")
        else:
            self._notify(NotificationKind.QUESTION_TIMEOUT, "question time expired, advancing")
        self._advance()

    def _on_overall_expired(self) -> None:
        if not self._accepts("overall_expired", SessionPhase.IN_PROGRESS):
            return
        self._notify(NotificationKind.QUIZ_TIMEOUT, "quiz time expired, submitting")
        self._complete("overall time expired")

    # --- Internals ---

    def _notify(self, kind: NotificationKind, message: str) -> None:
        # A failing notifier must not block the timeout transition.
        try:
            self.notifier.notify(kind, message)
        except Exception:
            logger.exception("❌ Notifier failed for session %s", self.session_id)

    def _begin_attempt(self) -> None:
        self.attempt += 1
        self.answers = [UNANSWERED] * self.total
        self.current_index = 0
        self.selected = self.answers[0]
        self.result = None
        self.phase = SessionPhase.IN_PROGRESS
        self.timers.start()
        logger.info(
            "🎯 Session %s: attempt %s started with %s questions",
            self.session_id, self.attempt, self.total,
        )

    def _advance(self) -> None:
        if self.is_last_question():
            self._complete("last question passed")
            return
        self.current_index += 1
        self.timers.reset_question_clock()
        # Show the answer already recorded for this slot, if any.
        self.selected = self.answers[self.current_index]

    def _complete(self, reason: str) -> None:
        self.timers.stop_all()
        self.result = score(self.config.questions, self.answers, self.config.pass_threshold)
        self.phase = SessionPhase.COMPLETE
        logger.info(
            "🏁 Session %s: %s, %s/%s correct (%s%%, %s)",
            self.session_id, reason, self.result.correct_count, self.result.total,
            self.result.score_percent, "passed" if self.result.passed else "failed",
        )
        if self.on_complete:
            try:
                self.on_complete(self.result)
            except Exception:
                logger.exception("❌ Completion callback failed for session %s", self.session_id)

    def _accepts(self, event: str, phase: SessionPhase) -> bool:
        if self.phase is phase:
            return True
        self._ignore(event)
        return False

    def _ignore(self, event: str) -> None:
        self.ignored_events.append(StaleEventIgnored(event=event, phase=self.phase))
        logger.debug("Session %s: ignored %s in phase %s", self.session_id, event, self.phase.value)
