"""Domain models for a timed quiz attempt."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .exceptions import InvalidConfiguration

# Marks an answer slot the learner never filled.
UNANSWERED = None


class SessionPhase(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Question:
    """Multiple-choice question with its correct option already resolved."""

    id: str
    text: str
    options: Tuple[str, ...]
    correct_option: str
    explanation: Optional[str] = None

    def __post_init__(self):
        # Callers often hand in lists; keep the question hashable and immutable.
        object.__setattr__(self, "options", tuple(self.options))


@dataclass(frozen=True)
class QuizConfig:
    questions: Tuple[Question, ...]
    per_question_seconds: int = 60
    overall_seconds: int = 600
    pass_threshold: int = 80

    def __post_init__(self):
        object.__setattr__(self, "questions", tuple(self.questions))
        self.validate()

    @property
    def total(self) -> int:
        return len(self.questions)

    def validate(self) -> None:
        """Raise InvalidConfiguration if the quiz cannot be run."""
        if not self.questions:
            raise InvalidConfiguration("Quiz has no questions")
        for i, q in enumerate(self.questions):
            if len(q.options) < 2:
                raise InvalidConfiguration(
                    f"Question {i + 1} ({q.id}) needs at least two options"
                )
            if q.correct_option not in q.options:
                raise InvalidConfiguration(
                    f"Question {i + 1} ({q.id}) has no correct option among its options"
                )
        if self.per_question_seconds <= 0 or self.overall_seconds <= 0:
            raise InvalidConfiguration("Timer durations must be positive")
        if not 0 <= self.pass_threshold <= 100:
            raise InvalidConfiguration("Pass threshold must be between 0 and 100")


@dataclass(frozen=True)
class SessionState:
    """Snapshot of a session, safe to hand to a renderer."""

    phase: SessionPhase
    current_index: int
    answers: Tuple[Optional[str], ...]
    selected: Optional[str]
    question_time_remaining: int
    overall_time_remaining: int
    attempt: int = 1

    @property
    def answered_count(self) -> int:
        return sum(1 for a in self.answers if a is not UNANSWERED)


@dataclass(frozen=True)
class QuestionReview:
    question: Question
    selected: Optional[str]
    is_correct: bool


@dataclass(frozen=True)
class Result:
    correct_count: int
    total: int
    score_percent: int
    passed: bool
    per_question: Tuple[QuestionReview, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StaleEventIgnored:
    """Record of a learner action or timer event dropped by a phase guard."""

    event: str
    phase: SessionPhase
