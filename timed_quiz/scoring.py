from typing import Optional, Sequence

from .models import Question, QuestionReview, Result


def round_half_up_percent(part: int, whole: int) -> int:
    """100 * part / whole rounded half up, in integer arithmetic."""
    return (200 * part + whole) // (2 * whole)


def score(questions: Sequence[Question], answers: Sequence[Optional[str]],
          pass_threshold: int) -> Result:
    """Score one attempt.

    Unanswered slots count as incorrect. The per-question review keeps the
    question order, which the results screen relies on.
    """
    if len(answers) != len(questions):
        raise ValueError(
            f"Expected {len(questions)} answers, got {len(answers)}"
        )

    reviews = tuple(
        QuestionReview(question=q, selected=selected,
                       is_correct=selected is not None and selected == q.correct_option)
        for q, selected in zip(questions, answers)
    )
    correct_count = sum(1 for r in reviews if r.is_correct)
    total = len(questions)
    score_percent = round_half_up_percent(correct_count, total)

    return Result(
        correct_count=correct_count,
        total=total,
        score_percent=score_percent,
        passed=score_percent >= pass_threshold,
        per_question=reviews,
    )
