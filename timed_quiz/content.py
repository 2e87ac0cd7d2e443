from typing import Dict, List, Optional

from .models import Question

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def resolve_correct_option(options: List[str], answer) -> str:
    """Resolve a stored answer key to the option text.

    Stored records use an option index; older ones use a letter ("B") or the
    option text itself. Anything that cannot be resolved gives "", which the
    quiz configuration rejects.
    """
    if isinstance(answer, bool):
        return ""
    if isinstance(answer, int):
        return options[answer] if 0 <= answer < len(options) else ""
    if isinstance(answer, str):
        key = answer.strip()
        if key in options:
            return key
        if len(key) == 1 and key.upper() in LETTERS:
            idx = LETTERS.index(key.upper())
            return options[idx] if idx < len(options) else ""
        if key.isdigit():
            return resolve_correct_option(options, int(key))
    return ""


def normalize_question(record: Dict, position: int) -> Question:
    """Turn a stored question record into a Question."""
    options = [str(o) for o in (record.get("options") or [])]
    answer = record.get("correctAnswer")
    if answer is None:
        answer = record.get("correct_answer", record.get("answer"))
    explanation: Optional[str] = record.get("explanation") or None
    return Question(
        id=str(record.get("id") or record.get("_id") or position + 1),
        text=record.get("question") or record.get("text") or "",
        options=tuple(options),
        correct_option=resolve_correct_option(options, answer),
        explanation=explanation,
    )


def load_questions(records: List[Dict]) -> List[Question]:
    """Normalize stored records, keeping their stored order."""
    return [normalize_question(r, i) for i, r in enumerate(records or [])]
