"""Unit tests for turning stored question records into questions."""

import pytest
from timed_quiz.content import load_questions, normalize_question, resolve_correct_option
from timed_quiz.exceptions import InvalidConfiguration
from timed_quiz.models import QuizConfig

OPTIONS = ["Venus", "Mercury", "Mars", "Earth"]

class TestResolveCorrectOption:
    """Test suite for resolve_correct_option()."""

    @pytest.mark.parametrize("answer,expected", [
        (1, "Mercury"),
        ("B", "Mercury"),
        ("b", "Mercury"),
        ("Mercury", "Mercury"),
        ("3", "Earth"),
        (7, ""),
        (-1, ""),
        ("Z", ""),
        (None, ""),
        (True, ""),
    ])
    def test_resolve(self, answer, expected):
        assert resolve_correct_option(OPTIONS, answer) == expected


class TestLoadQuestions:
    """Test suite for load_questions()."""

    def test_records_keep_order_and_fields(self, sample_quiz_records):
        questions = load_questions(sample_quiz_records)

        assert [q.id for q in questions] == ["1", "2"]
        assert questions[0].text == "What is the capital of France?"
        assert questions[0].options == ("London", "Berlin", "Paris", "Madrid")
        assert questions[0].correct_option == "Paris"
        assert questions[0].explanation == "Paris is the capital of France."
        assert questions[1].correct_option == "Mercury"
        # Empty explanations are treated as absent
        assert questions[1].explanation is None

    def test_stored_ids_are_used(self):
        question = normalize_question(
            {"id": "abc", "question": "1 + 1?", "options": ["1", "2"], "correct_answer": "2"}, 0
        )
        assert question.id == "abc"
        assert question.correct_option == "2"

    def test_unresolvable_answer_fails_configuration(self, sample_quiz_records):
        sample_quiz_records[1]["correctAnswer"] = 9
        with pytest.raises(InvalidConfiguration):
            QuizConfig(questions=load_questions(sample_quiz_records))

    def test_no_records(self):
        assert load_questions(None) == []
