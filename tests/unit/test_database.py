"""Unit tests for the database layer and progress recording."""

import pytest
from unittest.mock import MagicMock, patch
from timed_quiz.database import DatabaseManager, ProgressRecorder
from timed_quiz.models import Result

class TestDatabaseManager:
    """Test suite for DatabaseManager class."""

    @pytest.fixture
    def database(self):
        database = DatabaseManager(url="https://example.supabase.co", key="key")
        database._supabase = MagicMock()
        return database

    def test_client_is_created_lazily(self):
        with patch("timed_quiz.database.create_client") as mock_create:
            database = DatabaseManager(url="https://example.supabase.co", key="key")
            mock_create.assert_not_called()
            _ = database.supabase
            _ = database.supabase
            mock_create.assert_called_once_with("https://example.supabase.co", "key")

    def test_get_quiz_by_lesson(self, database):
        table = database.supabase.table.return_value
        table.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = [
            {"id": "quiz1", "questions": []}
        ]

        assert database.get_quiz_by_lesson("lesson1") == {"id": "quiz1", "questions": []}
        database.supabase.table.assert_called_with("quizzes")
        table.select.return_value.eq.assert_called_once_with("lesson_id", "lesson1")

    def test_get_quiz_by_lesson_missing(self, database):
        table = database.supabase.table.return_value
        table.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []
        assert database.get_quiz_by_lesson("lesson1") is None

    def test_upsert_progress(self, database):
        result = Result(correct_count=8, total=10, score_percent=80, passed=True)

        database.upsert_progress("user1", "lesson1", result)

        database.supabase.table.assert_called_with("user_progress")
        row = database.supabase.table.return_value.upsert.call_args[0][0]
        assert row["user_id"] == "user1"
        assert row["lesson_id"] == "lesson1"
        assert row["completed"] is True
        assert row["quiz_score"] == 80
        assert database.supabase.table.return_value.upsert.call_args[1] == {"on_conflict": "user_id,lesson_id"}

    @pytest.mark.parametrize("stored,expected", [
        ({"quiz_score": 90}, 90),
        ({"quiz_score": 80}, 80),
        ({"quiz_score": 60}, None),
        ({"quiz_score": None}, None),
        (None, None),
    ])
    def test_has_passed(self, database, stored, expected):
        with patch.object(database, "get_progress", return_value=stored):
            assert database.has_passed("user1", "lesson1", 80) == expected


class TestProgressRecorder:
    """Test suite for ProgressRecorder class."""

    def test_records_result(self):
        database = MagicMock()
        recorder = ProgressRecorder("user1", "lesson1", database)
        result = Result(correct_count=3, total=10, score_percent=30, passed=False)

        recorder(result)

        database.upsert_progress.assert_called_once_with("user1", "lesson1", result)

    def test_persistence_failure_is_contained(self):
        database = MagicMock()
        database.upsert_progress.side_effect = RuntimeError("network down")
        recorder = ProgressRecorder("user1", "lesson1", database)

        # Must not raise
        recorder(Result(correct_count=0, total=1, score_percent=0, passed=False))
        database.upsert_progress.assert_called_once()
