from supabase import create_client, Client
from typing import Dict, List, Optional
import datetime
import logging
from .config import config
from .models import Result

logger = logging.getLogger(__name__)

class DatabaseManager:
    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        self.url = url or config.SUPABASE_URL
        self.key = key or config.SUPABASE_KEY
        self._supabase: Optional[Client] = None

    @property
    def supabase(self) -> Client:
        """Create the client on first use so importing never needs credentials."""
        if self._supabase is None:
            self._supabase = create_client(self.url, self.key)
        return self._supabase

    def upsert_user(self, user_id: str, username: str) -> None:
        """Create or update user in database."""
        self.supabase.table("users").upsert({"id": user_id, "username": username}).execute()

    def get_quiz_by_lesson(self, lesson_id: str) -> Optional[Dict]:
        """Get the quiz attached to a lesson, including its question records."""
        res = self.supabase.table("quizzes").select("*").eq("lesson_id", lesson_id).limit(1).execute()
        return res.data[0] if res.data else None

    def get_progress(self, user_id: str, lesson_id: str) -> Optional[Dict]:
        """Get the learner's progress row for a lesson."""
        res = self.supabase.table("user_progress").select("*")\
            .eq("user_id", user_id)\
            .eq("lesson_id", lesson_id)\
            .execute()
        return res.data[0] if res.data else None

    def upsert_progress(self, user_id: str, lesson_id: str, result: Result) -> None:
        """Record a finished quiz attempt against the lesson."""
        now = datetime.datetime.now().isoformat()
        self.supabase.table("user_progress").upsert({
            "user_id": user_id,
            "lesson_id": lesson_id,
            "completed": result.passed,
            "quiz_score": result.score_percent,
            "last_accessed_at": now,
            "completed_at": now,
        }, on_conflict="user_id,lesson_id").execute()

    def has_passed(self, user_id: str, lesson_id: str, pass_threshold: int) -> Optional[int]:
        """Return the stored score if the learner already passed this lesson's quiz."""
        progress = self.get_progress(user_id, lesson_id)
        if progress and progress.get("quiz_score") is not None and progress["quiz_score"] >= pass_threshold:
            return progress["quiz_score"]
        return None


class ProgressRecorder:
    """Completion callback that saves a quiz result as lesson progress."""

    def __init__(self, user_id: str, lesson_id: str, database: Optional[DatabaseManager] = None):
        self.user_id = user_id
        self.lesson_id = lesson_id
        self.database = database or db

    def __call__(self, result: Result) -> None:
        try:
            self.database.upsert_progress(self.user_id, self.lesson_id, result)
            logger.info(
                "✅ Saved progress user=%s lesson=%s score=%s%%",
                self.user_id, self.lesson_id, result.score_percent,
            )
        except Exception as e:
            logger.error("❌ Error saving progress: %s", e)

db = DatabaseManager()
