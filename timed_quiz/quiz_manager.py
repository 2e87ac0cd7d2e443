from typing import Dict, Optional
import logging

from .models import QuizConfig
from .session import QuizSession

logger = logging.getLogger(__name__)

class QuizManager:
    def __init__(self):
        self.active_sessions: Dict[str, QuizSession] = {}

    def create_session(self, user_id: str, quiz_config: QuizConfig, **session_kwargs) -> QuizSession:
        """Create a new quiz session, replacing any session the user already has."""
        self.end_session(user_id)
        session = QuizSession(quiz_config, **session_kwargs)
        self.active_sessions[user_id] = session
        logger.info("📝 Quiz session %s created for user %s", session.session_id, user_id)
        return session

    def get_session(self, user_id: str) -> Optional[QuizSession]:
        """Get an active quiz session for a user."""
        return self.active_sessions.get(user_id)

    def end_session(self, user_id: str, session: Optional[QuizSession] = None) -> None:
        """End a quiz session, stopping its timers.

        When ``session`` is given, only end it if it is still the user's
        current session.
        """
        if session is not None and self.active_sessions.get(user_id) is not session:
            return
        session = self.active_sessions.pop(user_id, None)
        if session:
            session.timers.stop_all()
            logger.info("🧹 Quiz session %s ended for user %s", session.session_id, user_id)

quiz_manager = QuizManager()
