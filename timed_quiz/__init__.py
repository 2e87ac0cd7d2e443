from .exceptions import QuizError, InvalidConfiguration, InvalidAnswer
from .models import (UNANSWERED, Question, QuizConfig, QuestionReview, Result,
                     SessionPhase, SessionState, StaleEventIgnored)
from .clock import Clock, Ticker, ManualTicker, AsyncioTicker
from .scoring import score
from .timers import TimerCoordinator
from .notifier import NotificationKind, Notifier, NullNotifier, LoggingNotifier
from .session import ExitTarget, QuizSession
from .quiz_manager import QuizManager, quiz_manager

__all__ = [
    'QuizError', 'InvalidConfiguration', 'InvalidAnswer',
    'UNANSWERED', 'Question', 'QuizConfig', 'QuestionReview', 'Result',
    'SessionPhase', 'SessionState', 'StaleEventIgnored',
    'Clock', 'Ticker', 'ManualTicker', 'AsyncioTicker',
    'score', 'TimerCoordinator',
    'NotificationKind', 'Notifier', 'NullNotifier', 'LoggingNotifier',
    'ExitTarget', 'QuizSession', 'QuizManager', 'quiz_manager',
]
