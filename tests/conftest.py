"""Common test fixtures and configurations for all tests."""

import pytest
from unittest.mock import MagicMock, AsyncMock
from timed_quiz.clock import ManualTicker
from timed_quiz.models import Question, QuizConfig
from timed_quiz.session import QuizSession

CAPITALS = [
    ("France", "Paris", ["London", "Berlin", "Paris", "Madrid"]),
    ("Japan", "Tokyo", ["Tokyo", "Osaka", "Kyoto", "Nagoya"]),
    ("Italy", "Rome", ["Milan", "Rome", "Naples", "Turin"]),
    ("Kenya", "Nairobi", ["Mombasa", "Kisumu", "Nairobi", "Nakuru"]),
    ("Canada", "Ottawa", ["Toronto", "Ottawa", "Montreal", "Vancouver"]),
    ("Egypt", "Cairo", ["Cairo", "Giza", "Luxor", "Aswan"]),
    ("Peru", "Lima", ["Cusco", "Arequipa", "Lima", "Trujillo"]),
    ("Norway", "Oslo", ["Bergen", "Oslo", "Tromso", "Stavanger"]),
    ("Chile", "Santiago", ["Valparaiso", "Concepcion", "Antofagasta", "Santiago"]),
    ("India", "New Delhi", ["Mumbai", "New Delhi", "Chennai", "Kolkata"]),
]

@pytest.fixture
def sample_questions():
    """Return ten capital-city questions."""
    return [
        Question(
            id=f"q{i + 1}",
            text=f"What is the capital of {country}?",
            options=options,
            correct_option=capital,
            explanation=f"{capital} is the capital of {country}.",
        )
        for i, (country, capital, options) in enumerate(CAPITALS)
    ]

@pytest.fixture
def wrong_option():
    """Return a wrong option for a question."""
    def pick(question):
        return next(o for o in question.options if o != question.correct_option)
    return pick

@pytest.fixture
def quiz_config(sample_questions):
    return QuizConfig(questions=sample_questions)

@pytest.fixture
def ticker():
    return ManualTicker()

@pytest.fixture
def mock_notifier():
    return MagicMock()

@pytest.fixture
def on_complete():
    return MagicMock()

@pytest.fixture
def session(quiz_config, ticker, mock_notifier, on_complete):
    """A session wired to a manual ticker, not yet started."""
    return QuizSession(quiz_config, ticker=ticker, notifier=mock_notifier, on_complete=on_complete)

@pytest.fixture
def mock_discord_channel():
    """Create a mocked Discord channel."""
    channel = AsyncMock()
    channel.send = AsyncMock()
    return channel

@pytest.fixture
def sample_quiz_records():
    """Stored question records as kept in the quizzes table."""
    return [
        {
            "question": "What is the capital of France?",
            "options": ["London", "Berlin", "Paris", "Madrid"],
            "correctAnswer": 2,
            "explanation": "Paris is the capital of France."
        },
        {
            "question": "Which planet is closest to the Sun?",
            "options": ["Venus", "Mercury", "Mars", "Earth"],
            "correctAnswer": 1,
            "explanation": ""
        }
    ]
