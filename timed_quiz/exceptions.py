class QuizError(Exception):
    """Base class for errors raised by the quiz engine."""


class InvalidConfiguration(QuizError):
    """The quiz cannot start: bad question set or timer settings."""


class InvalidAnswer(QuizError, ValueError):
    """The selected option is not offered by the current question."""
