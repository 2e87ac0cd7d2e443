import os
from dotenv import load_dotenv

from .models import QuizConfig

class Config:
    def __init__(self):
        load_dotenv()
        self.DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")
        self.SUPABASE_URL = os.getenv("SUPABASE_URL")
        self.SUPABASE_KEY = os.getenv("SUPABASE_KEY")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.PER_QUESTION_SECONDS = int(os.getenv("QUIZ_PER_QUESTION_SECONDS", "60"))
        self.OVERALL_SECONDS = int(os.getenv("QUIZ_OVERALL_SECONDS", "600"))
        self.PASS_THRESHOLD = int(os.getenv("QUIZ_PASS_THRESHOLD", "80"))
        self.TICK_INTERVAL = float(os.getenv("QUIZ_TICK_INTERVAL", "1.0"))

    def quiz_config(self, questions) -> QuizConfig:
        """Build a QuizConfig for `questions` using the configured timers."""
        return QuizConfig(
            questions=questions,
            per_question_seconds=self.PER_QUESTION_SECONDS,
            overall_seconds=self.OVERALL_SECONDS,
            pass_threshold=self.PASS_THRESHOLD,
        )

config = Config()
