"""Logging configuration helpers for the quiz bot."""

import logging


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure basic logging for the application and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # discord.py is chatty at INFO about gateway reconnects.
    logging.getLogger("discord.gateway").setLevel(logging.WARNING)
    return logging.getLogger("timed_quiz")
