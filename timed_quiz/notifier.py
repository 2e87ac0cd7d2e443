import asyncio
import logging
from enum import Enum

import discord

logger = logging.getLogger(__name__)


class NotificationKind(Enum):
    QUESTION_TIMEOUT = "question_timeout"
    QUIZ_TIMEOUT = "quiz_timeout"


class Notifier:
    """Receives learner-facing notices raised by a quiz session."""

    def notify(self, kind: NotificationKind, message: str) -> None:
        raise NotImplementedError


class NullNotifier(Notifier):
    def notify(self, kind: NotificationKind, message: str) -> None:
        pass


class LoggingNotifier(Notifier):
    def notify(self, kind: NotificationKind, message: str) -> None:
        logger.info("[%s] %s", kind.value, message)


MESSAGES = {
    NotificationKind.QUESTION_TIMEOUT: "⏰ Waktu untuk soal ini habis! Lanjut...",
    NotificationKind.QUIZ_TIMEOUT: "⏰ Waktu kuis habis! Jawabanmu dikirim sekarang...",
}


class DiscordNotifier(Notifier):
    """Posts notices to a channel without blocking the session.

    The channel gets the learner-facing text for each kind; the session's own
    message is only used for kinds missing from ``messages``.
    """

    def __init__(self, channel: discord.abc.Messageable, messages=None):
        self.channel = channel
        self.messages = MESSAGES if messages is None else messages
        self._pending = set()

    def notify(self, kind: NotificationKind, message: str) -> None:
        text = self.messages.get(kind, message)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running loop, dropping %s notice: %s", kind.value, text)
            return
        task = loop.create_task(self._send(text))
        # Keep a reference until the send finishes.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(self, message: str):
        try:
            await self.channel.send(message)
        except Exception as e:
            logger.error("❌ Error sending quiz notice: %s", e)
