import asyncio
import logging
import discord
from discord.ext import commands
from discord import app_commands
from .clock import AsyncioTicker
from .config import config
from .content import load_questions
from .database import db, ProgressRecorder
from .exceptions import InvalidConfiguration
from .models import Result, SessionPhase
from .notifier import DiscordNotifier
from .quiz_manager import quiz_manager
from .session import ExitTarget, QuizSession
from .utils import (send_long_message, ensure_user_registered, format_question,
                    format_review, format_time, option_for_letter, split_into_chunks)

logger = logging.getLogger(__name__)

EXIT_LABELS = {
    ExitTarget.TOPIC: ("Kembali ke Topik", "📘 Kembali ke topik pelajaran."),
    ExitTarget.SUBJECT: ("Kembali ke Mata Pelajaran", "📚 Kembali ke daftar mata pelajaran."),
    ExitTarget.DASHBOARD: ("Kembali ke Kelas", "🏫 Kembali ke kelas. Sampai jumpa!"),
}

_background_tasks = set()

def _spawn(coro) -> None:
    task = asyncio.get_running_loop().create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)

class _OwnedView(discord.ui.View):
    """View whose buttons only respond to the learner who owns the quiz."""

    def __init__(self, user_id: str, session: QuizSession, timeout: float = 300):
        super().__init__(timeout=timeout)
        self.user_id = user_id
        self.session = session

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if str(interaction.user.id) != self.user_id:
            await interaction.response.send_message("❌ Ini bukan kuis kamu.", ephemeral=True)
            return False
        if quiz_manager.get_session(self.user_id) is not self.session:
            await interaction.response.send_message("❌ Kuis ini sudah tidak aktif.", ephemeral=True)
            return False
        return True

    async def _disable(self, interaction: discord.Interaction):
        for child in self.children:
            child.disabled = True
        await interaction.response.edit_message(view=self)

class ConfirmStartView(_OwnedView):
    @discord.ui.button(label="Mulai Sekarang", style=discord.ButtonStyle.green)
    async def start_now(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._disable(interaction)
        if not self.session.confirm_start():
            return
        state = self.session.state
        await interaction.followup.send(
            format_question(self.session.current_question, state, self.session.total),
            ephemeral=True
        )

    @discord.ui.button(label="Nanti Saja", style=discord.ButtonStyle.secondary)
    async def not_now(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._disable(interaction)
        quiz_manager.end_session(self.user_id, self.session)
        await interaction.followup.send("👌 Kuis dibatalkan. Mulai lagi kapan saja dengan `/quiz start`.", ephemeral=True)

class ResultView(_OwnedView):
    """Buttons shown with a finished attempt: retry (failed only) and the exits."""

    def __init__(self, user_id: str, session: QuizSession):
        super().__init__(user_id, session, timeout=600)
        if session.can_retry():
            retry = discord.ui.Button(label="Coba Lagi", style=discord.ButtonStyle.green)
            retry.callback = self.retry
            self.add_item(retry)
        for target in session.available_exits():
            label, _ = EXIT_LABELS[target]
            button = discord.ui.Button(label=label, style=discord.ButtonStyle.secondary)
            button.callback = self._make_exit(target)
            self.add_item(button)

    async def retry(self, interaction: discord.Interaction):
        await self._disable(interaction)
        if not self.session.retry():
            await interaction.followup.send("❌ Percobaan ini tidak bisa diulang.", ephemeral=True)
            return
        await interaction.followup.send(
            format_question(self.session.current_question, self.session.state, self.session.total),
            ephemeral=True
        )

    async def on_timeout(self):
        # A retried attempt is still running; only drop a finished one.
        if self.session.phase is SessionPhase.COMPLETE:
            quiz_manager.end_session(self.user_id, self.session)

    def _make_exit(self, target: ExitTarget):
        async def callback(interaction: discord.Interaction):
            await self._disable(interaction)
            if self.session.exit_to(target):
                await interaction.followup.send(EXIT_LABELS[target][1], ephemeral=True)
        return callback

async def announce_result(channel: discord.abc.Messageable, user_id: str, session: QuizSession, result: Result):
    """Post the results and review for a finished attempt to the channel."""
    try:
        view = ResultView(user_id, session)
        content = f"<@{user_id}>\n" + format_review(result)
        chunks = split_into_chunks(content)
        for i, chunk in enumerate(chunks):
            if i == len(chunks) - 1 and view.children:
                await channel.send(chunk, view=view)
            else:
                await channel.send(chunk)
    except Exception as e:
        logger.error("❌ Error announcing quiz result: %s", e)

class QuizCommands(app_commands.Group):
    def __init__(self, bot: commands.Bot):
        super().__init__(name="quiz", description="Kuis berwaktu untuk setiap pelajaran")
        self.bot = bot

    def _build_session(self, interaction: discord.Interaction, user_id: str, lesson_id: str, questions) -> QuizSession:
        channel = interaction.channel
        recorder = ProgressRecorder(user_id, lesson_id)

        def on_complete(result: Result) -> None:
            if quiz_manager.get_session(user_id) is not session:
                logger.info("Skipping result of replaced session %s", session.session_id)
                return
            recorder(result)
            _spawn(announce_result(channel, user_id, session, result))

        def leave() -> None:
            quiz_manager.end_session(user_id, session)

        ticker = AsyncioTicker(config.TICK_INTERVAL)
        session = quiz_manager.create_session(
            user_id,
            config.quiz_config(questions),
            ticker=ticker,
            notifier=DiscordNotifier(channel),
            on_complete=on_complete,
            on_exit_to_topic=leave,
            on_exit_to_subject=leave,
            on_exit_to_dashboard=leave,
        )
        return session

    @app_commands.command(name="start", description="Mulai kuis untuk sebuah pelajaran")
    @ensure_user_registered()
    async def start(self, interaction: discord.Interaction, lesson_id: str):
        await interaction.response.defer(ephemeral=True)
        user_id = str(interaction.user.id)

        try:
            previous_score = db.has_passed(user_id, lesson_id, config.PASS_THRESHOLD)
            if previous_score is not None:
                await interaction.followup.send(
                    f"🏆 Kamu sudah lulus kuis ini dengan skor **{previous_score}%**. Pelajaran selesai!"
                )
                return

            quiz = db.get_quiz_by_lesson(lesson_id)
        except Exception as e:
            logger.error("❌ Error loading quiz for lesson %s: %s", lesson_id, e)
            await interaction.followup.send("❌ Gagal memuat kuis. Silakan coba lagi nanti.")
            return

        if not quiz:
            await interaction.followup.send("📭 Belum ada kuis untuk pelajaran ini.")
            return

        try:
            session = self._build_session(interaction, user_id, lesson_id, load_questions(quiz.get("questions")))
        except InvalidConfiguration as e:
            logger.warning("Quiz for lesson %s is unusable: %s", lesson_id, e)
            await interaction.followup.send("📭 Kuis untuk pelajaran ini sedang tidak tersedia.")
            return

        cfg = session.config
        await interaction.followup.send(
            f"🎯 **{quiz.get('title') or 'Kuis'}**\n"
            f"Jumlah Soal: **{cfg.total}** | Total Waktu: **{format_time(cfg.overall_seconds)}** | "
            f"Nilai Lulus: **{cfg.pass_threshold}%**\n\n"
            f"• Kamu punya **{cfg.per_question_seconds}** detik per soal.\n"
            f"• Jawaban benar baru terlihat setelah kuis dikirim.\n"
            f"• Tidak ada nilai minus, pilih jawaban terbaikmu lalu lanjut.\n\n"
            f"Siap mulai?",
            view=ConfirmStartView(user_id, session)
        )

    @app_commands.command(name="answer", description="Pilih jawaban untuk soal saat ini")
    async def answer(self, interaction: discord.Interaction, pilihan: str):
        user_id = str(interaction.user.id)
        session = quiz_manager.get_session(user_id)
        if not session or session.phase is not SessionPhase.IN_PROGRESS:
            await interaction.response.send_message("❌ Kamu tidak sedang mengerjakan kuis.", ephemeral=True)
            return

        option = option_for_letter(session.current_question, pilihan)
        if option is None:
            await interaction.response.send_message(f"❌ Pilihan **{pilihan}** tidak ada.", ephemeral=True)
            return
        session.select_answer(option)

        await interaction.response.send_message(f"✍️ Jawaban **{pilihan.upper()}** disimpan.", ephemeral=True)

    @app_commands.command(name="next", description="Lanjut ke soal berikutnya (atau kirim di soal terakhir)")
    async def next_question(self, interaction: discord.Interaction):
        user_id = str(interaction.user.id)
        session = quiz_manager.get_session(user_id)
        if not session or not session.advance():
            await interaction.response.send_message("❌ Kamu tidak sedang mengerjakan kuis.", ephemeral=True)
            return

        if session.phase is SessionPhase.COMPLETE:
            await interaction.response.send_message("📨 Kuis dikirim!", ephemeral=True)
            return

        await interaction.response.send_message(
            format_question(session.current_question, session.state, session.total),
            ephemeral=True
        )

    @app_commands.command(name="submit", description="Kirim kuis sekarang")
    async def submit(self, interaction: discord.Interaction):
        user_id = str(interaction.user.id)
        session = quiz_manager.get_session(user_id)
        if not session or not session.submit():
            await interaction.response.send_message("❌ Kamu tidak sedang mengerjakan kuis.", ephemeral=True)
            return
        await interaction.response.send_message("📨 Kuis dikirim!", ephemeral=True)

    @app_commands.command(name="status", description="Lihat soal dan sisa waktu kuis kamu")
    async def status(self, interaction: discord.Interaction):
        await interaction.response.defer(ephemeral=True)
        user_id = str(interaction.user.id)
        session = quiz_manager.get_session(user_id)
        if not session:
            await interaction.followup.send("❌ Kamu belum memulai kuis. Gunakan `/quiz start`.")
            return

        if session.phase is SessionPhase.NOT_STARTED:
            await interaction.followup.send("⏸️ Kuis belum dimulai. Tekan **Mulai Sekarang** untuk memulai.")
        elif session.phase is SessionPhase.IN_PROGRESS:
            await interaction.followup.send(
                format_question(session.current_question, session.state, session.total)
            )
        else:
            view = ResultView(user_id, session)
            await send_long_message(interaction, format_review(session.result),
                                    view=view if view.children else None)
