from typing import List, Callable, Optional
import discord
from discord.webhook import WebhookMessage
from functools import wraps
from .content import LETTERS
from .database import db
from .models import Question, Result, SessionState

def ensure_user_registered():
    """
    Decorator to ensure user is registered in database before command execution.
    Use this decorator on command methods that need user registration.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, interaction: discord.Interaction, *args, **kwargs):
            user_id = str(interaction.user.id)
            username = interaction.user.name
            db.upsert_user(user_id, username)
            return await func(self, interaction, *args, **kwargs)
        return wrapper
    return decorator

def format_time(seconds: int) -> str:
    """Format a countdown as M:SS."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins}:{secs:02d}"

def option_for_letter(question: Question, letter: str) -> Optional[str]:
    """Map an answer letter (A, B, ...) to the option text, or None if out of range."""
    key = letter.strip().upper()
    if len(key) != 1 or key not in LETTERS:
        return None
    idx = LETTERS.index(key)
    return question.options[idx] if idx < len(question.options) else None

def format_question(question: Question, state: SessionState, total: int) -> str:
    """Render the current question with both countdowns."""
    options_text = "\n".join(
        f"{'👉 ' if opt == state.selected else ''}{LETTERS[i]}. {opt}"
        for i, opt in enumerate(question.options)
    )
    return (
        f"🕒 **Waktu Kuis:** {format_time(state.overall_time_remaining)} | "
        f"⏳ **Waktu Soal:** {state.question_time_remaining}s\n"
        f"**Pertanyaan {state.current_index + 1} dari {total}** "
        f"({state.answered_count} dijawab)\n\n"
        f"{question.text}\n\n{options_text}\n\n"
        f"Jawab dengan `/quiz answer <huruf>`, lanjut dengan `/quiz next`."
    )

def format_review(result: Result) -> str:
    """Render the results summary followed by the per-question review."""
    header = "🎉 **Kerja bagus!**" if result.passed else "📖 **Silakan coba lagi**"
    lines = [
        header,
        f"✅ Kamu menjawab **{result.correct_count}** dari **{result.total}** dengan benar "
        f"(**{result.score_percent}%**)",
        "",
        "**Review Jawaban:**",
    ]
    for i, review in enumerate(result.per_question):
        q = review.question
        mark = "✅" if review.is_correct else "❌"
        lines.append(f"{mark} **{i + 1}. {q.text}**")
        for oi, opt in enumerate(q.options):
            if opt == q.correct_option:
                suffix = " ✓ Jawaban benar"
            elif opt == review.selected:
                suffix = " ✗ Jawaban kamu"
            else:
                suffix = ""
            lines.append(f"{LETTERS[oi]}. {opt}{suffix}")
        if review.selected is None:
            lines.append("_(tidak dijawab)_")
        if q.explanation:
            lines.append(f"💡 Penjelasan: {q.explanation}")
        lines.append("")
    return "\n".join(lines).rstrip()

async def send_long_message(interaction: discord.Interaction, content: str, chunk_size: int = 1900,
                            view: Optional[discord.ui.View] = None) -> List[WebhookMessage]:
    """
    Send a long message in chunks through Discord.

    Args:
        interaction: Discord interaction object
        content: The message content to send
        chunk_size: Maximum size of each chunk (default: 1900 to allow for markup)
        view: Optional view attached to the last chunk

    Returns:
        List of sent message objects
    """
    messages = []
    chunks = split_into_chunks(content, chunk_size)

    for i, chunk in enumerate(chunks):
        if view is not None and i == len(chunks) - 1:
            msg = await interaction.followup.send(chunk, view=view)
        else:
            msg = await interaction.followup.send(chunk)
        messages.append(msg)

    return messages

def split_into_chunks(content: str, chunk_size: int = 1900) -> List[str]:
    """
    Split content into chunks while preserving markdown code blocks and structure.

    Args:
        content: The content to split
        chunk_size: Maximum size of each chunk

    Returns:
        List of content chunks
    """
    if len(content) <= chunk_size:
        return [content]

    chunks = []
    current_chunk = ""
    code_block = False
    code_lang = ""

    # Split by lines first to preserve structure
    lines = content.split('\n')

    for line in lines:
        if line.startswith('```'):
            code_block = not code_block
            if code_block:
                code_lang = line[3:].strip()

        new_chunk = current_chunk + ('' if not current_chunk else '\n') + line

        if len(new_chunk) > chunk_size:
            # Close an open code block here and reopen it in the next chunk
            if code_block:
                current_chunk += '\n```'
                chunks.append(current_chunk)
                current_chunk = f'```{code_lang}\n{line}'
            else:
                chunks.append(current_chunk)
                current_chunk = line
        else:
            current_chunk = new_chunk

    if current_chunk:
        if code_block and not current_chunk.endswith('```'):
            current_chunk += '\n```'
        chunks.append(current_chunk)

    return chunks
