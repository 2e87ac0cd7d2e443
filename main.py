import discord
from discord.ext import commands
from timed_quiz.config import config
from timed_quiz.commands import QuizCommands
from timed_quiz.logging_config import configure_logging

def main():
    logger = configure_logging(config.LOG_LEVEL)

    # Initialize bot with intents
    intents = discord.Intents.default()
    bot = commands.Bot(command_prefix="/", intents=intents)

    @bot.event
    async def on_ready():
        logger.info("✅ Bot ready, logged in as %s", bot.user)
        try:
            bot.tree.add_command(QuizCommands(bot))
            synced = await bot.tree.sync()
            logger.info("✅ Synced %s slash command(s)", len(synced))
        except Exception as e:
            logger.error("❌ Error syncing commands: %s", e)

    # discord.py would install its own handler on top of ours
    bot.run(config.DISCORD_TOKEN, log_handler=None)

if __name__ == "__main__":
    main()
