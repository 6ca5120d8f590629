"""
Quorum - A Discord bot for community suggestions with up/down voting
"""

import discord
from discord.ext import commands
from config import load_settings
from constants import LOG_FORMAT, LOG_DATE_FORMAT
import logging
import sys
from datetime import datetime
from pathlib import Path

# Create logs directory if it doesn't exist
logs_dir = Path("logs")
logs_dir.mkdir(exist_ok=True)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT,
    handlers=[
        logging.FileHandler(logs_dir / f'quorum_{datetime.now().strftime("%Y%m%d")}.log'),
        logging.StreamHandler(sys.stdout)
    ]
)

# Set discord.py logging level
logging.getLogger('discord').setLevel(logging.WARNING)
logging.getLogger('discord.http').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Configure Discord intents
intents = discord.Intents.default()
intents.guilds = True            # Required for resolving the form and suggestions channels

BRANCHES = ["branches.suggestions"]


class Quorum(commands.Bot):
    """Quorum - suggestion and voting bot."""

    def __init__(self, settings):
        super().__init__(command_prefix="!", intents=intents, application_id=settings.app_id)
        self.settings = settings

    async def setup_hook(self):
        try:
            logger.info("Loading branches...")
            for branch in BRANCHES:
                await self.load_extension(branch)
                logger.info(f"✅ Loaded branch: {branch}")

            logger.info("Quorum setup complete!")
        except Exception as e:
            logger.critical(f"Failed to setup Quorum: {e}", exc_info=True)
            raise

    async def on_ready(self):
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

        # Sync slash commands to Discord
        try:
            logger.info("Syncing slash commands...")
            guild = discord.Object(id=self.settings.guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info(f"Synced {len(synced)} slash commands to guild {self.settings.guild_id}")
        except discord.HTTPException as e:
            logger.warning(f"Failed to sync slash commands (ok if not needed): {e}")

        logger.info("Bot is ready!")

    async def on_error(self, event_method: str, *args, **kwargs):
        logger.error(f"Error in {event_method}", exc_info=True)


def main():
    settings = load_settings()
    try:
        logger.info("Starting Quorum...")
        bot = Quorum(settings)
        bot.run(settings.discord_token, log_handler=None)  # We handle logging ourselves
    except KeyboardInterrupt:
        logger.info("Quorum shutting down...")
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
