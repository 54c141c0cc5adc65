"""
Suggestion Bot - community suggestions with reaction voting and a stats panel
"""

import asyncio
import discord
from discord import app_commands
from discord.ext import commands
import config
from config import DISCORD_TOKEN, GUILD_ID
from constants import LOG_FORMAT, LOG_DATE_FORMAT
import logging
import sys
import uvicorn
from datetime import datetime
from pathlib import Path
from typing import Optional

# Create logs directory if it doesn't exist
logs_dir = Path("logs")
logs_dir.mkdir(exist_ok=True)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT,
    handlers=[
        logging.FileHandler(logs_dir / f'suggestionbot_{datetime.now().strftime("%Y%m%d")}.log'),
        logging.StreamHandler(sys.stdout)
    ]
)

# Set discord.py logging level
logging.getLogger('discord').setLevel(logging.WARNING)
logging.getLogger('discord.http').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Slash commands and reactions only, no privileged intents needed
intents = discord.Intents.default()
intents.guilds = True
intents.guild_reactions = True

BRANCHES = ["branches.suggestions"]


class SuggestionBot(commands.Bot):
    """Discord bot hosting the suggestions branch and its web panel."""

    def __init__(self):
        super().__init__(command_prefix=commands.when_mentioned, intents=intents)
        self.data_dir = config.PERSISTENT_DISK_PATH
        self.brand_color = config.BRAND_COLOR
        self.web_server: Optional[uvicorn.Server] = None
        self.web_task: Optional[asyncio.Task] = None
        self.tree.on_error = self.on_app_command_error

    async def setup_hook(self):
        try:
            logger.info("Loading branches...")
            for branch in BRANCHES:
                await self.load_extension(branch)
                logger.info(f"✅ Loaded branch: {branch}")

            await self.start_web_panel()
            await self.sync_commands()

            logger.info("Suggestion Bot setup complete!")
        except Exception as e:
            logger.critical(f"Failed to setup Suggestion Bot: {e}", exc_info=True)
            raise

    async def start_web_panel(self):
        """Serve the stats panel on the bot's event loop."""
        from web import create_app

        cog = self.get_cog("Suggestions")
        if cog is None:
            logger.warning("Suggestions branch not loaded, web panel disabled")
            return

        app = create_app(
            cog.store,
            site_title=config.SITE_TITLE,
            brand_color=config.BRAND_COLOR,
            logo_url=config.LOGO_URL,
        )
        server_config = uvicorn.Config(app, host=config.WEB_HOST, port=config.WEB_PORT, log_config=None)
        self.web_server = uvicorn.Server(server_config)
        self.web_task = asyncio.create_task(self.web_server.serve())
        logger.info(f"Web server listening on {config.WEB_HOST}:{config.WEB_PORT}")

    async def sync_commands(self):
        """Register slash commands with Discord, per guild when GUILD_ID is set."""
        try:
            if GUILD_ID:
                guild = discord.Object(id=GUILD_ID)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info(f"Synced {len(synced)} slash commands to guild {GUILD_ID}")
            else:
                synced = await self.tree.sync()
                logger.info(f"Synced {len(synced)} global slash commands")
        except discord.HTTPException as e:
            logger.error(f"Failed to sync slash commands: {e}")

    async def on_ready(self):
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")
        logger.info("Bot is ready!")

    async def on_error(self, event_method: str, *args, **kwargs):
        logger.error(f"Error in {event_method}", exc_info=True)

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        logger.error(f"App command error in {interaction.command.name if interaction.command else '?'}: {error}", exc_info=error)
        try:
            if interaction.response.is_done():
                await interaction.followup.send("❌ An error occurred.", ephemeral=True)
            else:
                await interaction.response.send_message("❌ An error occurred.", ephemeral=True)
        except discord.HTTPException as e:
            logger.error(f"Failed to send error response: {e}")

    async def close(self):
        if self.web_server is not None:
            self.web_server.should_exit = True
            if self.web_task is not None:
                await self.web_task
        await super().close()

def main():
    try:
        logger.info("Starting Suggestion Bot...")
        bot = SuggestionBot()
        bot.run(DISCORD_TOKEN, log_handler=None)  # We handle logging ourselves
    except KeyboardInterrupt:
        logger.info("Suggestion Bot shutting down...")
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
