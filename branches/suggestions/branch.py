"""
Suggestions Branch Implementation
Slash commands for submitting, reviewing and browsing suggestions
"""

import discord
from discord import app_commands
from discord.ext import commands
import logging
from pathlib import Path
from typing import Optional

from constants import BRANCH_CONFIG_FILE
from utils import get_setting, load_branch_config
from .dispatcher import Action, Command, CommandDispatcher
from .handlers import actor_from_interaction, send_reply
from .helpers import get_db_path, get_embed_colors, get_manager_role_ids
from .lifecycle import SuggestionLifecycle
from .messenger import DiscordMessenger
from .store import SuggestionStore
from .views import NavigationButton

logger = logging.getLogger(__name__)


# Default configuration for this branch
DEFAULT_CONFIG = {
    "enabled": True,
    "version": "1.0.0",
    "settings": {
        "channel_id": 0,  # Replace with your suggestions channel ID
        "manager_role_ids": [],  # Roles allowed to approve/deny besides Manage Server

        "validation": {
            "min_length": 1,
            "max_length": 4000,
        },

        "listing": {
            "page_size": 5,
            "max_rows": 1000,
        },

        "ui": {
            "embed_colors": {
                "pending": 0xFEE75C,
                "approved": 0x57F287,
                "denied": 0xED4245,
            },
        },

        "messages": {
            "submitted": "✅ Suggestion posted as {id}",
            "approved": "✅ {id} marked Approved",
            "denied": "❌ {id} marked Denied",
            "no_permission": "You need Manage Server permission.",
            "store_error": "Something went wrong while saving. Please try again later.",
            "generic_error": "An error occurred.",
        }
    }
}

FILTER_CHOICES = [
    app_commands.Choice(name=name, value=name)
    for name in ("all", "pending", "approved", "denied")
]


class Suggestions(commands.Cog):
    """Handles user suggestions with voting and management."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

        # Database lives on the persistent disk when one is configured
        self.db_path = get_db_path(getattr(bot, "data_dir", None))

        # Load config
        self.config = self.load_config()

        # Access settings
        self.channel_id = int(get_setting(self.config, "settings", "channel_id", default=0) or 0)
        self.manager_role_ids = get_manager_role_ids(self.config)
        self.colors = get_embed_colors(self.config, getattr(bot, "brand_color", None))

        self.store = SuggestionStore(self.db_path)
        self.lifecycle = SuggestionLifecycle(
            self.store,
            DiscordMessenger(bot, self.colors),
            self.channel_id,
            min_length=get_setting(self.config, "settings", "validation", "min_length", default=1),
            max_length=get_setting(self.config, "settings", "validation", "max_length", default=4000),
        )
        self.dispatcher = CommandDispatcher(
            self.lifecycle,
            page_size=get_setting(self.config, "settings", "listing", "page_size", default=5),
            max_rows=get_setting(self.config, "settings", "listing", "max_rows", default=1000),
            messages=get_setting(self.config, "settings", "messages", default={}),
        )

        if not self.channel_id:
            logger.warning("Suggestions channel_id is not set in config.yml; /suggest will fail until it is")

        logger.info(f"Suggestions branch initialized (channel: {self.channel_id}, db: {self.db_path})")

    async def cog_load(self):
        """Initialize database when branch is loaded."""
        await self.store.initialize()

        # Listing buttons carry their own state, so they survive restarts
        logger.info("Registering NavigationButton for persistent interactions")
        self.bot.add_dynamic_items(NavigationButton)

    def load_config(self) -> dict:
        """Load config from config.yml in this branch's folder."""
        config_path = Path(__file__).parent / BRANCH_CONFIG_FILE
        return load_branch_config(config_path, DEFAULT_CONFIG, "Suggestions")

    async def _run(self, interaction: discord.Interaction, command: Command) -> None:
        reply = await self.dispatcher.dispatch(command)
        try:
            await send_reply(interaction, reply, self.colors)
        except discord.HTTPException as e:
            logger.error(f"Failed to respond to /{interaction.command.name if interaction.command else '?'}: {e}")

    @app_commands.command(name="suggest", description="Submit a suggestion")
    @app_commands.describe(idea="Your suggestion")
    async def suggest(self, interaction: discord.Interaction, idea: str):
        await interaction.response.defer(ephemeral=True)
        await self._run(interaction, Command(
            action=Action.SUBMIT,
            actor=actor_from_interaction(interaction, self.manager_role_ids),
            content=idea,
        ))

    @app_commands.command(name="approve", description="Approve a suggestion (manager only)")
    @app_commands.describe(id="Suggestion ID", reason="Reason")
    async def approve(self, interaction: discord.Interaction, id: int, reason: Optional[str] = None):
        await interaction.response.defer(ephemeral=True)
        await self._run(interaction, Command(
            action=Action.APPROVE,
            actor=actor_from_interaction(interaction, self.manager_role_ids),
            suggestion_id=id,
            reason=reason,
        ))

    @app_commands.command(name="deny", description="Deny a suggestion (manager only)")
    @app_commands.describe(id="Suggestion ID", reason="Reason")
    async def deny(self, interaction: discord.Interaction, id: int, reason: Optional[str] = None):
        await interaction.response.defer(ephemeral=True)
        await self._run(interaction, Command(
            action=Action.DENY,
            actor=actor_from_interaction(interaction, self.manager_role_ids),
            suggestion_id=id,
            reason=reason,
        ))

    @app_commands.command(name="suggestions", description="List suggestions (paginated)")
    @app_commands.describe(filter="Filter: all, pending, approved, denied")
    @app_commands.choices(filter=FILTER_CHOICES)
    async def suggestions(self, interaction: discord.Interaction, filter: Optional[app_commands.Choice[str]] = None):
        await interaction.response.defer()
        await self._run(interaction, Command(
            action=Action.LIST,
            actor=actor_from_interaction(interaction, self.manager_role_ids),
            filter=filter.value if filter else None,
        ))

    @app_commands.command(name="suggestion", description="Show a suggestion by ID")
    @app_commands.describe(id="Suggestion ID")
    async def suggestion(self, interaction: discord.Interaction, id: int):
        await interaction.response.defer()
        await self._run(interaction, Command(
            action=Action.SHOW,
            actor=actor_from_interaction(interaction, self.manager_role_ids),
            suggestion_id=id,
        ))

    def cog_unload(self):
        """Called when the branch is unloaded."""
        self.bot.remove_dynamic_items(NavigationButton)
        logger.info("Suggestions branch unloaded")
