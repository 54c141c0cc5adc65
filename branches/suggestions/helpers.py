"""
Suggestions Helper Functions
Shared utility functions for the suggestions system.
"""

import discord
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from constants import (
    BRANCH_DATABASE_FILE,
    EMBED_FIELD_NAME_MAX,
    EMBED_FOOTER_MAX,
    EMBED_MAX_FIELDS,
    EMBED_TITLE_MAX,
    PERSISTENT_DATABASE_FILE,
    truncate_for_embed_description,
    truncate_for_embed_field,
)
from utils import get_setting, parse_hex_color, truncate_text
from .presentation import DisplayPayload

logger = logging.getLogger(__name__)

DEFAULT_COLORS = {
    "pending": 0xFEE75C,
    "approved": 0x57F287,
    "denied": 0xED4245,
    "neutral": 0x7C3AED,
}


def get_db_path(data_dir: Optional[str] = None) -> str:
    """
    Get the database path for this branch.

    A configured data directory (e.g. a persistent disk) takes precedence
    over the branch folder.
    """
    if data_dir:
        return str(Path(data_dir) / PERSISTENT_DATABASE_FILE)
    return str(Path(__file__).parent / BRANCH_DATABASE_FILE)


def get_embed_colors(config: Dict[str, Any], brand_color=None) -> Dict[str, int]:
    """Get embed colors from config, using the brand color for neutral embeds."""
    embed_colors = get_setting(config, "settings", "ui", "embed_colors", default={}) or {}
    colors = {tone: parse_hex_color(embed_colors.get(tone), default) for tone, default in DEFAULT_COLORS.items()}
    if brand_color and "neutral" not in embed_colors:
        colors["neutral"] = parse_hex_color(brand_color, DEFAULT_COLORS["neutral"])
    return colors


def get_manager_role_ids(config: Dict[str, Any]) -> list[int]:
    """Get manager role IDs from config."""
    return [int(role_id) for role_id in get_setting(config, "settings", "manager_role_ids", default=[]) or []]


def build_embed(payload: DisplayPayload, colors: Dict[str, int]) -> discord.Embed:
    """Convert a DisplayPayload into a discord.Embed within Discord's limits."""
    embed = discord.Embed(
        title=truncate_text(payload.title, EMBED_TITLE_MAX),
        description=truncate_for_embed_description(payload.description) if payload.description else None,
        color=colors.get(payload.tone, DEFAULT_COLORS["neutral"]),
        timestamp=payload.timestamp,
    )

    for field in payload.fields[:EMBED_MAX_FIELDS]:
        embed.add_field(
            name=truncate_text(field.name, EMBED_FIELD_NAME_MAX),
            value=truncate_for_embed_field(field.value) or "\u200b",
            inline=field.inline,
        )

    if payload.footer:
        embed.set_footer(text=truncate_text(payload.footer, EMBED_FOOTER_MAX))

    return embed
