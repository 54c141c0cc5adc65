"""
Global configuration loader for the suggestion bot.
Loads environment variables from .env file.
"""
from dotenv import load_dotenv
import os
import sys

from constants import (
    DEFAULT_BRAND_COLOR,
    DEFAULT_SITE_TITLE,
    DEFAULT_WEB_HOST,
    DEFAULT_WEB_PORT,
)

load_dotenv()

def get_env(key: str, required: bool = True, default=None):
    """Safely get environment variable with validation."""
    value = os.getenv(key, default)
    if required and value is None:
        print(f"ERROR: Missing required environment variable: {key}")
        print(f"Please add {key} to your .env file")
        sys.exit(1)
    return value

def get_env_int(key: str, required: bool = True, default=None):
    """Get environment variable as integer."""
    value = get_env(key, required, default)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        print(f"ERROR: Environment variable {key} must be a valid integer, got: {value}")
        sys.exit(1)

# ============================================================================
# Global Bot Configuration (from .env)
# ============================================================================
# Discord Bot Token (REQUIRED). BOT_TOKEN is accepted for older deployments.
DISCORD_TOKEN = get_env("DISCORD_TOKEN", required=False) or get_env("BOT_TOKEN")

# Validate token is not a placeholder
PLACEHOLDER_TOKENS = ["your_bot_token_here", "your_token_here", "placeholder", ""]
if DISCORD_TOKEN in PLACEHOLDER_TOKENS:
    print("ERROR: DISCORD_TOKEN is still set to a placeholder value!")
    print("Please update your .env file with a real Discord bot token.")
    print("Get one from: https://discord.com/developers/applications")
    sys.exit(1)

# Guild ID (optional). Slash commands sync to this guild when set,
# otherwise they are registered globally.
GUILD_ID = get_env_int("GUILD_ID", required=False)

if GUILD_ID == 0:
    print("ERROR: GUILD_ID is set to 0 (placeholder)!")
    print("Please update your .env file with your Discord server ID or remove it.")
    sys.exit(1)

# ============================================================================
# Web Panel Configuration (from .env)
# ============================================================================
WEB_HOST = get_env("WEB_HOST", required=False, default=DEFAULT_WEB_HOST)
WEB_PORT = get_env_int("PORT", required=False, default=str(DEFAULT_WEB_PORT))

SITE_TITLE = get_env("SITE_TITLE", required=False, default=DEFAULT_SITE_TITLE)
BRAND_COLOR = get_env("BRAND_COLOR", required=False, default=DEFAULT_BRAND_COLOR)
LOGO_URL = get_env("LOGO_URL", required=False, default="")

# Directory for the suggestions database. Empty keeps it in the branch folder.
PERSISTENT_DISK_PATH = get_env("PERSISTENT_DISK_PATH", required=False, default="")

