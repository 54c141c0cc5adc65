"""
Global constants for the suggestion bot.

Contains Discord API limits, embed limits, and other constant values
used throughout the bot, its branches and the web panel.
"""

from utils import truncate_text

# ============================================================================
# Discord API Limits
# ============================================================================

# Embed Limits (from Discord API documentation)
EMBED_TITLE_MAX = 256
EMBED_DESCRIPTION_MAX = 4096
EMBED_FIELD_NAME_MAX = 256
EMBED_FIELD_VALUE_MAX = 1024
EMBED_FOOTER_MAX = 2048
EMBED_MAX_FIELDS = 25  # Maximum number of fields in an embed

# Message Limits
MESSAGE_CONTENT_MAX = 2000

# ============================================================================
# Suggestion Bot Constants
# ============================================================================

# Branch Configuration
BRANCH_CONFIG_FILE = "config.yml"
BRANCH_DATABASE_FILE = "data.db"
PERSISTENT_DATABASE_FILE = "suggestions.db"

# Logging
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Web panel
DEFAULT_WEB_HOST = "0.0.0.0"
DEFAULT_WEB_PORT = 3000
DEFAULT_SITE_TITLE = "Suggestion Bot"
DEFAULT_BRAND_COLOR = "#7c3aed"

# ============================================================================
# Helper Functions
# ============================================================================

def truncate_for_embed_field(text: str, suffix: str = "...") -> str:
    """
    Truncate text to fit in an embed field value.

    Args:
        text: Text to truncate
        suffix: Suffix to add if truncated (default: "...")

    Returns:
        Truncated text that fits within EMBED_FIELD_VALUE_MAX
    """
    return truncate_text(text, EMBED_FIELD_VALUE_MAX, suffix)


def truncate_for_embed_description(text: str, suffix: str = "...") -> str:
    """
    Truncate text to fit in an embed description.

    Args:
        text: Text to truncate
        suffix: Suffix to add if truncated (default: "...")

    Returns:
        Truncated text that fits within EMBED_DESCRIPTION_MAX
    """
    return truncate_text(text, EMBED_DESCRIPTION_MAX, suffix)


def truncate_for_message(text: str, suffix: str = "...") -> str:
    """Truncate text to fit in a plain Discord message."""
    return truncate_text(text, MESSAGE_CONTENT_MAX, suffix)
