"""Utility functions for the bot."""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)


def load_branch_config(config_path: Path, default_config: Dict[str, Any], branch_name: str) -> Dict[str, Any]:
    """
    Load branch configuration from YAML file with fallback to defaults.

    A missing config file is generated from the defaults so server owners
    have something to edit.

    Args:
        config_path: Path to config.yml file
        default_config: Default configuration dictionary
        branch_name: Name of the branch (for logging)

    Returns:
        Loaded configuration or default config if file doesn't exist
    """
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                config = yaml.safe_load(f) or {}
            logger.info(f"Loaded config for {branch_name}")
            return config
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config for {branch_name}: {e}")
            return default_config

    save_branch_config(config_path, default_config, branch_name)
    return default_config


def save_branch_config(config_path: Path, config: Dict[str, Any], branch_name: str) -> None:
    """Write a branch config to disk."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        logger.info(f"✅ Saved default config for {branch_name}")
    except OSError as e:
        logger.error(f"Failed to save config for {branch_name}: {e}")


def get_setting(config: Dict[str, Any], *keys: str, default=None):
    """
    Read a nested value from a branch config.

    Example:
        get_setting(config, "settings", "validation", "min_length", default=1)
    """
    node: Any = config
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def sanitize_text(text: str, max_length: int = None) -> str:
    """
    Sanitize user input text.

    Args:
        text: The text to sanitize
        max_length: Optional maximum length, text beyond it is cut off

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    if max_length is not None:
        text = text[:max_length]

    # Remove null bytes
    text = text.replace('\x00', '')

    return text.strip()


def truncate_text(text: str, limit: int = 1024, suffix: str = '...') -> str:
    """
    Truncate text to a specified limit with a suffix.

    Args:
        text: The text to truncate
        limit: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if not text:
        return ""

    if len(text) <= limit:
        return text

    return text[:limit - len(suffix)] + suffix


def parse_hex_color(value, default: int = 0x7C3AED) -> int:
    """
    Parse a color given as an int or a "#rrggbb" string.

    Args:
        value: Color from config or environment
        default: Color to use if value can't be parsed

    Returns:
        Color as an integer suitable for discord.Embed
    """
    if isinstance(value, int):
        return value
    if not value:
        return default
    try:
        return int(str(value).lstrip("#"), 16)
    except ValueError:
        logger.warning(f"Invalid color value {value!r}, using default")
        return default
