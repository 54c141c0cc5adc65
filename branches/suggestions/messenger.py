"""
Suggestions Messenger
Posts, edits and reads suggestion messages through discord.py.

Any Discord failure is re-raised as ExternalPostError so the lifecycle never
has to know about discord exceptions.
"""

import discord
import logging
from typing import Dict

from .errors import ExternalPostError
from .helpers import build_embed
from .models import MessageRef
from .presentation import DisplayPayload

logger = logging.getLogger(__name__)

DISCORD_ERRORS = (discord.HTTPException, discord.InvalidData)


class DiscordMessenger:
    """Messaging collaborator backed by a discord.py client."""

    def __init__(self, bot: discord.Client, colors: Dict[str, int]):
        self.bot = bot
        self.colors = colors

    async def _resolve_channel(self, channel_id):
        if not channel_id:
            raise ExternalPostError("Suggestion channel is not configured.")

        channel = self.bot.get_channel(int(channel_id))
        if channel is None:
            try:
                channel = await self.bot.fetch_channel(int(channel_id))
            except DISCORD_ERRORS as e:
                raise ExternalPostError(f"Suggestion channel {channel_id} not found.") from e

        if not isinstance(channel, (discord.TextChannel, discord.Thread)):
            raise ExternalPostError(f"Channel {channel_id} can't hold suggestions.")
        return channel

    async def post_message(self, channel_id: int, payload: DisplayPayload) -> MessageRef:
        channel = await self._resolve_channel(channel_id)
        try:
            message = await channel.send(embed=build_embed(payload, self.colors))
        except DISCORD_ERRORS as e:
            logger.error(f"Failed to post suggestion to channel {channel_id}: {e}")
            raise ExternalPostError("Failed to post your suggestion. Please try again later.") from e

        return MessageRef(channel_id=str(message.channel.id), message_id=str(message.id))

    async def edit_message(self, ref: MessageRef, payload: DisplayPayload) -> None:
        channel = await self._resolve_channel(ref.channel_id)
        try:
            await channel.get_partial_message(int(ref.message_id)).edit(embed=build_embed(payload, self.colors))
        except DISCORD_ERRORS as e:
            raise ExternalPostError(f"Could not edit message {ref.message_id}: {e}") from e

    async def add_reaction(self, ref: MessageRef, symbol: str) -> None:
        channel = await self._resolve_channel(ref.channel_id)
        try:
            await channel.get_partial_message(int(ref.message_id)).add_reaction(symbol)
        except DISCORD_ERRORS as e:
            raise ExternalPostError(f"Could not react to message {ref.message_id}: {e}") from e

    async def fetch_reaction_counts(self, ref: MessageRef) -> Dict[str, int]:
        """Reaction counts per emoji, not counting the bot's own reaction."""
        channel = await self._resolve_channel(ref.channel_id)
        try:
            message = await channel.fetch_message(int(ref.message_id))
        except DISCORD_ERRORS as e:
            raise ExternalPostError(f"Could not fetch message {ref.message_id}: {e}") from e

        return {str(reaction.emoji): reaction.count - (1 if reaction.me else 0) for reaction in message.reactions}
