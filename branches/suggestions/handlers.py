"""
Suggestions Handlers
Bridges Discord interactions to the command dispatcher.
"""

import discord
from discord import Interaction
import logging
from typing import Iterable

from constants import truncate_for_message
from .dispatcher import Action, Actor, Command, Reply
from .helpers import build_embed
from .navigation import NavigationState
from .views import PaginationView

logger = logging.getLogger(__name__)


def actor_from_interaction(interaction: Interaction, manager_role_ids: Iterable[int] = ()) -> Actor:
    """
    Build an Actor for the user behind an interaction.

    Managing suggestions requires the Manage Server permission or one of the
    configured manager roles.
    """
    user = interaction.user
    can_manage = bool(interaction.permissions and interaction.permissions.manage_guild)

    manager_role_ids = set(manager_role_ids)
    if not can_manage and manager_role_ids and isinstance(user, discord.Member):
        can_manage = any(role.id in manager_role_ids for role in user.roles)

    return Actor(id=str(user.id), display_name=str(user), can_manage=can_manage)


def reply_kwargs(reply: Reply, colors) -> dict:
    kwargs = {}
    if reply.content:
        kwargs["content"] = truncate_for_message(reply.content)
    if reply.payload is not None:
        kwargs["embed"] = build_embed(reply.payload, colors)
    if reply.controls is not None:
        kwargs["view"] = PaginationView(reply.controls)
    return kwargs


async def send_reply(interaction: Interaction, reply: Reply, colors) -> None:
    """Send a dispatcher reply, whether or not the interaction was deferred."""
    kwargs = reply_kwargs(reply, colors)
    if interaction.response.is_done():
        await interaction.followup.send(ephemeral=reply.ephemeral, **kwargs)
    else:
        await interaction.response.send_message(ephemeral=reply.ephemeral, **kwargs)


async def handle_navigation(interaction: Interaction, state: NavigationState):
    """
    Handle a previous/next click on a listing.

    Args:
        interaction: Discord interaction from the button click
        state: Parsed page and filter carried by the button
    """
    cog = interaction.client.get_cog("Suggestions")
    if cog is None:
        await interaction.response.send_message("Suggestions are currently unavailable.", ephemeral=True)
        return

    command = Command(
        action=Action.NAVIGATE,
        actor=actor_from_interaction(interaction, cog.manager_role_ids),
        navigation=state,
    )
    reply = await cog.dispatcher.dispatch(command)

    try:
        if reply.payload is None:
            await send_reply(interaction, reply, cog.colors)
            return

        kwargs = reply_kwargs(reply, cog.colors)
        kwargs.pop("content", None)
        await interaction.response.edit_message(**kwargs)
    except discord.HTTPException as e:
        logger.error(f"Failed to update suggestion listing: {e}")
