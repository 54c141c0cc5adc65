"""
Suggestions Views
Handles Discord UI components (buttons, views) for the suggestions system.
"""

import discord
from discord import ui, Interaction
import logging

from .navigation import NavDirection, NavigationState, PageControls

logger = logging.getLogger(__name__)

BUTTON_LABELS = {
    NavDirection.PREV: "Previous",
    NavDirection.NEXT: "Next",
}


class NavigationButton(ui.DynamicItem[ui.Button], template=r"(?P<action>prev|next)\|(?P<page>\d+)\|(?P<filter>[a-z]+)"):
    """
    Previous/Next button for suggestion listings.

    The page and filter live in the custom id, so the button keeps working
    after a restart once registered with bot.add_dynamic_items().
    """

    def __init__(self, state: NavigationState, disabled: bool = False):
        super().__init__(
            ui.Button(
                label=BUTTON_LABELS[state.direction],
                style=discord.ButtonStyle.secondary,
                custom_id=state.encode(),
                disabled=disabled,
            )
        )
        self.state = state

    @classmethod
    async def from_custom_id(cls, interaction: Interaction, item: ui.Button, match, /):
        return cls(NavigationState.parse(item.custom_id), disabled=item.disabled)

    async def callback(self, interaction: Interaction):
        """Handle previous/next click."""
        from .handlers import handle_navigation
        await handle_navigation(interaction, self.state)


class PaginationView(ui.View):
    """Previous/Next buttons under a suggestion listing."""

    def __init__(self, controls: PageControls):
        super().__init__(timeout=None)
        self.add_item(NavigationButton(controls.prev_state, disabled=controls.prev_disabled))
        self.add_item(NavigationButton(controls.next_state, disabled=controls.next_disabled))

        # Clicks are routed by the registered NavigationButton, so a finished
        # view is sent without being kept in the client's view store
        self.stop()
