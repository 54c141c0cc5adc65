"""
Suggestions Branch
Handles user suggestions with reaction voting, review and paginated listings.

Structure:
- branch.py: Suggestions cog and its slash commands
- dispatcher.py: CommandDispatcher (actions, authorization, replies)
- lifecycle.py: SuggestionLifecycle (Pending -> Approved/Denied)
- store.py: SuggestionStore (SQLite persistence)
- presentation.py / navigation.py: payload rendering and paging
- messenger.py: DiscordMessenger (posting, editing, reactions)
- views.py / handlers.py: Discord buttons and interaction glue
"""

from .branch import Suggestions
from .store import SuggestionStore
from .views import NavigationButton

__all__ = ['Suggestions', 'SuggestionStore', 'NavigationButton', 'setup']

async def setup(bot):
    """Load the Suggestions branch."""
    await bot.add_cog(Suggestions(bot))
