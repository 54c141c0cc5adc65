"""
Suggestions Dispatcher
Routes user actions to the lifecycle and renders the reply.

Every action has exactly one handler. Authorization happens here, before the
lifecycle is touched, so a rejected action never changes state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .errors import AuthorizationError, StoreError, SuggestionError
from .lifecycle import SuggestionLifecycle
from .models import SuggestionFilter, SuggestionStatus
from .navigation import NavigationState, PageControls, clamp_page, page_controls, step_page
from .presentation import DisplayPayload, format_suggestion_id, render_page, render_suggestion_card

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    "submitted": "✅ Suggestion posted as {id}",
    "approved": "✅ {id} marked Approved",
    "denied": "❌ {id} marked Denied",
    "no_permission": "You need Manage Server permission.",
    "store_error": "Something went wrong while saving. Please try again later.",
    "generic_error": "An error occurred.",
}


class Action(Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    DENY = "deny"
    LIST = "list"
    SHOW = "show"
    NAVIGATE = "navigate"


@dataclass(frozen=True)
class Actor:
    id: str
    display_name: str
    can_manage: bool = False


@dataclass(frozen=True)
class Command:
    action: Action
    actor: Actor
    content: Optional[str] = None
    suggestion_id: Optional[int] = None
    reason: Optional[str] = None
    filter: Optional[str] = None
    navigation: Optional[NavigationState] = None


@dataclass(frozen=True)
class Reply:
    content: Optional[str] = None
    payload: Optional[DisplayPayload] = None
    controls: Optional[PageControls] = None
    ephemeral: bool = True


class CommandDispatcher:
    """Maps commands to lifecycle calls and rendered replies."""

    def __init__(
        self,
        lifecycle: SuggestionLifecycle,
        page_size: int = 5,
        max_rows: int = 1000,
        messages: Optional[Dict[str, str]] = None,
    ):
        self.lifecycle = lifecycle
        self.page_size = max(1, page_size)
        self.max_rows = max_rows
        self.messages = {**DEFAULT_MESSAGES, **(messages or {})}

        self._handlers = {
            Action.SUBMIT: self._submit,
            Action.APPROVE: self._approve,
            Action.DENY: self._deny,
            Action.LIST: self._list,
            Action.SHOW: self._show,
            Action.NAVIGATE: self._navigate,
        }
        missing = set(Action) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for actions: {', '.join(a.value for a in missing)}")

    async def dispatch(self, command: Command) -> Reply:
        """Run a command. Never raises; failures become an error reply."""
        handler = self._handlers[command.action]
        try:
            return await handler(command)
        except StoreError as e:
            logger.error(f"Store failure during {command.action.value} by {command.actor.display_name}: {e}")
            return self._error(self.messages["store_error"])
        except SuggestionError as e:
            logger.info(f"{command.action.value} by {command.actor.display_name} rejected: {e}")
            return self._error(str(e))
        except Exception:
            logger.exception(f"Unexpected error during {command.action.value} by {command.actor.display_name}")
            return self._error(self.messages["generic_error"])

    @staticmethod
    def _error(message: str) -> Reply:
        return Reply(content=f"❌ {message}", ephemeral=True)

    async def _submit(self, command: Command) -> Reply:
        suggestion = await self.lifecycle.submit(command.actor.id, command.actor.display_name, command.content or "")
        return Reply(content=self.messages["submitted"].format(id=format_suggestion_id(suggestion.id)))

    async def _approve(self, command: Command) -> Reply:
        return await self._decide(command, SuggestionStatus.APPROVED, "approved")

    async def _deny(self, command: Command) -> Reply:
        return await self._decide(command, SuggestionStatus.DENIED, "denied")

    async def _decide(self, command: Command, status: SuggestionStatus, message_key: str) -> Reply:
        if not command.actor.can_manage:
            raise AuthorizationError(self.messages["no_permission"])

        suggestion = await self.lifecycle.decide(command.suggestion_id, status, command.actor.display_name, command.reason)
        return Reply(content=self.messages[message_key].format(id=format_suggestion_id(suggestion.id)))

    async def _list(self, command: Command) -> Reply:
        return await self._render_listing(SuggestionFilter.parse(command.filter), 0)

    async def _show(self, command: Command) -> Reply:
        suggestion = await self.lifecycle.get_by_id(command.suggestion_id)
        votes = await self.lifecycle.fetch_votes(suggestion)
        payload = render_suggestion_card(suggestion, votes=votes, include_created=True)
        return Reply(payload=payload, ephemeral=False)

    async def _navigate(self, command: Command) -> Reply:
        state = command.navigation
        rows = await self.lifecycle.list_by_filter(state.filter, self.max_rows)
        page = step_page(state.page, state.direction, len(rows), self.page_size)
        return self._page_reply(rows, page, state.filter)

    async def _render_listing(self, suggestion_filter: SuggestionFilter, page: int) -> Reply:
        rows = await self.lifecycle.list_by_filter(suggestion_filter, self.max_rows)
        return self._page_reply(rows, clamp_page(page, len(rows), self.page_size), suggestion_filter)

    def _page_reply(self, rows, page: int, suggestion_filter: SuggestionFilter) -> Reply:
        payload = render_page(rows, page, self.page_size, suggestion_filter.label)
        controls = page_controls(page, len(rows), self.page_size, suggestion_filter)
        return Reply(payload=payload, controls=controls, ephemeral=False)
