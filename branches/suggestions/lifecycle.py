"""
Suggestions Lifecycle
Submission and review of suggestions: Pending -> Approved | Denied.

The lifecycle owns the transition rules and coordinates the store with the
messaging platform. The messenger is any object providing:

    async post_message(channel_id, payload) -> MessageRef
    async edit_message(ref, payload) -> None
    async add_reaction(ref, symbol) -> None
    async fetch_reaction_counts(ref) -> Dict[str, int]

and raising ExternalPostError when the platform fails.
"""

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from utils import sanitize_text
from .errors import InvalidTransitionError, NotFoundError, ValidationError
from .models import Decision, MessageRef, Suggestion, SuggestionFilter, SuggestionStatus, Votes
from .outcome import attempt
from .presentation import (
    DOWNVOTE,
    UPVOTE,
    DisplayPayload,
    format_suggestion_id,
    render_submission_placeholder,
    render_suggestion_card,
)
from .store import SuggestionStore

logger = logging.getLogger(__name__)

DEFAULT_REASON = "No reason provided"


class Messenger(Protocol):
    async def post_message(self, channel_id: int, payload: DisplayPayload) -> MessageRef: ...

    async def edit_message(self, ref: MessageRef, payload: DisplayPayload) -> None: ...

    async def add_reaction(self, ref: MessageRef, symbol: str) -> None: ...

    async def fetch_reaction_counts(self, ref: MessageRef) -> Dict[str, int]: ...


class SuggestionLifecycle:
    """Enforces the suggestion state machine."""

    def __init__(
        self,
        store: SuggestionStore,
        messenger: Messenger,
        channel_id: int,
        min_length: int = 1,
        max_length: int = 4000,
        vote_symbols: Sequence[str] = (UPVOTE, DOWNVOTE),
    ):
        self.store = store
        self.messenger = messenger
        self.channel_id = channel_id
        self.min_length = max(1, min_length)
        self.max_length = max_length
        self.vote_symbols = tuple(vote_symbols)

    async def submit(self, author_id: str, author_display_name: str, content: str) -> Suggestion:
        """
        Post a new suggestion and record it.

        The post happens first: if it fails, ExternalPostError propagates and
        nothing is stored. A crash between posting and storing leaves a post
        without a record; the author simply submits again.
        """
        content = sanitize_text(content)
        if not content:
            raise ValidationError("Your suggestion was empty.")
        if len(content) < self.min_length:
            raise ValidationError(
                f"Your suggestion is too short. Please provide more detail (at least {self.min_length} characters)."
            )
        if len(content) > self.max_length:
            raise ValidationError(f"Your suggestion is too long (maximum {self.max_length} characters).")

        ref = await self.messenger.post_message(self.channel_id, render_submission_placeholder(author_display_name, content))

        for symbol in self.vote_symbols:
            outcome = await attempt(self.messenger.add_reaction(ref, symbol))
            if not outcome.ok:
                logger.warning(f"Could not add {symbol} to message {ref.message_id}: {outcome.error}")

        suggestion_id = await self.store.create(author_id, author_display_name, content, ref)
        suggestion = await self.get_by_id(suggestion_id)

        outcome = await attempt(self.messenger.edit_message(ref, render_suggestion_card(suggestion)))
        if not outcome.ok:
            logger.warning(f"Could not finalize post for {format_suggestion_id(suggestion_id)}: {outcome.error}")

        logger.info(f"New suggestion {format_suggestion_id(suggestion_id)} from {author_display_name} (ID: {author_id})")
        return suggestion

    async def decide(
        self,
        suggestion_id: int,
        new_status: SuggestionStatus,
        actor: str,
        reason: Optional[str] = None,
    ) -> Suggestion:
        """Move a Pending suggestion to Approved or Denied."""
        new_status = SuggestionStatus(new_status)
        current = await self.get_by_id(suggestion_id)

        if current.status.is_terminal or not new_status.is_terminal:
            raise InvalidTransitionError(suggestion_id, current.status.value, new_status.value)

        await self.store.set_status(suggestion_id, new_status)
        suggestion = await self.get_by_id(suggestion_id)
        logger.info(f"{format_suggestion_id(suggestion_id)} marked {new_status.value} by {actor}")

        if suggestion.message_ref is not None:
            decision = Decision(actor=actor, reason=(reason or "").strip() or DEFAULT_REASON)
            payload = render_suggestion_card(suggestion, decision=decision)
            outcome = await attempt(self.messenger.edit_message(suggestion.message_ref, payload))
            if not outcome.ok:
                logger.warning(f"Could not edit message for {format_suggestion_id(suggestion_id)}: {outcome.error}")

        return suggestion

    async def approve(self, suggestion_id: int, actor: str, reason: Optional[str] = None) -> Suggestion:
        return await self.decide(suggestion_id, SuggestionStatus.APPROVED, actor, reason)

    async def deny(self, suggestion_id: int, actor: str, reason: Optional[str] = None) -> Suggestion:
        return await self.decide(suggestion_id, SuggestionStatus.DENIED, actor, reason)

    async def get_by_id(self, suggestion_id: int) -> Suggestion:
        suggestion = await self.store.get(suggestion_id)
        if suggestion is None:
            raise NotFoundError(suggestion_id)
        return suggestion

    async def list_by_filter(self, filter, max_rows: int = 1000) -> List[Suggestion]:
        """List suggestions for a filter; unrecognized filters list everything."""
        return await self.store.list(SuggestionFilter.parse(filter), limit=max_rows, offset=0)

    async def fetch_votes(self, suggestion: Suggestion) -> Optional[Votes]:
        """Current reaction counts, or None if they can't be read."""
        if suggestion.message_ref is None:
            return None

        outcome = await attempt(self.messenger.fetch_reaction_counts(suggestion.message_ref))
        if not outcome.ok:
            logger.warning(f"Could not fetch votes for {format_suggestion_id(suggestion.id)}: {outcome.error}")
            return None

        counts = outcome.value or {}
        return Votes(up=counts.get(UPVOTE, 0), down=counts.get(DOWNVOTE, 0))
