"""
Suggestions Models
Data types shared by the store, lifecycle, presentation and dispatcher.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SuggestionStatus(str, Enum):
    """Lifecycle state of a suggestion. Approved and Denied are terminal."""

    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"

    @property
    def is_terminal(self) -> bool:
        return self is not SuggestionStatus.PENDING


class SuggestionFilter(str, Enum):
    """Status filter used by listings and navigation buttons."""

    ALL = "all"
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SuggestionFilter":
        """Parse user input, falling back to ALL for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL

    @property
    def status(self) -> Optional[SuggestionStatus]:
        """The status this filter restricts to, or None for ALL."""
        if self is SuggestionFilter.ALL:
            return None
        return SuggestionStatus(self.value.capitalize())

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class MessageRef:
    """Location of the rendered suggestion post on the messaging platform."""

    channel_id: str
    message_id: str


@dataclass(frozen=True)
class Suggestion:
    id: int
    author_id: str
    author_display_name: str
    content: str
    status: SuggestionStatus
    created_at: Optional[datetime]
    message_ref: Optional[MessageRef]


@dataclass(frozen=True)
class Votes:
    up: int = 0
    down: int = 0


@dataclass(frozen=True)
class Decision:
    """Who decided a suggestion and why. Rendered on the card, not stored."""

    actor: str
    reason: str
