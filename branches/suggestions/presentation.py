"""
Suggestions Presentation
Renders suggestions into DisplayPayloads.

Nothing here talks to Discord. helpers.build_embed turns a payload into a
discord.Embed when it is actually sent.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Tuple

from utils import truncate_text
from .models import Decision, Suggestion, SuggestionStatus, Votes
from .navigation import total_pages

LIST_CONTENT_MAX = 120
EMPTY_PAGE_TEXT = "No suggestions to show on this page."

STATUS_LABELS = {
    SuggestionStatus.PENDING: "🟡 Pending Review",
    SuggestionStatus.APPROVED: "✅ Approved",
    SuggestionStatus.DENIED: "❌ Denied",
}

UPVOTE = "👍"
DOWNVOTE = "👎"


@dataclass(frozen=True)
class PayloadField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class DisplayPayload:
    """Transport-agnostic rendering of a suggestion or a page of suggestions."""

    title: str
    description: Optional[str] = None
    fields: Tuple[PayloadField, ...] = ()
    footer: Optional[str] = None
    # One of "pending", "approved", "denied" or "neutral"; picks the embed color.
    tone: str = "neutral"
    timestamp: Optional[datetime] = None


def format_suggestion_id(suggestion_id: int) -> str:
    """'#007' style id, padded to three digits but never cut short."""
    return f"#{suggestion_id:03d}"


def status_label(status: SuggestionStatus) -> str:
    return STATUS_LABELS[SuggestionStatus(status)]


def render_submission_placeholder(author_display_name: str, content: str) -> DisplayPayload:
    """Card posted before the suggestion has an id."""
    return DisplayPayload(
        title="💡 New Suggestion",
        description=content,
        fields=(PayloadField("Status", status_label(SuggestionStatus.PENDING)),),
        footer=f"Suggested by {author_display_name}",
        tone="pending",
    )


def render_suggestion_card(
    suggestion: Suggestion,
    votes: Optional[Votes] = None,
    decision: Optional[Decision] = None,
    include_created: bool = False,
) -> DisplayPayload:
    fields = [PayloadField("Status", status_label(suggestion.status), inline=True)]

    if include_created:
        created = suggestion.created_at.strftime("%Y-%m-%d %H:%M:%S UTC") if suggestion.created_at else "Unknown"
        fields.append(PayloadField("Created At", created, inline=True))

    if votes is not None:
        fields.append(PayloadField("Votes", f"{UPVOTE} {votes.up} | {DOWNVOTE} {votes.down}", inline=True))

    if decision is not None:
        fields.append(PayloadField(f"{suggestion.status.value} by", decision.actor))
        fields.append(PayloadField("Reason", decision.reason))

    return DisplayPayload(
        title=f"💡 Suggestion {format_suggestion_id(suggestion.id)}",
        description=suggestion.content,
        fields=tuple(fields),
        footer=f"Suggested by {suggestion.author_display_name}",
        tone=suggestion.status.value.lower(),
        timestamp=suggestion.created_at,
    )


def render_page(rows: Sequence[Suggestion], page_index: int, page_size: int, filter_label: str) -> DisplayPayload:
    """
    Render one page of a listing.

    Args:
        rows: Every row matching the filter, already ordered
        page_index: Zero-based page to show
        page_size: Rows per page
        filter_label: Shown in the title, e.g. "Pending"

    Returns:
        Payload with one field per row and a "Page x/y • Showing n of m" footer
    """
    page_index = max(0, page_index)
    start = page_index * page_size
    page_rows = rows[start:start + page_size]

    fields = tuple(
        PayloadField(
            name=f"{format_suggestion_id(row.id)} — {row.status.value}",
            value=f"{truncate_text(row.content, LIST_CONTENT_MAX)}\n*by {row.author_display_name}*",
        )
        for row in page_rows
    )

    pages = total_pages(len(rows), page_size)
    return DisplayPayload(
        title=f"Suggestions — {filter_label}",
        description=None if page_rows else EMPTY_PAGE_TEXT,
        fields=fields,
        footer=f"Page {page_index + 1}/{pages} • Showing {len(page_rows)} of {len(rows)}",
    )
