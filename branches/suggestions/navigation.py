"""
Suggestions Navigation
Pagination math and the state carried by the Previous/Next buttons.

The buttons encode their state as "action|page|filter" in the custom id, so
paging needs no server-side session. The string is parsed into a
NavigationState as soon as an interaction arrives.
"""

import math
from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError
from .models import SuggestionFilter


class NavDirection(str, Enum):
    PREV = "prev"
    NEXT = "next"


def total_pages(total_rows: int, page_size: int) -> int:
    """Number of pages for a row count, never less than one."""
    return max(1, math.ceil(total_rows / page_size))


def clamp_page(page: int, total_rows: int, page_size: int) -> int:
    return min(max(0, page), total_pages(total_rows, page_size) - 1)


def step_page(page: int, direction: NavDirection, total_rows: int, page_size: int) -> int:
    """Move one page in a direction, staying within the first and last page."""
    delta = -1 if direction is NavDirection.PREV else 1
    return clamp_page(page + delta, total_rows, page_size)


@dataclass(frozen=True)
class NavigationState:
    direction: NavDirection
    page: int
    filter: SuggestionFilter

    def encode(self) -> str:
        return f"{self.direction.value}|{self.page}|{self.filter.value}"

    @classmethod
    def parse(cls, raw: str) -> "NavigationState":
        """
        Parse an encoded button id.

        A missing or malformed page falls back to 0 and an unknown filter to "all".
        An unknown action is rejected.
        """
        parts = (raw or "").split("|")
        try:
            direction = NavDirection(parts[0])
        except ValueError:
            raise ValidationError(f"Unknown navigation action: {parts[0]!r}")

        try:
            page = max(0, int(parts[1])) if len(parts) > 1 else 0
        except ValueError:
            page = 0

        suggestion_filter = SuggestionFilter.parse(parts[2] if len(parts) > 2 else None)
        return cls(direction=direction, page=page, filter=suggestion_filter)


@dataclass(frozen=True)
class PageControls:
    """Previous/Next button state for a rendered page."""

    page: int
    filter: SuggestionFilter
    prev_disabled: bool
    next_disabled: bool

    @property
    def prev_state(self) -> NavigationState:
        return NavigationState(NavDirection.PREV, self.page, self.filter)

    @property
    def next_state(self) -> NavigationState:
        return NavigationState(NavDirection.NEXT, self.page, self.filter)


def page_controls(page: int, total_rows: int, page_size: int, suggestion_filter: SuggestionFilter) -> PageControls:
    return PageControls(
        page=page,
        filter=suggestion_filter,
        prev_disabled=page == 0,
        next_disabled=(page + 1) * page_size >= total_rows,
    )
