"""
Best-effort call results.

Updates to the posted message (edits, reactions, vote counts) must never fail
the operation that triggered them. They run through attempt(), which turns an
ExternalPostError into a failed Outcome. The caller that inspects the Outcome
is the only place the error is dropped, and it logs it there.
"""

from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

from .errors import ExternalPostError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[ExternalPostError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def attempt(awaitable: Awaitable[T]) -> "Outcome[T]":
    """Await a messaging call, capturing platform failures instead of raising."""
    try:
        return Outcome(value=await awaitable)
    except ExternalPostError as e:
        return Outcome(error=e)
