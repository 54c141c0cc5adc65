"""
Suggestions Errors
Exceptions raised by the store, the lifecycle and the dispatcher.

The message of each error is safe to show to the user who triggered it.
"""


class SuggestionError(Exception):
    """Base class for all suggestion errors."""


class ValidationError(SuggestionError):
    """Input was rejected before any state change (e.g. empty content)."""


class AuthorizationError(SuggestionError):
    """The actor lacks the capability required for the action."""


class NotFoundError(SuggestionError):
    """No suggestion exists with the requested id."""

    def __init__(self, suggestion_id: int):
        super().__init__(f"Suggestion #{suggestion_id:03d} not found.")
        self.suggestion_id = suggestion_id


class InvalidTransitionError(SuggestionError):
    """A status change was requested from a non-Pending suggestion."""

    def __init__(self, suggestion_id: int, current: str, target: str):
        super().__init__(f"Suggestion #{suggestion_id:03d} is already {current} and can't be marked {target}.")
        self.suggestion_id = suggestion_id
        self.current = current
        self.target = target


class ExternalPostError(SuggestionError):
    """The messaging platform was unreachable or rejected the request."""


class StoreError(SuggestionError):
    """The underlying database failed."""
