"""Shared pytest fixtures for suggestion bot tests."""

from itertools import count
from typing import Dict, List, Tuple

import pytest
import pytest_asyncio

from branches.suggestions.dispatcher import Actor, CommandDispatcher
from branches.suggestions.errors import ExternalPostError
from branches.suggestions.lifecycle import SuggestionLifecycle
from branches.suggestions.models import MessageRef
from branches.suggestions.presentation import DisplayPayload
from branches.suggestions.store import SuggestionStore

CHANNEL_ID = 1234


class FakeMessenger:
    """In-memory stand-in for the Discord messenger.

    Each fail_* flag makes the matching call raise ExternalPostError.
    """

    def __init__(self):
        self._ids = count(1000)
        self.posts: Dict[str, DisplayPayload] = {}
        self.edits: List[Tuple[MessageRef, DisplayPayload]] = []
        self.reactions: List[Tuple[MessageRef, str]] = []
        self.reaction_counts: Dict[str, int] = {}
        self.fail_post = False
        self.fail_edit = False
        self.fail_react = False
        self.fail_fetch = False

    async def post_message(self, channel_id, payload):
        if self.fail_post:
            raise ExternalPostError("Suggestion channel not found.")
        ref = MessageRef(channel_id=str(channel_id), message_id=str(next(self._ids)))
        self.posts[ref.message_id] = payload
        return ref

    async def edit_message(self, ref, payload):
        if self.fail_edit:
            raise ExternalPostError("Unknown message")
        self.edits.append((ref, payload))
        self.posts[ref.message_id] = payload

    async def add_reaction(self, ref, symbol):
        if self.fail_react:
            raise ExternalPostError("Missing permissions")
        self.reactions.append((ref, symbol))

    async def fetch_reaction_counts(self, ref):
        if self.fail_fetch:
            raise ExternalPostError("Unknown message")
        return dict(self.reaction_counts)


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "suggestions.db")


@pytest_asyncio.fixture
async def store(db_path):
    """Initialized store on a temporary database."""
    store = SuggestionStore(db_path)
    await store.initialize()
    return store


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def lifecycle(store, messenger):
    return SuggestionLifecycle(store, messenger, CHANNEL_ID)


@pytest.fixture
def dispatcher(lifecycle):
    return CommandDispatcher(lifecycle, page_size=5)


@pytest.fixture
def member():
    return Actor(id="42", display_name="member#0001", can_manage=False)


@pytest.fixture
def moderator():
    return Actor(id="7", display_name="mod#0007", can_manage=True)
