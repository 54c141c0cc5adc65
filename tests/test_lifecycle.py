"""Tests for the suggestion lifecycle (submit and review)."""

import pytest

from branches.suggestions.errors import (
    ExternalPostError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from branches.suggestions.lifecycle import SuggestionLifecycle
from branches.suggestions.models import SuggestionStatus, Votes
from branches.suggestions.presentation import DOWNVOTE, UPVOTE


class TestSubmit:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t ", "\x00"])
    async def test_blank_content_is_rejected(self, lifecycle, store, messenger, content):
        with pytest.raises(ValidationError):
            await lifecycle.submit("42", "member#0001", content)

        assert await store.count_all() == 0
        assert messenger.posts == {}

    @pytest.mark.asyncio
    async def test_submit_round_trip(self, lifecycle):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")

        assert suggestion.status is SuggestionStatus.PENDING
        assert suggestion.content == "Add dark mode"
        pending = await lifecycle.list_by_filter("pending")
        assert suggestion.id in [row.id for row in pending]

    @pytest.mark.asyncio
    async def test_submit_trims_content(self, lifecycle):
        suggestion = await lifecycle.submit("42", "member#0001", "  Add dark mode  ")

        assert suggestion.content == "Add dark mode"

    @pytest.mark.asyncio
    async def test_submit_posts_reacts_and_finalizes_card(self, lifecycle, messenger):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")

        assert suggestion.message_ref is not None
        assert [symbol for _, symbol in messenger.reactions] == [UPVOTE, DOWNVOTE]
        final_ref, final_payload = messenger.edits[-1]
        assert final_ref == suggestion.message_ref
        assert final_payload.title == f"💡 Suggestion #{suggestion.id:03d}"

    @pytest.mark.asyncio
    async def test_failed_post_creates_no_record(self, lifecycle, store, messenger):
        messenger.fail_post = True

        with pytest.raises(ExternalPostError):
            await lifecycle.submit("42", "member#0001", "Add dark mode")

        assert await store.count_all() == 0

    @pytest.mark.asyncio
    async def test_reaction_and_edit_failures_are_not_fatal(self, lifecycle, store, messenger):
        messenger.fail_react = True
        messenger.fail_edit = True

        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")

        assert await store.get(suggestion.id) is not None

    @pytest.mark.asyncio
    async def test_length_limits(self, store, messenger):
        lifecycle = SuggestionLifecycle(store, messenger, 1, min_length=5, max_length=10)

        with pytest.raises(ValidationError):
            await lifecycle.submit("42", "member#0001", "tiny")
        with pytest.raises(ValidationError):
            await lifecycle.submit("42", "member#0001", "far too long for this")

        assert await store.count_all() == 0


class TestDecide:
    @pytest.mark.asyncio
    async def test_approve_pending(self, lifecycle):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")

        decided = await lifecycle.decide(suggestion.id, SuggestionStatus.APPROVED, "mod#0007", "Great idea")

        assert decided.status is SuggestionStatus.APPROVED
        assert (await lifecycle.get_by_id(suggestion.id)).status is SuggestionStatus.APPROVED
        assert suggestion.id not in [r.id for r in await lifecycle.list_by_filter("pending")]
        assert suggestion.id in [r.id for r in await lifecycle.list_by_filter("approved")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("first", [SuggestionStatus.APPROVED, SuggestionStatus.DENIED])
    @pytest.mark.parametrize("second", [SuggestionStatus.APPROVED, SuggestionStatus.DENIED])
    async def test_second_decision_is_rejected(self, lifecycle, first, second):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")
        await lifecycle.decide(suggestion.id, first, "mod#0007")

        with pytest.raises(InvalidTransitionError):
            await lifecycle.decide(suggestion.id, second, "mod#0007")

        assert (await lifecycle.get_by_id(suggestion.id)).status is first

    @pytest.mark.asyncio
    async def test_decide_to_pending_is_rejected(self, lifecycle):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")

        with pytest.raises(InvalidTransitionError):
            await lifecycle.decide(suggestion.id, SuggestionStatus.PENDING, "mod#0007")

    @pytest.mark.asyncio
    async def test_decide_unknown_id(self, lifecycle):
        with pytest.raises(NotFoundError):
            await lifecycle.deny(404, "mod#0007")

    @pytest.mark.asyncio
    async def test_decision_is_rendered_on_post(self, lifecycle, messenger):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")

        await lifecycle.deny(suggestion.id, "mod#0007")

        _, payload = messenger.edits[-1]
        fields = {field.name: field.value for field in payload.fields}
        assert fields["Status"] == "❌ Denied"
        assert fields["Denied by"] == "mod#0007"
        assert fields["Reason"] == "No reason provided"

    @pytest.mark.asyncio
    async def test_edit_failure_keeps_persisted_status(self, lifecycle, messenger):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")
        messenger.fail_edit = True

        decided = await lifecycle.approve(suggestion.id, "mod#0007")

        assert decided.status is SuggestionStatus.APPROVED


class TestReads:
    @pytest.mark.asyncio
    async def test_unknown_filter_lists_everything(self, lifecycle):
        first = await lifecycle.submit("42", "member#0001", "Add dark mode")
        second = await lifecycle.submit("42", "member#0001", "Add light mode")
        await lifecycle.approve(second.id, "mod#0007")

        rows = await lifecycle.list_by_filter("bogus")

        assert [row.id for row in rows] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_get_by_id_unknown(self, lifecycle):
        with pytest.raises(NotFoundError):
            await lifecycle.get_by_id(77)

    @pytest.mark.asyncio
    async def test_fetch_votes(self, lifecycle, messenger):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")
        messenger.reaction_counts = {UPVOTE: 3, DOWNVOTE: 1, "🎉": 2}

        assert await lifecycle.fetch_votes(suggestion) == Votes(up=3, down=1)

    @pytest.mark.asyncio
    async def test_fetch_votes_failure_returns_none(self, lifecycle, messenger):
        suggestion = await lifecycle.submit("42", "member#0001", "Add dark mode")
        messenger.fail_fetch = True

        assert await lifecycle.fetch_votes(suggestion) is None
