"""Tests for SuggestionStore database operations."""

import sqlite3

import pytest

from branches.suggestions.errors import NotFoundError, StoreError
from branches.suggestions.models import MessageRef, SuggestionFilter, SuggestionStatus
from branches.suggestions.store import SuggestionStore
from database import get_db_connection

REF = MessageRef(channel_id="10", message_id="20")


async def seed(store, count, status=None):
    ids = []
    for i in range(count):
        suggestion_id = await store.create(f"user{i}", f"user{i}#0001", f"Idea number {i}", REF)
        if status is not None:
            await store.set_status(suggestion_id, status)
        ids.append(suggestion_id)
    return ids


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_assigns_increasing_ids(self, store):
        first = await store.create("1", "alice#0001", "Add dark mode", REF)
        second = await store.create("2", "bob#0002", "Add light mode", REF)

        assert second > first

    @pytest.mark.asyncio
    async def test_created_suggestion_is_pending(self, store):
        suggestion_id = await store.create("1", "alice#0001", "Add dark mode", REF)
        suggestion = await store.get(suggestion_id)

        assert suggestion.status is SuggestionStatus.PENDING
        assert suggestion.author_id == "1"
        assert suggestion.author_display_name == "alice#0001"
        assert suggestion.content == "Add dark mode"
        assert suggestion.message_ref == REF
        assert suggestion.created_at is not None

    @pytest.mark.asyncio
    async def test_create_raises_store_error_without_table(self, db_path):
        store = SuggestionStore(db_path)  # never initialized

        with pytest.raises(StoreError):
            await store.create("1", "alice#0001", "Add dark mode", REF)

    @pytest.mark.asyncio
    async def test_partial_message_ref_is_rejected_by_schema(self, store, db_path):
        conn = sqlite3.connect(db_path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO suggestions (author_id, author_tag, content, message_id) VALUES ('1', 'a', 'b', '5')"
                )
        finally:
            conn.close()


class TestSetStatus:
    @pytest.mark.asyncio
    async def test_set_status_changes_only_status(self, store):
        suggestion_id = await store.create("1", "alice#0001", "Add dark mode", REF)
        before = await store.get(suggestion_id)

        await store.set_status(suggestion_id, SuggestionStatus.APPROVED)
        after = await store.get(suggestion_id)

        assert after.status is SuggestionStatus.APPROVED
        assert after.content == before.content
        assert after.author_display_name == before.author_display_name
        assert after.created_at == before.created_at
        assert after.message_ref == before.message_ref

    @pytest.mark.asyncio
    async def test_set_status_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            await store.set_status(999, SuggestionStatus.DENIED)

    @pytest.mark.asyncio
    async def test_set_status_rejects_pending(self, store):
        suggestion_id = await store.create("1", "alice#0001", "Add dark mode", REF)

        with pytest.raises(ValueError):
            await store.set_status(suggestion_id, SuggestionStatus.PENDING)


class TestQueries:
    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, store):
        assert await store.get(12345) is None

    @pytest.mark.asyncio
    async def test_list_orders_newest_first(self, store):
        ids = await seed(store, 3)

        rows = await store.list(SuggestionFilter.ALL)

        assert [row.id for row in rows] == sorted(ids, reverse=True)

    @pytest.mark.asyncio
    async def test_list_filters_by_status(self, store):
        pending = await seed(store, 2)
        approved = await seed(store, 1, SuggestionStatus.APPROVED)
        denied = await seed(store, 1, SuggestionStatus.DENIED)

        assert [r.id for r in await store.list(SuggestionFilter.PENDING)] == sorted(pending, reverse=True)
        assert [r.id for r in await store.list(SuggestionFilter.APPROVED)] == approved
        assert [r.id for r in await store.list(SuggestionFilter.DENIED)] == denied
        assert len(await store.list(SuggestionFilter.ALL)) == 4

    @pytest.mark.asyncio
    async def test_list_limit_and_offset(self, store):
        ids = sorted(await seed(store, 6), reverse=True)

        rows = await store.list(SuggestionFilter.ALL, limit=2, offset=2)

        assert [row.id for row in rows] == ids[2:4]

    @pytest.mark.asyncio
    async def test_counts_on_empty_store(self, store):
        assert await store.count_all() == 0
        assert await store.count_by_status(SuggestionStatus.PENDING) == 0

    @pytest.mark.asyncio
    async def test_counts(self, store):
        await seed(store, 3)
        await seed(store, 2, SuggestionStatus.APPROVED)

        assert await store.count_all() == 5
        assert await store.count_by_status(SuggestionStatus.PENDING) == 3
        assert await store.count_by_status(SuggestionStatus.APPROVED) == 2
        assert await store.count_by_status(SuggestionStatus.DENIED) == 0


class TestConnection:
    @pytest.mark.asyncio
    async def test_rows_are_addressable_by_column(self, store, db_path):
        await store.create("1", "alice#0001", "Add dark mode", REF)

        async with get_db_connection(db_path) as db:
            cursor = await db.execute("SELECT id, content FROM suggestions")
            row = await cursor.fetchone()

        assert row["content"] == "Add dark mode"
        assert row["id"] == 1

    @pytest.mark.asyncio
    async def test_repeated_operations_each_open_a_connection(self, store):
        assert await store.count_all() == 0

        suggestion_id = await store.create("1", "alice#0001", "Add dark mode", REF)
        await store.set_status(suggestion_id, SuggestionStatus.DENIED)

        assert (await store.get(suggestion_id)).status is SuggestionStatus.DENIED
        assert [row.id for row in await store.list(SuggestionFilter.DENIED)] == [suggestion_id]
        assert await store.count_by_status(SuggestionStatus.DENIED) == 1
