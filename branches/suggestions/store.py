"""
Suggestions Store
Persistence for suggestions. One SQLite table, accessed through aiosqlite.

The store only guarantees unique ids and never touches fields it wasn't asked
to change. Status transition rules live in the lifecycle.
"""

import aiosqlite
import logging
from datetime import datetime, timezone
from typing import List, Optional

from database import get_db_connection, init_branch_database
from .errors import NotFoundError, StoreError
from .models import MessageRef, Suggestion, SuggestionFilter, SuggestionStatus

logger = logging.getLogger(__name__)


# Database schema for suggestions
SUGGESTIONS_SCHEMA = """
CREATE TABLE IF NOT EXISTS suggestions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    author_id TEXT NOT NULL,
    author_tag TEXT NOT NULL,
    content TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'Pending',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    message_id TEXT,
    channel_id TEXT,
    CHECK ((message_id IS NULL) = (channel_id IS NULL))
);
"""

_COLUMNS = "id, author_id, author_tag, content, status, created_at, channel_id, message_id"


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        logger.warning(f"Unparseable created_at value: {value!r}")
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _row_to_suggestion(row) -> Suggestion:
    message_ref = None
    if row["channel_id"] is not None and row["message_id"] is not None:
        message_ref = MessageRef(channel_id=str(row["channel_id"]), message_id=str(row["message_id"]))

    return Suggestion(
        id=row["id"],
        author_id=row["author_id"],
        author_display_name=row["author_tag"],
        content=row["content"],
        status=SuggestionStatus(row["status"]),
        created_at=_parse_timestamp(row["created_at"]),
        message_ref=message_ref,
    )


class SuggestionStore:
    """Data access for the suggestions table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    async def initialize(self) -> None:
        """Create the table if needed."""
        try:
            await init_branch_database(self.db_path, SUGGESTIONS_SCHEMA, "Suggestions", wal=True)
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Could not initialize suggestions database: {e}") from e

    async def create(self, author_id: str, author_display_name: str, content: str, message_ref: MessageRef) -> int:
        """Insert a new Pending suggestion and return its id."""
        try:
            async with get_db_connection(self.db_path) as db:
                cursor = await db.execute(
                    "INSERT INTO suggestions (author_id, author_tag, content, status, message_id, channel_id) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        str(author_id), author_display_name, content, SuggestionStatus.PENDING.value,
                        str(message_ref.message_id), str(message_ref.channel_id),
                    ),
                )
                await db.commit()
                suggestion_id = cursor.lastrowid
        except aiosqlite.Error as e:
            logger.error(f"Failed to insert suggestion from {author_display_name}: {e}")
            raise StoreError("Could not save the suggestion.") from e

        logger.info(f"Stored suggestion #{suggestion_id:03d} from {author_display_name} (ID: {author_id})")
        return suggestion_id

    async def set_status(self, suggestion_id: int, status: SuggestionStatus) -> None:
        """Set the status of an existing suggestion to Approved or Denied."""
        status = SuggestionStatus(status)
        if not status.is_terminal:
            raise ValueError(f"Can't set status to {status.value}")

        try:
            async with get_db_connection(self.db_path) as db:
                cursor = await db.execute(
                    "UPDATE suggestions SET status = ? WHERE id = ?",
                    (status.value, suggestion_id),
                )
                await db.commit()
                updated = cursor.rowcount
        except aiosqlite.Error as e:
            logger.error(f"Failed to update status of suggestion {suggestion_id}: {e}")
            raise StoreError("Could not update the suggestion.") from e

        if updated == 0:
            raise NotFoundError(suggestion_id)

    async def get(self, suggestion_id: int) -> Optional[Suggestion]:
        try:
            async with get_db_connection(self.db_path) as db:
                cursor = await db.execute(f"SELECT {_COLUMNS} FROM suggestions WHERE id = ?", (suggestion_id,))
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error(f"Failed to fetch suggestion {suggestion_id}: {e}")
            raise StoreError("Could not load the suggestion.") from e

        return _row_to_suggestion(row) if row else None

    async def list(self, filter: SuggestionFilter = SuggestionFilter.ALL, limit: int = 1000, offset: int = 0) -> List[Suggestion]:
        """List suggestions, most recent first."""
        status = SuggestionFilter.parse(filter).status
        try:
            async with get_db_connection(self.db_path) as db:
                if status is None:
                    cursor = await db.execute(
                        f"SELECT {_COLUMNS} FROM suggestions ORDER BY id DESC LIMIT ? OFFSET ?",
                        (limit, offset),
                    )
                else:
                    cursor = await db.execute(
                        f"SELECT {_COLUMNS} FROM suggestions WHERE status = ? ORDER BY id DESC LIMIT ? OFFSET ?",
                        (status.value, limit, offset),
                    )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error(f"Failed to list suggestions: {e}")
            raise StoreError("Could not load suggestions.") from e

        return [_row_to_suggestion(row) for row in rows]

    async def count_all(self) -> int:
        return await self._count("SELECT COUNT(*) FROM suggestions", ())

    async def count_by_status(self, status: SuggestionStatus) -> int:
        status = SuggestionStatus(status)
        return await self._count("SELECT COUNT(*) FROM suggestions WHERE status = ?", (status.value,))

    async def _count(self, query: str, params: tuple) -> int:
        try:
            async with get_db_connection(self.db_path) as db:
                cursor = await db.execute(query, params)
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error(f"Failed to count suggestions: {e}")
            raise StoreError("Could not count suggestions.") from e

        return row[0] if row else 0
