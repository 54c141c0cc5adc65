"""
Database utility functions for branches.

Each branch manages its own database file.
This module provides helper functions for database operations.
"""
import aiosqlite
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

logger = logging.getLogger(__name__)


async def init_branch_database(db_path: str, schema: str, branch_name: str = "Branch", wal: bool = False) -> None:
    """
    Initialize a branch's database with the provided schema.

    Args:
        db_path: Path to the database file (e.g., "branches/suggestions/data.db")
        schema: SQL schema to execute (CREATE TABLE statements)
        branch_name: Name of the branch (for logging)
        wal: Switch the database to write-ahead logging
    """
    try:
        # Ensure parent directory exists
        db_file = Path(db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)

        async with aiosqlite.connect(db_path) as db:
            if wal:
                await db.execute("PRAGMA journal_mode = WAL")

            # Execute schema (can be multiple statements)
            await db.executescript(schema)
            await db.commit()
            logger.info(f"{branch_name} database initialized at {db_path}")
    except (aiosqlite.Error, OSError) as e:
        logger.error(f"Failed to initialize {branch_name} database: {e}")
        raise


@asynccontextmanager
async def get_db_connection(db_path: str) -> AsyncIterator[aiosqlite.Connection]:
    """
    Open a database connection for a branch with rows addressable by column name.

    Usage:
        async with get_db_connection(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM table")
            ...

    Args:
        db_path: Path to the database file

    Yields:
        aiosqlite.Connection using sqlite3.Row rows, closed on exit
    """
    async with aiosqlite.connect(db_path) as db:
        # Only settable once the connection thread is running
        db.row_factory = aiosqlite.Row
        yield db
