"""
SQLite-backed message store.

The message lives in row ``id = 1`` of the ``messages`` table.  Writes
are a single upsert statement, so a reader either sees the previous
message or the new one.  Concurrent writers are not coordinated: the last
committed write wins unless the caller passes ``expected_version``.

Every ``sqlite3`` or filesystem error is re-raised as
``StorageUnavailable`` carrying the driver's message.
"""

import logging
import os
import sqlite3
from typing import Optional

from message_board.app.core.db import apply_migrations, get_cursor
from message_board.app.core.errors import MessageNotFound, StorageUnavailable, VersionConflict
from message_board.app.storage.base import DEFAULT_MESSAGE, MESSAGE_ID, Message, MessageStore

logger = logging.getLogger(__name__)


class SQLiteMessageStore(MessageStore):
    """Store the message in a SQLite database file."""

    def __init__(self, database_path: str, default_message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(default_message)
        self.database_path = str(database_path)

    async def initialize(self) -> None:
        """Create the database file and schema, then insert the default message.

        The default row is inserted with ``INSERT OR IGNORE`` so an existing
        message is never replaced.
        """
        try:
            directory = os.path.dirname(self.database_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with get_cursor(self.database_path) as cursor:
                schema_version = apply_migrations(cursor)
                logger.info("Connected to the SQLite database at %s (schema v%d)", self.database_path, schema_version)
                cursor.execute(
                    "INSERT OR IGNORE INTO messages (id, content) VALUES (?, ?)",
                    (MESSAGE_ID, self.default_message),
                )
                if cursor.rowcount == 1:
                    logger.info('Default message "%s" inserted.', self.default_message)
                else:
                    logger.info("Messages table already contains data. No default message inserted.")
        except (sqlite3.Error, OSError) as exc:
            logger.error("Error initializing message database at %s: %s", self.database_path, exc)
            raise StorageUnavailable(f"Failed to initialize database: {exc}") from exc

    async def get_current(self) -> Message:
        try:
            with get_cursor(self.database_path) as cursor:
                row = cursor.execute(
                    "SELECT content, version FROM messages WHERE id = ?", (MESSAGE_ID,)
                ).fetchone()
        except sqlite3.OperationalError as exc:
            if "no such table" in str(exc):
                raise MessageNotFound(f"Messages table does not exist. Database was never initialized: {exc}") from exc
            logger.error("Database error fetching message: %s", exc)
            raise StorageUnavailable(str(exc)) from exc
        except sqlite3.Error as exc:
            logger.error("Database error fetching message: %s", exc)
            raise StorageUnavailable(str(exc)) from exc
        if row is None:
            raise MessageNotFound(
                f"No message found with ID {MESSAGE_ID}. Database might be uninitialized or corrupted."
            )
        return Message(content=row["content"], version=row["version"])

    async def set_current(self, value: str, expected_version: Optional[int] = None) -> Message:
        updated = True
        try:
            with get_cursor(self.database_path) as cursor:
                if expected_version is None:
                    cursor.execute(
                        "INSERT INTO messages (id, content, version, updated_at) VALUES (?, ?, 1, CURRENT_TIMESTAMP)"
                        " ON CONFLICT(id) DO UPDATE SET content = excluded.content,"
                        " version = messages.version + 1, updated_at = CURRENT_TIMESTAMP",
                        (MESSAGE_ID, value),
                    )
                else:
                    cursor.execute(
                        "UPDATE messages SET content = ?, version = version + 1, updated_at = CURRENT_TIMESTAMP"
                        " WHERE id = ? AND version = ?",
                        (value, MESSAGE_ID, expected_version),
                    )
                    updated = cursor.rowcount == 1
                row = cursor.execute("SELECT version FROM messages WHERE id = ?", (MESSAGE_ID,)).fetchone()
                if expected_version is not None and not updated:
                    raise VersionConflict(expected_version, row["version"] if row else 0)
        except sqlite3.Error as exc:
            logger.error("Database error updating message: %s", exc)
            raise StorageUnavailable(str(exc)) from exc
        logger.info("Message with ID %d updated to version %d.", MESSAGE_ID, row["version"])
        return Message(content=value, version=row["version"])
