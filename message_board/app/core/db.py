"""
SQLite connection helpers and a simple migration system.

Connections are short-lived: every store operation opens its own
connection through ``get_connection`` or ``get_cursor`` and closes it
when done.  The schema evolves through the ``MIGRATIONS`` list; applied
versions are recorded in the ``migrations`` table and only newer ones are
executed, so ``apply_migrations`` is safe to run on every start, also
from several processes sharing one database file.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

# Each migration is a list of single statements.  ``executescript`` is not
# used because it commits the open transaction, which would release the
# write lock taken in ``apply_migrations``.
MIGRATIONS: list[tuple[int, list[str]]] = [
    # Migration 1: single-row message table
    (
        1,
        [
            """
            CREATE TABLE IF NOT EXISTS messages (
                id INTEGER PRIMARY KEY,
                content TEXT NOT NULL
            )
            """,
        ],
    ),
    # Migration 2: version token for conditional updates.  Every update
    # bumps ``version``; writers may pass the version they last read to
    # detect that someone else wrote in between.
    (
        2,
        [
            "ALTER TABLE messages ADD COLUMN version INTEGER NOT NULL DEFAULT 1",
            "ALTER TABLE messages ADD COLUMN updated_at TIMESTAMP",
        ],
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is.  Relative paths are resolved against
    the project root so the location does not depend on the current
    working directory.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / database_url).resolve())


def get_connection(database_path: str) -> sqlite3.Connection:
    """Open a connection whose rows can be accessed by column name."""
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(database_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def apply_migrations(cursor: sqlite3.Cursor) -> int:
    """Apply pending migrations and return the resulting schema version.

    The whole check-and-apply runs in a ``BEGIN IMMEDIATE`` transaction, so
    a second process waits for the first to finish instead of applying the
    same migration twice.  The transaction stays open for the caller's
    remaining statements and ends when ``get_cursor`` commits.
    """
    cursor.execute("BEGIN IMMEDIATE")
    cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    cursor.execute("SELECT MAX(version) AS version FROM migrations")
    row = cursor.fetchone()
    current_version = row["version"] if row and row["version"] is not None else 0

    for version, statements in MIGRATIONS:
        if version > current_version:
            for statement in statements:
                cursor.execute(statement)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version
    return current_version
