"""
Storage media for the message.

``create_store`` picks the implementation named by
``settings.storage_backend``.  Swapping the backend changes how long the
message survives, never how the service behaves.
"""

from message_board.app.core.config import Settings
from message_board.app.core.db import get_database_path
from message_board.app.core.errors import StorageUnavailable
from message_board.app.storage.base import DEFAULT_MESSAGE, MESSAGE_ID, Message, MessageStore
from message_board.app.storage.memory_store import InMemoryMessageStore
from message_board.app.storage.sqlite_store import SQLiteMessageStore

__all__ = [
    "DEFAULT_MESSAGE",
    "MESSAGE_ID",
    "InMemoryMessageStore",
    "Message",
    "MessageStore",
    "SQLiteMessageStore",
    "create_store",
]


def create_store(settings: Settings) -> MessageStore:
    """Build the store configured in ``settings``."""
    backend = settings.storage_backend.strip().lower()
    if backend == "sqlite":
        return SQLiteMessageStore(get_database_path(settings.database_url), settings.default_message)
    if backend == "memory":
        return InMemoryMessageStore(settings.default_message)
    raise StorageUnavailable(f"Unknown storage backend '{settings.storage_backend}'. Use 'sqlite' or 'memory'.")
