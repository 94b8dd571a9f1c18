"""Shared fixtures: a temp-file SQLite store and an app wired to it."""

from typing import Optional

import pytest

from message_board.app.core.errors import MessageNotFound, StorageUnavailable
from message_board.app.main import create_app
from message_board.app.services.message_service import MessageService, get_message_service
from message_board.app.storage import Message, MessageStore, SQLiteMessageStore


class FailingStore(MessageStore):
    """Store whose medium is broken in a configurable way."""

    def __init__(self, fail_initialize=False, missing_row=False) -> None:
        super().__init__()
        self.fail_initialize = fail_initialize
        self.missing_row = missing_row
        self.initialize_calls = 0
        self.writes = []

    async def initialize(self) -> None:
        self.initialize_calls += 1
        if self.fail_initialize:
            raise StorageUnavailable("Failed to initialize database: disk I/O error")

    async def get_current(self) -> Message:
        if self.missing_row:
            raise MessageNotFound("No message found with ID 1. Database might be uninitialized or corrupted.")
        raise StorageUnavailable("database disk image is malformed")

    async def set_current(self, value: str, expected_version: Optional[int] = None) -> Message:
        self.writes.append(value)
        raise StorageUnavailable("attempt to write a readonly database")


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "message.db")


@pytest.fixture
def store(db_path):
    return SQLiteMessageStore(db_path)


@pytest.fixture
def service(store):
    return MessageService(store)


def build_app(service: MessageService):
    application = create_app()
    application.dependency_overrides[get_message_service] = lambda: service
    return application


@pytest.fixture
def app(service):
    return build_app(service)
