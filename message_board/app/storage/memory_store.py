"""In-process message store.  The message is lost when the process exits."""

import logging
from typing import Optional

from message_board.app.core.errors import MessageNotFound, VersionConflict
from message_board.app.storage.base import DEFAULT_MESSAGE, Message, MessageStore

logger = logging.getLogger(__name__)


class InMemoryMessageStore(MessageStore):
    """Keep the message in a plain attribute.

    Every operation completes without awaiting anything, so on a single
    event loop a read can never observe a half-applied write.
    """

    def __init__(self, default_message: str = DEFAULT_MESSAGE) -> None:
        super().__init__(default_message)
        self._message: Optional[Message] = None

    async def initialize(self) -> None:
        if self._message is None:
            self._message = Message(content=self.default_message)
            logger.info('Default message "%s" stored in memory.', self.default_message)

    async def get_current(self) -> Message:
        if self._message is None:
            raise MessageNotFound("No message has been stored yet. The store was never initialized.")
        return self._message

    async def set_current(self, value: str, expected_version: Optional[int] = None) -> Message:
        current = self._message
        if expected_version is not None:
            actual = current.version if current else 0
            if actual != expected_version:
                raise VersionConflict(expected_version, actual)
        self._message = Message(content=value, version=current.version + 1 if current else 1)
        return self._message
