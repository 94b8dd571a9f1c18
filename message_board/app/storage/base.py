"""
Storage interface for the single persisted message.

A store owns exactly one :class:`Message`.  Implementations only differ
in durability: the in-memory store forgets the message when the process
exits, the SQLite store keeps it as long as its database file survives.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

DEFAULT_MESSAGE = "Hello Full Stack World!"

# Fixed identity of the single message row.
MESSAGE_ID = 1


@dataclass(frozen=True)
class Message:
    """The current message and its version token."""

    content: str
    version: int = 1


class MessageStore(ABC):
    """Holder of the single message value."""

    def __init__(self, default_message: str = DEFAULT_MESSAGE) -> None:
        self.default_message = default_message

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the medium and insert the default message if none exists.

        Calling this again must never replace a message that is already
        stored.  Raises ``StorageUnavailable`` if the medium cannot be
        prepared.
        """

    @abstractmethod
    async def get_current(self) -> Message:
        """Return the stored message.

        Raises ``MessageNotFound`` if there is none and
        ``StorageUnavailable`` if the medium cannot be read.
        """

    @abstractmethod
    async def set_current(self, value: str, expected_version: Optional[int] = None) -> Message:
        """Replace (or insert) the stored message and return it.

        When ``expected_version`` is given and differs from the stored
        version, ``VersionConflict`` is raised and nothing is written.
        """
