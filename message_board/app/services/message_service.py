"""
Service layer for the persisted message.

``MessageService`` wraps a :class:`~message_board.app.storage.MessageStore`
with input validation and a one-time initialization step.  The first
caller of ``ensure_ready`` starts ``store.initialize()``; every other
caller awaits the same future, so no request touches the store before
the schema and default message exist.

Each application holds one service, created lazily from the settings the
application was built with and kept on ``app.state``.  Since the
module-level ``app`` is the only application in a server process, this is
the process-wide service.  Handlers receive it through the
``get_message_service`` dependency, which tests may override.
"""

import asyncio
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request

from message_board.app.core.config import Settings, settings as default_settings
from message_board.app.core.errors import MessageValidationError
from message_board.app.storage import Message, MessageStore, create_store

logger = logging.getLogger(__name__)

INVALID_MESSAGE_DETAILS = "newMessage is required and must be a non-empty string."


def normalize_message(new_message: Any) -> str:
    """Return ``new_message`` stripped of surrounding whitespace.

    Raises ``MessageValidationError`` unless it is a string with at least
    one non-whitespace character.
    """
    if not isinstance(new_message, str) or not new_message.strip():
        raise MessageValidationError(INVALID_MESSAGE_DETAILS)
    return new_message.strip()


class MessageService:
    """Read and replace the single stored message."""

    def __init__(self, store: MessageStore) -> None:
        self.store = store
        self._ready: Optional[asyncio.Future] = None

    async def ensure_ready(self) -> None:
        """Wait for the store's one-time initialization.

        A failed initialization is reported to every waiter; the next call
        starts a new attempt.
        """
        if self._ready is None:
            self._ready = asyncio.ensure_future(self.store.initialize())
        ready = self._ready
        try:
            await asyncio.shield(ready)
        except Exception:
            if self._ready is ready:
                self._ready = None
            raise

    async def get_message(self) -> Message:
        await self.ensure_ready()
        return await self.store.get_current()

    async def update_message(self, new_message: Any, expected_version: Optional[int] = None) -> Message:
        """Validate and store a new message, returning what was stored.

        Validation happens before the store is touched, so a rejected
        message never changes the current one.
        """
        await self.ensure_ready()
        content = normalize_message(new_message)
        message = await self.store.set_current(content, expected_version=expected_version)
        logger.info("Message updated (version %d)", message.version)
        return message


def service_for_app(app: FastAPI) -> MessageService:
    """Return the service of ``app``, creating it on first use.

    The store is built from ``app.state.settings`` (set by ``create_app``),
    falling back to the settings read from the environment.
    """
    service = getattr(app.state, "message_service", None)
    if service is None:
        app_settings: Settings = getattr(app.state, "settings", default_settings)
        service = MessageService(create_store(app_settings))
        app.state.message_service = service
    return service


def reset_message_service(app: FastAPI) -> None:
    """Forget the service of ``app`` so the next request builds a new one."""
    app.state.message_service = None


def get_message_service(request: Request) -> MessageService:
    """FastAPI dependency returning the service of the running application."""
    return service_for_app(request.app)
