"""
Message endpoints.

``GET`` returns the current message and ``POST`` replaces it.  Store
outcomes are mapped to status codes here: a missing row is a 404, every
other storage failure a 500 carrying the underlying error message, and
invalid input a 400.  Both responses carry the message version in an
``ETag`` header; a ``POST`` with ``If-Match`` only succeeds while that
version is still current.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, Response, status

from message_board.app.core.errors import (
    ApiError,
    MessageNotFound,
    MessageStoreError,
    MessageValidationError,
    VersionConflict,
)
from message_board.app.schemas.message import ErrorResponse, MessageRead, MessageUpdateResult
from message_board.app.services.message_service import MessageService, get_message_service

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _parse_if_match(if_match: Optional[str]) -> Optional[int]:
    if if_match is None:
        return None
    value = if_match.strip()
    if value.startswith("W/"):
        value = value[2:]
    try:
        return int(value.strip('"'))
    except ValueError:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            "Bad Request",
            "If-Match must be the ETag returned by a previous request.",
        )


@router.get("", response_model=MessageRead, responses=_ERROR_RESPONSES)
async def get_message(response: Response, service: MessageService = Depends(get_message_service)) -> Dict[str, Any]:
    """Return the current message."""
    try:
        message = await service.get_message()
    except MessageNotFound as exc:
        logger.warning("Message row missing: %s", exc)
        raise ApiError(status.HTTP_404_NOT_FOUND, "Message not found", str(exc))
    except MessageStoreError as exc:
        logger.error("Failed to retrieve message: %s", exc)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to retrieve message", str(exc))
    response.headers["ETag"] = f'"{message.version}"'
    return {"message": message.content}


@router.post("", response_model=MessageUpdateResult, responses=_ERROR_RESPONSES)
async def update_message(
    response: Response,
    body: Dict[str, Any] = Body(...),
    if_match: Optional[str] = Header(None),
    service: MessageService = Depends(get_message_service),
) -> Dict[str, Any]:
    """Replace the current message.

    The body must be ``{"newMessage": "<text>"}``.  Surrounding whitespace
    is removed before the message is stored and returned.
    """
    expected_version = _parse_if_match(if_match)
    try:
        message = await service.update_message(body.get("newMessage"), expected_version=expected_version)
    except MessageValidationError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Bad Request", str(exc))
    except VersionConflict as exc:
        raise ApiError(status.HTTP_409_CONFLICT, "Conflict", str(exc))
    except MessageStoreError as exc:
        logger.error("Failed to update message: %s", exc)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update message", str(exc))
    response.headers["ETag"] = f'"{message.version}"'
    return {
        "status": "success",
        "message": "Message updated successfully",
        "updatedMessage": message.content,
    }
