"""
Pydantic schemas for the message endpoints.

Field names follow the JSON contract used by existing frontends, hence
the camelCase ``newMessage`` and ``updatedMessage``.
"""

from pydantic import BaseModel, Field


class MessageRead(BaseModel):
    """Response body of ``GET /api/message``."""

    message: str = Field(..., description="The current message")


class MessageUpdateResult(BaseModel):
    """Response body of a successful ``POST /api/message``."""

    status: str = Field("success", description="Always 'success'")
    message: str = Field("Message updated successfully", description="Human readable outcome")
    updatedMessage: str = Field(..., description="The message as stored, without surrounding whitespace")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Short error title, e.g. 'Bad Request'")
    details: str = Field(..., description="What went wrong")
