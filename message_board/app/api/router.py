"""
Top-level API router.

Aggregates the resource routers under a common prefix chosen by
``main.create_app``.  New resources get their own module in
``endpoints`` and are included here.
"""

from fastapi import APIRouter

from .endpoints import message

router = APIRouter()

# The message endpoints live directly on ``/message`` (no trailing slash),
# matching the paths existing frontends call.
router.include_router(message.router, prefix="/message", tags=["message"])
