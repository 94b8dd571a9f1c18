"""
Main entrypoint for the Message Board API.

This module assembles the FastAPI application: logging, CORS, the
error handlers that render ``{"error": ..., "details": ...}`` bodies and
the API router.  ``create_app`` builds and configures the app, which is
then instantiated at module import time as ``app`` so it can be served
directly, e.g.::

    uvicorn message_board.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import ApiError, MessageStoreError
from .core.logging_config import setup_logging
from .services.message_service import INVALID_MESSAGE_DETAILS, service_for_app

logger = logging.getLogger(__name__)


def _error_body(error: str, details: str) -> dict:
    return {"error": error, "details": details}


def create_app(settings: Settings = default_settings) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Settings
        Configuration to use.  Defaults to the settings read from the
        environment at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    # The message store is built from these settings on first use.
    app.state.settings = settings

    # Browsers call the API from wherever the frontend is hosted.  All
    # origins are allowed unless CORS_ORIGINS lists specific ones.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["ETag"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error, exc.details))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # A missing, malformed or non-object body is a client error like any
        # other invalid newMessage.
        logger.info("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Bad Request", INVALID_MESSAGE_DETAILS),
        )

    @app.exception_handler(MessageStoreError)
    async def store_error_handler(request: Request, exc: MessageStoreError) -> JSONResponse:
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Storage unavailable", str(exc)),
        )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Start initializing the store right away so the first request does
        # not pay for it.  Failures are reported by that request instead.
        try:
            await service_for_app(app).ensure_ready()
        except MessageStoreError as exc:
            logger.error("Message store initialization failed at startup: %s", exc)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
