"""Entry point for the message board API.

Serves :data:`message_board.app.main.app` with Uvicorn.  Host and port
come from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); everything else is configured as described in
``message_board.app.core.config``.  Settings may also be placed in the
environment by the container or process manager.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from message_board.app.core.config import settings
from message_board.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Serving %s on %s:%d", settings.project_name, settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
