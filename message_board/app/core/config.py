"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields and mirror the behaviour
of the original serverless deployment: a SQLite file under ``/tmp`` that
lives only as long as the process (or container) does.  Point
``DATABASE_URL`` at a durable location to keep the message across
restarts.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Message Board API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Storage medium for the message.  ``sqlite`` keeps it in the file named
    # by ``database_url``; ``memory`` keeps it in the process only.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite")

    # Path to the SQLite database.  If a relative path is provided, it is
    # resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "/tmp/message.db")

    default_message: str = os.getenv("DEFAULT_MESSAGE", "Hello Full Stack World!")

    # Comma-separated list of allowed origins.  ``*`` allows every origin,
    # which is convenient for local frontends; narrow it in production.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables should
# be set before importing this module.
settings = Settings()
