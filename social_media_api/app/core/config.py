"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with no configuration at all; in a deployment override
them via the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Social Media API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Routes are served at the root by default (``/register``,
    # ``/messages`` ...).  Set API_PREFIX=/api/v1 to mount them under a
    # versioned prefix instead.
    api_prefix: str = os.getenv("API_PREFIX", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "social_media.db")

    # Connection pool sizing.  ``pool_timeout`` is how long a request waits
    # for a free connection before the call fails with a storage error.
    pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    pool_timeout: float = float(os.getenv("DB_POOL_TIMEOUT", "5.0"))

    # Business rules
    min_password_length: int = int(os.getenv("MIN_PASSWORD_LENGTH", "3"))
    max_message_length: int = int(os.getenv("MAX_MESSAGE_LENGTH", "255"))

    # When enabled, storage failures on message reads are logged and the
    # read returns an empty result.  When disabled the failure propagates
    # and the API answers 503.
    fail_open_reads: bool = _env_flag("FAIL_OPEN_READS", "true")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
