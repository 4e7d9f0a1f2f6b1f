"""
Logging configuration for the Social Media API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it runs, and always sets
the level of the ``social_media_api`` logger namespace.  Setting the
namespace level separately keeps the service logs visible when
something else owns the root logger, e.g. uvicorn or a test runner:
the WARNING records written when a message read fails open must not
be lost to a stricter root level.
"""

import logging
from pathlib import Path
from typing import Optional


APP_LOGGER_NAME = "social_media_api"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure logging and return the application's namespace logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.  The
        application namespace never goes above ``WARNING`` so storage
        failures on reads are always recorded.
    logfile : Optional[str]
        Path to a file to log messages to.  Only used when the root
        logger has not been configured yet.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(min(numeric_level, logging.WARNING))

    root = logging.getLogger()
    if root.handlers:
        # Someone else (uvicorn, pytest, an earlier call) owns the handlers.
        return app_logger

    root.setLevel(numeric_level)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return app_logger
