"""
Main entrypoint for the Social Media API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router.  ``create_app`` builds and configures
the app, which is then instantiated at module import time as ``app``
so it can be served directly::

    uvicorn social_media_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db, reset_pool


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, mounts the v1 router under
    ``settings.api_prefix`` and registers startup/shutdown hooks that
    migrate the database and close the connection pool.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first, so that anything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up to date.
        init_db()
        logging.getLogger(__name__).info("%s %s started", settings.project_name, settings.api_version)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        reset_pool()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
