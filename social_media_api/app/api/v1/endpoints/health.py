"""
Health endpoint for API v1.

Reports whether the database can be reached.  This is how operators
tell an empty result from a fail-open read during an outage.
"""

import logging
import sqlite3
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from social_media_api.app.core.db import get_connection
from social_media_api.app.core.errors import StorageError


router = APIRouter()


@router.get("/health")
async def health() -> JSONResponse:
    """Return ``{"status": "ok", "database": "ok"}`` or a 503 if the database is down."""
    body: Dict[str, Any] = {"status": "ok", "database": "ok"}
    try:
        with get_connection() as conn:
            conn.execute("SELECT MAX(version) FROM migrations").fetchone()
    except (sqlite3.Error, StorageError) as exc:
        logging.getLogger(__name__).warning("Health check failed: %s", exc)
        body["database"] = "unavailable"
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return JSONResponse(content=body)
