"""
Request decoding helpers shared by the v1 endpoints.

The public API answers malformed input with 400 (401 for login) rather
than FastAPI's default 422, so bodies and path IDs are decoded here
instead of through FastAPI's own parameter validation.
"""

import re
from typing import Type, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from social_media_api.app.core.db import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN


ModelT = TypeVar("ModelT", bound=BaseModel)

# Optional sign followed by ASCII digits only: no underscores, no padding.
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


async def parse_body(request: Request, schema: Type[ModelT], error_status: int = 400) -> ModelT:
    """Decode the JSON request body into ``schema``.

    Raises ``HTTPException`` with ``error_status`` if the body is not
    valid JSON or does not match the schema.
    """
    raw = await request.body()
    try:
        return schema.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise HTTPException(status_code=error_status, detail="Malformed request body") from exc


def parse_id(raw: str, name: str = "id") -> int:
    """Convert a path segment to an integer ID or answer 400.

    Only a plain decimal integer that fits in an SQLite INTEGER is
    accepted.
    """
    if not _ID_PATTERN.fullmatch(raw):
        raise HTTPException(status_code=400, detail=f"Invalid {name}: {raw!r}")
    value = int(raw)
    if not SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX:
        raise HTTPException(status_code=400, detail=f"{name} out of range: {raw!r}")
    return value
