"""
Pydantic models for messages.

Text rules (non-empty, maximum length) are enforced in
``MessageService`` rather than here, so that they apply identically to
callers that construct schemas directly and so that the API can map
them to its own status codes.
"""

from typing import Optional

from pydantic import BaseModel, Field

from social_media_api.app.core.db import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN


class MessageCreate(BaseModel):
    """Schema for posting a new message."""

    posted_by: int = Field(
        ...,
        ge=SQLITE_INTEGER_MIN,
        le=SQLITE_INTEGER_MAX,
        description="ID of the account posting the message",
    )
    message_text: Optional[str] = Field(None, description="Message body, 1 to 255 characters")
    time_posted_epoch: int = Field(
        0,
        ge=SQLITE_INTEGER_MIN,
        le=SQLITE_INTEGER_MAX,
        description="Posting time as a UNIX epoch, supplied by the client",
    )


class MessageUpdate(BaseModel):
    """Schema for editing a message.  Only the text can change."""

    message_text: Optional[str] = None


class MessageRead(BaseModel):
    """Schema for reading a message from the API."""

    message_id: int
    posted_by: int
    message_text: str
    time_posted_epoch: int

    model_config = {
        "from_attributes": True,
    }
