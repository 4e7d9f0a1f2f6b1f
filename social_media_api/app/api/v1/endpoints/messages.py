"""
Message endpoints for API v1.

Post, list, fetch, edit and delete messages.  Fetching or deleting a
message that does not exist answers 200 with an empty body.
"""

from typing import List, Union

from fastapi import APIRouter, HTTPException, Request, Response, status

from social_media_api.app.api.v1.parsing import parse_body, parse_id
from social_media_api.app.core.errors import NotFoundError, StorageError, ValidationError
from social_media_api.app.schemas.message import MessageCreate, MessageRead, MessageUpdate
from social_media_api.app.services.message_service import MessageService


router = APIRouter()


@router.post("", response_model=MessageRead)
async def create_message(request: Request) -> MessageRead:
    """Post a new message.

    Answers 400 if the body cannot be parsed, the posting account does
    not exist, the text is empty or too long, or the insert fails.
    """
    candidate = await parse_body(request, MessageCreate)
    try:
        return await MessageService.create_message(candidate)
    except (ValidationError, NotFoundError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("", response_model=List[MessageRead])
async def list_messages() -> List[MessageRead]:
    """List all messages; an empty store gives ``[]``."""
    try:
        return await MessageService.get_all_messages()
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)


@router.get("/{message_id}", response_model=MessageRead)
async def get_message(message_id: str) -> Union[MessageRead, Response]:
    """Retrieve a single message by ID."""
    message_pk = parse_id(message_id, "message_id")
    try:
        message = await MessageService.get_message_by_id(message_pk)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    if message is None:
        return Response(status_code=status.HTTP_200_OK)
    return message


@router.delete("/{message_id}", response_model=MessageRead)
async def delete_message(message_id: str) -> Union[MessageRead, Response]:
    """Delete a message and return what was deleted."""
    message_pk = parse_id(message_id, "message_id")
    try:
        message = await MessageService.get_message_by_id(message_pk)
        if message is None:
            return Response(status_code=status.HTTP_200_OK)
        await MessageService.delete_message(message_pk)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return message


@router.patch("/{message_id}", response_model=MessageRead)
async def update_message(message_id: str, request: Request) -> MessageRead:
    """Replace the text of a message.

    Answers 400 for a malformed ID or body, invalid text, an unknown
    message, or a failed update.
    """
    message_pk = parse_id(message_id, "message_id")
    update = await parse_body(request, MessageUpdate)
    try:
        return await MessageService.update_message(message_pk, update)
    except (ValidationError, NotFoundError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
