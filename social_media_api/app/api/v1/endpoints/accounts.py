"""
Account endpoints for API v1.

Registration, login and listing the messages of one account.  There
are no tokens or sessions: a successful login simply returns the
account record.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from social_media_api.app.api.v1.parsing import parse_body, parse_id
from social_media_api.app.core.errors import StorageError, ValidationError
from social_media_api.app.schemas.account import AccountCreate, AccountRead
from social_media_api.app.schemas.message import MessageRead
from social_media_api.app.services.account_service import AccountService
from social_media_api.app.services.message_service import MessageService


router = APIRouter()


@router.post("/register", response_model=AccountRead)
async def register_account(request: Request) -> AccountRead:
    """Register a new account.

    Answers 400 if the body cannot be parsed, the username is blank or
    taken, the password is too short, or the account cannot be stored.
    """
    candidate = await parse_body(request, AccountCreate)
    try:
        return await AccountService.create_account(candidate)
    except (ValidationError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/login", response_model=AccountRead)
async def login(request: Request) -> AccountRead:
    """Check credentials and return the matching account.

    Every failure, including an unparsable body, answers 401.
    """
    credentials = await parse_body(request, AccountCreate, error_status=status.HTTP_401_UNAUTHORIZED)
    try:
        account = await AccountService.validate_login(credentials)
    except StorageError:
        account = None
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return account


@router.get("/accounts/{account_id}/messages", response_model=List[MessageRead])
async def list_account_messages(account_id: str) -> List[MessageRead]:
    """List every message posted by an account (possibly empty)."""
    account_pk = parse_id(account_id, "account_id")
    try:
        return await MessageService.get_messages_by_account_id(account_pk)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
