"""
Business logic for accounts.

``AccountService`` registers accounts, checks login credentials and
resolves accounts by ID.  Passwords are stored and compared as plain
text; there is no hashing in this API.
"""

import logging
import sqlite3
from typing import Optional

from social_media_api.app.core.config import settings
from social_media_api.app.core.db import get_connection
from social_media_api.app.core.errors import StorageError, ValidationError
from social_media_api.app.schemas.account import AccountCreate, AccountRead


logger = logging.getLogger(__name__)


class AccountService:
    """Service for registering and looking up accounts."""

    @classmethod
    async def create_account(cls, data: AccountCreate) -> AccountRead:
        """Register a new account and return it with its generated ID.

        The username must not be blank and must not already be taken;
        the password must be at least ``settings.min_password_length``
        characters.  Raises ``ValidationError`` when a rule is broken and
        ``StorageError`` when the insert fails.
        """
        username = data.username
        password = data.password
        if username is None or not username.strip():
            raise ValidationError("Username cannot be blank.")
        if password is None or len(password) < settings.min_password_length:
            raise ValidationError(
                f"Password must be at least {settings.min_password_length} characters long."
            )

        try:
            with get_connection() as conn:
                cursor = conn.cursor()
                existing = cursor.execute(
                    "SELECT account_id FROM account WHERE username = ?",
                    (username,),
                ).fetchone()
                if existing:
                    raise ValidationError(f"Username {username!r} is already taken.")
                cursor.execute(
                    "INSERT INTO account (username, password) VALUES (?, ?)",
                    (username, password),
                )
                account_id = cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name.
            raise ValidationError(f"Username {username!r} is already taken.") from exc
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to create account: {exc}") from exc

        logger.info("Registered account %s (%s)", account_id, username)
        return AccountRead(account_id=account_id, username=username, password=password)

    @classmethod
    async def validate_login(cls, credentials: AccountCreate) -> Optional[AccountRead]:
        """Return the account matching the credentials, otherwise ``None``.

        An unknown username and a wrong password give the same result so
        callers cannot tell which one failed.  Storage failures raise
        ``StorageError``.
        """
        if credentials.username is None or credentials.password is None:
            return None
        try:
            with get_connection() as conn:
                row = conn.execute(
                    "SELECT account_id, username, password FROM account WHERE username = ?",
                    (credentials.username,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to validate login: {exc}") from exc
        if row is None or row["password"] != credentials.password:
            logger.info("Rejected login for %s", credentials.username)
            return None
        return cls._row_to_account(row)

    @classmethod
    async def get_account_by_id(cls, account_id: int) -> Optional[AccountRead]:
        """Retrieve an account by ID.

        Used as an existence check, so storage failures are logged and
        reported as ``None`` rather than raised.
        """
        try:
            with get_connection() as conn:
                row = conn.execute(
                    "SELECT account_id, username, password FROM account WHERE account_id = ?",
                    (account_id,),
                ).fetchone()
        except (sqlite3.Error, StorageError) as exc:
            logger.warning("Account lookup %s failed, treating as absent: %s", account_id, exc)
            return None
        if row is None:
            return None
        return cls._row_to_account(row)

    @staticmethod
    def _row_to_account(row: sqlite3.Row) -> AccountRead:
        return AccountRead(
            account_id=row["account_id"],
            username=row["username"],
            password=row["password"],
        )
