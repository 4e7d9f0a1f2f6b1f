"""
Service layer for messages.

``MessageService`` validates and persists messages in the ``message``
table.  Writes are fail-closed: a rule violation raises
``ValidationError`` or ``NotFoundError`` and a database failure raises
``StorageError``.

Reads are fail-open while ``settings.fail_open_reads`` is enabled (the
default): a database failure is logged at WARNING level and the read
returns an empty list or ``None``.  Disable the flag to have reads
raise ``StorageError`` instead, so that "no data" and "database down"
can be told apart.
"""

import logging
import sqlite3
from typing import List, Optional, TypeVar

from social_media_api.app.core.config import settings
from social_media_api.app.core.db import get_connection
from social_media_api.app.core.errors import NotFoundError, StorageError, ValidationError
from social_media_api.app.schemas.message import MessageCreate, MessageRead, MessageUpdate
from social_media_api.app.services.account_service import AccountService


logger = logging.getLogger(__name__)

T = TypeVar("T")

_SELECT_COLUMNS = "SELECT message_id, posted_by, message_text, time_posted_epoch FROM message"


class MessageService:
    """Service for posting, reading, editing and deleting messages."""

    @classmethod
    async def create_message(cls, data: MessageCreate) -> MessageRead:
        """Validate and insert a message, returning the persisted record.

        The posting account is resolved here; if it does not exist
        ``NotFoundError`` is raised and nothing is written.
        """
        cls._validate_text(data.message_text)
        account = await AccountService.get_account_by_id(data.posted_by)
        if account is None:
            logger.info("Rejected message from unknown account %s", data.posted_by)
            raise NotFoundError(f"Account {data.posted_by} not found.")

        try:
            with get_connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO message (posted_by, message_text, time_posted_epoch) VALUES (?, ?, ?)",
                    (data.posted_by, data.message_text, data.time_posted_epoch),
                )
                message_id = cursor.lastrowid
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to create message: {exc}") from exc

        logger.info("Account %s posted message %s", data.posted_by, message_id)
        return MessageRead(
            message_id=message_id,
            posted_by=data.posted_by,
            message_text=data.message_text,
            time_posted_epoch=data.time_posted_epoch,
        )

    @classmethod
    async def get_all_messages(cls) -> List[MessageRead]:
        """Return every message in insertion order."""
        try:
            with get_connection() as conn:
                rows = conn.execute(f"{_SELECT_COLUMNS} ORDER BY message_id").fetchall()
        except (sqlite3.Error, StorageError) as exc:
            return cls._read_failed("list messages", exc, [])
        return [cls._row_to_message(row) for row in rows]

    @classmethod
    async def get_message_by_id(cls, message_id: int) -> Optional[MessageRead]:
        """Retrieve a single message, or ``None`` if it does not exist."""
        try:
            with get_connection() as conn:
                row = conn.execute(
                    f"{_SELECT_COLUMNS} WHERE message_id = ?",
                    (message_id,),
                ).fetchone()
        except (sqlite3.Error, StorageError) as exc:
            return cls._read_failed("get message", exc, None)
        if row is None:
            return None
        return cls._row_to_message(row)

    @classmethod
    async def update_message(cls, message_id: int, data: MessageUpdate) -> MessageRead:
        """Replace the text of an existing message.

        ``posted_by`` and ``time_posted_epoch`` are kept from the stored
        row.  Raises ``ValidationError`` for invalid text and
        ``NotFoundError`` if the message does not exist.
        """
        cls._validate_text(data.message_text)
        try:
            with get_connection() as conn:
                row = conn.execute(
                    f"{_SELECT_COLUMNS} WHERE message_id = ?",
                    (message_id,),
                ).fetchone()
                if row is None:
                    raise NotFoundError(f"Message {message_id} not found.")
                conn.execute(
                    "UPDATE message SET message_text = ? WHERE message_id = ?",
                    (data.message_text, message_id),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to update message: {exc}") from exc

        logger.info("Updated message %s", message_id)
        return MessageRead(
            message_id=message_id,
            posted_by=row["posted_by"],
            message_text=data.message_text,
            time_posted_epoch=row["time_posted_epoch"],
        )

    @classmethod
    async def delete_message(cls, message_id: int) -> None:
        """Delete a message by ID.

        Deleting an ID that does not exist is not an error; callers that
        care check existence first.
        """
        try:
            with get_connection() as conn:
                cursor = conn.execute("DELETE FROM message WHERE message_id = ?", (message_id,))
                deleted = cursor.rowcount
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to delete message: {exc}") from exc
        if deleted:
            logger.info("Deleted message %s", message_id)

    @classmethod
    async def get_messages_by_account_id(cls, account_id: int) -> List[MessageRead]:
        """Return all messages posted by ``account_id`` in insertion order."""
        try:
            with get_connection() as conn:
                rows = conn.execute(
                    f"{_SELECT_COLUMNS} WHERE posted_by = ? ORDER BY message_id",
                    (account_id,),
                ).fetchall()
        except (sqlite3.Error, StorageError) as exc:
            return cls._read_failed("list account messages", exc, [])
        return [cls._row_to_message(row) for row in rows]

    @staticmethod
    def _validate_text(text: Optional[str]) -> None:
        if not text:
            raise ValidationError("Message text cannot be blank.")
        if len(text) > settings.max_message_length:
            raise ValidationError(
                f"Message text cannot exceed {settings.max_message_length} characters."
            )

    @staticmethod
    def _read_failed(operation: str, exc: Exception, empty: T) -> T:
        """Apply the read failure policy: log and return ``empty``, or raise."""
        if not settings.fail_open_reads:
            if isinstance(exc, StorageError):
                raise exc
            raise StorageError(f"Failed to {operation}: {exc}") from exc
        logger.warning("Storage failure during %s, returning empty result: %s", operation, exc)
        return empty

    @staticmethod
    def _row_to_message(row: sqlite3.Row) -> MessageRead:
        return MessageRead(
            message_id=row["message_id"],
            posted_by=row["posted_by"],
            message_text=row["message_text"],
            time_posted_epoch=row["time_posted_epoch"],
        )
