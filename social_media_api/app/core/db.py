"""
SQLite database integration, connection pooling and migrations.

This module provides a bounded ``ConnectionPool`` (SQLAlchemy's
``QueuePool`` over raw ``sqlite3`` connections) and the
``get_connection`` helper used by every service call.  A connection is
acquired for the duration of one ``with`` block: the transaction is
committed when the block exits normally, rolled back when it raises,
and the connection goes back to the pool on every exit path.

``init_db`` applies schema migrations on application start.  Applied
versions are stored in the ``migrations`` table and new migrations are
executed in order.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from sqlalchemy.exc import TimeoutError as SATimeoutError
from sqlalchemy.pool import QueuePool

from .config import settings
from .errors import StorageConnectionError


logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; sqlite3 refuses to bind anything wider.
SQLITE_INTEGER_MIN = -(2 ** 63)
SQLITE_INTEGER_MAX = 2 ** 63 - 1


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: accounts and messages
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS account (
            account_id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS message (
            message_id INTEGER PRIMARY KEY AUTOINCREMENT,
            posted_by INTEGER NOT NULL,
            message_text TEXT NOT NULL,
            time_posted_epoch INTEGER NOT NULL,
            FOREIGN KEY(posted_by) REFERENCES account(account_id)
        );
        """,
    ),
    # Migration 2: lookups of an account's messages
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_message_posted_by ON message(posted_by);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # social_media_api/
    return str((base_dir / db_url).resolve())


class ConnectionPool:
    """A bounded pool of SQLite connections on top of SQLAlchemy's ``QueuePool``.

    At most ``size`` connections are checked out at once.  Idle
    connections are reused; new ones are opened lazily.  A caller that
    cannot get a connection within ``timeout`` seconds receives
    ``StorageConnectionError``.  Checked-out connections are
    SQLAlchemy proxies that forward ``execute``/``cursor``/``commit`` to
    the underlying ``sqlite3`` connection; ``close()`` returns them.
    """

    def __init__(self, database_path: str, size: int = 5, timeout: float = 5.0) -> None:
        if size < 1:
            raise ValueError("Pool size must be at least 1")
        self.database_path = database_path
        self.size = size
        self.timeout = timeout
        self._pool = QueuePool(
            self._open,
            pool_size=size,
            max_overflow=0,
            timeout=timeout,
        )
        self._closed = False

    @property
    def in_use(self) -> int:
        """Number of connections currently checked out."""
        return self._pool.checkedout()

    def _open(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.database_path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StorageConnectionError(
                f"Cannot open database {self.database_path}: {exc}"
            ) from exc
        # Return rows as dict-like objects keyed by column name
        conn.row_factory = sqlite3.Row
        try:
            # SQLite ignores REFERENCES clauses unless this is set per connection.
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            conn.close()
            raise StorageConnectionError(
                f"Cannot configure database {self.database_path}: {exc}"
            ) from exc
        return conn

    def acquire(self):
        """Check out a pooled connection."""
        if self._closed:
            raise StorageConnectionError("Connection pool is closed")
        try:
            return self._pool.connect()
        except SATimeoutError as exc:
            raise StorageConnectionError("Timed out waiting for a database connection") from exc

    def release(self, conn, discard: bool = False) -> None:
        """Return a connection to the pool, or drop it when ``discard`` is set."""
        if discard:
            conn.invalidate()
        else:
            conn.close()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Scoped acquisition: commit on success, roll back on error, always release."""
        conn = self.acquire()
        broken = False
        try:
            yield conn
            conn.commit()
        except BaseException:
            try:
                conn.rollback()
            except sqlite3.Error:
                logger.warning("Rollback failed; discarding pooled connection", exc_info=True)
                broken = True
            raise
        finally:
            self.release(conn, discard=broken)

    def close(self) -> None:
        """Close idle connections and refuse further acquisitions."""
        self._closed = True
        self._pool.dispose()


_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def get_pool() -> ConnectionPool:
    """Return the process-wide pool, creating it from settings on first use."""
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = ConnectionPool(
                get_database_path(),
                size=settings.pool_size,
                timeout=settings.pool_timeout,
            )
            logger.debug("Opened connection pool for %s", _pool.database_path)
        return _pool


def reset_pool() -> None:
    """Close the current pool; the next ``get_pool`` call re-reads settings."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.close()
        _pool = None


def get_connection():
    """Context manager yielding a pooled connection for one service call.

    Usage::

        with get_connection() as conn:
            conn.execute("SELECT ...", (...))
    """
    return get_pool().connection()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new entries from
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied database migration %s", version)
                current_version = version
