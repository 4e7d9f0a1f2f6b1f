"""
Error types raised by the service layer.

Services raise these instead of ``HTTPException`` so they stay usable
outside of a request.  Endpoints translate them into status codes.

* ``ValidationError`` – input breaks a business rule (blank username,
  oversized message text, ...).
* ``NotFoundError`` – a referenced account or message does not exist.
* ``StorageError`` – a statement failed; the ``sqlite3`` error is
  chained as ``__cause__``.
* ``StorageConnectionError`` – no connection could be obtained.
"""


class ServiceError(Exception):
    """Base class for all service-layer failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Input violates a business rule."""


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""


class StorageError(ServiceError):
    """The database rejected or failed to run a statement."""


class StorageConnectionError(StorageError):
    """The database could not be reached or the pool is exhausted."""
