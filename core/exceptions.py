"""
Food store exceptions.

Empty query results are never reported through these classes; an empty
list or ``None`` is a successful answer.
"""

import asyncio
from typing import Optional


class FoodStoreError(Exception):
    """Base exception for all food store errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class NotFound(FoodStoreError):
    """A record that was required to exist is missing. Queries never raise this."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message=message, code="NOT_FOUND", details=details)


class FoodNotFound(NotFound):
    """Raised by replace() when no record has the given id"""

    def __init__(self, food_id: int):
        super().__init__(
            message=f"Food not found: {food_id}",
            details={"food_id": food_id}
        )


class InvalidArgument(FoodStoreError):
    """Raised when a caller passes malformed input"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message=message, code="INVALID_ARGUMENT", details=details)


class StorageUnavailable(FoodStoreError):
    """Raised when the storage backend cannot be reached or fails on I/O"""

    def __init__(self, backend: str, error: str):
        super().__init__(
            message=f"Storage unavailable: {backend}",
            code="STORAGE_UNAVAILABLE",
            details={"backend": backend, "error": error}
        )


class Cancelled(FoodStoreError, asyncio.CancelledError):
    """
    Raised when the caller cancels an in-flight query.

    Also an asyncio.CancelledError, so a generic ``except Exception`` or
    ``except FoodStoreError`` around an awaited query will swallow task
    cancellation. Re-raise it, or catch Cancelled first.
    """

    def __init__(self, operation: str):
        super().__init__(
            message=f"Query cancelled: {operation}",
            code="CANCELLED",
            details={"operation": operation}
        )
