from __future__ import annotations


class ApiError(Exception):
    """A request failure with a user-facing message and HTTP status."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


class StoreError(Exception):
    """Raised when a record collection cannot be written."""
