"""Domain errors raised by the note services and repositories.

Endpoints translate these into HTTP responses; nothing below the API layer
knows about status codes.
"""
from __future__ import annotations


class NotesError(Exception):
    """Base class for note domain errors."""


class ValidationError(NotesError):
    """A required field is missing or blank. Raised before any store call."""


class NotFoundError(NotesError):
    """The note does not exist or belongs to another owner.

    Both cases share this error so callers cannot probe for other tenants'
    note ids.
    """


class StoreError(NotesError):
    """The persistence layer failed (connectivity, constraint, aborted transaction)."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(message or f"Store operation '{operation}' failed")
