"""
Error kinds raised by the store.

Repository and service code only ever raise StoreError subclasses; sqlite3
exceptions are translated at the session boundary in db.Store. The command
boundary flattens these to message strings, internal callers can branch on
the class or on ``kind``.
"""
from __future__ import annotations

import sqlite3


class StoreError(Exception):
    kind = "StoreError"


class StorageUnavailable(StoreError):
    """Database file cannot be created, opened or migrated. Fatal at startup."""
    kind = "StorageUnavailable"


class IntegrityViolation(StoreError):
    kind = "IntegrityViolation"


class ForeignKeyViolation(IntegrityViolation):
    kind = "ForeignKeyViolation"


class Conflict(IntegrityViolation):
    kind = "Conflict"


class NotFound(StoreError):
    kind = "NotFound"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InvalidArgument(StoreError):
    """A command argument has the wrong type."""
    kind = "InvalidArgument"


class LockContention(StoreError):
    kind = "LockContention"


class DatabaseFailure(StoreError):
    kind = "DatabaseFailure"


def translate(exc: sqlite3.Error) -> StoreError:
    """Map an engine exception onto a StoreError kind."""
    msg = str(exc)
    if isinstance(exc, sqlite3.IntegrityError):
        if "FOREIGN KEY" in msg:
            return ForeignKeyViolation(msg)
        if "UNIQUE" in msg or "PRIMARY KEY" in msg:
            return Conflict(msg)
        return IntegrityViolation(msg)
    return DatabaseFailure(msg)
