"""Local SQLite persistence for subjects and notes."""
from __future__ import annotations

from .db import Store
from .errors import (
    StoreError,
    StorageUnavailable,
    IntegrityViolation,
    ForeignKeyViolation,
    Conflict,
    NotFound,
    InvalidArgument,
    LockContention,
    DatabaseFailure,
)
from .models import Subject, Note

__version__ = "0.1.0"

__all__ = [
    "Store",
    "Subject",
    "Note",
    "StoreError",
    "StorageUnavailable",
    "IntegrityViolation",
    "ForeignKeyViolation",
    "Conflict",
    "NotFound",
    "InvalidArgument",
    "LockContention",
    "DatabaseFailure",
]
