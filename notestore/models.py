from __future__ import annotations

from sqlite3 import Row

from pydantic import BaseModel, Field

from .errors import InvalidArgument

EMPTY_CONTENT = "{}"
DEFAULT_NOTE_TITLE = "Untitled"

# (name, hex) pairs offered to callers picking a subject colour; never enforced.
SUBJECT_COLORS: list[tuple[str, str]] = [
    ("Indigo", "#6366f1"),
    ("Blue", "#3b82f6"),
    ("Cyan", "#06b6d4"),
    ("Emerald", "#10b981"),
    ("Amber", "#f59e0b"),
    ("Orange", "#f97316"),
    ("Rose", "#f43f5e"),
    ("Pink", "#ec4899"),
    ("Purple", "#a855f7"),
    ("Slate", "#64748b"),
]
DEFAULT_SUBJECT_COLOR = SUBJECT_COLORS[0][1]


class Subject(BaseModel):
    """A named category grouping notes."""
    id: str
    name: str
    color_hex: str = Field(..., description="#RRGGBB-like string, stored as given.")
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Row) -> "Subject":
        return cls(**dict(row))


class Note(BaseModel):
    """A single rich-content document belonging to one subject."""
    id: str
    subject_id: str
    title: str
    content_json: str = Field(EMPTY_CONTENT, description="Opaque editor document, returned verbatim.")
    plain_text: str = Field("", description="Caller-supplied flattened text used for search.")
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: Row) -> "Note":
        return cls(**dict(row))


def check_text(**fields):
    """Every field must be a str; SQLite would otherwise coerce or store NULL."""
    for name, value in fields.items():
        if not isinstance(value, str):
            raise InvalidArgument(f"{name} must be a string, got {type(value).__name__}")
