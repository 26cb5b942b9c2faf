from __future__ import annotations

from ..db import Store
from ..errors import NotFound
from ..logs import OperationLogContext
from ..models import Note, EMPTY_CONTENT, check_text
from ..repository import note_repo
from ..utils import new_id


def _notes(rows) -> list[Note]:
    return [Note.from_row(r) for r in rows]


def list_notes(store: Store, subject_id: str) -> list[Note]:
    check_text(subject_id=subject_id)
    with store.session() as conn:
        return _notes(note_repo.list_by_subject(conn, subject_id))


def list_all_notes(store: Store) -> list[Note]:
    with store.session() as conn:
        return _notes(note_repo.list_all(conn))


def get_note(store: Store, note_id: str) -> Note:
    check_text(id=note_id)
    with store.session() as conn:
        row = note_repo.get_one(conn, note_id)
    if row is None:
        raise NotFound("note", note_id)
    return Note(**row)


def create_note(store: Store, subject_id: str, title: str, log: OperationLogContext | None = None) -> Note:
    """New note with empty content. Unknown subject_id raises ForeignKeyViolation."""
    check_text(subject_id=subject_id, title=title)
    with store.session() as conn:
        now = store.now()
        note = Note(id=new_id(), subject_id=subject_id, title=title,
                    content_json=EMPTY_CONTENT, plain_text="",
                    created_at=now, updated_at=now)
        note_repo.insert(conn, note.id, subject_id, title, note.content_json, note.plain_text, now)
    if log:
        log.set_entity("NOTE", note.id)
    return note


def update_note(store: Store, note_id: str, title: str, content_json: str, plain_text: str,
                log: OperationLogContext | None = None) -> Note:
    check_text(id=note_id, title=title, content_json=content_json, plain_text=plain_text)
    if log:
        log.set_entity("NOTE", note_id)
    with store.session() as conn:
        note_repo.update(conn, note_id, title, content_json, plain_text, store.now())
        row = note_repo.get_one(conn, note_id)
    if row is None:
        raise NotFound("note", note_id)
    return Note(**row)


def delete_note(store: Store, note_id: str, log: OperationLogContext | None = None):
    check_text(id=note_id)
    if log:
        log.set_entity("NOTE", note_id)
    with store.session() as conn:
        note_repo.delete(conn, note_id)


def search_notes(store: Store, query: str) -> list[Note]:
    check_text(query=query)
    with store.session() as conn:
        return _notes(note_repo.search(conn, query))
