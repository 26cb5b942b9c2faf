from __future__ import annotations

import logging

from ..db import Store
from ..errors import NotFound
from ..logs import OperationLogContext
from ..models import Subject, check_text
from ..repository import subject_repo, note_repo
from ..utils import new_id

logger = logging.getLogger(__name__)


def list_subjects(store: Store) -> list[Subject]:
    with store.session() as conn:
        rows = subject_repo.list_all(conn)
    return [Subject.from_row(r) for r in rows]


def create_subject(store: Store, name: str, color_hex: str, log: OperationLogContext | None = None) -> Subject:
    check_text(name=name, color_hex=color_hex)
    with store.session() as conn:
        now = store.now()
        subject = Subject(id=new_id(), name=name, color_hex=color_hex, created_at=now, updated_at=now)
        subject_repo.insert(conn, subject.id, name, color_hex, now)
    if log:
        log.set_entity("SUBJECT", subject.id)
    return subject


def update_subject(store: Store, subject_id: str, name: str, color_hex: str,
                   log: OperationLogContext | None = None) -> Subject:
    """Overwrite name/colour and re-stamp updated_at; returns the re-read row."""
    check_text(id=subject_id, name=name, color_hex=color_hex)
    if log:
        log.set_entity("SUBJECT", subject_id)
    with store.session() as conn:
        subject_repo.update(conn, subject_id, name, color_hex, store.now())
        row = subject_repo.get_one(conn, subject_id)
    if row is None:
        raise NotFound("subject", subject_id)
    return Subject(**row)


def delete_subject(store: Store, subject_id: str, log: OperationLogContext | None = None):
    """
    Delete a subject's notes, then the subject. Missing ids are not an error.
    With store.atomic_cascade both statements run in one transaction.
    """
    check_text(id=subject_id)
    if log:
        log.set_entity("SUBJECT", subject_id)
    with store.session() as conn:
        if store.atomic_cascade:
            with store.transaction(conn):
                removed = note_repo.delete_by_subject(conn, subject_id)
                subject_repo.delete(conn, subject_id)
        else:
            removed = note_repo.delete_by_subject(conn, subject_id)
            subject_repo.delete(conn, subject_id)
    if removed:
        logger.debug("subject %s: cascaded %d notes", subject_id, removed)
