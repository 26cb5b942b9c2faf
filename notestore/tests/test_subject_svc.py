"""Subject repository behaviour through the service layer."""
import sqlite3

import pytest

from notestore.config import DEFAULTS
from notestore.db import Store
from notestore.errors import NotFound, DatabaseFailure
from notestore.repository import subject_repo
from notestore.services import subject_svc, note_svc


def test_create_subject(store):
    s = subject_svc.create_subject(store, "Math", "#FF0000")
    assert s.id
    assert s.name == "Math"
    assert s.color_hex == "#FF0000"
    assert s.created_at == s.updated_at
    assert s.created_at.endswith("+00:00")


def test_create_generates_distinct_ids(store):
    ids = {subject_svc.create_subject(store, "Same", "#000000").id for _ in range(5)}
    assert len(ids) == 5


def test_list_empty(store):
    assert subject_svc.list_subjects(store) == []


def test_list_ordered_by_name_with_stable_ties(store):
    b1 = subject_svc.create_subject(store, "Biology", "#111111")
    subject_svc.create_subject(store, "Art", "#222222")
    b2 = subject_svc.create_subject(store, "Biology", "#333333")
    subject_svc.create_subject(store, "art", "#444444")

    names = [s.name for s in subject_svc.list_subjects(store)]
    # binary collation: upper case sorts before lower case
    assert names == ["Art", "Biology", "Biology", "art"]
    biology_ids = [s.id for s in subject_svc.list_subjects(store) if s.name == "Biology"]
    assert biology_ids == [b1.id, b2.id]


def test_update_subject(store):
    s = subject_svc.create_subject(store, "Math", "#FF0000")
    u = subject_svc.update_subject(store, s.id, "Mathematics", "#00FF00")
    assert u.id == s.id
    assert u.name == "Mathematics"
    assert u.color_hex == "#00FF00"
    assert u.created_at == s.created_at
    assert u.updated_at > s.updated_at


def test_update_color_is_not_validated(store):
    s = subject_svc.create_subject(store, "Math", "red")
    u = subject_svc.update_subject(store, s.id, "Math", "not-a-colour")
    assert u.color_hex == "not-a-colour"


def test_update_missing_subject(store):
    with pytest.raises(NotFound) as ei:
        subject_svc.update_subject(store, "nonexistent", "x", "#000000")
    assert ei.value.kind == "NotFound"
    assert "nonexistent" in str(ei.value)
    assert subject_svc.list_subjects(store) == []


def test_delete_missing_subject_is_silent(store):
    keep = subject_svc.create_subject(store, "Keep", "#000000")
    subject_svc.delete_subject(store, "nonexistent")
    assert [s.id for s in subject_svc.list_subjects(store)] == [keep.id]


def test_delete_cascades_only_own_notes(store):
    s = subject_svc.create_subject(store, "S", "#000000")
    s2 = subject_svc.create_subject(store, "S2", "#000000")
    n1 = note_svc.create_note(store, s.id, "N1")
    n2 = note_svc.create_note(store, s.id, "N2")
    n3 = note_svc.create_note(store, s2.id, "N3")

    subject_svc.delete_subject(store, s.id)

    remaining = note_svc.list_all_notes(store)
    assert [n.id for n in remaining] == [n3.id]
    assert [x.id for x in subject_svc.list_subjects(store)] == [s2.id]
    for gone in (n1, n2):
        with pytest.raises(NotFound):
            note_svc.get_note(store, gone.id)


def test_delete_cascade_without_transaction(db_path, clock):
    with Store(db_path, config=dict(DEFAULTS), atomic_cascade=False, clock=clock) as s:
        subj = subject_svc.create_subject(s, "S", "#000000")
        note_svc.create_note(s, subj.id, "N1")
        subject_svc.delete_subject(s, subj.id)
        with s.session() as conn:
            assert conn.execute("SELECT COUNT(1) FROM notes").fetchone()[0] == 0
            assert subject_repo.get_one(conn, subj.id) is None


def test_atomic_cascade_rolls_back_on_failure(store, monkeypatch):
    subj = subject_svc.create_subject(store, "S", "#000000")
    note = note_svc.create_note(store, subj.id, "N1")

    def boom(conn, subject_id):
        raise sqlite3.OperationalError("simulated crash")

    monkeypatch.setattr(subject_repo, "delete", boom)
    with pytest.raises(DatabaseFailure):
        subject_svc.delete_subject(store, subj.id)

    # notes deleted by the first statement come back with the rollback
    assert note_svc.get_note(store, note.id).id == note.id
    with store.session() as conn:
        assert not conn.in_transaction
