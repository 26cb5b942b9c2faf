"""
External boundary: the named operations a UI shell invokes.

Each command takes the shared Store plus primitive arguments and returns
plain dicts. Any StoreError is flattened to its message in a CommandError;
invoke() wraps the outcome as {"ok": ..., "data"/"error": ...}.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable

from .db import Store
from .errors import StoreError
from .logs import OperationLogContext
from .models import DEFAULT_NOTE_TITLE
from .services import subject_svc, note_svc

# Large text fields are left out of the operation log.
_UNLOGGED_ARGS = ("content_json", "plain_text")

COMMANDS: dict[str, Callable[..., Any]] = {}


class CommandError(Exception):
    """Failure crossing the boundary; carries only a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def command(name: str, *aliases: str):
    def deco(fn):
        for n in (name, *aliases):
            COMMANDS[n] = fn
        return fn
    return deco


def _run(action: str, fn: Callable[[OperationLogContext], Any], payload: dict | None = None):
    log = OperationLogContext(action)
    if payload:
        log.set_payload({k: v for k, v in payload.items() if k not in _UNLOGGED_ARGS})
    try:
        out = fn(log)
    except StoreError as e:
        log.write("ERROR", str(e))
        raise CommandError(str(e)) from e
    log.write("OK")
    return out


def _dump(obj):
    if isinstance(obj, list):
        return [o.model_dump() for o in obj]
    return obj.model_dump()


# ===== Subjects =====

@command("list_subjects", "listSubjects", "get_subjects")
def list_subjects(store: Store) -> list[dict]:
    return _run("LIST_SUBJECTS", lambda log: _dump(subject_svc.list_subjects(store)))


@command("create_subject", "createSubject")
def create_subject(store: Store, name: str, color_hex: str) -> dict:
    return _run(
        "CREATE_SUBJECT",
        lambda log: _dump(subject_svc.create_subject(store, name, color_hex, log)),
        {"name": name, "color_hex": color_hex},
    )


@command("update_subject", "updateSubject")
def update_subject(store: Store, id: str, name: str, color_hex: str) -> dict:
    return _run(
        "UPDATE_SUBJECT",
        lambda log: _dump(subject_svc.update_subject(store, id, name, color_hex, log)),
        {"id": id, "name": name, "color_hex": color_hex},
    )


@command("delete_subject", "deleteSubject")
def delete_subject(store: Store, id: str) -> None:
    _run("DELETE_SUBJECT", lambda log: subject_svc.delete_subject(store, id, log), {"id": id})


# ===== Notes =====

@command("list_notes", "listNotes", "get_notes")
def list_notes(store: Store, subject_id: str) -> list[dict]:
    return _run("LIST_NOTES", lambda log: _dump(note_svc.list_notes(store, subject_id)),
                {"subject_id": subject_id})


@command("list_all_notes", "listAllNotes", "get_all_notes")
def list_all_notes(store: Store) -> list[dict]:
    return _run("LIST_ALL_NOTES", lambda log: _dump(note_svc.list_all_notes(store)))


@command("get_note", "getNote")
def get_note(store: Store, id: str) -> dict:
    return _run("GET_NOTE", lambda log: _dump(note_svc.get_note(store, id)), {"id": id})


@command("create_note", "createNote")
def create_note(store: Store, subject_id: str, title: str = DEFAULT_NOTE_TITLE) -> dict:
    return _run(
        "CREATE_NOTE",
        lambda log: _dump(note_svc.create_note(store, subject_id, title, log)),
        {"subject_id": subject_id, "title": title},
    )


@command("update_note", "updateNote")
def update_note(store: Store, id: str, title: str, content_json: str, plain_text: str) -> dict:
    return _run(
        "UPDATE_NOTE",
        lambda log: _dump(note_svc.update_note(store, id, title, content_json, plain_text, log)),
        {"id": id, "title": title, "content_json": content_json, "plain_text": plain_text},
    )


@command("delete_note", "deleteNote")
def delete_note(store: Store, id: str) -> None:
    _run("DELETE_NOTE", lambda log: note_svc.delete_note(store, id, log), {"id": id})


@command("search_notes", "searchNotes")
def search_notes(store: Store, query: str) -> list[dict]:
    return _run("SEARCH_NOTES", lambda log: _dump(note_svc.search_notes(store, query)), {"query": query})


def invoke(store: Store, name: str, args: dict | None = None) -> dict:
    """Dispatch a command by name. Never raises for command failures."""
    fn = COMMANDS.get(name)
    if fn is None:
        return {"ok": False, "error": f"Unknown command: {name}"}
    try:
        bound = inspect.signature(fn).bind(store, **(args or {}))
    except TypeError as e:
        return {"ok": False, "error": f"invalid arguments for {name}: {e}"}
    try:
        data = fn(*bound.args, **bound.kwargs)
    except CommandError as e:
        return {"ok": False, "error": e.message}
    return {"ok": True, "data": data}
