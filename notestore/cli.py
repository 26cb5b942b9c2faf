#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Notes store (SQLite)

Commands:
  init            Create the database file and apply the schema
  subjects        List subjects by name
  add-subject     Create a subject
  edit-subject    Rename / recolour a subject
  rm-subject      Delete a subject and all of its notes
  notes           List notes (all, or for one subject), newest first
  show-note       Print one note
  add-note        Create an empty note in a subject
  edit-note       Overwrite a note's title, content and search text
  rm-note         Delete a note
  search          Substring search over titles and note text (max 20)

Output is JSON on stdout. Failures print the message to stderr and exit 1.
"""
from __future__ import annotations

import argparse
import json
import sys

from . import commands
from .config import read_config
from .db import Store
from .errors import StorageUnavailable
from .logs import configure_logging
from .models import DEFAULT_NOTE_TITLE, DEFAULT_SUBJECT_COLOR


def _emit(data):
    if data is not None:
        print(json.dumps(data, ensure_ascii=False, indent=2))


def _read_text(value: str | None, path: str | None) -> str:
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    return value or ""


# ---------------- Commands ----------------

def cmd_init(store: Store, args):
    return {"db_path": store.path, "journal_mode": store.journal_mode, "tables": store.tables()}


def cmd_subjects(store: Store, args):
    return commands.list_subjects(store)


def cmd_add_subject(store: Store, args):
    return commands.create_subject(store, args.name, args.color)


def cmd_edit_subject(store: Store, args):
    return commands.update_subject(store, args.id, args.name, args.color)


def cmd_rm_subject(store: Store, args):
    commands.delete_subject(store, args.id)


def cmd_notes(store: Store, args):
    if args.subject:
        return commands.list_notes(store, args.subject)
    return commands.list_all_notes(store)


def cmd_show_note(store: Store, args):
    return commands.get_note(store, args.id)


def cmd_add_note(store: Store, args):
    return commands.create_note(store, args.subject, args.title)


def cmd_edit_note(store: Store, args):
    current = commands.get_note(store, args.id)
    title = args.title if args.title is not None else current["title"]
    content = _read_text(args.content, args.content_file) if (args.content is not None or args.content_file) else current["content_json"]
    plain = args.plain_text if args.plain_text is not None else current["plain_text"]
    return commands.update_note(store, args.id, title, content, plain)


def cmd_rm_note(store: Store, args):
    commands.delete_note(store, args.id)


def cmd_search(store: Store, args):
    return commands.search_notes(store, args.query)


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notestore", description="Notes store (SQLite)")
    parser.add_argument("--config", default=None, help="config.yaml path")
    parser.add_argument("--db", default=None, help="database file (overrides config)")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers()

    p = sub.add_parser("init", help="create db file and schema")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("subjects", help="list subjects")
    p.set_defaults(func=cmd_subjects)

    p = sub.add_parser("add-subject", help="create a subject")
    p.add_argument("name")
    p.add_argument("--color", default=DEFAULT_SUBJECT_COLOR)
    p.set_defaults(func=cmd_add_subject)

    p = sub.add_parser("edit-subject", help="update a subject")
    p.add_argument("id")
    p.add_argument("--name", required=True)
    p.add_argument("--color", required=True)
    p.set_defaults(func=cmd_edit_subject)

    p = sub.add_parser("rm-subject", help="delete a subject and its notes")
    p.add_argument("id")
    p.set_defaults(func=cmd_rm_subject)

    p = sub.add_parser("notes", help="list notes")
    p.add_argument("--subject", required=False, help="subject id")
    p.set_defaults(func=cmd_notes)

    p = sub.add_parser("show-note", help="print one note")
    p.add_argument("id")
    p.set_defaults(func=cmd_show_note)

    p = sub.add_parser("add-note", help="create a note")
    p.add_argument("--subject", required=True, help="subject id")
    p.add_argument("--title", default=DEFAULT_NOTE_TITLE)
    p.set_defaults(func=cmd_add_note)

    p = sub.add_parser("edit-note", help="update a note; omitted fields keep their value")
    p.add_argument("id")
    p.add_argument("--title")
    p.add_argument("--content", help="content JSON")
    p.add_argument("--content-file", help="read content JSON from file")
    p.add_argument("--plain-text")
    p.set_defaults(func=cmd_edit_note)

    p = sub.add_parser("rm-note", help="delete a note")
    p.add_argument("id")
    p.set_defaults(func=cmd_rm_note)

    p = sub.add_parser("search", help="search titles and text")
    p.add_argument("query")
    p.set_defaults(func=cmd_search)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    cfg = read_config(args.config)
    configure_logging(args.log_level or cfg["log_level"])
    try:
        store = Store(args.db, config=cfg)
    except StorageUnavailable as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        _emit(args.func(store, args))
    except commands.CommandError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
