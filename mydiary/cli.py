#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MyDiary (SQLite) command line

Commands:
  init                Create the database and tables, print the file location
  add-user            Get or create a user by email
  delete-user         Delete a user by email (their entries are kept)
  new-entry           Create an entry for a user, optionally with text
  edit                Replace the text of an entry (marks it as not synced)
  show                Print one entry
  list                Print all entries, optionally only one user's
  delete              Delete one entry by id
  purge               Delete every entry
  serve               Run the HTTP API with uvicorn

Notes:
- The database lives in <data_dir>/mydiary.db; see config.yaml / MYDIARY_DATA_DIR.
"""
from __future__ import annotations

import argparse
import os
import sys

from .config import configure_logging
from .exceptions import MyDiaryError
from .repository import entry_repo
from .services.entries_svc import EntryService


def _print_entry(e) -> None:
    synced = "synced" if e.is_synced_with_cloud else "dirty"
    print(f"#{e.id}\tuser={e.user_id}\t[{synced}]\t{e.text}")


# ---------------- Commands ----------------

def cmd_init(svc: EntryService, args):
    print(f"database: {svc.handle.path}")
    print(f"entries: {entry_repo.count_all(svc.handle.connection)}")


def cmd_add_user(svc: EntryService, args):
    print(svc.get_or_create_user(args.email))


def cmd_delete_user(svc: EntryService, args):
    svc.delete_user(args.email)
    print("OK")


def cmd_new_entry(svc: EntryService, args):
    owner = svc.get_user(args.email)
    entry = svc.create_entry(owner)
    if args.text:
        entry = svc.update_entry(entry, args.text)
    _print_entry(entry)


def cmd_edit(svc: EntryService, args):
    entry = svc.get_entry(args.id)
    _print_entry(svc.update_entry(entry, args.text))


def cmd_show(svc: EntryService, args):
    _print_entry(svc.get_entry(args.id))


def cmd_list(svc: EntryService, args):
    entries = svc.get_all_entries()
    if args.email:
        owner = svc.get_user(args.email)
        entries = [e for e in entries if e.user_id == owner.id]
    if not entries:
        print("(empty)")
    for e in entries:
        _print_entry(e)


def cmd_delete(svc: EntryService, args):
    svc.delete_entry(args.id)
    print("OK")


def cmd_purge(svc: EntryService, args):
    print(f"deleted {svc.delete_all_entries()} entries")


def cmd_serve(args):
    import uvicorn

    uvicorn.run("mydiary.api:app", host=args.host, port=args.port)


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mydiary", description="MyDiary local store (SQLite)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create the database")
    p_init.set_defaults(func=cmd_init)

    p_user = sub.add_parser("add-user", help="get or create a user")
    p_user.add_argument("--email", required=True)
    p_user.set_defaults(func=cmd_add_user)

    p_duser = sub.add_parser("delete-user", help="delete a user")
    p_duser.add_argument("--email", required=True)
    p_duser.set_defaults(func=cmd_delete_user)

    p_new = sub.add_parser("new-entry", help="create an entry")
    p_new.add_argument("--email", required=True)
    p_new.add_argument("--text", required=False)
    p_new.set_defaults(func=cmd_new_entry)

    p_edit = sub.add_parser("edit", help="replace an entry's text")
    p_edit.add_argument("--id", required=True, type=int)
    p_edit.add_argument("--text", required=True)
    p_edit.set_defaults(func=cmd_edit)

    p_show = sub.add_parser("show", help="print one entry")
    p_show.add_argument("--id", required=True, type=int)
    p_show.set_defaults(func=cmd_show)

    p_list = sub.add_parser("list", help="print entries")
    p_list.add_argument("--email", required=False)
    p_list.set_defaults(func=cmd_list)

    p_del = sub.add_parser("delete", help="delete one entry")
    p_del.add_argument("--id", required=True, type=int)
    p_del.set_defaults(func=cmd_delete)

    p_purge = sub.add_parser("purge", help="delete every entry")
    p_purge.set_defaults(func=cmd_purge)

    p_serve = sub.add_parser("serve", help="run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", default=8000, type=int)
    p_serve.set_defaults(func=None, serve=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.config:
        os.environ["MYDIARY_CONFIG"] = args.config
    configure_logging()

    if getattr(args, "serve", False):
        cmd_serve(args)
        return 0
    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    svc = EntryService()
    try:
        svc.open()
    except MyDiaryError as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    try:
        args.func(svc, args)
    except MyDiaryError as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    finally:
        svc.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
