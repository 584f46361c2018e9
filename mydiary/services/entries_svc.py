"""
Entry service: CRUD over USER / ENTRY plus the in-memory entry cache.

Every mutating call follows the same order:
  1) write to SQLite (one transaction per call)
  2) update the EntryCache
  3) publish the full cache snapshot through the ChangeNotifier
A call that fails in step 1 leaves the cache and subscribers untouched.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ..config import get_config
from ..db import StorageHandle
from ..domain.entry_cache import EntryCache
from ..domain.models import Entry, User
from ..domain.notifier import ChangeNotifier, Subscription
from ..exceptions import (
    CouldNotDeleteEntry,
    CouldNotDeleteUser,
    CouldNotUpdateEntry,
    DatabaseAlreadyOpen,
    EntryNotFound,
    UserAlreadyExists,
    UserNotFound,
)
from ..logs import ensure_log_schema
from ..repository import entry_repo, user_repo

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.lower()


class EntryService:
    def __init__(self, handle: Optional[StorageHandle] = None, notifier: Optional[ChangeNotifier] = None):
        self.handle = handle or StorageHandle()
        self.notifier = notifier or ChangeNotifier(get_config()["notifier_buffer"])
        self._cache = EntryCache()
        self._lock = threading.RLock()

    # ---------------- lifecycle ----------------

    def open(self) -> None:
        with self._lock:
            self.handle.open()
            try:
                self._cache_entries()
            except Exception:
                self.handle.close()
                raise

    def ensure_open(self) -> None:
        try:
            self.open()
        except DatabaseAlreadyOpen:
            pass

    def close(self) -> None:
        with self._lock:
            self.handle.close()

    def _cache_entries(self) -> None:
        self._cache.replace_all(self.get_all_entries())
        logger.debug("cached %d entries", len(self._cache))
        self._publish()

    def _publish(self) -> None:
        self.notifier.publish(self._cache.snapshot())

    # ---------------- subscription / cache views ----------------

    def subscribe(self, maxsize: Optional[int] = None) -> Subscription:
        return self.notifier.subscribe(maxsize)

    @property
    def entries(self) -> List[Entry]:
        with self._lock:
            return self._cache.snapshot()

    def entries_for_user(self, user: User) -> List[Entry]:
        with self._lock:
            return self._cache.for_user(user.id)

    # ---------------- users ----------------

    def create_user(self, email: str) -> User:
        email_n = normalize_email(email)
        with self._lock, self.handle.transaction() as conn:
            if user_repo.exists(conn, email_n):
                raise UserAlreadyExists(email_n)
            user_id = user_repo.insert(conn, email_n)
        logger.debug("created user %d <%s>", user_id, email_n)
        return User(id=user_id, email=email_n)

    def get_user(self, email: str) -> User:
        with self._lock, self.handle.lock:
            row = user_repo.get_by_email(self.handle.connection, normalize_email(email))
        if row is None:
            raise UserNotFound(email)
        return User.from_row(row)

    def get_or_create_user(self, email: str) -> User:
        try:
            return self.get_user(email)
        except UserNotFound:
            return self.create_user(email)

    def delete_user(self, email: str) -> None:
        # Entries owned by the user are kept.
        with self._lock, self.handle.transaction() as conn:
            deleted = user_repo.delete_by_email(conn, normalize_email(email))
            if deleted != 1:
                raise CouldNotDeleteUser(email)
        logger.debug("deleted user <%s>", normalize_email(email))

    # ---------------- entries ----------------

    def create_entry(self, owner: User) -> Entry:
        text = ""
        with self._lock:
            with self.handle.transaction() as conn:
                row = user_repo.get_by_email(conn, normalize_email(owner.email))
                # owner must exist AND carry the same id as the stored user
                if row is None or User.from_row(row) != owner:
                    raise UserNotFound(owner.email)
                entry_id = entry_repo.insert(conn, owner.id, text, is_synced=True)
            entry = Entry(id=entry_id, user_id=owner.id, text=text, is_synced_with_cloud=True)
            self._cache.put(entry)
            self._publish()
        logger.debug("created entry %d for user %d", entry.id, owner.id)
        return entry

    def _fetch_entry(self, conn, entry_id: int) -> Entry:
        row = entry_repo.get_one(conn, entry_id)
        if row is None:
            raise EntryNotFound(entry_id)
        return Entry.from_row(row)

    def get_entry(self, entry_id: int) -> Entry:
        with self._lock:
            entry = self._fetch_entry(self.handle.connection, entry_id)
            # the cached copy may be stale; the row just read wins
            self._cache.put(entry)
            self._publish()
        return entry

    def get_all_entries(self) -> List[Entry]:
        with self._lock, self.handle.lock:
            return [Entry.from_row(r) for r in entry_repo.list_all(self.handle.connection)]

    def update_entry(self, entry: Entry, text: str) -> Entry:
        with self._lock:
            with self.handle.transaction() as conn:
                self._fetch_entry(conn, entry.id)
                if entry_repo.update_text(conn, entry.id, text) == 0:
                    raise CouldNotUpdateEntry(entry.id)
                updated = self._fetch_entry(conn, entry.id)
            self._cache.put(updated)
            self._publish()
        logger.debug("updated entry %d", updated.id)
        return updated

    def delete_entry(self, entry_id: int) -> None:
        with self._lock:
            with self.handle.transaction() as conn:
                if entry_repo.delete(conn, entry_id) == 0:
                    raise CouldNotDeleteEntry(entry_id)
            self._cache.remove(entry_id)
            self._publish()
        logger.debug("deleted entry %d", entry_id)

    def delete_all_entries(self) -> int:
        with self._lock:
            with self.handle.transaction() as conn:
                deleted = entry_repo.delete_all(conn)
            self._cache.clear()
            self._publish()
        logger.info("deleted all entries (%d)", deleted)
        return deleted


_default_service: Optional[EntryService] = None
_default_lock = threading.Lock()


def get_service() -> EntryService:
    """Process-wide service for the HTTP and CLI entry points; opened on first use."""
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = EntryService()
        if not _default_service.handle.is_open:
            _default_service.open()
            ensure_log_schema(_default_service.handle)
        return _default_service
