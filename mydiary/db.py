from __future__ import annotations

# mydiary/db.py
import logging
import os
import sqlite3
import sys
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .config import get_config
from .exceptions import DatabaseAlreadyOpen, DatabaseNotOpen, UnableToResolveStorageLocation
from .repository import entry_repo, user_repo

logger = logging.getLogger(__name__)

DB_NAME = "mydiary.db"
APP_DIR_NAME = "mydiary"


def _platform_data_dir() -> str:
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA")
        if base:
            return os.path.join(base, APP_DIR_NAME)
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return os.path.join(xdg, APP_DIR_NAME)
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise UnableToResolveStorageLocation("no home directory to place the database in")
    return os.path.join(home, ".local", "share", APP_DIR_NAME)


def resolve_storage_dir() -> str:
    """
    数据目录解析顺序：config (MYDIARY_DATA_DIR / config.yaml data_dir)，
    否则使用平台默认的应用私有目录。目录不存在则创建。
    """
    path = get_config()["data_dir"] or _platform_data_dir()
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise UnableToResolveStorageLocation(f"cannot create data directory {path}: {e}") from e
    return path


class StorageHandle:
    """Owns the single SQLite connection to ``<data dir>/mydiary.db``."""

    def __init__(self, dir_resolver: Callable[[], Optional[str]] = resolve_storage_dir):
        self._dir_resolver = dir_resolver
        self._conn: sqlite3.Connection | None = None
        self._path: str | None = None
        # held for the whole of a transaction; statements outside one take it too
        self.lock = threading.RLock()
        self._after_tx: list[Callable[[], None]] = []

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def connection(self) -> sqlite3.Connection:
        conn = self._conn
        if conn is None:
            raise DatabaseNotOpen()
        return conn

    def open(self) -> None:
        if self._conn is not None:
            raise DatabaseAlreadyOpen()
        try:
            directory = self._dir_resolver()
        except OSError as e:
            raise UnableToResolveStorageLocation(str(e)) from e
        if not directory:
            raise UnableToResolveStorageLocation("storage directory resolver returned nothing")

        path = os.path.join(directory, DB_NAME)
        # isolation_level=None: autocommit, transactions are explicit (see transaction())
        conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        conn.row_factory = sqlite3.Row
        try:
            user_repo.ensure_schema(conn)
            entry_repo.ensure_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        self._conn = conn
        self._path = path
        logger.info("opened database %s", path)

    def close(self) -> None:
        with self.lock:
            conn = self._conn
            if conn is None:
                raise DatabaseNotOpen()
            conn.close()
            self._conn = None
        logger.info("closed database %s", self._path)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        单事务执行多条语句；嵌套调用并入外层事务。
        Commits on success, rolls back and re-raises on any exception.
        Callbacks queued with after_transaction() run once the outermost
        transaction has ended, whichever way it ended.
        """
        with self.lock:
            conn = self.connection
            if conn.in_transaction:
                yield conn
                return
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            else:
                conn.commit()
            finally:
                self._run_after_transaction()

    def after_transaction(self, fn: Callable[[], None]) -> None:
        """Run ``fn`` now, or after the open transaction if one is in progress."""
        with self.lock:
            conn = self.connection
            if conn.in_transaction:
                self._after_tx.append(fn)
                return
            fn()

    def _run_after_transaction(self) -> None:
        pending, self._after_tx = self._after_tx, []
        for fn in pending:
            try:
                fn()
            except Exception:
                # logged only; the transaction outcome stands
                logger.exception("after-transaction callback failed")
