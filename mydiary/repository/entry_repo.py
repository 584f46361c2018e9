from __future__ import annotations

from sqlite3 import Connection, Row
from typing import Optional

ID_COLUMN = "ID"
USER_ID_COLUMN = "USER_ID"
TEXT_COLUMN = "TEXT"
IS_SYNCED_WITH_CLOUD_COLUMN = "IS_SYNCED_WITH_CLOUD"

_COLUMNS = '"ID", "USER_ID", "TEXT", "IS_SYNCED_WITH_CLOUD"'


def ensure_schema(conn: Connection):
    # USER_ID is declared as a foreign key but not enforced (PRAGMA foreign_keys stays off),
    # so deleting a user leaves its entries behind.
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS "ENTRY" (
            "ID"                   INTEGER NOT NULL,
            "USER_ID"              INTEGER NOT NULL,
            "TEXT"                 TEXT,
            "IS_SYNCED_WITH_CLOUD" INTEGER NOT NULL DEFAULT 0,
            FOREIGN KEY("USER_ID") REFERENCES "USER"("ID"),
            PRIMARY KEY("ID" AUTOINCREMENT)
        )
        """
    )


def insert(conn: Connection, user_id: int, text: str, is_synced: bool) -> int:
    cur = conn.execute(
        'INSERT INTO "ENTRY"("USER_ID", "TEXT", "IS_SYNCED_WITH_CLOUD") VALUES(?,?,?)',
        (user_id, text, 1 if is_synced else 0),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, entry_id: int) -> Optional[Row]:
    return conn.execute(
        f'SELECT {_COLUMNS} FROM "ENTRY" WHERE "ID"=? LIMIT 1', (entry_id,)
    ).fetchone()


def list_all(conn: Connection) -> list[Row]:
    return conn.execute(f'SELECT {_COLUMNS} FROM "ENTRY" ORDER BY "ID" ASC').fetchall()


def count_all(conn: Connection) -> int:
    return int(conn.execute('SELECT COUNT(1) AS c FROM "ENTRY"').fetchone()["c"])


def update_text(conn: Connection, entry_id: int, text: str) -> int:
    """Replace the text and mark the entry as not synced. Returns the number of rows touched."""
    return conn.execute(
        'UPDATE "ENTRY" SET "TEXT"=?, "IS_SYNCED_WITH_CLOUD"=0 WHERE "ID"=?',
        (text, entry_id),
    ).rowcount


def delete(conn: Connection, entry_id: int) -> int:
    return conn.execute('DELETE FROM "ENTRY" WHERE "ID"=?', (entry_id,)).rowcount


def delete_all(conn: Connection) -> int:
    return conn.execute('DELETE FROM "ENTRY"').rowcount
