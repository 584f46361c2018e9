from __future__ import annotations

from sqlite3 import Connection, Row
from typing import Optional

ID_COLUMN = "ID"
EMAIL_COLUMN = "EMAIL"


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS "USER" (
            "ID"    INTEGER NOT NULL,
            "EMAIL" TEXT NOT NULL UNIQUE,
            PRIMARY KEY("ID" AUTOINCREMENT)
        )
        """
    )


def get_by_email(conn: Connection, email: str) -> Optional[Row]:
    return conn.execute(
        'SELECT "ID", "EMAIL" FROM "USER" WHERE "EMAIL"=? LIMIT 1', (email,)
    ).fetchone()


def exists(conn: Connection, email: str) -> bool:
    row = conn.execute('SELECT 1 FROM "USER" WHERE "EMAIL"=? LIMIT 1', (email,)).fetchone()
    return row is not None


def insert(conn: Connection, email: str) -> int:
    cur = conn.execute('INSERT INTO "USER"("EMAIL") VALUES(?)', (email,))
    return int(cur.lastrowid)


def delete_by_email(conn: Connection, email: str) -> int:
    return conn.execute('DELETE FROM "USER" WHERE "EMAIL"=?', (email,)).rowcount
