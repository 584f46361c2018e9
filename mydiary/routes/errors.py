from __future__ import annotations

from fastapi import HTTPException

from ..exceptions import (
    CouldNotDeleteUser,
    CouldNotUpdateEntry,
    DatabaseNotOpen,
    EntryNotFound,
    MyDiaryError,
    UserAlreadyExists,
    UserNotFound,
)

_STATUS = [
    (UserNotFound, 404),
    (EntryNotFound, 404),
    (CouldNotDeleteUser, 404),
    (UserAlreadyExists, 409),
    (CouldNotUpdateEntry, 400),
    (DatabaseNotOpen, 503),
]


def http_error(e: MyDiaryError) -> HTTPException:
    for kind, status in _STATUS:
        if isinstance(e, kind):
            return HTTPException(status_code=status, detail=type(e).__name__)
    return HTTPException(status_code=500, detail=type(e).__name__)
