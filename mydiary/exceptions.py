"""MyDiary exception hierarchy."""

from __future__ import annotations


class MyDiaryError(Exception):
    """Base exception for all persistence-layer errors."""


# ---------------- Lifecycle ----------------

class DatabaseAlreadyOpen(MyDiaryError):
    """Raised by open() while a connection is already held."""


class DatabaseNotOpen(MyDiaryError):
    """Raised when an operation needs a connection and none is held."""


class UnableToResolveStorageLocation(MyDiaryError):
    """Raised when no writable data directory can be determined."""


# ---------------- Users ----------------

class UserAlreadyExists(MyDiaryError):
    pass


class UserNotFound(MyDiaryError):
    """Raised when an email lookup fails, or the owner of a new entry does not match."""


class CouldNotDeleteUser(MyDiaryError):
    pass


# ---------------- Entries ----------------

class EntryNotFound(MyDiaryError):
    pass


class CouldNotUpdateEntry(MyDiaryError):
    pass


class CouldNotDeleteEntry(EntryNotFound):
    """Raised when deleting an entry id removed no row."""
