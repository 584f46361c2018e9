from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..repository import entry_repo, user_repo


@dataclass(frozen=True, eq=False)
class User:
    """A diary account. Equality and hashing use the store-assigned id only."""
    id: int
    email: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(id=int(row[user_repo.ID_COLUMN]), email=str(row[user_repo.EMAIL_COLUMN]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"Person ID = {self.id}, email = {self.email}"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True, eq=False)
class Entry:
    """A diary entry owned by one user. Equality and hashing use the id only."""
    id: int
    user_id: int
    text: str
    is_synced_with_cloud: bool

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Entry":
        return cls(
            id=int(row[entry_repo.ID_COLUMN]),
            user_id=int(row[entry_repo.USER_ID_COLUMN]),
            text=row[entry_repo.TEXT_COLUMN] or "",
            is_synced_with_cloud=int(row[entry_repo.IS_SYNCED_WITH_CLOUD_COLUMN]) == 1,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"EntryId = {self.id}, userId = {self.user_id}, isSyncedWithCloud = {self.is_synced_with_cloud}"

    def same_content(self, other: "Entry") -> bool:
        """Field-by-field comparison, for callers that need value equality."""
        return (self.id, self.user_id, self.text, self.is_synced_with_cloud) == (
            other.id, other.user_id, other.text, other.is_synced_with_cloud,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "text": self.text,
            "is_synced_with_cloud": self.is_synced_with_cloud,
        }
