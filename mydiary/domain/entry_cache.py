from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .models import Entry


class EntryCache:
    """
    In-memory mirror of the ENTRY table keyed by entry id.

    The dict's insertion order is the order observers see: ``put`` of an
    existing id removes it first, so refreshed entries move to the end.
    At most one copy per id is ever held.
    """

    def __init__(self, entries: Iterable[Entry] = ()):
        self._by_id: Dict[int, Entry] = {}
        self.replace_all(entries)

    def replace_all(self, entries: Iterable[Entry]) -> None:
        self._by_id = {}
        for e in entries:
            self.put(e)

    def put(self, entry: Entry) -> None:
        self._by_id.pop(entry.id, None)
        self._by_id[entry.id] = entry

    def remove(self, entry_id: int) -> Optional[Entry]:
        return self._by_id.pop(entry_id, None)

    def clear(self) -> None:
        self._by_id.clear()

    def get(self, entry_id: int) -> Optional[Entry]:
        return self._by_id.get(entry_id)

    def snapshot(self) -> List[Entry]:
        return list(self._by_id.values())

    def for_user(self, user_id: int) -> List[Entry]:
        return [e for e in self._by_id.values() if e.user_id == user_id]

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
