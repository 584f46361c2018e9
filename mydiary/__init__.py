"""MyDiary local persistence layer (SQLite + in-memory entry cache)."""
from __future__ import annotations

__version__ = "0.1.0"
