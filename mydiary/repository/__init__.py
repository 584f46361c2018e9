"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so the service avoids SQL strings.
Column and table names are upper-case to match the on-disk schema.
"""
from __future__ import annotations
