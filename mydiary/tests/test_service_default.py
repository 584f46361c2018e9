from __future__ import annotations

import os

import pytest

from mydiary.services import entries_svc


@pytest.fixture()
def default_service(monkeypatch):
    monkeypatch.setattr(entries_svc, "_default_service", None)
    yield
    svc = entries_svc._default_service
    if svc is not None and svc.handle.is_open:
        svc.close()


def test_get_service_opens_lazily_with_log_schema(default_service, tmp_path):
    svc = entries_svc.get_service()
    assert svc.handle.is_open
    assert svc.handle.path == os.path.join(str(tmp_path / "data"), "mydiary.db")
    tables = {r[0] for r in svc.handle.connection.execute(
        "SELECT name FROM sqlite_master WHERE type='table'").fetchall()}
    assert {"USER", "ENTRY", "operation_log"} <= tables
    assert entries_svc.get_service() is svc


def test_get_service_reopens_after_close(default_service):
    svc = entries_svc.get_service()
    svc.close()
    again = entries_svc.get_service()
    assert again is svc
    assert again.handle.is_open
