import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from mydiary.db import StorageHandle  # noqa: E402
from mydiary.domain.notifier import ChangeNotifier  # noqa: E402
from mydiary.services.entries_svc import EntryService  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Never read a developer's config.yaml or write into the real data dir
    monkeypatch.setenv("MYDIARY_CONFIG", str(tmp_path / "no-config.yaml"))
    monkeypatch.setenv("MYDIARY_DATA_DIR", str(tmp_path / "data"))
    for k in ("MYDIARY_NOTIFIER_BUFFER", "MYDIARY_LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)


@pytest.fixture()
def data_dir(tmp_path):
    d = tmp_path / "store"
    d.mkdir()
    return d


@pytest.fixture()
def handle(data_dir):
    return StorageHandle(lambda: str(data_dir))


@pytest.fixture()
def service(handle):
    svc = EntryService(handle, ChangeNotifier(buffer_size=16))
    svc.open()
    yield svc
    if svc.handle.is_open:
        svc.close()


@pytest.fixture()
def client(service):
    from fastapi.testclient import TestClient
    from mydiary.api import app
    from mydiary.logs import ensure_log_schema
    from mydiary.services.entries_svc import get_service

    ensure_log_schema(service.handle)
    app.dependency_overrides[get_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
