from __future__ import annotations

from fastapi import APIRouter, Depends

from ..logs import search_logs
from ..services.entries_svc import EntryService, get_service

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = 1,
    size: int = 20,
    action: str | None = None,
    query: str | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
    svc: EntryService = Depends(get_service),
):
    total, items = search_logs(svc.handle, query, action, ts_from, ts_to, page, size)
    return {"total": total, "items": items}
