from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..domain.models import User
from ..exceptions import MyDiaryError
from ..logs import LogContext
from ..services.entries_svc import EntryService, get_service
from .errors import http_error

router = APIRouter()


class OwnerBody(BaseModel):
    id: int
    email: str


class EntryCreate(BaseModel):
    owner: OwnerBody


class EntryUpdate(BaseModel):
    text: str


@router.post("/api/entries", status_code=201)
def api_entry_create(body: EntryCreate, svc: EntryService = Depends(get_service)):
    log = LogContext("CREATE_ENTRY", svc.handle)
    log.set_payload(body.model_dump())
    try:
        entry = svc.create_entry(User(id=body.owner.id, email=body.owner.email))
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.set_entity("entry", entry.id)
    log.set_after(entry.to_dict())
    log.write("OK")
    return entry.to_dict()


@router.get("/api/entries")
def api_entry_list(svc: EntryService = Depends(get_service)):
    try:
        items = [e.to_dict() for e in svc.get_all_entries()]
    except MyDiaryError as e:
        raise http_error(e)
    return {"total": len(items), "items": items}


@router.get("/api/entries/cached")
def api_entry_cached(user_id: Optional[int] = None, svc: EntryService = Depends(get_service)):
    entries = svc.entries
    if user_id is not None:
        entries = [e for e in entries if e.user_id == user_id]
    return {"items": [e.to_dict() for e in entries]}


@router.get("/api/entries/{entry_id}")
def api_entry_get(entry_id: int, svc: EntryService = Depends(get_service)):
    try:
        return svc.get_entry(entry_id).to_dict()
    except MyDiaryError as e:
        raise http_error(e)


@router.put("/api/entries/{entry_id}")
def api_entry_update(entry_id: int, body: EntryUpdate, svc: EntryService = Depends(get_service)):
    log = LogContext("UPDATE_ENTRY", svc.handle)
    log.set_entity("entry", entry_id)
    log.set_payload(body.model_dump())
    try:
        before = svc.get_entry(entry_id)
        log.set_before(before.to_dict())
        updated = svc.update_entry(before, body.text)
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.set_after(updated.to_dict())
    log.write("OK")
    return updated.to_dict()


@router.delete("/api/entries/{entry_id}")
def api_entry_delete(entry_id: int, svc: EntryService = Depends(get_service)):
    log = LogContext("DELETE_ENTRY", svc.handle)
    log.set_entity("entry", entry_id)
    try:
        svc.delete_entry(entry_id)
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.write("OK")
    return {"message": "ok"}


@router.delete("/api/entries")
def api_entry_delete_all(svc: EntryService = Depends(get_service)):
    log = LogContext("DELETE_ALL_ENTRIES", svc.handle)
    try:
        deleted = svc.delete_all_entries()
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.set_after({"deleted": deleted})
    log.write("OK")
    return {"message": "ok", "deleted": deleted}
