from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..exceptions import MyDiaryError
from ..logs import LogContext
from ..services.entries_svc import EntryService, get_service
from .errors import http_error

router = APIRouter()


class UserBody(BaseModel):
    email: str


@router.post("/api/users", status_code=201)
def api_user_create(body: UserBody, svc: EntryService = Depends(get_service)):
    log = LogContext("CREATE_USER", svc.handle)
    log.set_payload(body.model_dump())
    try:
        user = svc.create_user(body.email)
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.set_entity("user", user.id)
    log.set_after(user.to_dict())
    log.write("OK")
    return user.to_dict()


@router.post("/api/users/get-or-create")
def api_user_get_or_create(body: UserBody, svc: EntryService = Depends(get_service)):
    log = LogContext("GET_OR_CREATE_USER", svc.handle)
    log.set_payload(body.model_dump())
    try:
        user = svc.get_or_create_user(body.email)
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.set_entity("user", user.id)
    log.write("OK")
    return user.to_dict()


@router.get("/api/users/{email}")
def api_user_get(email: str, svc: EntryService = Depends(get_service)):
    try:
        return svc.get_user(email).to_dict()
    except MyDiaryError as e:
        raise http_error(e)


@router.delete("/api/users/{email}")
def api_user_delete(email: str, svc: EntryService = Depends(get_service)):
    log = LogContext("DELETE_USER", svc.handle)
    log.set_payload({"email": email})
    try:
        svc.delete_user(email)
    except MyDiaryError as e:
        log.write("ERROR", type(e).__name__)
        raise http_error(e)
    log.write("OK")
    return {"message": "ok"}
