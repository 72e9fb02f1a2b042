from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from userhub.domain.validators import ensure_present_keys
from userhub.services.errors import (
    AmbiguousMatchError,
    DuplicateActiveMobileError,
    InternalError,
    InvalidInputError,
    ManagerInactiveError,
    ManagerNotFoundError,
    UserNotFoundError,
    UserServiceError,
)
from userhub.services.user_service import UserService

router = APIRouter(tags=["users"])

ERROR_STATUS: dict[type[UserServiceError], int] = {
    InvalidInputError: 400,
    ManagerNotFoundError: 400,
    ManagerInactiveError: 400,
    UserNotFoundError: 404,
    DuplicateActiveMobileError: 409,
    AmbiguousMatchError: 409,
    InternalError: 500,
}


def error_status(exc: UserServiceError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def failure(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


@router.post("/create_user")
def create_user(request: Request, payload: dict = Body(...)):
    user_id = _get_user_service(request).create(payload)
    return {"success": True, "message": "User created", "user_id": user_id}


@router.post("/get_users")
def get_users(request: Request, payload: Optional[dict] = Body(default=None)):
    payload = payload or {}
    users = _get_user_service(request).read(
        user_id=payload.get("user_id"),
        mob_num=payload.get("mob_num"),
        manager_id=payload.get("manager_id"),
    )
    return {"success": True, "users": [user.as_dict() for user in users]}


@router.post("/delete_user")
def delete_user(request: Request, payload: Optional[dict] = Body(default=None)):
    payload = payload or {}
    _get_user_service(request).delete(user_id=payload.get("user_id"), mob_num=payload.get("mob_num"))
    return {"success": True, "message": "User deleted"}


@router.post("/update_user")
def update_user(request: Request, payload: dict = Body(...)):
    missing = ensure_present_keys(payload, ["user_ids", "update_data"])
    if missing:
        raise InvalidInputError(f"Missing: {', '.join(missing)}", field=missing[0])
    _get_user_service(request).batch_update(payload["user_ids"], payload["update_data"])
    return {"success": True, "message": "Update successful"}
