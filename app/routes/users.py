from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from app.auth_service import AuthService
from app.auth_utils import require_verified_user
from app.dependencies import get_auth_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me")
def me(user: dict = Depends(require_verified_user), auth: AuthService = Depends(get_auth_service)):
    return auth.get_profile(user["id"])


@router.patch("/profile")
def update_profile(
    fields: Dict[str, Any] = Body(...),
    user: dict = Depends(require_verified_user),
    auth: AuthService = Depends(get_auth_service),
):
    return auth.update_profile(user["id"], fields)
