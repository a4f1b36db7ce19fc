"""
Helpers for session cookies and current-user lookup.
"""
from __future__ import annotations

import os

from fastapi import Request
from fastapi.responses import Response

from core.database import SESSION_LIFETIME, delete_session, get_user_by_id, resolve_session
from core.errors import Forbidden, Unauthorized

SESSION_COOKIE_NAME = "session_id"
SESSION_COOKIE_MAX_AGE = int(SESSION_LIFETIME.total_seconds())  # 7 days, absolute


def _secure_cookies() -> bool:
    return (
        os.getenv("COOKIE_SECURE", "").lower() in ("1", "true", "yes")
        or os.getenv("PUBLIC_BASE_URL", "").lower().startswith("https://")
    )


def require_verified_user(request: Request) -> dict:
    """
    FastAPI dependency for protected routes.
    401 when there is no live session, 403 when the session's user is gone or unverified.
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise Unauthorized()

    user_id = resolve_session(token)
    if not user_id:
        raise Unauthorized()

    user = get_user_by_id(user_id)
    if not user or not user.get("email_verified"):
        delete_session(token)
        raise Forbidden("Email verification required")
    return user


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=SESSION_COOKIE_MAX_AGE,
        samesite="lax",
        secure=_secure_cookies(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, httponly=True, samesite="lax", secure=_secure_cookies())


__all__ = [
    "SESSION_COOKIE_NAME",
    "SESSION_COOKIE_MAX_AGE",
    "require_verified_user",
    "set_session_cookie",
    "clear_session_cookie",
]
