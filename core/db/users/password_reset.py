"""
Password reset token storage.
"""
from __future__ import annotations

import hmac
from datetime import datetime
from typing import Dict, Optional

from core.db.base import get_conn
from core.db.users.user_store import _USER_COLUMNS, _row_to_user


def set_password_reset_token(user_id: str, token: str, expires_at: datetime) -> None:
    # Overwrites any earlier pending reset for this user.
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "UPDATE users SET password_reset_token = ?, password_reset_expiry = ? WHERE id = ?",
        (token, expires_at.isoformat(), user_id),
    )
    conn.commit()
    conn.close()


def get_user_by_password_reset_token(token: str) -> Optional[Dict]:
    if not token:
        return None
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"SELECT {_USER_COLUMNS} FROM users WHERE password_reset_token = ?",
        (token,),
    )
    row = cur.fetchone()
    conn.close()
    if not row or not hmac.compare_digest(row["password_reset_token"], token):
        return None
    return _row_to_user(row)


def reset_user_password(user_id: str, token: str, new_password_hash: str) -> bool:
    """Replace the hash and consume the token; False if the token is no longer pending."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE users
        SET password_hash = ?,
            password_reset_token = NULL,
            password_reset_expiry = NULL
        WHERE id = ? AND password_reset_token = ?
        """,
        (new_password_hash, user_id, token),
    )
    updated = cur.rowcount == 1
    conn.commit()
    conn.close()
    return updated


__all__ = [
    "set_password_reset_token",
    "get_user_by_password_reset_token",
    "reset_user_password",
]
