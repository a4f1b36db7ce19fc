"""
Email verification token storage.

The pending token lives on the user row, so issuing a new token overwrites
(and invalidates) any previous one.
"""
from __future__ import annotations

import hmac
from datetime import datetime
from typing import Dict, Optional

from core.db.base import get_conn
from core.db.users.user_store import _USER_COLUMNS, _row_to_user


def set_email_verification_token(user_id: str, token: str, expires_at: datetime) -> None:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE users
        SET email_verification_token = ?, email_verification_expiry = ?
        WHERE id = ?
        """,
        (token, expires_at.isoformat(), user_id),
    )
    conn.commit()
    conn.close()


def get_user_by_verification_token(token: str) -> Optional[Dict]:
    """Return the user holding this exact pending token, expired or not."""
    if not token:
        return None
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"SELECT {_USER_COLUMNS} FROM users WHERE email_verification_token = ?",
        (token,),
    )
    row = cur.fetchone()
    conn.close()
    if not row or not hmac.compare_digest(row["email_verification_token"], token):
        return None
    return _row_to_user(row)


def mark_user_email_verified(user_id: str, token: str) -> bool:
    """
    Set email_verified and clear the pending token in one statement.
    Only matches while `token` is still pending, so a replay returns False.
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE users
        SET email_verified = 1,
            email_verification_token = NULL,
            email_verification_expiry = NULL
        WHERE id = ? AND email_verification_token = ?
        """,
        (user_id, token),
    )
    updated = cur.rowcount == 1
    conn.commit()
    conn.close()
    return updated


__all__ = [
    "set_email_verification_token",
    "get_user_by_verification_token",
    "mark_user_email_verified",
]
