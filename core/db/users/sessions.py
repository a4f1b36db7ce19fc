"""
Session storage helpers.

Sessions have a fixed absolute lifetime; activity does not extend them.
"""
from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Dict, Optional

from core.db.base import get_conn, parse_timestamp, utcnow

SESSION_LIFETIME_DAYS = 7
SESSION_LIFETIME = timedelta(days=SESSION_LIFETIME_DAYS)


def create_session(user_id: str) -> str:
    """Create a new login session for the given user_id and return the session id."""
    session_id = secrets.token_urlsafe(32)
    now = utcnow()

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO sessions (id, user_id, created_at, expires_at)
        VALUES (?, ?, ?, ?)
        """,
        (session_id, user_id, now.isoformat(), (now + SESSION_LIFETIME).isoformat()),
    )
    conn.commit()
    conn.close()

    return session_id


def delete_session(session_id: str) -> None:
    """Remove a session (logout). Unknown or empty ids are a no-op."""
    if not session_id:
        return

    conn = get_conn()
    cur = conn.cursor()
    cur.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
    conn.commit()
    conn.close()


def get_session(session_id: str) -> Optional[Dict]:
    """
    Look up a session by id.
    - Returns None if it does not exist or has expired.
    - If expired, it is removed from the DB.
    """
    if not session_id:
        return None

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "SELECT id, user_id, created_at, expires_at FROM sessions WHERE id = ?",
        (session_id,),
    )
    row = cur.fetchone()
    conn.close()

    if not row:
        return None

    expires_at = parse_timestamp(row["expires_at"])
    if expires_at is None or expires_at < utcnow():
        delete_session(session_id)
        return None

    return row


def resolve_session(session_id: str) -> Optional[str]:
    session = get_session(session_id)
    return session["user_id"] if session else None


__all__ = [
    "SESSION_LIFETIME_DAYS",
    "SESSION_LIFETIME",
    "create_session",
    "delete_session",
    "get_session",
    "resolve_session",
]
