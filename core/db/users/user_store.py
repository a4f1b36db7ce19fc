"""
User CRUD helpers.
"""
from __future__ import annotations

import uuid
from typing import Dict, Iterable, Optional

from core.db.base import get_conn, is_unique_violation, utcnow
from core.errors import DuplicateEmail, ValidationError

USER_TYPES = ("disabled", "non-disabled")

# Only these columns may be changed through update_user.
MUTABLE_USER_FIELDS = ("email",)

_USER_COLUMNS = """
    id, email, password_hash, user_type, email_verified,
    email_verification_token, email_verification_expiry,
    password_reset_token, password_reset_expiry, created_at
"""


def _row_to_user(row: Optional[Dict]) -> Optional[Dict]:
    if not row:
        return None
    user = dict(row)
    user["email_verified"] = bool(user.get("email_verified"))
    return user


def _fetch_user(where: str, value) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where} = ?", (value,))
    row = cur.fetchone()
    conn.close()
    return _row_to_user(row)


def create_user(email: str, password_hash: str, user_type: str) -> Dict:
    """
    Insert a new, unverified user and return it.
    Raises DuplicateEmail if the UNIQUE constraint on email fires.
    """
    user_id = uuid.uuid4().hex
    now = utcnow().isoformat()

    conn = get_conn()
    cur = conn.cursor()
    try:
        cur.execute(
            """
            INSERT INTO users (id, email, password_hash, user_type, email_verified, created_at)
            VALUES (?, ?, ?, ?, 0, ?)
            """,
            (user_id, email, password_hash, user_type, now),
        )
        conn.commit()
    except Exception as exc:
        conn.rollback()
        if is_unique_violation(exc):
            raise DuplicateEmail() from exc
        raise
    finally:
        conn.close()

    return get_user_by_id(user_id)


def get_user_by_id(user_id: str) -> Optional[Dict]:
    if not user_id:
        return None
    return _fetch_user("id", user_id)


def get_user_by_email(email: str) -> Optional[Dict]:
    if not email:
        return None
    return _fetch_user("email", email)


def update_user(user_id: str, fields: Dict) -> Optional[Dict]:
    """
    Partial update restricted to MUTABLE_USER_FIELDS.
    Returns the updated user, or None if it does not exist.
    """
    rejected = sorted(set(fields) - set(MUTABLE_USER_FIELDS))
    if rejected:
        raise ValidationError(
            [{"field": name, "message": "This field cannot be changed"} for name in rejected]
        )
    if not fields:
        return get_user_by_id(user_id)

    assignments = ", ".join(f"{name} = ?" for name in fields)
    params: Iterable = [*fields.values(), user_id]

    conn = get_conn()
    cur = conn.cursor()
    try:
        cur.execute(f"UPDATE users SET {assignments} WHERE id = ?", tuple(params))
        conn.commit()
    except Exception as exc:
        conn.rollback()
        if is_unique_violation(exc):
            raise DuplicateEmail() from exc
        raise
    finally:
        conn.close()

    return get_user_by_id(user_id)


def public_user(user: Dict) -> Dict:
    """The user as exposed to clients: no hash, no token state."""
    return {
        "id": user["id"],
        "email": user["email"],
        "userType": user["user_type"],
        "emailVerified": bool(user.get("email_verified")),
        "createdAt": user.get("created_at"),
    }


__all__ = [
    "USER_TYPES",
    "MUTABLE_USER_FIELDS",
    "create_user",
    "get_user_by_id",
    "get_user_by_email",
    "update_user",
    "public_user",
]
