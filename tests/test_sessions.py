import types
from datetime import timedelta

import pytest

from app.auth_utils import SESSION_COOKIE_MAX_AGE, require_verified_user
from core.db.base import get_conn, parse_timestamp, utcnow
from core.db.users import (
    create_session,
    create_user,
    delete_session,
    get_session,
    hash_password,
    resolve_session,
)
from core.errors import Forbidden, Unauthorized


def _user(verified=True):
    user = create_user("s@example.com", hash_password("secret1"), "disabled")
    if verified:
        conn = get_conn()
        cur = conn.cursor()
        cur.execute("UPDATE users SET email_verified = 1 WHERE id = ?", (user["id"],))
        conn.commit()
        conn.close()
    return user


def _request(cookies):
    return types.SimpleNamespace(cookies=cookies)


def test_session_has_seven_day_absolute_expiry():
    user = _user()
    session_id = create_session(user["id"])
    session = get_session(session_id)
    expires_at = session["expires_at"]

    delta = parse_timestamp(expires_at) - utcnow()
    assert timedelta(days=6, hours=23) < delta <= timedelta(days=7)
    assert SESSION_COOKIE_MAX_AGE == 7 * 24 * 3600
    assert resolve_session(session_id) == user["id"]


def test_delete_session_is_idempotent():
    user = _user()
    session_id = create_session(user["id"])
    delete_session(session_id)
    delete_session(session_id)
    delete_session("")
    assert get_session(session_id) is None
    assert resolve_session(session_id) is None


def test_expired_session_is_removed():
    user = _user()
    session_id = create_session(user["id"])
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "UPDATE sessions SET expires_at = ? WHERE id = ?",
        ((utcnow() - timedelta(seconds=1)).isoformat(), session_id),
    )
    conn.commit()
    conn.close()

    assert get_session(session_id) is None
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("SELECT COUNT(*) AS count FROM sessions")
    assert cur.fetchone()["count"] == 0
    conn.close()


def test_verified_session_resolves_user():
    user = _user()
    session_id = create_session(user["id"])
    found = require_verified_user(_request({"session_id": session_id}))
    assert found["id"] == user["id"]
    assert get_session(session_id) is not None


def test_unverified_user_session_is_destroyed():
    user = _user(verified=False)
    session_id = create_session(user["id"])

    with pytest.raises(Forbidden):
        require_verified_user(_request({"session_id": session_id}))
    assert get_session(session_id) is None


def test_session_for_missing_user_is_destroyed():
    session_id = create_session("no-such-user")
    with pytest.raises(Forbidden):
        require_verified_user(_request({"session_id": session_id}))
    assert get_session(session_id) is None


def test_missing_or_unknown_cookie_is_unauthorized():
    with pytest.raises(Unauthorized):
        require_verified_user(_request({}))
    with pytest.raises(Unauthorized):
        require_verified_user(_request({"session_id": "bogus"}))
