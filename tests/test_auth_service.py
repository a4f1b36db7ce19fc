from datetime import timedelta

import pytest

from app.auth_service import RESEND_MESSAGE, RESET_REQUEST_MESSAGE, AuthService
from core.db.base import get_conn, parse_timestamp, utcnow
from core.db.users import (
    get_user_by_email,
    get_user_by_id,
    set_email_verification_token,
    set_password_reset_token,
    verify_password,
)
from core.errors import (
    AlreadyVerified,
    DuplicateEmail,
    EmailNotVerified,
    InvalidCredentials,
    InvalidToken,
    TokenExpired,
    ValidationError,
)


def _count_users() -> int:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("SELECT COUNT(*) AS count FROM users")
    count = int(cur.fetchone()["count"])
    conn.close()
    return count


def _signup_verified(auth_service, notifier, email="a@x.com", password="secret1"):
    auth_service.signup(email, password, "disabled")
    auth_service.verify_email(notifier.last_token("verify"))
    return get_user_by_email(email)


# -------- signup --------

def test_signup_creates_unverified_user_with_24h_token(auth_service, notifier):
    result = auth_service.signup("a@x.com", "secret1", "disabled")

    assert result["email"] == "a@x.com"
    assert "token" not in result and "password" not in result

    user = get_user_by_email("a@x.com")
    assert user["email_verified"] is False
    assert user["email_verification_token"]
    expiry = parse_timestamp(user["email_verification_expiry"])
    assert abs((expiry - (utcnow() + timedelta(hours=24))).total_seconds()) < 60

    assert notifier.sent == [("verify", "a@x.com", user["email_verification_token"])]


def test_signup_stores_hash_not_password(auth_service):
    auth_service.signup("a@x.com", "secret1", "non-disabled")
    user = get_user_by_email("a@x.com")
    assert user["password_hash"] != "secret1"
    assert verify_password("secret1", user["password_hash"])
    assert user["user_type"] == "non-disabled"


@pytest.mark.parametrize(
    "email,password,user_type,fields",
    [
        ("not-an-email", "secret1", "disabled", {"email"}),
        ("a@x.com", "short", "disabled", {"password"}),
        ("a@x.com", "secret1", "admin", {"userType"}),
        ("", "", "", {"email", "password", "userType"}),
    ],
)
def test_signup_validation_errors(auth_service, notifier, email, password, user_type, fields):
    with pytest.raises(ValidationError) as excinfo:
        auth_service.signup(email, password, user_type)
    assert {d["field"] for d in excinfo.value.details} == fields
    assert _count_users() == 0
    assert notifier.sent == []


def test_duplicate_signup_creates_no_second_user(auth_service):
    auth_service.signup("a@x.com", "secret1", "disabled")
    with pytest.raises(DuplicateEmail):
        auth_service.signup("a@x.com", "other-pass", "non-disabled")
    assert _count_users() == 1


def test_email_is_case_sensitive(auth_service):
    auth_service.signup("a@x.com", "secret1", "disabled")
    auth_service.signup("A@x.com", "secret1", "disabled")
    assert _count_users() == 2


def test_signup_survives_notifier_failure():
    class ExplodingNotifier:
        def send_verification_email(self, email, token):
            raise RuntimeError("smtp down")

    service = AuthService(ExplodingNotifier())
    result = service.signup("a@x.com", "secret1", "disabled")
    assert result["email"] == "a@x.com"
    assert get_user_by_email("a@x.com")["email_verification_token"]


# -------- verify email --------

def test_verify_email_round_trip_and_replay(auth_service, notifier):
    auth_service.signup("a@x.com", "secret1", "disabled")
    token = notifier.last_token("verify")

    assert auth_service.verify_email(token)["message"] == "Email verified successfully"
    user = get_user_by_email("a@x.com")
    assert user["email_verified"] is True
    assert user["email_verification_token"] is None
    assert user["email_verification_expiry"] is None

    with pytest.raises(InvalidToken):
        auth_service.verify_email(token)


def test_verify_email_unknown_token(auth_service):
    with pytest.raises(InvalidToken):
        auth_service.verify_email("nope")


def test_verify_email_missing_token(auth_service):
    with pytest.raises(ValidationError):
        auth_service.verify_email("")


def test_verify_email_expired_token(auth_service, notifier):
    auth_service.signup("a@x.com", "secret1", "disabled")
    user = get_user_by_email("a@x.com")
    set_email_verification_token(user["id"], "expired-token", utcnow() - timedelta(seconds=1))

    with pytest.raises(TokenExpired):
        auth_service.verify_email("expired-token")
    assert get_user_by_id(user["id"])["email_verified"] is False


def test_verify_email_token_just_inside_expiry(auth_service):
    auth_service.signup("a@x.com", "secret1", "disabled")
    user = get_user_by_email("a@x.com")
    set_email_verification_token(user["id"], "fresh-token", utcnow() + timedelta(seconds=2))

    auth_service.verify_email("fresh-token")
    assert get_user_by_id(user["id"])["email_verified"] is True


def test_verify_email_already_verified_with_stale_token(auth_service, notifier):
    user = _signup_verified(auth_service, notifier)
    # Force a token onto an already-verified row.
    set_email_verification_token(user["id"], "stale", utcnow() + timedelta(hours=1))
    with pytest.raises(AlreadyVerified):
        auth_service.verify_email("stale")


def test_resend_invalidates_previous_token(auth_service, notifier):
    auth_service.signup("a@x.com", "secret1", "disabled")
    first = notifier.last_token("verify")

    assert auth_service.resend_verification("a@x.com") == {"message": RESEND_MESSAGE}
    second = notifier.last_token("verify")
    assert second != first

    with pytest.raises(InvalidToken):
        auth_service.verify_email(first)
    auth_service.verify_email(second)


def test_resend_is_generic_for_unknown_and_verified(auth_service, notifier):
    _signup_verified(auth_service, notifier)
    sent_before = len(notifier.sent)

    assert auth_service.resend_verification("ghost@x.com") == {"message": RESEND_MESSAGE}
    assert auth_service.resend_verification("a@x.com") == {"message": RESEND_MESSAGE}
    assert len(notifier.sent) == sent_before


# -------- login / logout --------

def test_login_unverified_user_gets_email_not_verified(auth_service):
    auth_service.signup("a@x.com", "secret1", "disabled")
    with pytest.raises(EmailNotVerified) as excinfo:
        auth_service.login("a@x.com", "secret1")
    body = excinfo.value.to_dict()
    assert body["emailNotVerified"] is True
    assert body["email"] == "a@x.com"

    conn = get_conn()
    cur = conn.cursor()
    cur.execute("SELECT COUNT(*) AS count FROM sessions")
    assert cur.fetchone()["count"] == 0
    conn.close()


def test_login_wrong_password_matches_unknown_email_message(auth_service, notifier):
    _signup_verified(auth_service, notifier)

    with pytest.raises(InvalidCredentials) as wrong_pw:
        auth_service.login("a@x.com", "not-the-password")
    with pytest.raises(InvalidCredentials) as unknown:
        auth_service.login("ghost@x.com", "secret1")

    assert wrong_pw.value.to_dict() == unknown.value.to_dict()
    assert wrong_pw.value.status_code == unknown.value.status_code == 401


def test_login_success_returns_public_user(auth_service, notifier):
    _signup_verified(auth_service, notifier)
    user, session_id = auth_service.login("a@x.com", "secret1")
    assert session_id
    assert user["email"] == "a@x.com"
    assert user["userType"] == "disabled"
    assert "password_hash" not in user and "password" not in user


def test_logout_without_session_still_succeeds(auth_service):
    assert auth_service.logout(None) == {"message": "Logout successful"}
    assert auth_service.logout("does-not-exist") == {"message": "Logout successful"}


# -------- password reset --------

def test_request_reset_is_generic(auth_service, notifier):
    _signup_verified(auth_service, notifier)
    known = auth_service.request_password_reset("a@x.com")
    unknown = auth_service.request_password_reset("ghost@x.com")
    assert known == unknown == {"message": RESET_REQUEST_MESSAGE}
    assert [kind for kind, _, _ in notifier.sent].count("reset") == 1


def test_reset_token_has_one_hour_expiry(auth_service, notifier):
    user = _signup_verified(auth_service, notifier)
    auth_service.request_password_reset("a@x.com")
    row = get_user_by_id(user["id"])
    expiry = parse_timestamp(row["password_reset_expiry"])
    assert abs((expiry - (utcnow() + timedelta(hours=1))).total_seconds()) < 60


def test_reset_password_round_trip(auth_service, notifier):
    _signup_verified(auth_service, notifier)
    auth_service.request_password_reset("a@x.com")
    token = notifier.last_token("reset")

    assert auth_service.reset_password(token, "new-secret")["message"] == "Password reset successfully"

    user = get_user_by_email("a@x.com")
    assert user["password_reset_token"] is None
    assert user["password_reset_expiry"] is None
    with pytest.raises(InvalidCredentials):
        auth_service.login("a@x.com", "secret1")
    auth_service.login("a@x.com", "new-secret")

    with pytest.raises(InvalidToken):
        auth_service.reset_password(token, "another-one")


def test_second_reset_request_invalidates_first(auth_service, notifier):
    _signup_verified(auth_service, notifier)
    auth_service.request_password_reset("a@x.com")
    first = notifier.last_token("reset")
    auth_service.request_password_reset("a@x.com")
    second = notifier.last_token("reset")

    with pytest.raises(InvalidToken):
        auth_service.reset_password(first, "new-secret")
    auth_service.reset_password(second, "new-secret")


def test_reset_password_expired(auth_service, notifier):
    user = _signup_verified(auth_service, notifier)
    set_password_reset_token(user["id"], "old", utcnow() - timedelta(seconds=1))
    with pytest.raises(TokenExpired):
        auth_service.reset_password("old", "new-secret")
    auth_service.login("a@x.com", "secret1")


def test_reset_password_short_password_checked_first(auth_service, notifier):
    _signup_verified(auth_service, notifier)
    auth_service.request_password_reset("a@x.com")
    token = notifier.last_token("reset")

    with pytest.raises(ValidationError):
        auth_service.reset_password(token, "123")
    # Token is still usable after a validation failure.
    auth_service.reset_password(token, "123456")


def test_reset_password_does_not_verify_or_log_in(auth_service, notifier):
    auth_service.signup("a@x.com", "secret1", "disabled")
    auth_service.request_password_reset("a@x.com")
    auth_service.reset_password(notifier.last_token("reset"), "new-secret")
    with pytest.raises(EmailNotVerified):
        auth_service.login("a@x.com", "new-secret")


# -------- profile --------

def test_update_profile_rejects_immutable_fields(auth_service, notifier):
    user = _signup_verified(auth_service, notifier)
    with pytest.raises(ValidationError) as excinfo:
        auth_service.update_profile(user["id"], {"userType": "non-disabled"})
    assert excinfo.value.details[0]["field"] == "userType"
    assert get_user_by_id(user["id"])["user_type"] == "disabled"


def test_update_profile_email_conflict(auth_service, notifier):
    user = _signup_verified(auth_service, notifier)
    auth_service.signup("b@x.com", "secret1", "disabled")
    with pytest.raises(DuplicateEmail):
        auth_service.update_profile(user["id"], {"email": "b@x.com"})

    updated = auth_service.update_profile(user["id"], {"email": "c@x.com"})
    assert updated["email"] == "c@x.com"
    # Same email as before is not a conflict.
    assert auth_service.update_profile(user["id"], {"email": "c@x.com"})["email"] == "c@x.com"
