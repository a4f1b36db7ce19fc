"""
Credential and verification lifecycle: signup, email verification, login,
logout, resend verification, password reset request and password reset.

User state only moves Unverified -> Verified. A pending reset is cleared by
a successful reset; an expired one just stops validating.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from app.validation import MIN_PASSWORD_LENGTH, is_valid_email, is_valid_password, signup_errors
from core.database import (
    RESET_TOKEN_LIFETIME,
    VERIFY_TOKEN_LIFETIME,
    create_session,
    create_user,
    delete_session,
    get_user_by_email,
    get_user_by_id,
    get_user_by_password_reset_token,
    get_user_by_verification_token,
    hash_password,
    is_expired,
    issue_token,
    mark_user_email_verified,
    public_user,
    reset_user_password,
    set_email_verification_token,
    set_password_reset_token,
    update_user,
    verify_password,
)
from core.errors import (
    AlreadyVerified,
    DuplicateEmail,
    EmailNotVerified,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    TokenExpired,
    ValidationError,
)

log = logging.getLogger("auth")

SIGNUP_MESSAGE = (
    "Account created successfully! Please check your email and verify your account before logging in."
)
RESEND_MESSAGE = "If an unverified account exists with that email, a verification link has been sent"
RESET_REQUEST_MESSAGE = "If an account with that email exists, a password reset link has been sent"

# Valid bcrypt hash of a random string, checked when the email is unknown so
# both login failure paths pay for one bcrypt comparison.
_DUMMY_HASH = hash_password("empaai-login-timing-guard")


class AuthService:
    def __init__(self, notifier):
        self.notifier = notifier

    # -------- signup / verification --------

    def signup(self, email: str, password: str, user_type: str) -> Dict:
        email = (email or "").strip()
        errors = signup_errors(email, password or "", user_type or "")
        if errors:
            raise ValidationError(errors)

        if get_user_by_email(email):
            raise DuplicateEmail()

        user = create_user(email, hash_password(password), user_type)
        log.info("User signed up id=%s type=%s", user["id"], user_type)

        self._issue_verification(user)
        return {"message": SIGNUP_MESSAGE, "email": user["email"]}

    def verify_email(self, token: str) -> Dict:
        if not token:
            raise ValidationError.single("token", "Verification token is required")

        user = get_user_by_verification_token(token)
        if not user:
            raise InvalidToken("Invalid or expired verification token")
        if user["email_verified"]:
            raise AlreadyVerified()
        if is_expired(user["email_verification_expiry"]):
            raise TokenExpired("Verification token has expired")

        if not mark_user_email_verified(user["id"], token):
            # Consumed (or replaced) by a concurrent request.
            raise InvalidToken("Invalid or expired verification token")

        log.info("Email verified for user id=%s", user["id"])
        return {"message": "Email verified successfully"}

    def resend_verification(self, email: str) -> Dict:
        email = (email or "").strip()
        if not email:
            raise ValidationError.single("email", "Email is required")

        user = get_user_by_email(email)
        if user and not user["email_verified"]:
            self._issue_verification(user)
        return {"message": RESEND_MESSAGE}

    # -------- login / logout --------

    def login(self, email: str, password: str) -> Tuple[Dict, str]:
        """Return (public user, session id)."""
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError(
                [
                    {"field": name, "message": f"{name.capitalize()} is required"}
                    for name, value in (("email", email), ("password", password))
                    if not value
                ]
            )

        user = get_user_by_email(email)
        if not user:
            verify_password(password, _DUMMY_HASH)
            log.info("Login failed for unknown email=%s", email)
            raise InvalidCredentials()
        if not verify_password(password, user["password_hash"]):
            log.info("Login failed (bad password) for user id=%s", user["id"])
            raise InvalidCredentials()
        if not user["email_verified"]:
            raise EmailNotVerified(user["email"])

        session_id = create_session(user["id"])
        log.info("User logged in id=%s", user["id"])
        return public_user(user), session_id

    def logout(self, session_id: Optional[str]) -> Dict:
        delete_session(session_id)
        return {"message": "Logout successful"}

    # -------- password reset --------

    def request_password_reset(self, email: str) -> Dict:
        email = (email or "").strip()
        if not email:
            raise ValidationError.single("email", "Email is required")

        user = get_user_by_email(email)
        if not user:
            log.info("Password reset requested for unknown email=%s", email)
            return {"message": RESET_REQUEST_MESSAGE}

        token, expires_at = issue_token(RESET_TOKEN_LIFETIME)
        set_password_reset_token(user["id"], token, expires_at)
        log.info("Password reset token issued for user id=%s", user["id"])
        self._notify(self.notifier.send_password_reset_email, user["email"], token)
        return {"message": RESET_REQUEST_MESSAGE}

    def reset_password(self, token: str, new_password: str) -> Dict:
        if not token or not new_password:
            raise ValidationError.single("token", "Token and new password are required")
        if not is_valid_password(new_password):
            raise ValidationError.single(
                "newPassword", f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        user = get_user_by_password_reset_token(token)
        if not user:
            raise InvalidToken("Invalid or expired reset token")
        if is_expired(user["password_reset_expiry"]):
            raise TokenExpired("Reset token has expired")

        if not reset_user_password(user["id"], token, hash_password(new_password)):
            raise InvalidToken("Invalid or expired reset token")

        log.info("Password reset for user id=%s", user["id"])
        return {"message": "Password reset successfully"}

    # -------- profile --------

    def get_profile(self, user_id: str) -> Dict:
        user = get_user_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return public_user(user)

    def update_profile(self, user_id: str, fields: Dict) -> Dict:
        fields = dict(fields)
        if "email" in fields:
            if not isinstance(fields["email"], str):
                raise ValidationError.single("email", "Invalid email address")
            email = fields["email"].strip()
            if not is_valid_email(email):
                raise ValidationError.single("email", "Invalid email address")
            existing = get_user_by_email(email)
            if existing and existing["id"] != user_id:
                raise DuplicateEmail()
            fields["email"] = email

        user = update_user(user_id, fields)
        if not user:
            raise NotFound("User not found")
        return public_user(user)

    # -------- helpers --------

    def _issue_verification(self, user: Dict) -> None:
        token, expires_at = issue_token(VERIFY_TOKEN_LIFETIME)
        set_email_verification_token(user["id"], token, expires_at)
        log.info("Verification token issued for user id=%s", user["id"])
        self._notify(self.notifier.send_verification_email, user["email"], token)

    def _notify(self, send, email: str, token: str) -> None:
        # The state change has already been committed; delivery problems are logged only.
        try:
            delivered = send(email, token)
        except Exception:
            log.exception("Notification transport raised for %s", email)
            return
        if not delivered:
            log.warning("Notification to %s was not delivered", email)


__all__ = [
    "AuthService",
    "SIGNUP_MESSAGE",
    "RESEND_MESSAGE",
    "RESET_REQUEST_MESSAGE",
]
