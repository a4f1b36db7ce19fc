"""
Server-side input validators shared by the auth and profile flows.
"""
from __future__ import annotations

import re
from typing import Dict, List

from email_validator import EmailNotValidError, validate_email

from core.db.users import USER_TYPES

MIN_PASSWORD_LENGTH = 6


def is_valid_email(email: str) -> bool:
    if not email or email != email.strip():
        return False
    if not re.fullmatch(r"[^@\s]+@[^@\s]+\.[^@\s]+", email):
        return False
    try:
        # Syntax only; no MX/deliverability lookups.
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_password(password: str) -> bool:
    return bool(password) and len(password) >= MIN_PASSWORD_LENGTH


def is_valid_user_type(user_type: str) -> bool:
    return user_type in USER_TYPES


def signup_errors(email: str, password: str, user_type: str) -> List[Dict[str, str]]:
    """Collect every field problem at once so the client can show them together."""
    errors: List[Dict[str, str]] = []
    if not is_valid_email(email):
        errors.append({"field": "email", "message": "Invalid email address"})
    if not is_valid_password(password):
        errors.append(
            {"field": "password", "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}
        )
    if not is_valid_user_type(user_type):
        errors.append(
            {"field": "userType", "message": f"User type must be one of: {', '.join(USER_TYPES)}"}
        )
    return errors


__all__ = [
    "MIN_PASSWORD_LENGTH",
    "is_valid_email",
    "is_valid_password",
    "is_valid_user_type",
    "signup_errors",
]
