"""
Opaque, time-limited tokens for email verification and password reset.

Tokens carry no claims. Validity is a store lookup plus an expiry check at
the moment the token is presented.
"""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from core.db.base import parse_timestamp, utcnow

VERIFY_TOKEN_HOURS = 24
RESET_TOKEN_MINUTES = 60

VERIFY_TOKEN_LIFETIME = timedelta(hours=VERIFY_TOKEN_HOURS)
RESET_TOKEN_LIFETIME = timedelta(minutes=RESET_TOKEN_MINUTES)


def issue_token(lifetime: timedelta) -> Tuple[str, datetime]:
    """Return (token, absolute UTC expiry)."""
    return secrets.token_urlsafe(32), utcnow() + lifetime


def is_expired(expiry, now: Optional[datetime] = None) -> bool:
    """
    True once `now` is strictly past `expiry`.
    A missing or unparseable expiry counts as expired.
    """
    expires_at = parse_timestamp(expiry)
    if expires_at is None:
        return True
    return (now or utcnow()) > expires_at


__all__ = [
    "VERIFY_TOKEN_HOURS",
    "RESET_TOKEN_MINUTES",
    "VERIFY_TOKEN_LIFETIME",
    "RESET_TOKEN_LIFETIME",
    "issue_token",
    "is_expired",
]
