"""
Password hashing and verification (bcrypt, per-hash random salt).
"""
from __future__ import annotations

import bcrypt

# bcrypt ignores everything past 72 bytes; newer releases raise instead.
_BCRYPT_MAX_BYTES = 72


def _pwd_bytes(raw_password: str) -> bytes:
    return raw_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(raw_password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(raw_password), bcrypt.gensalt()).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    if not raw_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_pwd_bytes(raw_password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


__all__ = ["hash_password", "verify_password"]
