"""
User-related storage helpers, split by responsibility.
"""
from core.db.users.auth import hash_password, verify_password
from core.db.users.tokens import (
    RESET_TOKEN_LIFETIME,
    RESET_TOKEN_MINUTES,
    VERIFY_TOKEN_HOURS,
    VERIFY_TOKEN_LIFETIME,
    is_expired,
    issue_token,
)
from core.db.users.user_store import (
    MUTABLE_USER_FIELDS,
    USER_TYPES,
    create_user,
    get_user_by_email,
    get_user_by_id,
    public_user,
    update_user,
)
from core.db.users.email_verification import (
    get_user_by_verification_token,
    mark_user_email_verified,
    set_email_verification_token,
)
from core.db.users.password_reset import (
    get_user_by_password_reset_token,
    reset_user_password,
    set_password_reset_token,
)
from core.db.users.sessions import (
    SESSION_LIFETIME,
    SESSION_LIFETIME_DAYS,
    create_session,
    delete_session,
    get_session,
    resolve_session,
)

__all__ = [
    "hash_password",
    "verify_password",
    "RESET_TOKEN_LIFETIME",
    "RESET_TOKEN_MINUTES",
    "VERIFY_TOKEN_HOURS",
    "VERIFY_TOKEN_LIFETIME",
    "is_expired",
    "issue_token",
    "MUTABLE_USER_FIELDS",
    "USER_TYPES",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "public_user",
    "update_user",
    "get_user_by_verification_token",
    "mark_user_email_verified",
    "set_email_verification_token",
    "get_user_by_password_reset_token",
    "reset_user_password",
    "set_password_reset_token",
    "SESSION_LIFETIME",
    "SESSION_LIFETIME_DAYS",
    "create_session",
    "delete_session",
    "get_session",
    "resolve_session",
]
