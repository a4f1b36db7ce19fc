"""
Typed application errors.

Every error carries the HTTP status it maps to and a user-safe message.
`extra` is merged into the JSON error body by the API layer.
"""
from __future__ import annotations

from typing import Dict, List, Optional


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, **extra):
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        body = {"error": self.message}
        body.update(self.extra)
        return body


class ValidationError(AppError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, details: List[Dict[str, str]], message: Optional[str] = None):
        super().__init__(message, details=details)
        self.details = details

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}], message=message)


class DuplicateEmail(AppError):
    status_code = 400
    message = "Email already in use"


class InvalidCredentials(AppError):
    status_code = 401
    message = "Invalid email or password"


class EmailNotVerified(AppError):
    status_code = 403
    message = "Email not verified. Please check your email and verify your account before logging in."

    def __init__(self, email: str):
        super().__init__(emailNotVerified=True, email=email)


class InvalidToken(AppError):
    status_code = 400
    message = "Invalid or expired token"


class AlreadyVerified(AppError):
    status_code = 400
    message = "Email already verified"


class TokenExpired(AppError):
    status_code = 400
    message = "Token has expired"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class Unauthorized(AppError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    message = "Forbidden"


class RateLimited(AppError):
    status_code = 429
    message = "Too many attempts. Please try again later."


class InternalError(AppError):
    status_code = 500


__all__ = [
    "AppError",
    "ValidationError",
    "DuplicateEmail",
    "InvalidCredentials",
    "EmailNotVerified",
    "InvalidToken",
    "AlreadyVerified",
    "TokenExpired",
    "NotFound",
    "Unauthorized",
    "Forbidden",
    "RateLimited",
    "InternalError",
]
