"""
Rate limit and response-hardening helpers.
"""
from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import Request

from core.errors import RateLimited

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "same-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'self'",
}

# (limit, window_seconds) per endpoint scope
RATE_LIMITS: Dict[str, Tuple[int, int]] = {
    "signup": (10, 3600),
    "login": (10, 300),
    "verify_resend": (3, 3600),
    "pwdreset": (5, 21600),  # 6 hours
}


# -------- Rate limiting (in-memory) --------
_rate_state: Dict[str, list[float]] = {}
_rate_lock = threading.Lock()


def allow_request(key: str, limit: int = 5, window_seconds: int = 60) -> bool:
    """
    Simple sliding-window rate limit stored in memory.
    Returns True if under limit, False otherwise.
    """
    allowed, _ = allow_request_with_remaining(key, limit=limit, window_seconds=window_seconds)
    return allowed


def allow_request_with_remaining(key: str, limit: int = 5, window_seconds: int = 60) -> Tuple[bool, int]:
    """
    Sliding-window rate limit with remaining-count feedback.
    Returns (allowed: bool, remaining_after: int).
    """
    now = time.time()
    window_start = now - window_seconds
    with _rate_lock:
        history = [t for t in _rate_state.get(key, []) if t > window_start]
        if len(history) >= limit:
            _rate_state[key] = history
            return False, 0
        history.append(now)
        _rate_state[key] = history
    return True, max(0, limit - len(history))


def reset_rate_limits() -> None:
    with _rate_lock:
        _rate_state.clear()


def client_ip(request: Request) -> str:
    return request.client.host if request and request.client else "unknown"


def enforce_rate_limit(request: Request, scope: str) -> None:
    """Raise RateLimited when the caller's IP is over the limit for `scope`."""
    limit, window = RATE_LIMITS[scope]
    if not allow_request(f"{scope}:{client_ip(request)}", limit=limit, window_seconds=window):
        raise RateLimited()


__all__ = [
    "SECURITY_HEADERS",
    "RATE_LIMITS",
    "allow_request",
    "allow_request_with_remaining",
    "reset_rate_limits",
    "client_ip",
    "enforce_rate_limit",
]
