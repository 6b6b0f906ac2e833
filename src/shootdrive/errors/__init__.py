"""Public error exports for shootdrive."""

from __future__ import annotations

from .exceptions import (
    QUOTA_REASONS,
    RATE_LIMIT_REASONS,
    AuthExpiredError,
    ConflictError,
    CycleDetectedError,
    HttpErrorInfo,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RateLimitedError,
    RemoteApiError,
    RemoteUnavailableError,
    ShootDriveError,
    ValidationError,
    is_retryable,
    map_http_error,
)

__all__ = [
    "ShootDriveError",
    "ValidationError",
    "AuthExpiredError",
    "PermissionDeniedError",
    "QuotaExceededError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "RemoteUnavailableError",
    "RemoteApiError",
    "CycleDetectedError",
    "HttpErrorInfo",
    "RATE_LIMIT_REASONS",
    "QUOTA_REASONS",
    "map_http_error",
    "is_retryable",
]
