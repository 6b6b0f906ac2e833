"""Exception hierarchy and HTTP error classification for shootdrive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class ShootDriveError(Exception):
    """
    Base exception for shootdrive.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause

    @property
    def status_code(self) -> Optional[int]:
        value = self.details.get("status_code")
        return value if isinstance(value, int) else None

    @property
    def reason(self) -> Optional[str]:
        value = self.details.get("reason")
        return value if isinstance(value, str) else None


class ValidationError(ShootDriveError):
    """Raised for bad input (e.g., an empty folder name). Never retried."""


class AuthExpiredError(ShootDriveError):
    """Raised on HTTP 401; the caller should refresh credentials and re-invoke."""


class PermissionDeniedError(ShootDriveError):
    """Raised when access is denied (HTTP 403, non rate-limit reason)."""


class QuotaExceededError(ShootDriveError):
    """Raised when a hard quota is hit (storage quota, item creation limit)."""


class NotFoundError(ShootDriveError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(ShootDriveError):
    """Raised when a folder already exists (HTTP 409, or a strict create)."""


class RateLimitedError(ShootDriveError):
    """Raised when rate-limited and retries are exhausted (HTTP 403/429)."""


class RemoteUnavailableError(ShootDriveError):
    """Raised on 5xx or network failures once retries are exhausted."""


class RemoteApiError(ShootDriveError):
    """Raised for unclassified remote errors (unknown 4xx, malformed replies)."""


class CycleDetectedError(ShootDriveError):
    """
    Raised internally when a parent walk revisits an id.

    PathResolver catches it and degrades to a best-effort path, so callers of
    resolve_path never see it.
    """

    def __init__(
        self,
        message: str,
        *,
        segments: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.segments = list(segments or [])


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to shootdrive exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


RATE_LIMIT_REASONS: frozenset[str] = frozenset(
    {
        "rateLimitExceeded",
        "userRateLimitExceeded",
        "quotaExceeded",
    }
)

QUOTA_REASONS: frozenset[str] = frozenset(
    {
        "storageQuotaExceeded",
        "activeItemCreationLimitExceeded",
        "teamDriveFileLimitExceeded",
    }
)

_RETRYABLE_ERRORS: tuple[type[ShootDriveError], ...] = (
    RateLimitedError,
    RemoteUnavailableError,
)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> ShootDriveError:
    """
    Map an HTTP error to a shootdrive exception.

    Policy:
        - 400 -> ValidationError
        - 401 -> AuthExpiredError
        - 403 -> RateLimitedError for rate-limit reasons,
                 QuotaExceededError for hard quota reasons,
                 PermissionDeniedError otherwise
        - 404 -> NotFoundError
        - 409 -> ConflictError
        - 429 -> RateLimitedError
        - 5xx -> RemoteUnavailableError
        - otherwise -> RemoteApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return ValidationError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthExpiredError(message, details=details, cause=cause)
    if info.status_code == 403:
        if info.reason in RATE_LIMIT_REASONS:
            return RateLimitedError(message, details=details, cause=cause)
        if info.reason in QUOTA_REASONS:
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 409:
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitedError(message, details=details, cause=cause)
    if 500 <= info.status_code <= 599:
        return RemoteUnavailableError(message, details=details, cause=cause)

    return RemoteApiError(message, details=details, cause=cause)


def is_retryable(exc: BaseException) -> bool:
    """Return True if a (mapped) error may succeed when the call is re-issued."""
    return isinstance(exc, _RETRYABLE_ERRORS)
