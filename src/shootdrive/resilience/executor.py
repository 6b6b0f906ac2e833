"""Classification-driven retry for remote calls."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from googleapiclient.errors import HttpError

from shootdrive.config import RetryPolicy
from shootdrive.controller.drive_client import http_error_to_info
from shootdrive.errors import (
    NotFoundError,
    RemoteApiError,
    RemoteUnavailableError,
    ShootDriveError,
    ValidationError,
    is_retryable,
    map_http_error,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class RetryState:
    """Progress of one logical operation; discarded when execute returns."""

    attempt: int = 0
    last_error: Optional[ShootDriveError] = None


class ResilientExecutor:
    """
    Run remote calls, retrying the retryable ones with exponential backoff.

    Every re-try re-invokes `operation` from scratch, so operations must be
    safe to re-issue. Non-retryable errors are raised on the first failure.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._rng = rng or random.Random()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def execute(self, operation: Callable[[], T], context: str) -> T:
        """
        Call `operation` until it succeeds or fails for good.

        Raises:
            ShootDriveError: the classified final error, chained to the raw one.
        """
        state = RetryState()
        while True:
            try:
                return operation()
            except Exception as exc:
                mapped = map_exception(exc)
                state.last_error = mapped

                if is_retryable(mapped) and state.attempt < self._policy.max_retries:
                    delay = self._backoff(state.attempt)
                    state.attempt += 1
                    logger.warning(
                        "Retrying %s in %.0fms (attempt %d/%d): %s",
                        context,
                        delay * 1000,
                        state.attempt,
                        self._policy.max_retries,
                        mapped,
                    )
                    self._sleep(delay)
                    continue

                mapped.details.setdefault("context", context)
                mapped.details["attempts"] = state.attempt + 1
                _log_failure(mapped, context, state.attempt + 1)
                if mapped is exc:
                    raise
                raise mapped from exc

    def _backoff(self, attempt: int) -> float:
        delay = self._policy.delay_for(attempt)
        if self._policy.jitter:
            delay += delay * self._policy.jitter * self._rng.random()
        return delay


def map_exception(exc: BaseException) -> ShootDriveError:
    """Translate any exception raised by a remote call into the taxonomy."""
    if isinstance(exc, ShootDriveError):
        return exc
    if isinstance(exc, HttpError):
        return map_http_error(http_error_to_info(exc), cause=exc)
    if isinstance(exc, (OSError, TimeoutError)):
        return RemoteUnavailableError("Network error", cause=exc)
    return RemoteApiError("Drive API error", details={"type": type(exc).__name__}, cause=exc)


def _log_failure(exc: ShootDriveError, context: str, attempts: int) -> None:
    if isinstance(exc, ValidationError) and exc.status_code is None:
        return
    if isinstance(exc, NotFoundError):
        logger.debug("%s: not found (%s)", context, exc)
        return
    logger.error(
        "%s failed after %d attempt(s): %s %s",
        context,
        attempts,
        type(exc).__name__,
        exc.details,
    )
