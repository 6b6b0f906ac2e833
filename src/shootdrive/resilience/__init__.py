"""Retry exports for shootdrive."""

from __future__ import annotations

from .executor import ResilientExecutor, RetryState, map_exception

__all__ = ["ResilientExecutor", "RetryState", "map_exception"]
