"""Cache exports for shootdrive."""

from __future__ import annotations

from .path_cache import PathCache

__all__ = ["PathCache"]
