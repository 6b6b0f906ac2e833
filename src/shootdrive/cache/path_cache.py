"""In-memory folder id -> canonical path cache."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from shootdrive.util.paths import is_same_or_under

logger = logging.getLogger(__name__)


class PathCache:
    """
    Thread-safe map from folder id to its resolved canonical path.

    Entries stay valid until the folder is renamed or moved outside this
    process; call invalidate() when that is known to have happened. There is no
    eviction.
    """

    def __init__(self) -> None:
        self._paths: dict[str, str] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, folder_id: str) -> Optional[str]:
        with self._lock:
            path = self._paths.get(folder_id)
            if path is None:
                self._misses += 1
            else:
                self._hits += 1
            return path

    def set(self, folder_id: str, path: str) -> None:
        if not folder_id or not path:
            return
        with self._lock:
            self._paths[folder_id] = path

    def discard(self, folder_id: str) -> None:
        with self._lock:
            self._paths.pop(folder_id, None)

    def invalidate(self, folder_id: str) -> int:
        """
        Drop a folder and every cached folder below it.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            path = self._paths.pop(folder_id, None)
            if path is None:
                return 0
            stale = [fid for fid, p in self._paths.items() if is_same_or_under(p, path)]
            for fid in stale:
                del self._paths[fid]

        logger.debug("Invalidated %d cached path(s) under %s", len(stale) + 1, path)
        return len(stale) + 1

    def clear(self) -> None:
        with self._lock:
            self._paths.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"size": len(self._paths), "hits": self._hits, "misses": self._misses}

    def __contains__(self, folder_id: object) -> bool:
        with self._lock:
            return folder_id in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
