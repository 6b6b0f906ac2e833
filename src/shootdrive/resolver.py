"""PathResolver: canonical paths from upward parent walks."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from shootdrive.cache import PathCache
from shootdrive.controller import FolderApi
from shootdrive.errors import CycleDetectedError
from shootdrive.models import ROOT_FOLDER_ID, DriveInfo
from shootdrive.resilience import ResilientExecutor
from shootdrive.util.paths import (
    MY_DRIVE_PATH,
    join_path,
    join_segments,
    shared_drive_path,
)

logger = logging.getLogger(__name__)

UNKNOWN_DRIVE_NAME: str = "Unknown Drive"


class PathResolver:
    """
    Resolve a folder id to "/My Drive/..." or "/Shared Drives/<drive>/...".

    Every folder met on the way up is cached, so resolving any ancestor later
    costs no remote call. Shared-drive lookups are memoised per id.
    """

    def __init__(self, api: FolderApi, executor: ResilientExecutor, cache: PathCache) -> None:
        self._api = api
        self._executor = executor
        self._cache = cache
        self._drive_roots: dict[str, bool] = {}
        self._drive_names: dict[str, str] = {}
        # folder id -> id of its shared drive, None for My Drive
        self._drive_ids: dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def resolve_path(self, folder_id: Optional[str]) -> str:
        """
        Return the canonical path of folder_id.

        A parent cycle does not raise: the walk stops and a best-effort path
        built from the names seen so far is returned (and not cached).

        Raises:
            ShootDriveError: when a remote call fails for good.
        """
        if not folder_id or folder_id == ROOT_FOLDER_ID:
            return MY_DRIVE_PATH

        cached = self._cache.get(folder_id)
        if cached is not None:
            return cached

        try:
            path = self._walk(folder_id)
        except CycleDetectedError as exc:
            path = join_segments(MY_DRIVE_PATH, exc.segments)
            logger.warning(
                "Parent cycle while resolving %s (repeated id %s); using %r",
                folder_id,
                exc.details.get("repeated_id"),
                path,
            )
            return path

        logger.debug("Resolved %s -> %s", folder_id, path)
        return path

    def is_shared_drive_root(self, folder_id: Optional[str]) -> bool:
        if not folder_id or folder_id == ROOT_FOLDER_ID:
            return False

        with self._lock:
            known = self._drive_roots.get(folder_id)
        if known is not None:
            return known

        exists = self._executor.execute(
            lambda: self._api.drive_exists(folder_id),
            f"drive_exists({folder_id})",
        )
        with self._lock:
            self._drive_roots[folder_id] = bool(exists)
        return bool(exists)

    def drive_id_of(self, folder_id: Optional[str]) -> Optional[str]:
        """Return the id of the shared drive holding folder_id, or None for My Drive."""
        if not folder_id or folder_id == ROOT_FOLDER_ID:
            return None

        with self._lock:
            if folder_id in self._drive_ids:
                return self._drive_ids[folder_id]

        if self.is_shared_drive_root(folder_id):
            drive_id: Optional[str] = folder_id
        else:
            meta = self._executor.execute(
                lambda: self._api.get_folder_metadata(folder_id),
                f"get_folder_metadata({folder_id})",
            )
            drive_id = meta.drive_id
        self._remember_drive_id(folder_id, drive_id)
        return drive_id

    def drive_name(self, drive_id: str) -> str:
        with self._lock:
            name = self._drive_names.get(drive_id)
        if name is not None:
            return name

        info = self._executor.execute(
            lambda: self._api.get_drive(drive_id),
            f"get_drive({drive_id})",
        )
        name = info.name or UNKNOWN_DRIVE_NAME
        with self._lock:
            self._drive_names[drive_id] = name
        return name

    def remember_drive(self, drive: DriveInfo) -> None:
        """Record a drive seen in a listing so later lookups need no remote call."""
        with self._lock:
            self._drive_roots[drive.id] = True
            self._drive_names[drive.id] = drive.name or UNKNOWN_DRIVE_NAME
            self._drive_ids[drive.id] = drive.id
        self._cache.set(drive.id, shared_drive_path(drive.name or UNKNOWN_DRIVE_NAME))

    def clear(self) -> None:
        with self._lock:
            self._drive_roots.clear()
            self._drive_names.clear()
            self._drive_ids.clear()

    def _remember_drive_id(self, folder_id: str, drive_id: Optional[str]) -> None:
        with self._lock:
            self._drive_ids[folder_id] = drive_id

    def _walk(self, folder_id: str) -> str:
        # (id, name) pairs, leaf first.
        chain: list[tuple[str, str]] = []
        visited: set[str] = set()
        base = MY_DRIVE_PATH
        current: Optional[str] = folder_id

        while current and current != ROOT_FOLDER_ID:
            if current != folder_id:
                cached = self._cache.get(current)
                if cached is not None:
                    base = cached
                    break

            if current in visited:
                raise CycleDetectedError(
                    "Parent chain revisits a folder",
                    segments=[name for _, name in reversed(chain)],
                    details={"folder_id": folder_id, "repeated_id": current},
                )
            visited.add(current)

            if self.is_shared_drive_root(current):
                base = shared_drive_path(self.drive_name(current))
                self._remember_drive_id(current, current)
                self._cache.set(current, base)
                break

            meta = self._executor.execute(
                lambda fid=current: self._api.get_folder_metadata(fid),
                f"get_folder_metadata({current})",
            )
            if meta.is_root:
                break
            self._remember_drive_id(current, meta.drive_id)
            if meta.name:
                chain.append((current, meta.name))
            current = meta.parent_id

        path = base
        for fid, name in reversed(chain):
            path = join_path(path, name)
            self._cache.set(fid, path)
        return path
