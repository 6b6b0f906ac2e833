"""FolderFactory: idempotent find-or-create of folders."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, wait
from dataclasses import replace
from typing import Optional

from shootdrive.cache import PathCache
from shootdrive.controller import FolderApi
from shootdrive.errors import ConflictError
from shootdrive.models import ROOT_FOLDER_ID, FolderQuery, RemoteFolder, ResolvedFolder
from shootdrive.resilience import ResilientExecutor
from shootdrive.resolver import PathResolver
from shootdrive.util.names import sanitize_folder_name
from shootdrive.util.paths import MY_DRIVE_PATH, join_path

logger = logging.getLogger(__name__)

_Key = tuple[str, str]


class FolderFactory:
    """
    Find or create a named folder under a parent, exactly once.

    Every search or create for a (name, parent) pair runs under one in-flight
    entry: the first caller runs it, the others wait for its result. The entry
    is dropped once the operation settles, so a call made after a failure
    starts afresh.
    """

    def __init__(
        self,
        api: FolderApi,
        executor: ResilientExecutor,
        cache: PathCache,
        resolver: PathResolver,
    ) -> None:
        self._api = api
        self._executor = executor
        self._cache = cache
        self._resolver = resolver
        self._inflight: dict[_Key, Future[ResolvedFolder]] = {}
        self._inflight_lock = threading.Lock()

    def ensure_folder(self, name: str, parent_id: Optional[str] = None) -> ResolvedFolder:
        """
        Return the folder called `name` directly under `parent_id`, creating it
        if absent. `parent_id` defaults to the My Drive root.

        Raises:
            ValidationError: if the name is empty after trimming (no remote call).
            ShootDriveError: remote failures, unchanged.
        """
        folder_name = sanitize_folder_name(name)
        parent = parent_id or ROOT_FOLDER_ID
        key: _Key = (folder_name, parent)

        future, leader = self._claim(key)
        if not leader:
            logger.debug("Joining in-flight ensure_folder(%r, %s)", folder_name, parent)
            return future.result()

        folder, _ = self._lead(key, future)
        return folder

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> ResolvedFolder:
        """
        Create a new folder, refusing if one with the same name already exists.

        A pending operation on the same (name, parent) is waited out first, so
        its folder counts as existing.

        Raises:
            ValidationError: if the name is empty after trimming.
            ConflictError: if the parent already holds a folder with this name.
        """
        folder_name = sanitize_folder_name(name)
        parent = parent_id or ROOT_FOLDER_ID
        key: _Key = (folder_name, parent)

        while True:
            future, leader = self._claim(key)
            if leader:
                break
            logger.debug("Waiting for in-flight operation on (%r, %s)", folder_name, parent)
            wait([future])

        folder, created = self._lead(key, future)
        if not created:
            raise ConflictError(
                f'Folder "{folder_name}" already exists in this location',
                details={"name": folder_name, "parent_id": parent, "folder_id": folder.id},
            )
        return folder

    @property
    def inflight_count(self) -> int:
        with self._inflight_lock:
            return len(self._inflight)

    # ----------------------------
    # Internals
    # ----------------------------
    def _claim(self, key: _Key) -> tuple[Future[ResolvedFolder], bool]:
        with self._inflight_lock:
            future = self._inflight.get(key)
            if future is not None:
                return future, False
            future = Future()
            self._inflight[key] = future
            return future, True

    def _lead(self, key: _Key, future: Future[ResolvedFolder]) -> tuple[ResolvedFolder, bool]:
        folder_name, parent = key
        try:
            folder, created = self._find_or_create(folder_name, parent)
        except Exception as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(folder)
            return folder, created
        finally:
            if not future.done():
                future.cancel()
            with self._inflight_lock:
                self._inflight.pop(key, None)

    def _find_or_create(self, folder_name: str, parent: str) -> tuple[ResolvedFolder, bool]:
        """
        Search, then create if nothing matched, as one retryable operation.

        A retry searches again, so a create whose response was lost is found
        instead of repeated. Returns the folder and whether this call created it.
        """
        query = FolderQuery(parent_id=parent, name=folder_name)
        create_sent = False

        def search_then_create() -> tuple[RemoteFolder, bool]:
            nonlocal create_sent
            matches = self._api.list_folders(query)
            if matches:
                if len(matches) > 1:
                    logger.warning(
                        "Found %d folders named %r under %s; using %s",
                        len(matches),
                        folder_name,
                        parent,
                        matches[0].id,
                    )
                return matches[0], create_sent
            create_sent = True
            return self._api.create_folder(folder_name, parent), True

        try:
            folder, created = self._executor.execute(
                search_then_create,
                f"ensure_folder({folder_name!r}, {parent})",
            )
        except ConflictError:
            matches = self._search(folder_name, parent)
            if not matches:
                raise
            logger.info("Folder %r appeared under %s during create", folder_name, parent)
            folder, created = matches[0], False

        if created:
            logger.info("Created folder %r (%s) under %s", folder.name, folder.id, parent)
        return self._resolved(folder, folder_name, parent), created

    def _search(self, folder_name: str, parent: str) -> list[RemoteFolder]:
        query = FolderQuery(parent_id=parent, name=folder_name)
        return self._executor.execute(
            lambda: self._api.list_folders(query),
            f"find_folder({folder_name!r}, {parent})",
        )

    def _resolved(self, folder: RemoteFolder, folder_name: str, parent: str) -> ResolvedFolder:
        if not folder.name:
            folder = replace(folder, name=folder_name)
        path = join_path(self._parent_path(parent), folder.name)
        self._cache.set(folder.id, path)
        return ResolvedFolder.from_remote(folder, path)

    def _parent_path(self, parent: str) -> str:
        if parent == ROOT_FOLDER_ID:
            return MY_DRIVE_PATH
        cached = self._cache.get(parent)
        if cached is not None:
            return cached
        return self._resolver.resolve_path(parent)
