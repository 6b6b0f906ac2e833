"""HierarchyBrowser: folder-picker listings."""

from __future__ import annotations

import logging
from typing import Optional

from shootdrive.cache import PathCache
from shootdrive.controller import FolderApi
from shootdrive.errors import PermissionDeniedError
from shootdrive.models import (
    ROOT_FOLDER_ID,
    ROOT_TARGET,
    DriveInfo,
    FolderQuery,
    ItemKind,
    NavigationItem,
    NavigationTarget,
)
from shootdrive.resilience import ResilientExecutor
from shootdrive.resolver import PathResolver
from shootdrive.util.paths import MY_DRIVE_PATH, join_path, shared_drive_path

logger = logging.getLogger(__name__)

BACK_LABEL: str = "Back"


class HierarchyBrowser:
    """
    List what a folder picker shows at one level.

    The browser keeps no navigation state. The caller passes the entry that
    "back" should lead to; by default it leads to the root listing.
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

    def list_children(
        self,
        parent_id: Optional[str] = None,
        back: Optional[NavigationTarget] = None,
    ) -> list[NavigationItem]:
        if not parent_id or parent_id == ROOT_FOLDER_ID:
            return self._list_root()
        return self._list_folder(parent_id, back or ROOT_TARGET)

    # ----------------------------
    # Internals
    # ----------------------------
    def _list_root(self) -> list[NavigationItem]:
        folders = self._executor.execute(
            lambda: self._api.list_folders(FolderQuery(parent_id=ROOT_FOLDER_ID)),
            "list_folders(root)",
        )
        items: list[NavigationItem] = []
        for folder in folders:
            path = join_path(MY_DRIVE_PATH, folder.name)
            self._cache.set(folder.id, path)
            items.append(
                NavigationItem(
                    id=folder.id,
                    name=folder.name,
                    view_link=folder.view_link,
                    path=path,
                    kind=ItemKind.PERSONAL_FOLDER,
                )
            )

        for drive in self._shared_drives():
            self._resolver.remember_drive(drive)
            items.append(
                NavigationItem(
                    id=drive.id,
                    name=drive.name,
                    view_link=drive.view_link,
                    path=shared_drive_path(drive.name),
                    kind=ItemKind.SHARED_DRIVE,
                )
            )

        logger.debug("Root listing: %d item(s)", len(items))
        return items

    def _shared_drives(self) -> list[DriveInfo]:
        try:
            return self._executor.execute(self._api.list_drives, "list_drives")
        except PermissionDeniedError as exc:
            logger.warning("Shared drives are not accessible: %s", exc)
            return []

    def _list_folder(self, parent_id: str, back: NavigationTarget) -> list[NavigationItem]:
        # Resolving first lets the walk record the parent's drive id.
        parent_path = self._cache.get(parent_id)
        if parent_path is None:
            parent_path = self._resolver.resolve_path(parent_id)

        drive_id = self._resolver.drive_id_of(parent_id)
        query = FolderQuery(parent_id=parent_id, drive_id=drive_id)
        folders = self._executor.execute(
            lambda: self._api.list_folders(query),
            f"list_folders({parent_id})",
        )

        items = [
            NavigationItem(
                id=back.id,
                name=BACK_LABEL,
                view_link="",
                path=back.path,
                is_parent_link=True,
            )
        ]

        for folder in folders:
            path = join_path(parent_path, folder.name)
            self._cache.set(folder.id, path)
            items.append(
                NavigationItem(
                    id=folder.id,
                    name=folder.name,
                    view_link=folder.view_link,
                    path=path,
                    kind=ItemKind.FOLDER,
                )
            )

        logger.debug(
            "Listed %d folder(s) under %s (drive: %s)",
            len(folders),
            parent_id,
            drive_id or "My Drive",
        )
        return items
