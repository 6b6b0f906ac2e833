"""Public model exports for shootdrive."""

from __future__ import annotations

from .folder import (
    ROOT_FOLDER_ID,
    Bucket,
    DriveInfo,
    FolderMetadata,
    FolderQuery,
    RemoteFolder,
    ResolvedFolder,
)
from .navigation import ROOT_TARGET, ItemKind, NavigationItem, NavigationTarget

__all__ = [
    "ROOT_FOLDER_ID",
    "ROOT_TARGET",
    "Bucket",
    "DriveInfo",
    "FolderMetadata",
    "FolderQuery",
    "ItemKind",
    "NavigationItem",
    "NavigationTarget",
    "RemoteFolder",
    "ResolvedFolder",
]
