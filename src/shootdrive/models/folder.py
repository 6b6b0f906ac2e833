"""Data model for Drive folders and drives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ROOT_FOLDER_ID: str = "root"


@dataclass(slots=True, frozen=True)
class RemoteFolder:
    """Minimal identity of a folder as returned by the Drive API."""

    id: str
    name: str
    view_link: str = ""


@dataclass(slots=True, frozen=True)
class ResolvedFolder:
    """
    A RemoteFolder with its canonical path.

    The path is slash-delimited and rooted at "/My Drive" or
    "/Shared Drives/<drive name>".
    """

    id: str
    name: str
    view_link: str
    path: str

    @classmethod
    def from_remote(cls, folder: RemoteFolder, path: str) -> ResolvedFolder:
        return cls(id=folder.id, name=folder.name, view_link=folder.view_link, path=path)


@dataclass(slots=True, frozen=True)
class FolderMetadata:
    """
    What a parent walk needs to know about one folder.

    Notes:
        - parent_id is the ROOT_FOLDER_ID sentinel for top-level My Drive items
          and None for items without a visible parent.
        - is_root is True only for the My Drive root folder itself.
    """

    id: str
    name: str
    parent_id: Optional[str] = None
    drive_id: Optional[str] = None
    is_root: bool = False


@dataclass(slots=True, frozen=True)
class DriveInfo:
    """A shared drive visible to the authenticated principal."""

    id: str
    name: str

    @property
    def view_link(self) -> str:
        return f"https://drive.google.com/drive/folders/{self.id}"


@dataclass(slots=True, frozen=True)
class FolderQuery:
    """
    Folder search criteria understood by FolderApi.list_folders.

    Only folders directly under parent_id are matched. When name is given the
    match is exact. drive_id scopes the search to one shared drive.
    """

    parent_id: str = ROOT_FOLDER_ID
    name: Optional[str] = None
    drive_id: Optional[str] = None
    include_trashed: bool = False


class Bucket(str, Enum):
    """Sub-buckets created under a shoot or content-item folder."""

    RAW_FILES = "raw-files"
    MISC_FILES = "misc-files"
