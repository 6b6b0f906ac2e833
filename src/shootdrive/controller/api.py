"""The remote capability the folder engine is written against."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from shootdrive.models import DriveInfo, FolderMetadata, FolderQuery, RemoteFolder


class FolderApi(Protocol):
    """
    Folder/drive primitives of the remote storage service.

    Implementations may raise any exception; ResilientExecutor classifies it.
    DriveClient is the Google Drive implementation.
    """

    def list_folders(self, query: FolderQuery) -> list[RemoteFolder]: ...

    def get_folder_metadata(self, folder_id: str) -> FolderMetadata: ...

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> RemoteFolder: ...

    def list_drives(self) -> list[DriveInfo]: ...

    def drive_exists(self, drive_id: str) -> bool: ...

    def get_drive(self, drive_id: str) -> DriveInfo: ...

    def about(self) -> dict[str, Any]: ...
