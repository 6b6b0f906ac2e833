"""Remote capability exports for shootdrive."""

from __future__ import annotations

from .api import FolderApi
from .drive_client import DriveClient, build_folder_query, http_error_to_info

__all__ = ["FolderApi", "DriveClient", "build_folder_query", "http_error_to_info"]
