"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FOLDER_FIELDS: str = "id,name,webViewLink"

METADATA_FIELDS: str = "id,name,parents,driveId"

LIST_FIELDS: str = f"nextPageToken,files({FOLDER_FIELDS})"

DRIVE_FIELDS: str = "id,name"

DRIVE_LIST_FIELDS: str = f"nextPageToken,drives({DRIVE_FIELDS})"

ABOUT_FIELDS: str = "user(displayName,emailAddress)"
