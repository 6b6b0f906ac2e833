"""Google Drive v3 implementation of FolderApi."""

from __future__ import annotations

import json
from typing import Any, Optional

from googleapiclient.errors import HttpError

from shootdrive.errors import HttpErrorInfo
from shootdrive.models import (
    ROOT_FOLDER_ID,
    DriveInfo,
    FolderMetadata,
    FolderQuery,
    RemoteFolder,
)
from shootdrive.util.mime import FOLDER_MIME
from shootdrive.util.names import escape_query_value

from .fields import (
    ABOUT_FIELDS,
    DRIVE_FIELDS,
    DRIVE_LIST_FIELDS,
    FOLDER_FIELDS,
    LIST_FIELDS,
    METADATA_FIELDS,
)

DEFAULT_TOKEN_URI: str = "https://oauth2.googleapis.com/token"

_PAGE_SIZE: int = 100
_NOT_A_DRIVE_STATUSES: tuple[int, ...] = (400, 404)


class DriveClient:
    """
    Drive API adapter exposing folder and shared-drive primitives.

    Notes:
        - The Drive `service` object is NOT exposed.
        - Calls are not retried here and raise raw `HttpError`;
          ResilientExecutor classifies and retries them.
        - The real My Drive root id is normalized to ROOT_FOLDER_ID.
    """

    def __init__(self, credentials: Any, *, supports_all_drives: bool = True) -> None:
        from googleapiclient.discovery import build

        self._supports_all_drives = supports_all_drives
        self._root_id: Optional[str] = None
        self._service = build("drive", "v3", credentials=credentials, cache_discovery=False)

    @classmethod
    def from_tokens(
        cls,
        access_token: str,
        refresh_token: Optional[str] = None,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_uri: str = DEFAULT_TOKEN_URI,
        supports_all_drives: bool = True,
    ) -> "DriveClient":
        """
        Create a client from an already-issued token pair.

        Token refresh is left to google-auth (when client_id/client_secret are
        given) or to the caller, who re-creates the client on AuthExpiredError.
        """
        from google.oauth2.credentials import Credentials

        creds = Credentials(
            token=access_token,
            refresh_token=refresh_token,
            client_id=client_id,
            client_secret=client_secret,
            token_uri=token_uri,
        )
        return cls(creds, supports_all_drives=supports_all_drives)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "DriveClient":
        """Create client from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._root_id = None
        obj._service = service
        return obj

    # ----------------------------
    # FolderApi
    # ----------------------------
    def list_folders(self, query: FolderQuery) -> list[RemoteFolder]:
        kwargs = self._common_list_kwargs()
        if query.drive_id:
            kwargs.update({"corpora": "drive", "driveId": query.drive_id})
        elif self._supports_all_drives:
            kwargs["corpora"] = "allDrives"

        folders: list[RemoteFolder] = []
        page_token: Optional[str] = None
        while True:
            req = self._service.files().list(
                q=build_folder_query(query),
                fields=LIST_FIELDS,
                orderBy="name",
                pageSize=_PAGE_SIZE,
                pageToken=page_token,
                **kwargs,
            )
            data = req.execute()
            for f in data.get("files", []) or []:
                folder = _folder_dict_to_remote_folder(f)
                if folder is not None:
                    folders.append(folder)

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return folders

    def get_folder_metadata(self, folder_id: str) -> FolderMetadata:
        root_id = self._my_drive_root_id()
        if folder_id in (ROOT_FOLDER_ID, root_id):
            return FolderMetadata(id=ROOT_FOLDER_ID, name="My Drive", is_root=True)

        req = self._service.files().get(
            fileId=folder_id,
            fields=METADATA_FIELDS,
            **self._common_get_kwargs(),
        )
        data = req.execute()

        parents = data.get("parents") or []
        parent_id = parents[0] if parents and isinstance(parents[0], str) else None
        if parent_id is not None and parent_id == root_id:
            parent_id = ROOT_FOLDER_ID

        drive_id = data.get("driveId")
        return FolderMetadata(
            id=str(data.get("id") or folder_id),
            name=str(data.get("name") or ""),
            parent_id=parent_id,
            drive_id=drive_id if isinstance(drive_id, str) else None,
        )

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> RemoteFolder:
        body: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME}
        if parent_id and parent_id != ROOT_FOLDER_ID:
            body["parents"] = [parent_id]

        req = self._service.files().create(
            body=body,
            fields=FOLDER_FIELDS,
            **self._common_get_kwargs(),
        )
        data = req.execute()
        folder = _folder_dict_to_remote_folder(data)
        if folder is None:
            raise ValueError("Drive did not return an id for the created folder")
        return folder

    def list_drives(self) -> list[DriveInfo]:
        drives: list[DriveInfo] = []
        page_token: Optional[str] = None
        while True:
            req = self._service.drives().list(
                fields=DRIVE_LIST_FIELDS,
                pageSize=_PAGE_SIZE,
                pageToken=page_token,
            )
            data = req.execute()
            for d in data.get("drives", []) or []:
                drive_id = d.get("id")
                if isinstance(drive_id, str) and drive_id:
                    drives.append(DriveInfo(id=drive_id, name=str(d.get("name") or "")))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return drives

    def drive_exists(self, drive_id: str) -> bool:
        if not drive_id or drive_id == ROOT_FOLDER_ID:
            return False
        try:
            self._service.drives().get(driveId=drive_id, fields="id").execute()
        except HttpError as exc:
            if _status_of(exc) in _NOT_A_DRIVE_STATUSES:
                return False
            raise
        return True

    def get_drive(self, drive_id: str) -> DriveInfo:
        data = self._service.drives().get(driveId=drive_id, fields=DRIVE_FIELDS).execute()
        return DriveInfo(id=str(data.get("id") or drive_id), name=str(data.get("name") or ""))

    def about(self) -> dict[str, Any]:
        return self._service.about().get(fields=ABOUT_FIELDS).execute()

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _my_drive_root_id(self) -> str:
        if self._root_id is None:
            data = self._service.files().get(fileId=ROOT_FOLDER_ID, fields="id").execute()
            self._root_id = str(data.get("id") or ROOT_FOLDER_ID)
        return self._root_id


def build_folder_query(query: FolderQuery) -> str:
    """Render a FolderQuery as a Drive `q` expression."""
    parts = [
        f"mimeType='{FOLDER_MIME}'",
        f"'{escape_query_value(query.parent_id or ROOT_FOLDER_ID)}' in parents",
    ]
    if query.name is not None:
        parts.append(f"name='{escape_query_value(query.name)}'")
    if not query.include_trashed:
        parts.append("trashed=false")
    return " and ".join(parts)


def _folder_dict_to_remote_folder(data: dict[str, Any]) -> Optional[RemoteFolder]:
    folder_id = data.get("id")
    if not isinstance(folder_id, str) or not folder_id:
        return None
    name = data.get("name")
    link = data.get("webViewLink")
    return RemoteFolder(
        id=folder_id,
        name=name if isinstance(name, str) else "",
        view_link=link if isinstance(link, str) else "",
    )


def _status_of(exc: Any) -> Optional[int]:
    status = getattr(getattr(exc, "resp", None), "status", None)
    if isinstance(status, str) and status.isdigit():
        return int(status)
    return status if isinstance(status, int) else None


def http_error_to_info(exc: Any) -> HttpErrorInfo:
    """Extract status, reason and message from a googleapiclient HttpError."""
    status_code = _status_of(exc)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    return HttpErrorInfo(
        status_code=status_code if isinstance(status_code, int) else 0,
        reason=reason if isinstance(reason, str) else None,
        message=message if isinstance(message, str) else None,
        details=details or None,
    )
