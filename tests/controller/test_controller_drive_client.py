import json
import unittest
from unittest.mock import Mock

from googleapiclient.errors import HttpError

from shootdrive.controller.drive_client import (
    DriveClient,
    build_folder_query,
    http_error_to_info,
)
from shootdrive.models import FolderQuery


def _http_error(status: int, reason: str | None = None, message: str = "boom") -> HttpError:
    resp = Mock()
    resp.status = status
    resp.reason = "Error"
    body = {"error": {"message": message}}
    if reason:
        body["error"]["errors"] = [{"reason": reason, "domain": "usageLimits"}]
    return HttpError(resp=resp, content=json.dumps(body).encode("utf-8"))


class TestBuildFolderQuery(unittest.TestCase):
    def test_default_query(self) -> None:
        q = build_folder_query(FolderQuery())
        self.assertIn("mimeType='application/vnd.google-apps.folder'", q)
        self.assertIn("'root' in parents", q)
        self.assertIn("trashed=false", q)
        self.assertNotIn("name=", q)

    def test_name_is_escaped(self) -> None:
        q = build_folder_query(FolderQuery(parent_id="P1", name="Bob's \\ shoot"))
        self.assertIn("'P1' in parents", q)
        self.assertIn("name='Bob\\'s \\\\ shoot'", q)

    def test_include_trashed(self) -> None:
        q = build_folder_query(FolderQuery(parent_id="P1", include_trashed=True))
        self.assertNotIn("trashed", q)


class TestHttpErrorToInfo(unittest.TestCase):
    def test_reason_and_message_from_payload(self) -> None:
        info = http_error_to_info(_http_error(403, "userRateLimitExceeded", "slow down"))
        self.assertEqual(info.status_code, 403)
        self.assertEqual(info.reason, "userRateLimitExceeded")
        self.assertEqual(info.message, "slow down")
        self.assertEqual(info.details, {"domain": "usageLimits"})

    def test_unparseable_content_keeps_status(self) -> None:
        resp = Mock()
        resp.status = 502
        resp.reason = "Bad Gateway"
        info = http_error_to_info(HttpError(resp=resp, content=b"<html>"))
        self.assertEqual(info.status_code, 502)
        self.assertEqual(info.reason, "Bad Gateway")
        self.assertIsNone(info.message)


class TestDriveClientMocked(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.files = Mock()
        self.drives = Mock()
        self.service.files.return_value = self.files
        self.service.drives.return_value = self.drives
        self.client = DriveClient.from_service(self.service)

    def test_list_folders_passes_all_drives_kwargs(self) -> None:
        self.files.list.return_value.execute.return_value = {
            "files": [{"id": "F1", "name": "Acme", "webViewLink": "https://x/F1"}]
        }

        folders = self.client.list_folders(FolderQuery(parent_id="P1", name="Acme"))

        kwargs = self.files.list.call_args.kwargs
        self.assertTrue(kwargs["supportsAllDrives"])
        self.assertTrue(kwargs["includeItemsFromAllDrives"])
        self.assertEqual(kwargs["orderBy"], "name")
        self.assertEqual(kwargs["corpora"], "allDrives")
        self.assertNotIn("driveId", kwargs)
        self.assertIn("name='Acme'", kwargs["q"])
        self.assertEqual([f.id for f in folders], ["F1"])
        self.assertEqual(folders[0].view_link, "https://x/F1")

    def test_list_folders_scoped_to_drive(self) -> None:
        self.files.list.return_value.execute.return_value = {"files": []}

        self.client.list_folders(FolderQuery(parent_id="D1", drive_id="D1"))

        kwargs = self.files.list.call_args.kwargs
        self.assertEqual(kwargs["corpora"], "drive")
        self.assertEqual(kwargs["driveId"], "D1")

    def test_list_folders_nested_in_shared_drive(self) -> None:
        self.files.list.return_value.execute.return_value = {"files": []}

        self.client.list_folders(FolderQuery(parent_id="X", drive_id="D1"))

        kwargs = self.files.list.call_args.kwargs
        self.assertEqual(kwargs["corpora"], "drive")
        self.assertEqual(kwargs["driveId"], "D1")
        self.assertIn("'X' in parents", kwargs["q"])

    def test_list_folders_follows_pages(self) -> None:
        self.files.list.return_value.execute.side_effect = [
            {"files": [{"id": "F1", "name": "a"}], "nextPageToken": "T2"},
            {"files": [{"id": "F2", "name": "b"}, {"name": "no id"}]},
        ]

        folders = self.client.list_folders(FolderQuery())

        self.assertEqual([f.id for f in folders], ["F1", "F2"])
        self.assertEqual(self.files.list.call_args_list[1].kwargs["pageToken"], "T2")

    def test_without_all_drives_support(self) -> None:
        client = DriveClient.from_service(self.service, supports_all_drives=False)
        self.files.list.return_value.execute.return_value = {"files": []}
        client.list_folders(FolderQuery())
        self.assertNotIn("supportsAllDrives", self.files.list.call_args.kwargs)
        self.assertNotIn("corpora", self.files.list.call_args.kwargs)

    def test_metadata_normalizes_my_drive_root(self) -> None:
        self.files.get.return_value.execute.side_effect = [
            {"id": "0AROOT"},
            {"id": "F1", "name": "Acme", "parents": ["0AROOT"]},
        ]

        meta = self.client.get_folder_metadata("F1")

        self.assertEqual(meta.parent_id, "root")
        self.assertFalse(meta.is_root)

        root = self.client.get_folder_metadata("0AROOT")
        self.assertTrue(root.is_root)
        self.assertEqual(self.files.get.call_count, 2)

    def test_metadata_keeps_shared_drive_parent(self) -> None:
        self.files.get.return_value.execute.side_effect = [
            {"id": "0AROOT"},
            {"id": "F1", "name": "Acme", "parents": ["D1"], "driveId": "D1"},
        ]
        meta = self.client.get_folder_metadata("F1")
        self.assertEqual(meta.parent_id, "D1")
        self.assertEqual(meta.drive_id, "D1")

    def test_metadata_http_error_is_raised_raw(self) -> None:
        self.files.get.return_value.execute.side_effect = [
            {"id": "0AROOT"},
            _http_error(404, "notFound"),
        ]
        with self.assertRaises(HttpError):
            self.client.get_folder_metadata("X")

    def test_create_folder_under_root_omits_parents(self) -> None:
        self.files.create.return_value.execute.return_value = {"id": "N1", "name": "Acme"}

        folder = self.client.create_folder("Acme", "root")

        body = self.files.create.call_args.kwargs["body"]
        self.assertEqual(body["mimeType"], "application/vnd.google-apps.folder")
        self.assertNotIn("parents", body)
        self.assertEqual(folder.id, "N1")

    def test_create_folder_under_parent(self) -> None:
        self.files.create.return_value.execute.return_value = {"id": "N1", "name": "Acme"}
        self.client.create_folder("Acme", "P1")
        body = self.files.create.call_args.kwargs["body"]
        self.assertEqual(body["parents"], ["P1"])
        self.assertTrue(self.files.create.call_args.kwargs["supportsAllDrives"])

    def test_create_folder_without_id_is_error(self) -> None:
        self.files.create.return_value.execute.return_value = {}
        with self.assertRaises(ValueError):
            self.client.create_folder("Acme", "P1")

    def test_drive_exists(self) -> None:
        self.drives.get.return_value.execute.return_value = {"id": "D1"}
        self.assertTrue(self.client.drive_exists("D1"))

        self.drives.get.return_value.execute.side_effect = _http_error(404, "notFound")
        self.assertFalse(self.client.drive_exists("F1"))

    def test_drive_exists_root_makes_no_call(self) -> None:
        self.assertFalse(self.client.drive_exists("root"))
        self.drives.get.assert_not_called()

    def test_drive_exists_propagates_other_errors(self) -> None:
        self.drives.get.return_value.execute.side_effect = _http_error(503)
        with self.assertRaises(HttpError):
            self.client.drive_exists("D1")

    def test_list_drives(self) -> None:
        self.drives.list.return_value.execute.side_effect = [
            {"drives": [{"id": "D1", "name": "Marketing"}], "nextPageToken": "T"},
            {"drives": [{"id": "D2", "name": "Ops"}]},
        ]
        drives = self.client.list_drives()
        self.assertEqual([(d.id, d.name) for d in drives], [("D1", "Marketing"), ("D2", "Ops")])
        self.assertEqual(drives[0].view_link, "https://drive.google.com/drive/folders/D1")

    def test_get_drive(self) -> None:
        self.drives.get.return_value.execute.return_value = {"id": "D1", "name": "Marketing"}
        self.assertEqual(self.client.get_drive("D1").name, "Marketing")


if __name__ == "__main__":
    unittest.main()
