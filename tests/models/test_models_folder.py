import unittest
from dataclasses import FrozenInstanceError

from shootdrive.models import (
    ROOT_TARGET,
    Bucket,
    DriveInfo,
    FolderQuery,
    ItemKind,
    NavigationItem,
    RemoteFolder,
    ResolvedFolder,
)


class TestFolderModels(unittest.TestCase):
    def test_resolved_from_remote(self) -> None:
        remote = RemoteFolder(id="F1", name="Acme", view_link="https://x/F1")
        resolved = ResolvedFolder.from_remote(remote, "/My Drive/Acme")
        self.assertEqual(resolved.id, "F1")
        self.assertEqual(resolved.view_link, "https://x/F1")
        self.assertEqual(resolved.path, "/My Drive/Acme")

    def test_models_are_immutable(self) -> None:
        folder = RemoteFolder(id="F1", name="Acme")
        with self.assertRaises(FrozenInstanceError):
            folder.name = "Other"  # type: ignore[misc]

    def test_drive_view_link(self) -> None:
        self.assertEqual(
            DriveInfo(id="D1", name="Ops").view_link,
            "https://drive.google.com/drive/folders/D1",
        )

    def test_query_defaults_to_root(self) -> None:
        query = FolderQuery()
        self.assertEqual(query.parent_id, "root")
        self.assertIsNone(query.name)
        self.assertFalse(query.include_trashed)

    def test_bucket_values(self) -> None:
        self.assertEqual(Bucket("raw-files"), Bucket.RAW_FILES)
        self.assertEqual(Bucket.MISC_FILES.value, "misc-files")
        with self.assertRaises(ValueError):
            Bucket("edits")


class TestNavigationModels(unittest.TestCase):
    def test_item_defaults(self) -> None:
        item = NavigationItem(id="F1", name="Acme", view_link="", path="/My Drive/Acme")
        self.assertEqual(item.kind, ItemKind.FOLDER)
        self.assertFalse(item.is_parent_link)

    def test_root_target(self) -> None:
        self.assertEqual(ROOT_TARGET.id, "root")
        self.assertEqual(ROOT_TARGET.path, "/")


if __name__ == "__main__":
    unittest.main()
