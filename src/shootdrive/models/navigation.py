"""Folder-picker navigation models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .folder import ROOT_FOLDER_ID


class ItemKind(str, Enum):
    """What a NavigationItem points at."""

    PERSONAL_FOLDER = "personal-folder"
    SHARED_DRIVE = "shared-drive"
    FOLDER = "folder"


@dataclass(slots=True, frozen=True)
class NavigationItem:
    """
    One row of a folder picker.

    is_parent_link marks the synthetic "go back" entry. It is never persisted.
    """

    id: str
    name: str
    view_link: str
    path: str
    kind: ItemKind = ItemKind.FOLDER
    is_parent_link: bool = False


@dataclass(slots=True, frozen=True)
class NavigationTarget:
    """An (id, name, path) triple from the caller's navigation stack."""

    id: str
    name: str
    path: str


ROOT_TARGET = NavigationTarget(id=ROOT_FOLDER_ID, name="Root", path="/")
