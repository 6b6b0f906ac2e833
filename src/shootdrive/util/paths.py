"""Canonical path helpers."""

from __future__ import annotations

MY_DRIVE_PATH: str = "/My Drive"
SHARED_DRIVES_PATH: str = "/Shared Drives"


def join_path(parent_path: str, name: str) -> str:
    """Append one folder name to a canonical path."""
    return f"{parent_path.rstrip('/')}/{name}"


def join_segments(base: str, segments: list[str]) -> str:
    path = base
    for segment in segments:
        path = join_path(path, segment)
    return path


def shared_drive_path(drive_name: str) -> str:
    return join_path(SHARED_DRIVES_PATH, drive_name)


def is_same_or_under(path: str, ancestor: str) -> bool:
    """Return True if path equals ancestor or lies below it."""
    if path == ancestor:
        return True
    return path.startswith(ancestor.rstrip("/") + "/")
