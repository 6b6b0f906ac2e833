"""Folder naming helpers."""

from __future__ import annotations

import re
from datetime import date

from shootdrive.errors import ValidationError

MAX_FOLDER_NAME_LENGTH: int = 255

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")


def sanitize_folder_name(name: str) -> str:
    """
    Normalize a folder name before it is searched for or created.

    - Surrounding whitespace is trimmed and inner runs collapse to one space.
    - Characters that break paths or other sync clients become "-".
    - Length is capped at MAX_FOLDER_NAME_LENGTH.
    - Casing is preserved.

    Raises:
        ValidationError: if nothing remains after trimming.
    """
    if not isinstance(name, str):
        raise ValidationError("Folder name must be a string", details={"name": name})

    cleaned = _WHITESPACE.sub(" ", name.strip())
    if not cleaned:
        raise ValidationError("Folder name cannot be empty", details={"name": name})

    cleaned = _INVALID_CHARS.sub("-", cleaned)
    return cleaned[:MAX_FOLDER_NAME_LENGTH].rstrip()


def shoot_folder_name(shoot_title: str, shoot_date: date) -> str:
    """Return "[YYYY-MM-DD] <title>"."""
    return f"[{shoot_date.isoformat()}] {shoot_title.strip()}"


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside a single-quoted Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")
