from .mime import FOLDER_MIME
from .names import (
    MAX_FOLDER_NAME_LENGTH,
    escape_query_value,
    sanitize_folder_name,
    shoot_folder_name,
)
from .paths import (
    MY_DRIVE_PATH,
    SHARED_DRIVES_PATH,
    is_same_or_under,
    join_path,
    join_segments,
    shared_drive_path,
)
from .time import DateLike, parse_rfc3339, to_calendar_date, today_utc

__all__ = [
    "FOLDER_MIME",
    "MAX_FOLDER_NAME_LENGTH",
    "escape_query_value",
    "sanitize_folder_name",
    "shoot_folder_name",
    "MY_DRIVE_PATH",
    "SHARED_DRIVES_PATH",
    "is_same_or_under",
    "join_path",
    "join_segments",
    "shared_drive_path",
    "DateLike",
    "parse_rfc3339",
    "to_calendar_date",
    "today_utc",
]
