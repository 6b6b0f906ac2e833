"""HierarchyBuilder: the client/shoot/content folder chain."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Union

from shootdrive.config import NamingConfiguration
from shootdrive.errors import ValidationError
from shootdrive.factory import FolderFactory
from shootdrive.models import Bucket, ResolvedFolder
from shootdrive.util.names import shoot_folder_name
from shootdrive.util.time import DateLike, to_calendar_date, today_utc

logger = logging.getLogger(__name__)


class HierarchyBuilder:
    """
    Compose FolderFactory calls into

        parent -> [year] -> client -> "[YYYY-MM-DD] title" -> [content item] -> bucket

    Steps run strictly in order, each feeding its folder id to the next. The
    chain is not atomic, but every step is find-before-create, so repeating a
    failed call only creates what is still missing. Errors propagate from the
    failing step unchanged.
    """

    def __init__(
        self,
        factory: FolderFactory,
        *,
        today: Callable[[], date] = today_utc,
    ) -> None:
        self._factory = factory
        self._today = today

    def build_content_folder(
        self,
        business_name: str,
        shoot_title: str,
        shoot_date: DateLike,
        content_item_name: Optional[str] = None,
        bucket: Union[Bucket, str] = Bucket.RAW_FILES,
        config: Optional[NamingConfiguration] = None,
    ) -> ResolvedFolder:
        """
        Return the bucket folder for one shoot, creating the chain.

        A missing or blank content_item_name puts the bucket directly under the
        shoot folder.
        """
        bucket = _as_bucket(bucket)
        shoot = self.build_shoot_folder(business_name, shoot_title, shoot_date, config)
        if content_item_name is None or not content_item_name.strip():
            return self._factory.ensure_folder(bucket.value, shoot.id)
        return self.build_content_item_folder(content_item_name, shoot.id, bucket)

    def build_client_folder(
        self,
        client_name: str,
        config: Optional[NamingConfiguration] = None,
    ) -> ResolvedFolder:
        config = config or NamingConfiguration()
        today = self._today()
        folder_name = config.client_folder_name(client_name, today)

        parent_id = config.parent_folder_id
        if config.insert_year_folder:
            year_folder = self._factory.ensure_folder(str(today.year), parent_id)
            parent_id = year_folder.id

        return self._factory.ensure_folder(folder_name, parent_id)

    def build_shoot_folder(
        self,
        client_name: str,
        shoot_title: str,
        shoot_date: DateLike,
        config: Optional[NamingConfiguration] = None,
    ) -> ResolvedFolder:
        client = self.build_client_folder(client_name, config)
        name = shoot_folder_name(shoot_title, _as_date(shoot_date))
        shoot = self._factory.ensure_folder(name, client.id)
        logger.debug("Shoot folder ready: %s", shoot.path)
        return shoot

    def build_content_item_folder(
        self,
        content_item_name: str,
        shoot_folder_id: str,
        bucket: Union[Bucket, str] = Bucket.RAW_FILES,
    ) -> ResolvedFolder:
        """Ensure <shoot>/<content item>/<bucket> and return the bucket folder."""
        item = self._factory.ensure_folder(content_item_name, shoot_folder_id)
        return self._factory.ensure_folder(_as_bucket(bucket).value, item.id)


def _as_bucket(value: Union[Bucket, str]) -> Bucket:
    try:
        return Bucket(value)
    except ValueError as exc:
        raise ValidationError(
            "Unknown bucket",
            details={"bucket": value, "allowed": [b.value for b in Bucket]},
            cause=exc,
        ) from exc


def _as_date(value: DateLike) -> date:
    try:
        return to_calendar_date(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Invalid shoot date",
            details={"shoot_date": str(value)},
            cause=exc,
        ) from exc
