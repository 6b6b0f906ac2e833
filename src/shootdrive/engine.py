"""FolderEngine: one entry point over the folder organization components."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Union

from shootdrive.browser import HierarchyBrowser
from shootdrive.builder import HierarchyBuilder
from shootdrive.cache import PathCache
from shootdrive.config import NamingConfiguration, RetryPolicy
from shootdrive.controller import DriveClient, FolderApi
from shootdrive.errors import AuthExpiredError, ShootDriveError
from shootdrive.factory import FolderFactory
from shootdrive.models import Bucket, NavigationItem, NavigationTarget, ResolvedFolder
from shootdrive.resilience import ResilientExecutor
from shootdrive.resolver import PathResolver
from shootdrive.util.time import DateLike, today_utc

logger = logging.getLogger(__name__)


class FolderEngine:
    """
    Folder organization for one connected Drive account.

    Keep one engine per account for the life of the process: the path cache
    and the in-flight map that prevents duplicate folders live on it.
    """

    def __init__(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
        *,
        config: Optional[NamingConfiguration] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        client = DriveClient.from_tokens(access_token, refresh_token)
        self._setup(client, config=config, retry_policy=retry_policy)

    @classmethod
    def from_client(
        cls,
        client: FolderApi,
        *,
        config: Optional[NamingConfiguration] = None,
        retry_policy: Optional[RetryPolicy] = None,
        cache: Optional[PathCache] = None,
        sleep: Optional[Callable[[float], None]] = None,
        today: Callable[[], date] = today_utc,
    ) -> "FolderEngine":
        """Create engine with an injected FolderApi (useful for tests)."""
        obj = cls.__new__(cls)
        obj._setup(
            client,
            config=config,
            retry_policy=retry_policy,
            cache=cache,
            sleep=sleep,
            today=today,
        )
        return obj

    def _setup(
        self,
        client: FolderApi,
        *,
        config: Optional[NamingConfiguration],
        retry_policy: Optional[RetryPolicy],
        cache: Optional[PathCache] = None,
        sleep: Optional[Callable[[float], None]] = None,
        today: Callable[[], date] = today_utc,
    ) -> None:
        self._client = client
        self._config = config or NamingConfiguration()
        self._cache = cache if cache is not None else PathCache()
        if sleep is None:
            self._executor = ResilientExecutor(retry_policy)
        else:
            self._executor = ResilientExecutor(retry_policy, sleep=sleep)
        self._resolver = PathResolver(client, self._executor, self._cache)
        self._factory = FolderFactory(client, self._executor, self._cache, self._resolver)
        self._builder = HierarchyBuilder(self._factory, today=today)
        self._browser = HierarchyBrowser(client, self._executor, self._cache, self._resolver)

    # ----------------------------
    # Configuration
    # ----------------------------
    @property
    def config(self) -> NamingConfiguration:
        return self._config

    def update_config(self, config: NamingConfiguration) -> None:
        self._config = config

    # ----------------------------
    # Folder operations
    # ----------------------------
    def ensure_folder(self, name: str, parent_id: Optional[str] = None) -> ResolvedFolder:
        return self._factory.ensure_folder(name, parent_id)

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> ResolvedFolder:
        return self._factory.create_folder(name, parent_id)

    def resolve_path(self, folder_id: Optional[str]) -> str:
        return self._resolver.resolve_path(folder_id)

    def build_content_folder(
        self,
        business_name: str,
        shoot_title: str,
        shoot_date: DateLike,
        content_item_name: Optional[str] = None,
        bucket: Union[Bucket, str] = Bucket.RAW_FILES,
        config: Optional[NamingConfiguration] = None,
    ) -> ResolvedFolder:
        return self._builder.build_content_folder(
            business_name,
            shoot_title,
            shoot_date,
            content_item_name,
            bucket,
            config or self._config,
        )

    def build_shoot_folder(
        self,
        client_name: str,
        shoot_title: str,
        shoot_date: DateLike,
        config: Optional[NamingConfiguration] = None,
    ) -> ResolvedFolder:
        return self._builder.build_shoot_folder(
            client_name, shoot_title, shoot_date, config or self._config
        )

    def list_children(
        self,
        parent_id: Optional[str] = None,
        back: Optional[NavigationTarget] = None,
    ) -> list[NavigationItem]:
        return self._browser.list_children(parent_id, back)

    # ----------------------------
    # Cache management
    # ----------------------------
    def clear_cache(self) -> None:
        self._cache.clear()
        self._resolver.clear()
        logger.info("Path cache cleared")

    def cache_stats(self) -> dict[str, int]:
        return self._cache.stats()

    def invalidate(self, folder_id: str) -> int:
        """Forget a renamed or moved folder and everything cached below it."""
        return self._cache.invalidate(folder_id)

    def warm_up_cache(self, folder_id: str) -> bool:
        """Resolve and cache a folder's path ahead of time; failures are logged."""
        try:
            self._resolver.is_shared_drive_root(folder_id)
            self._resolver.resolve_path(folder_id)
        except ShootDriveError as exc:
            logger.warning("Failed to warm up cache for %s: %s", folder_id, exc)
            return False
        return True

    def health_check(self) -> bool:
        """Return True if the Drive API answers for these credentials."""
        try:
            about = self._executor.execute(self._client.about, "health_check")
        except AuthExpiredError:
            logger.error("Health check failed: credentials expired")
            return False
        except ShootDriveError as exc:
            logger.error("Health check failed: %s", exc)
            return False

        user = about.get("user") or {}
        logger.info("Health check passed for %s", user.get("emailAddress", "unknown user"))
        return True
