"""shootdrive public API."""

from __future__ import annotations

from shootdrive.browser import HierarchyBrowser
from shootdrive.builder import HierarchyBuilder
from shootdrive.cache import PathCache
from shootdrive.config import (
    ClientOnly,
    Custom,
    NamingConfiguration,
    NamingPattern,
    RetryPolicy,
    YearClient,
    apply_naming_pattern,
)
from shootdrive.controller import DriveClient, FolderApi
from shootdrive.engine import FolderEngine
from shootdrive.errors import (
    AuthExpiredError,
    ConflictError,
    CycleDetectedError,
    HttpErrorInfo,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RateLimitedError,
    RemoteApiError,
    RemoteUnavailableError,
    ShootDriveError,
    ValidationError,
    map_http_error,
)
from shootdrive.factory import FolderFactory
from shootdrive.models import (
    ROOT_FOLDER_ID,
    Bucket,
    DriveInfo,
    FolderMetadata,
    FolderQuery,
    ItemKind,
    NavigationItem,
    NavigationTarget,
    RemoteFolder,
    ResolvedFolder,
)
from shootdrive.resilience import ResilientExecutor, RetryState
from shootdrive.resolver import PathResolver

__all__ = [
    # High-level
    "FolderEngine",
    # Components
    "ResilientExecutor",
    "RetryState",
    "PathCache",
    "PathResolver",
    "FolderFactory",
    "HierarchyBuilder",
    "HierarchyBrowser",
    # Remote capability
    "FolderApi",
    "DriveClient",
    # Configuration
    "RetryPolicy",
    "NamingConfiguration",
    "NamingPattern",
    "ClientOnly",
    "YearClient",
    "Custom",
    "apply_naming_pattern",
    # Models
    "ROOT_FOLDER_ID",
    "Bucket",
    "DriveInfo",
    "FolderMetadata",
    "FolderQuery",
    "ItemKind",
    "NavigationItem",
    "NavigationTarget",
    "RemoteFolder",
    "ResolvedFolder",
    # Errors
    "ShootDriveError",
    "ValidationError",
    "AuthExpiredError",
    "PermissionDeniedError",
    "QuotaExceededError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "RemoteUnavailableError",
    "RemoteApiError",
    "CycleDetectedError",
    "HttpErrorInfo",
    "map_http_error",
]
