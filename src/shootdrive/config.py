"""Engine configuration: retry policy and per-tenant folder naming."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Union

from shootdrive.errors import ValidationError


@dataclass(frozen=True)
class RetryPolicy:
    """
    Backoff schedule for ResilientExecutor.

    The delay before retry n (0-based) is base_delay_sec * 2**n, stretched by
    up to `jitter` (a fraction, 0.0 disables it).
    """

    max_retries: int = 3
    base_delay_sec: float = 1.0
    jitter: float = 0.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay_sec < 0:
            raise ValueError("base_delay_sec must be >= 0")
        if not 0.0 <= self.jitter <= 1.0:
            raise ValueError("jitter must be within [0.0, 1.0]")

    def delay_for(self, attempt: int) -> float:
        """Return the un-jittered delay in seconds before retry `attempt`."""
        return self.base_delay_sec * (2**attempt)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> RetryPolicy:
        """
        Build a policy from environment variables, falling back to defaults.

        Variables:
            - SHOOTDRIVE_MAX_RETRIES
            - SHOOTDRIVE_BASE_DELAY_MS
            - SHOOTDRIVE_RETRY_JITTER
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        max_retries = _env_number(env, "SHOOTDRIVE_MAX_RETRIES", int, defaults.max_retries)
        base_ms = _env_number(
            env, "SHOOTDRIVE_BASE_DELAY_MS", float, defaults.base_delay_sec * 1000.0
        )
        jitter = _env_number(env, "SHOOTDRIVE_RETRY_JITTER", float, defaults.jitter)
        return cls(max_retries=max_retries, base_delay_sec=base_ms / 1000.0, jitter=jitter)


def _env_number(env: Mapping[str, str], key: str, cast: type, default: Any) -> Any:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid value for {key}",
            details={"key": key, "value": raw},
            cause=exc,
        ) from exc


# ----------------------------
# Naming patterns
# ----------------------------
@dataclass(frozen=True)
class ClientOnly:
    """Client folder is named after the client."""

    name: str = field(default="client-only", init=False)


@dataclass(frozen=True)
class YearClient:
    """Client folder is named "<year> - <client>"."""

    name: str = field(default="year-client", init=False)


@dataclass(frozen=True)
class Custom:
    """Client folder name comes from a template with {client}, {year}, {month}."""

    template: str
    name: str = field(default="custom", init=False)


NamingPattern = Union[ClientOnly, YearClient, Custom]

_PATTERN_NAMES: tuple[str, ...] = ("client-only", "year-client", "custom")


def apply_naming_pattern(pattern: NamingPattern, client_name: str, today: date) -> str:
    """Return the client folder name for `pattern` on the given day."""
    if isinstance(pattern, YearClient):
        return f"{today.year} - {client_name}"
    if isinstance(pattern, Custom):
        if not pattern.template.strip():
            return client_name
        return (
            pattern.template.replace("{client}", client_name)
            .replace("{year}", str(today.year))
            .replace("{month}", f"{today.month:02d}")
        )
    return client_name


def parse_naming_pattern(name: Optional[str], template: Optional[str] = None) -> NamingPattern:
    """
    Build a NamingPattern from its stored name.

    Raises:
        ValidationError: for unknown pattern names.
    """
    if name is None or name == "client-only":
        return ClientOnly()
    if name == "year-client":
        return YearClient()
    if name == "custom":
        return Custom(template=template or "")
    raise ValidationError(
        "Unknown folder naming pattern",
        details={"pattern": name, "allowed": list(_PATTERN_NAMES)},
    )


@dataclass(frozen=True)
class NamingConfiguration:
    """
    Per-tenant shape of the folder hierarchy.

    Attributes:
        parent_folder_id: Folder under which client (or year) folders live.
            None means the My Drive root.
        insert_year_folder: Insert a folder for the current year above the
            client folder.
        naming_pattern: How the client folder is named.
    """

    parent_folder_id: Optional[str] = None
    insert_year_folder: bool = False
    naming_pattern: NamingPattern = field(default_factory=ClientOnly)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]]) -> NamingConfiguration:
        """
        Build a configuration from a stored settings document.

        Recognized keys: parentFolderId, autoCreateYearFolders,
        folderNamingPattern, customNamingTemplate. Other keys are ignored.
        """
        if not settings:
            return cls()

        parent = settings.get("parentFolderId") or None
        if parent is not None and not isinstance(parent, str):
            raise ValidationError(
                "parentFolderId must be a string",
                details={"parentFolderId": parent},
            )

        return cls(
            parent_folder_id=parent,
            insert_year_folder=bool(settings.get("autoCreateYearFolders", False)),
            naming_pattern=parse_naming_pattern(
                settings.get("folderNamingPattern"),
                settings.get("customNamingTemplate"),
            ),
        )

    def client_folder_name(self, client_name: str, today: date) -> str:
        return apply_naming_pattern(self.naming_pattern, client_name, today)
