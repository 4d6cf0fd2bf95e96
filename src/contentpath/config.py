from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from contentpath.classifier import CLOUD_PHOTO_AUTHORITIES

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def _env(name: str) -> str | None:
    """Read a variable, treating blanks and unexpanded ${...} placeholders as unset."""
    value = os.getenv(name)
    if value is None or "${" in value:
        return None
    return value.strip() or None


def _env_bool(name: str, default: bool = False) -> bool:
    value = _env(name)
    return default if value is None else value.lower() in _TRUTHY


def _env_list(name: str) -> list[str]:
    return [item.strip() for item in (_env(name) or "").split(",") if item.strip()]


def _env_path(name: str) -> Path | None:
    value = _env(name)
    return Path(value).expanduser() if value else None


@dataclass(frozen=True)
class Paths:
    root: Path
    store_path: Path
    media_path: Path
    external_storage_root: Path


@dataclass(frozen=True)
class Settings:
    paths: Paths
    document_uris: bool
    materialize_missing_rows: bool
    cloud_authorities: frozenset[str]
    log_file: Path | None
    log_level: str


def resolve_paths() -> Paths:
    home = _env_path("CONTENTPATH_HOME")
    root = (home or Path.home() / "ContentPath").resolve()

    media = root / "media"
    root.mkdir(parents=True, exist_ok=True)
    media.mkdir(parents=True, exist_ok=True)

    return Paths(
        root=root,
        store_path=root / "content.db",
        media_path=media,
        external_storage_root=_env_path("EXTERNAL_STORAGE") or root / "sdcard",
    )


def load_settings() -> Settings:
    return Settings(
        paths=resolve_paths(),
        document_uris=_env_bool("CONTENTPATH_DOCUMENT_URIS", default=True),
        materialize_missing_rows=_env_bool("CONTENTPATH_MATERIALIZE_MISSING_ROWS", default=True),
        cloud_authorities=CLOUD_PHOTO_AUTHORITIES | frozenset(_env_list("CONTENTPATH_CLOUD_AUTHORITIES")),
        log_file=_env_path("CONTENTPATH_LOG_FILE"),
        log_level=_env("CONTENTPATH_LOG_LEVEL") or "INFO",
    )


__all__ = ["Paths", "Settings", "load_settings", "resolve_paths"]
