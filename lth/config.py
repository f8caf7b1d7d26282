"""
Loader of lth-cfg/settings.yaml.

The file is optional: a project without it gets the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError
from .paths import DEFAULT_WEB_ROOT, settings_path

_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class CacheSettings:
    enabled: bool = True
    ttl: Optional[float] = None  # seconds; None = entries never expire by age
    watch_files: bool = True  # invalidate matches when the web root tree changes

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheSettings":
        ttl = data.get("ttl")
        if ttl is not None:
            try:
                ttl = float(ttl)
            except (TypeError, ValueError):
                raise ConfigLoadError(f"cache.ttl: expected a number of seconds, got {ttl!r}")
            if ttl <= 0:
                raise ConfigLoadError(f"cache.ttl: must be positive, got {ttl!r}")
        return cls(
            enabled=bool(data.get("enabled", True)),
            ttl=ttl,
            watch_files=bool(data.get("watch_files", True)),
        )


@dataclass(frozen=True)
class Settings:
    """Typed view of settings.yaml."""
    web_root: str = DEFAULT_WEB_ROOT
    path_base: str = ""
    cache: CacheSettings = field(default_factory=CacheSettings)
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        cache_raw = data.get("cache") or {}
        if not isinstance(cache_raw, dict):
            raise ConfigLoadError("cache: expected a mapping")
        logging_raw = data.get("logging") or {}
        if not isinstance(logging_raw, dict):
            raise ConfigLoadError("logging: expected a mapping")
        return cls(
            web_root=str(data.get("web_root", DEFAULT_WEB_ROOT)),
            path_base=str(data.get("path_base") or ""),
            cache=CacheSettings.from_dict(cache_raw),
            log_level=str(logging_raw.get("level", "WARNING")),
        )

    def with_overrides(self, *, web_root: Optional[str] = None, path_base: Optional[str] = None) -> "Settings":
        """Apply command line overrides; None keeps the file value."""
        changes: Dict[str, Any] = {}
        if web_root is not None:
            changes["web_root"] = web_root
        if path_base is not None:
            changes["path_base"] = path_base
        return replace(self, **changes) if changes else self


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns a mapping ({} when the file is missing or empty)."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}")
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_settings(root: Path) -> Settings:
    """
    Load settings for the project rooted at `root`.

    Args:
        root: Project root (the directory that holds lth-cfg/)

    Returns:
        Settings with defaults for every missing key
    """
    return Settings.from_dict(_read_yaml_map(settings_path(root)))


__all__ = ["Settings", "CacheSettings", "load_settings"]
