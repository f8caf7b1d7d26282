"""
Path utilities for Link Tag Helper.

Single source of truth for configuration directory structure.
"""

from __future__ import annotations

from pathlib import Path

# Configuration directory name
CFG_DIR = "lth-cfg"
SETTINGS_FILE = "settings.yaml"

# Default web root, relative to the project root
DEFAULT_WEB_ROOT = "wwwroot"


def cfg_root(root: Path) -> Path:
    """Absolute path to the lth-cfg/ directory."""
    return (root / CFG_DIR).resolve()


def settings_path(root: Path) -> Path:
    """Path to the settings file lth-cfg/settings.yaml."""
    return cfg_root(root) / SETTINGS_FILE


def resolve_web_root(root: Path, web_root: str | Path) -> Path:
    """Web root as an absolute path; relative values are taken from the project root."""
    p = Path(web_root)
    if not p.is_absolute():
        p = root / p
    return p.resolve()
