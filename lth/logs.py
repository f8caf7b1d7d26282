from __future__ import annotations

import logging
import os

_LOG = logging.getLogger("lth")

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def resolve_level(level: str | None) -> int:
    """
    Level name from settings/CLI → logging level.
    LTH_DEBUG in the environment always wins.
    """
    if os.environ.get("LTH_DEBUG"):
        return logging.DEBUG
    name = (level or "WARNING").strip().upper()
    if name not in _LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Expected one of: {', '.join(sorted(_LEVELS))}")
    return getattr(logging, name)


def setup_logging(level: str | None = None) -> None:
    """Install a single stderr handler on the 'lth' logger (idempotent)."""
    _LOG.setLevel(resolve_level(level))
    if getattr(setup_logging, "_inited", False):
        return
    setup_logging._inited = True  # type: ignore[attr-defined]
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


__all__ = ["setup_logging", "resolve_level"]
