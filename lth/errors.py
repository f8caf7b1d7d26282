"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LTHUserError.

Programming errors and bugs should NOT inherit from LTHUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path


class LTHUserError(Exception):
    """
    Base class for all user-facing errors in Link Tag Helper.

    These errors indicate problems that the user can fix:
    configuration issues, a missing web root, unreadable documents, etc.
    """
    pass


class ConfigLoadError(LTHUserError):
    """Raised when lth-cfg/settings.yaml cannot be turned into settings."""
    pass


class WebRootNotFoundError(LTHUserError):
    """Raised when glob patterns are resolved against a web root that does not exist."""
    def __init__(self, web_root: Path):
        self.web_root = web_root
        super().__init__(f"Web root not found: {web_root}")


__all__ = ["LTHUserError", "ConfigLoadError", "WebRootNotFoundError"]
