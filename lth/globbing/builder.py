"""
Resolver of globbed stylesheet urls.

Turns a static url plus include/exclude glob patterns into an ordered list of
site-rooted urls for files below the web root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .fs import compile_patterns, directory_stamp, iter_web_files, split_patterns
from ..cache import ResourceCache
from ..errors import WebRootNotFoundError

logger = logging.getLogger(__name__)


def normalize_path_base(path_base: Optional[str]) -> str:
    """'/app/' → '/app', 'app' → '/app', '' or '/' → ''."""
    if not path_base:
        return ""
    base = "/" + path_base.strip().strip("/")
    return "" if base == "/" else base


class GlobbingUrlBuilder:
    """
    Builds url lists for the link tag helper.

    Matches are cached in the shared ResourceCache keyed by the web root, the request
    path base and the raw include/exclude values.
    """

    def __init__(
        self,
        web_root: Path,
        cache: Optional[ResourceCache],
        request_path_base: Optional[str],
        *,
        watch_files: bool = True,
    ):
        self.web_root = Path(web_root)
        self.cache = cache
        self.request_path_base = normalize_path_base(request_path_base)
        self.watch_files = watch_files
        # Taken on first lookup; one builder serves one element
        self._stamp: Optional[str] = None

    def build_url_list(
        self,
        static_url: Optional[str],
        include_pattern: Optional[str],
        exclude_pattern: Optional[str],
    ) -> List[str]:
        """
        Build the ordered, duplicate-free list of urls.

        Args:
            static_url: Statically declared url, listed first when not None
            include_pattern: Comma separated globs of files to include
            exclude_pattern: Comma separated globs of files to exclude

        Returns:
            Static url (if any) followed by the matched urls in path order
        """
        urls: List[str] = []
        if static_url is not None:
            urls.append(static_url)

        for url in self._expand_globbed_url(include_pattern, exclude_pattern):
            if url not in urls:
                urls.append(url)
        return urls

    def _expand_globbed_url(self, include: Optional[str], exclude: Optional[str]) -> Sequence[str]:
        include_patterns = split_patterns(include)
        if not include_patterns:
            return ()
        exclude_patterns = split_patterns(exclude)

        if self.cache is None:
            return self._find_files(include_patterns, exclude_patterns)

        key = self._cache_key(include, exclude)
        token = self._change_token() if self.watch_files else None
        return self.cache.get_or_set(
            key,
            lambda: self._find_files(include_patterns, exclude_patterns),
            token=token,
        )

    def _cache_key(self, include: Optional[str], exclude: Optional[str]) -> str:
        return (
            f"GlobbingUrlBuilder-root:{self.web_root}-base:{self.request_path_base}"
            f"-inc:{include}-exc:{exclude}"
        )

    def _change_token(self) -> str:
        """Directory stamp of the web root, walked once per builder instance."""
        if self._stamp is None:
            self._ensure_web_root()
            self._stamp = directory_stamp(self.web_root)
        return self._stamp

    def _ensure_web_root(self) -> None:
        if not self.web_root.is_dir():
            raise WebRootNotFoundError(self.web_root)

    def _find_files(self, include_patterns: List[str], exclude_patterns: List[str]) -> tuple[str, ...]:
        self._ensure_web_root()
        include_spec = compile_patterns(include_patterns)
        exclude_spec = compile_patterns(exclude_patterns)

        matched: List[str] = []
        for rel_posix in iter_web_files(self.web_root):
            probe = rel_posix.lower()
            if include_spec is None or not include_spec.match_file(probe):
                continue
            if exclude_spec is not None and exclude_spec.match_file(probe):
                continue
            matched.append(rel_posix)
        matched.sort()

        logger.debug(
            "Globbed %d file(s) under %s for include=%s exclude=%s",
            len(matched), self.web_root, include_patterns, exclude_patterns,
        )
        return tuple(self._resolve_matched_path(p) for p in matched)

    def _resolve_matched_path(self, matched_path: str) -> str:
        # Resolve the path to site root
        return f"{self.request_path_base}/{matched_path}"


__all__ = ["GlobbingUrlBuilder", "normalize_path_base"]
