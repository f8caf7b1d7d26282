"""
Test doubles for tag helper collaborators.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple


class RecordingUrlBuilder:
    """
    Stands in for GlobbingUrlBuilder: returns canned matches per include pattern
    and records every call.
    """

    def __init__(self, matches: Optional[Dict[str, List[str]]] = None):
        self.matches = matches or {}
        self.calls: List[Tuple[Optional[str], Optional[str], Optional[str]]] = []

    def build_url_list(self, static_url, include_pattern, exclude_pattern) -> List[str]:
        self.calls.append((static_url, include_pattern, exclude_pattern))
        urls: List[str] = []
        if static_url is not None:
            urls.append(static_url)
        for url in self.matches.get(include_pattern or "", []):
            if url not in urls:
                urls.append(url)
        return urls
