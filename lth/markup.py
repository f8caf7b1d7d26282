"""
Hosting pipeline: runs the link tag helper over every <link> element of a document.

Each element gets its own helper instance; the ResourceCache in HelperServices is
the only state shared between elements.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .cache import ResourceCache
from .config import Settings
from .encoding import html_encode
from .globbing import normalize_path_base
from .paths import resolve_web_root
from .tags.binding import bind_attributes
from .tags.context import TagContext, TagOutput
from .tags.link import LinkTagHelper

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(
    r"""<link\b(?P<attrs>(?:"[^"]*"|'[^']*'|[^'">])*?)\s*/?>""",
    re.IGNORECASE,
)
_ATTR_RE = re.compile(
    r"""(?P<name>[^\s"'>/=]+)(?:\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<uq>[^\s"'=<>`]+)))?"""
)


@dataclass
class HelperServices:
    """Collaborators injected into every helper instance."""
    web_root: Path
    path_base: str = ""
    cache: ResourceCache = field(default_factory=ResourceCache)
    watch_files: bool = True

    @classmethod
    def from_settings(cls, root: Path, settings: Settings) -> "HelperServices":
        return cls(
            web_root=resolve_web_root(root, settings.web_root),
            path_base=normalize_path_base(settings.path_base),
            cache=ResourceCache(enabled=settings.cache.enabled, ttl=settings.cache.ttl),
            watch_files=settings.cache.watch_files,
        )

    def create_link_helper(self) -> LinkTagHelper:
        return LinkTagHelper(
            web_root=self.web_root,
            cache=self.cache,
            path_base=self.path_base,
            watch_files=self.watch_files,
        )


def parse_attributes(source: str) -> List[Tuple[str, Optional[str]]]:
    """
    Attributes of a start tag in declaration order, values as written (still encoded).
    Bare attributes get None. A repeated name keeps its first occurrence.
    """
    out: List[Tuple[str, Optional[str]]] = []
    seen = set()
    for m in _ATTR_RE.finditer(source):
        name = m.group("name")
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        value = m.group("dq")
        if value is None:
            value = m.group("sq")
        if value is None:
            value = m.group("uq")
        out.append((name, value))
    return out


def render_link_element(source: str, attrs_source: str, services: HelperServices) -> str:
    """Render one <link> element; `source` is returned untouched when no helper attribute is declared."""
    raw_attributes = parse_attributes(attrs_source)
    decoded: Dict[str, str] = {
        name: "" if value is None else html.unescape(value) for name, value in raw_attributes
    }

    helper = services.create_link_helper()
    bound = bind_attributes(helper, decoded)
    if not bound:
        return source

    context = TagContext(all_attributes=decoded)
    output = TagOutput(
        tag_name="link",
        attributes={
            name: None if value is None else html_encode(decoded[name])
            for name, value in raw_attributes
            if name not in bound
        },
    )
    helper.process(context, output)
    return output.render()


def render_document(text: str, services: HelperServices) -> str:
    """Rewrite every <link> element of `text` through the link tag helper."""
    count = 0

    def _replace(m: re.Match) -> str:
        nonlocal count
        count += 1
        return render_link_element(m.group(0), m.group("attrs"), services)

    result = _LINK_RE.sub(_replace, text)
    logger.debug("Processed %d <link> element(s)", count)
    return result


__all__ = ["HelperServices", "parse_attributes", "render_link_element", "render_document"]
