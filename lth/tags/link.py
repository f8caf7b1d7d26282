"""
Tag helper for <link> elements.

Supports globbed href paths (one <link /> per file matched below the web root)
and fallback hrefs: a probe <meta /> element plus a script that checks a CSS
property on it and writes fallback <link /> elements when the primary
stylesheet did not apply.
"""

from __future__ import annotations

import html
import logging
from enum import IntEnum
from pathlib import Path
from typing import Dict, List, Optional

from .binding import bound_attribute
from .context import TagContext, TagOutput
from .modes import ModeAttributes, determine_mode, validate_catalog
from .scripts import get_embedded_javascript
from ..cache import ResourceCache
from ..encoding import html_encode, js_array_encode, js_string_encode
from ..globbing import GlobbingUrlBuilder

HREF_ATTRIBUTE_NAME = "href"
HREF_INCLUDE_ATTRIBUTE_NAME = "href-include"
HREF_EXCLUDE_ATTRIBUTE_NAME = "href-exclude"
FALLBACK_HREF_ATTRIBUTE_NAME = "fallback-href"
FALLBACK_HREF_INCLUDE_ATTRIBUTE_NAME = "fallback-href-include"
FALLBACK_HREF_EXCLUDE_ATTRIBUTE_NAME = "fallback-href-exclude"
FALLBACK_TEST_CLASS_ATTRIBUTE_NAME = "fallback-test-class"
FALLBACK_TEST_PROPERTY_ATTRIBUTE_NAME = "fallback-test-property"
FALLBACK_TEST_VALUE_ATTRIBUTE_NAME = "fallback-test-value"
FALLBACK_JAVASCRIPT_RESOURCE_NAME = "link_fallback.js"

FALLBACK_TEST_META_NAME = "x-stylesheet-fallback-test"

_FALLBACK_TEST_ATTRIBUTES = (
    FALLBACK_TEST_CLASS_ATTRIBUTE_NAME,
    FALLBACK_TEST_PROPERTY_ATTRIBUTE_NAME,
    FALLBACK_TEST_VALUE_ATTRIBUTE_NAME,
)


class Mode(IntEnum):
    """Operating modes; on several full matches the higher value wins."""
    GLOBBED_HREF = 1
    FALLBACK = 2


MODE_DETAILS = validate_catalog((
    # Globbed href (include only)
    ModeAttributes.create(Mode.GLOBBED_HREF, [HREF_INCLUDE_ATTRIBUTE_NAME]),
    # Globbed href (include & exclude)
    ModeAttributes.create(Mode.GLOBBED_HREF, [HREF_INCLUDE_ATTRIBUTE_NAME, HREF_EXCLUDE_ATTRIBUTE_NAME]),
    # Fallback with static href
    ModeAttributes.create(Mode.FALLBACK, [FALLBACK_HREF_ATTRIBUTE_NAME, *_FALLBACK_TEST_ATTRIBUTES]),
    # Fallback with globbed href (include only)
    ModeAttributes.create(Mode.FALLBACK, [FALLBACK_HREF_INCLUDE_ATTRIBUTE_NAME, *_FALLBACK_TEST_ATTRIBUTES]),
    # Fallback with globbed href (include & exclude)
    ModeAttributes.create(
        Mode.FALLBACK,
        [FALLBACK_HREF_INCLUDE_ATTRIBUTE_NAME, FALLBACK_HREF_EXCLUDE_ATTRIBUTE_NAME, *_FALLBACK_TEST_ATTRIBUTES],
    ),
))


def build_link_tag(attributes: Dict[str, Optional[str]]) -> str:
    """
    Serialize one <link /> tag. Values must already be HTML-encoded;
    order follows the mapping.
    """
    parts = ["<link "]
    for name, value in attributes.items():
        parts.append(f'{name}="{"" if value is None else value}" ')
    parts.append("/>")
    return "".join(parts)


class LinkTagHelper:
    """
    Processes one <link> element. Create a fresh instance per element:
    the url builder is created lazily and reused only within that element.
    """

    BOUND_ATTRIBUTES = (
        bound_attribute(HREF_INCLUDE_ATTRIBUTE_NAME, "href_include"),
        bound_attribute(HREF_EXCLUDE_ATTRIBUTE_NAME, "href_exclude"),
        bound_attribute(FALLBACK_HREF_ATTRIBUTE_NAME, "fallback_href"),
        bound_attribute(FALLBACK_HREF_INCLUDE_ATTRIBUTE_NAME, "fallback_href_include"),
        bound_attribute(FALLBACK_HREF_EXCLUDE_ATTRIBUTE_NAME, "fallback_href_exclude"),
        bound_attribute(FALLBACK_TEST_CLASS_ATTRIBUTE_NAME, "fallback_test_class"),
        bound_attribute(FALLBACK_TEST_PROPERTY_ATTRIBUTE_NAME, "fallback_test_property"),
        bound_attribute(FALLBACK_TEST_VALUE_ATTRIBUTE_NAME, "fallback_test_value"),
    )

    def __init__(
        self,
        *,
        web_root: Path,
        cache: Optional[ResourceCache] = None,
        path_base: str = "",
        watch_files: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        # Comma separated glob patterns of stylesheets to load, relative to the web root
        self.href_include: Optional[str] = None
        # Comma separated glob patterns to exclude; used together with href_include
        self.href_exclude: Optional[str] = None
        # Url of a stylesheet to fall back to when the primary one fails
        self.fallback_href: Optional[str] = None
        self.fallback_href_include: Optional[str] = None
        self.fallback_href_exclude: Optional[str] = None
        # Class defined in the primary stylesheet, applied to the probe element
        self.fallback_test_class: Optional[str] = None
        # CSS property read back from the probe element, and its expected value
        self.fallback_test_property: Optional[str] = None
        self.fallback_test_value: Optional[str] = None

        self.web_root = Path(web_root)
        self.cache = cache
        self.path_base = path_base
        self.watch_files = watch_files
        self.logger = logger or logging.getLogger(__name__)

        self.globbing_url_builder: Optional[GlobbingUrlBuilder] = None

    def process(self, context: TagContext, output: TagOutput) -> None:
        mode_result = determine_mode(context.all_attributes, MODE_DETAILS)
        mode_result.log_details(self.logger, self, context.unique_id)

        selected = mode_result.select()
        if selected is None:
            # No attributes matched so we have nothing to do
            return

        mode = selected.mode

        # Values in output.attributes are already HTML-encoded
        attributes = dict(output.attributes)

        parts: List[str] = []
        if mode == Mode.FALLBACK and not self.href_include:
            # No globbing to do, just build a <link /> tag to match the original one
            parts.append(build_link_tag(attributes))
        else:
            parts.append(self._build_globbed_link_tags(attributes))

        if mode == Mode.FALLBACK:
            parts.append(self._build_fallback_block())

        # We've taken over rendering so prevent the element rendering the outer tag
        output.tag_name = None
        output.content = "".join(parts)

    def _build_globbed_link_tags(self, attributes: Dict[str, Optional[str]]) -> str:
        # Markup names are case-insensitive; write back under the declared spelling
        href_key = next((k for k in attributes if k.lower() == HREF_ATTRIBUTE_NAME), HREF_ATTRIBUTE_NAME)

        # The declared href goes first, decoded so the resolved list holds plain urls
        encoded_href = attributes.get(href_key)
        static_href = html.unescape(encoded_href) if encoded_href is not None else None

        hrefs = self._ensure_globbing_url_builder().build_url_list(
            static_href, self.href_include, self.href_exclude
        )

        tags = []
        for href in hrefs:
            attributes[href_key] = html_encode(href)
            tags.append(build_link_tag(attributes))
        return "".join(tags)

    def _build_fallback_block(self) -> str:
        # <meta /> probe whose effective style tells whether the stylesheet applied
        meta = f'<meta name="{FALLBACK_TEST_META_NAME}" class="{html_encode(self.fallback_test_class)}" />'

        fallback_hrefs = self._ensure_globbing_url_builder().build_url_list(
            self.fallback_href, self.fallback_href_include, self.fallback_href_exclude
        )

        script = build_fallback_script(self.fallback_test_property, self.fallback_test_value, fallback_hrefs)
        return "\n" + meta + "<script>" + script + "</script>"

    def _ensure_globbing_url_builder(self) -> GlobbingUrlBuilder:
        if self.globbing_url_builder is None:
            self.globbing_url_builder = GlobbingUrlBuilder(
                self.web_root,
                self.cache,
                self.path_base,
                watch_files=self.watch_files,
            )
        return self.globbing_url_builder


def build_fallback_script(test_property: Optional[str], test_value: Optional[str], fallback_hrefs: List[str]) -> str:
    """Fill the fallback script template; each value is encoded for script text."""
    template = get_embedded_javascript(FALLBACK_JAVASCRIPT_RESOURCE_NAME)
    return template.substitute(
        property=js_string_encode(test_property),
        value=js_string_encode(test_value),
        hrefs=js_array_encode(fallback_hrefs),
    )


__all__ = ["LinkTagHelper", "Mode", "MODE_DETAILS", "build_link_tag", "build_fallback_script"]
