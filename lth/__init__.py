"""Link Tag Helper: globbed and fallback stylesheet <link> elements."""

from .cache import ResourceCache
from .config import Settings, load_settings
from .errors import LTHUserError
from .globbing import GlobbingUrlBuilder
from .markup import HelperServices, render_document
from .tags import LinkTagHelper, TagContext, TagOutput

__all__ = [
    "ResourceCache", "Settings", "load_settings", "LTHUserError", "GlobbingUrlBuilder",
    "HelperServices", "render_document", "LinkTagHelper", "TagContext", "TagOutput",
]
