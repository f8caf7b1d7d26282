from .binding import bind_attributes
from .context import TagContext, TagOutput
from .link import LinkTagHelper, Mode, MODE_DETAILS, build_link_tag
from .modes import ModeAttributes, ModeMatchResult, determine_mode

__all__ = [
    "bind_attributes",
    "TagContext", "TagOutput",
    "LinkTagHelper", "Mode", "MODE_DETAILS", "build_link_tag",
    "ModeAttributes", "ModeMatchResult", "determine_mode",
]
