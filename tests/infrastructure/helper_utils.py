"""
Running tag helpers the way the hosting pipeline does.
"""

from __future__ import annotations

from typing import Dict, Optional

from lth.tags.binding import bind_attributes
from lth.tags.context import TagContext, TagOutput
from lth.tags.link import LinkTagHelper


def run_helper(
    helper: LinkTagHelper,
    attributes: Dict[str, str],
    output_attributes: Optional[Dict[str, Optional[str]]] = None,
) -> TagOutput:
    """
    Bind `attributes` onto the helper and process a <link> element.

    Args:
        helper: Fresh helper
        attributes: Everything declared on the element (decoded values)
        output_attributes: Encoded attributes left on the element; defaults to the
            unbound part of `attributes`
    """
    bound = bind_attributes(helper, attributes)
    if output_attributes is None:
        output_attributes = {k: v for k, v in attributes.items() if k not in bound}
    output = TagOutput(tag_name="link", attributes=dict(output_attributes))
    helper.process(TagContext(all_attributes=dict(attributes), unique_id="test-id"), output)
    return output
