"""
Boundary objects between the hosting pipeline and tag helpers.

TagContext is what the helper reads (every declared attribute, decoded);
TagOutput is what it writes (the element to render, attribute values HTML-encoded).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class TagContext:
    all_attributes: Dict[str, str]
    unique_id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class TagOutput:
    """
    Rendering of one element.

    `attributes` keep declaration order and hold already HTML-encoded values;
    None stands for a bare attribute. Setting `tag_name` to None means the helper
    owns the whole rendering and only `content` is written.
    """
    tag_name: Optional[str]
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    content: str = ""
    self_closing: bool = True

    def render(self) -> str:
        if self.tag_name is None:
            return self.content
        parts = ["<", self.tag_name]
        for name, value in self.attributes.items():
            parts.append(f" {name}" if value is None else f' {name}="{value}"')
        if self.self_closing and not self.content:
            parts.append(" />")
            return "".join(parts)
        parts.append(">")
        parts.append(self.content)
        parts.append(f"</{self.tag_name}>")
        return "".join(parts)


__all__ = ["TagContext", "TagOutput"]
