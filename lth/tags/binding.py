"""
Explicit mapping from markup attribute names to typed helper fields.

A helper class lists its bindings in `BOUND_ATTRIBUTES`; the hosting pipeline calls
bind_attributes() before process(), so helpers only ever read typed fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Set, Tuple


@dataclass(frozen=True)
class BoundAttribute:
    name: str   # attribute name in markup
    field: str  # attribute of the helper instance


def bound_attribute(name: str, field: str) -> BoundAttribute:
    return BoundAttribute(name=name, field=field)


def binding_map(helper_cls: type) -> Dict[str, BoundAttribute]:
    """Lowercased markup name → binding for the helper class."""
    bindings: Tuple[BoundAttribute, ...] = getattr(helper_cls, "BOUND_ATTRIBUTES", ())
    return {b.name.lower(): b for b in bindings}


def bind_attributes(helper: object, attributes: Mapping[str, Optional[str]]) -> Set[str]:
    """
    Copy values of declared attributes onto the helper.

    Args:
        helper: Tag helper instance
        attributes: Decoded attribute values as declared on the element

    Returns:
        Names (as declared on the element) that were bound
    """
    bindings = binding_map(type(helper))
    bound: Set[str] = set()
    for name, value in attributes.items():
        b = bindings.get(name.lower())
        if b is None:
            continue
        setattr(helper, b.field, "" if value is None else value)
        bound.add(name)
    return bound


__all__ = ["BoundAttribute", "bound_attribute", "binding_map", "bind_attributes"]
