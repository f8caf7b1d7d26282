"""
Mode resolution for tag helpers.

A helper declares a catalog of ModeAttributes: each row pairs a mode with the
attribute names that must all be present on the element for that mode to apply.
determine_mode() compares the catalog against the element's attributes by presence
only; values never take part in matching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Generic, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, TypeVar

M = TypeVar("M", bound=IntEnum)


@dataclass(frozen=True)
class ModeAttributes(Generic[M]):
    """One catalog row: a mode and the attributes it requires."""
    mode: M
    attributes: Tuple[str, ...]

    @classmethod
    def create(cls, mode: M, attributes: Iterable[str]) -> "ModeAttributes[M]":
        attrs = tuple(attributes)
        if not attrs:
            raise ValueError(f"Mode {mode!r} must require at least one attribute")
        return cls(mode=mode, attributes=attrs)


@dataclass(frozen=True)
class ModeMatchAttributes(Generic[M]):
    """A catalog row compared against an element. Full match ⇔ nothing missing."""
    mode: M
    present_attributes: Tuple[str, ...]
    missing_attributes: Tuple[str, ...] = ()

    @property
    def is_full(self) -> bool:
        return not self.missing_attributes


@dataclass
class ModeMatchResult(Generic[M]):
    full_matches: List[ModeMatchAttributes[M]] = field(default_factory=list)
    partial_matches: List[ModeMatchAttributes[M]] = field(default_factory=list)

    @property
    def partially_matched_attributes(self) -> Set[str]:
        """Attributes present in some partial match but not covered by any full match."""
        in_full = {a.lower() for m in self.full_matches for a in m.present_attributes}
        return {
            a for m in self.partial_matches for a in m.present_attributes
            if a.lower() not in in_full
        }

    def select(self) -> Optional[ModeMatchAttributes[M]]:
        """
        The one full match that drives behaviour, or None.

        Highest mode value wins; within that mode the row with most attributes wins.
        Partial matches never take part.
        """
        if not self.full_matches:
            return None
        return max(self.full_matches, key=lambda m: (int(m.mode), len(m.present_attributes)))

    def log_details(self, logger: logging.Logger, tag_helper: object, unique_id: str) -> None:
        """Write diagnostics about the matching to `logger`."""
        helper_name = type(tag_helper).__name__
        partial_only = self.partially_matched_attributes
        if partial_only and logger.isEnabledFor(logging.WARNING):
            lowered = {a.lower() for a in partial_only}
            lines = []
            for match in self.partial_matches:
                if not any(a.lower() in lowered for a in match.present_attributes):
                    continue
                lines.append(
                    f"  mode {match.mode.name}: present [{', '.join(match.present_attributes)}], "
                    f"missing [{', '.join(match.missing_attributes)}]"
                )
            logger.warning(
                "Tag helper %s (%s) had partial matches while determining mode; "
                "attributes were ignored:\n%s",
                helper_name, unique_id, "\n".join(lines),
            )
        if not logger.isEnabledFor(logging.DEBUG):
            return
        if self.full_matches:
            logger.debug(
                "%s %s full matches: %s", helper_name, unique_id,
                "; ".join(f"{m.mode.name} [{', '.join(m.present_attributes)}]" for m in self.full_matches),
            )
        else:
            logger.debug("Skipping processing for %s %s", helper_name, unique_id)


def determine_mode(
    present: Mapping[str, object],
    mode_infos: Sequence[ModeAttributes[M]],
) -> ModeMatchResult[M]:
    """
    Compare every catalog row against the attribute names in `present`.

    Args:
        present: Attributes declared on the element (names compared case-insensitively)
        mode_infos: Catalog rows

    Returns:
        Full matches and partial matches (some but not all attributes present)
    """
    names = {name.lower() for name in present}
    result: ModeMatchResult[M] = ModeMatchResult()
    for info in mode_infos:
        missing = tuple(a for a in info.attributes if a.lower() not in names)
        if not missing:
            result.full_matches.append(ModeMatchAttributes(info.mode, info.attributes))
        elif len(missing) != len(info.attributes):
            found = tuple(a for a in info.attributes if a.lower() in names)
            result.partial_matches.append(ModeMatchAttributes(info.mode, found, missing))
    return result


def validate_catalog(mode_infos: Sequence[ModeAttributes[M]]) -> Sequence[ModeAttributes[M]]:
    """Assert that no mode declares the same attribute set twice; returns the catalog."""
    seen: Dict[M, List[frozenset]] = {}
    for info in mode_infos:
        key = frozenset(a.lower() for a in info.attributes)
        assert key not in seen.get(info.mode, []), (
            f"Duplicate attribute set {sorted(key)} for mode {info.mode.name}"
        )
        seen.setdefault(info.mode, []).append(key)
    return mode_infos


__all__ = [
    "ModeAttributes", "ModeMatchAttributes", "ModeMatchResult",
    "determine_mode", "validate_catalog",
]
