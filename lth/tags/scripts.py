from __future__ import annotations

from functools import lru_cache
from importlib import resources
from string import Template


@lru_cache(maxsize=None)
def get_embedded_javascript(name: str) -> Template:
    """Script template shipped in lth/resources/, loaded once per process."""
    text = resources.files("lth").joinpath("resources").joinpath(name).read_text(encoding="utf-8")
    return Template(text.rstrip("\n"))


__all__ = ["get_embedded_javascript"]
