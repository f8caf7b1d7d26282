from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

PATTERN_SEPARATOR = ","


def split_patterns(value: Optional[str]) -> List[str]:
    """
    Split a comma separated attribute value into glob patterns.
    Entries are stripped; empty entries are dropped.
    """
    if not value:
        return []
    return [p.strip() for p in value.split(PATTERN_SEPARATOR) if p.strip()]


def compile_patterns(patterns: List[str]) -> Optional[pathspec.PathSpec]:
    """
    Compile glob patterns into a PathSpec anchored at the web root.

    A leading '/' is trimmed and re-added so that every pattern is relative to the
    web root: '*.css' matches only top-level files, '**/*.css' matches at any depth.
    All patterns are lowercased for case-insensitive comparison.
    """
    if not patterns:
        return None
    anchored = ["/" + pat.lstrip("/").lower() for pat in patterns]
    return pathspec.PathSpec.from_lines("gitwildmatch", anchored)


def _raise(err: OSError) -> None:
    raise err


def iter_web_files(root: Path) -> Iterable[str]:
    """
    Recursive iterator over files below the web root as POSIX paths relative to it.
    Enumeration errors propagate to the caller.
    """
    root = root.resolve()
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        for fn in sorted(filenames):
            yield fn if rel_dir == "." else f"{rel_dir}/{fn}"


def directory_stamp(root: Path) -> str:
    """
    Fingerprint of the directory tree below `root` (relative path + mtime_ns per directory).

    Adding, removing or renaming a file changes its parent's mtime, so the stamp
    moves whenever the set of file names can have changed.
    """
    root = root.resolve()
    h = hashlib.sha1()
    for dirpath, dirnames, _ in os.walk(root, onerror=_raise):
        dirnames.sort()
        st = os.stat(dirpath)
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        h.update(f"{rel_dir}\0{st.st_mtime_ns}\n".encode("utf-8"))
    return h.hexdigest()


__all__ = ["split_patterns", "compile_patterns", "iter_web_files", "directory_stamp", "PATTERN_SEPARATOR"]
