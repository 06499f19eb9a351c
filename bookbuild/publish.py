"""
Mirror the static assets directory into the built site.

This is a deterministic file sync: entries are walked in sorted order so the
console log and the returned file list are stable between runs.
"""

from __future__ import annotations

import shutil
from pathlib import Path


def copy_tree(src: Path, dst: Path, *, label: str = "public") -> list[Path]:
    """Copy `src` into `dst` recursively; return the destination files written.

    A missing `src` is not an error: nothing is copied.
    """

    if not src.is_dir():
        print(f"  (no {label} directory found, skipping asset copy)")
        return []

    dst.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for p in sorted(src.rglob("*")):
        rel = p.relative_to(src)
        target = dst / rel
        if p.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            continue
        # Sorted order visits a directory before its contents.
        shutil.copy2(p, target)
        written.append(target)
        print(f"  {label}/{rel.as_posix()}")
    return written
