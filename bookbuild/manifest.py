from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


VOLUME = "volume"
CHAPTER = "chapter"
DEFAULT_COLOR = "#555"


@dataclass(frozen=True)
class ChapterEntry:
    slug: str
    title: str
    short_title: str
    source: str
    roman: str = ""
    badge: Optional[str] = None
    color: str = DEFAULT_COLOR
    type: str = CHAPTER

    @property
    def is_volume(self) -> bool:
        return self.type == VOLUME

    @property
    def href(self) -> str:
        return f"{self.slug}.html"


def _entry_from_raw(raw: Any, index: int) -> ChapterEntry:
    if not isinstance(raw, dict):
        raise SystemExit(f"Manifest entry #{index} must be a mapping, got {type(raw).__name__}")
    missing = [k for k in ("slug", "title", "source") if not raw.get(k)]
    if missing:
        raise SystemExit(f"Manifest entry #{index} is missing: {', '.join(missing)}")

    title = str(raw["title"])
    badge = raw.get("badge")
    return ChapterEntry(
        slug=str(raw["slug"]),
        title=title,
        short_title=str(raw.get("shortTitle") or title),
        source=str(raw["source"]),
        roman=str(raw.get("roman") or ""),
        badge=str(badge) if badge else None,
        color=str(raw.get("color") or DEFAULT_COLOR),
        type=VOLUME if raw.get("type") == VOLUME else CHAPTER,
    )


def parse_manifest(data: Any) -> tuple[ChapterEntry, ...]:
    """Validate raw manifest data (a list, or a mapping with a `chapters` list)."""
    if isinstance(data, dict):
        data = data.get("chapters")
    if not isinstance(data, list):
        raise SystemExit("Manifest must be a list of chapter entries")

    entries = tuple(_entry_from_raw(raw, i) for i, raw in enumerate(data, start=1))
    seen: set[str] = set()
    for e in entries:
        if e.slug in seen:
            raise SystemExit(f"Duplicate slug in manifest: {e.slug!r}")
        seen.add(e.slug)
    return entries


def load_manifest(path: Path) -> tuple[ChapterEntry, ...]:
    # JSON manifests parse as YAML, so chapters.json and chapters.yaml both work.
    if not path.is_file():
        raise SystemExit(f"Missing manifest: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SystemExit(f"Invalid manifest {path}: {e}") from e
    return parse_manifest(data)


def split_groups(
    entries: tuple[ChapterEntry, ...] | list[ChapterEntry],
) -> tuple[list[ChapterEntry], list[ChapterEntry]]:
    """Return (chapters, volumes), each in manifest order."""
    chapters = [e for e in entries if not e.is_volume]
    volumes = [e for e in entries if e.is_volume]
    return chapters, volumes


def neighbours(
    entry: ChapterEntry, group: list[ChapterEntry]
) -> tuple[Optional[ChapterEntry], Optional[ChapterEntry]]:
    """Previous and next entry within the entry's own group."""
    if entry not in group:
        return None, None
    i = group.index(entry)
    prev = group[i - 1] if i > 0 else None
    nxt = group[i + 1] if i < len(group) - 1 else None
    return prev, nxt
