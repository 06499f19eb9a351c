"""Per-project settings from an optional `book.yaml`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


CONFIG_NAME = "book.yaml"

DEFAULT_LABELS = {
    "volumes": "Volumes",
    "in_chapter": "Dans ce chapitre",
    "chapter_prefix": "Ch.",
    "volume_prefix": "Vol.",
    "fallback_roman": "Annexes",
}

DEFAULTS: dict[str, Any] = {
    "manifest": "chapters.json",
    "chapters_dir": "Chapitres",
    "templates_dir": "templates",
    "output_dir": "docs",
    "public_dir": "public",
    "keep_missing_links": False,
    "labels": DEFAULT_LABELS,
}


@dataclass(frozen=True)
class Labels:
    volumes: str
    in_chapter: str
    chapter_prefix: str
    volume_prefix: str
    fallback_roman: str


@dataclass(frozen=True)
class BuildConfig:
    root: Path
    manifest: Path
    chapters_dir: Path
    templates_dir: Path
    output_dir: Path
    public_dir: Path
    keep_missing_links: bool
    labels: Labels


def read_config_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise SystemExit(f"Invalid config {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise SystemExit(f"Config {path} must be a mapping")
    return cfg


def load_config(
    root: Path,
    *,
    config_path: Optional[Path] = None,
    output_dir: Optional[str] = None,
    keep_missing_links: Optional[bool] = None,
) -> BuildConfig:
    """Merge defaults, `book.yaml` and command-line overrides.

    Relative paths resolve against `root`. Keys set to null in the file keep
    their default.
    """

    root = root.resolve()
    cfg = read_config_file(config_path or root / CONFIG_NAME)

    merged = dict(DEFAULTS)
    merged.update({k: v for k, v in cfg.items() if v is not None and k != "labels"})
    labels = dict(DEFAULT_LABELS)
    raw_labels = cfg.get("labels") or {}
    if not isinstance(raw_labels, dict):
        raise SystemExit("Config key 'labels' must be a mapping")
    labels.update({k: str(v) for k, v in raw_labels.items() if k in DEFAULT_LABELS and v is not None})

    if output_dir:
        merged["output_dir"] = output_dir
    if keep_missing_links is not None:
        merged["keep_missing_links"] = keep_missing_links
    if not isinstance(merged["keep_missing_links"], bool):
        raise SystemExit("Config key 'keep_missing_links' must be true or false")

    def _path(key: str) -> Path:
        return root / str(merged[key])

    return BuildConfig(
        root=root,
        manifest=_path("manifest"),
        chapters_dir=_path("chapters_dir"),
        templates_dir=_path("templates_dir"),
        output_dir=_path("output_dir"),
        public_dir=_path("public_dir"),
        keep_missing_links=merged["keep_missing_links"],
        labels=Labels(**labels),
    )
