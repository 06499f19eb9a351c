#!/usr/bin/env python3
"""Convert the chapter manifest and Markdown sources into a static HTML site."""

from __future__ import annotations

import argparse
import html
import re
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import markdown

from bookbuild import gfm
from bookbuild.config import BuildConfig, Labels, load_config
from bookbuild.headings import Heading, add_heading_ids, extract_headings
from bookbuild.manifest import ChapterEntry, load_manifest, neighbours, split_groups
from bookbuild.publish import copy_tree


TOKEN_RE = re.compile(r"\{\{([A-Z_]+)\}\}")
TITLE_LINE_RE = re.compile(r"^#[ \t]+.*$", re.MULTILINE)

SUBHEADING = '\n      </ul>\n      <h3 style="margin-top: 1.5rem;">{label}</h3>\n      <ul>\n'
EMPTY_NAV = "        <span></span>"


@dataclass(frozen=True)
class Templates:
    chapter: str
    index: str


@dataclass
class BuildReport:
    output_dir: Path
    pages: list[str] = field(default_factory=list)
    skipped: list[ChapterEntry] = field(default_factory=list)
    assets: list[Path] = field(default_factory=list)


def load_templates(templates_dir: Path) -> Templates:
    paths = {name: templates_dir / f"{name}.html" for name in ("chapter", "index")}
    for p in paths.values():
        if not p.is_file():
            raise SystemExit(f"Missing template: {p}")
    return Templates(
        chapter=paths["chapter"].read_text(encoding="utf-8"),
        index=paths["index"].read_text(encoding="utf-8"),
    )


def fill_template(template: str, values: dict[str, str]) -> str:
    """Substitute each {{NAME}} at its first occurrence in the template only.

    Inserted values are not rescanned, so a token inside chapter content is
    left alone.
    """
    used: set[str] = set()

    def _sub(m: re.Match[str]) -> str:
        name = m.group(1)
        if name not in values or name in used:
            return m.group(0)
        used.add(name)
        return values[name]

    return TOKEN_RE.sub(_sub, template)


def strip_title(md_text: str) -> str:
    """Drop the first top-level heading; the manifest title replaces it."""
    return TITLE_LINE_RE.sub("", md_text, count=1).strip()


def render_markdown(md_text: str) -> str:
    # No nl2br: a single newline stays inside the paragraph.
    return markdown.markdown(
        md_text,
        extensions=gfm.EXTENSIONS,
        extension_configs=gfm.EXTENSION_CONFIGS,
        output_format="html",
    )


def link_items(entries: list[ChapterEntry]) -> str:
    return "\n".join(
        f'        <li><a href="{html.escape(e.href)}">{html.escape(e.short_title)}</a></li>'
        for e in entries
    )


def build_full_sidebar(
    chapters: list[ChapterEntry], volumes: list[ChapterEntry], labels: Labels
) -> str:
    return link_items(chapters) + SUBHEADING.format(label=html.escape(labels.volumes)) + link_items(volumes)


def build_chapter_sidebar(full_sidebar: str, headings: list[Heading], labels: Labels) -> str:
    # Heading text is already HTML (tags stripped, entities kept).
    toc = "\n".join(f'        <li><a href="#{h.id}">{h.text}</a></li>' for h in headings)
    return full_sidebar + SUBHEADING.format(label=html.escape(labels.in_chapter)) + toc


def nav_label(entry: ChapterEntry, labels: Labels) -> str:
    prefix = labels.volume_prefix if entry.is_volume else labels.chapter_prefix
    return html.escape(f"{prefix} {entry.roman or labels.fallback_roman}")


def prev_link(entry: Optional[ChapterEntry], labels: Labels) -> str:
    if entry is None:
        return EMPTY_NAV
    return f'        <a href="{html.escape(entry.href)}" class="nav-link">&larr; {nav_label(entry, labels)}</a>'


def next_link(entry: Optional[ChapterEntry], labels: Labels) -> str:
    if entry is None:
        return EMPTY_NAV
    return f'        <a href="{html.escape(entry.href)}" class="nav-link">{nav_label(entry, labels)} &rarr;</a>'


def build_card(entry: ChapterEntry) -> str:
    """Index card: roman numeral, optional badge, title, coloured left border."""
    color = html.escape(entry.color)
    badge_html = ""
    if entry.badge:
        badge_html = (
            f'\n          <span style="background:{color};color:white;padding:0.2rem 0.6rem;'
            f'border-radius:12px;font-size:0.75rem;font-weight:600;">{html.escape(entry.badge)}</span>'
        )

    return f"""      <a href="{html.escape(entry.href)}" class="card" style="border-left: 4px solid {color};">
        <div class="card-header">
          <span class="roman">{html.escape(entry.roman)}</span>{badge_html}
        </div>
        <h3>{html.escape(entry.title)}</h3>
      </a>"""


def generate_chapter_html(
    entry: ChapterEntry,
    md_text: str,
    *,
    template: str,
    full_sidebar: str,
    group: list[ChapterEntry],
    labels: Labels,
) -> str:
    """Render one chapter or volume page."""
    body = add_heading_ids(render_markdown(strip_title(md_text)))
    headings = extract_headings(body)
    prev, nxt = neighbours(entry, group)
    title = html.escape(entry.title)

    return fill_template(
        template,
        {
            "TITLE": title,
            "SIDEBAR": build_chapter_sidebar(full_sidebar, headings, labels),
            "CONTENT": f"<h1>{title}</h1>\n{body}",
            "PREV_LINK": prev_link(prev, labels),
            "NEXT_LINK": next_link(nxt, labels),
        },
    )


def generate_index(chapters: list[ChapterEntry], volumes: list[ChapterEntry], template: str) -> str:
    return fill_template(
        template,
        {
            "CHAPTERS_GRID": "\n\n".join(build_card(e) for e in chapters),
            "VOLUMES_GRID": "\n\n".join(build_card(e) for e in volumes),
        },
    )


def _is_within(path: Path, parent: Path) -> bool:
    path, parent = path.resolve(), parent.resolve()
    return path == parent or parent in path.parents


def prepare_output(config: BuildConfig) -> None:
    """Delete and recreate the output directory."""
    out = config.output_dir
    if _is_within(config.root, out):
        raise SystemExit(f"Refusing to use {out} as output: it contains the project root")
    for p in (config.manifest, config.chapters_dir, config.templates_dir):
        if _is_within(p, out):
            raise SystemExit(f"Refusing to use {out} as output: it contains {p}")
    # Assets are copied from public_dir into the output, so neither may hold the other.
    if _is_within(config.public_dir, out) or _is_within(out, config.public_dir):
        raise SystemExit(f"Refusing to use {out} as output: it overlaps the assets directory {config.public_dir}")

    if out.exists():
        shutil.rmtree(out)
    out.mkdir(parents=True)


def build_site(config: BuildConfig) -> BuildReport:
    entries = load_manifest(config.manifest)
    templates = load_templates(config.templates_dir)
    prepare_output(config)
    report = BuildReport(output_dir=config.output_dir)

    missing = {e.slug for e in entries if not (config.chapters_dir / e.source).is_file()}
    nav_entries = list(entries) if config.keep_missing_links else [e for e in entries if e.slug not in missing]
    chapters, volumes = split_groups(nav_entries)

    print("Building chapter pages...")
    full_sidebar = build_full_sidebar(chapters, volumes, config.labels)
    for entry in entries:
        if entry.slug in missing:
            print(f"  WARNING: {entry.source} not found, skipping.", file=sys.stderr)
            report.skipped.append(entry)
            continue

        md_text = (config.chapters_dir / entry.source).read_text(encoding="utf-8")
        page = generate_chapter_html(
            entry,
            md_text,
            template=templates.chapter,
            full_sidebar=full_sidebar,
            group=volumes if entry.is_volume else chapters,
            labels=config.labels,
        )
        (config.output_dir / entry.href).write_text(page, encoding="utf-8")
        report.pages.append(entry.slug)
        print(f"  {entry.href}")

    print("Building index page...")
    index_html = generate_index(chapters, volumes, templates.index)
    (config.output_dir / "index.html").write_text(index_html, encoding="utf-8")
    print("  index.html")

    print("Copying public assets...")
    report.assets = copy_tree(config.public_dir, config.output_dir / "public")

    n = len(report.pages)
    print(f"\nBuild complete! Output in: {config.output_dir}")
    print(f"Total pages: {n + 1} ({n} chapters + index)")
    if report.skipped:
        print(f"Skipped: {len(report.skipped)} (missing sources)")
    return report


def main(argv: list[str]) -> int:
    ap = argparse.ArgumentParser(description="Build the static site from chapters.json and Markdown chapters.")
    ap.add_argument("--root", default=".", help="Project root (default: cwd)")
    ap.add_argument("--config", help="Path to book.yaml (default: <root>/book.yaml)")
    ap.add_argument("--out", help="Output directory, relative to root (default: docs)")
    ap.add_argument(
        "--keep-missing-links",
        action="store_true",
        default=None,
        help="List entries with a missing source in navigation and the index anyway",
    )
    args = ap.parse_args(argv)

    root = Path(args.root)
    if not root.is_dir():
        print(f"Project root not found: {root}", file=sys.stderr)
        return 2

    config = load_config(
        root,
        config_path=Path(args.config) if args.config else None,
        output_dir=args.out,
        keep_missing_links=args.keep_missing_links,
    )
    build_site(config)
    return 0


def main_entry() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    main_entry()
