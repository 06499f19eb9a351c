"""Heading ids and the in-page table of contents.

Python-Markdown emits each `<h2>` on a single line, so a pattern match over
the rendered HTML is enough; no HTML parser is involved.
"""

from __future__ import annotations

import html
import re
import unicodedata
from dataclasses import dataclass


H2_RE = re.compile(r"<h2(\s[^>]*)?>(.*?)</h2>", re.IGNORECASE | re.DOTALL)
TAG_RE = re.compile(r"<[^>]+>")
ID_ATTR_RE = re.compile(r"""\s+id\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""", re.IGNORECASE)
COMBINING_RE = re.compile("[\u0300-\u036f]")
NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class Heading:
    id: str
    text: str


def slugify(text: str) -> str:
    """Lowercase, strip accents, collapse everything else into single hyphens."""
    s = unicodedata.normalize("NFD", text.lower())
    s = COMBINING_RE.sub("", s)
    s = NON_ALNUM_RE.sub("-", s)
    return s.strip("-")


def strip_tags(fragment: str) -> str:
    return TAG_RE.sub("", fragment)


def heading_id(inner_html: str) -> str:
    # Shared by add_heading_ids and extract_headings so TOC links resolve.
    return slugify(html.unescape(strip_tags(inner_html)))


def add_heading_ids(content: str) -> str:
    """Give every <h2> an id derived from its text, keeping other attributes."""

    def _replace(m: re.Match[str]) -> str:
        attrs = ID_ATTR_RE.sub("", m.group(1) or "")
        inner = m.group(2)
        return f'<h2 id="{heading_id(inner)}"{attrs}>{inner}</h2>'

    return H2_RE.sub(_replace, content)


def extract_headings(content: str) -> list[Heading]:
    return [
        Heading(id=heading_id(m.group(2)), text=strip_tags(m.group(2)))
        for m in H2_RE.finditer(content)
    ]
