import json
from pathlib import Path

import pytest


CHAPTER_TEMPLATE = """\
<title>{{TITLE}}</title>
<ul>
{{SIDEBAR}}
</ul>
{{CONTENT}}
<nav>
{{PREV_LINK}}
{{NEXT_LINK}}
</nav>
"""

INDEX_TEMPLATE = """\
<div class="chapters">
{{CHAPTERS_GRID}}
</div>
<div class="volumes">
{{VOLUMES_GRID}}
</div>
"""

DEFAULT_ENTRIES = [
    {"slug": "a", "title": "Chapitre A", "shortTitle": "A", "source": "a.md", "roman": "I", "color": "#111"},
    {"slug": "x", "title": "Volume X", "shortTitle": "X", "source": "x.md", "roman": "1", "color": "#222", "type": "volume"},
    {"slug": "b", "title": "Chapitre B", "shortTitle": "B", "source": "b.md", "roman": "II", "color": "#333", "badge": "Neu"},
    {"slug": "y", "title": "Volume Y", "shortTitle": "Y", "source": "y.md", "color": "#444", "type": "volume"},
    {"slug": "c", "title": "Chapitre C", "shortTitle": "C", "source": "c.md", "roman": "III", "color": "#555"},
]


def _default_source(slug: str) -> str:
    return f"# Titre {slug}\n\nIntro {slug}.\n\n## Évolution\n\nTexte.\n\n## Notes\n\nFin.\n"


def make_project(root: Path, entries=None, sources=None, public=None) -> Path:
    """Lay out a throw-away project: manifest, templates, chapters, assets."""
    entries = DEFAULT_ENTRIES if entries is None else entries
    if sources is None:
        sources = {e["source"]: _default_source(e["slug"]) for e in entries}

    root.mkdir(parents=True, exist_ok=True)
    (root / "chapters.json").write_text(json.dumps(entries, ensure_ascii=False), encoding="utf-8")

    templates = root / "templates"
    templates.mkdir(parents=True, exist_ok=True)
    (templates / "chapter.html").write_text(CHAPTER_TEMPLATE, encoding="utf-8")
    (templates / "index.html").write_text(INDEX_TEMPLATE, encoding="utf-8")

    chapters_dir = root / "Chapitres"
    chapters_dir.mkdir(parents=True, exist_ok=True)
    for name, text in sources.items():
        (chapters_dir / name).write_text(text, encoding="utf-8")

    for rel, content in (public or {}).items():
        p = root / "public" / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")

    return root


@pytest.fixture
def project(tmp_path):
    return make_project(tmp_path / "site", public={"style.css": "body{}", "img/logo.svg": "<svg/>"})
