"""GitHub-flavoured Markdown on top of Python-Markdown.

`extra` covers tables, fenced code and footnotes; pymdown-extensions adds
strikethrough, bare-URL autolinks and task lists. Python-Markdown also needs a
blank line before a list, so `ListAfterParagraphExtension` inserts one.
"""

from __future__ import annotations

import re

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor


# Only "1." may interrupt a paragraph as an ordered list, as on GitHub.
LIST_START_RE = re.compile(r"^ {0,3}(?:[*+-]|1\.)[ \t]+\S")


class ListAfterParagraph(Preprocessor):
    """Separate a list from the paragraph line right above it."""

    def run(self, lines: list[str]) -> list[str]:
        out: list[str] = []
        in_list = False
        for line in lines:
            if not line.strip():
                in_list = False
            elif LIST_START_RE.match(line):
                if out and out[-1].strip() and not in_list:
                    out.append("")
                in_list = True
            out.append(line)
        return out


class ListAfterParagraphExtension(Extension):
    def extendMarkdown(self, md):
        # Below html_block (20) and fenced_code_block (25): code is stashed by then.
        md.preprocessors.register(ListAfterParagraph(md), "list_after_paragraph", 15)


EXTENSIONS = [
    "extra",
    "sane_lists",
    "pymdownx.tilde",
    "pymdownx.magiclink",
    "pymdownx.tasklist",
    ListAfterParagraphExtension(),
]

EXTENSION_CONFIGS = {
    "pymdownx.tilde": {"subscript": False},
}
