"""
Tests for heading ids and in-page TOC extraction (bookbuild/headings.py)

Run: python -m pytest tests/test_headings.py -q
"""

import re

from bookbuild.headings import (
    Heading,
    add_heading_ids,
    extract_headings,
    heading_id,
    slugify,
    strip_tags,
)

SLUG_RE = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")


class TestSlugify:
    def test_accents_are_stripped(self):
        assert slugify("Évolution des pratiques") == "evolution-des-pratiques"

    def test_runs_collapse_and_edges_trimmed(self):
        assert slugify("  --Hello,   World!--  ") == "hello-world"

    def test_empty(self):
        assert slugify("") == ""
        assert slugify("!!!") == ""

    def test_stable_on_clean_input(self):
        for text in ["Été 1942", "L'évolution", "Q&A: part 2", "déjà-vu", "abc"]:
            once = slugify(text)
            assert slugify(once) == once

    def test_output_charset(self):
        for text in ["Évolution", "Çà et là", "Über—alles", "  Ñandú  "]:
            s = slugify(text)
            assert SLUG_RE.fullmatch(s), s

    def test_non_decomposable_letters_become_hyphens(self):
        assert slugify("Straße") == "stra-e"


class TestStripTags:
    def test_nested_markup(self):
        assert strip_tags('A <em>b</em> <a href="#x"><code>c</code></a>') == "A b c"


class TestAddHeadingIds:
    def test_plain_heading(self):
        assert add_heading_ids("<h2>Évolution</h2>") == '<h2 id="evolution">Évolution</h2>'

    def test_keeps_attributes_and_inner_markup(self):
        out = add_heading_ids('<h2 class="lead">A <em>b</em></h2>')
        assert out == '<h2 id="a-b" class="lead">A <em>b</em></h2>'

    def test_replaces_existing_id(self):
        out = add_heading_ids('<h2 id="old" class="x">Foo</h2>')
        assert out == '<h2 id="foo" class="x">Foo</h2>'

    def test_other_levels_untouched(self):
        src = "<h1>One</h1>\n<h3>Three</h3>\n<h2>Two</h2>"
        assert add_heading_ids(src) == '<h1>One</h1>\n<h3>Three</h3>\n<h2 id="two">Two</h2>'

    def test_entities_are_unescaped_for_the_id(self):
        out = add_heading_ids("<h2>Questions &amp; réponses</h2>")
        assert out == '<h2 id="questions-reponses">Questions &amp; réponses</h2>'


class TestExtractHeadings:
    def test_document_order(self):
        src = "<h2>Un</h2><p>x</p><h2>Deux <strong>bis</strong></h2>"
        assert extract_headings(src) == [Heading("un", "Un"), Heading("deux-bis", "Deux bis")]

    def test_ids_match_injected_ids(self):
        src = "<h2>Évolution</h2>\n<p>…</p>\n<h2>Çà et <em>là</em></h2>"
        tagged = add_heading_ids(src)
        injected = re.findall(r'<h2 id="([^"]*)"', tagged)
        extracted = [h.id for h in extract_headings(tagged)]
        assert injected == extracted == ["evolution", "ca-et-la"]
        for hid in extracted:
            assert SLUG_RE.fullmatch(hid)

    def test_duplicate_headings_share_an_id(self):
        tagged = add_heading_ids("<h2>Notes</h2><h2>Notes</h2>")
        assert tagged.count('id="notes"') == 2
        assert [h.id for h in extract_headings(tagged)] == ["notes", "notes"]

    def test_text_keeps_entities(self):
        [h] = extract_headings("<h2>Q &amp; R</h2>")
        assert h.text == "Q &amp; R"
        assert h.id == heading_id("Q &amp; R") == "q-r"

    def test_no_headings(self):
        assert extract_headings("<p>rien</p>") == []
