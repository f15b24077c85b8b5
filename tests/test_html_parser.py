"""Tests for wsg_check.services.html_parser."""

from __future__ import annotations

import pytest

from wsg_check.services.html_parser import parse_html

BASE = "https://example.com/blog/"

RICH_HTML = """<!DOCTYPE html>
<html lang="en-GB">
<head>
  <meta charset="utf-8">
  <title> Green pages </title>
  <meta name="description" content="A page about carbon">
  <meta property="og:title" content="Green pages">
  <link rel="stylesheet" href="/css/site.css">
  <link rel="preload" href="/fonts/inter.woff2" as="font">
  <link rel="icon" href="/favicon.ico">
  <script src="https://cdn.example.net/lib.js" defer></script>
  <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Article"}</script>
  <script type="application/ld+json">[{"@type": "Person"}, {"@type": "Organization"}]</script>
  <script type="application/ld+json">{not json</script>
</head>
<body>
  <a href="#main" class="skip">Skip to main content</a>
  <header><nav aria-label="Primary"><a href="/">Home</a></nav></header>
  <main id="main">
    <h1>Title</h1>
    <h3>Skipped a level</h3>
    <img src="hero.jpg" alt="Hero" loading="lazy" srcset="hero.jpg 1x, hero@2x.jpg 2x">
    <video src="/clip.mp4"></video>
    <div role="search"></div>
    <form>
      <label for="email">Email</label>
      <input id="email" type="email" autocomplete="email">
      <input type="hidden" name="token" value="x">
      <label>Name <input name="name" inputmode="text"></label>
      <textarea></textarea>
    </form>
  </main>
</body>
</html>"""


@pytest.fixture
def parsed():
    return parse_html(RICH_HTML, BASE)


class TestDocument:

    def test_doctype_title_lang(self, parsed):
        assert parsed.doctype == "<!DOCTYPE html>"
        assert parsed.title == "Green pages"
        assert parsed.lang == "en-GB"

    def test_meta_tags(self, parsed):
        names = {m.name: m.content for m in parsed.meta_tags if m.name}
        assert names["description"] == "A page about carbon"
        assert any(m.property == "og:title" for m in parsed.meta_tags)
        assert any(m.charset == "utf-8" for m in parsed.meta_tags)

    def test_links(self, parsed):
        assert {link.rel for link in parsed.links} == {"stylesheet", "preload", "icon"}

    def test_empty_document(self):
        page = parse_html("")
        assert page.title is None
        assert page.lang is None
        assert page.doctype is None
        assert page.resources == ()


class TestResources:

    def test_types_and_resolution(self, parsed):
        by_url = {r.url: r.type for r in parsed.resources}
        assert by_url["https://example.com/css/site.css"] == "stylesheet"
        assert by_url["https://example.com/fonts/inter.woff2"] == "font"
        assert by_url["https://cdn.example.net/lib.js"] == "script"
        assert by_url["https://example.com/blog/hero.jpg"] == "image"
        assert by_url["https://example.com/clip.mp4"] == "media"
        assert "https://example.com/favicon.ico" not in by_url

    def test_srcset_candidates_are_deduplicated(self, parsed):
        images = [r for r in parsed.resources if r.type == "image"]
        assert [r.url for r in images] == [
            "https://example.com/blog/hero.jpg",
            "https://example.com/blog/hero@2x.jpg",
        ]
        assert images[0].attributes["loading"] == "lazy"
        assert "src" not in images[1].attributes

    def test_relative_urls_kept_without_base(self):
        page = parse_html('<script src="app.js"></script>')
        assert page.resources[0].url == "app.js"

    def test_inline_urls_are_not_resources(self):
        page = parse_html(
            '<img src="data:image/png;base64,AAAA" alt="">'
            '<img src=" DATA:image/gif;base64,R0lG" alt="">'
            '<video src="blob:https://example.com/1b2c"></video>'
            '<link rel="stylesheet" href="data:text/css,body{}">',
            BASE,
        )
        assert page.resources == ()


class TestStructure:

    def test_headings(self, parsed):
        assert [(h.level, h.text) for h in parsed.headings] == [(1, "Title"), (3, "Skipped a level")]

    def test_skip_link(self, parsed):
        assert parsed.has_skip_link
        assert not parse_html('<a href="#top">Back to top</a>').has_skip_link

    def test_landmarks(self, parsed):
        for landmark in ("header", "nav", "main", "form", "search"):
            assert landmark in parsed.landmarks

    def test_aria_attributes(self, parsed):
        assert parsed.aria_attributes == ("aria-label",)


class TestStructuredData:

    def test_blocks_and_lists_expand(self, parsed):
        assert [block.type for block in parsed.structured_data] == ["Article", "Person", "Organization"]

    def test_missing_type_is_unknown(self):
        page = parse_html('<script type="application/ld+json">{"name": "x"}</script>')
        assert page.structured_data[0].type == "unknown"


class TestFormInputs:

    def test_hidden_inputs_skipped(self, parsed):
        assert len(parsed.form_inputs) == 3

    def test_labels_and_hints(self, parsed):
        email, name, textarea = parsed.form_inputs
        assert email.type == "email"
        assert email.has_label and email.has_autocomplete
        assert name.type == "text"
        assert name.has_label and name.has_inputmode
        assert textarea.type == "textarea"
        assert not textarea.has_label
