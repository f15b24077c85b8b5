"""Tests for the web-development checks (WSG 3.x)."""

from __future__ import annotations

import pytest

from wsg_check.schemas.check_result import CheckStatus, Impact
from wsg_check.services.checks.files import check_beneficial_files, check_expected_files
from wsg_check.services.checks.markup import (
    check_html_version,
    check_metadata,
    check_semantic_html,
    check_structured_data,
    find_heading_skips,
)
from wsg_check.services.checks.performance import (
    check_dependency_count,
    check_page_weight,
    check_render_blocking,
    check_third_party,
)
from wsg_check.services.checks.security import check_security_headers
from wsg_check.services.checks.styles import (
    check_minification,
    check_preference_media_queries,
    check_responsive_design,
)
from wsg_check.services.html_parser import HeadingNode

FULL_HEAD = (
    "<title>Green</title>"
    '<meta name="description" content="About green pages">'
    '<meta property="og:title" content="Green">'
    '<meta property="og:description" content="About green pages">'
)


def _html(head: str = "", body: str = "", doctype: str = "<!DOCTYPE html>", lang: str = "en") -> str:
    lang_attr = f' lang="{lang}"' if lang else ""
    return f"{doctype}<html{lang_attr}><head>{head}</head><body>{body}</body></html>"


class TestPageWeight:

    def test_small_page_passes(self, page):
        result = check_page_weight(page)
        assert result.status == CheckStatus.PASS
        assert "within budget" in result.message

    def test_large_html_warns(self, make_page):
        result = check_page_weight(make_page(content_length=200 * 1024))
        assert result.status == CheckStatus.WARN
        assert result.message == "Page weight exceeds sustainability budget."

    def test_huge_html_fails(self, make_page):
        assert check_page_weight(make_page(content_length=600 * 1024)).status == CheckStatus.FAIL

    def test_many_resources_worst_status_wins(self, make_page):
        scripts = "".join(f'<script src="/s{i}.js"></script>' for i in range(101))
        result = check_page_weight(make_page(_html(body=scripts), content_length=200 * 1024))
        assert result.status == CheckStatus.FAIL
        assert "101 external resources" in result.details


class TestThirdParty:

    def test_first_party_only(self, make_page):
        html = _html(head='<script src="/app.js"></script><link rel="stylesheet" href="https://fonts.gstatic.com/x.css">')
        result = check_third_party(make_page(html))
        assert result.status == CheckStatus.PASS
        assert "1 third-party resource" in result.message

    def test_few_scripts_warn(self, make_page):
        html = _html(head='<script src="https://cdn.tracker.io/t.js"></script>')
        result = check_third_party(make_page(html))
        assert result.status == CheckStatus.WARN
        assert result.impact == Impact.HIGH

    def test_many_scripts_fail(self, make_page):
        scripts = "".join(f'<script src="https://vendor{i}.com/a.js"></script>' for i in range(6))
        assert check_third_party(make_page(_html(head=scripts))).status == CheckStatus.FAIL


class TestSecurityHeaders:

    ALL = {
        "Content-Security-Policy": "default-src 'self'",
        "Strict-Transport-Security": "max-age=63072000",
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "no-referrer",
    }

    def test_all_present(self, make_page):
        assert check_security_headers(make_page(headers=self.ALL)).status == CheckStatus.PASS

    def test_few_missing_warn(self, make_page):
        headers = dict(self.ALL)
        del headers["Referrer-Policy"]
        result = check_security_headers(make_page(headers=headers))
        assert result.status == CheckStatus.WARN
        assert "Referrer-Policy" in result.message

    def test_none_present_fails(self, page):
        assert check_security_headers(page).status == CheckStatus.FAIL


class TestMetadata:

    def test_complete(self, make_page):
        assert check_metadata(make_page(_html(head=FULL_HEAD))).status == CheckStatus.PASS

    def test_missing_open_graph_warns(self, make_page):
        head = '<title>Green</title><meta name="description" content="d">'
        assert check_metadata(make_page(_html(head=head))).status == CheckStatus.WARN

    def test_missing_description_fails(self, make_page):
        result = check_metadata(make_page(_html(head="<title>Green</title>")))
        assert result.status == CheckStatus.FAIL
        assert "description" in result.details

    def test_empty_description_counts_as_missing(self, make_page):
        head = '<title>T</title><meta name="description" content="  ">'
        assert check_metadata(make_page(_html(head=head))).status == CheckStatus.FAIL


class TestStructuredData:

    def test_missing_warns(self, page):
        assert check_structured_data(page).status == CheckStatus.WARN

    def test_present_passes(self, make_page):
        head = '<script type="application/ld+json">{"@type": "WebSite"}</script>'
        result = check_structured_data(make_page(_html(head=head)))
        assert result.status == CheckStatus.PASS
        assert "WebSite" in result.message


class TestSemanticHtml:

    def test_minimal_page_passes(self, page):
        assert check_semantic_html(page).status == CheckStatus.PASS

    def test_heading_skips(self):
        headings = [HeadingNode(1, "a"), HeadingNode(3, "b"), HeadingNode(4, "c"), HeadingNode(2, "d")]
        assert find_heading_skips(headings) == ["h1 -> h3"]

    def test_issues_warn(self, make_page):
        body = '<h1>a</h1><h1>b</h1><div role="button">Click</div>'
        result = check_semantic_html(make_page(_html(body=body, lang="")))
        assert result.status == CheckStatus.WARN
        for fragment in ("lang attribute", "2 <h1>", "<main>", "custom implementation"):
            assert fragment in result.details


class TestHtmlVersion:

    def test_html5_passes(self, page):
        assert check_html_version(page).status == CheckStatus.PASS

    def test_missing_doctype_warns(self, make_page):
        result = check_html_version(make_page(_html(doctype="")))
        assert result.status == CheckStatus.WARN
        assert result.impact == Impact.MEDIUM

    def test_legacy_doctype_and_deprecated_elements(self, make_page):
        html = _html(
            doctype='<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN">',
            body="<center><font>old</font></center><div>fine</div>",
        )
        result = check_html_version(make_page(html))
        assert result.status == CheckStatus.WARN
        assert "Non-HTML5 DOCTYPE" in result.details
        assert "<font>" in result.details and "<center>" in result.details
        assert "<dir>" not in result.details


class TestFiles:

    def test_expected_files_all_missing_fails(self, page):
        assert check_expected_files(page).status == CheckStatus.FAIL

    def test_expected_files_partial_warns(self, make_page):
        head = '<link rel="icon" href="/favicon.ico"><link rel="manifest" href="/site.webmanifest">'
        result = check_expected_files(make_page(_html(head=head)))
        assert result.status == CheckStatus.WARN
        assert "sitemap" in result.details

    def test_expected_files_present(self, make_page):
        head = (
            '<link rel="shortcut icon" href="/favicon.ico">'
            '<link rel="manifest" href="/m.json"><link rel="sitemap" href="/sitemap.xml">'
        )
        assert check_expected_files(make_page(_html(head=head))).status == CheckStatus.PASS

    def test_beneficial_files(self, make_page):
        head = (
            '<link rel="author" href="/humans.txt">'
            '<link rel="help" href="/.well-known/security.txt">'
            '<meta name="carbon" content="/carbon.txt">'
        )
        assert check_beneficial_files(make_page(_html(head=head))).status == CheckStatus.PASS

    def test_beneficial_files_missing_warns(self, page):
        result = check_beneficial_files(page)
        assert result.status == CheckStatus.WARN
        assert result.guideline_id == "3.17"


class TestRenderBlocking:

    def test_nothing_to_check(self, page):
        assert check_render_blocking(page).status == CheckStatus.NOT_APPLICABLE

    def test_blocking_script_fails(self, make_page):
        html = _html(head='<script src="/app.js"></script><script src="/late.js" defer></script>')
        result = check_render_blocking(make_page(html))
        assert result.status == CheckStatus.FAIL
        assert result.details == "https://example.com/app.js"

    def test_eager_image_warns(self, make_page):
        html = _html(head='<script src="/app.js" async></script>', body='<img src="/hero.jpg">')
        result = check_render_blocking(make_page(html))
        assert result.status == CheckStatus.WARN
        assert "1 image(s)" in result.message

    def test_deferred_scripts_and_lazy_images_pass(self, make_page):
        html = _html(head='<script src="/app.js" defer></script>', body='<img src="/a.jpg" loading="lazy">')
        assert check_render_blocking(make_page(html)).status == CheckStatus.PASS


class TestDependencyCount:

    def test_no_third_party_passes(self, page):
        assert check_dependency_count(page).status == CheckStatus.PASS

    def test_few_dependencies_warn_with_breakdown(self, make_page):
        html = _html(
            head='<script src="https://cdn.vendor.io/lib.js"></script>'
                 '<link rel="stylesheet" href="https://fonts.vendor.io/f.css">',
            body='<img src="https://images.other.net/a.png" alt="">',
        )
        result = check_dependency_count(make_page(html))
        assert result.status == CheckStatus.WARN
        assert result.message == "3 third-party dependencies detected."
        assert result.details == "Breakdown: 1 script(s), 1 stylesheet(s), 1 other resource(s)"

    def test_many_dependencies_fail(self, make_page):
        scripts = "".join(f'<script src="https://vendor{i}.com/a.js"></script>' for i in range(10))
        result = check_dependency_count(make_page(_html(head=scripts)))
        assert result.status == CheckStatus.FAIL
        assert result.guideline_id == "3.16"


class TestMinification:

    def test_compact_html_passes(self, page):
        assert check_minification(page).status == CheckStatus.PASS

    def test_blank_lines_warn(self, make_page):
        html = "<!DOCTYPE html>\n\n<html>\n\n<body>\n\n</body>\n\n</html>"
        result = check_minification(make_page(html))
        assert result.status == CheckStatus.WARN
        assert "lines are blank" in result.details

    def test_comments_warn(self, make_page):
        html = _html(body="<!-- a --><!-- b --><!-- c -->")
        result = check_minification(make_page(html))
        assert result.status == CheckStatus.WARN
        assert result.details == "3 HTML comments found"

    def test_conditional_comments_ignored(self, make_page):
        html = _html(body="<!-- a --><!-- b --><!--[if IE]><p>Old</p><![endif]-->")
        assert check_minification(make_page(html)).status == CheckStatus.PASS


VIEWPORT = '<meta name="viewport" content="width=device-width, initial-scale=1">'


class TestResponsiveDesign:

    def test_missing_viewport_fails(self, page):
        result = check_responsive_design(page)
        assert result.status == CheckStatus.FAIL
        assert result.impact == Impact.HIGH

    def test_viewport_without_media_queries_warns(self, make_page):
        result = check_responsive_design(make_page(_html(head=VIEWPORT, body='<img src="a.jpg" alt="">')))
        assert result.status == CheckStatus.WARN
        assert "srcset" in result.details
        assert "@media" in result.details

    def test_fully_responsive_passes(self, make_page):
        head = VIEWPORT + "<style>@media (max-width: 600px) { body { margin: 0 } }</style>"
        body = '<img src="a.jpg" srcset="a.jpg 1x, a@2x.jpg 2x" alt="">'
        assert check_responsive_design(make_page(_html(head=head, body=body))).status == CheckStatus.PASS


class TestPreferenceMediaQueries:

    def test_none_found_warns_with_dark_mode_hint(self, page):
        result = check_preference_media_queries(page)
        assert result.status == CheckStatus.WARN
        assert result.details.startswith("Found: none. Missing: prefers-color-scheme")
        assert "external CSS files are not analysed" in result.details
        assert "support.google.com" in result.recommendation

    def test_link_media_attribute_counts(self, make_page):
        head = (
            '<link rel="stylesheet" href="/dark.css" media="(prefers-color-scheme: dark)">'
            "<style>@media (prefers-reduced-motion: reduce) { * { animation: none } }</style>"
        )
        result = check_preference_media_queries(make_page(_html(head=head)))
        assert result.status == CheckStatus.WARN
        assert result.message.startswith("1 of 3")
        assert "support.google.com" not in result.recommendation

    def test_all_preferences_pass(self, make_page):
        head = (
            "<style>@media (prefers-color-scheme: dark) {} @media (prefers-reduced-motion: reduce) {}"
            " @media (prefers-reduced-data: reduce) {}</style>"
        )
        assert check_preference_media_queries(make_page(_html(head=head))).status == CheckStatus.PASS
