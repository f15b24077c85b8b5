"""
Markup checks - metadata, structured data, semantic HTML and HTML version (WSG 3.4, 3.7, 3.13, 3.19).
"""
import re
from typing import List, Sequence

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.html_parser import HeadingNode
from wsg_check.services.page_fetcher import PageData

METADATA = Guideline(
    id="3.4",
    name="Use Metadata Correctly",
    success_criterion="Pages should have a <title>, meta description, and Open Graph metadata",
    category=WSGCategory.WEB_DEV,
    impact=Impact.LOW,
    anchor="use-metadata-correctly",
)

SEMANTIC_HTML = Guideline(
    id="3.7",
    name="Use HTML Elements Correctly",
    success_criterion="Use semantic HTML elements to structure content and reduce reliance on CSS/JS workarounds",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="use-html-elements-correctly",
)

STRUCTURED_DATA = Guideline(
    id="3.13",
    name="Use Metadata, Microdata, and Schema.org",
    success_criterion="Pages should include Schema.org JSON-LD structured data to enable rich search results",
    category=WSGCategory.WEB_DEV,
    impact=Impact.LOW,
    anchor="use-metadata-microdata-and-schema-org",
)

HTML_VERSION = Guideline(
    id="3.19",
    name="Use the Latest Stable Language Version",
    success_criterion="Pages should use the HTML5 doctype and avoid deprecated HTML elements",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="use-the-latest-stable-language-version",
)

HTML5_DOCTYPE = "<!doctype html>"

DEPRECATED_ELEMENTS = (
    "font", "center", "marquee", "blink", "frameset",
    "frame", "noframes", "applet", "dir", "basefont",
)

CUSTOM_NATIVE_RE = re.compile(
    r"""<(?:div|span)\b[^>]*\brole=["'](?:button|checkbox|link|tab|menuitem|option|radio|switch)["']""",
    re.I,
)


def check_metadata(page: PageData) -> CheckResult:
    parsed = page.parsed_page
    issues = []

    if not parsed.title:
        issues.append("Missing <title> element")

    has_description = any(
        (tag.name or "").lower() == "description" and (tag.content or "").strip()
        for tag in parsed.meta_tags
    )
    if not has_description:
        issues.append('Missing <meta name="description">')

    properties = {tag.property for tag in parsed.meta_tags if tag.property}
    if "og:title" not in properties or "og:description" not in properties:
        issues.append("Missing Open Graph tags (og:title and/or og:description)")

    if not issues:
        return METADATA.result(
            CheckStatus.PASS,
            "Page metadata is complete (title, description and Open Graph tags present).",
        )

    # Missing title or description is a fail; missing Open Graph alone is a warning
    critical = not parsed.title or not has_description
    return METADATA.result(
        CheckStatus.FAIL if critical else CheckStatus.WARN,
        f"{len(issues)} metadata issue(s) found.",
        details="; ".join(issues),
        recommendation=(
            'Add a concise, descriptive <title> and a <meta name="description"> to every page. '
            "Include og:title, og:description and og:image so link previews are accurate and "
            "users do not load the wrong page."
        ),
    )


def check_structured_data(page: PageData) -> CheckResult:
    blocks = page.parsed_page.structured_data

    if not blocks:
        return STRUCTURED_DATA.result(
            CheckStatus.WARN,
            "No JSON-LD structured data found.",
            recommendation=(
                'Add Schema.org structured data in a <script type="application/ld+json"> block. '
                "Rich results answer questions in the search page itself and save page loads."
            ),
        )

    types = ", ".join(block.type for block in blocks)
    return STRUCTURED_DATA.result(
        CheckStatus.PASS,
        f"Found {len(blocks)} JSON-LD structured data block(s): {types}.",
    )


def find_heading_skips(headings: Sequence[HeadingNode]) -> List[str]:
    """Pairs of consecutive headings where the level jumps by more than one."""
    return [
        f"h{prev.level} -> h{curr.level}"
        for prev, curr in zip(headings, headings[1:])
        if curr.level > prev.level + 1
    ]


def check_semantic_html(page: PageData) -> CheckResult:
    parsed = page.parsed_page
    issues = []

    if not parsed.lang:
        issues.append("The <html> element is missing a lang attribute")

    if parsed.headings:
        h1_count = sum(1 for h in parsed.headings if h.level == 1)
        if h1_count == 0:
            issues.append("No <h1> heading found on the page")
        elif h1_count > 1:
            issues.append(f"{h1_count} <h1> elements found; a page should have exactly one")
        skips = find_heading_skips(parsed.headings)
        if skips:
            issues.append(f"Heading levels are skipped: {', '.join(skips)}")

    if "main" not in parsed.landmarks:
        issues.append("No <main> landmark element found, primary content is not identified")

    custom_native = len(CUSTOM_NATIVE_RE.findall(page.fetch_result.body))
    if custom_native:
        issues.append(
            f"{custom_native} custom implementation(s) of native HTML elements detected "
            '(e.g. <div role="button">); use native <button>, <a> or <input> instead'
        )

    if not issues:
        return SEMANTIC_HTML.result(
            CheckStatus.PASS,
            "Semantic HTML structure is correct (lang declared, heading hierarchy valid, native elements used).",
        )

    return SEMANTIC_HTML.result(
        CheckStatus.WARN,
        f"{len(issues)} semantic HTML issue(s) found.",
        details="; ".join(issues),
        recommendation=(
            "Declare a lang attribute on <html>, use a single <h1> with no skipped heading levels, "
            'wrap primary content in <main> and replace <div role="button"> patterns with native elements.'
        ),
    )


def check_html_version(page: PageData) -> CheckResult:
    doctype = page.parsed_page.doctype
    body = page.fetch_result.body
    issues = []

    if not doctype:
        issues.append("No DOCTYPE declaration found; add <!DOCTYPE html> to the document")
    elif doctype.strip().lower() != HTML5_DOCTYPE:
        issues.append(f'Non-HTML5 DOCTYPE detected: "{doctype}"; replace it with <!DOCTYPE html>')

    deprecated = [
        element for element in DEPRECATED_ELEMENTS
        if re.search(rf"<{element}(\s[^>]*>|>|\s*/>)", body, re.I)
    ]
    if deprecated:
        issues.append("Deprecated HTML element(s) found: " + ", ".join(f"<{el}>" for el in deprecated))

    if not issues:
        return HTML_VERSION.result(CheckStatus.PASS, "HTML5 DOCTYPE declared and no deprecated elements found.")

    return HTML_VERSION.result(
        CheckStatus.WARN,
        f"{len(issues)} HTML version issue(s) found.",
        details="; ".join(issues),
        recommendation=(
            "Use <!DOCTYPE html> at the top of every document. Replace <font> and <center> with CSS, "
            "<marquee> and <blink> with CSS animations, <frameset> with single-page layouts and <dir> with <ul>."
        ),
    )
