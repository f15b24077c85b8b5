"""
Style and markup efficiency checks - minification, responsive layouts, preference
media queries and font stacks (WSG 2.16, 3.3, 3.12, 3.13).

Only the HTML document and its inline <style> blocks are inspected; external
stylesheets are never downloaded.
"""
import re
from typing import List

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.page_fetcher import PageData

FONT_STACK = Guideline(
    id="2.16",
    name="Ensure Content Is Readable Without Custom Fonts",
    success_criterion="font-family declarations should include system font fallbacks and a generic family",
    category=WSGCategory.UX,
    impact=Impact.LOW,
    anchor="ensure-content-is-readable-without-custom-fonts",
)

MINIFICATION = Guideline(
    id="3.3",
    name="Minify Your HTML, CSS, and JavaScript",
    success_criterion="Delivered HTML should be free of excess whitespace and developer comments",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="minify-your-html-css-and-javascript",
)

PREFERENCE_QUERIES = Guideline(
    id="3.12",
    name="Preference Media Queries",
    success_criterion="Styles should honour prefers-color-scheme, prefers-reduced-motion and prefers-reduced-data",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="preference-media-queries",
)

RESPONSIVE_DESIGN = Guideline(
    id="3.13",
    name="Responsive Layouts",
    success_criterion="Pages should declare a viewport and adapt images and layout to the device",
    category=WSGCategory.WEB_DEV,
    impact=Impact.HIGH,
    anchor="responsive-layouts",
)

STYLE_BLOCK_RE = re.compile(r"<style\b[^>]*>([\s\S]*?)</style>", re.I)
MEDIA_IN_STYLE_RE = re.compile(r"<style\b[^>]*>[\s\S]*?@media[\s\S]*?</style>", re.I)
FONT_FAMILY_RE = re.compile(r"font-family\s*:\s*([^;}]+)", re.I)
# Conditional comments (<!--[if IE]>) are left alone
HTML_COMMENT_RE = re.compile(r"<!--(?!\[if\s)[\s\S]*?-->")

BLANK_LINE_RATIO = 0.1
MIN_LINES_FOR_RATIO = 5
MAX_COMMENTS = 2

PREFERENCE_FEATURES = ("prefers-color-scheme", "prefers-reduced-motion", "prefers-reduced-data")
DARK_MODE_ARTICLE = "https://support.google.com/pixelphone/answer/7158589"

GENERIC_FAMILIES = {"serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui"}
SYSTEM_FONTS = {
    "-apple-system", "blinkmacsystemfont", "segoe ui", "roboto", "helvetica neue",
    "arial", "helvetica", "georgia", "times new roman", "courier new",
}


def inline_css(body: str) -> str:
    """Contents of every <style> block, newline-joined."""
    return "\n".join(STYLE_BLOCK_RE.findall(body))


def has_font_fallback(value: str) -> bool:
    for token in value.split(","):
        name = token.strip().strip("'\"").lower()
        if name in GENERIC_FAMILIES or name in SYSTEM_FONTS:
            return True
    return False


def check_minification(page: PageData) -> CheckResult:
    body = page.fetch_result.body
    issues = []

    lines = body.split("\n")
    blank = sum(1 for line in lines if not line.strip())
    if len(lines) >= MIN_LINES_FOR_RATIO and blank / len(lines) > BLANK_LINE_RATIO:
        issues.append(f"{blank} of {len(lines)} lines are blank ({round(blank / len(lines) * 100)}%)")

    comments = HTML_COMMENT_RE.findall(body)
    if len(comments) > MAX_COMMENTS:
        issues.append(f"{len(comments)} HTML comments found")

    if not issues:
        return MINIFICATION.result(CheckStatus.PASS, "HTML appears to be minified.")

    return MINIFICATION.result(
        CheckStatus.WARN,
        "HTML does not appear to be minified.",
        details=". ".join(issues),
        recommendation=(
            "Minify HTML, CSS and JavaScript as part of the build, stripping comments and "
            "whitespace that add bytes to every transfer."
        ),
    )


def check_responsive_design(page: PageData) -> CheckResult:
    parsed = page.parsed_page

    has_viewport = any((tag.name or "").lower() == "viewport" for tag in parsed.meta_tags)
    if not has_viewport:
        return RESPONSIVE_DESIGN.result(
            CheckStatus.FAIL,
            'Missing <meta name="viewport">; the page will not adapt to small screens.',
            recommendation='Add <meta name="viewport" content="width=device-width, initial-scale=1">.',
        )

    issues = []
    src_images = [r for r in parsed.resources if r.type == "image" and "src" in r.attributes]
    if src_images and not any("srcset" in r.attributes for r in src_images):
        issues.append(f"{len(src_images)} image(s) without srcset for responsive sizes")
    if not MEDIA_IN_STYLE_RE.search(page.fetch_result.body):
        issues.append("No @media rules found in inline styles")

    if not issues:
        return RESPONSIVE_DESIGN.result(CheckStatus.PASS, "Viewport, responsive images and media queries in use.")

    return RESPONSIVE_DESIGN.result(
        CheckStatus.WARN,
        "Viewport declared, but responsive techniques could be improved.",
        details="; ".join(issues),
        recommendation=(
            "Serve appropriately sized images with srcset/sizes and use media queries so small "
            "devices do not download desktop-sized assets."
        ),
    )


def check_preference_media_queries(page: PageData) -> CheckResult:
    link_media = " ".join(link.media for link in page.parsed_page.links if link.media)
    target = f"{inline_css(page.fetch_result.body)} {link_media}".lower()

    found = [feature for feature in PREFERENCE_FEATURES if feature in target]
    missing = [feature for feature in PREFERENCE_FEATURES if feature not in found]

    if not missing:
        return PREFERENCE_QUERIES.result(CheckStatus.PASS, "All user preference media queries are supported.")

    recommendation = (
        "Respect user preferences with @media (prefers-reduced-motion), (prefers-color-scheme) "
        "and (prefers-reduced-data) to cut animation, energy and data use."
    )
    if "prefers-color-scheme" in missing:
        recommendation += (
            f" A dark colour scheme can reduce display energy on OLED screens ({DARK_MODE_ARTICLE})."
        )

    return PREFERENCE_QUERIES.result(
        CheckStatus.WARN,
        f"{len(missing)} of {len(PREFERENCE_FEATURES)} preference media queries not detected.",
        details=(
            f"Found: {', '.join(found) or 'none'}. Missing: {', '.join(missing)}. "
            "Note: external CSS files are not analysed."
        ),
        recommendation=recommendation,
    )


def check_font_stack_fallbacks(page: PageData) -> CheckResult:
    declarations: List[str] = [
        value.strip() for value in FONT_FAMILY_RE.findall(inline_css(page.fetch_result.body))
    ]

    if not declarations:
        return FONT_STACK.result(
            CheckStatus.NOT_APPLICABLE,
            "No font-family declarations detected in inline CSS.",
        )

    without_fallback = [value for value in declarations if not has_font_fallback(value)]
    if not without_fallback:
        return FONT_STACK.result(
            CheckStatus.PASS,
            f"All {len(declarations)} font-family declaration(s) include system font fallbacks.",
        )

    return FONT_STACK.result(
        CheckStatus.WARN,
        f"{len(without_fallback)} of {len(declarations)} font-family declaration(s) lack system font fallbacks.",
        details=(
            "Declarations without a generic family or system font: "
            + "; ".join(without_fallback)
            + ". Note: external stylesheets are not analysed."
        ),
        recommendation=(
            "End every font-family declaration with a generic family keyword so text stays readable "
            'when the custom font cannot load, e.g. font-family: "MyFont", -apple-system, "Segoe UI", sans-serif.'
        ),
    )
