"""
File reference checks - expected and beneficial files (WSG 3.17).
"""
from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.page_fetcher import PageData

EXPECTED_FILES = Guideline(
    id="3.17",
    name="Expected Files Present",
    success_criterion="Pages should link to a favicon, a web app manifest, and a sitemap",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="provide-information-about-file-provenance",
)

BENEFICIAL_FILES = Guideline(
    id="3.17",
    name="Beneficial Files Present",
    success_criterion="Sites should provide security.txt, humans.txt, and carbon.txt for transparency",
    category=WSGCategory.WEB_DEV,
    impact=Impact.LOW,
    anchor="provide-information-about-file-provenance",
)

FAVICON_RELS = {"icon", "shortcut icon", "apple-touch-icon"}
BENEFICIAL_FILE_NAMES = ("security.txt", "humans.txt", "carbon.txt")


def check_expected_files(page: PageData) -> CheckResult:
    rels = {(link.rel or "").strip().lower() for link in page.parsed_page.links}

    missing = []
    if not rels & FAVICON_RELS:
        missing.append('favicon (<link rel="icon">)')
    if "manifest" not in rels:
        missing.append('web app manifest (<link rel="manifest">)')
    if "sitemap" not in rels:
        missing.append('sitemap (<link rel="sitemap">)')

    if not missing:
        return EXPECTED_FILES.result(
            CheckStatus.PASS,
            "All expected files are referenced (favicon, manifest and sitemap).",
        )

    return EXPECTED_FILES.result(
        CheckStatus.FAIL if len(missing) == 3 else CheckStatus.WARN,
        f"{len(missing)} expected file reference(s) missing.",
        details=f"Missing: {'; '.join(missing)}",
        recommendation=(
            'Add <link rel="icon">, <link rel="manifest"> and <link rel="sitemap" href="/sitemap.xml"> '
            "to the document <head>. A declared favicon avoids a 404 round-trip on every page load."
        ),
    )


def check_beneficial_files(page: PageData) -> CheckResult:
    parsed = page.parsed_page
    references = [(link.href or "").lower() for link in parsed.links]
    references += [
        (tag.content or "").lower() for tag in parsed.meta_tags if ".txt" in (tag.content or "").lower()
    ]

    found = [name for name in BENEFICIAL_FILE_NAMES if any(name in ref for ref in references)]
    missing = [name for name in BENEFICIAL_FILE_NAMES if name not in found]

    if not missing:
        return BENEFICIAL_FILES.result(
            CheckStatus.PASS,
            f"All beneficial files referenced ({', '.join(found)}).",
        )

    return BENEFICIAL_FILES.result(
        CheckStatus.WARN,
        f"{len(missing)} beneficial file(s) not referenced: {', '.join(missing)}.",
        details=f"Not referenced: {', '.join(missing)}",
        recommendation=(
            "Consider publishing /.well-known/security.txt (RFC 9116), /humans.txt and /carbon.txt, "
            "and link them from the document <head> so automated tools can discover them."
        ),
    )
