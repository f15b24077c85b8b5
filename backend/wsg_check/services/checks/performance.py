"""
Performance checks - page weight budget, render blocking and third-party footprint
(WSG 3.1, 3.6, 3.8, 3.16).
"""
from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.page_fetcher import PageData
from wsg_check.services.resource_analyzer import classify_resources, get_site

PAGE_WEIGHT = Guideline(
    id="3.1",
    name="Set Performance Budgets",
    success_criterion="HTML document size and resource count should be within performance budgets",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="performance-goals",
)

THIRD_PARTY = Guideline(
    id="3.6",
    name="Third-Party Assessment",
    success_criterion="Third-party scripts and resources should be kept to a minimum",
    category=WSGCategory.WEB_DEV,
    impact=Impact.HIGH,
    anchor="third-party-assessment",
)

RENDER_BLOCKING = Guideline(
    id="3.8",
    name="Resolve Render Blocking Content",
    success_criterion="Scripts should load with async or defer and offscreen images should be lazy-loaded",
    category=WSGCategory.WEB_DEV,
    impact=Impact.HIGH,
    anchor="resolve-render-blocking-content",
)

DEPENDENCY_COUNT = Guideline(
    id="3.16",
    name="Reducing Third-Party Dependencies",
    success_criterion="Pages should depend on as few third-party resources as possible",
    category=WSGCategory.WEB_DEV,
    impact=Impact.HIGH,
    anchor="reducing-third-party-code",
)

HTML_WARN_BYTES = 100 * 1024
HTML_FAIL_BYTES = 500 * 1024
RESOURCE_WARN = 50
RESOURCE_FAIL = 100

THIRD_PARTY_SCRIPT_WARN = 5
DEPENDENCY_FAIL = 9

# Severity order used to keep the worst status seen so far
_SEVERITY = {CheckStatus.PASS: 0, CheckStatus.WARN: 1, CheckStatus.FAIL: 2}


def check_page_weight(page: PageData) -> CheckResult:
    html_size = page.page_weight.html_size
    resource_count = page.page_weight.resource_count
    html_kb = round(html_size / 1024)

    status = CheckStatus.PASS
    issues = []

    if html_size > HTML_FAIL_BYTES:
        status = CheckStatus.FAIL
        issues.append(f"HTML document is {html_kb} KB (budget: {HTML_FAIL_BYTES // 1024} KB)")
    elif html_size > HTML_WARN_BYTES:
        status = CheckStatus.WARN
        issues.append(f"HTML document is {html_kb} KB (budget: {HTML_WARN_BYTES // 1024} KB)")

    resource_status = CheckStatus.PASS
    if resource_count > RESOURCE_FAIL:
        resource_status = CheckStatus.FAIL
        issues.append(f"{resource_count} external resources referenced (budget: {RESOURCE_FAIL})")
    elif resource_count > RESOURCE_WARN:
        resource_status = CheckStatus.WARN
        issues.append(f"{resource_count} external resources referenced (budget: {RESOURCE_WARN})")

    if _SEVERITY[resource_status] > _SEVERITY[status]:
        status = resource_status

    if not issues:
        return PAGE_WEIGHT.result(
            CheckStatus.PASS,
            f"HTML is {html_kb} KB with {resource_count} external resource(s), within budget.",
        )

    return PAGE_WEIGHT.result(
        status,
        "Page weight exceeds sustainability budget.",
        details="; ".join(issues),
        recommendation=(
            "Reduce HTML document size by removing unnecessary markup, inlined content and redundant code. "
            "Reduce external resource references by bundling assets and removing unused scripts and stylesheets."
        ),
    )


def check_third_party(page: PageData) -> CheckResult:
    page_site = get_site(page.url)
    resources = page.parsed_page.resources

    third_party = [r for r in resources if get_site(r.url) != page_site]
    scripts = [r for r in third_party if r.type == "script"]

    if not scripts:
        return THIRD_PARTY.result(
            CheckStatus.PASS,
            f"No third-party scripts found ({len(third_party)} third-party resource(s) total).",
        )

    message = f"{len(scripts)} third-party script(s) detected ({len(third_party)} third-party resource(s) total)."
    script_urls = ", ".join(r.url for r in scripts)

    if len(scripts) > THIRD_PARTY_SCRIPT_WARN:
        return THIRD_PARTY.result(
            CheckStatus.FAIL,
            message,
            details=script_urls,
            recommendation=(
                "Audit every third-party script and remove analytics, social widgets and advertising "
                "that are not essential. Self-host fonts and icons rather than loading them from "
                "third-party CDNs."
            ),
        )

    return THIRD_PARTY.result(
        CheckStatus.WARN,
        message,
        details=script_urls,
        recommendation=(
            "Review each third-party script and remove those that are not essential. Use a facade "
            "(load on interaction) for embeds such as videos or chat widgets."
        ),
    )


def check_render_blocking(page: PageData) -> CheckResult:
    resources = page.parsed_page.resources
    scripts = [r for r in resources if r.type == "script"]
    images = [r for r in resources if r.type == "image" and "src" in r.attributes]

    if not scripts and not images:
        return RENDER_BLOCKING.result(CheckStatus.NOT_APPLICABLE, "No scripts or images found on the page.")

    blocking = [s for s in scripts if "async" not in s.attributes and "defer" not in s.attributes]
    if blocking:
        return RENDER_BLOCKING.result(
            CheckStatus.FAIL,
            f"{len(blocking)} render-blocking script(s) found without async or defer.",
            details=", ".join(s.url for s in blocking),
            recommendation=(
                "Add defer (or async for independent scripts) to external <script> tags so the "
                "browser can render content before the scripts execute."
            ),
        )

    eager = [i for i in images if i.attributes.get("loading", "").lower() != "lazy"]
    if eager:
        return RENDER_BLOCKING.result(
            CheckStatus.WARN,
            f"Scripts are non-blocking, but {len(eager)} image(s) load eagerly.",
            details=", ".join(i.url for i in eager),
            recommendation='Add loading="lazy" to images that are not visible in the initial viewport.',
        )

    return RENDER_BLOCKING.result(CheckStatus.PASS, "No render-blocking scripts and all images load lazily.")


def check_dependency_count(page: PageData) -> CheckResult:
    count = page.page_weight.third_party_count

    if count == 0:
        return DEPENDENCY_COUNT.result(CheckStatus.PASS, "No third-party dependencies detected.")

    third_party = [info for info in classify_resources(page.parsed_page.resources, page.url) if info.is_third_party]
    scripts = sum(1 for info in third_party if info.type == "script")
    stylesheets = sum(1 for info in third_party if info.type == "stylesheet")
    other = count - scripts - stylesheets
    breakdown = f"{scripts} script(s), {stylesheets} stylesheet(s), {other} other resource(s)"

    status = CheckStatus.FAIL if count > DEPENDENCY_FAIL else CheckStatus.WARN
    return DEPENDENCY_COUNT.result(
        status,
        f"{count} third-party dependenc{'y' if count == 1 else 'ies'} detected.",
        details=f"Breakdown: {breakdown}",
        recommendation=(
            "Self-host critical assets and remove third-party libraries, widgets and trackers that "
            "are not essential. Every extra origin adds connection setup and transfer energy."
        ),
    )
