"""
Security headers check (WSG 3.15).
"""
from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.page_fetcher import PageData

SECURITY_HEADERS_GUIDELINE = Guideline(
    id="3.15",
    name="Code Security",
    success_criterion="Pages should be served with key HTTP security headers (CSP, HSTS, X-Frame-Options, etc.)",
    category=WSGCategory.WEB_DEV,
    impact=Impact.HIGH,
    anchor="code-security",
)

# (lower-cased header, display label)
SECURITY_HEADERS = [
    ("content-security-policy", "Content-Security-Policy"),
    ("strict-transport-security", "Strict-Transport-Security"),
    ("x-frame-options", "X-Frame-Options"),
    ("x-content-type-options", "X-Content-Type-Options"),
    ("referrer-policy", "Referrer-Policy"),
]

MISSING_FAIL_THRESHOLD = 3


def check_security_headers(page: PageData) -> CheckResult:
    headers = page.fetch_result.headers
    missing = [label for header, label in SECURITY_HEADERS if not headers.get(header)]

    if not missing:
        return SECURITY_HEADERS_GUIDELINE.result(CheckStatus.PASS, "All recommended security headers are present.")

    missing_list = ", ".join(missing)
    status = CheckStatus.FAIL if len(missing) >= MISSING_FAIL_THRESHOLD else CheckStatus.WARN
    return SECURITY_HEADERS_GUIDELINE.result(
        status,
        f"{len(missing)} security header(s) missing: {missing_list}.",
        details=f"Missing headers: {missing_list}",
        recommendation=(
            "Add the missing security headers to your server or CDN configuration. "
            "Content-Security-Policy restricts resource loading, Strict-Transport-Security enforces HTTPS, "
            "X-Frame-Options prevents clickjacking, X-Content-Type-Options prevents MIME sniffing and "
            "Referrer-Policy controls the Referer header."
        ),
    )
