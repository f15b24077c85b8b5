"""
Hosting checks - sustainable hosting, caching, compression, redirects and CDN delivery (WSG 4.x).
"""
import re
from urllib.parse import urlparse

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services import carbon_estimator
from wsg_check.services.checks.base import Guideline
from wsg_check.services.page_fetcher import PageData

SUSTAINABLE_HOSTING = Guideline(
    id="4.1",
    name="Choose a Sustainable Hosting Provider",
    success_criterion="The domain should be served from infrastructure powered by verified renewable energy",
    category=WSGCategory.HOSTING,
    impact=Impact.HIGH,
    anchor="choose-a-sustainable-hosting-provider",
)

CACHING = Guideline(
    id="4.2",
    name="Optimise Browser Caching",
    success_criterion="Pages should be served with effective caching headers (Cache-Control with max-age, ETag, or Expires)",
    category=WSGCategory.HOSTING,
    impact=Impact.HIGH,
    anchor="optimise-browser-caching",
)

COMPRESSION = Guideline(
    id="4.3",
    name="Compress Your Files",
    success_criterion="HTML responses should be delivered with gzip or Brotli content encoding to reduce transfer size",
    category=WSGCategory.HOSTING,
    impact=Impact.HIGH,
    anchor="compress-your-files",
)

REDIRECTS = Guideline(
    id="4.4",
    name="Avoid Unnecessary or Excessive Redirects",
    success_criterion=(
        "Pages should be accessible without redirect chains; "
        "permanent 301 redirects are preferred over temporary 302s"
    ),
    category=WSGCategory.HOSTING,
    impact=Impact.MEDIUM,
    anchor="avoid-unnecessary-or-excessive-redirects",
)

CDN_USAGE = Guideline(
    id="4.10",
    name="Use a Content Delivery Network",
    success_criterion="Pages should be delivered via a CDN to reduce data transit energy",
    category=WSGCategory.HOSTING,
    impact=Impact.MEDIUM,
    anchor="use-a-content-delivery-network",
)

MAX_AGE_RE = re.compile(r"(?:^|,)\s*(?:s-)?max-?age\s*=\s*\d+", re.I)
COMPRESSION_ENCODINGS = {"gzip", "x-gzip", "br", "zstd", "deflate"}
REDIRECT_CHAIN_THRESHOLD = 3
PERMANENT_REDIRECT_CODES = {301, 308}

# Response headers set by CDNs and caching proxies, with a display label
CDN_HEADERS = (
    ("cf-ray", "Cloudflare (cf-ray)"),
    ("x-amz-cf-id", "Amazon CloudFront (x-amz-cf-id)"),
    ("x-amz-cf-pop", "Amazon CloudFront (x-amz-cf-pop)"),
    ("x-fastly-request-id", "Fastly (x-fastly-request-id)"),
    ("x-cache", "CDN cache (x-cache)"),
    ("x-cache-hits", "CDN cache hits (x-cache-hits)"),
    ("x-served-by", "CDN proxy (x-served-by)"),
    ("fly-request-id", "Fly.io (fly-request-id)"),
    ("age", "Downstream cache (age)"),
    ("via", "Proxy/CDN (via)"),
)


async def check_sustainable_hosting(page: PageData) -> CheckResult:
    domain = urlparse(page.url).hostname or ""
    is_green = await carbon_estimator.check_green_hosting(domain)

    if is_green:
        return SUSTAINABLE_HOSTING.result(
            CheckStatus.PASS,
            f"{domain} is hosted on verified renewable-energy infrastructure (Green Web Foundation).",
        )

    return SUSTAINABLE_HOSTING.result(
        CheckStatus.FAIL,
        f"{domain} is not listed in the Green Web Foundation dataset as a green hosting provider.",
        details="This domain was not found in the Green Web Foundation dataset of renewable-energy hosts.",
        recommendation=(
            "Consider migrating to a hosting provider that uses 100% renewable energy and is verified "
            "by the Green Web Foundation (https://www.thegreenwebfoundation.org/green-web-check/)."
        ),
    )


def check_caching(page: PageData) -> CheckResult:
    headers = page.fetch_result.headers
    cache_control = headers.get("cache-control", "")
    etag = headers.get("etag", "")
    expires = headers.get("expires", "")

    if MAX_AGE_RE.search(cache_control):
        return CACHING.result(
            CheckStatus.PASS,
            "Cache-Control header with max-age is present, browser caching is enabled.",
        )

    if cache_control or etag or expires:
        found = []
        if cache_control:
            found.append(f"Cache-Control: {cache_control}")
        if etag:
            found.append("ETag")
        if expires:
            found.append(f"Expires: {expires}")
        return CACHING.result(
            CheckStatus.WARN,
            "Some caching headers present but no explicit max-age directive found.",
            details=f"Found: {'; '.join(found)}.",
            recommendation=(
                'Add a Cache-Control header with a max-age directive (e.g. "Cache-Control: max-age=3600, '
                'stale-while-revalidate=86400"). Use long max-age values for hashed, immutable assets '
                "and shorter ones for HTML documents."
            ),
        )

    return CACHING.result(
        CheckStatus.FAIL,
        "No caching headers found (Cache-Control, ETag and Expires are all absent).",
        details="Without caching headers browsers re-download the page on every visit.",
        recommendation=(
            'Add Cache-Control headers to all responses. For HTML: "Cache-Control: no-cache". '
            'For versioned assets: "Cache-Control: max-age=31536000, immutable". '
            "Include an ETag for conditional revalidation."
        ),
    )


def check_compression(page: PageData) -> CheckResult:
    encoding = page.fetch_result.headers.get("content-encoding", "").strip().lower()

    if encoding in COMPRESSION_ENCODINGS:
        if encoding == "br":
            return COMPRESSION.result(
                CheckStatus.PASS,
                "Response is compressed with Brotli (br) encoding.",
                details="Content-Encoding: br",
            )
        return COMPRESSION.result(
            CheckStatus.PASS,
            f"Response is compressed with {encoding} encoding.",
            details=f"Content-Encoding: {encoding}",
            recommendation=(
                "Brotli (br) typically compresses 15-25% better than gzip. "
                "Consider enabling Brotli on your server or CDN."
            ),
        )

    return COMPRESSION.result(
        CheckStatus.FAIL,
        "Response does not appear to use content encoding (no Content-Encoding header found).",
        details=(
            f"Content-Encoding: {encoding}" if encoding
            else "A missing Content-Encoding header means the response was sent uncompressed."
        ),
        recommendation=(
            "Enable gzip or Brotli compression on your web server or CDN for all text-based responses "
            "(HTML, CSS, JavaScript, SVG, JSON). In nginx: \"gzip on;\". In Apache: mod_deflate or mod_brotli."
        ),
    )


def check_redirects(page: PageData) -> CheckResult:
    chain = page.fetch_result.redirect_chain

    if not chain:
        return REDIRECTS.result(CheckStatus.PASS, "No redirects detected, the URL resolves directly.")

    if len(chain) >= REDIRECT_CHAIN_THRESHOLD:
        hops = "\n".join(f"{hop.status_code} {hop.url} -> {hop.location}" for hop in chain)
        return REDIRECTS.result(
            CheckStatus.FAIL,
            f"Redirect chain of {len(chain)} hops detected; each hop costs a full round-trip.",
            details=f"Redirect chain:\n{hops}",
            recommendation=(
                "Collapse the redirect chain so the original URL resolves in at most one redirect. "
                "Point internal links and canonical tags straight at the final URL, and use 301 "
                "(Moved Permanently) for stable redirects so browsers can cache them."
            ),
        )

    temporary = [hop for hop in chain if hop.status_code not in PERMANENT_REDIRECT_CODES]
    if temporary:
        return REDIRECTS.result(
            CheckStatus.WARN,
            f"{len(chain)} redirect(s) detected, including temporary redirect(s) that cannot be cached.",
            details="Temporary redirects: " + ", ".join(f"{hop.status_code} {hop.url}" for hop in temporary),
            recommendation=(
                "Replace temporary (302/307) redirects with permanent (301/308) ones when the destination "
                "is stable. Browsers cache permanent redirects and skip the round-trip on later visits."
            ),
        )

    return REDIRECTS.result(
        CheckStatus.PASS,
        f"{len(chain)} permanent redirect(s) detected; browsers cache these.",
        details=f"Redirect chain length: {len(chain)}. All redirects use 301/308.",
    )


def check_cdn_usage(page: PageData) -> CheckResult:
    headers = page.fetch_result.headers
    detected = [label for header, label in CDN_HEADERS if header in headers]

    if detected:
        indicators = ", ".join(detected)
        return CDN_USAGE.result(
            CheckStatus.PASS,
            f"CDN delivery detected via response headers: {indicators}.",
            details=f"CDN indicator header(s) found: {indicators}",
        )

    return CDN_USAGE.result(
        CheckStatus.WARN,
        "No CDN indicator headers detected; the page may not be served from a distributed edge network.",
        details=(
            "None of the well-known CDN response headers were found. This does not rule out a CDN, "
            "but suggests the response may come directly from the origin server."
        ),
        recommendation=(
            "Serve the site through a CDN so responses come from edge nodes close to users. "
            "Many static hosts (Netlify, Vercel, Cloudflare Pages) include this by default."
        ),
    )
