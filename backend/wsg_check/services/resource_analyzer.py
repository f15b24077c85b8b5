"""
Resource Analyzer - page weight and resource breakdown from what the HTML response exposes.

Sub-resources are not fetched; html_size is the transfer size of the document
and resource_count is a proxy for the remaining weight.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlparse

from wsg_check.services.html_parser import ParsedPage, ResourceReference
from wsg_check.services.http_client import FetchResult

RESOURCE_TYPES = ("stylesheet", "script", "image", "font", "media", "other")

KNOWN_ENCODINGS = {"gzip": "gzip", "x-gzip": "gzip", "br": "br", "zstd": "zstd", "deflate": "deflate"}


@dataclass(frozen=True)
class ResourceInfo:
    url: str
    type: str
    is_third_party: bool


@dataclass(frozen=True)
class CompressionInfo:
    is_compressed: bool
    type: Optional[str] = None


@dataclass(frozen=True)
class PageWeightAnalysis:
    """Aggregate weight metrics for one page."""
    html_size: int
    resource_count: int  # referenced sub-resources
    first_party_count: int
    third_party_count: int
    compression: CompressionInfo
    by_type: Dict[str, int] = field(default_factory=dict)


def get_site(url: str) -> str:
    """Last two host labels with a leading www. removed (no public suffix list)."""
    hostname = urlparse(url).hostname
    if not hostname:
        return url
    if hostname.startswith("www."):
        hostname = hostname[4:]
    parts = hostname.split(".")
    return ".".join(parts[-2:]) if len(parts) >= 2 else hostname


def classify_resources(resources: Iterable[ResourceReference], origin_url: str) -> List[ResourceInfo]:
    origin_site = get_site(origin_url)
    return [
        ResourceInfo(url=ref.url, type=ref.type, is_third_party=get_site(ref.url) != origin_site)
        for ref in resources
    ]


def analyze_compression(headers: Dict[str, str]) -> CompressionInfo:
    encoding = headers.get("content-encoding", "").strip().lower()
    if not encoding or encoding == "identity":
        return CompressionInfo(is_compressed=False)
    return CompressionInfo(is_compressed=True, type=KNOWN_ENCODINGS.get(encoding, encoding))


def analyze_page_weight(
    fetch_result: FetchResult,
    parsed_page: ParsedPage,
    origin_url: Optional[str] = None,
) -> PageWeightAnalysis:
    classified = classify_resources(parsed_page.resources, origin_url or fetch_result.url)

    by_type = {resource_type: 0 for resource_type in RESOURCE_TYPES}
    for info in classified:
        key = info.type if info.type in by_type else "other"
        by_type[key] += 1

    third_party = sum(1 for info in classified if info.is_third_party)

    return PageWeightAnalysis(
        html_size=fetch_result.content_length,
        resource_count=len(classified),
        first_party_count=len(classified) - third_party,
        third_party_count=third_party,
        compression=analyze_compression(fetch_result.headers),
        by_type=by_type,
    )
