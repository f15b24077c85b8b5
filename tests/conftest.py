"""Shared fixtures: build PageData bundles from inline HTML without touching the network."""

from __future__ import annotations

import pytest

from wsg_check.services.html_parser import parse_html
from wsg_check.services.http_client import FetchResult, RedirectEntry
from wsg_check.services.page_fetcher import PageData
from wsg_check.services.resource_analyzer import analyze_page_weight

PAGE_URL = "https://example.com/"

MINIMAL_HTML = (
    "<!DOCTYPE html><html lang=\"en\"><head><title>Example</title></head>"
    "<body><main><h1>Example</h1></main></body></html>"
)


def build_page(
    html: str = MINIMAL_HTML,
    headers: dict[str, str] | None = None,
    url: str = PAGE_URL,
    redirect_chain: list[RedirectEntry] | None = None,
    content_length: int | None = None,
) -> PageData:
    """Assemble PageData the same way PageFetcher does."""
    lowered = {key.lower(): value for key, value in (headers or {}).items()}
    fetch_result = FetchResult(
        url=url,
        original_url=url,
        status_code=200,
        headers=lowered,
        body=html,
        redirect_chain=list(redirect_chain or []),
        content_length=len(html.encode("utf-8")) if content_length is None else content_length,
        content_encoding=lowered.get("content-encoding"),
        content_type=lowered.get("content-type"),
    )
    parsed = parse_html(html, url)
    return PageData(
        url=url,
        fetch_result=fetch_result,
        parsed_page=parsed,
        page_weight=analyze_page_weight(fetch_result, parsed, url),
    )


@pytest.fixture
def make_page():
    return build_page


@pytest.fixture
def page() -> PageData:
    return build_page()
