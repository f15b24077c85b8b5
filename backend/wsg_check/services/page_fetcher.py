"""
Page Fetcher - URL in, PageData bundle out.

Architecture:
1. URL normalization
2. HTTP fetch (URL guard, robots.txt, cache, redirects, retries)
3. HTML parse
4. Page weight analysis

All network I/O is confined here; checks only ever see the finished PageData.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse, urlunparse

from wsg_check.logger import logger
from wsg_check.services.errors import ParseError, Result, err, ok
from wsg_check.services.html_parser import ParsedPage, parse_html
from wsg_check.services.http_client import FetchResult, HttpClient
from wsg_check.services.resource_analyzer import PageWeightAnalysis, analyze_page_weight


@dataclass(frozen=True)
class PageData:
    """Everything a check may read about one page. Never mutated after creation."""
    url: str
    fetch_result: FetchResult
    parsed_page: ParsedPage
    page_weight: PageWeightAnalysis


class PageFetcher:
    """Fetch, parse and analyse a page, returning Result[PageData]."""

    def __init__(self, client: Optional[HttpClient] = None):
        self.client = client or HttpClient()
        # Concurrent fetches of the same URL share one request
        self._fetch_locks: Dict[str, asyncio.Lock] = {}

    def _get_fetch_lock(self, url: str) -> asyncio.Lock:
        if url not in self._fetch_locks:
            self._fetch_locks[url] = asyncio.Lock()
        return self._fetch_locks[url]

    @staticmethod
    def normalize_url(url: str) -> str:
        """Add a missing scheme, lowercase scheme and host, drop the fragment."""
        url = url.strip()
        if "://" not in url:
            url = "https://" + url

        parsed = urlparse(url)
        path = parsed.path or "/"
        return urlunparse((
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            path,
            parsed.params,
            parsed.query,
            "",
        ))

    async def fetch(self, url: str, ignore_robots: bool = False) -> Result[PageData]:
        """Fetch a page and build its PageData.

        Args:
            url: Page URL (scheme optional)
            ignore_robots: Skip the robots.txt check

        Returns:
            Result holding PageData, or a FetchError / ParseError. Never raises.
        """
        normalized_url = self.normalize_url(url)

        async with self._get_fetch_lock(normalized_url):
            logger.info(f"Fetching {normalized_url}")
            fetched = await self.client.fetch(normalized_url, ignore_robots=ignore_robots)

        if not fetched.ok:
            return err(fetched.error)

        fetch_result = fetched.value
        try:
            parsed_page = parse_html(fetch_result.body, fetch_result.url)
        except ParseError as e:
            logger.error(f"Parse failed for {fetch_result.url}: {e}")
            return err(e)

        page_weight = analyze_page_weight(fetch_result, parsed_page, normalized_url)

        return ok(PageData(
            url=normalized_url,
            fetch_result=fetch_result,
            parsed_page=parsed_page,
            page_weight=page_weight,
        ))

    def clear_cache(self) -> None:
        self.client.clear_cache()
