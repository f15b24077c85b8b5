"""
HTTP Client - fetch a single page for static analysis.

Features:
1. URL guard (scheme, optional private-network block)
2. robots.txt check, cached per origin
3. Manual redirect following so every hop is recorded
4. Retries with exponential back-off on transport errors
5. In-memory response cache per URL
"""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse
from urllib.robotparser import RobotFileParser

import httpx

from wsg_check.config import settings
from wsg_check.logger import logger
from wsg_check.services.errors import FetchError, Result, err, ok
from wsg_check.services.url_guard import validate_url


@dataclass(frozen=True)
class RedirectEntry:
    """A single hop in a redirect chain."""
    url: str
    status_code: int
    location: str


@dataclass(frozen=True)
class FetchResult:
    """Raw HTTP response for the analysed page."""
    url: str  # final URL after redirects
    original_url: str
    status_code: int
    headers: Dict[str, str]
    body: str
    redirect_chain: List[RedirectEntry] = field(default_factory=list)
    from_cache: bool = False
    # Content-Length when present (compressed transfer size), else body byte length
    content_length: int = 0
    content_encoding: Optional[str] = None
    content_type: Optional[str] = None


class HttpClient:
    """Async HTTP client with robots.txt support, redirect tracking and caching."""

    MAX_REDIRECTS = 10
    ROBOTS_TIMEOUT = 5.0

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        follow_redirects: Optional[bool] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        respect_robots: Optional[bool] = None,
        block_private_networks: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = settings.TIMEOUT if timeout is None else timeout
        self.user_agent = user_agent or settings.USER_AGENT
        self.follow_redirects = settings.FOLLOW_REDIRECTS if follow_redirects is None else follow_redirects
        self.max_retries = settings.MAX_RETRIES if max_retries is None else max_retries
        self.retry_delay = settings.RETRY_DELAY if retry_delay is None else retry_delay
        self.respect_robots = settings.RESPECT_ROBOTS if respect_robots is None else respect_robots
        self.block_private_networks = (
            settings.BLOCK_PRIVATE_NETWORKS if block_private_networks is None else block_private_networks
        )
        self._transport = transport
        self._cache: Dict[str, FetchResult] = {}
        self._robots_cache: Dict[str, RobotFileParser] = {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "User-Agent": self.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Encoding": "gzip, deflate",
            },
            follow_redirects=False,
            transport=self._transport,
        )

    async def fetch(self, url: str, ignore_robots: bool = False) -> Result[FetchResult]:
        """Fetch a URL. Never raises; failures come back as Result.error (FetchError)."""
        cached = self._cache.get(url)
        if cached is not None:
            logger.debug(f"Serving {url} from cache")
            return ok(replace(cached, from_cache=True))

        reason = validate_url(url, self.block_private_networks)
        if reason:
            logger.warning(f"URL guard blocked {url}: {reason}")
            return err(FetchError(f"URL blocked: {reason}", url))

        async with self._client() as client:
            if self.respect_robots and not ignore_robots:
                if not await self._allowed_by_robots(client, url):
                    return err(FetchError(f"URL disallowed by robots.txt: {url}", url))

            try:
                result = await self._fetch_with_retry(client, url)
            except FetchError as e:
                logger.warning(f"Fetch failed for {url}: {e}")
                return err(e)

        self._cache[url] = result
        return ok(result)

    async def is_allowed_by_robots(self, url: str) -> bool:
        """Return True when the site's robots.txt permits fetching url."""
        async with self._client() as client:
            return await self._allowed_by_robots(client, url)

    async def _allowed_by_robots(self, client: httpx.AsyncClient, url: str) -> bool:
        parsed = urlparse(url)
        origin = f"{parsed.scheme}://{parsed.netloc}"

        rules = self._robots_cache.get(origin)
        if rules is None:
            robots_url = f"{origin}/robots.txt"
            lines: List[str] = []
            try:
                response = await client.get(robots_url, timeout=self.ROBOTS_TIMEOUT)
                if response.status_code == 200:
                    lines = response.text.splitlines()
            except httpx.HTTPError as e:
                # Unreachable robots.txt allows everything
                logger.debug(f"Could not fetch {robots_url}: {e}")

            rules = RobotFileParser(robots_url)
            rules.parse(lines)
            self._robots_cache[origin] = rules

        return rules.can_fetch(self.user_agent, url)

    async def _fetch_with_retry(self, client: httpx.AsyncClient, url: str) -> FetchResult:
        for attempt in range(self.max_retries + 1):
            try:
                return await self._fetch_following_redirects(client, url)
            except httpx.TransportError as e:
                if attempt < self.max_retries:
                    logger.warning(f"HTTP error for {url} ({e!r}), retrying (attempt {attempt + 1})")
                    await asyncio.sleep(self.retry_delay * (2 ** attempt))
                    continue
                raise FetchError(f"Failed to fetch {url}: {e!r}", url) from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise FetchError(f"Failed to fetch {url}: {e!r}", url) from e

        raise FetchError(f"HTTP fetch failed after retries: {url}", url)

    async def _fetch_following_redirects(self, client: httpx.AsyncClient, start_url: str) -> FetchResult:
        redirect_chain: List[RedirectEntry] = []
        current_url = start_url

        for _ in range(self.MAX_REDIRECTS + 1):
            response = await client.get(current_url)

            if 300 <= response.status_code < 400:
                if not self.follow_redirects:
                    return self._build_result(start_url, current_url, response, redirect_chain)

                location = response.headers.get("location")
                if not location:
                    raise FetchError(
                        f"Redirect response ({response.status_code}) missing Location header at {current_url}",
                        start_url,
                    )

                redirect_chain.append(RedirectEntry(current_url, response.status_code, location))
                current_url = urljoin(current_url, location)
                reason = validate_url(current_url, self.block_private_networks)
                if reason:
                    logger.warning(f"Redirect to blocked URL {current_url}: {reason}")
                    raise FetchError(f"URL blocked: {reason}", start_url)
                continue

            return self._build_result(start_url, current_url, response, redirect_chain)

        raise FetchError(f"Too many redirects (> {self.MAX_REDIRECTS}) for {start_url}", start_url)

    def _build_result(
        self,
        original_url: str,
        final_url: str,
        response: httpx.Response,
        redirect_chain: List[RedirectEntry],
    ) -> FetchResult:
        headers = {key.lower(): value for key, value in response.headers.items()}
        body = response.text

        header_length = headers.get("content-length", "")
        content_length = int(header_length) if header_length.isdigit() else len(response.content)

        return FetchResult(
            url=final_url,
            original_url=original_url,
            status_code=response.status_code,
            headers=headers,
            body=body,
            redirect_chain=list(redirect_chain),
            content_length=content_length,
            content_encoding=headers.get("content-encoding"),
            content_type=headers.get("content-type"),
        )

    def clear_cache(self) -> None:
        self._cache.clear()

    def clear_robots_cache(self) -> None:
        self._robots_cache.clear()
