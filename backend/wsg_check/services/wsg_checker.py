"""
WSG Checker - main orchestrator for a sustainability check.

Coordinates page fetching, check execution, scoring and the carbon estimate.
"""
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Iterable, Optional
from urllib.parse import urlparse

from wsg_check.logger import logger
from wsg_check.schemas.check_result import RunResult
from wsg_check.services.carbon_estimator import CO2_MODEL, check_green_hosting, estimate_co2
from wsg_check.services.check_runner import CheckFn, CheckRunner
from wsg_check.services.errors import Result, err, ok
from wsg_check.services.page_fetcher import PageData, PageFetcher
from wsg_check.services.scoring.engine import score_results

Fetcher = Callable[[str], Awaitable[Result[PageData]]]
GreenHostingLookup = Callable[[str], Awaitable[bool]]


class WsgChecker:
    """Runs check(url): fetch -> checks -> score -> carbon -> RunResult."""

    def __init__(
        self,
        checks: Iterable[CheckFn] = (),
        fetcher: Optional[Fetcher] = None,
        green_hosting: Optional[GreenHostingLookup] = None,
        runner: Optional[CheckRunner] = None,
    ):
        self.fetcher = fetcher or PageFetcher().fetch
        self.green_hosting = green_hosting or check_green_hosting
        self.runner = runner or CheckRunner()
        self.runner.register_all(checks)

    async def check(self, url: str) -> Result[RunResult]:
        """
        Check a URL against the registered guidelines.

        Args:
            url: The page to check

        Returns:
            Result holding the RunResult, or the FetchError / ParseError that
            stopped the run before any check was invoked.
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        started = time.monotonic()

        logger.info(f"Starting WSG check for {url}")
        page_result = await self.fetcher(url)
        if not page_result.ok:
            logger.error(f"Failed to fetch {url}: {page_result.error}")
            return err(page_result.error)

        page = page_result.value
        logger.debug(f"Fetched {page.fetch_result.url} (status {page.fetch_result.status_code})")

        results = await self.runner.run(page)
        scored = score_results(results)

        domain = urlparse(page.fetch_result.url or page.url).hostname or ""
        is_green_hosted = await self.green_hosting(domain)
        co2_per_page_view = estimate_co2(page.page_weight.html_size, is_green_hosted)

        duration = int((time.monotonic() - started) * 1000)
        logger.info(f"WSG check complete for {url}: score {scored.overall_score} in {duration}ms")

        return ok(RunResult(
            url=url,
            timestamp=timestamp,
            duration=duration,
            overall_score=scored.overall_score,
            category_scores=scored.category_scores,
            results=results,
            co2_per_page_view=co2_per_page_view,
            co2_model=CO2_MODEL,
            is_green_hosted=is_green_hosted,
            page_weight=page.page_weight.html_size,
            resource_count=page.page_weight.resource_count,
            third_party_count=page.page_weight.third_party_count,
        ))
