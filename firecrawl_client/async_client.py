"""Asyncio Firecrawl client."""

import logging
from typing import Any, Dict, List, Optional, Type, Union

import httpx

from ._base import BaseClient
from ._http import aread_capped, build_url, encode_body, handle_response
from ._requests import (
    batch_scrape_request,
    crawl_request,
    extract_request,
    job_path,
    map_request,
    params_preview_request,
    require_job_id,
    scrape_request,
    search_request,
    usage_params,
)
from .exceptions import NetworkError
from .polling import async_wait_for_job
from .types import (
    ActiveCrawlsResponse,
    BatchScrapeCancelResponse,
    BatchScrapeErrorsResponse,
    BatchScrapeRequest,
    BatchScrapeResponse,
    BatchScrapeStatusResponse,
    CrawlCancelResponse,
    CrawlErrorsResponse,
    CrawlParamsPreviewRequest,
    CrawlParamsPreviewResponse,
    CrawlRequest,
    CrawlResponse,
    CrawlStatusResponse,
    CreditUsageResponse,
    ExtractCancelResponse,
    ExtractRequest,
    ExtractResponse,
    ExtractStatusResponse,
    HistoricalCreditUsageResponse,
    HistoricalTokenUsageResponse,
    MapRequest,
    MapResponse,
    QueueStatusResponse,
    ScrapeRequest,
    ScrapeResponse,
    SearchRequest,
    SearchResponse,
    TokenUsageResponse,
)


class AsyncFirecrawl(BaseClient):
    """Asyncio version of :class:`~firecrawl_client.Firecrawl`.

    Same methods and arguments, as coroutines. One pooled
    ``httpx.AsyncClient`` is shared by every call, so many requests or job
    waits can run concurrently on one instance.

    Example:
        >>> async with AsyncFirecrawl(api_key="fc-...") as app:
        ...     pages = await asyncio.gather(
        ...         app.scrape("https://example.com"),
        ...         app.scrape("https://example.org"),
        ...     )
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_response_bytes: Optional[int] = None,
        poll_interval: Optional[float] = None,
        job_timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(
            api_key,
            api_url,
            timeout=timeout,
            max_response_bytes=max_response_bytes,
            poll_interval=poll_interval,
            job_timeout=job_timeout,
            logger=logger,
        )
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.AsyncClient(timeout=self.timeout)
        self._closed = False

    async def aclose(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncFirecrawl":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        response_type: Optional[Type[Any]] = None,
        *,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and decode the response (see ``Firecrawl._request``)."""
        content = encode_body(body)
        url = build_url(self.api_url, path, params)
        if self._closed:
            raise NetworkError("Client is closed", {"url": str(url)})

        self._logger.debug("Making %s request to: %s", method, path)
        try:
            async with self._client.stream(
                method,
                url,
                content=content,
                headers=self._headers,
                timeout=self.timeout,
            ) as response:
                payload = await aread_capped(response, self.max_response_bytes)
                status_code = response.status_code
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request failed: {exc}", {"url": str(url)}) from exc
        except RuntimeError as exc:
            # httpx refuses to send on a pool that was closed mid-flight
            raise NetworkError(f"Request failed: {exc}", {"url": str(url)}) from exc

        return handle_response(status_code, payload, str(url), response_type)

    # ------------------------------------------------------------------
    # Scrape
    # ------------------------------------------------------------------

    async def scrape(self, url: Union[str, ScrapeRequest], **options: Any) -> ScrapeResponse:
        """Scrape a single URL."""
        request = scrape_request(url, options)
        self._logger.debug("Scraping URL: %s", request.url)
        return await self._request("POST", "/v2/scrape", request, ScrapeResponse)

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------

    async def start_crawl(self, url: Union[str, CrawlRequest], **options: Any) -> CrawlResponse:
        """Start a crawl job."""
        request = crawl_request(url, options)
        self._logger.debug("Starting crawl for URL: %s", request.url)
        return await self._request("POST", "/v2/crawl", request, CrawlResponse)

    async def get_crawl_status(self, job_id: str) -> CrawlStatusResponse:
        """Get the current status (and any results so far) of a crawl job."""
        self._logger.debug("Getting crawl status for job: %s", job_id)
        return await self._request("GET", job_path("/v2/crawl", job_id), response_type=CrawlStatusResponse)

    async def cancel_crawl(self, job_id: str) -> CrawlCancelResponse:
        self._logger.debug("Canceling crawl job: %s", job_id)
        return await self._request("DELETE", job_path("/v2/crawl", job_id), response_type=CrawlCancelResponse)

    async def get_crawl_errors(self, job_id: str) -> CrawlErrorsResponse:
        """List pages that failed, and URLs blocked by robots.txt, for a crawl."""
        self._logger.debug("Getting crawl errors for job: %s", job_id)
        return await self._request(
            "GET", job_path("/v2/crawl", job_id, "/errors"), response_type=CrawlErrorsResponse
        )

    async def get_active_crawls(self) -> ActiveCrawlsResponse:
        self._logger.debug("Getting active crawls")
        return await self._request("GET", "/v2/crawl/active", response_type=ActiveCrawlsResponse)

    async def crawl_params_preview(
        self,
        url: Union[str, CrawlParamsPreviewRequest],
        prompt: Optional[str] = None,
    ) -> CrawlParamsPreviewResponse:
        """Preview the crawl options the service would derive from a prompt."""
        request = params_preview_request(url, prompt)
        self._logger.debug("Getting crawl params preview for URL: %s", request.url)
        return await self._request(
            "POST", "/v2/crawl/params-preview", request, CrawlParamsPreviewResponse
        )

    async def wait_for_crawl_completion(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> CrawlStatusResponse:
        """Poll a crawl job until it completes, fails or is cancelled."""
        interval, budget = self._wait_settings(poll_interval, timeout)
        self._logger.debug("Waiting for crawl completion: %s", job_id)
        return await async_wait_for_job(
            self.get_crawl_status,
            job_id,
            poll_interval=interval,
            timeout=budget,
            kind="crawl",
            logger=self._logger,
        )

    async def crawl(
        self,
        url: Union[str, CrawlRequest],
        *,
        poll_interval: Optional[float] = None,
        wait_timeout: Optional[float] = None,
        **options: Any,
    ) -> CrawlStatusResponse:
        """Start a crawl and wait for it to finish."""
        started = await self.start_crawl(url, **options)
        job_id = require_job_id(started.id, "crawl")
        return await self.wait_for_crawl_completion(job_id, poll_interval, wait_timeout)

    # ------------------------------------------------------------------
    # Map and search
    # ------------------------------------------------------------------

    async def map(self, url: Union[str, MapRequest], **options: Any) -> MapResponse:
        """Discover the URLs of a site."""
        request = map_request(url, options)
        self._logger.debug("Mapping URLs for: %s", request.url)
        return await self._request("POST", "/v2/map", request, MapResponse)

    async def search(self, query: Union[str, SearchRequest], **options: Any) -> SearchResponse:
        """Search the web and optionally scrape the results."""
        request = search_request(query, options)
        self._logger.debug("Searching for: %s", request.query)
        return await self._request("POST", "/v2/search", request, SearchResponse)

    # ------------------------------------------------------------------
    # Extract
    # ------------------------------------------------------------------

    async def start_extract(
        self, urls: Union[List[str], ExtractRequest], **options: Any
    ) -> ExtractResponse:
        """Start an extraction job."""
        request = extract_request(urls, options)
        self._logger.debug("Starting extract for %d URLs", len(request.urls))
        return await self._request("POST", "/v2/extract", request, ExtractResponse)

    async def get_extract_status(self, job_id: str) -> ExtractStatusResponse:
        self._logger.debug("Getting extract status for job: %s", job_id)
        return await self._request(
            "GET", job_path("/v2/extract", job_id), response_type=ExtractStatusResponse
        )

    async def cancel_extract(self, job_id: str) -> ExtractCancelResponse:
        self._logger.debug("Canceling extract job: %s", job_id)
        return await self._request(
            "DELETE", job_path("/v2/extract", job_id), response_type=ExtractCancelResponse
        )

    async def wait_for_extract_completion(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> ExtractStatusResponse:
        """Poll an extract job until it reaches a terminal status."""
        interval, budget = self._wait_settings(poll_interval, timeout)
        self._logger.debug("Waiting for extract completion: %s", job_id)
        return await async_wait_for_job(
            self.get_extract_status,
            job_id,
            poll_interval=interval,
            timeout=budget,
            kind="extract",
            logger=self._logger,
        )

    async def extract(
        self,
        urls: Union[List[str], ExtractRequest],
        *,
        poll_interval: Optional[float] = None,
        wait_timeout: Optional[float] = None,
        **options: Any,
    ) -> ExtractStatusResponse:
        """Start an extraction job and wait for its result."""
        started = await self.start_extract(urls, **options)
        job_id = require_job_id(started.id, "extract")
        return await self.wait_for_extract_completion(job_id, poll_interval, wait_timeout)

    # ------------------------------------------------------------------
    # Batch scrape
    # ------------------------------------------------------------------

    async def start_batch_scrape(
        self, urls: Union[List[str], BatchScrapeRequest], **options: Any
    ) -> BatchScrapeResponse:
        """Start scraping several URLs as one job."""
        request = batch_scrape_request(urls, options)
        self._logger.debug("Starting batch scrape for %d URLs", len(request.urls))
        return await self._request("POST", "/v2/batch/scrape", request, BatchScrapeResponse)

    async def get_batch_scrape_status(self, job_id: str) -> BatchScrapeStatusResponse:
        self._logger.debug("Getting batch scrape status for job: %s", job_id)
        return await self._request(
            "GET", job_path("/v2/batch/scrape", job_id), response_type=BatchScrapeStatusResponse
        )

    async def cancel_batch_scrape(self, job_id: str) -> BatchScrapeCancelResponse:
        self._logger.debug("Canceling batch scrape job: %s", job_id)
        return await self._request(
            "DELETE", job_path("/v2/batch/scrape", job_id), response_type=BatchScrapeCancelResponse
        )

    async def get_batch_scrape_errors(self, job_id: str) -> BatchScrapeErrorsResponse:
        self._logger.debug("Getting batch scrape errors for job: %s", job_id)
        return await self._request(
            "GET",
            job_path("/v2/batch/scrape", job_id, "/errors"),
            response_type=BatchScrapeErrorsResponse,
        )

    async def wait_for_batch_scrape_completion(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> BatchScrapeStatusResponse:
        """Poll a batch scrape job until it reaches a terminal status."""
        interval, budget = self._wait_settings(poll_interval, timeout)
        self._logger.debug("Waiting for batch scrape completion: %s", job_id)
        return await async_wait_for_job(
            self.get_batch_scrape_status,
            job_id,
            poll_interval=interval,
            timeout=budget,
            kind="batch scrape",
            logger=self._logger,
        )

    async def batch_scrape(
        self,
        urls: Union[List[str], BatchScrapeRequest],
        *,
        poll_interval: Optional[float] = None,
        wait_timeout: Optional[float] = None,
        **options: Any,
    ) -> BatchScrapeStatusResponse:
        """Start a batch scrape and wait for it to finish."""
        started = await self.start_batch_scrape(urls, **options)
        job_id = require_job_id(started.id, "batch scrape")
        return await self.wait_for_batch_scrape_completion(job_id, poll_interval, wait_timeout)

    # ------------------------------------------------------------------
    # Team
    # ------------------------------------------------------------------

    async def get_credit_usage(self) -> CreditUsageResponse:
        """Remaining and plan credits for the current billing period."""
        self._logger.debug("Getting credit usage information")
        return await self._request("GET", "/v2/team/credit-usage", response_type=CreditUsageResponse)

    async def get_historical_credit_usage(self, by_api_key: bool = False) -> HistoricalCreditUsageResponse:
        """Credit usage per billing period."""
        self._logger.debug("Getting historical credit usage (by_api_key: %s)", by_api_key)
        return await self._request(
            "GET",
            "/v2/team/credit-usage/historical",
            response_type=HistoricalCreditUsageResponse,
            params=usage_params(by_api_key),
        )

    async def get_token_usage(self) -> TokenUsageResponse:
        self._logger.debug("Getting token usage information")
        return await self._request("GET", "/v2/team/token-usage", response_type=TokenUsageResponse)

    async def get_historical_token_usage(self, by_api_key: bool = False) -> HistoricalTokenUsageResponse:
        self._logger.debug("Getting historical token usage (by_api_key: %s)", by_api_key)
        return await self._request(
            "GET",
            "/v2/team/token-usage/historical",
            response_type=HistoricalTokenUsageResponse,
            params=usage_params(by_api_key),
        )

    async def get_queue_status(self) -> QueueStatusResponse:
        self._logger.debug("Getting queue status")
        return await self._request("GET", "/v2/team/queue-status", response_type=QueueStatusResponse)

