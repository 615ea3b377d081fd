"""Blocking Firecrawl client."""

import logging
from typing import Any, Dict, List, Optional, Type, Union

import httpx

from ._base import BaseClient
from ._http import build_url, encode_body, handle_response, read_capped
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
from .polling import wait_for_job
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


class Firecrawl(BaseClient):
    """Firecrawl v2 API client.

    The client keeps one pooled ``httpx.Client`` and is safe to share between
    threads. Use it as a context manager, or call :meth:`close`, to release
    the pool.

    Example:
        >>> with Firecrawl(api_key="fc-...") as app:
        ...     page = app.scrape("https://example.com")
        ...     print(page.data.markdown)
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
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the client.

        Unset arguments fall back to ``FIRECRAWL_*`` environment variables,
        then to the defaults.

        Args:
            api_key: Firecrawl API key (``fc-...``)
            api_url: Base URL of the API (default: https://api.firecrawl.dev)
            timeout: Per-request timeout in seconds (default: 30)
            max_response_bytes: Cap on a response body (default: 10 MiB)
            poll_interval: Seconds between job status checks (default: 2)
            job_timeout: Seconds to wait for a job to finish (default: 300)
            http_client: Existing ``httpx.Client`` to send requests with; it is
                never closed by this client
            logger: Logger for request and polling messages

        Raises:
            ConfigError: No API key was given or found in the environment
        """
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
        self._client = http_client if http_client is not None else httpx.Client(timeout=self.timeout)
        self._closed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "Firecrawl":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Executor
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        response_type: Optional[Type[Any]] = None,
        *,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send one request and decode the response.

        Args:
            method: HTTP method
            path: API path, e.g. ``/v2/scrape``
            body: Request model or dict, sent as JSON
            response_type: Model to decode a 2xx body into; ``None`` returns
                the decoded dict
            params: Query parameters

        Returns:
            The decoded response

        Raises:
            EncodingError: The body cannot be encoded (nothing is sent)
            InvalidURLError: The base URL and path do not form a valid URL
            NetworkError: Transport failure, oversized body, or closed client
            APIStatusError: A non-2xx status (see ``classify_error``)
            DecodingError: A 2xx body that does not match ``response_type``
        """
        content = encode_body(body)
        url = build_url(self.api_url, path, params)
        if self._closed:
            raise NetworkError("Client is closed", {"url": str(url)})

        self._logger.debug("Making %s request to: %s", method, path)
        try:
            with self._client.stream(
                method,
                url,
                content=content,
                headers=self._headers,
                timeout=self.timeout,
            ) as response:
                payload = read_capped(response, self.max_response_bytes)
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

    def scrape(self, url: Union[str, ScrapeRequest], **options: Any) -> ScrapeResponse:
        """
        Scrape a single URL.

        Args:
            url: URL to scrape, or a complete ``ScrapeRequest``
            **options: ``ScrapeRequest`` fields, e.g. ``formats``,
                ``only_main_content``, ``actions`` (default formats: markdown)

        Returns:
            ScrapeResponse with the page content and metadata

        Example:
            >>> app = Firecrawl(api_key="fc-...")
            >>> result = app.scrape("https://example.com", formats=["markdown", "links"])
            >>> print(result.data.metadata.title)
        """
        request = scrape_request(url, options)
        self._logger.debug("Scraping URL: %s", request.url)
        return self._request("POST", "/v2/scrape", request, ScrapeResponse)

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------

    def start_crawl(self, url: Union[str, CrawlRequest], **options: Any) -> CrawlResponse:
        """
        Start a crawl job.

        Args:
            url: Starting URL, or a complete ``CrawlRequest``
            **options: ``CrawlRequest`` fields, e.g. ``limit``,
                ``include_paths``, ``scrape_options``; ``formats`` is accepted
                as a shortcut for ``scrape_options.formats`` (default: markdown)

        Returns:
            CrawlResponse carrying the job ID
        """
        request = crawl_request(url, options)
        self._logger.debug("Starting crawl for URL: %s", request.url)
        return self._request("POST", "/v2/crawl", request, CrawlResponse)

    def get_crawl_status(self, job_id: str) -> CrawlStatusResponse:
        """Get the current status (and any results so far) of a crawl job."""
        self._logger.debug("Getting crawl status for job: %s", job_id)
        return self._request("GET", job_path("/v2/crawl", job_id), response_type=CrawlStatusResponse)

    def cancel_crawl(self, job_id: str) -> CrawlCancelResponse:
        self._logger.debug("Canceling crawl job: %s", job_id)
        return self._request("DELETE", job_path("/v2/crawl", job_id), response_type=CrawlCancelResponse)

    def get_crawl_errors(self, job_id: str) -> CrawlErrorsResponse:
        """List pages that failed, and URLs blocked by robots.txt, for a crawl."""
        self._logger.debug("Getting crawl errors for job: %s", job_id)
        return self._request(
            "GET", job_path("/v2/crawl", job_id, "/errors"), response_type=CrawlErrorsResponse
        )

    def get_active_crawls(self) -> ActiveCrawlsResponse:
        self._logger.debug("Getting active crawls")
        return self._request("GET", "/v2/crawl/active", response_type=ActiveCrawlsResponse)

    def crawl_params_preview(
        self,
        url: Union[str, CrawlParamsPreviewRequest],
        prompt: Optional[str] = None,
    ) -> CrawlParamsPreviewResponse:
        """
        Preview the crawl options the service would derive from a prompt.

        Args:
            url: Starting URL, or a complete ``CrawlParamsPreviewRequest``
            prompt: Natural-language description of what to crawl

        Returns:
            CrawlParamsPreviewResponse with the suggested options
        """
        request = params_preview_request(url, prompt)
        self._logger.debug("Getting crawl params preview for URL: %s", request.url)
        return self._request(
            "POST", "/v2/crawl/params-preview", request, CrawlParamsPreviewResponse
        )

    def wait_for_crawl_completion(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> CrawlStatusResponse:
        """
        Poll a crawl job until it completes, fails or is cancelled.

        Args:
            job_id: Crawl job ID
            poll_interval: Seconds between checks (default: client setting)
            timeout: Seconds to wait overall (default: client setting)

        Returns:
            The final CrawlStatusResponse

        Raises:
            JobTimeoutError: The job was still running after ``timeout``
        """
        interval, budget = self._wait_settings(poll_interval, timeout)
        self._logger.debug("Waiting for crawl completion: %s", job_id)
        return wait_for_job(
            self.get_crawl_status,
            job_id,
            poll_interval=interval,
            timeout=budget,
            kind="crawl",
            logger=self._logger,
        )

    def crawl(
        self,
        url: Union[str, CrawlRequest],
        *,
        poll_interval: Optional[float] = None,
        wait_timeout: Optional[float] = None,
        **options: Any,
    ) -> CrawlStatusResponse:
        """
        Start a crawl and wait for it to finish.

        Args:
            url: Starting URL, or a complete ``CrawlRequest``
            poll_interval: Seconds between status checks
            wait_timeout: Seconds to wait for the job overall
            **options: ``CrawlRequest`` fields, as for :meth:`start_crawl`

        Returns:
            The final CrawlStatusResponse

        Example:
            >>> status = app.crawl("https://example.com", limit=10)
            >>> for page in status.data or []:
            ...     print(page.metadata.source_url)
        """
        started = self.start_crawl(url, **options)
        job_id = require_job_id(started.id, "crawl")
        return self.wait_for_crawl_completion(job_id, poll_interval, wait_timeout)

    # ------------------------------------------------------------------
    # Map and search
    # ------------------------------------------------------------------

    def map(self, url: Union[str, MapRequest], **options: Any) -> MapResponse:
        """
        Discover the URLs of a site.

        Args:
            url: Site URL, or a complete ``MapRequest``
            **options: ``MapRequest`` fields, e.g. ``search``, ``limit``,
                ``include_subdomains``

        Returns:
            MapResponse with the discovered links
        """
        request = map_request(url, options)
        self._logger.debug("Mapping URLs for: %s", request.url)
        return self._request("POST", "/v2/map", request, MapResponse)

    def search(self, query: Union[str, SearchRequest], **options: Any) -> SearchResponse:
        """
        Search the web and optionally scrape the results.

        Args:
            query: Search query, or a complete ``SearchRequest``
            **options: ``SearchRequest`` fields (defaults: ``limit=5``,
                web results only, markdown format)

        Returns:
            SearchResponse with web, image and news results
        """
        request = search_request(query, options)
        self._logger.debug("Searching for: %s", request.query)
        return self._request("POST", "/v2/search", request, SearchResponse)

    # ------------------------------------------------------------------
    # Extract
    # ------------------------------------------------------------------

    def start_extract(
        self, urls: Union[List[str], ExtractRequest], **options: Any
    ) -> ExtractResponse:
        """
        Start an extraction job.

        Args:
            urls: Pages to extract from (wildcards such as
                ``https://example.com/*`` are allowed), or an ``ExtractRequest``
            **options: ``ExtractRequest`` fields, typically ``prompt`` and/or
                ``schema``

        Returns:
            ExtractResponse carrying the job ID
        """
        request = extract_request(urls, options)
        self._logger.debug("Starting extract for %d URLs", len(request.urls))
        return self._request("POST", "/v2/extract", request, ExtractResponse)

    def get_extract_status(self, job_id: str) -> ExtractStatusResponse:
        self._logger.debug("Getting extract status for job: %s", job_id)
        return self._request(
            "GET", job_path("/v2/extract", job_id), response_type=ExtractStatusResponse
        )

    def cancel_extract(self, job_id: str) -> ExtractCancelResponse:
        self._logger.debug("Canceling extract job: %s", job_id)
        return self._request(
            "DELETE", job_path("/v2/extract", job_id), response_type=ExtractCancelResponse
        )

    def wait_for_extract_completion(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> ExtractStatusResponse:
        """Poll an extract job until it reaches a terminal status."""
        interval, budget = self._wait_settings(poll_interval, timeout)
        self._logger.debug("Waiting for extract completion: %s", job_id)
        return wait_for_job(
            self.get_extract_status,
            job_id,
            poll_interval=interval,
            timeout=budget,
            kind="extract",
            logger=self._logger,
        )

    def extract(
        self,
        urls: Union[List[str], ExtractRequest],
        *,
        poll_interval: Optional[float] = None,
        wait_timeout: Optional[float] = None,
        **options: Any,
    ) -> ExtractStatusResponse:
        """
        Start an extraction job and wait for its result.

        Example:
            >>> result = app.extract(
            ...     ["https://example.com"],
            ...     prompt="Extract the company name and its founders",
            ... )
            >>> print(result.data.extract)
        """
        started = self.start_extract(urls, **options)
        job_id = require_job_id(started.id, "extract")
        return self.wait_for_extract_completion(job_id, poll_interval, wait_timeout)

    # ------------------------------------------------------------------
    # Batch scrape
    # ------------------------------------------------------------------

    def start_batch_scrape(
        self, urls: Union[List[str], BatchScrapeRequest], **options: Any
    ) -> BatchScrapeResponse:
        """
        Start scraping several URLs as one job.

        Args:
            urls: URLs to scrape, or a complete ``BatchScrapeRequest``
            **options: ``BatchScrapeRequest`` fields, e.g. ``formats``
                (default: markdown), ``max_concurrency``, ``webhook``

        Returns:
            BatchScrapeResponse carrying the job ID and any rejected URLs
        """
        request = batch_scrape_request(urls, options)
        self._logger.debug("Starting batch scrape for %d URLs", len(request.urls))
        return self._request("POST", "/v2/batch/scrape", request, BatchScrapeResponse)

    def get_batch_scrape_status(self, job_id: str) -> BatchScrapeStatusResponse:
        self._logger.debug("Getting batch scrape status for job: %s", job_id)
        return self._request(
            "GET", job_path("/v2/batch/scrape", job_id), response_type=BatchScrapeStatusResponse
        )

    def cancel_batch_scrape(self, job_id: str) -> BatchScrapeCancelResponse:
        self._logger.debug("Canceling batch scrape job: %s", job_id)
        return self._request(
            "DELETE", job_path("/v2/batch/scrape", job_id), response_type=BatchScrapeCancelResponse
        )

    def get_batch_scrape_errors(self, job_id: str) -> BatchScrapeErrorsResponse:
        self._logger.debug("Getting batch scrape errors for job: %s", job_id)
        return self._request(
            "GET",
            job_path("/v2/batch/scrape", job_id, "/errors"),
            response_type=BatchScrapeErrorsResponse,
        )

    def wait_for_batch_scrape_completion(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> BatchScrapeStatusResponse:
        """Poll a batch scrape job until it reaches a terminal status."""
        interval, budget = self._wait_settings(poll_interval, timeout)
        self._logger.debug("Waiting for batch scrape completion: %s", job_id)
        return wait_for_job(
            self.get_batch_scrape_status,
            job_id,
            poll_interval=interval,
            timeout=budget,
            kind="batch scrape",
            logger=self._logger,
        )

    def batch_scrape(
        self,
        urls: Union[List[str], BatchScrapeRequest],
        *,
        poll_interval: Optional[float] = None,
        wait_timeout: Optional[float] = None,
        **options: Any,
    ) -> BatchScrapeStatusResponse:
        """Start a batch scrape and wait for it to finish."""
        started = self.start_batch_scrape(urls, **options)
        job_id = require_job_id(started.id, "batch scrape")
        return self.wait_for_batch_scrape_completion(job_id, poll_interval, wait_timeout)

    # ------------------------------------------------------------------
    # Team
    # ------------------------------------------------------------------

    def get_credit_usage(self) -> CreditUsageResponse:
        """Remaining and plan credits for the current billing period."""
        self._logger.debug("Getting credit usage information")
        return self._request("GET", "/v2/team/credit-usage", response_type=CreditUsageResponse)

    def get_historical_credit_usage(self, by_api_key: bool = False) -> HistoricalCreditUsageResponse:
        """
        Credit usage per billing period.

        Args:
            by_api_key: Break usage down by API key
        """
        self._logger.debug("Getting historical credit usage (by_api_key: %s)", by_api_key)
        return self._request(
            "GET",
            "/v2/team/credit-usage/historical",
            response_type=HistoricalCreditUsageResponse,
            params=usage_params(by_api_key),
        )

    def get_token_usage(self) -> TokenUsageResponse:
        self._logger.debug("Getting token usage information")
        return self._request("GET", "/v2/team/token-usage", response_type=TokenUsageResponse)

    def get_historical_token_usage(self, by_api_key: bool = False) -> HistoricalTokenUsageResponse:
        self._logger.debug("Getting historical token usage (by_api_key: %s)", by_api_key)
        return self._request(
            "GET",
            "/v2/team/token-usage/historical",
            response_type=HistoricalTokenUsageResponse,
            params=usage_params(by_api_key),
        )

    def get_queue_status(self) -> QueueStatusResponse:
        self._logger.debug("Getting queue status")
        return self._request("GET", "/v2/team/queue-status", response_type=QueueStatusResponse)

