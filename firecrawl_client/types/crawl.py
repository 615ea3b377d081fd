"""Crawl job schemas."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from .base import FirecrawlModel, JSONValue
from .common import JobStatus, SitemapMode
from .scrape import ActionResults, ChangeTrackingInfo, ScrapeMetadata, ScrapeOptions


class CrawlWebhookEvent(str, Enum):
    COMPLETED = "completed"
    PAGE = "page"
    FAILED = "failed"
    STARTED = "started"


class WebhookConfig(FirecrawlModel):
    """Where the service should deliver crawl events."""

    url: str
    headers: Optional[Dict[str, str]] = None
    metadata: Optional[Dict[str, str]] = None
    events: Optional[List[CrawlWebhookEvent]] = None


class CrawlScrapeOptions(ScrapeOptions):
    """Scrape options applied to every crawled page."""


class CrawlRequest(FirecrawlModel):
    """Request body for ``POST /v2/crawl``."""

    url: str
    prompt: Optional[str] = None
    """Natural-language description used to derive crawl options."""

    exclude_paths: Optional[List[str]] = None
    include_paths: Optional[List[str]] = None
    max_discovery_depth: Optional[int] = None
    sitemap: Optional[SitemapMode] = None
    ignore_query_parameters: Optional[bool] = None
    limit: Optional[int] = None
    crawl_entire_domain: Optional[bool] = None
    allow_external_links: Optional[bool] = None
    allow_subdomains: Optional[bool] = None
    delay: Optional[float] = None
    max_concurrency: Optional[int] = None
    webhook: Optional[WebhookConfig] = None
    scrape_options: Optional[CrawlScrapeOptions] = None
    zero_data_retention: Optional[bool] = None


class CrawlResponse(FirecrawlModel):
    success: bool
    id: Optional[str] = None
    url: Optional[str] = None


class CrawlResult(FirecrawlModel):
    markdown: Optional[str] = None
    summary: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    screenshot: Optional[str] = None
    links: Optional[List[str]] = None
    actions: Optional[ActionResults] = None
    change_tracking: Optional[ChangeTrackingInfo] = None
    branding: Optional[JSONValue] = None
    metadata: Optional[ScrapeMetadata] = None
    warning: Optional[str] = None


class CrawlStatusResponse(FirecrawlModel):
    """Snapshot of a crawl job returned by ``GET /v2/crawl/{id}``."""

    status: JobStatus
    total: Optional[int] = None
    completed: Optional[int] = None
    credits_used: Optional[int] = None
    expires_at: Optional[str] = None
    next: Optional[str] = None
    """URL of the next page of results when the data is paginated."""

    data: Optional[List[CrawlResult]] = None


class CrawlCancelResponse(FirecrawlModel):
    status: str


class CrawlParamsPreviewRequest(FirecrawlModel):
    url: str
    prompt: str


class CrawlParamsPreviewData(FirecrawlModel):
    url: str
    include_paths: Optional[List[str]] = None
    exclude_paths: Optional[List[str]] = None
    max_depth: Optional[int] = None
    max_discovery_depth: Optional[int] = None
    crawl_entire_domain: Optional[bool] = None
    allow_external_links: Optional[bool] = None
    allow_subdomains: Optional[bool] = None
    sitemap: Optional[str] = None
    ignore_query_parameters: Optional[bool] = None
    deduplicate_similar_urls: Optional[bool] = Field(default=None, alias="deduplicateSimilarURLs")
    delay: Optional[float] = None
    limit: Optional[int] = None


class CrawlParamsPreviewResponse(FirecrawlModel):
    success: bool
    data: Optional[CrawlParamsPreviewData] = None


class CrawlError(FirecrawlModel):
    id: Optional[str] = None
    timestamp: Optional[str] = None
    url: str
    error: str


class CrawlErrorsResponse(FirecrawlModel):
    errors: Optional[List[CrawlError]] = None
    robots_blocked: Optional[List[str]] = None
    """URLs that robots.txt prevented the crawler from visiting."""


class ActiveCrawlOptions(FirecrawlModel):
    scrape_options: Optional[CrawlScrapeOptions] = None


class ActiveCrawl(FirecrawlModel):
    id: str
    team_id: str
    url: str
    options: ActiveCrawlOptions


class ActiveCrawlsResponse(FirecrawlModel):
    success: bool
    crawls: Optional[List[ActiveCrawl]] = None
