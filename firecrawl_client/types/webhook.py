"""Payloads delivered to webhook endpoints."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from .base import FirecrawlModel, JSONValue


class WebhookEventType(str, Enum):
    CRAWL_STARTED = "crawl.started"
    CRAWL_PAGE = "crawl.page"
    CRAWL_COMPLETED = "crawl.completed"
    CRAWL_FAILED = "crawl.failed"

    BATCH_SCRAPE_STARTED = "batch.scrape.started"
    BATCH_SCRAPE_PAGE = "batch.scrape.page"
    BATCH_SCRAPE_COMPLETED = "batch.scrape.completed"
    BATCH_SCRAPE_FAILED = "batch.scrape.failed"

    EXTRACT_STARTED = "extract.started"
    EXTRACT_COMPLETED = "extract.completed"
    EXTRACT_FAILED = "extract.failed"


class WebhookPageMetadata(FirecrawlModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status_code: Optional[int] = None
    source_url: Optional[str] = Field(default=None, alias="sourceURL")
    error: Optional[str] = None


class WebhookEventData(FirecrawlModel):
    """Event body shared by every job type; ``job_id`` may be absent."""

    job_id: Optional[str] = None
    url: Optional[str] = None
    status: Optional[str] = None
    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    links: Optional[List[str]] = None
    screenshot: Optional[str] = None
    metadata: Optional[WebhookPageMetadata] = None
    total: Optional[int] = None
    completed: Optional[int] = None
    credits_used: Optional[int] = None
    error: Optional[str] = None


class WebhookPayload(FirecrawlModel):
    """Generic envelope: ``{type, data, metadata?}``.

    ``type`` is kept as a plain string so events added by the service later
    still decode; compare it with ``WebhookEventType`` values.
    """

    type: str
    data: WebhookEventData
    metadata: Optional[Dict[str, JSONValue]] = None

    @property
    def event_type(self) -> Optional[WebhookEventType]:
        """The event as a ``WebhookEventType``, or ``None`` if unknown."""
        try:
            return WebhookEventType(self.type)
        except ValueError:
            return None


class CrawlWebhookData(WebhookEventData):
    job_id: str


class CrawlWebhookPayload(FirecrawlModel):
    type: WebhookEventType
    data: CrawlWebhookData
    metadata: Optional[Dict[str, JSONValue]] = None


class BatchScrapeWebhookData(WebhookEventData):
    job_id: str


class BatchScrapeWebhookPayload(FirecrawlModel):
    type: WebhookEventType
    data: BatchScrapeWebhookData
    metadata: Optional[Dict[str, JSONValue]] = None
