"""
Firecrawl Python client

Scrape, crawl, map, search and extract through the Firecrawl v2 API, wait for
asynchronous jobs, and verify webhook deliveries.
"""

from ._http import classify_error
from .async_client import AsyncFirecrawl
from .client import Firecrawl
from .config import ClientSettings, load_settings
from .exceptions import (
    APIStatusError,
    BadRequestError,
    ConfigError,
    DecodingError,
    EncodingError,
    FirecrawlError,
    InvalidResponseError,
    InvalidSignatureError,
    InvalidSignatureFormatError,
    InvalidURLError,
    JobTimeoutError,
    MissingSignatureHeaderError,
    NetworkError,
    NotFoundError,
    PaymentRequiredError,
    RateLimitError,
    ResponseTooLargeError,
    ServerError,
    UnauthorizedError,
    UnknownError,
    WebhookSignatureError,
)
from .polling import async_wait_for_job, wait_for_job
from .types import (
    BatchScrapeStatusResponse,
    CrawlStatusResponse,
    ExtractionSchema,
    ExtractJobStatus,
    ExtractStatusResponse,
    Format,
    JobStatus,
    MapResponse,
    ScrapeRequest,
    ScrapeResponse,
    SearchResponse,
    WebhookEventType,
    WebhookPayload,
)
from .webhook import (
    SIGNATURE_HEADER,
    compute_webhook_signature,
    construct_webhook_event,
    verify_webhook_request,
    verify_webhook_signature,
    verify_webhook_signature_text,
)
from ._version import __version__

__all__ = [
    "Firecrawl",
    "AsyncFirecrawl",
    "ClientSettings",
    "load_settings",
    # jobs
    "wait_for_job",
    "async_wait_for_job",
    # webhooks
    "SIGNATURE_HEADER",
    "compute_webhook_signature",
    "construct_webhook_event",
    "verify_webhook_request",
    "verify_webhook_signature",
    "verify_webhook_signature_text",
    # errors
    "classify_error",
    "FirecrawlError",
    "APIStatusError",
    "BadRequestError",
    "ConfigError",
    "DecodingError",
    "EncodingError",
    "InvalidResponseError",
    "InvalidSignatureError",
    "InvalidSignatureFormatError",
    "InvalidURLError",
    "JobTimeoutError",
    "MissingSignatureHeaderError",
    "NetworkError",
    "NotFoundError",
    "PaymentRequiredError",
    "RateLimitError",
    "ResponseTooLargeError",
    "ServerError",
    "UnauthorizedError",
    "UnknownError",
    "WebhookSignatureError",
    # common types
    "BatchScrapeStatusResponse",
    "CrawlStatusResponse",
    "ExtractionSchema",
    "ExtractJobStatus",
    "ExtractStatusResponse",
    "Format",
    "JobStatus",
    "MapResponse",
    "ScrapeRequest",
    "ScrapeResponse",
    "SearchResponse",
    "WebhookEventType",
    "WebhookPayload",
    "__version__",
]
