"""Scrape and batch scrape schemas."""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import Field, field_serializer, field_validator

from .base import FirecrawlModel, JSONValue
from .common import Format, JobStatus, LocationSettings, ProxyType, join_formats, split_formats


# ---------------------------------------------------------------------------
# Parsers and page actions
# ---------------------------------------------------------------------------


class PdfParser(FirecrawlModel):
    """PDF parser with options; the bare string ``"pdf"`` selects defaults."""

    type: Literal["pdf"] = "pdf"
    max_pages: int


Parser = Union[Literal["pdf"], PdfParser]


class Viewport(FirecrawlModel):
    width: int
    height: int


class ScrollDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class PDFFormat(str, Enum):
    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    A6 = "A6"
    LETTER = "Letter"
    LEGAL = "Legal"
    TABLOID = "Tabloid"
    LEDGER = "Ledger"


class WaitAction(FirecrawlModel):
    type: Literal["wait"] = "wait"
    milliseconds: int
    selector: Optional[str] = None


class ScreenshotAction(FirecrawlModel):
    type: Literal["screenshot"] = "screenshot"
    full_page: Optional[bool] = None
    quality: Optional[int] = None
    viewport: Optional[Viewport] = None


class ClickAction(FirecrawlModel):
    type: Literal["click"] = "click"
    selector: str
    all: Optional[bool] = None


class WriteAction(FirecrawlModel):
    type: Literal["write"] = "write"
    text: str


class PressAction(FirecrawlModel):
    type: Literal["press"] = "press"
    key: str


class ScrollAction(FirecrawlModel):
    type: Literal["scroll"] = "scroll"
    direction: Optional[ScrollDirection] = None
    selector: Optional[str] = None


class ScrapeStepAction(FirecrawlModel):
    """Capture the page content at this point of the action sequence."""

    type: Literal["scrape"] = "scrape"


class ExecuteJavascriptAction(FirecrawlModel):
    type: Literal["executeJavascript"] = "executeJavascript"
    script: str


class PdfAction(FirecrawlModel):
    type: Literal["pdf"] = "pdf"
    format: Optional[PDFFormat] = None
    landscape: Optional[bool] = None
    scale: Optional[float] = None


ScrapeAction = Annotated[
    Union[
        WaitAction,
        ScreenshotAction,
        ClickAction,
        WriteAction,
        PressAction,
        ScrollAction,
        ScrapeStepAction,
        ExecuteJavascriptAction,
        PdfAction,
    ],
    Field(discriminator="type"),
]
"""A browser action run before the page is scraped, tagged by ``type``."""


# ---------------------------------------------------------------------------
# Scrape options
# ---------------------------------------------------------------------------


class ScrapeOptions(FirecrawlModel):
    """Per-page scrape options shared by scrape, batch, crawl, search and extract."""

    formats: Optional[List[Format]] = None
    only_main_content: Optional[bool] = None
    include_tags: Optional[List[str]] = None
    exclude_tags: Optional[List[str]] = None
    max_age: Optional[int] = None
    """Serve a cached copy if it is younger than this many milliseconds."""

    headers: Optional[Dict[str, str]] = None
    wait_for: Optional[int] = None
    mobile: Optional[bool] = None
    skip_tls_verification: Optional[bool] = None
    timeout: Optional[int] = None
    parsers: Optional[List[Parser]] = None
    actions: Optional[List[ScrapeAction]] = None
    location: Optional[LocationSettings] = None
    remove_base64_images: Optional[bool] = None
    block_ads: Optional[bool] = None
    proxy: Optional[ProxyType] = None
    store_in_cache: Optional[bool] = None


class CommaFormatsMixin(FirecrawlModel):
    """Sends ``formats`` as one comma-joined string instead of a JSON list."""

    @field_validator("formats", mode="before", check_fields=False)
    @classmethod
    def _split_formats(cls, value):
        return split_formats(value)

    @field_serializer("formats", check_fields=False)
    def _join_formats(self, formats: Optional[List[Format]]) -> Optional[str]:
        return join_formats(formats)


class ScrapeRequest(CommaFormatsMixin, ScrapeOptions):
    """Request body for ``POST /v2/scrape``."""

    url: str
    zero_data_retention: Optional[bool] = None


# ---------------------------------------------------------------------------
# Scrape response
# ---------------------------------------------------------------------------


class ScrapeResult(FirecrawlModel):
    url: str
    html: str


class JavaScriptReturn(FirecrawlModel):
    type: str
    value: JSONValue


class ActionResults(FirecrawlModel):
    """Outputs collected while running page actions."""

    screenshots: Optional[List[str]] = None
    scrapes: Optional[List[ScrapeResult]] = None
    javascript_returns: Optional[List[JavaScriptReturn]] = None
    pdfs: Optional[List[str]] = None


MetadataValue = Union[str, List[str]]
"""Some metadata tags may appear more than once on a page."""


class ScrapeMetadata(FirecrawlModel):
    title: Optional[MetadataValue] = None
    description: Optional[MetadataValue] = None
    language: Optional[MetadataValue] = None
    source_url: Optional[str] = Field(default=None, alias="sourceURL")
    keywords: Optional[MetadataValue] = None
    og_locale_alternate: Optional[List[str]] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


class ChangeStatus(str, Enum):
    NEW = "new"
    SAME = "same"
    CHANGED = "changed"
    REMOVED = "removed"


class VisibilityStatus(str, Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class ChangeTrackingInfo(FirecrawlModel):
    previous_scrape_at: Optional[str] = None
    change_status: ChangeStatus
    visibility: VisibilityStatus
    diff: Optional[str] = None
    json_data: Optional[JSONValue] = Field(default=None, alias="json")


class ScrapeData(FirecrawlModel):
    markdown: Optional[str] = None
    summary: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    screenshot: Optional[str] = None
    links: Optional[List[str]] = None
    actions: Optional[ActionResults] = None
    metadata: Optional[ScrapeMetadata] = None
    warning: Optional[str] = None
    change_tracking: Optional[ChangeTrackingInfo] = None
    branding: Optional[JSONValue] = None


class ScrapeResponse(FirecrawlModel):
    success: bool
    data: Optional[ScrapeData] = None


# ---------------------------------------------------------------------------
# Batch scrape
# ---------------------------------------------------------------------------


class WebhookEvent(str, Enum):
    COMPLETED = "completed"
    PAGE = "page"
    FAILED = "failed"
    STARTED = "started"


class BatchWebhook(FirecrawlModel):
    """Where the service should deliver batch scrape events."""

    url: str
    headers: Optional[Dict[str, str]] = None
    metadata: Optional[Dict[str, JSONValue]] = None
    events: Optional[List[WebhookEvent]] = None


class BatchScrapeRequest(CommaFormatsMixin, ScrapeOptions):
    """Request body for ``POST /v2/batch/scrape``."""

    urls: List[str]
    webhook: Optional[BatchWebhook] = None
    max_concurrency: Optional[int] = None
    """Passed through to the service; not enforced locally."""

    ignore_invalid_urls: Optional[bool] = Field(default=None, alias="ignoreInvalidURLs")
    zero_data_retention: Optional[bool] = None


class BatchScrapeResponse(FirecrawlModel):
    success: bool
    id: Optional[str] = None
    url: Optional[str] = None
    invalid_urls: Optional[List[str]] = Field(default=None, alias="invalidURLs")


class BatchScrapeResult(FirecrawlModel):
    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    links: Optional[List[str]] = None
    screenshot: Optional[str] = None
    metadata: Optional[ScrapeMetadata] = None


class BatchScrapeStatusResponse(FirecrawlModel):
    success: bool = True
    status: JobStatus
    total: Optional[int] = None
    completed: Optional[int] = None
    credits_used: Optional[int] = None
    expires_at: Optional[str] = None
    next: Optional[str] = None
    data: Optional[List[BatchScrapeResult]] = None


class BatchScrapeCancelResponse(FirecrawlModel):
    success: bool
    message: Optional[str] = None


class BatchScrapeError(FirecrawlModel):
    id: Optional[str] = None
    timestamp: Optional[str] = None
    url: str
    error: str


class BatchScrapeErrorsResponse(FirecrawlModel):
    success: bool = True
    errors: Optional[List[BatchScrapeError]] = None
    robots_blocked: Optional[List[str]] = None
