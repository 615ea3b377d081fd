"""Request and response schemas for the Firecrawl v2 API."""

from .base import FirecrawlModel, JSONValue
from .common import (
    ErrorResponse,
    ExtractedContent,
    Format,
    JobStatus,
    LocationSettings,
    PageMetadata,
    ProxyType,
    ResponseWarning,
    SitemapMode,
    ValidationErrorDetail,
)
from .scrape import (
    ActionResults,
    BatchScrapeCancelResponse,
    BatchScrapeError,
    BatchScrapeErrorsResponse,
    BatchScrapeRequest,
    BatchScrapeResponse,
    BatchScrapeResult,
    BatchScrapeStatusResponse,
    BatchWebhook,
    ChangeStatus,
    ChangeTrackingInfo,
    ClickAction,
    ExecuteJavascriptAction,
    JavaScriptReturn,
    Parser,
    PdfAction,
    PdfParser,
    PDFFormat,
    PressAction,
    ScrapeAction,
    ScrapeData,
    ScrapeMetadata,
    ScrapeOptions,
    ScrapeRequest,
    ScrapeResponse,
    ScrapeResult,
    ScrapeStepAction,
    ScreenshotAction,
    ScrollAction,
    ScrollDirection,
    Viewport,
    VisibilityStatus,
    WaitAction,
    WebhookEvent,
    WriteAction,
)
from .crawl import (
    ActiveCrawl,
    ActiveCrawlOptions,
    ActiveCrawlsResponse,
    CrawlCancelResponse,
    CrawlError,
    CrawlErrorsResponse,
    CrawlParamsPreviewData,
    CrawlParamsPreviewRequest,
    CrawlParamsPreviewResponse,
    CrawlRequest,
    CrawlResponse,
    CrawlResult,
    CrawlScrapeOptions,
    CrawlStatusResponse,
    CrawlWebhookEvent,
    WebhookConfig,
)
from .extract import (
    ArrayProperty,
    BooleanProperty,
    ExtractCancelResponse,
    ExtractedData,
    ExtractionSchema,
    ExtractJobStatus,
    ExtractRequest,
    ExtractResponse,
    ExtractScrapeOptions,
    ExtractSource,
    ExtractStatusResponse,
    IntegerProperty,
    NumberProperty,
    ObjectProperty,
    SchemaProperty,
    StringProperty,
)
from .map import MapLink, MapRequest, MapResponse
from .search import (
    ImageSearchResult,
    ImagesSource,
    NewsSearchResult,
    NewsSource,
    SearchCategory,
    SearchData,
    SearchRequest,
    SearchResponse,
    SearchResultMetadata,
    SearchScrapeOptions,
    SearchSource,
    WebSearchResult,
    WebSource,
)
from .team import (
    CreditUsageData,
    CreditUsagePeriod,
    CreditUsageResponse,
    HistoricalCreditUsageResponse,
    HistoricalTokenUsageResponse,
    QueueStatusResponse,
    TokenUsageData,
    TokenUsagePeriod,
    TokenUsageResponse,
)
from .webhook import (
    BatchScrapeWebhookData,
    BatchScrapeWebhookPayload,
    CrawlWebhookData,
    CrawlWebhookPayload,
    WebhookEventData,
    WebhookEventType,
    WebhookPageMetadata,
    WebhookPayload,
)

__all__ = [
    "FirecrawlModel",
    "JSONValue",
    # common
    "ErrorResponse",
    "ExtractedContent",
    "Format",
    "JobStatus",
    "LocationSettings",
    "PageMetadata",
    "ProxyType",
    "ResponseWarning",
    "SitemapMode",
    "ValidationErrorDetail",
    # scrape
    "ActionResults",
    "ChangeStatus",
    "ChangeTrackingInfo",
    "ClickAction",
    "ExecuteJavascriptAction",
    "JavaScriptReturn",
    "Parser",
    "PdfAction",
    "PdfParser",
    "PDFFormat",
    "PressAction",
    "ScrapeAction",
    "ScrapeData",
    "ScrapeMetadata",
    "ScrapeOptions",
    "ScrapeRequest",
    "ScrapeResponse",
    "ScrapeResult",
    "ScrapeStepAction",
    "ScreenshotAction",
    "ScrollAction",
    "ScrollDirection",
    "Viewport",
    "VisibilityStatus",
    "WaitAction",
    "WriteAction",
    # batch scrape
    "BatchScrapeCancelResponse",
    "BatchScrapeError",
    "BatchScrapeErrorsResponse",
    "BatchScrapeRequest",
    "BatchScrapeResponse",
    "BatchScrapeResult",
    "BatchScrapeStatusResponse",
    "BatchWebhook",
    "WebhookEvent",
    # crawl
    "ActiveCrawl",
    "ActiveCrawlOptions",
    "ActiveCrawlsResponse",
    "CrawlCancelResponse",
    "CrawlError",
    "CrawlErrorsResponse",
    "CrawlParamsPreviewData",
    "CrawlParamsPreviewRequest",
    "CrawlParamsPreviewResponse",
    "CrawlRequest",
    "CrawlResponse",
    "CrawlResult",
    "CrawlScrapeOptions",
    "CrawlStatusResponse",
    "CrawlWebhookEvent",
    "WebhookConfig",
    # extract
    "ArrayProperty",
    "BooleanProperty",
    "ExtractCancelResponse",
    "ExtractedData",
    "ExtractionSchema",
    "ExtractJobStatus",
    "ExtractRequest",
    "ExtractResponse",
    "ExtractScrapeOptions",
    "ExtractSource",
    "ExtractStatusResponse",
    "IntegerProperty",
    "NumberProperty",
    "ObjectProperty",
    "SchemaProperty",
    "StringProperty",
    # map
    "MapLink",
    "MapRequest",
    "MapResponse",
    # search
    "ImageSearchResult",
    "ImagesSource",
    "NewsSearchResult",
    "NewsSource",
    "SearchCategory",
    "SearchData",
    "SearchRequest",
    "SearchResponse",
    "SearchResultMetadata",
    "SearchScrapeOptions",
    "SearchSource",
    "WebSearchResult",
    "WebSource",
    # team
    "CreditUsageData",
    "CreditUsagePeriod",
    "CreditUsageResponse",
    "HistoricalCreditUsageResponse",
    "HistoricalTokenUsageResponse",
    "QueueStatusResponse",
    "TokenUsageData",
    "TokenUsagePeriod",
    "TokenUsageResponse",
    # webhook payloads
    "BatchScrapeWebhookData",
    "BatchScrapeWebhookPayload",
    "CrawlWebhookData",
    "CrawlWebhookPayload",
    "WebhookEventData",
    "WebhookEventType",
    "WebhookPageMetadata",
    "WebhookPayload",
]
