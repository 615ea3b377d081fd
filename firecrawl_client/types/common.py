"""Types shared by several endpoints."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import Field

from .base import FirecrawlModel


class Format(str, Enum):
    """Output formats the service can produce for a page."""

    MARKDOWN = "markdown"
    SUMMARY = "summary"
    HTML = "html"
    RAW_HTML = "rawHtml"
    LINKS = "links"
    IMAGES = "images"
    SCREENSHOT = "screenshot"
    JSON = "json"
    CHANGE_TRACKING = "changeTracking"
    BRANDING = "branding"

    @classmethod
    def all_formats_string(cls) -> str:
        """All available formats as a comma-separated string."""
        return ",".join(fmt.value for fmt in cls)


def split_formats(value: Any) -> Any:
    """Accept formats either as a comma-joined string or as a list.

    Unknown names in the comma-joined form are dropped.
    """
    if isinstance(value, str):
        known = {fmt.value for fmt in Format}
        return [Format(name) for name in value.split(",") if name in known]
    return value


def join_formats(formats: Optional[List[Format]]) -> Optional[str]:
    if formats is None:
        return None
    return ",".join(Format(fmt).value for fmt in formats)


class JobStatus(str, Enum):
    """Status of a crawl or batch scrape job."""

    SCRAPING = "scraping"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_final(self) -> bool:
        """Whether the job is in a terminal state."""
        return self is not JobStatus.SCRAPING


class ExtractedContent(FirecrawlModel):
    """Content extraction result."""

    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = Field(default=None, alias="raw-html")
    text: Optional[str] = None
    screenshot: Optional[str] = None
    links: Optional[List[str]] = None


class PageMetadata(FirecrawlModel):
    """Metadata about a scraped page."""

    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    robots: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_url: Optional[str] = None
    og_image: Optional[str] = None
    og_audio: Optional[str] = None
    og_determiner: Optional[str] = None
    og_locale: Optional[str] = None
    og_locale_alternate: Optional[List[str]] = None
    og_site_name: Optional[str] = None
    og_video: Optional[str] = None
    dcterms_created: Optional[str] = None
    dcterms_type: Optional[str] = None
    dcterms_language: Optional[str] = None
    dcterms_identifier: Optional[str] = None
    dcterms_title: Optional[str] = None
    dcterms_subject: Optional[str] = None
    source_url: Optional[str] = Field(default=None, alias="sourceURL")
    status_code: Optional[int] = None
    error: Optional[str] = None


class ResponseWarning(FirecrawlModel):
    """A non-fatal warning attached to a response."""

    code: str
    message: str
    url: Optional[str] = None


class ValidationErrorDetail(FirecrawlModel):
    """A single field-level validation error from a 400 response."""

    field: Optional[str] = None
    message: str
    code: Optional[str] = None


class ErrorResponse(FirecrawlModel):
    """Error envelope returned with non-2xx responses."""

    success: bool
    error: Optional[str] = None
    details: Optional[str] = None
    validation_errors: Optional[List[ValidationErrorDetail]] = Field(
        default=None, alias="validation_errors"
    )


class LocationSettings(FirecrawlModel):
    country: str
    """ISO 3166-1 alpha-2 country code."""

    languages: Optional[List[str]] = None
    """Preferred languages for the request, in order of priority."""


class SitemapMode(str, Enum):
    SKIP = "skip"
    INCLUDE = "include"
    ONLY = "only"


class ProxyType(str, Enum):
    BASIC = "basic"
    STEALTH = "stealth"
    AUTO = "auto"
