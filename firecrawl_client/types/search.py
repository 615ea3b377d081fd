"""Web search schemas."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from .base import FirecrawlModel
from .scrape import ScrapeOptions


class WebSource(FirecrawlModel):
    type: Literal["web"] = "web"
    tbs: Optional[str] = None
    """Time-based search filter, e.g. ``qdr:d`` for the past day."""

    location: Optional[str] = None


class ImagesSource(FirecrawlModel):
    type: Literal["images"] = "images"


class NewsSource(FirecrawlModel):
    type: Literal["news"] = "news"


SearchSource = Annotated[
    Union[WebSource, ImagesSource, NewsSource],
    Field(discriminator="type"),
]


class SearchCategory(FirecrawlModel):
    """Restrict results to a category of sites."""

    type: Literal["github", "research", "pdf"]


class SearchScrapeOptions(ScrapeOptions):
    """Scrape options applied to every search result."""


class SearchRequest(FirecrawlModel):
    """Request body for ``POST /v2/search``."""

    query: str
    limit: Optional[int] = None
    sources: Optional[List[SearchSource]] = None
    categories: Optional[List[SearchCategory]] = None
    tbs: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    timeout: Optional[int] = None
    ignore_invalid_urls: Optional[bool] = Field(default=None, alias="ignoreInvalidURLs")
    scrape_options: Optional[SearchScrapeOptions] = None


class SearchResultMetadata(FirecrawlModel):
    title: Optional[str] = None
    description: Optional[str] = None
    source_url: Optional[str] = Field(default=None, alias="sourceURL")
    status_code: Optional[int] = None
    error: Optional[str] = None


class WebSearchResult(FirecrawlModel):
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    links: Optional[List[str]] = None
    screenshot: Optional[str] = None
    metadata: Optional[SearchResultMetadata] = None


class ImageSearchResult(FirecrawlModel):
    title: Optional[str] = None
    image_url: Optional[str] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    url: Optional[str] = None
    position: Optional[int] = None


class NewsSearchResult(FirecrawlModel):
    title: Optional[str] = None
    snippet: Optional[str] = None
    url: Optional[str] = None
    date: Optional[str] = None
    image_url: Optional[str] = None
    position: Optional[int] = None
    markdown: Optional[str] = None
    html: Optional[str] = None
    raw_html: Optional[str] = None
    links: Optional[List[str]] = None
    screenshot: Optional[str] = None
    metadata: Optional[SearchResultMetadata] = None


class SearchData(FirecrawlModel):
    web: Optional[List[WebSearchResult]] = None
    images: Optional[List[ImageSearchResult]] = None
    news: Optional[List[NewsSearchResult]] = None


class SearchResponse(FirecrawlModel):
    success: bool
    data: Optional[SearchData] = None
    warning: Optional[str] = None
