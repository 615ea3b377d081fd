"""Site map schemas."""

from typing import List, Optional

from .base import FirecrawlModel
from .common import LocationSettings, SitemapMode


class MapRequest(FirecrawlModel):
    """Request body for ``POST /v2/map``."""

    url: str
    search: Optional[str] = None
    """Order the returned links by relevance to this query."""

    sitemap: Optional[SitemapMode] = None
    include_subdomains: Optional[bool] = None
    ignore_query_parameters: Optional[bool] = None
    limit: Optional[int] = None
    timeout: Optional[int] = None
    location: Optional[LocationSettings] = None


class MapLink(FirecrawlModel):
    url: str
    title: Optional[str] = None
    description: Optional[str] = None


class MapResponse(FirecrawlModel):
    success: bool
    links: Optional[List[MapLink]] = None
