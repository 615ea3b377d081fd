"""Extract job schemas, including the JSON-schema subset used to describe output."""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import Field

from .base import FirecrawlModel, JSONValue
from .scrape import CommaFormatsMixin, ScrapeOptions


# ---------------------------------------------------------------------------
# Extraction schema
# ---------------------------------------------------------------------------


class StringProperty(FirecrawlModel):
    type: Literal["string"] = "string"
    description: Optional[str] = None
    enum_values: Optional[List[str]] = Field(default=None, alias="enum")
    format: Optional[str] = None
    example: Optional[str] = None


class NumberProperty(FirecrawlModel):
    type: Literal["number"] = "number"
    description: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    example: Optional[float] = None


class IntegerProperty(FirecrawlModel):
    type: Literal["integer"] = "integer"
    description: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    example: Optional[int] = None


class BooleanProperty(FirecrawlModel):
    type: Literal["boolean"] = "boolean"
    description: Optional[str] = None
    example: Optional[bool] = None


class ArrayProperty(FirecrawlModel):
    type: Literal["array"] = "array"
    description: Optional[str] = None
    items: "SchemaProperty"


class ObjectProperty(FirecrawlModel):
    type: Literal["object"] = "object"
    description: Optional[str] = None
    properties: Dict[str, "SchemaProperty"]
    required: Optional[List[str]] = None


SchemaProperty = Annotated[
    Union[
        StringProperty,
        NumberProperty,
        IntegerProperty,
        BooleanProperty,
        ArrayProperty,
        ObjectProperty,
    ],
    Field(discriminator="type"),
]
"""One property of an extraction schema, tagged by ``type``.

Arrays and objects nest further properties to any depth.
"""

ArrayProperty.model_rebuild()
ObjectProperty.model_rebuild()


class ExtractionSchema(FirecrawlModel):
    """Top-level schema describing the data to extract.

    Example::

        ExtractionSchema(
            properties={
                "name": StringProperty(description="Company name"),
                "founders": ArrayProperty(items=StringProperty()),
            },
            required=["name"],
        )
    """

    type: str = "object"
    properties: Dict[str, SchemaProperty]
    required: Optional[List[str]] = None
    additional_properties: Optional[bool] = None


# ---------------------------------------------------------------------------
# Requests and responses
# ---------------------------------------------------------------------------


class ExtractScrapeOptions(CommaFormatsMixin, ScrapeOptions):
    """Scrape options applied to every page read during extraction."""


class ExtractRequest(FirecrawlModel):
    """Request body for ``POST /v2/extract``.

    Supply a natural-language ``prompt``, a ``schema``, or both.
    """

    urls: List[str]
    prompt: Optional[str] = None
    schema_: Optional[ExtractionSchema] = Field(default=None, alias="schema")
    enable_web_search: Optional[bool] = None
    ignore_sitemap: Optional[bool] = None
    include_subdomains: Optional[bool] = None
    show_sources: Optional[bool] = None
    scrape_options: Optional[ExtractScrapeOptions] = None
    ignore_invalid_urls: Optional[bool] = Field(default=None, alias="ignoreInvalidURLs")


class ExtractResponse(FirecrawlModel):
    success: bool
    id: Optional[str] = None
    invalid_urls: Optional[List[str]] = Field(default=None, alias="invalidURLs")


class ExtractJobStatus(str, Enum):
    COMPLETED = "completed"
    PROCESSING = "processing"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_final(self) -> bool:
        """Whether the job is in a terminal state."""
        return self is not ExtractJobStatus.PROCESSING


class ExtractSource(FirecrawlModel):
    url: str
    title: Optional[str] = None
    description: Optional[str] = None


class ExtractedData(FirecrawlModel):
    extract: Optional[Dict[str, JSONValue]] = None
    sources: Optional[List[ExtractSource]] = None
    warning: Optional[str] = None
    confidence: Optional[float] = None


class ExtractStatusResponse(FirecrawlModel):
    """Snapshot of an extract job returned by ``GET /v2/extract/{id}``."""

    success: bool = True
    data: Optional[ExtractedData] = None
    status: ExtractJobStatus
    expires_at: Optional[str] = None
    tokens_used: Optional[int] = None


class ExtractCancelResponse(FirecrawlModel):
    success: bool
    message: Optional[str] = None
