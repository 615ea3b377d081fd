"""Build request models from positional arguments and keyword options.

Every endpoint method accepts either a ready-made request model or its primary
argument (a URL, a query, a list of URLs) plus keyword options named after the
model's fields. Both snake_case names and wire names are accepted.
"""

import copy
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from .exceptions import EncodingError, InvalidResponseError
from .types import (
    BatchScrapeRequest,
    CrawlParamsPreviewRequest,
    CrawlRequest,
    ExtractRequest,
    FirecrawlModel,
    Format,
    MapRequest,
    ScrapeRequest,
    SearchRequest,
)

ModelT = TypeVar("ModelT", bound=FirecrawlModel)

SCRAPE_DEFAULTS: Dict[str, Any] = {"formats": [Format.MARKDOWN]}
CRAWL_DEFAULTS: Dict[str, Any] = {"scrape_options": {"formats": [Format.MARKDOWN]}}
BATCH_SCRAPE_DEFAULTS: Dict[str, Any] = {"formats": [Format.MARKDOWN]}
SEARCH_DEFAULTS: Dict[str, Any] = {
    "limit": 5,
    "sources": [{"type": "web"}],
    "scrape_options": {"formats": [Format.MARKDOWN]},
}


def _field_names(model: Type[FirecrawlModel], options: Mapping[str, Any]) -> Dict[str, Any]:
    """Re-key ``options`` by field name, rejecting anything the model lacks."""
    by_alias = {}
    for name, info in model.model_fields.items():
        by_alias[name] = name
        if info.alias:
            by_alias[info.alias] = name

    unknown = sorted(key for key in options if key not in by_alias)
    if unknown:
        raise EncodingError(
            f"Unknown {model.__name__} options: {', '.join(unknown)}",
            {"options": unknown},
        )
    return {by_alias[key]: value for key, value in options.items()}


def coerce_request(
    model: Type[ModelT],
    value: Any,
    field: str,
    options: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> ModelT:
    """Return ``value`` if it already is a ``model``; otherwise build one.

    Raises:
        EncodingError: The options are unknown or invalid, or options were
            combined with a ready-made request.
    """
    if isinstance(value, model):
        if options:
            raise EncodingError(
                f"Pass either a {model.__name__} or keyword options, not both",
                {"options": sorted(options)},
            )
        return value

    values = copy.deepcopy(dict(defaults or {}))
    values.update(_field_names(model, options))
    values[field] = value
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise EncodingError(
            f"Invalid {model.__name__}: {exc.error_count()} validation error(s)",
            {"errors": [error["msg"] for error in exc.errors()]},
        ) from exc


def _lift_formats(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Turn a top-level ``formats`` option into ``scrape_options.formats``."""
    options = dict(options)
    if "formats" in options:
        if "scrape_options" in options or "scrapeOptions" in options:
            raise EncodingError("Pass formats either directly or inside scrape_options, not both")
        options["scrape_options"] = {"formats": options.pop("formats")}
    return options


def scrape_request(url: Any, options: Mapping[str, Any]) -> ScrapeRequest:
    return coerce_request(ScrapeRequest, url, "url", options, SCRAPE_DEFAULTS)


def crawl_request(url: Any, options: Mapping[str, Any]) -> CrawlRequest:
    return coerce_request(CrawlRequest, url, "url", _lift_formats(options), CRAWL_DEFAULTS)


def params_preview_request(url: Any, prompt: Optional[str]) -> CrawlParamsPreviewRequest:
    options = {} if prompt is None else {"prompt": prompt}
    return coerce_request(CrawlParamsPreviewRequest, url, "url", options)


def map_request(url: Any, options: Mapping[str, Any]) -> MapRequest:
    return coerce_request(MapRequest, url, "url", options)


def search_request(query: Any, options: Mapping[str, Any]) -> SearchRequest:
    return coerce_request(SearchRequest, query, "query", _lift_formats(options), SEARCH_DEFAULTS)


def extract_request(urls: Any, options: Mapping[str, Any]) -> ExtractRequest:
    return coerce_request(ExtractRequest, urls, "urls", options)


def batch_scrape_request(urls: Any, options: Mapping[str, Any]) -> BatchScrapeRequest:
    return coerce_request(BatchScrapeRequest, urls, "urls", options, BATCH_SCRAPE_DEFAULTS)


def job_path(prefix: str, job_id: str, suffix: str = "") -> str:
    """Path of a job resource, e.g. ``/v2/crawl/<id>/errors``."""
    if not job_id:
        raise ValueError("job_id must be a non-empty string")
    return f"{prefix}/{quote(job_id, safe='')}{suffix}"


def usage_params(by_api_key: bool) -> Optional[Dict[str, str]]:
    return {"byApiKey": "true"} if by_api_key else None


def require_job_id(job_id: Optional[str], kind: str) -> str:
    """The job ID from a start response, which the service should always send."""
    if not job_id:
        raise InvalidResponseError(f"The {kind} start response did not include a job ID")
    return job_id
