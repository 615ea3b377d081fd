"""Request building, bounded response reading and error classification.

Shared by the blocking and asyncio clients. Nothing here holds state; each
helper works on the values of a single call.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from ._version import __version__
from .exceptions import (
    BadRequestError,
    DecodingError,
    EncodingError,
    FirecrawlError,
    InvalidResponseError,
    InvalidURLError,
    NotFoundError,
    PaymentRequiredError,
    RateLimitError,
    ResponseTooLargeError,
    ServerError,
    UnauthorizedError,
    UnknownError,
)
from .types.common import ErrorResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.firecrawl.dev"
DEFAULT_TIMEOUT = 30.0
MAX_RESPONSE_BYTES = 10 * 1024 * 1024
MAX_ERROR_RESPONSE_BYTES = 1024 * 1024
USER_AGENT = f"firecrawl-client-python/{__version__}"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }


def build_url(
    base_url: str,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
) -> httpx.URL:
    """Join ``base_url`` and ``path`` and validate the result.

    Raises:
        InvalidURLError: The result is not an absolute http(s) URL.
    """
    raw = f"{base_url}{path}"
    try:
        url = httpx.URL(raw, params=params) if params else httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(raw) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError(raw)
    return url


def encode_body(body: Any) -> Optional[bytes]:
    """Serialize a request value to JSON bytes.

    Models are dumped with their wire names and without unset fields; dicts
    are sent as they are. NaN and infinity are rejected.

    Raises:
        EncodingError: The value cannot be represented as JSON.
    """
    if body is None:
        return None
    try:
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(body, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise EncodingError(
            f"Failed to encode request body: {exc}",
            {"type": type(body).__name__},
        ) from exc


def body_limit(status_code: int, limit: int) -> int:
    """Error bodies are only needed for a message, so they get a tighter cap."""
    if 200 <= status_code < 300:
        return limit
    return min(limit, MAX_ERROR_RESPONSE_BYTES)


def _check_declared_length(response: httpx.Response, limit: int) -> None:
    declared = response.headers.get("Content-Length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise ResponseTooLargeError(limit, str(response.request.url))


def read_capped(response: httpx.Response, limit: int) -> bytes:
    """Read a streamed response body, failing once it grows past ``limit``."""
    limit = body_limit(response.status_code, limit)
    _check_declared_length(response, limit)
    chunks = bytearray()
    for chunk in response.iter_bytes():
        chunks.extend(chunk)
        if len(chunks) > limit:
            raise ResponseTooLargeError(limit, str(response.request.url))
    return bytes(chunks)


async def aread_capped(response: httpx.Response, limit: int) -> bytes:
    """Async counterpart of :func:`read_capped`."""
    limit = body_limit(response.status_code, limit)
    _check_declared_length(response, limit)
    chunks = bytearray()
    async for chunk in response.aiter_bytes():
        chunks.extend(chunk)
        if len(chunks) > limit:
            raise ResponseTooLargeError(limit, str(response.request.url))
    return bytes(chunks)


def _parse_error_envelope(body: bytes) -> Optional[ErrorResponse]:
    if not body:
        return None
    try:
        return ErrorResponse.model_validate_json(body)
    except ValidationError:
        return None


def classify_error(status_code: int, body: bytes) -> FirecrawlError:
    """Map a non-2xx status and its raw body to a single exception.

    The exception class depends on the status code alone. The body only
    supplies the message; when it is not a valid error envelope, the class's
    generic message is used instead.
    """
    if status_code in (400, 401, 402, 404, 429) or 500 <= status_code <= 599:
        envelope = _parse_error_envelope(body)
        message = envelope.error if envelope else None
        error_details = envelope.details if envelope else None

        if status_code == 400:
            return BadRequestError(
                message,
                validation_errors=envelope.validation_errors if envelope else None,
                error_details=error_details,
            )
        if status_code == 401:
            return UnauthorizedError(message, status_code, error_details)
        if status_code == 402:
            return PaymentRequiredError(message, status_code, error_details)
        if status_code == 404:
            return NotFoundError(message, status_code, error_details)
        if status_code == 429:
            return RateLimitError(message, status_code, error_details)
        return ServerError(message, status_code, error_details)

    text = body.decode("utf-8", errors="replace")
    return UnknownError(text or None, status_code)


def decode_success(
    body: bytes,
    response_type: Optional[Type[ResponseT]],
    url: str,
) -> Any:
    """Decode a 2xx body into ``response_type`` (or a plain dict when ``None``).

    Raises:
        DecodingError: The body is not JSON or does not match the schema.
        InvalidResponseError: The body is JSON but not an object.
    """
    try:
        data = json.loads(body)
    except ValueError as exc:
        logger.error("Malformed JSON in response from %s: %s", url, exc)
        raise DecodingError(
            "Response body is not valid JSON",
            {"url": url, "error": str(exc)},
        ) from exc

    if not isinstance(data, dict):
        raise InvalidResponseError(
            "Expected a JSON object in the response body",
            {"url": url, "type": type(data).__name__},
        )

    if response_type is None:
        return data

    try:
        return response_type.model_validate(data)
    except ValidationError as exc:
        logger.error(
            "Response from %s does not match %s: %s",
            url,
            response_type.__name__,
            exc,
        )
        raise DecodingError(
            f"Failed to decode {response_type.__name__}",
            {"url": url, "errors": exc.error_count()},
        ) from exc


def handle_response(
    status_code: int,
    body: bytes,
    url: str,
    response_type: Optional[Type[ResponseT]],
) -> Any:
    """Decode a successful body or raise the classified error."""
    if 200 <= status_code < 300:
        return decode_success(body, response_type, url)
    error = classify_error(status_code, body)
    logger.debug("Request to %s failed with status %d: %s", url, status_code, error.message)
    raise error
