"""Custom exceptions for the Firecrawl client.

Every failure surfaced by the client is one of these classes, so callers can
catch ``FirecrawlError`` for everything or match a specific kind::

    FirecrawlError
    +-- NetworkError
    |   +-- ResponseTooLargeError
    +-- UnauthorizedError        (401)
    +-- PaymentRequiredError     (402)
    +-- RateLimitError           (429)
    +-- BadRequestError          (400)
    +-- NotFoundError            (404)
    +-- ServerError              (5xx)
    +-- InvalidURLError
    +-- InvalidResponseError
    +-- DecodingError
    +-- EncodingError
    +-- UnknownError             (any other status)
    +-- JobTimeoutError
    +-- ConfigError
    +-- WebhookSignatureError
        +-- MissingSignatureHeaderError
        +-- InvalidSignatureFormatError
        +-- InvalidSignatureError
"""

from typing import Any, Dict, List, Optional


class FirecrawlError(Exception):
    """Base exception for all Firecrawl errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context (status code, URL, ...).
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class NetworkError(FirecrawlError):
    """The request could not be completed at the transport level.

    Covers connection refused, DNS and TLS failures, timeouts, and calls made
    on a client whose connection pool has already been closed.
    """
    pass


class ResponseTooLargeError(NetworkError):
    """The response body exceeded the configured size cap."""

    def __init__(self, limit: int, url: Optional[str] = None):
        details: Dict[str, Any] = {"limit": limit}
        if url is not None:
            details["url"] = url
        super().__init__(f"Response body exceeded {limit} bytes", details)
        self.limit = limit


class APIStatusError(FirecrawlError):
    """Shared base for errors derived from an HTTP status code."""

    default_message = "Request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error_details: Optional[str] = None,
    ):
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if error_details:
            details["details"] = error_details
        super().__init__(message or self.default_message, details)
        self.status_code = status_code
        self.error_details = error_details


class UnauthorizedError(APIStatusError):
    """Invalid API key or authorization failure."""

    default_message = "Invalid API key"


class PaymentRequiredError(APIStatusError):
    """The team has run out of credits."""

    default_message = "Payment required"


class RateLimitError(APIStatusError):
    """Rate limit exceeded."""

    default_message = "Rate limit exceeded"


class NotFoundError(APIStatusError):
    """Resource not found."""

    default_message = "Resource not found"


class ServerError(APIStatusError):
    """The server answered with a 5xx status."""

    default_message = "Server error"


class BadRequestError(APIStatusError):
    """The request was rejected, possibly with field-level validation errors."""

    default_message = "Bad request"

    def __init__(
        self,
        message: Optional[str] = None,
        validation_errors: Optional[List[Any]] = None,
        status_code: Optional[int] = 400,
        error_details: Optional[str] = None,
    ):
        super().__init__(message, status_code, error_details)
        self.validation_errors = list(validation_errors or [])
        if self.validation_errors:
            joined = ", ".join(err.message for err in self.validation_errors)
            self.message = f"{self.message}: {joined}"
            self.args = (self.message,)


class UnknownError(APIStatusError):
    """Any other non-2xx status; carries the raw response text."""

    default_message = "Unknown error"


class InvalidURLError(FirecrawlError):
    """The request URL could not be built from the base URL and path."""

    def __init__(self, url: str):
        super().__init__(f"Invalid URL: {url}", {"url": url})
        self.url = url


class InvalidResponseError(FirecrawlError):
    """A 2xx response did not have the expected shape."""
    pass


class DecodingError(FirecrawlError):
    """A 2xx response body could not be decoded into the expected type."""
    pass


class EncodingError(FirecrawlError):
    """The request could not be encoded; nothing was sent."""
    pass


class JobTimeoutError(FirecrawlError):
    """An asynchronous job did not reach a terminal status in time."""

    def __init__(self, job_id: str, timeout: float, kind: str = "job"):
        super().__init__(
            f"{kind.capitalize()} {job_id} timed out after {timeout} seconds",
            {"job_id": job_id, "timeout": timeout},
        )
        self.job_id = job_id
        self.timeout = timeout


class ConfigError(FirecrawlError):
    """The client configuration is invalid (for example, no API key)."""
    pass


class WebhookSignatureError(FirecrawlError):
    """Base exception for webhook verification failures."""

    default_message = "Webhook signature verification failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class MissingSignatureHeaderError(WebhookSignatureError):
    """The X-Firecrawl-Signature header was absent or empty."""

    default_message = "Missing X-Firecrawl-Signature header"


class InvalidSignatureFormatError(WebhookSignatureError):
    """The signature header is not of the form ``sha256=<hex>``."""

    default_message = "Invalid signature format. Expected format: sha256=<hash>"


class InvalidSignatureError(WebhookSignatureError):
    """The signature does not match the payload."""
    pass
