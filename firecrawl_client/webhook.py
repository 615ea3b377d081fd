"""Verify that inbound webhook callbacks were sent by Firecrawl.

Each delivery carries an ``X-Firecrawl-Signature: sha256=<hex>`` header, the
HMAC-SHA256 of the raw request body keyed with the webhook secret. Always
verify the exact bytes received, before decoding the JSON body.

Example (any framework that exposes the raw body and headers)::

    from firecrawl_client.webhook import construct_webhook_event

    event = construct_webhook_event(
        request.body,
        request.headers.get("X-Firecrawl-Signature"),
        secret=os.environ["FIRECRAWL_WEBHOOK_SECRET"],
    )
    if event.type == "crawl.completed":
        ...
"""

import hashlib
import hmac
from typing import Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from .exceptions import (
    DecodingError,
    InvalidSignatureError,
    InvalidSignatureFormatError,
    MissingSignatureHeaderError,
)
from .types.webhook import WebhookPayload

SIGNATURE_HEADER = "X-Firecrawl-Signature"
SIGNATURE_ALGORITHM = "sha256"

PayloadT = TypeVar("PayloadT", bound=WebhookPayload)


def _as_bytes(payload: Union[bytes, str]) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


def _hex_digest(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def _parse_signature(signature: str) -> str:
    """Return the digest part of ``sha256=<hex>``, split on the first ``=``."""
    algorithm, separator, digest = signature.partition("=")
    if not separator or not algorithm or not digest:
        raise InvalidSignatureFormatError()
    if algorithm != SIGNATURE_ALGORITHM:
        raise InvalidSignatureFormatError()
    return digest


def compute_webhook_signature(payload: Union[bytes, str], secret: str) -> str:
    """Compute the header value Firecrawl would send for ``payload``."""
    return f"{SIGNATURE_ALGORITHM}={_hex_digest(_as_bytes(payload), secret)}"


def verify_webhook_signature(payload: bytes, signature: str, secret: str) -> None:
    """Verify ``signature`` against the raw request body.

    Args:
        payload: Raw request body, exactly as received.
        signature: Value of the ``X-Firecrawl-Signature`` header.
        secret: Webhook secret shared with Firecrawl.

    Raises:
        InvalidSignatureFormatError: The header is not ``sha256=<hex>``.
        InvalidSignatureError: The digest does not match the payload.
    """
    provided = _parse_signature(signature).encode("utf-8")
    expected = _hex_digest(_as_bytes(payload), secret).encode("ascii")
    # A wrong length and a wrong digest fail the same way
    if len(provided) != len(expected) or not hmac.compare_digest(provided, expected):
        raise InvalidSignatureError()


def verify_webhook_signature_text(payload: str, signature: str, secret: str) -> None:
    """Same as :func:`verify_webhook_signature` for a body already decoded to text."""
    verify_webhook_signature(payload.encode("utf-8"), signature, secret)


def _find_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def verify_webhook_request(
    body: Union[bytes, str],
    headers: Mapping[str, str],
    secret: str,
) -> None:
    """Look up the signature header (any casing) and verify ``body``.

    Raises:
        MissingSignatureHeaderError: The header is absent or empty.
        InvalidSignatureFormatError: The header is not ``sha256=<hex>``.
        InvalidSignatureError: The digest does not match the body.
    """
    signature = _find_header(headers, SIGNATURE_HEADER)
    if not signature:
        raise MissingSignatureHeaderError()
    verify_webhook_signature(_as_bytes(body), signature, secret)


def construct_webhook_event(
    body: Union[bytes, str],
    signature: Optional[str],
    secret: str,
    payload_type: Type[PayloadT] = WebhookPayload,
) -> PayloadT:
    """Verify the signature, then decode the body into ``payload_type``.

    Raises:
        MissingSignatureHeaderError: ``signature`` is ``None`` or empty.
        InvalidSignatureFormatError: The header is not ``sha256=<hex>``.
        InvalidSignatureError: The digest does not match the body.
        DecodingError: The verified body is not a valid webhook payload.
    """
    if not signature:
        raise MissingSignatureHeaderError()
    raw = _as_bytes(body)
    verify_webhook_signature(raw, signature, secret)
    try:
        return payload_type.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodingError(
            f"Invalid webhook payload: {exc.error_count()} error(s)",
            {"type": payload_type.__name__},
        ) from exc
